"""
Manual virtual-time clock and scheduler.

Used by tests and offline replays to fast-forward time deterministically
instead of sleeping.
"""

from typing import Callable, List

class ManualClock:
    """수동으로 진행하는 시계"""
    
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        self.now += seconds

class ManualTimer:
    """ManualScheduler 에 등록된 주기 콜백"""
    
    def __init__(self, interval_sec: float, callback: Callable[[], None], next_due: float):
        self.interval = interval_sec
        self.callback = callback
        self.next_due = next_due
        self._cancelled = False
    
    @property
    def cancelled(self) -> bool:
        return self._cancelled
    
    def cancel(self) -> None:
        self._cancelled = True

class ManualScheduler:
    """가상 시간 스케줄러 (advance 호출 시에만 콜백 실행)"""
    
    def __init__(self, clock: ManualClock):
        self.clock = clock
        self.timers: List[ManualTimer] = []
    
    def schedule(self, interval_sec: float, callback: Callable[[], None]) -> ManualTimer:
        if interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        timer = ManualTimer(interval_sec, callback, self.clock.now + interval_sec)
        self.timers.append(timer)
        return timer
    
    @property
    def active_timers(self) -> List[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]
    
    def advance(self, seconds: float) -> int:
        """
        시간을 진행시키며 도래한 콜백을 순서대로 실행합니다.
        
        Returns:
            실행된 콜백 수
        """
        target = self.clock.now + seconds
        fired = 0
        while True:
            due = [t for t in self.active_timers if t.next_due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_due)
            self.clock.now = max(self.clock.now, timer.next_due)
            timer.next_due += timer.interval
            timer.callback()
            fired += 1
        self.clock.now = target
        return fired
