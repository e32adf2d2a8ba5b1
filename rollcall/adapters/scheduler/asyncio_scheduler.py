"""
asyncio-based scheduler adapter.

Periodic callbacks run on the event loop through a ``call_at`` chain,
so the elapsed timer needs no thread and no task of its own.
"""

import asyncio
from typing import Callable, Optional
from rollcall.observability.logging_setup import get_logger

log = get_logger("rollcall.scheduler")

class LoopTimer:
    """이벤트 루프 기반 주기 타이머 (CancelToken 구현)"""
    
    def __init__(self, loop: asyncio.AbstractEventLoop, interval_sec: float, callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval_sec
        self._callback = callback
        self._cancelled = False
        # 누적 드리프트 방지를 위해 예정 시각 기준으로 다음 호출 계산
        self._next_due = loop.time() + interval_sec
        self._handle: Optional[asyncio.TimerHandle] = loop.call_at(self._next_due, self._fire)
    
    @property
    def cancelled(self) -> bool:
        return self._cancelled
    
    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
    
    def _fire(self) -> None:
        self._handle = None
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception:
            log.exception("주기 콜백 실행 오류")
        # 콜백 안에서 취소되었으면 재등록하지 않음
        if self._cancelled:
            return
        self._next_due += self._interval
        now = self._loop.time()
        if self._next_due < now:
            # 루프가 밀렸으면 밀린 틱은 건너뜀
            self._next_due = now + self._interval
        self._handle = self._loop.call_at(self._next_due, self._fire)

class AsyncioScheduler:
    """asyncio 스케줄러 어댑터"""
    
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """
        초기화합니다.
        
        Args:
            loop: 사용할 이벤트 루프 (None이면 호출 시점의 실행 중 루프)
        """
        self._loop = loop
    
    def schedule(self, interval_sec: float, callback: Callable[[], None]) -> LoopTimer:
        if interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        loop = self._loop or asyncio.get_running_loop()
        return LoopTimer(loop, interval_sec, callback)
