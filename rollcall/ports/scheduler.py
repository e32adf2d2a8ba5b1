"""
Scheduler port interface.

This module defines the protocol for periodic callbacks and the clock
used by the elapsed timer.
"""

from typing import Callable, Protocol

# epoch 초를 반환하는 시계
Clock = Callable[[], float]

class CancelToken(Protocol):
    """주기 콜백 취소 핸들"""
    
    @property
    def cancelled(self) -> bool:
        ...
    
    def cancel(self) -> None:
        """콜백을 취소합니다. 여러 번 호출해도 안전합니다."""
        ...

class SchedulerPort(Protocol):
    """스케줄러 포트 인터페이스"""
    
    def schedule(self, interval_sec: float, callback: Callable[[], None]) -> CancelToken:
        """
        주기 콜백을 등록합니다.
        
        Args:
            interval_sec: 호출 간격 (초)
            callback: 호출할 함수
            
        Returns:
            취소 핸들 (취소 후에는 더 이상 호출되지 않음)
        """
        ...
