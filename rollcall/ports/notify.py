"""
Notification sink port interface.

This module defines the protocol for roll-call lifecycle notifications.
"""

from typing import Protocol
from rollcall.core.models import EmergencyEvent

class NotificationSinkPort(Protocol):
    """알림 싱크 포트 인터페이스"""
    
    async def emergency_initiated(self, event: EmergencyEvent) -> None:
        """
        점호 시작을 알립니다.
        
        Args:
            event: 시작된 이벤트
        """
        ...
    
    async def all_safe_resolved(self, event: EmergencyEvent) -> None:
        """
        전원 안전 확인(자동 종료)을 알립니다. 이벤트당 한 번만 호출됩니다.
        
        Args:
            event: 종료된 이벤트
        """
        ...
    
    async def event_reset(self, event: EmergencyEvent) -> None:
        """
        점호 리셋(idle 복귀)을 알립니다.
        
        Args:
            event: 리셋 직전의 최종 스냅샷
        """
        ...
