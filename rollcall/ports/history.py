"""
Audit history port interface.

This module defines the protocol for recording final event snapshots.
"""

from typing import Protocol
from rollcall.core.models import EmergencyEvent

class AuditHistoryPort(Protocol):
    """감사 이력 포트 인터페이스"""
    
    async def record(self, event: EmergencyEvent) -> None:
        """
        리셋 직전의 최종 이벤트 스냅샷을 기록합니다.
        
        Args:
            event: 최종 이벤트
        """
        ...
