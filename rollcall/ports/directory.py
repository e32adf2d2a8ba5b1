"""
Personnel directory port interface.

This module defines the protocol for fetching the roster of an event.
"""

from typing import List, Protocol
from rollcall.core.models import EventType, RosterMember

class PersonnelDirectoryPort(Protocol):
    """인원 디렉터리 포트 인터페이스"""
    
    async def fetch_roster(self, event_type: EventType, is_drill: bool) -> List[RosterMember]:
        """
        점호 대상 명단을 가져옵니다.
        
        Args:
            event_type: 비상 유형
            is_drill: 훈련 여부
            
        Returns:
            명단 (디렉터리 장애 시 예외 발생, 빈 리스트로 대체하지 않음)
        """
        ...
