"""
In-memory personnel directory.
"""

from typing import Dict, Iterable, List, Optional
from rollcall.core.models import EventType, RosterMember

class StaticDirectory:
    """고정 명단 디렉터리"""
    
    def __init__(self,
                 members: Iterable[RosterMember] = (),
                 *,
                 by_event_type: Optional[Dict[str, Iterable[RosterMember]]] = None):
        self.members = list(members)
        self.by_event_type = {k: list(v) for k, v in (by_event_type or {}).items()}
    
    async def fetch_roster(self, event_type: EventType, is_drill: bool) -> List[RosterMember]:
        return list(self.by_event_type.get(event_type, self.members))
