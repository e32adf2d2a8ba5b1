"""
Roster loader for the roll-call service.

Wraps the personnel directory port: retries transient failures,
reports persistent ones as ``DirectoryUnavailable`` and keeps the
roster free of duplicate person ids.
"""

import time
from typing import Awaitable, Callable, List, Optional
from rollcall.common.retry import retry_with_backoff
from rollcall.core.errors import DirectoryUnavailable
from rollcall.core.models import EventType, RosterMember
from rollcall.observability import metrics
from rollcall.observability.logging_setup import get_logger
from rollcall.ports.directory import PersonnelDirectoryPort

log = get_logger("rollcall.roster")

class RosterLoader:
    """인원 명단 로더"""
    
    def __init__(self,
                 directory: PersonnelDirectoryPort,
                 *,
                 max_retries: int = 2,
                 backoff_initial: float = 0.5,
                 backoff_max: float = 5.0,
                 sleep: Optional[Callable[[float], Awaitable[None]]] = None):
        """
        초기화합니다.
        
        Args:
            directory: 인원 디렉터리 포트
            max_retries: 디렉터리 오류 시 재시도 횟수
            backoff_initial: 초기 백오프 (초)
            backoff_max: 최대 백오프 (초)
            sleep: 대기 함수 (테스트용 주입)
        """
        self.directory = directory
        self.max_retries = max_retries
        self.backoff_initial = backoff_initial
        self.backoff_max = backoff_max
        self.sleep = sleep
    
    async def load_roster(self, event_type: EventType, is_drill: bool) -> List[RosterMember]:
        """
        점호 대상 명단을 가져옵니다.
        
        Args:
            event_type: 비상 유형
            is_drill: 훈련 여부
            
        Returns:
            중복이 제거된 명단 (디렉터리 순서 유지, 빈 명단 가능)
            
        Raises:
            DirectoryUnavailable: 재시도 후에도 디렉터리를 사용할 수 없는 경우
        """
        started = time.perf_counter()
        try:
            members = await retry_with_backoff(
                lambda: self.directory.fetch_roster(event_type, is_drill),
                max_retries=self.max_retries,
                base_delay=self.backoff_initial,
                max_delay=self.backoff_max,
                sleep=self.sleep,
            )
        except Exception as e:
            metrics.directory_failures.inc()
            log.error(f"인원 디렉터리 조회 실패 event_type:{event_type} error:{e}")
            raise DirectoryUnavailable(f"personnel directory unavailable: {e}", cause=e) from e
        finally:
            metrics.directory_fetch_seconds.observe(time.perf_counter() - started)
        
        if members is None:
            metrics.directory_failures.inc()
            raise DirectoryUnavailable("personnel directory returned no roster")
        
        roster: List[RosterMember] = []
        seen = set()
        for member in members:
            if member.person_id in seen:
                log.warning(f"중복 person_id 무시: {member.person_id}")
                continue
            seen.add(member.person_id)
            roster.append(member)
        
        log.info(f"명단 로드 완료 event_type:{event_type} drill:{is_drill} count:{len(roster)}")
        return roster
