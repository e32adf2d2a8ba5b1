"""
HTTP personnel directory adapter.

Fetches the roster as JSON from a remote directory service.
"""

from typing import List, Optional
import aiohttp
from rollcall.core.models import EventType, RosterMember
from rollcall.observability.logging_setup import get_logger

log = get_logger("rollcall.directory.http")

class HttpDirectory:
    """HTTP 인원 디렉터리 클라이언트"""
    
    def __init__(self, url: str, token: str = "", timeout: int = 5,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        초기화합니다.
        
        Args:
            url: 명단 엔드포인트 URL
            token: Bearer 토큰 (비어 있으면 미사용)
            timeout: 요청 타임아웃 (초)
            session: 외부에서 관리하는 세션 (테스트 주입용)
        """
        self.url = url
        self.token = token
        self.timeout = timeout
        self._session = session
    
    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers
    
    async def fetch_roster(self, event_type: EventType, is_drill: bool) -> List[RosterMember]:
        params = {"event_type": event_type, "drill": "true" if is_drill else "false"}
        
        if self._session is not None:
            data = await self._get(self._session, params)
        else:
            async with aiohttp.ClientSession(
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as session:
                data = await self._get(session, params)
        
        if isinstance(data, dict):
            data = data.get("personnel", [])
        members = [RosterMember.model_validate(item) for item in data]
        log.info(f"원격 명단 수신 url:{self.url} count:{len(members)}")
        return members
    
    async def _get(self, session: aiohttp.ClientSession, params: dict):
        async with session.get(self.url, params=params, headers=self._headers()) as response:
            response.raise_for_status()
            return await response.json()
