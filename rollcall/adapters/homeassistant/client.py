"""
Home Assistant API client for the roll-call service.

This module provides a client for calling Home Assistant notify
services so roll-call signals reach the mobile companion apps.
"""

import aiohttp
from typing import Dict, List, Optional
from rollcall.observability.logging_setup import get_logger
from rollcall.common.retry import retry_with_backoff

log = get_logger("rollcall.ha")

class HAClient:
    """Home Assistant API 클라이언트"""
    
    def __init__(self, 
                 base_url: str, 
                 token: str, 
                 timeout: int = 30):
        """
        초기화합니다.
        
        Args:
            base_url: Home Assistant API 기본 URL
            token: Home Assistant 장기 토큰
            timeout: 요청 타임아웃 (초)
        """
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None
    
    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        if self.session is not None:
            raise RuntimeError("세션이 이미 열려 있습니다. 발송마다 새 HAClient 를 사용하세요.")
        self.session = aiohttp.ClientSession(
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": "application/json"
            },
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        if self.session:
            await self.session.close()
            self.session = None
    
    async def _make_request(self, method: str, endpoint: str, **kwargs):
        """
        API 요청을 수행합니다 (일시 오류는 재시도).
        
        Args:
            method: HTTP 메서드
            endpoint: API 엔드포인트
            **kwargs: 추가 요청 매개변수
            
        Returns:
            응답 데이터
        """
        if not self.session:
            raise RuntimeError("세션이 초기화되지 않았습니다. async with를 사용하세요.")
        
        url = f"{self.base_url}{endpoint}"
        
        async def _request():
            async with self.session.request(method, url, **kwargs) as response:
                response.raise_for_status()
                return await response.json()
        
        return await retry_with_backoff(
            _request, max_retries=3, base_delay=0.5, max_delay=5.0,
            retry_on=(aiohttp.ClientError, TimeoutError),
        )
    
    async def list_notify_mobile_services(self) -> List[str]:
        """모바일 앱 notify 서비스 목록을 가져옵니다."""
        svcs = await self._make_request("GET", "/api/services")
        mobile_services = []
        for service in svcs:
            if service.get("domain") == "notify":
                for name in service.get("services", {}).keys():
                    if name.startswith("mobile_app_"):
                        mobile_services.append(name)
        log.info(f"모바일 notify 서비스 목록 가져옴 count:{len(mobile_services)}")
        return mobile_services
    
    async def notify(self, service: str, title: str, message: str, 
                     *, critical: bool = False, tag: Optional[str] = None,
                     data: Optional[Dict] = None):
        """
        모바일 앱에 푸시 알림을 발송합니다.
        
        Args:
            service: notify 서비스 이름 (예: mobile_app_pixel)
            title: 알림 제목
            message: 알림 본문
            critical: 방해 금지 모드를 무시하는 긴급 알림 여부
            tag: 같은 태그의 이전 알림을 대체
            data: 추가 data 필드
        """
        payload: Dict = {"title": title, "message": message, "data": dict(data or {})}
        if tag:
            payload["data"]["tag"] = tag
        if critical:
            # iOS critical sound + Android alarm stream
            payload["data"]["push"] = {"sound": {"name": "default", "critical": 1, "volume": 1.0}}
            payload["data"]["ttl"] = 0
            payload["data"]["priority"] = "high"
            payload["data"]["channel"] = "alarm_stream"
        
        result = await self._make_request(
            "POST", f"/api/services/notify/{service}", json=payload
        )
        log.info(f"푸시 알림 발송 성공 service:{service} title:{title}")
        return result
