"""
Home Assistant notification sink.

Pushes roll-call signals to mobile companion apps. Live emergencies
are sent as critical notifications; drills are not. Every push opens
its own client session, so overlapping pushes never share one.
"""

from typing import Callable, List, Optional
from rollcall.adapters.homeassistant.client import HAClient
from rollcall.core import catalog
from rollcall.core.models import EmergencyEvent
from rollcall.observability.logging_setup import get_logger

log = get_logger("rollcall.notify.ha")

class HomeAssistantNotifier:
    """Home Assistant 모바일 푸시 싱크"""
    
    def __init__(self, client_factory: Callable[[], HAClient], services: Optional[List[str]] = None):
        """
        초기화합니다.
        
        Args:
            client_factory: 발송마다 새 HAClient 를 만드는 함수
            services: notify 서비스 목록 (None/빈 목록이면 mobile_app_* 자동 탐색)
        """
        self.client_factory = client_factory
        self.services = list(services or [])
    
    async def _send(self, title: str, message: str, *, critical: bool, tag: str) -> None:
        async with self.client_factory() as client:
            targets = self.services or await client.list_notify_mobile_services()
            if not targets:
                log.warning("알림 대상 모바일 서비스가 없습니다")
                return
            for service in targets:
                await client.notify(service, title, message, critical=critical, tag=tag)
    
    async def emergency_initiated(self, event: EmergencyEvent) -> None:
        await self._send(
            catalog.title(event.event_type, event.is_drill),
            catalog.initiated_message(event),
            critical=not event.is_drill,
            tag=f"rollcall-{event.event_id}",
        )
    
    async def all_safe_resolved(self, event: EmergencyEvent) -> None:
        await self._send(
            "ALL PERSONNEL ACCOUNTED FOR",
            catalog.resolution_message(event),
            critical=False,
            tag=f"rollcall-{event.event_id}",
        )
    
    async def event_reset(self, event: EmergencyEvent) -> None:
        # 모바일 푸시는 리셋을 알리지 않음
        return None
