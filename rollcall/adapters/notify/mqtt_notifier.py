"""
MQTT notification sink.

Publishes ``<prefix>/initiated`` and ``<prefix>/resolved`` JSON messages
through the outbox-backed local publisher. Both are retained while an
event is active and cleared on reset.
"""

from rollcall.adapters.mqtt_local.publisher_async import LocalMqttPublisher
from rollcall.core.models import EmergencyEvent
from .payload import event_payload

SIGNAL_TOPICS = ("initiated", "resolved")

class MqttNotifier:
    """MQTT 알림 싱크"""
    
    def __init__(self, publisher: LocalMqttPublisher):
        self.publisher = publisher
    
    async def emergency_initiated(self, event: EmergencyEvent) -> None:
        # 이전 점호의 resolved 가 남아 있지 않도록 먼저 비움
        await self.publisher.clear_retained("resolved")
        # 현재 상태는 retain 으로 남겨 늦게 구독한 장치도 확인 가능
        await self.publisher.enqueue_json("initiated", event_payload(event), retain=True)
    
    async def all_safe_resolved(self, event: EmergencyEvent) -> None:
        await self.publisher.enqueue_json("resolved", event_payload(event), retain=True)
    
    async def event_reset(self, event: EmergencyEvent) -> None:
        for suffix in SIGNAL_TOPICS:
            await self.publisher.clear_retained(suffix)
