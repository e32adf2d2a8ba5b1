"""
Fan-out and logging notification sinks.

A failing sink never affects the state machine: the fan-out notifier
logs and counts the failure and moves on to the next sink.
"""

from typing import Iterable, List
from rollcall.core import catalog
from rollcall.core.models import EmergencyEvent
from rollcall.observability import metrics
from rollcall.observability.logging_setup import get_logger
from rollcall.ports.notify import NotificationSinkPort

log = get_logger("rollcall.notify")

class LoggingNotifier:
    """로그로만 신호를 남기는 싱크"""
    
    async def emergency_initiated(self, event: EmergencyEvent) -> None:
        log.warning(f"[{catalog.title(event.event_type, event.is_drill)}] 점호 시작 "
                    f"event_id:{event.event_id} roster:{event.roster_size}")
    
    async def all_safe_resolved(self, event: EmergencyEvent) -> None:
        log.info(f"{catalog.resolution_message(event)} event_id:{event.event_id}")
    
    async def event_reset(self, event: EmergencyEvent) -> None:
        log.info(f"점호 리셋 알림 event_id:{event.event_id} resolved:{event.resolved}")

class FanoutNotifier:
    """여러 싱크로 신호를 전달 (싱크 오류 격리)"""
    
    def __init__(self, sinks: Iterable[NotificationSinkPort]):
        self.sinks: List[NotificationSinkPort] = list(sinks)
    
    async def emergency_initiated(self, event: EmergencyEvent) -> None:
        for sink in self.sinks:
            try:
                await sink.emergency_initiated(event)
            except Exception as e:
                self._failed(sink, "initiated", e)
    
    async def all_safe_resolved(self, event: EmergencyEvent) -> None:
        for sink in self.sinks:
            try:
                await sink.all_safe_resolved(event)
            except Exception as e:
                self._failed(sink, "resolved", e)
    
    async def event_reset(self, event: EmergencyEvent) -> None:
        for sink in self.sinks:
            try:
                await sink.event_reset(event)
            except Exception as e:
                self._failed(sink, "reset", e)
    
    @staticmethod
    def _failed(sink, signal: str, error: Exception) -> None:
        name = type(sink).__name__
        metrics.notification_failures.labels(sink=name, signal=signal).inc()
        log.error(f"알림 싱크 실패 sink:{name} signal:{signal} error:{error}")
