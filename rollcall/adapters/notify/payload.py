"""
Wire payload for roll-call notifications.
"""

from typing import Any, Dict
from rollcall.core import catalog
from rollcall.core.models import EmergencyEvent

def event_payload(event: EmergencyEvent) -> Dict[str, Any]:
    """알림용 이벤트 요약 (명단 상세 제외)"""
    return {
        "eventId": event.event_id,
        "eventType": event.event_type,
        "drill": event.is_drill,
        "headline": catalog.headline(event.event_type, event.is_drill),
        "startedAt": event.started_at,
        "elapsed": catalog.format_elapsed(event.elapsed_seconds),
        "elapsedSeconds": event.elapsed_seconds,
        "rosterSize": event.roster_size,
        "safe": event.safe_count,
        "pending": event.pending_count,
        "resolved": event.resolved,
        "resolvedAt": event.resolved_at,
    }
