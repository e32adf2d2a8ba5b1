"""
Event type catalog and display helpers.

Presentation metadata for each emergency type plus the elapsed time
formatter used by notifications and the status API.
"""

from typing import Dict
from .models import EmergencyEvent, EventType

EVENT_TYPE_CONFIG: Dict[str, Dict[str, str]] = {
    "fire": {
        "label": "Fire",
        "title": "FIRE EVACUATION",
        "instruction": "EVACUATE IMMEDIATELY • ACCOUNT FOR ALL PERSONNEL",
    },
    "tornado": {
        "label": "Tornado",
        "title": "TORNADO SHELTER",
        "instruction": "MOVE TO SHELTER AREAS • ACCOUNT FOR ALL PERSONNEL",
    },
    "active_shooter": {
        "label": "Active Shooter",
        "title": "ACTIVE SHOOTER",
        "instruction": "RUN • HIDE • FIGHT • ACCOUNT FOR ALL PERSONNEL",
    },
}

def format_elapsed(seconds: int) -> str:
    """
    경과 초를 MM:SS 로 변환합니다. 60분 이상도 분으로 누적합니다.

    >>> format_elapsed(3725)
    '62:05'
    """
    seconds = max(0, int(seconds))
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"

def headline(event_type: EventType, is_drill: bool) -> str:
    """알림/화면 제목"""
    label = EVENT_TYPE_CONFIG[event_type]["label"]
    return f"{label} Drill" if is_drill else f"{label} Emergency Protocol"

def title(event_type: EventType, is_drill: bool) -> str:
    cfg = EVENT_TYPE_CONFIG[event_type]
    return f"{cfg['label'].upper()} DRILL" if is_drill else cfg["title"]

def resolution_message(event: EmergencyEvent) -> str:
    """전원 확인 메시지"""
    kind = "Drill" if event.is_drill else "Emergency"
    return (f"{kind} protocol complete • All {event.roster_size} employees accounted for "
            f"in {format_elapsed(event.elapsed_seconds)}")

def initiated_message(event: EmergencyEvent) -> str:
    """점호 시작 메시지"""
    cfg = EVENT_TYPE_CONFIG[event.event_type]
    return f"{cfg['instruction']} ({event.roster_size} personnel on roster)"
