"""
Pure roll-call state transitions.

This module contains the accountability tracker, elapsed-time and
auto-resolution rules as pure functions over ``EmergencyEvent``.
Nothing here performs I/O, reads the clock or schedules callbacks;
callers pass ``now`` explicitly.
"""

import math
import uuid
from typing import Iterable, List, Optional, Tuple
from .models import (
    EmergencyEvent,
    EventType,
    MarkOutcome,
    MarkResult,
    RollCallEntry,
    RosterMember,
)

def initiate(roster: Iterable[RosterMember],
             *,
             event_type: EventType,
             is_drill: bool,
             now: float,
             event_id: Optional[str] = None) -> EmergencyEvent:
    """
    명단으로 새 점호 이벤트를 생성합니다.

    Args:
        roster: 점호 대상 명단 (빈 명단 허용, 단 자동 종료 불가)
        event_type: 비상 유형
        is_drill: 훈련 여부
        now: 시작 시각 (epoch 초)
        event_id: 이벤트 ID (None이면 생성)

    Returns:
        모든 인원이 pending 인 이벤트

    Raises:
        ValueError: 명단에 중복 person_id 가 있는 경우
    """
    entries = []
    seen = set()
    for member in roster:
        if member.person_id in seen:
            raise ValueError(f"duplicate person_id in roster: {member.person_id}")
        seen.add(member.person_id)
        entries.append(RollCallEntry(member=member))

    return EmergencyEvent(
        event_id=event_id or uuid.uuid4().hex,
        event_type=event_type,
        is_drill=is_drill,
        started_at=now,
        entries=tuple(entries),
    )

def pending_of(event: EmergencyEvent) -> List[RollCallEntry]:
    """아직 확인되지 않은 인원 (명단 순서 유지)"""
    return [e for e in event.entries if not e.is_safe]

def safe_of(event: EmergencyEvent) -> List[RollCallEntry]:
    """안전 확인된 인원 (명단 순서 유지)"""
    return [e for e in event.entries if e.is_safe]

def mark_safe(event: EmergencyEvent, person_id: str, *, now: float) -> MarkResult:
    """
    인원을 안전으로 표시합니다.

    알 수 없는 인원이나 이미 안전한 인원은 변경 없이 결과만 반환합니다.
    자동 종료 판정은 하지 않습니다 (``resolve`` 참조).

    Args:
        event: 현재 이벤트
        person_id: 대상 인원 ID
        now: 표시 시각

    Returns:
        갱신된 이벤트와 결과 구분
    """
    for idx, entry in enumerate(event.entries):
        if entry.person_id != person_id:
            continue
        if entry.is_safe:
            return MarkResult(event=event, person_id=person_id, outcome=MarkOutcome.ALREADY_SAFE)

        updated = entry.model_copy(update={"status": "safe", "marked_safe_at": now})
        entries = event.entries[:idx] + (updated,) + event.entries[idx + 1:]
        return MarkResult(
            event=event.model_copy(update={"entries": entries}),
            person_id=person_id,
            outcome=MarkOutcome.MARKED,
        )

    return MarkResult(event=event, person_id=person_id, outcome=MarkOutcome.UNKNOWN_PERSON)

def elapsed_between(started_at: float, now: float) -> int:
    """경과 초 (음수 방지)"""
    return max(0, math.floor(now - started_at))

def tick(event: EmergencyEvent, *, now: float) -> EmergencyEvent:
    """
    경과 시간을 갱신합니다. 종료된 이벤트는 그대로 반환합니다.
    """
    if event.resolved:
        return event
    elapsed = elapsed_between(event.started_at, now)
    if elapsed == event.elapsed_seconds:
        return event
    return event.model_copy(update={"elapsed_seconds": elapsed})

def should_resolve(event: EmergencyEvent) -> bool:
    """명단이 비어 있지 않고 pending 인원이 없으며 아직 종료 전인지"""
    return bool(event.entries) and not event.resolved and not pending_of(event)

def resolve(event: EmergencyEvent, *, now: float) -> Tuple[EmergencyEvent, bool]:
    """
    자동 종료 규칙을 적용합니다.

    Args:
        event: 현재 이벤트
        now: 판정 시각

    Returns:
        (이벤트, 이번 호출에서 종료되었는지) - 종료 전이는 이벤트당 한 번만 True
    """
    if not should_resolve(event):
        return event, False

    resolved = event.model_copy(update={
        "resolved": True,
        "resolved_at": now,
        "elapsed_seconds": elapsed_between(event.started_at, now),
    })
    return resolved, True
