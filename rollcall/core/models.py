"""
Core domain models for the roll-call engine.

This module defines the roster, per-member roll-call entries and the
emergency event aggregate using Pydantic v2. All models are frozen;
state transitions produce new instances (see ``rollcall.core.rollcall``).
"""

from enum import Enum
from typing import Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator

# 이벤트 유형 (확장 시 catalog.EVENT_TYPE_CONFIG 도 함께 추가)
EventType = Literal["fire", "tornado", "active_shooter"]

EntryStatus = Literal["pending", "safe"]

class RosterMember(BaseModel):
    """점호 대상 인원"""
    model_config = ConfigDict(frozen=True)

    person_id: str = Field(min_length=1)
    first_name: str
    last_name: str = ""
    department: str = ""
    role: str = ""
    is_kiosk_user: bool = False
    special_needs: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

class RollCallEntry(BaseModel):
    """인원별 점호 기록"""
    model_config = ConfigDict(frozen=True)

    member: RosterMember
    status: EntryStatus = "pending"
    marked_safe_at: Optional[float] = None

    @model_validator(mode="after")
    def _status_matches_timestamp(self) -> "RollCallEntry":
        # safe <=> marked_safe_at 설정됨
        if (self.status == "safe") != (self.marked_safe_at is not None):
            raise ValueError("status 'safe' requires marked_safe_at and vice versa")
        return self

    @property
    def person_id(self) -> str:
        return self.member.person_id

    @property
    def is_safe(self) -> bool:
        return self.status == "safe"

class EmergencyEvent(BaseModel):
    """점호 세션 하나의 집합 루트"""
    model_config = ConfigDict(frozen=True)

    event_id: str
    event_type: EventType
    is_drill: bool = False
    started_at: float
    elapsed_seconds: int = Field(default=0, ge=0)
    entries: Tuple[RollCallEntry, ...] = ()
    resolved: bool = False
    resolved_at: Optional[float] = None

    @model_validator(mode="after")
    def _resolution_consistent(self) -> "EmergencyEvent":
        if self.resolved:
            if not self.entries:
                raise ValueError("an event with an empty roster cannot be resolved")
            if any(not e.is_safe for e in self.entries):
                raise ValueError("resolved event still has pending entries")
            if self.resolved_at is None:
                raise ValueError("resolved event requires resolved_at")
        elif self.resolved_at is not None:
            raise ValueError("resolved_at set on an unresolved event")
        return self

    @property
    def roster_size(self) -> int:
        return len(self.entries)

    @property
    def pending_count(self) -> int:
        return sum(1 for e in self.entries if not e.is_safe)

    @property
    def safe_count(self) -> int:
        return sum(1 for e in self.entries if e.is_safe)

class MarkOutcome(str, Enum):
    """mark_safe 결과 구분"""
    MARKED = "marked"
    ALREADY_SAFE = "already_safe"
    UNKNOWN_PERSON = "unknown_person"

class MarkResult(BaseModel):
    """mark_safe 호출 결과"""
    model_config = ConfigDict(frozen=True)

    event: EmergencyEvent
    person_id: str
    outcome: MarkOutcome

    @property
    def changed(self) -> bool:
        return self.outcome is MarkOutcome.MARKED
