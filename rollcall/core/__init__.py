"""
Core domain models and pure functions for the roll-call engine.

This module contains the domain models and pure state transitions
that are independent of external I/O, clocks and schedulers.
"""

from .models import (
    EmergencyEvent,
    EntryStatus,
    EventType,
    MarkOutcome,
    MarkResult,
    RollCallEntry,
    RosterMember,
)
from .errors import DirectoryUnavailable, DoubleInitiate, NoActiveRollCall, RollCallError
from .rollcall import initiate, mark_safe, pending_of, resolve, safe_of, should_resolve, tick
from .catalog import EVENT_TYPE_CONFIG, format_elapsed

__all__ = [
    "EmergencyEvent", "EntryStatus", "EventType", "MarkOutcome", "MarkResult",
    "RollCallEntry", "RosterMember",
    "DirectoryUnavailable", "DoubleInitiate", "NoActiveRollCall", "RollCallError",
    "initiate", "mark_safe", "pending_of", "resolve", "safe_of", "should_resolve", "tick",
    "EVENT_TYPE_CONFIG", "format_elapsed",
]
