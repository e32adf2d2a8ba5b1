"""
Port interfaces for the roll-call engine.

This module defines the port interfaces (Protocols) that define
the contracts between the roll-call core and external adapters.
"""

from .directory import PersonnelDirectoryPort
from .notify import NotificationSinkPort
from .history import AuditHistoryPort
from .scheduler import CancelToken, Clock, SchedulerPort

__all__ = ["PersonnelDirectoryPort", "NotificationSinkPort", "AuditHistoryPort",
           "CancelToken", "Clock", "SchedulerPort"]
