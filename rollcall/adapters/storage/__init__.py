"""
Storage adapters for the roll-call service.

SQLite-based audit history for closed events and the outbox used
for durable MQTT notifications.
"""

from .sqlite_history import SQLiteHistoryStore, HistoryFilter
from .sqlite_outbox import SQLiteOutbox, OutboxItem

__all__ = ["SQLiteHistoryStore", "HistoryFilter", "SQLiteOutbox", "OutboxItem"]
