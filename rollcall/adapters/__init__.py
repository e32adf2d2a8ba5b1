"""
Adapters for the roll-call service.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .directory import FileDirectory, HttpDirectory, StaticDirectory
from .notify import FanoutNotifier, HomeAssistantNotifier, LoggingNotifier, MqttNotifier
from .storage import SQLiteHistoryStore, SQLiteOutbox
from .scheduler import AsyncioScheduler, ManualClock, ManualScheduler
from .mqtt_local import LocalMqttPublisher
from .homeassistant import HAClient

__all__ = [
    "FileDirectory", "HttpDirectory", "StaticDirectory",
    "FanoutNotifier", "HomeAssistantNotifier", "LoggingNotifier", "MqttNotifier",
    "SQLiteHistoryStore", "SQLiteOutbox",
    "AsyncioScheduler", "ManualClock", "ManualScheduler",
    "LocalMqttPublisher", "HAClient",
]
