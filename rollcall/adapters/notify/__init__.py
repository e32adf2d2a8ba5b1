"""
Notification sink adapters.
"""

from .payload import event_payload
from .fanout import FanoutNotifier, LoggingNotifier
from .mqtt_notifier import MqttNotifier
from .ha_notifier import HomeAssistantNotifier

__all__ = ["event_payload", "FanoutNotifier", "LoggingNotifier", "MqttNotifier", "HomeAssistantNotifier"]
