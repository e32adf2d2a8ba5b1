"""
Local MQTT adapter (outbox-backed publisher).
"""

from .publisher_async import LocalMqttPublisher

__all__ = ["LocalMqttPublisher"]
