"""
Scheduler adapters: asyncio event-loop timers and a manual virtual-time scheduler.
"""

from .asyncio_scheduler import AsyncioScheduler
from .manual import ManualClock, ManualScheduler

__all__ = ["AsyncioScheduler", "ManualClock", "ManualScheduler"]
