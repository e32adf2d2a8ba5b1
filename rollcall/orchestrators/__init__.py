"""
Orchestrators for the roll-call service.

This module contains the orchestrators that coordinate the pure
roll-call core with the directory, scheduler, notification and
history ports.
"""
from .roster_loader import RosterLoader
from .roll_call import RollCallOrchestrator

__all__ = ["RosterLoader", "RollCallOrchestrator"]
