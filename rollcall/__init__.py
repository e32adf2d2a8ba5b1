"""
Emergency roll-call accountability service.

Tracks personnel presence during fire, tornado and active-shooter
events and drills, auto-resolving once everyone is accounted for.
"""

__version__ = "0.2.0"
