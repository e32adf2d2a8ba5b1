"""
Home Assistant REST API adapter.
"""

from .client import HAClient

__all__ = ["HAClient"]
