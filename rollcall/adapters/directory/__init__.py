"""
Personnel directory adapters.
"""

from .static import StaticDirectory
from .file_directory import FileDirectory, load_personnel
from .http_directory import HttpDirectory

__all__ = ["StaticDirectory", "FileDirectory", "load_personnel", "HttpDirectory"]
