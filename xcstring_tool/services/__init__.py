"""File-level services: editing sessions and open history."""

from .recent_files import RecentFiles
from .session import EditingSession

__all__ = ["EditingSession", "RecentFiles"]
