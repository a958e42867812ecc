"""Core app configuration and database."""

from book_network.core.config import get_settings, settings
from book_network.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
