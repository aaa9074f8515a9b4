"""
Storage backends for comments and users.

``build_store`` picks the backend once at start‑up:

* no ``database_url`` configured -> ``InMemoryStore``
* database cannot be opened -> ``InMemoryStore``
* otherwise -> ``FallbackStore(SQLiteStore, InMemoryStore)``, which
  still degrades to memory when an individual query fails.
"""

import logging

from ..core.config import Settings
from ..core.exceptions import StoreUnavailableError
from .base import CommentStore
from .fallback import FallbackStore
from .memory import InMemoryStore
from .sqlite import SQLiteStore

__all__ = ["CommentStore", "FallbackStore", "InMemoryStore", "SQLiteStore", "build_store"]


def build_store(settings: Settings) -> CommentStore:
    """Construct and open the store described by ``settings``."""
    logger = logging.getLogger(__name__)
    if not settings.database_url:
        logger.info("No database configured; using in-memory store")
        return InMemoryStore()

    primary = SQLiteStore(settings.database_url)
    try:
        primary.open()
    except StoreUnavailableError as exc:
        logger.error("Error connecting to the database: %s", exc)
        logger.error("Falling back to in-memory store")
        return InMemoryStore()

    logger.info("Connected to SQLite database")
    return FallbackStore(primary, InMemoryStore())
