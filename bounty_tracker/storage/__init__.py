"""Persistence for the bounty tracker.

``get_store`` picks PostgreSQL when ``DATABASE_URL`` is set and falls back to
an in-memory store for development.
"""

import logging
import os
from typing import Optional

from .base import Store
from .memory import InMemoryStore

logger = logging.getLogger(__name__)


def get_store(database_url: Optional[str] = None) -> Store:
    """Open the production store, or an in-memory one for development.

    Args:
        database_url: PostgreSQL DSN. Defaults to the DATABASE_URL env var.

    Returns:
        Store instance. The caller owns it and must call ``close()``.
    """
    database_url = database_url or os.environ.get("DATABASE_URL")

    if not database_url:
        # Dev fallback - warn loudly
        logger.warning(
            "DATABASE_URL not set - using in-memory store (data will be lost)"
        )
        return InMemoryStore()

    try:
        from .postgres import PostgresStore

        store = PostgresStore(database_url)
        logger.info("Initialized PostgresStore")
        return store

    except ImportError as e:
        logger.error(f"Failed to import PostgresStore dependencies: {e}")
        raise
    except Exception as e:
        logger.error(f"Failed to initialize PostgresStore: {e}")
        raise


__all__ = ["Store", "InMemoryStore", "get_store"]
