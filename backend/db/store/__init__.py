"""
Stock stores.

Exactly one store is active per process. create_store() picks it once at
startup from DATABASE_URL; nothing else in the app checks which one is in use.
"""

import logging

from core.config import Settings

from .base import StockStore, clamp_limit
from .memory import MemoryStore

logger = logging.getLogger(__name__)

__all__ = ["StockStore", "MemoryStore", "create_store", "clamp_limit"]


def create_store(settings: Settings) -> StockStore:
    if settings.use_database:
        # Memory mode never loads the SQL layer
        from db.database import create_engine
        from .sql import SqlStore

        logger.info("DATABASE_URL detected, using SQL store")
        return SqlStore(create_engine(settings), timeout=settings.store_timeout)

    logger.warning("No DATABASE_URL, using in-memory store (data reset on restart)")
    return MemoryStore(timeout=settings.store_timeout)
