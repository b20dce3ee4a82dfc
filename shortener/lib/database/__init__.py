"""Storage layer for URL shortener."""

import logging
from typing import Optional

from .base import UrlStoreBase
from .cache import RedisCache
from .memory import MemoryUrlStore
from .models import UrlRecord
from .postgres import PostgresUrlStore

__all__ = [
    "UrlStoreBase",
    "MemoryUrlStore",
    "PostgresUrlStore",
    "RedisCache",
    "UrlRecord",
    "create_store",
]


def create_store(
    database_url: str,
    pool_max_size: int = 10,
    connection_timeout_seconds: float = 30,
    logger: Optional[logging.Logger] = None,
) -> UrlStoreBase:
    """Create the store selected by the URL scheme.

    ``memory://`` selects the in-process store; anything else is passed to
    asyncpg as a PostgreSQL DSN.
    """
    if database_url.startswith("memory://"):
        return MemoryUrlStore(database_url, logger=logger)

    return PostgresUrlStore(
        db_config=database_url,
        pool_max_size=pool_max_size,
        connection_timeout_seconds=connection_timeout_seconds,
        logger=logger,
    )
