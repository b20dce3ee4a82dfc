"""Abstract base class for URL store implementations."""

from abc import ABC, abstractmethod
from typing import List

from .models import UrlRecord


class UrlStoreBase(ABC):
    """Abstract base class for URL record persistence.

    Implementations report failures with the structured errors from
    ``shortener.lib.errors``: ``NotFound`` for a missing row,
    ``TokenCollision`` for a uniqueness violation and ``StorageError`` for
    everything else.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Store connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def insert(self, record: UrlRecord) -> None:
        """Insert a new record.

        Args:
            record: The record to persist

        Raises:
            TokenCollision: If the id or short code is already taken
            StorageError: On any other store failure
        """
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> UrlRecord:
        """Get the record for a short code.

        Raises:
            NotFound: If no record has this short code
        """
        pass

    @abstractmethod
    async def get_by_id(self, record_id: str) -> UrlRecord:
        """Get the record for an internal identifier.

        Raises:
            NotFound: If no record has this id
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[UrlRecord]:
        """List all records in store-defined order."""
        pass

    @abstractmethod
    async def create_tables(self) -> None:
        """Create the schema if it does not exist."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
