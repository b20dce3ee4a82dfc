"""In-process store for development and tests."""

import logging
from typing import Dict, List, Optional

from ..errors import NotFound, TokenCollision
from .base import UrlStoreBase
from .models import UrlRecord


class MemoryUrlStore(UrlStoreBase):
    """Dictionary-backed store with the same uniqueness rules as the SQL table."""

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._by_id: Dict[str, UrlRecord] = {}
        self._by_token: Dict[str, UrlRecord] = {}

    async def insert(self, record: UrlRecord) -> None:
        # No await between the checks and the writes, so this is atomic on the loop
        if record.id in self._by_id:
            raise TokenCollision(f"Duplicate id: {record.id}")
        if record.shortened in self._by_token:
            raise TokenCollision(f"Duplicate short code: {record.shortened}")

        self._by_id[record.id] = record
        self._by_token[record.shortened] = record
        self.logger.debug(f"Stored {record.shortened} -> {record.url}")

    async def get_by_token(self, token: str) -> UrlRecord:
        try:
            return self._by_token[token]
        except KeyError:
            raise NotFound(f"No record with short code {token!r}") from None

    async def get_by_id(self, record_id: str) -> UrlRecord:
        try:
            return self._by_id[record_id]
        except KeyError:
            raise NotFound(f"No record with id {record_id!r}") from None

    async def list_all(self) -> List[UrlRecord]:
        return list(self._by_id.values())

    async def create_tables(self) -> None:
        pass

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._by_id.clear()
        self._by_token.clear()
