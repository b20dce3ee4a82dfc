"""Registry: creation and lookup of short URL records."""

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

from .common.validators import is_valid_url, normalize_uuid
from .database.base import UrlStoreBase
from .database.cache import RedisCache
from .database.models import UrlRecord
from .errors import (
    InvalidInput,
    NotFound,
    OperationTimeout,
    ShortenerError,
    StorageError,
    TokenCollision,
)
from .shortcode import ShortCodeGenerator

T = TypeVar("T")


class UrlRegistry:
    """Owns the record set: allocates short codes, persists and resolves records.

    Uniqueness of short codes is enforced by the store. A collision on insert
    is retried with a freshly generated code up to ``max_collision_retries``
    times.
    """

    def __init__(
        self,
        store: UrlStoreBase,
        cache: Optional[RedisCache] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 3,
        store_timeout_seconds: Optional[float] = 5.0,
        validate_urls: bool = False,
    ):
        """Initialize registry.

        Args:
            store: Store instance
            cache: Optional cache for short code lookups
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Retries after a short code collision
            store_timeout_seconds: Deadline for each store call (None disables)
            validate_urls: Require http(s) destination URLs
        """
        self.store = store
        self.cache = cache
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
        self.store_timeout_seconds = store_timeout_seconds
        self.validate_urls = validate_urls

    async def _call(self, operation: Awaitable[T]) -> T:
        """Await a store call under the configured deadline."""
        try:
            return await asyncio.wait_for(operation, timeout=self.store_timeout_seconds)
        except asyncio.TimeoutError:
            raise OperationTimeout(
                f"Store call exceeded {self.store_timeout_seconds}s"
            ) from None

    async def create(self, url: str) -> UrlRecord:
        """Create a new short URL record.

        Args:
            url: Destination URL

        Returns:
            The stored record

        Raises:
            InvalidInput: If url is not a string (or not a valid URL when validation is on)
            StorageError: On store failure or when retries are exhausted
            OperationTimeout: If a store call times out
            GenerationFailure: If no short code could be generated
        """
        if not isinstance(url, str):
            raise InvalidInput("url must be a string")

        if self.validate_urls:
            is_valid, error = is_valid_url(url)
            if not is_valid:
                raise InvalidInput(f"Invalid URL: {error}")

        record = None
        for attempt in range(self.max_collision_retries + 1):
            identifier, token = self.generator.allocate()
            record = UrlRecord(id=str(identifier), url=url, shortened=token)

            try:
                await self._call(self.store.insert(record))
                break
            except TokenCollision as e:
                self.logger.warning(f"Short code collision on attempt {attempt + 1}: {e}")
        else:
            raise StorageError(
                f"Unable to store a unique short code after {self.max_collision_retries + 1} attempts"
            )

        self.logger.info(f"Created short URL: {record.shortened} -> {record.url}")

        # The insert succeeded; a failed re-read falls back to what we inserted
        try:
            stored = await self._call(self.store.get_by_token(record.shortened))
        except ShortenerError as e:
            self.logger.warning(f"Re-read of {record.shortened} failed, using inserted values: {e}")
            stored = record

        if self.cache:
            await self.cache.set(stored)

        return stored

    async def get_by_token(self, token: str) -> UrlRecord:
        """Get the record for a short code.

        Raises:
            InvalidInput: If token is empty
            NotFound: If no record has this short code
        """
        if not token:
            raise InvalidInput("Short code missing")

        if self.cache:
            cached = await self.cache.get(token)
            if cached is not None:
                self.logger.debug(f"Cache hit for {token}")
                return cached

        record = await self._call(self.store.get_by_token(token))

        if self.cache:
            await self.cache.set(record)

        self.logger.debug(f"Resolved {token} -> {record.url}")
        return record

    async def get_by_id(self, record_id: str) -> UrlRecord:
        """Get the record for an internal identifier.

        Raises:
            InvalidInput: If record_id is empty
            NotFound: If no record has this id
        """
        if not record_id:
            raise InvalidInput("ID missing")

        canonical_id = normalize_uuid(record_id)
        if canonical_id is None:
            # Never matches a stored id
            raise NotFound(f"No record with id {record_id!r}")

        return await self._call(self.store.get_by_id(canonical_id))

    async def list_all(self) -> List[UrlRecord]:
        """List all records in store-defined order."""
        return await self._call(self.store.list_all())

    async def health_check(self) -> Dict[str, Any]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        try:
            db_healthy = await self._call(self.store.health_check())
        except OperationTimeout:
            db_healthy = False

        cache_healthy = True
        if self.cache:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close store and cache connections."""
        await self.store.close()
        if self.cache:
            await self.cache.close()
