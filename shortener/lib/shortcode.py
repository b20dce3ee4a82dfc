"""Short code generation utilities."""

import hashlib
import os
import string
import time
import uuid
from typing import Callable, Optional, Tuple

from .errors import GenerationFailure


class ShortCodeGenerator:
    """Generate short codes for URLs.

    A code is the first ``TOKEN_LENGTH`` hex characters of the MD5 digest of a
    fresh time-ordered UUID (version 7). The generator keeps no state and never
    consults the store, so uniqueness is left to the store's constraint.
    """

    TOKEN_LENGTH = 12
    HEX_CHARS = string.digits + "abcdef"

    def __init__(self, entropy: Optional[Callable[[int], bytes]] = None):
        """Initialize short code generator.

        Args:
            entropy: Callable returning N random bytes (defaults to os.urandom)
        """
        self.entropy = entropy or os.urandom

    def new_identifier(self) -> uuid.UUID:
        """Generate a version 7 UUID.

        Layout: 48-bit Unix timestamp in milliseconds, version nibble,
        12 random bits, RFC 4122 variant, 62 random bits.

        Returns:
            Time-ordered UUID

        Raises:
            GenerationFailure: If the randomness source is unavailable
        """
        try:
            random_bytes = self.entropy(10)
        except (OSError, NotImplementedError) as e:
            raise GenerationFailure(f"Randomness source unavailable: {e}") from e

        if len(random_bytes) < 10:
            raise GenerationFailure("Randomness source returned too few bytes")

        rand = int.from_bytes(random_bytes[:10], "big")
        rand_a = rand >> 68
        rand_b = rand & ((1 << 62) - 1)
        timestamp_ms = time.time_ns() // 1_000_000

        value = (timestamp_ms & ((1 << 48) - 1)) << 80
        value |= 0x7 << 76
        value |= rand_a << 64
        value |= 0b10 << 62
        value |= rand_b
        return uuid.UUID(int=value)

    def token_for(self, identifier: uuid.UUID) -> str:
        """Derive the short code for an identifier.

        Args:
            identifier: Record identifier

        Returns:
            Lowercase hex short code of TOKEN_LENGTH characters
        """
        digest = hashlib.md5(str(identifier).encode(), usedforsecurity=False).hexdigest()
        return digest[:self.TOKEN_LENGTH]

    def allocate(self) -> Tuple[uuid.UUID, str]:
        """Generate a new identifier together with its short code."""
        identifier = self.new_identifier()
        return identifier, self.token_for(identifier)

    def generate_token(self) -> str:
        """Generate a short code."""
        return self.allocate()[1]

    @classmethod
    def is_valid_format(cls, code: str) -> bool:
        """Check if code has the generated format (TOKEN_LENGTH hex chars).

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return (
            isinstance(code, str)
            and len(code) == cls.TOKEN_LENGTH
            and all(c in cls.HEX_CHARS for c in code)
        )
