"""Error taxonomy for the URL shortener core.

Every error carries the HTTP status it maps to at the web boundary and a
generic public message. The underlying detail stays in ``str(exc)`` for
logging and is never sent to clients.
"""


class ShortenerError(Exception):
    """Base class for all URL shortener errors."""

    status_code = 500
    public_message = "An error occurred"


class InvalidInput(ShortenerError):
    """Malformed or missing request data."""

    status_code = 400
    public_message = "Invalid request"


class NotFound(ShortenerError):
    """No record matches the given key."""

    status_code = 404
    public_message = "Not found"


class StorageError(ShortenerError):
    """Store unreachable, constraint failure or any other backend failure."""


class TokenCollision(StorageError):
    """Insert rejected by the store's uniqueness constraint."""


class GenerationFailure(ShortenerError):
    """Randomness source unavailable while generating a token."""


class OperationTimeout(ShortenerError):
    """A store call did not finish before its deadline."""

    status_code = 504
    public_message = "The request timed out"
