"""Error hierarchy for the vector record store.

Backend-specific exceptions (``redis.RedisError`` and friends) are wrapped
in one of these so callers only need to handle ``StoreError``.
"""


class StoreError(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConnectionError(StoreError):
    """Raised when a Redis call fails.

    Examples:
        - Redis server unavailable
        - FT.SEARCH / FT.CREATE rejected by the server
        - A MULTI/EXEC batch failing mid-insert
    """

    pass


class FilterConflictError(StoreError):
    """Raised when a per-call filter and the store's default filter are both set.

    Raised before any backend call is made.
    """

    pass


class MetadataDecodeError(StoreError):
    """Raised when a stored metadata field is not valid escaped JSON."""

    pass


class ValidationError(StoreError, ValueError):
    """Raised on invalid caller input.

    Examples:
        - Mismatched vector and document counts
        - Fewer explicit keys than vectors
    """

    pass
