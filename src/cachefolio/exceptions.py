"""Exception hierarchy for cachefolio.

Validation errors are raised to the caller. Storage failures are not
exceptions at all: stores log them and report ``False`` or a miss.
"""


class CacheError(Exception):
    """Base exception for cache-related errors."""

    pass


class InvalidArgumentError(CacheError, ValueError):
    """Raised when a caller passes a wrong-typed or malformed argument."""

    pass


class ConfigurationError(CacheError):
    """Raised when a required setting is missing or a backend is unavailable."""

    pass


class EnvelopeDecodeError(CacheError):
    """Raised when stored bytes cannot be decoded into a cache record."""

    pass
