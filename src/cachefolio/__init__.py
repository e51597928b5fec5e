"""cachefolio: Key-value caching with interchangeable storage backends."""

__version__ = "0.1.0"

import cachefolio.handlers  # noqa: F401
from cachefolio.base import BaseHandler, create_handler
from cachefolio.config import CacheConfig
from cachefolio.exceptions import (
    CacheError,
    ConfigurationError,
    EnvelopeDecodeError,
    InvalidArgumentError,
)
from cachefolio.handlers import FileHandler, MemoryHandler

__all__ = [
    "BaseHandler",
    "FileHandler",
    "MemoryHandler",
    "CacheConfig",
    "create_handler",
    "CacheError",
    "ConfigurationError",
    "EnvelopeDecodeError",
    "InvalidArgumentError",
    "__version__",
]
