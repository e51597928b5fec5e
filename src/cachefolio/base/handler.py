"""Base handler implementing the public cache contract.

Every backend shares the same option resolution, key validation, TTL
normalization and default-value handling. Subclasses only say how to
build their store engine and whether their runtime prerequisites are
present.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Union

from cachefolio.codec import make_record
from cachefolio.config import merge_options, normalize_options
from cachefolio.exceptions import ConfigurationError, InvalidArgumentError
from cachefolio.policy import ensure_key, namespace, resolve_ttl, validate_name
from cachefolio.storage.base import StoreEngine
from cachefolio.utils import DEFAULT_PREFIX, FORBIDDEN_CHARACTERS

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class BaseHandler(ABC):
    """Abstract base class for cache handlers.

    Handlers expose get/set/delete/clear/has, increment/decrement and
    the batch variants. Storage errors never escape these methods: reads
    fall back to the default and mutations return False (or 0 for
    counters). Argument errors raise InvalidArgumentError immediately.

    Subclasses define:
    1. handler_name: registry name
    2. DEFAULT_OPTIONS: backend-specific option defaults
    3. is_supported(): capability probe, checked at construction
    4. _create_store(): builds the store engine from current options

    Examples:
        >>> class NullHandler(BaseHandler):
        ...     handler_name = "null"
        ...
        ...     @classmethod
        ...     def is_supported(cls) -> bool:
        ...         return True
        ...
        ...     def _create_store(self):
        ...         return NullStore()
    """

    handler_name: str = ""
    DEFAULT_OPTIONS: Dict[str, Any] = {}
    FORBIDDEN_CHARACTERS: str = FORBIDDEN_CHARACTERS

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        """Initialize handler.

        Args:
            options: Handler options; keys are case-insensitive

        Raises:
            ConfigurationError: If the backend is not supported here
        """
        if not self.is_supported():
            raise ConfigurationError(
                f"In order to use {type(self).__name__}, the necessary "
                f"plugins must be installed/active."
            )
        self._options = merge_options(
            {"prefix": DEFAULT_PREFIX}, self.DEFAULT_OPTIONS, options
        )
        self._store: Optional[StoreEngine] = None

    @classmethod
    @abstractmethod
    def is_supported(cls) -> bool:
        """Check whether this backend can run in the current environment."""
        pass

    @abstractmethod
    def _create_store(self) -> StoreEngine:
        """Build the store engine from the current options."""
        pass

    @property
    def store(self) -> StoreEngine:
        """Store engine, created on first use."""
        if self._store is None:
            self._store = self._create_store()
        return self._store

    def close(self) -> None:
        """Release the store engine."""
        if self._store is not None:
            self._store.close()
            self._store = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    # =========================================================================
    # Options
    # =========================================================================

    def set_options(self, options: Optional[Mapping[str, Any]] = None) -> "BaseHandler":
        """Merge options into the handler; returns self for chaining."""
        options = normalize_options(options)
        if options:
            self._options.update(options)
            self._options_changed()
        return self

    def get_option(self, key: str, default: Any = None) -> Any:
        """Get an option value (case-insensitive), or default if unset."""
        value = self._options.get(key.lower())
        return default if value is None else value

    def options(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Return the effective options merged with overrides."""
        return merge_options(self._options, overrides)

    def _options_changed(self) -> None:
        """Hook called after set_options changed something."""
        pass

    # =========================================================================
    # Single-key operations
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Get a cached value.

        Args:
            key: Cache key
            default: Value returned on a miss, or a zero-argument
                callable evaluated only on a miss

        Returns:
            Cached value, or the resolved default
        """
        name = self._name(key)
        record = self.store.read(name)
        if record is None:
            return self._resolve_default(default)
        return record["value"]

    def set(self, key: str, value: Any, ttl: Any = None) -> bool:
        """Store a value.

        Args:
            key: Cache key
            value: JSON-serializable payload
            ttl: Seconds, timedelta, datetime or None. Falls back to the
                'default_ttl' option when None.

        Returns:
            True if stored, False if the TTL is already expired or the
            write failed
        """
        name = self._name(key)
        if ttl is None:
            ttl = self.get_option("default_ttl")
        seconds, expired = resolve_ttl(ttl)
        if expired:
            logger.debug(f"Not storing {name}: ttl {seconds} is in the past")
            return False
        return self.store.write(name, make_record(value, seconds))

    def delete(self, key: str) -> bool:
        """Delete a key. Returns True if the key is absent afterwards."""
        return self.store.delete(self._name(key))

    def clear(self) -> bool:
        """Delete every entry under this handler's prefix."""
        self.store.clear(self.get_option("prefix", ""))
        return True

    def has(self, key: str) -> bool:
        """Check whether a live entry exists for key."""
        return self.store.read(self._name(key)) is not None

    def increment(self, key: str, offset: Number = 1) -> Number:
        """Add offset to a numeric entry.

        Returns:
            The new value, or 0 when the key is missing, not numeric,
            or the write failed. A missing key is not created.
        """
        return self._apply_offset(key, offset, 1)

    def decrement(self, key: str, offset: Number = 1) -> Number:
        """Subtract offset from a numeric entry. See increment()."""
        return self._apply_offset(key, offset, -1)

    # =========================================================================
    # Batch operations
    # =========================================================================

    def get_multiple(self, keys: Iterable, default: Any = None) -> Dict[str, Any]:
        """Get several keys; returns a dict of key -> value or default."""
        data = {}
        for key in self._ensure_keys(keys):
            value = self.get(key, default)
            data[key] = value
        return data

    def set_multiple(self, values: Mapping[str, Any], ttl: Any = None) -> bool:
        """Set several keys.

        Returns:
            False if values is empty, True otherwise
        """
        if not isinstance(values, Mapping):
            raise InvalidArgumentError("values must be a mapping of key -> value")
        if not values:
            return False
        for key, value in values.items():
            self.set(key, value, ttl)
        return True

    def delete_multiple(self, keys: Iterable) -> bool:
        """Delete several keys.

        Returns:
            False if keys is empty, True otherwise
        """
        keys = self._ensure_keys(keys)
        if not keys:
            return False
        for key in keys:
            self.delete(key)
        return True

    # =========================================================================
    # Helpers
    # =========================================================================

    def _name(self, key: Any) -> str:
        name = namespace(self.get_option("prefix", ""), ensure_key(key))
        return validate_name(name, self.FORBIDDEN_CHARACTERS)

    @staticmethod
    def _resolve_default(default: Any) -> Any:
        return default() if callable(default) else default

    @staticmethod
    def _ensure_keys(keys: Any) -> List[Any]:
        if isinstance(keys, (str, bytes, Mapping)) or not isinstance(keys, Iterable):
            raise InvalidArgumentError("keys must be a list or other iterable of keys")
        return list(keys)

    def _apply_offset(self, key: str, offset: Number, sign: int) -> Number:
        name = self._name(key)
        if not _is_number(offset):
            raise InvalidArgumentError(
                f"offset must be a number, got {type(offset).__name__}"
            )

        record = self.store.read(name)
        if record is None or not _is_number(record["value"]):
            return 0

        # stored_at and ttl are kept so the entry expires on schedule
        record["value"] = record["value"] + sign * offset
        try:
            written = self.store.write(name, record)
        except InvalidArgumentError as e:
            logger.warning(f"Cannot store new value for {name}: {e}")
            return 0
        return record["value"] if written else 0
