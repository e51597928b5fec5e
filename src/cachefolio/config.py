"""Cache configuration management.

Handler options are plain mappings with case-insensitive keys. This
module normalizes and merges them, and provides CacheConfig for loading
a handler definition from a file or the environment.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

import orjson

from cachefolio.exceptions import ConfigurationError

if TYPE_CHECKING:
    from cachefolio.base.handler import BaseHandler


def normalize_options(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a copy of options with lower-cased keys.

    Raises:
        ConfigurationError: If options is not a mapping
    """
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            f"Options must be a mapping, got {type(options).__name__}"
        )
    return {str(key).lower(): value for key, value in options.items()}


def merge_options(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Shallow-merge option layers; later layers win.

    Examples:
        >>> merge_options({'prefix': 'cache_'}, {'PREFIX': 'app_'})
        {'prefix': 'app_'}
    """
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged.update(normalize_options(layer))
    return merged


@dataclass
class CacheConfig:
    """Configuration for building a cache handler.

    Attributes:
        handler: Registered handler name ('file', 'memory')
        options: Handler options (prefix, path, mode, default_ttl, ...)
    """

    handler: str = "file"
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Normalize option keys."""
        self.options = normalize_options(self.options)

    @classmethod
    def load(cls, config_path: Path) -> "CacheConfig":
        """Load configuration from a JSON file.

        Args:
            config_path: Path to config file

        Returns:
            CacheConfig instance (defaults if the file does not exist)
        """
        config_path = Path(config_path)
        if not config_path.exists():
            return cls()

        with open(config_path, "rb") as f:
            data = orjson.loads(f.read())

        if not isinstance(data, dict):
            raise ConfigurationError(f"Invalid cache config file: {config_path}")

        return cls(
            handler=data.get("handler", "file"),
            options=data.get("options") or {},
        )

    def save(self, config_path: Path) -> None:
        """Save configuration to a JSON file.

        Args:
            config_path: Path to config file
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {"handler": self.handler, "options": self.options}

        with open(config_path, "wb") as f:
            f.write(orjson.dumps(data, option=orjson.OPT_INDENT_2))

    @classmethod
    def from_env(cls) -> "CacheConfig":
        """Create configuration from environment variables.

        Environment variables:
            CACHEFOLIO_HANDLER: Handler name
            CACHEFOLIO_PATH: Cache directory (file handler)
            CACHEFOLIO_PREFIX: Key prefix
            CACHEFOLIO_MODE: File mode as an octal string
            CACHEFOLIO_DEFAULT_TTL: TTL in seconds applied when none is given

        Returns:
            CacheConfig instance
        """
        config = cls()

        if os.getenv("CACHEFOLIO_HANDLER"):
            config.handler = os.getenv("CACHEFOLIO_HANDLER", "").lower()

        if os.getenv("CACHEFOLIO_PATH"):
            config.options["path"] = os.getenv("CACHEFOLIO_PATH")

        if os.getenv("CACHEFOLIO_PREFIX") is not None:
            config.options["prefix"] = os.getenv("CACHEFOLIO_PREFIX")

        if os.getenv("CACHEFOLIO_MODE"):
            config.options["mode"] = os.getenv("CACHEFOLIO_MODE")

        if os.getenv("CACHEFOLIO_DEFAULT_TTL"):
            config.options["default_ttl"] = int(os.getenv("CACHEFOLIO_DEFAULT_TTL"))

        return config

    def create_handler(self) -> "BaseHandler":
        """Build the configured handler through the global registry."""
        from cachefolio.base.registry import create_handler

        return create_handler(self.handler, self.options)
