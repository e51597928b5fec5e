"""Utility constants and record types for cachefolio."""

from typing import Any, Optional

from typing_extensions import TypedDict

DEFAULT_PREFIX = "cache_"
DEFAULT_FILE_MODE = 0o640

# Characters that may never appear in a namespaced key
FORBIDDEN_CHARACTERS = "{}()/\\@:"
# String-quoting backends (SQL-style) also reject quotes
SQL_FORBIDDEN_CHARACTERS = FORBIDDEN_CHARACTERS + "'\""

# Web-server housekeeping files that clear() must never remove
HOUSEKEEPING_FILES = frozenset(
    {".htaccess", "index.htm", "index.html", "index.php", "web.config"}
)


class CacheRecord(TypedDict):
    """Envelope persisted for every cache entry."""

    stored_at: int  # Unix timestamp when the record was written
    ttl: Optional[int]  # Seconds to live, None = never expires
    value: Any  # Opaque JSON-serializable payload


def parse_mode(mode: Any) -> int:
    """Convert a file permission mode to an int.

    Args:
        mode: Integer mode or octal string ('0640', '640', '0o640')

    Returns:
        Integer permission bits

    Raises:
        ValueError: If mode cannot be interpreted

    Examples:
        >>> parse_mode('0640')
        416
        >>> parse_mode(0o600)
        384
    """
    if isinstance(mode, bool):
        raise ValueError(f"Invalid file mode: {mode!r}")
    if isinstance(mode, int):
        return mode
    if isinstance(mode, str):
        text = mode.strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        return int(text, 8)
    raise ValueError(f"Invalid file mode: {mode!r}")
