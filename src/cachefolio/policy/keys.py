"""Cache key namespacing and validation."""

from typing import Any

from cachefolio.exceptions import InvalidArgumentError
from cachefolio.utils import FORBIDDEN_CHARACTERS


def namespace(prefix: str, key: str) -> str:
    """Compose the storage name for a key.

    No escaping is done, so ``namespace('a_', 'b')`` and
    ``namespace('a', '_b')`` produce the same name.

    Examples:
        >>> namespace('cache_', 'user')
        'cache_user'
    """
    return f"{prefix or ''}{key}"


def validate_name(name: str, forbidden: str = FORBIDDEN_CHARACTERS) -> str:
    """Reject names containing any forbidden character.

    Args:
        name: Namespaced key
        forbidden: Characters that may not appear in the name

    Returns:
        The name unchanged

    Raises:
        InvalidArgumentError: If a forbidden character is present
    """
    if not forbidden or set(name).isdisjoint(forbidden):
        return name
    raise InvalidArgumentError(
        f'Cache name cannot contain "{forbidden}" characters: {name!r}'
    )


def ensure_key(key: Any) -> str:
    """Check that a raw key is a string.

    Raises:
        InvalidArgumentError: If key is not a str
    """
    if not isinstance(key, str):
        raise InvalidArgumentError(
            f"The requested cache name/key must be a string, got {type(key).__name__}"
        )
    return key
