"""Time-to-live resolution and expiry checks.

All timestamps are integer Unix seconds. Tests advance the clock by
patching ``current_time``; callers must look it up on this module.
"""

import math
import time
from datetime import datetime, timedelta
from typing import Any, Optional, Tuple

from cachefolio.exceptions import InvalidArgumentError


def current_time() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())


def resolve_ttl(ttl: Any) -> Tuple[Optional[int], bool]:
    """Normalize a TTL into seconds-from-now.

    Args:
        ttl: None (never expires), a number of seconds, a timedelta
            (relative), or a datetime (absolute expiry instant)

    Returns:
        (seconds, expired) where seconds is None for "no expiry" and
        expired is True when the TTL already lies in the past

    Raises:
        InvalidArgumentError: If ttl is of any other type, or is an
            infinite or NaN float

    Examples:
        >>> resolve_ttl(None)
        (None, False)
        >>> resolve_ttl(60)
        (60, False)
        >>> resolve_ttl(-5)
        (-5, True)
    """
    if ttl is None:
        return None, False

    if isinstance(ttl, bool):
        raise InvalidArgumentError("ttl can be an integer, None, or a timedelta/datetime")

    if isinstance(ttl, timedelta):
        seconds = int(ttl.total_seconds())
    elif isinstance(ttl, datetime):
        seconds = int(ttl.timestamp()) - current_time()
    elif isinstance(ttl, (int, float)):
        if isinstance(ttl, float) and not math.isfinite(ttl):
            raise InvalidArgumentError(f"ttl must be a finite number, got {ttl}")
        seconds = int(ttl)
    else:
        raise InvalidArgumentError(
            f"ttl can be an integer, None, or a timedelta/datetime, got {type(ttl).__name__}"
        )

    return seconds, seconds < 0


def expires_at(seconds: Optional[int], now: Optional[int] = None) -> Optional[int]:
    """Convert a relative TTL into an absolute expiry timestamp.

    Backends with native expiry that want an instant use this; those
    that want a duration pass ``seconds`` through unchanged.
    """
    if seconds is None:
        return None
    if now is None:
        now = current_time()
    return now + seconds


def is_expired(stored_at: int, ttl: Optional[int], now: Optional[int] = None) -> bool:
    """Check whether a record has outlived its TTL.

    A TTL of None never expires. A TTL of 0 is expired immediately.

    Args:
        stored_at: Unix timestamp of the write
        ttl: Seconds to live
        now: Current time (defaults to current_time())

    Returns:
        True if the record must be treated as absent
    """
    if ttl is None:
        return False
    if ttl <= 0:
        return True
    if now is None:
        now = current_time()
    return now > stored_at + ttl


def get_ttl_remaining(
    stored_at: int, ttl: Optional[int], now: Optional[int] = None
) -> Optional[int]:
    """Get remaining seconds until a record expires.

    Returns:
        Seconds remaining (never negative), or None if it never expires
    """
    if ttl is None:
        return None
    if now is None:
        now = current_time()
    return max(0, stored_at + ttl - now)
