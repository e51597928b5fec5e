"""Key and TTL policies shared by every cache handler.

- keys: namespacing and forbidden-character validation
- ttl: time-to-live normalization and expiry checks
"""

from cachefolio.policy.keys import ensure_key, namespace, validate_name
from cachefolio.policy.ttl import (
    current_time,
    expires_at,
    get_ttl_remaining,
    is_expired,
    resolve_ttl,
)

__all__ = [
    "namespace",
    "validate_name",
    "ensure_key",
    "resolve_ttl",
    "expires_at",
    "is_expired",
    "get_ttl_remaining",
    "current_time",
]
