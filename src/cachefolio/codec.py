"""Envelope codec for cache records.

Every cache entry is persisted as a JSON object::

    {"stored_at": 1700000000, "ttl": 60, "value": <payload>}

Serialization uses orjson, which preserves booleans, integers, floats,
strings, None and nested lists/dicts. Tuples come back as lists. Dict
keys must be strings and floats must be finite.
"""

import math
from typing import Any, Optional

import orjson

from cachefolio.exceptions import EnvelopeDecodeError, InvalidArgumentError
from cachefolio.policy import ttl as ttl_policy
from cachefolio.utils import CacheRecord

_REQUIRED_FIELDS = ("stored_at", "ttl", "value")


def make_record(
    value: Any, ttl: Optional[int] = None, stored_at: Optional[int] = None
) -> CacheRecord:
    """Wrap a value in a cache record stamped with the current time."""
    if stored_at is None:
        stored_at = ttl_policy.current_time()
    return {"stored_at": stored_at, "ttl": ttl, "value": value}


def _check_payload(value: Any, path: str = "value") -> None:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidArgumentError(f"Cache value is not serializable: {path} is {value}")
    elif isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidArgumentError(
                    f"Cache value is not serializable: {path} has non-string key {key!r}"
                )
            _check_payload(item, f"{path}[{key!r}]")
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _check_payload(item, f"{path}[{index}]")


def encode_record(record: CacheRecord) -> bytes:
    """Serialize a cache record to bytes.

    Raises:
        InvalidArgumentError: If the payload is not serializable
            (file handles, sockets, arbitrary objects), holds an
            infinite or NaN float, or has a non-string dict key
    """
    _check_payload(record["value"])
    try:
        return orjson.dumps(record)
    except orjson.JSONEncodeError as e:
        raise InvalidArgumentError(f"Cache value is not serializable: {e}") from e


def decode_record(data: bytes) -> CacheRecord:
    """Deserialize bytes into a cache record.

    Raises:
        EnvelopeDecodeError: If the bytes are not a valid envelope
    """
    try:
        record = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise EnvelopeDecodeError(f"Corrupt cache envelope: {e}") from e

    if not isinstance(record, dict):
        raise EnvelopeDecodeError("Cache envelope is not an object")

    missing = [field for field in _REQUIRED_FIELDS if field not in record]
    if missing:
        raise EnvelopeDecodeError(f"Cache envelope missing fields: {', '.join(missing)}")

    stored_at, ttl = record["stored_at"], record["ttl"]
    if not isinstance(stored_at, int) or isinstance(stored_at, bool):
        raise EnvelopeDecodeError(f"Invalid stored_at in envelope: {stored_at!r}")
    if ttl is not None and (not isinstance(ttl, int) or isinstance(ttl, bool)):
        raise EnvelopeDecodeError(f"Invalid ttl in envelope: {ttl!r}")

    return {"stored_at": stored_at, "ttl": ttl, "value": record["value"]}
