"""In-process store engine backed by a dict."""

import logging
from typing import Dict, Optional

from cachefolio.codec import decode_record, encode_record
from cachefolio.exceptions import EnvelopeDecodeError
from cachefolio.policy import ttl as ttl_policy
from cachefolio.storage.base import StoreEngine
from cachefolio.utils import CacheRecord

logger = logging.getLogger(__name__)


class MemoryStore(StoreEngine):
    """Keeps encoded envelopes in memory for the lifetime of the store.

    Values are stored encoded, so callers never share mutable state with
    the cache and payload types behave exactly as with the file store.
    """

    def __init__(self):
        self._entries: Dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def read(self, name: str) -> Optional[CacheRecord]:
        data = self._entries.get(name)
        if data is None:
            return None

        try:
            record = decode_record(data)
        except EnvelopeDecodeError as e:
            logger.debug(f"Ignoring corrupt memory entry {name}: {e}")
            return None

        if ttl_policy.is_expired(record["stored_at"], record["ttl"]):
            logger.debug(f"Evicting expired memory entry {name}")
            self._entries.pop(name, None)
            return None

        return record

    def write(self, name: str, record: CacheRecord) -> bool:
        self._entries[name] = encode_record(record)
        return True

    def delete(self, name: str) -> bool:
        self._entries.pop(name, None)
        return True

    def clear(self, scope: str) -> None:
        for name in [n for n in self._entries if n.startswith(scope or "")]:
            del self._entries[name]

    def close(self) -> None:
        self._entries.clear()
