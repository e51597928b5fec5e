"""Handler for the in-process cache."""

from cachefolio.base.handler import BaseHandler
from cachefolio.storage.memory import MemoryStore


class MemoryHandler(BaseHandler):
    """Cache handler keeping entries in process memory.

    Entries live as long as the handler's store: close() or leaving a
    ``with`` block discards them.

    Options:
        default_ttl: TTL in seconds used when set() gets none (default None)
        prefix: Key prefix, also the scope of clear() (default 'cache_')
    """

    handler_name = "memory"
    DEFAULT_OPTIONS = {
        "default_ttl": None,
    }

    @classmethod
    def is_supported(cls) -> bool:
        return MemoryStore.is_supported()

    def _create_store(self) -> MemoryStore:
        return MemoryStore()
