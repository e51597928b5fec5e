"""Store engines for cache records.

This module provides the storage layer behind every cache handler:
- StoreEngine: interface shared by all engines
- FileStore: one file per entry under a root directory
- MemoryStore: in-process dict of encoded envelopes
"""

from cachefolio.storage.base import StoreEngine
from cachefolio.storage.file import FileStore
from cachefolio.storage.memory import MemoryStore

__all__ = [
    "StoreEngine",
    "FileStore",
    "MemoryStore",
]
