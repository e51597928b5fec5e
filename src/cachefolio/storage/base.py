"""Store engine interface.

A store engine persists cache records under namespaced names. Handlers
implement the public cache contract once on top of this interface, so a
backend only has to supply read, write, delete, clear and a capability
probe.
"""

from abc import ABC, abstractmethod
from typing import Optional

from cachefolio.utils import CacheRecord


class StoreEngine(ABC):
    """Abstract base class for cache store engines.

    Engines must never raise on storage failures: reads degrade to a
    miss (None) and mutations report False. Expired records are treated
    as missing and evicted when they are read.
    """

    @classmethod
    def is_supported(cls) -> bool:
        """Check that the engine's runtime prerequisites are present."""
        return True

    @abstractmethod
    def read(self, name: str) -> Optional[CacheRecord]:
        """Read a live record.

        Args:
            name: Namespaced key

        Returns:
            The record, or None if absent, corrupt, or expired
        """
        pass

    @abstractmethod
    def write(self, name: str, record: CacheRecord) -> bool:
        """Write a record, replacing any existing one.

        Returns:
            True on success, False if the underlying storage failed
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> bool:
        """Delete a record. Deleting an absent record succeeds."""
        pass

    @abstractmethod
    def clear(self, scope: str) -> None:
        """Delete every record whose name starts with ``scope``."""
        pass

    def close(self) -> None:
        """Release any resources held by the engine."""
        pass
