"""Handler for the filesystem-backed cache."""

import logging
from typing import Any, Dict, List, Optional

from cachefolio.base.handler import BaseHandler
from cachefolio.exceptions import InvalidArgumentError
from cachefolio.policy import validate_name
from cachefolio.storage.file import FileStore
from cachefolio.utils import DEFAULT_FILE_MODE

logger = logging.getLogger(__name__)


class FileHandler(BaseHandler):
    """Cache handler storing one file per entry.

    Options:
        path: Root directory for cache files (required)
        mode: Permission bits for written files (default 0o640)
        prefix: Key prefix, also the scope of clear() (default 'cache_')

    Examples:
        >>> cache = FileHandler({'path': '/tmp/cache'})
        >>> cache.set('greeting', 'hello', ttl=60)
        True
        >>> cache.get('greeting')
        'hello'
    """

    handler_name = "file"
    DEFAULT_OPTIONS = {
        "path": None,
        "mode": DEFAULT_FILE_MODE,
    }

    @classmethod
    def is_supported(cls) -> bool:
        return FileStore.is_supported()

    def _create_store(self) -> FileStore:
        return FileStore(
            self.get_option("path"), self.get_option("mode", DEFAULT_FILE_MODE)
        )

    def _options_changed(self) -> None:
        # Path or mode may have changed; rebuild on next use
        self._store = None

    def get_status(self, key: str) -> Optional[Dict[str, Any]]:
        """Get storage status for a key without evicting it.

        Args:
            key: Cache key

        Returns:
            Status dict with path, size_bytes, stored_at, ttl,
            ttl_remaining and expired, or None if not stored
        """
        status = self.store.stat(self._name(key))
        if status is not None:
            status["key"] = key
        return status

    def keys(self) -> List[str]:
        """List stored keys (prefix stripped), including expired ones.

        Files whose names could not have been written through this
        handler are skipped.
        """
        prefix = self.get_option("prefix", "")
        keys = []
        for name in self.store.iter_names(prefix):
            try:
                validate_name(name, self.FORBIDDEN_CHARACTERS)
            except InvalidArgumentError:
                logger.debug(f"Skipping foreign cache file {name!r}")
                continue
            keys.append(name[len(prefix):])
        return keys
