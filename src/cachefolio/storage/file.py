"""Filesystem-backed store engine.

Each entry is one file at ``<path>/<name>`` holding the encoded
envelope. Writes overwrite in place without locking or atomic rename,
so concurrent writers to the same name race and the last one wins.
Expired entries are deleted lazily when read; there is no sweeper.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from cachefolio.codec import decode_record, encode_record
from cachefolio.exceptions import ConfigurationError, EnvelopeDecodeError
from cachefolio.policy import ttl as ttl_policy
from cachefolio.storage.base import StoreEngine
from cachefolio.utils import DEFAULT_FILE_MODE, HOUSEKEEPING_FILES, CacheRecord, parse_mode

logger = logging.getLogger(__name__)


class FileStore(StoreEngine):
    """Stores cache records as files under a root directory.

    Examples:
        >>> store = FileStore('/tmp/cache', mode=0o600)
        >>> store.write('cache_user', {'stored_at': 0, 'ttl': None, 'value': 1})
        True
        >>> store.read('cache_user')['value']
        1
    """

    def __init__(
        self, path: Optional[Union[str, Path]], mode: Any = DEFAULT_FILE_MODE
    ):
        """Initialize file store.

        Args:
            path: Root directory for cache files
            mode: Permission bits applied to every written file

        Raises:
            ConfigurationError: If path is None or mode is invalid
        """
        if path is None:
            raise ConfigurationError("The caching directory must be defined.")
        self.path = Path(path).expanduser()
        try:
            self.mode = parse_mode(mode)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def resolve_path(self, name: str) -> Path:
        """Map a namespaced key to its file path."""
        return self.path / name.strip("/\\")

    def _load(self, name: str) -> Optional[Tuple[bytes, CacheRecord]]:
        """Read and decode an entry file.

        Returns:
            (raw bytes, record), or None if the file is missing,
            unreadable or corrupt
        """
        file_path = self.resolve_path(name)
        try:
            data = file_path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None
        except OSError as e:
            logger.warning(f"Cannot read cache file {file_path}: {e}")
            return None

        try:
            record = decode_record(data)
        except EnvelopeDecodeError as e:
            logger.debug(f"Ignoring corrupt cache file {file_path}: {e}")
            return None

        return data, record

    def read(self, name: str) -> Optional[CacheRecord]:
        loaded = self._load(name)
        if loaded is None:
            return None

        record = loaded[1]
        if ttl_policy.is_expired(record["stored_at"], record["ttl"]):
            logger.debug(f"Evicting expired cache file {self.resolve_path(name)}")
            self.delete(name)
            return None

        return record

    def write(self, name: str, record: CacheRecord) -> bool:
        content = encode_record(record)
        file_path = self.resolve_path(name)

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.warning(f"Cannot write cache file {file_path}: {e}")
            return False

        try:
            os.chmod(file_path, self.mode)
        except OSError as e:
            logger.warning(f"Cannot set mode {oct(self.mode)} on {file_path}: {e}")

        return True

    def delete(self, name: str) -> bool:
        file_path = self.resolve_path(name)
        try:
            file_path.unlink()
        except FileNotFoundError:
            return True
        except OSError as e:
            logger.warning(f"Cannot delete cache file {file_path}: {e}")
            return False
        return True

    def clear(self, scope: str) -> None:
        """Delete entries starting with ``scope`` anywhere below the root.

        Housekeeping files (.htaccess, index.html, ...) are always kept.
        Matching subdirectories are removed once emptied.
        """
        if not self.path.is_dir():
            logger.debug(f"Cache directory {self.path} does not exist, nothing to clear")
            return
        self._clear_directory(self.path, scope or "")

    def _clear_directory(self, directory: Path, scope: str) -> None:
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.warning(f"Cannot list cache directory {directory}: {e}")
            return

        for entry in entries:
            matches = entry.name.startswith(scope)

            if entry.is_dir() and not entry.is_symlink():
                self._clear_directory(entry, scope)
                if matches:
                    # Fails while housekeeping or foreign files remain
                    try:
                        entry.rmdir()
                    except OSError as e:
                        logger.debug(f"Keeping cache directory {entry}: {e}")
                continue

            if not matches or entry.name in HOUSEKEEPING_FILES:
                continue

            try:
                entry.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Cannot delete cache file {entry}: {e}")

    def stat(self, name: str) -> Optional[Dict[str, Any]]:
        """Describe a stored entry without evicting it.

        Args:
            name: Namespaced key

        Returns:
            Status dict, or None if the file is missing or corrupt
        """
        loaded = self._load(name)
        if loaded is None:
            return None

        data, record = loaded
        now = ttl_policy.current_time()
        stored_at, ttl = record["stored_at"], record["ttl"]
        return {
            "name": name,
            "path": str(self.resolve_path(name)),
            "size_bytes": len(data),
            "stored_at": stored_at,
            "ttl": ttl,
            "ttl_remaining": ttl_policy.get_ttl_remaining(stored_at, ttl, now),
            "expired": ttl_policy.is_expired(stored_at, ttl, now),
        }

    def iter_names(self, scope: str) -> Iterator[str]:
        """Yield names of top-level entry files starting with ``scope``."""
        if not self.path.is_dir():
            return
        for entry in sorted(self.path.iterdir()):
            if (
                entry.is_file()
                and entry.name.startswith(scope or "")
                and entry.name not in HOUSEKEEPING_FILES
            ):
                yield entry.name
