"""Cache handlers for cachefolio.

This module contains the built-in handlers and registers them with the
HandlerRegistry on import.

Available handlers:
- FileHandler: one file per entry under a directory ('file')
- MemoryHandler: in-process dict ('memory')

Examples:
    >>> from cachefolio.base.registry import create_handler
    >>> cache = create_handler('memory')
    >>> cache.set('hits', 1)
    True
"""

from cachefolio.base.registry import register_handler
from cachefolio.handlers.file import FileHandler
from cachefolio.handlers.memory import MemoryHandler

register_handler(FileHandler)
register_handler(MemoryHandler)

__all__ = [
    "FileHandler",
    "MemoryHandler",
]
