"""Base classes and utilities for the cachefolio handler system.

- BaseHandler: public cache contract shared by all backends
- HandlerRegistry: registry of handler classes
- Convenience functions: register_handler, get_handler, create_handler
"""

from cachefolio.base.handler import BaseHandler
from cachefolio.base.registry import (
    HandlerRegistry,
    create_handler,
    get_handler,
    get_registry,
    register_handler,
)

__all__ = [
    "BaseHandler",
    "HandlerRegistry",
    "register_handler",
    "get_handler",
    "create_handler",
    "get_registry",
]
