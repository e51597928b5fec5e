"""Handler registry for cache backends.

This module provides a global registry mapping handler names to handler
classes, plus create_handler() for building a handler from a name, a
class, or an existing instance.
"""

from typing import Any, Dict, List, Mapping, Optional, Type, Union

from cachefolio.base.handler import BaseHandler
from cachefolio.config import normalize_options
from cachefolio.exceptions import ConfigurationError


class HandlerRegistry:
    """Registry of cache handler classes keyed by handler_name.

    Examples:
        >>> registry = HandlerRegistry()
        >>> registry.register(FileHandler)
        >>> registry.get('file')
        <class 'cachefolio.handlers.file.FileHandler'>
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._handlers: Dict[str, Type[BaseHandler]] = {}

    def register(self, handler_class: Type[BaseHandler]) -> None:
        """Register a handler class.

        Raises:
            ValueError: If the name is empty or already registered
        """
        name = handler_class.handler_name.lower()
        if not name:
            raise ValueError(f"{handler_class.__name__} has no handler_name")
        if name in self._handlers:
            raise ValueError(
                f"Handler already registered for name: {name}. "
                f"Cannot register {handler_class.__name__}."
            )
        self._handlers[name] = handler_class

    def get(self, name: str) -> Type[BaseHandler]:
        """Get handler class by name.

        Raises:
            KeyError: If no handler registered under name
        """
        key = name.lower()
        if key not in self._handlers:
            available = ", ".join(sorted(self._handlers.keys()))
            raise KeyError(
                f"No handler registered for name: '{name}'. "
                f"Available handlers: {available}"
            )
        return self._handlers[key]

    def list_names(self) -> List[str]:
        """List all registered handler names."""
        return list(self._handlers.keys())

    def is_registered(self, name: str) -> bool:
        """Check if a handler is registered under name."""
        return name.lower() in self._handlers


# Global singleton registry
_registry = HandlerRegistry()


def get_registry() -> HandlerRegistry:
    """Get the global handler registry."""
    return _registry


def register_handler(handler_class: Type[BaseHandler]) -> None:
    """Register a handler class in the global registry."""
    _registry.register(handler_class)


def get_handler(name: str) -> Type[BaseHandler]:
    """Get handler class by name from the global registry."""
    return _registry.get(name)


def create_handler(
    handler: Union[str, Type[BaseHandler], BaseHandler],
    options: Optional[Mapping[str, Any]] = None,
) -> BaseHandler:
    """Build a ready-to-use cache handler.

    Args:
        handler: Registered name, BaseHandler subclass, or instance
        options: Handler options

    Returns:
        Handler instance with options applied

    Raises:
        ConfigurationError: If handler cannot be resolved, options is not
            a mapping, or the backend is not supported

    Examples:
        >>> cache = create_handler('file', {'path': '/tmp/cache'})
        >>> cache.set('answer', 42)
        True
    """
    options = normalize_options(options)

    if isinstance(handler, str):
        try:
            handler = get_handler(handler)
        except KeyError as e:
            raise ConfigurationError(str(e.args[0])) from e

    if isinstance(handler, type) and issubclass(handler, BaseHandler):
        return handler(options)

    if isinstance(handler, BaseHandler):
        return handler.set_options(options)

    raise ConfigurationError(
        "The handler must be a registered name, a BaseHandler subclass, "
        f"or a BaseHandler instance, got {handler!r}"
    )
