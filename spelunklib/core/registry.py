"""Handler registry for SpelunkLib.

Handlers are plain callables keyed by the directive key they respond to.
One additional every-field handler, if set, is called for every directive
of every visited field regardless of its key.
"""

from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional

from ..errors import ConfigurationError
from .handle import ValueHandle

# (field name, field path, directive text, value handle)
Handler = Callable[[str, str, str, ValueHandle], None]


class HandlerRegistry:
    """Mapping from directive key to handler, plus the every-field handler.

    Lookup is by exact key. Registering a key again replaces its handler.
    The registry is read-only while a traversal is running; it is not
    synchronized for concurrent mutation.
    """

    def __init__(self):
        self._handlers: Dict[str, Handler] = {}
        self._every_field: Optional[Handler] = None

    def register(self, key: str, handler: Handler) -> None:
        """Register a handler under a directive key.

        Args:
            key: Directive key, e.g. ``"trim"`` for ``"trim"`` or ``"trim:both"``
            handler: Callable taking (name, path, directive, handle)

        Raises:
            ConfigurationError: If handler is not callable
        """
        if not callable(handler):
            raise ConfigurationError(f"handler for {key!r} must be callable")
        self._handlers[key] = handler

    def set_every_field(self, handler: Optional[Handler]) -> None:
        """Set (or clear, with None) the every-field handler."""
        if handler is not None and not callable(handler):
            raise ConfigurationError("every-field handler must be callable")
        self._every_field = handler

    @property
    def every_field(self) -> Optional[Handler]:
        return self._every_field

    def get(self, key: str) -> Optional[Handler]:
        return self._handlers.get(key)

    def view(self) -> Mapping[str, Handler]:
        """Read-only view of the registered handlers, keyed by directive key."""
        return MappingProxyType(self._handlers)

    def keys(self) -> Iterator[str]:
        return iter(self._handlers)

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"HandlerRegistry(keys={sorted(self._handlers)!r}, every_field={self._every_field is not None})"
