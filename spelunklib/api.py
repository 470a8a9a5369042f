"""High-level API for SpelunkLib.

This module provides simple, functional interfaces for common operations.
These functions wrap the Spelunker class for ease of use in simple cases.
"""

from typing import Any, List, Mapping, NamedTuple, Optional

from .config import DEFAULT_TAG, SpelunkConfig
from .core.handle import ValueHandle
from .core.registry import Handler
from .core.spelunker import Spelunker
from .handlers.zero import zeroer


class FieldVisit(NamedTuple):
    """One dispatch attempt recorded by collect_fields."""
    name: str
    path: str
    directive: str


def spelunk(value: Any,
            handlers: Optional[Mapping[str, Handler]] = None,
            tag: str = DEFAULT_TAG,
            every_field_handler: Optional[Handler] = None) -> None:
    """Simple interface for a single traversal.

    Args:
        value: Root value to explore
        handlers: Mapping from directive key to handler
        tag: Metadata key annotations are read from
        every_field_handler: Handler called for every directive of every field

    Raises:
        Whatever a handler raises, unchanged.

    Example:
        >>> spelunk(person, {"trim": trim, "secret": zeroer})
    """
    spelunker = Spelunker(SpelunkConfig.for_tag(tag))
    spelunker.set_handlers(handlers or {})
    spelunker.set_every_field_handler(every_field_handler)
    spelunker.spelunk(value)


def collect_fields(value: Any, tag: str = DEFAULT_TAG) -> List[FieldVisit]:
    """Record every dispatch attempt a traversal would make.

    Useful for checking which fields carry which directives, and in what
    order handlers would see them.

    Args:
        value: Root value to explore
        tag: Metadata key annotations are read from

    Returns:
        FieldVisit entries in dispatch order
    """
    visits: List[FieldVisit] = []

    def record(name: str, path: str, directive: str, handle: ValueHandle) -> None:
        visits.append(FieldVisit(name, path, directive))

    spelunk(value, tag=tag, every_field_handler=record)
    return visits


def zero_fields(value: Any, key: str = "zero", tag: str = DEFAULT_TAG) -> None:
    """Reset every field annotated with ``key`` to its zero value.

    Raises:
        NotSettableError: If an annotated field cannot be written
    """
    spelunk(value, {key: zeroer}, tag=tag)
