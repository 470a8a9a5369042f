"""The Spelunker traversal engine.

A Spelunker walks a value depth-first, looks up the annotation of every
dataclass field it meets, and calls the handlers registered for the keys in
that annotation.

Ordering rules:

- fields are visited in declaration order
- a field's own structure (nested records, list/tuple elements, mapping
  entries, the value of a polymorphic holder) is walked completely before
  the field's own directives are dispatched
- directives are dispatched left to right; for each one the every-field
  handler runs first, then the handler registered for its key

Any exception raised by a handler stops the traversal at once and reaches
the caller unchanged. Nothing is rolled back.
"""

import dataclasses
import logging
from typing import Any, Mapping, Optional, Set

from ..config import SpelunkConfig
from ..errors import ConfigurationError
from .directives import parse_directives
from .fields import FieldDescriptor
from .handle import Kind, ValueHandle
from .path import index_segment, join_path, key_segment
from .registry import Handler, HandlerRegistry

logger = logging.getLogger(__name__)

_INDIRECT = (Kind.POINTER, Kind.HOLDER)
_SEQUENCES = (Kind.SEQUENCE, Kind.ARRAY)


class _Walk:
    """State owned by one spelunk() call."""

    __slots__ = ("active", "path")

    def __init__(self):
        self.active: Set[int] = set()  # ids of records on the descent stack
        self.path = ""                 # field being processed


class Spelunker:
    """Recursively explores a value and dispatches field annotations to handlers.

    Annotations are read from ``dataclasses.field(metadata={tag: "..."})``.
    An annotation of ``"foo:3,bar"`` calls the ``foo`` handler and then the
    ``bar`` handler; both receive the full directive text (``"foo:3"`` and
    ``"bar"``) so they can read their own arguments.

    Example:
        >>> spelunker = Spelunker().set_handler("trim", trim)
        >>> spelunker.spelunk(person)
    """

    def __init__(self, config: Optional[SpelunkConfig] = None):
        """Initialize a Spelunker.

        Args:
            config: Tag and separator settings (defaults to tag "spelunk")

        Raises:
            ConfigurationError: If the config does not validate
        """
        config = config if config is not None else SpelunkConfig()
        problems = config.validate()
        if problems:
            raise ConfigurationError(problems)
        self.config = config
        self.registry = HandlerRegistry()

    @property
    def tag(self) -> str:
        return self.config.tag

    @property
    def handlers(self) -> Mapping[str, Handler]:
        """Read-only view of the keyed handlers."""
        return self.registry.view()

    @property
    def every_field_handler(self) -> Optional[Handler]:
        return self.registry.every_field

    def set_tag(self, tag: str) -> 'Spelunker':
        """Set the metadata key annotations are read from."""
        config = dataclasses.replace(self.config, tag=tag)
        problems = config.validate()
        if problems:
            raise ConfigurationError(problems)
        self.config = config
        return self

    def set_handler(self, key: str, handler: Handler) -> 'Spelunker':
        """Set the handler called for directives with the given key."""
        self.registry.register(key, handler)
        return self

    def set_handlers(self, handlers: Mapping[str, Handler]) -> 'Spelunker':
        """Register several handlers at once."""
        for key, handler in handlers.items():
            self.registry.register(key, handler)
        return self

    def set_every_field_handler(self, handler: Optional[Handler]) -> 'Spelunker':
        """Set the handler called for every directive of every field."""
        self.registry.set_every_field(handler)
        return self

    def spelunk(self, value: Any) -> None:
        """Explore a value and dispatch its field annotations.

        Args:
            value: Root value. Usually a dataclass instance or a Ref to one;
                anything that does not resolve to a record is ignored.

        Raises:
            Whatever a handler raises, unchanged.
        """
        logger.debug("Spelunking %s (tag=%r, %d handlers)",
                     type(value).__name__, self.config.tag, len(self.registry))
        walk = _Walk()
        try:
            self._spelunk("", ValueHandle.of(value), walk)
        except Exception as e:
            logger.debug("Spelunk aborted by %s at %r: %s", type(e).__name__, walk.path, e)
            raise

    def _spelunk(self, path: str, handle: ValueHandle, walk: '_Walk') -> None:
        kind = handle.kind
        if kind in _INDIRECT:
            if not handle.is_nil():
                self._spelunk(path, handle.elem(), walk)
            return

        if kind is not Kind.RECORD:
            return

        record = handle.value
        if id(record) in walk.active:
            logger.debug("Skipping cycle back to %s at %r", type(record).__name__, path)
            return

        walk.active.add(id(record))
        try:
            for descriptor, field in handle.fields():
                field_path = join_path(path, descriptor.name)
                walk.path = field_path
                self._descend(field_path, field, walk)
                walk.path = field_path
                self._dispatch(descriptor, field_path, field)
        finally:
            walk.active.discard(id(record))

    def _descend(self, path: str, field: ValueHandle, walk: '_Walk') -> None:
        """Walk the structure held by a field before its own directives run."""
        kind = field.kind
        if kind is Kind.RECORD:
            self._spelunk(path, field, walk)
        elif kind in _SEQUENCES:
            for index, element in field.elements():
                self._spelunk(join_path(path, index_segment(index)), element, walk)
        elif kind is Kind.MAPPING:
            for key, entry in field.entries():
                self._spelunk(join_path(path, key_segment(key)), entry, walk)
        elif kind is Kind.HOLDER:
            if not field.is_nil():
                self._spelunk(path, field, walk)

    def _dispatch(self, descriptor: FieldDescriptor, path: str, field: ValueHandle) -> None:
        raw = descriptor.annotation(self.config.tag)
        directives = parse_directives(raw, self.config.separator, self.config.argument_separator)
        for directive in directives:
            every_field = self.registry.every_field
            if every_field is not None:
                every_field(descriptor.name, path, directive.text, field)

            handler = self.registry.get(directive.key)
            if handler is not None:
                logger.debug("Dispatching %r at %s", directive.key, path)
                handler(descriptor.name, path, directive.text, field)
