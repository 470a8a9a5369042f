"""Value handles for SpelunkLib.

A ValueHandle is a transient view on one storage slot: a dataclass field,
a list element, a tuple element, a mapping entry, the inside of a ``Ref``
cell, or the root value itself. Handlers receive handles rather than bare
values so they can inspect the kind of value, check whether the slot may
be written, and replace the value in place.

Settability follows where the slot lives, not what it holds:

- the root slot is never settable
- fields of a record reached through addressable storage are settable,
  unless the dataclass is frozen
- list elements are always settable
- tuple elements never are
- mapping values and values held by a polymorphic field are read-only
  views; store ``Ref`` cells in them to make the contents writable
- the inside of a ``Ref`` is always settable
"""

from collections.abc import Mapping, MutableSequence
from enum import Enum
from typing import Any, Callable, Generic, Iterator, Optional, Tuple, TypeVar

from ..errors import NotSettableError, SpelunkError
from .fields import FieldDescriptor, describe, is_frozen, is_polymorphic, is_record

T = TypeVar("T")


class Kind(Enum):
    """Classification of the value a handle refers to."""
    INVALID = "invalid"     # None with no declared type
    SCALAR = "scalar"       # str, int, callables, anything not below
    RECORD = "record"       # dataclass instance
    SEQUENCE = "sequence"   # list and other mutable sequences
    ARRAY = "array"         # tuple
    MAPPING = "mapping"     # dict and other mappings
    HOLDER = "holder"       # field declared Any/object/multi-member Union
    POINTER = "pointer"     # Ref cell, or None in a typed slot


class Ref(Generic[T]):
    """A mutable cell holding one value.

    Refs are the explicit indirection of SpelunkLib. A record stored in a
    mapping or in a polymorphic field is read-only to handlers, but a
    ``Ref`` to that record is not:

        >>> secrets = {"api": Ref(Secret(token="abc"))}
    """

    __slots__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return self.value == other.value

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


def classify(value: Any, declared: Any = None) -> Kind:
    """Classify a value, taking its declared type into account.

    Args:
        value: The value held in the slot
        declared: Declared type of the slot, or None if unknown

    Returns:
        The Kind of the slot
    """
    if declared is not None and is_polymorphic(declared):
        return Kind.HOLDER
    if isinstance(value, Ref):
        return Kind.POINTER
    if value is None:
        return Kind.POINTER if declared is not None else Kind.INVALID
    if is_record(value):
        return Kind.RECORD
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if isinstance(value, tuple):
        return Kind.ARRAY
    if isinstance(value, (str, bytes, bytearray)):
        return Kind.SCALAR
    if isinstance(value, MutableSequence):
        return Kind.SEQUENCE
    return Kind.SCALAR


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


class ValueHandle:
    """A view on a storage slot.

    Handles never own the data they point at and are only meaningful for
    the duration of the traversal that produced them.
    """

    __slots__ = ("_getter", "_setter", "_declared", "_addressable")

    def __init__(self,
                 getter: Callable[[], Any],
                 setter: Optional[Callable[[Any], None]] = None,
                 declared: Any = None,
                 addressable: bool = False):
        """Initialize a handle.

        Args:
            getter: Reads the value currently in the slot
            setter: Replaces the value in the slot; None for read-only slots
            declared: Declared type of the slot, if known
            addressable: Whether records in this slot may have their
                fields written
        """
        self._getter = getter
        self._setter = setter
        self._declared = declared
        self._addressable = addressable

    @classmethod
    def of(cls, value: Any) -> 'ValueHandle':
        """Handle for a root value.

        The root slot itself cannot be rebound, but a record passed in is
        referenced rather than copied, so its fields are writable.
        """
        return cls(_constant(value), addressable=True)

    @property
    def value(self) -> Any:
        return self._getter()

    @property
    def kind(self) -> Kind:
        return classify(self._getter(), self._declared)

    @property
    def declared_type(self) -> Any:
        return self._declared

    @property
    def type(self) -> Any:
        """Declared type of the slot when known, else the runtime type."""
        if self._declared is not None:
            return self._declared
        return type(self._getter())

    @property
    def settable(self) -> bool:
        return self._setter is not None

    @property
    def addressable(self) -> bool:
        return self._addressable

    def set(self, value: Any) -> None:
        """Replace the value in the slot.

        Raises:
            NotSettableError: If the slot is read-only
        """
        if self._setter is None:
            raise NotSettableError()
        self._setter(value)

    def is_nil(self) -> bool:
        return self._getter() is None

    def elem(self) -> 'ValueHandle':
        """Resolve a pointer or a polymorphic holder one level.

        Returns:
            Handle on the referenced value. The inside of a Ref is settable;
            the value of a holder is a read-only view.

        Raises:
            SpelunkError: If the handle is nil or not a pointer/holder
        """
        kind = self.kind
        value = self._getter()
        if kind not in (Kind.POINTER, Kind.HOLDER):
            raise SpelunkError(f"cannot resolve a {kind.value} value")
        if value is None:
            raise SpelunkError(f"cannot resolve a nil {kind.value}")
        if kind is Kind.HOLDER:
            return ValueHandle(_constant(value))
        return ValueHandle(lambda: value.value,
                           lambda new: setattr(value, "value", new),
                           addressable=True)

    def fields(self) -> Iterator[Tuple[FieldDescriptor, 'ValueHandle']]:
        """Iterate a record's fields in declaration order."""
        record = self._getter()
        if not is_record(record):
            raise SpelunkError(f"cannot list fields of a {self.kind.value} value")
        writable = self._addressable and not is_frozen(type(record))
        for descriptor in describe(type(record)):
            yield descriptor, _field_handle(record, descriptor, writable)

    def elements(self) -> Iterator[Tuple[int, 'ValueHandle']]:
        """Iterate a sequence or tuple by index."""
        items = self._getter()
        if isinstance(items, tuple):
            for index, item in enumerate(items):
                yield index, ValueHandle(_constant(item), addressable=self._addressable)
            return
        if not isinstance(items, MutableSequence):
            raise SpelunkError(f"cannot list elements of a {self.kind.value} value")
        for index in range(len(items)):
            yield index, _element_handle(items, index)

    def entries(self) -> Iterator[Tuple[Any, 'ValueHandle']]:
        """Iterate a mapping's entries as read-only views."""
        mapping = self._getter()
        if not isinstance(mapping, Mapping):
            raise SpelunkError(f"cannot list entries of a {self.kind.value} value")
        for key, item in list(mapping.items()):
            yield key, ValueHandle(_constant(item))

    def __repr__(self) -> str:
        return (f"ValueHandle(kind={self.kind.value}, value={self._getter()!r}, "
                f"settable={self.settable})")


def _field_handle(record: Any, descriptor: FieldDescriptor, writable: bool) -> ValueHandle:
    name = descriptor.name
    setter = (lambda new: setattr(record, name, new)) if writable else None
    return ValueHandle(lambda: getattr(record, name, None), setter,
                       declared=descriptor.type, addressable=writable)


def _element_handle(items: MutableSequence, index: int) -> ValueHandle:
    return ValueHandle(lambda: items[index],
                       lambda new: items.__setitem__(index, new),
                       addressable=True)
