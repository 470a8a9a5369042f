"""The zero-value handler.

``zeroer`` resets a field to the zero value of its kind. It doubles as the
reference for how handlers should treat handles: resolve one level of
indirection, check settability, then write.
"""

import dataclasses
import numbers
import typing
from enum import Enum
from typing import Any, Optional, Set

from ..core.fields import describe, is_optional, is_polymorphic
from ..core.handle import Kind, ValueHandle, classify
from ..errors import NotSettableError

_SCALAR_TYPES = (str, bytes, bytearray, bool, int, float, complex)


def zero_value(value: Any, declared: Any = None) -> Any:
    """Return the zero value for what a slot currently holds.

    Pointers, holders, optional slots, callables, enums and unknown scalar
    types zero to None. Strings, numbers and bytes zero to their empty
    instance, lists/dicts/sets to an empty container of the same type,
    tuples to a tuple of per-element zeros, and records to a new record of
    the same dataclass with every field zeroed.

    Args:
        value: Current value of the slot
        declared: Declared type of the slot, if known

    Returns:
        The zero value
    """
    if declared is not None and is_optional(declared):
        return None

    kind = classify(value, declared)
    if kind in (Kind.INVALID, Kind.POINTER, Kind.HOLDER):
        return None
    if kind is Kind.RECORD:
        return zero_record(type(value))
    if kind is Kind.ARRAY:
        items = [zero_value(item) for item in value]
        make = getattr(type(value), "_make", None)
        return make(items) if make is not None else type(value)(items)
    if kind in (Kind.SEQUENCE, Kind.MAPPING):
        return type(value)()
    if isinstance(value, Enum):
        return None
    if isinstance(value, (str, bytes, bytearray, numbers.Number, set, frozenset)):
        return type(value)()
    return None


def zero_for_type(tp: Any, _building: Optional[Set[type]] = None) -> Any:
    """Return the zero value for a declared type (no instance needed).

    A record type already being built further up (a self-referencing
    dataclass) zeroes to None.
    """
    if tp is None or is_optional(tp) or is_polymorphic(tp):
        return None
    if dataclasses.is_dataclass(tp) and isinstance(tp, type):
        if _building is not None and tp in _building:
            return None
        return zero_record(tp, _building)

    origin = typing.get_origin(tp)
    if origin is tuple:
        args = typing.get_args(tp)
        if not args or (len(args) == 2 and args[1] is Ellipsis) or args == ((),):
            return ()
        return tuple(zero_for_type(arg, _building) for arg in args)
    if origin is not None:
        tp = origin

    if isinstance(tp, type):
        if issubclass(tp, Enum):
            return None
        if issubclass(tp, _SCALAR_TYPES) or issubclass(tp, (list, dict, set, frozenset, tuple)):
            return tp()
    return None


def zero_record(cls: type, _building: Optional[Set[type]] = None) -> Any:
    """Build a record of a dataclass with every field set to its zero value.

    ``__init__`` and ``__post_init__`` are not run, so this works for
    dataclasses with required fields and for frozen dataclasses.
    """
    building = set(_building or ()) | {cls}
    record = object.__new__(cls)
    for descriptor in describe(cls):
        object.__setattr__(record, descriptor.name, zero_for_type(descriptor.type, building))
    return record


def zeroer(name: str, path: str, directive: str, handle: ValueHandle) -> None:
    """Handler that sets a value to its zero value.

    A non-nil pointer is resolved first, so ``Ref("secret")`` becomes
    ``Ref("")`` rather than None.

    Raises:
        NotSettableError: If the value cannot be written
    """
    if handle.kind is Kind.POINTER and not handle.is_nil():
        handle = handle.elem()
    if not handle.settable:
        raise NotSettableError()
    handle.set(zero_value(handle.value, handle.declared_type))
