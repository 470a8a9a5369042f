"""Field descriptors for dataclass records.

A FieldDescriptor is static metadata about one member of a record type: its
name, its declared type and the annotation strings attached to it through
``dataclasses.field(metadata=...)``. Descriptors are derived from the type,
never from an instance, and are cached per class.
"""

import dataclasses
import logging
import types
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Optional, Tuple, Union

from ..config import DEFAULT_TAG

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)
_UNION_TYPES = tuple(t for t in (Union, getattr(types, "UnionType", None)) if t is not None)


@dataclass(frozen=True)
class FieldDescriptor:
    """Static description of one dataclass field.

    Attributes:
        name: Declared field name
        type: Resolved declared type, or None if it could not be resolved
        metadata: The field's metadata mapping
    """

    name: str
    type: Any = None
    metadata: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def annotation(self, tag: str) -> str:
        """Return the raw annotation string for a tag ("" if absent)."""
        value = self.metadata.get(tag)
        if value is None:
            return ""
        return str(value)


def is_record(value: Any) -> bool:
    """Check if a value is a dataclass instance (not a dataclass type)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_frozen(cls: type) -> bool:
    params = getattr(cls, "__dataclass_params__", None)
    return bool(getattr(params, "frozen", False))


def _union_members(tp: Any) -> Optional[Tuple[Any, ...]]:
    if typing.get_origin(tp) in _UNION_TYPES:
        return typing.get_args(tp)
    return None


def is_optional(tp: Any) -> bool:
    """Check if a declared type admits None (``Optional[X]`` or ``X | None``)."""
    members = _union_members(tp)
    return members is not None and _NONE_TYPE in members


def is_polymorphic(tp: Any) -> bool:
    """Check if a declared type is a polymorphic holder.

    ``Any``, ``object`` and unions with more than one non-None member can
    hold values of different kinds, so the engine treats such fields as
    holders that must be resolved before they are walked.
    """
    if tp is Any or tp is object:
        return True
    members = _union_members(tp)
    if members is None:
        return False
    concrete = [member for member in members if member is not _NONE_TYPE]
    return len(concrete) > 1 or any(is_polymorphic(member) for member in concrete)


def _type_hints(cls: type) -> typing.Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as e:
        # Forward references to names outside the module's globals
        logger.debug("Could not resolve type hints for %s: %s", cls.__qualname__, e)
        return {}


@lru_cache(maxsize=None)
def describe(cls: type) -> Tuple[FieldDescriptor, ...]:
    """Return descriptors for every field of a dataclass, in declaration order.

    Args:
        cls: A dataclass type

    Returns:
        Tuple of FieldDescriptor
    """
    hints = _type_hints(cls)
    descriptors = []
    for f in dataclasses.fields(cls):
        declared = hints.get(f.name)
        if declared is None and not isinstance(f.type, str):
            declared = f.type
        descriptors.append(FieldDescriptor(name=f.name, type=declared, metadata=f.metadata))
    return tuple(descriptors)


def tagged(annotation: str, tag: str = DEFAULT_TAG, **kwargs: Any) -> Any:
    """Build a ``dataclasses.field`` carrying an annotation.

    Example:
        >>> @dataclass
        ... class Person:
        ...     name: str = tagged("trim,capitalize", default="")

    Args:
        annotation: Annotation string, e.g. ``"trim,capitalize"``
        tag: Metadata key to store it under
        **kwargs: Passed through to ``dataclasses.field``

    Returns:
        A dataclass field definition
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[tag] = annotation
    return dataclasses.field(metadata=metadata, **kwargs)
