"""SpelunkLib - Annotation-driven field traversal for Python data.

SpelunkLib walks nested dataclasses, lists, tuples, mappings and
polymorphic fields, reads the annotation attached to every field it finds,
and calls the handlers registered for the keys in that annotation. Declare
validation, sanitization, redaction or default-filling once on the field;
run it over data of any depth.

    from dataclasses import dataclass
    from spelunklib import Spelunker, tagged

    @dataclass
    class Person:
        name: str = tagged("trim,capitalize", default="")

    Spelunker().set_handler("trim", trim).set_handler("capitalize", capitalize).spelunk(person)
"""

__version__ = "0.1.0"

from .config import DEFAULT_TAG, SpelunkConfig
from .errors import ConfigurationError, NotSettableError, SpelunkError
from .core import (
    Directive,
    FieldDescriptor,
    Handler,
    HandlerRegistry,
    Kind,
    Ref,
    Spelunker,
    ValueHandle,
    describe,
    join_path,
    parse_directive,
    parse_directives,
    tagged,
)
from .handlers import zeroer, zero_value
from .api import FieldVisit, collect_fields, spelunk, zero_fields

__all__ = [
    "__version__",
    # Config
    "DEFAULT_TAG",
    "SpelunkConfig",
    # Errors
    "SpelunkError",
    "NotSettableError",
    "ConfigurationError",
    # Core
    "Spelunker",
    "HandlerRegistry",
    "Handler",
    "ValueHandle",
    "Kind",
    "Ref",
    "FieldDescriptor",
    "describe",
    "tagged",
    "Directive",
    "parse_directive",
    "parse_directives",
    "join_path",
    # Handlers
    "zeroer",
    "zero_value",
    # API
    "FieldVisit",
    "spelunk",
    "collect_fields",
    "zero_fields",
]
