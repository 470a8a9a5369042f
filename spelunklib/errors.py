"""Exception types raised by SpelunkLib.

Handlers are free to raise any exception they like; the engine never wraps
or swallows them. The types here cover the failures the library itself
reports.
"""


class SpelunkError(Exception):
    """Base class for all errors raised by SpelunkLib."""


class NotSettableError(SpelunkError):
    """Raised when a value is written through a handle that is not settable.

    Typical causes are values read out of a mapping entry, values held by a
    polymorphic field, elements of a tuple, and fields of a frozen dataclass.
    Wrap such values in a ``Ref`` to make them writable.
    """

    def __init__(self, message: str = "cannot set"):
        super().__init__(message)


class ConfigurationError(SpelunkError, ValueError):
    """Raised when a Spelunker is given an invalid configuration."""

    def __init__(self, problems):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))
