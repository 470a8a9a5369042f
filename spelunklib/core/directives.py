"""Annotation parsing.

An annotation such as ``"trim, min:18"`` is split into directives on the
directive separator, and each directive's handler key is the text before
the first argument separator. Arguments are never interpreted here; that is
left to the handler registered for the key.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..config import DEFAULT_ARGUMENT_SEPARATOR, DEFAULT_SEPARATOR


@dataclass(frozen=True)
class Directive:
    """One parsed unit of an annotation string.

    Attributes:
        key: Handler key (text before the first argument separator)
        text: The full trimmed directive, argument included. This is what
            handlers receive.
        argument: Text after the first argument separator, or None when the
            directive has no separator at all
    """

    key: str
    text: str
    argument: Optional[str] = None

    @property
    def has_argument(self) -> bool:
        return self.argument is not None


def parse_directive(text: str,
                    argument_separator: str = DEFAULT_ARGUMENT_SEPARATOR) -> Directive:
    """Parse a single directive.

    Handlers receive the directive text, so they can call this to recover
    their argument:

        >>> parse_directive("min:18").argument
        '18'

    Args:
        text: One directive, e.g. ``"min:18"``
        argument_separator: Delimiter between key and argument

    Returns:
        Directive for the trimmed text
    """
    text = text.strip()
    key, found, argument = text.partition(argument_separator)
    return Directive(key=key, text=text, argument=argument if found else None)


def parse_directives(raw: str,
                     separator: str = DEFAULT_SEPARATOR,
                     argument_separator: str = DEFAULT_ARGUMENT_SEPARATOR) -> List[Directive]:
    """Split an annotation string into its ordered directives.

    An empty annotation still produces exactly one directive whose key is
    the empty string, so every field gets at least one dispatch attempt.

    Args:
        raw: The annotation string (possibly empty)
        separator: Delimiter between directives
        argument_separator: Delimiter between key and argument

    Returns:
        Directives in left-to-right order
    """
    return [parse_directive(piece, argument_separator) for piece in raw.split(separator)]
