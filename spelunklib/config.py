"""Configuration system for SpelunkLib.

This module defines how users tell the engine where annotations live on
their dataclass fields and how annotation strings are split into
directives.
"""

from dataclasses import dataclass
from typing import List


DEFAULT_TAG = "spelunk"
DEFAULT_SEPARATOR = ","
DEFAULT_ARGUMENT_SEPARATOR = ":"


@dataclass
class SpelunkConfig:
    """Complete configuration for a Spelunker.

    The tag names the key in ``dataclasses.field(metadata=...)`` that holds
    a field's annotation string. The separators control how that string is
    split: ``separator`` divides it into directives, and
    ``argument_separator`` divides each directive into a handler key and an
    argument payload.

    Example:
        >>> config = SpelunkConfig.for_tag("validate")
        >>> config.validate()
        []
    """

    tag: str = DEFAULT_TAG
    separator: str = DEFAULT_SEPARATOR                    # Between directives
    argument_separator: str = DEFAULT_ARGUMENT_SEPARATOR  # Between key and argument

    @classmethod
    def for_tag(cls, tag: str) -> 'SpelunkConfig':
        """Create a config that reads annotations from another tag.

        Args:
            tag: Metadata key to read annotations from

        Returns:
            SpelunkConfig with default separators
        """
        return cls(tag=tag)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.tag, str) or not self.tag:
            errors.append("tag must be a non-empty string")

        if not isinstance(self.separator, str) or not self.separator:
            errors.append("separator must be a non-empty string")

        if not isinstance(self.argument_separator, str) or not self.argument_separator:
            errors.append("argument_separator must be a non-empty string")

        if self.separator and self.separator == self.argument_separator:
            errors.append("separator and argument_separator must differ")

        return errors
