"""Ready-made handlers."""

from .zero import zeroer, zero_value, zero_for_type, zero_record

__all__ = [
    "zeroer",
    "zero_value",
    "zero_for_type",
    "zero_record",
]
