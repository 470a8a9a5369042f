"""Field path construction.

Paths identify a field's position relative to the root value, e.g.
``Owner.Pets[0].Name`` or ``Secrets["api"].Token``. They are for humans and
handlers only; the engine never parses them back.
"""

from typing import Any


def index_segment(index: int) -> str:
    """Segment for a sequence element: ``[3]``."""
    return f"[{index}]"


def key_segment(key: Any) -> str:
    """Segment for a mapping entry: ``["key"]``.

    Non-string keys are rendered with ``str()``.
    """
    return f'["{key}"]'


def join_path(parent: str, segment: str) -> str:
    """Combine a parent path with a child segment.

    Field names are joined with a dot, bracketed segments are appended
    directly. Root-level fields have no parent and get no prefix.

    Args:
        parent: Path of the enclosing value ("" at the root)
        segment: Field name, or a segment from index_segment/key_segment

    Returns:
        The child's path
    """
    if not parent:
        return segment
    if segment.startswith("["):
        return parent + segment
    return f"{parent}.{segment}"
