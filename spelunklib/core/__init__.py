"""Core components of SpelunkLib.

This module contains the traversal engine and the pieces it is built from:
value handles, field descriptors, annotation parsing, paths and the handler
registry.
"""

from .directives import Directive, parse_directive, parse_directives
from .fields import FieldDescriptor, describe, tagged
from .handle import Kind, Ref, ValueHandle, classify
from .path import index_segment, join_path, key_segment
from .registry import Handler, HandlerRegistry
from .spelunker import Spelunker

__all__ = [
    "Directive",
    "parse_directive",
    "parse_directives",
    "FieldDescriptor",
    "describe",
    "tagged",
    "Kind",
    "Ref",
    "ValueHandle",
    "classify",
    "index_segment",
    "join_path",
    "key_segment",
    "Handler",
    "HandlerRegistry",
    "Spelunker",
]
