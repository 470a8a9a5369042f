"""Testing utilities for SpelunkLib consumers."""

from .fixtures import HandlerCall, RecordingHandler

__all__ = ['HandlerCall', 'RecordingHandler']
