"""Test fixtures for SpelunkLib consumers.

These helpers make it easy to assert on what a Spelunker dispatched
without writing throwaway handler closures in every test.
"""

from typing import Any, List, NamedTuple, Optional

from ..core.handle import ValueHandle


class HandlerCall(NamedTuple):
    name: str
    path: str
    directive: str
    value: Any


class RecordingHandler:
    """A handler that records every call it receives.

    Can be primed to raise for a specific field name, which is handy for
    checking that a traversal stops where it should.

    Example:
        recorder = RecordingHandler(fail_on="Age")
        spelunker.set_every_field_handler(recorder)
        with pytest.raises(RuntimeError):
            spelunker.spelunk(person)
        assert recorder.paths == ["Name", "Age"]
    """

    def __init__(self, fail_on: Optional[str] = None, error: Optional[Exception] = None):
        """Initialize the recorder.

        Args:
            fail_on: Field name to raise on (None = never raise)
            error: Exception to raise (defaults to RuntimeError(fail_on))
        """
        self.fail_on = fail_on
        self.error = error if error is not None else RuntimeError(fail_on)
        self.calls: List[HandlerCall] = []

    def __call__(self, name: str, path: str, directive: str, handle: ValueHandle) -> None:
        self.calls.append(HandlerCall(name, path, directive, handle.value))
        if self.fail_on is not None and name == self.fail_on:
            raise self.error

    @property
    def count(self) -> int:
        return len(self.calls)

    @property
    def paths(self) -> List[str]:
        return [call.path for call in self.calls]

    @property
    def names(self) -> List[str]:
        return [call.name for call in self.calls]

    @property
    def directives(self) -> List[str]:
        return [call.directive for call in self.calls]

    def reset(self) -> None:
        self.calls.clear()
