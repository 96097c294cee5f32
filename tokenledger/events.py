from typing import Any, NamedTuple, Optional


class Transfer(NamedTuple):
    """Balance movement. ``sender`` is None for a mint, ``receiver`` is None for a burn."""
    sender: Optional[Any]
    receiver: Optional[Any]
    value: int


class Approval(NamedTuple):
    """New absolute allowance of ``spender`` over the funds of ``owner``."""
    owner: Any
    spender: Any
    value: int


class EventLog:
    def __init__(self):
        self._events = []

    def emit(self, event):
        self._events.append(event)

    def drain(self):
        events = self._events
        self._events = []
        return events

    def clear(self):
        self._events = []

    def __iter__(self):
        return iter(list(self._events))

    def __len__(self):
        return len(self._events)
