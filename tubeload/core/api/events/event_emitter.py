"""Upload event emitter (Observer Pattern)."""
from typing import Dict, List, Callable, Optional, FrozenSet


UPLOAD_EVENTS: FrozenSet[str] = frozenset({'status', 'progress', 'error'})


class EventEmitter:
    """
    Dispatches upload events to registered handlers.

    Handlers run synchronously on the emitting task, in registration order.
    An exception raised by a handler propagates to the emitter's caller.

    Events:
        status: UploadStatus transition
        progress: Integer percentage
        error: UploadError raised by the coordinator
    """

    def __init__(self, events: Optional[FrozenSet[str]] = UPLOAD_EVENTS):
        """
        Args:
            events: Allowed event names, or None to accept any name
        """
        self._allowed = events
        self._handlers: Dict[str, List[Callable]] = {}

    def _check(self, event: str) -> None:
        if self._allowed is not None and event not in self._allowed:
            raise ValueError(
                f"Unknown event {event!r}; expected one of {sorted(self._allowed)}"
            )

    def on(self, event: str, callback: Callable) -> 'EventEmitter':
        """Register a handler for an event."""
        self._check(event)
        self._handlers.setdefault(event, []).append(callback)
        return self

    def once(self, event: str, callback: Callable) -> 'EventEmitter':
        """Register a handler that is removed after its first call."""
        def wrapper(*args, **kwargs):
            self.off(event, wrapper)
            callback(*args, **kwargs)

        return self.on(event, wrapper)

    def emit(self, event: str, *args, **kwargs) -> None:
        # Snapshot so handlers may unsubscribe while being dispatched
        for callback in list(self._handlers.get(event, ())):
            callback(*args, **kwargs)

    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Remove one handler, or every handler of an event when callback is None."""
        if callback is None:
            self._handlers.pop(event, None)
        elif event in self._handlers:
            self._handlers[event] = [cb for cb in self._handlers[event] if cb != callback]
        return self

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))
