import threading
from typing import Any, Callable

Listener = Callable[..., Any]


class EventEmitter:
    """Named-event publish/subscribe registry.

    Every subscriber of an event is called in subscription order. A `once`
    subscription is removed before its callback runs, so it fires at most
    one time even if the callback emits the same event again.
    """

    def __init__(self):
        self._listeners: dict[str, list[tuple[Listener, bool]]] = {}
        self._lock = threading.RLock()

    def on(self, event: str, listener: Listener) -> Listener:
        with self._lock:
            self._listeners.setdefault(event, []).append((listener, False))
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        with self._lock:
            self._listeners.setdefault(event, []).append((listener, True))
        return listener

    def off(self, event: str, listener: Listener) -> bool:
        """Remove the first subscription of `listener`. Returns False if there was none."""
        with self._lock:
            entries = self._listeners.get(event, [])
            for i, (fn, _) in enumerate(entries):
                if fn == listener:
                    del entries[i]
                    if not entries:
                        del self._listeners[event]
                    return True

        return False

    def listener_count(self, event: str) -> int:
        with self._lock:
            return len(self._listeners.get(event, []))

    def emit(self, event: str, *args) -> bool:
        with self._lock:
            entries = list(self._listeners.get(event, []))
            for entry in entries:
                if entry[1]:
                    self._listeners[event].remove(entry)
            if event in self._listeners and not self._listeners[event]:
                del self._listeners[event]

        for listener, _ in entries:
            listener(*args)

        return len(entries) > 0
