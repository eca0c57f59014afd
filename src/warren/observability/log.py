"""Event log — bounded, thread-safe store of route pipeline events.

Keeps the most recent ``RouteEvent`` objects so that the CLI, tests and
editor integrations can inspect what the last cycles did without
capturing process output.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  The watcher
    thread and the caller's thread may record and read concurrently.

"""

import threading
from collections import deque
from typing import Any

from warren.observability.events import RouteEvent


def _mentions(event: RouteEvent, text: str) -> bool:
    """True if *text* occurs in any path or route name the event carries."""
    for attr in ("name", "path", "trigger_path"):
        value = getattr(event, attr, None)
        if isinstance(value, str) and text in value:
            return True
    for attr in ("added", "dropped"):
        values = getattr(event, attr, ())
        if any(text in value for value in values):
            return True
    renamed = getattr(event, "renamed", ())
    return any(text in old or text in new for old, new in renamed)


class EventLog:
    """Ring buffer of route events.

    Args:
        max_events: Maximum number of events to retain.  Older events are
            discarded first.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 1_000) -> None:
        self._max_events = max_events
        self._events: deque[RouteEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: RouteEvent) -> None:
        """Record an event."""
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        mentions: str | None = None,
        limit: int = 100,
    ) -> list[RouteEvent]:
        """Return matching events, most recent first.

        Args:
            event_type: Only events of this type.
            since_ns: Only events recorded at or after this timestamp.
            mentions: Only events naming this route or path (substring match).
            limit: Maximum number of events returned.

        """
        with self._lock:
            snapshot = list(self._events)

        results: list[RouteEvent] = []
        for event in reversed(snapshot):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if event.timestamp_ns < since_ns:
                continue
            if mentions is not None and not _mentions(event, mentions):
                continue
            results.append(event)
        return results

    def latest(self, event_type: type) -> RouteEvent | None:
        """The most recent event of *event_type*, or *None*."""
        found = self.query(event_type=event_type, limit=1)
        return found[0] if found else None

    def clear(self) -> int:
        """Drop all events and return how many there were."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Event counts by type."""
        with self._lock:
            names = [type(event).__name__ for event in self._events]

        by_type: dict[str, int] = {}
        for name in names:
            by_type[name] = by_type.get(name, 0) + 1
        return {"total": len(names), "max_events": self._max_events, "by_type": by_type}
