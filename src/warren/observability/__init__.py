"""Route pipeline diagnostics — structured events instead of a global logger.

Every stage that has something to report (conflicts, diffs, watch
triggers, watch failures) takes an optional ``RouteCollector``.  Events
are frozen dataclasses with nanosecond timestamps stored in a bounded,
thread-safe ``EventLog``.

Quick Start:
    >>> from warren.observability import EventLog, RouteCollector
    >>> collector = RouteCollector(EventLog())
    >>> # Pass collector to RouteGenerator, resolve_conflicts, diff_nodes ...
    >>> collector.log.stats()["total"]
    0

"""

from warren.observability.collector import RouteCollector
from warren.observability.events import (
    ConflictDetected,
    RegenerationTriggered,
    RouteEvent,
    RoutesDiffed,
    RoutesResolved,
    WatchFailed,
    now_ns,
)
from warren.observability.log import EventLog

__all__ = [
    "ConflictDetected",
    "EventLog",
    "RegenerationTriggered",
    "RouteCollector",
    "RouteEvent",
    "RoutesDiffed",
    "RoutesResolved",
    "WatchFailed",
    "now_ns",
]
