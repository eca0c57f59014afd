"""Route pipeline events — structured diagnostics for regeneration cycles.

Defines the event types recorded while resolving, deduplicating and
diffing routes, and while coalescing watch events.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Resolution events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RoutesResolved:
    """A regeneration cycle produced its canonical route list.

    Attributes:
        total: Number of routes in the canonical list.
        files: Number of page files discovered.
        conflicts: Number of conflicting names.
        duration_ms: Time spent on the cycle in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    total: int
    files: int
    conflicts: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ConflictDetected:
    """Several nodes resolved to the same route name.

    Attributes:
        name: The contested route name.
        path: Page glob of the node that was kept.
        dropped: Page globs (or route paths, for synthetic nodes) that were dropped.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    name: str
    path: str
    dropped: tuple[str, ...]
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Diff events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RoutesDiffed:
    """Current routes were compared against the persisted snapshot.

    Attributes:
        added: Names of newly added routes.
        renamed: ``(old_name, new_name)`` pairs for renamed routes.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    added: tuple[str, ...]
    renamed: tuple[tuple[str, str], ...]
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Watch events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RegenerationTriggered:
    """The change coalescer fired after a quiet window.

    Attributes:
        trigger_path: The most recently buffered path (the only one acted on).
        coalesced: How many distinct paths were buffered in the burst.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    trigger_path: str
    coalesced: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class WatchFailed:
    """A regeneration triggered by the watcher raised.

    Attributes:
        trigger_path: Path that triggered the regeneration.
        error: ``repr`` of the exception.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    trigger_path: str
    error: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type RouteEvent = (
    RoutesResolved
    | ConflictDetected
    | RoutesDiffed
    | RegenerationTriggered
    | WatchFailed
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
