"""Route collector — the diagnostics sink injected into the route pipeline.

Conflict resolution, the diff engine and the change coalescer all report
through a ``RouteCollector`` instead of printing.  The collector turns
their domain objects into frozen events and stores them in an
``EventLog``.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from warren.observability.events import (
    ConflictDetected,
    RegenerationTriggered,
    RoutesDiffed,
    RoutesResolved,
    WatchFailed,
    now_ns,
)
from warren.observability.log import EventLog

if TYPE_CHECKING:
    from warren.content.differ import DiffResult
    from warren.routes.conflicts import RouteConflict
    from warren.routes.nodes import RouteNode


def _describe(node: RouteNode) -> str:
    """Page glob for file nodes, route path for synthetic ones."""
    return node.relative_glob or node.route_path


class RouteCollector:
    """Records route pipeline diagnostics.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Resolution -----

    def record_resolved(
        self,
        *,
        total: int,
        files: int,
        conflicts: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record the outcome of a completed cycle."""
        self._log.append(
            RoutesResolved(
                total=total,
                files=files,
                conflicts=conflicts,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_conflict(self, conflict: RouteConflict) -> None:
        """Record a naming conflict and which nodes lost it."""
        self._log.append(
            ConflictDetected(
                name=conflict.name,
                path=_describe(conflict.kept),
                dropped=tuple(_describe(node) for node in conflict.dropped),
                timestamp_ns=now_ns(),
            )
        )

    # ----- Diff -----

    def record_diff(self, diff: DiffResult) -> None:
        """Record the added and renamed routes of a cycle."""
        self._log.append(
            RoutesDiffed(
                added=tuple(node.name for node in diff.added),
                renamed=tuple((item.old_name, item.node.name) for item in diff.renamed),
                timestamp_ns=now_ns(),
            )
        )

    # ----- Watch -----

    def record_trigger(self, trigger_path: str, *, coalesced: int = 1) -> None:
        """Record a coalesced regeneration trigger."""
        self._log.append(
            RegenerationTriggered(
                trigger_path=trigger_path,
                coalesced=coalesced,
                timestamp_ns=now_ns(),
            )
        )

    def record_watch_failure(self, trigger_path: str, error: BaseException) -> None:
        """Record a regeneration that raised inside the watch loop."""
        self._log.append(
            WatchFailed(
                trigger_path=trigger_path,
                error=repr(error),
                timestamp_ns=now_ns(),
            )
        )
