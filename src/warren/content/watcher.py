"""Page watcher — regenerate routes when page files appear or disappear.

Two pieces:

- ``ChangeCoalescer`` — a two-state (idle / pending) debounce machine.  A
  burst of events inside the debounce window produces exactly one
  trigger, carrying only the most recently buffered path.
- ``PageWatcher`` — feeds added/deleted page files from ``watchfiles``
  into a coalescer whose trigger runs a regeneration cycle.

Modified files never trigger: file contents do not affect the route table.
"""

from __future__ import annotations

import asyncio
import inspect
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from watchfiles import Change

from warren.content.discovery import matches_page

if TYPE_CHECKING:
    from collections.abc import Callable

    from warren.config import WarrenConfig
    from warren.generator import RouteGenerator
    from warren.observability.collector import RouteCollector

type CoalescerState = Literal["idle", "pending"]


@dataclass(frozen=True, slots=True)
class PageChange:
    """A page file was added or deleted.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        page_dir: Configured page directory containing the file.
        glob: Path relative to *page_dir*.

    """

    path: Path
    kind: Literal["created", "deleted"]
    page_dir: str
    glob: str


_CHANGE_KIND_MAP: dict[Change, Literal["created", "deleted"]] = {
    Change.added: "created",
    Change.deleted: "deleted",
}


def page_change_for(change: Change, path: Path, config: WarrenConfig) -> PageChange | None:
    """Map a raw filesystem change to a PageChange.

    Returns None for modifications and for files that are not pages.

    """
    kind = _CHANGE_KIND_MAP.get(change)
    if kind is None:
        return None

    for page_dir, page_path in zip(config.page_dirs, config.page_paths, strict=True):
        try:
            rel = path.relative_to(page_path)
        except ValueError:
            continue
        glob = rel.as_posix()
        if not rel.parts or not matches_page(glob, config.page_include, config.page_exclude):
            return None
        return PageChange(path=path, kind=kind, page_dir=page_dir, glob=glob)

    return None


class ChangeCoalescer:
    """Debounces bursts of page events into single regeneration triggers.

    ``idle`` -> ``pending`` on the first event; every further event restarts
    the debounce timer.  When the window elapses without events the
    coalescer calls *on_trigger* once with the most recently buffered path,
    clears the buffer and returns to ``idle``.

    *on_trigger* may be a plain function or a coroutine function.  Errors
    it raises are reported to stderr and *collector* and never escape into
    the event loop.  Must be used from within a running asyncio loop.

    Args:
        debounce_ms: Quiet window in milliseconds.
        on_trigger: Called with the last buffered path.
        collector: Optional diagnostics sink.

    """

    __slots__ = (
        "_closed",
        "_collector",
        "_debounce_s",
        "_latest",
        "_on_trigger",
        "_pending",
        "_tasks",
        "_timer",
    )

    def __init__(
        self,
        debounce_ms: int,
        on_trigger: Callable[[str], Any],
        *,
        collector: RouteCollector | None = None,
    ) -> None:
        self._debounce_s = debounce_ms / 1000
        self._on_trigger = on_trigger
        self._collector = collector
        self._pending: set[str] = set()
        self._latest: str | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._closed = False

    @property
    def state(self) -> CoalescerState:
        return "pending" if self._timer is not None else "idle"

    @property
    def pending(self) -> frozenset[str]:
        """Paths buffered in the current burst."""
        return frozenset(self._pending)

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, path: str) -> None:
        """Buffer *path* and restart the debounce window.  Ignored after close."""
        if self._closed:
            return

        self._pending.add(path)
        self._latest = path

        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce_s, self._fire)

    def close(self) -> None:
        """Cancel any pending trigger.  No trigger fires after this returns."""
        self._closed = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._pending.clear()
        self._latest = None
        for task in self._tasks:
            task.cancel()

    def _fire(self) -> None:
        self._timer = None
        latest = self._latest
        coalesced = len(self._pending)
        self._pending.clear()
        self._latest = None

        if self._closed or latest is None:
            return

        if self._collector is not None:
            self._collector.record_trigger(latest, coalesced=coalesced)

        try:
            result = self._on_trigger(latest)
        except Exception as exc:
            self._report_failure(latest, exc)
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(lambda t: self._on_task_done(t, latest))

    def _on_task_done(self, task: asyncio.Task[Any], path: str) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if isinstance(exc, Exception):
            self._report_failure(path, exc)

    def _report_failure(self, path: str, exc: Exception) -> None:
        print(f"  Regeneration error ({path}): {exc}", file=sys.stderr)
        if self._collector is not None:
            self._collector.record_watch_failure(path, exc)


class PageWatcher:
    """Watches page directories and regenerates routes on add/delete.

    Uses ``watchfiles.awatch`` for filesystem monitoring.  Each coalesced
    trigger consults the exclude list for the triggering glob and then
    runs one regeneration cycle in a worker thread; the generator's own
    lock keeps cycles from overlapping.

    Args:
        generator: The generator whose cycle to run.

    """

    def __init__(self, generator: RouteGenerator) -> None:
        self._generator = generator
        self._config = generator.config
        self._coalescer: ChangeCoalescer | None = None

    @property
    def is_running(self) -> bool:
        return self._coalescer is not None and not self._coalescer.closed

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """Watch until *stop_event* is set (or the task is cancelled)."""
        from watchfiles import awatch

        watch_paths = [path for path in self._config.page_paths if path.is_dir()]
        if not watch_paths:
            print("  No page directories to watch.", file=sys.stderr)
            return

        coalescer = ChangeCoalescer(
            self._config.debounce_ms,
            self._regenerate,
            collector=self._generator.collector,
        )
        self._coalescer = coalescer
        try:
            async for raw_changes in awatch(*watch_paths, stop_event=stop_event, step=50):
                for change, path_str in raw_changes:
                    page_change = page_change_for(change, Path(path_str), self._config)
                    if page_change is not None:
                        coalescer.push(page_change.glob)
        finally:
            coalescer.close()

    async def _regenerate(self, glob: str) -> None:
        if self._generator.store.is_excluded(glob):
            return
        await asyncio.to_thread(self._generator.generate)
