"""Route generator — runs regeneration cycles.

One cycle:

    discover page files -> resolve nodes -> dedupe & order -> diff against
    the previous snapshot -> hand the result to the code-generation sink ->
    merge route metadata into the route backup ->
    persist the new snapshot

A cycle either completes or raises; the snapshot is only replaced after
the sink has consumed the result, so a failed cycle leaves the previous
snapshot in place for the next attempt.

Public entry points::

    warren.generate("my-app/")   # one cycle
    warren.watch("my-app/")      # cycle, then regenerate on page add/delete
"""

from __future__ import annotations

import asyncio
import sys
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from warren._errors import GenerationError
from warren.config_loader import load_config
from warren.content.differ import DiffResult, build_snapshot, diff_nodes
from warren.content.discovery import discover_files
from warren.content.snapshot import TempStore
from warren.observability.collector import RouteCollector
from warren.routes.conflicts import canonicalize
from warren.routes.grouping import NodeGroups, group_nodes
from warren.routes.layouts import LayoutEntry, resolve_layouts
from warren.routes.nodes import resolve_nodes

if TYPE_CHECKING:
    from collections.abc import Callable

    from warren.config import WarrenConfig
    from warren.routes.conflicts import RouteConflict
    from warren.routes.nodes import RouteNode


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Everything a code generator needs from one cycle.

    Attributes:
        nodes: Canonical route list (deduplicated, ordered).
        diff: Routes added and renamed since the previous cycle.
        conflicts: Naming conflicts found (losers are not in *nodes*).
        layouts: Configured layouts, default layout first.
        file_count: Number of page files discovered.
        duration_ms: Wall time of the cycle in milliseconds.

    """

    nodes: tuple[RouteNode, ...]
    diff: DiffResult = field(default_factory=DiffResult)
    conflicts: tuple[RouteConflict, ...] = ()
    layouts: tuple[LayoutEntry, ...] = ()
    file_count: int = 0
    duration_ms: float = 0.0

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(node.name for node in self.nodes)

    @property
    def groups(self) -> NodeGroups:
        """Page-file nodes split into layouts, errors, loadings and pages."""
        return group_nodes(self.nodes)

    def node(self, name: str) -> RouteNode | None:
        """Look up a node by route name."""
        for node in self.nodes:
            if node.name == name:
                return node
        return None


type GeneratedSink = Callable[[GenerationResult], object]


def route_backup_entries(nodes: tuple[RouteNode, ...]) -> dict[str, dict[str, Any]]:
    """Route backup records for every node that carries metadata."""
    return {
        node.name: {"path": node.route_path, "layout": node.layout, "meta": node.meta}
        for node in nodes
        if node.meta is not None
    }


class RouteGenerator:
    """Runs regeneration cycles for one project, one cycle at a time.

    Args:
        config: Project configuration (never mutated).
        collector: Diagnostics sink; a private one is created if omitted.
        on_generated: Code-generation sink called with each cycle's result
            before the snapshot is persisted.

    """

    def __init__(
        self,
        config: WarrenConfig,
        *,
        collector: RouteCollector | None = None,
        on_generated: GeneratedSink | None = None,
    ) -> None:
        self._config = config
        self._collector = collector if collector is not None else RouteCollector()
        self._on_generated = on_generated
        self._store = TempStore(config)
        self._lock = threading.Lock()
        self._last_result: GenerationResult | None = None

    @property
    def config(self) -> WarrenConfig:
        return self._config

    @property
    def collector(self) -> RouteCollector:
        return self._collector

    @property
    def store(self) -> TempStore:
        return self._store

    @property
    def last_result(self) -> GenerationResult | None:
        """Result of the most recent successful cycle."""
        return self._last_result

    def resolve(self) -> tuple[tuple[RouteNode, ...], tuple[RouteConflict, ...], int]:
        """Discover and resolve the canonical route list without diffing or persisting.

        Returns ``(nodes, conflicts, file_count)``.

        Raises:
            DiscoveryError: If a page file cannot be stat'd.

        """
        files = discover_files(self._config)
        nodes = resolve_nodes(files, self._config)
        resolution = canonicalize(nodes, self._collector)
        return resolution.nodes, resolution.conflicts, len(files)

    def generate(self) -> GenerationResult:
        """Run one full regeneration cycle.

        Raises:
            DiscoveryError: If a page file cannot be stat'd.  Nothing is
                generated or persisted.
            GenerationError: If the code-generation sink raises or route
                metadata is not JSON-serializable.  The snapshot is left
                untouched.

        """
        with self._lock:
            t0 = time.perf_counter()
            self._store.init()

            nodes, conflicts, file_count = self.resolve()
            diff = diff_nodes(nodes, self._store.read_snapshot(), self._collector)

            result = GenerationResult(
                nodes=nodes,
                diff=diff,
                conflicts=conflicts,
                layouts=resolve_layouts(self._config),
                file_count=file_count,
                duration_ms=(time.perf_counter() - t0) * 1000,
            )

            if self._on_generated is not None:
                try:
                    self._on_generated(result)
                except Exception as exc:
                    msg = f"Code generation failed: {exc}"
                    raise GenerationError(msg) from exc

            routes = route_backup_entries(nodes)
            if routes:
                try:
                    self._store.update_route_backup(routes)
                except (TypeError, ValueError) as exc:
                    msg = f"Route metadata is not JSON-serializable: {exc}"
                    raise GenerationError(msg) from exc

            self._store.write_snapshot(build_snapshot(nodes))
            self._collector.record_resolved(
                total=len(nodes),
                files=file_count,
                conflicts=len(conflicts),
                duration_ms=result.duration_ms,
            )
            self._last_result = result
            return result


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def generate(root: str | Path = ".", **kwargs: object) -> GenerationResult:
    """Run one regeneration cycle for the project at *root*.

    Args:
        root: Project root directory.
        **kwargs: Override WarrenConfig fields.

    """
    from warren.report import print_summary

    config = load_config(Path(root), **kwargs)
    result = RouteGenerator(config).generate()
    print_summary(result, config, mode="generate")
    return result


def watch(root: str | Path = ".", **kwargs: object) -> None:
    """Generate once, then regenerate whenever a page file is added or deleted.

    Runs until interrupted (Ctrl+C).

    Args:
        root: Project root directory.
        **kwargs: Override WarrenConfig fields.

    """
    from warren.content.watcher import PageWatcher
    from warren.report import print_summary

    config = load_config(Path(root), **kwargs)

    def _report(result: GenerationResult) -> None:
        print_summary(result, config, mode="watch")

    generator = RouteGenerator(config, on_generated=_report)
    generator.generate()

    if not config.watch_file:
        print("  File watching disabled (watch_file = false).", file=sys.stderr)
        return

    try:
        asyncio.run(PageWatcher(generator).run())
    except KeyboardInterrupt:
        pass
