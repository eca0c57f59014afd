"""Conflict resolver & orderer — deduplicate by name, then impose canonical order.

Two nodes with the same name cannot both be emitted.  The first node seen
per name is kept and the rest are reported as a ``RouteConflict``.  Which
node is "first" follows the resolver's output order (builtins, then page
files sorted by page directory and relative path, then reuse routes), so
conflict outcomes are reproducible across machines.

Canonical order:

    Root, NotFound, then every other name by root-locale collation
    (``collation_key``): case-insensitive first, lowercase before uppercase
    on ties.  The key does not depend on the host locale.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import TYPE_CHECKING

from warren.routes.naming import NOT_FOUND_ROUTE_NAME, ROOT_ROUTE_NAME, collation_key

if TYPE_CHECKING:
    from collections.abc import Iterable

    from warren.observability.collector import RouteCollector
    from warren.routes.nodes import RouteNode


@dataclass(frozen=True, slots=True)
class RouteConflict:
    """A group of nodes that resolved to the same name.

    Attributes:
        name: The contested route name.
        kept: The node that survives (first seen).
        dropped: The nodes removed from the output, in discovery order.

    """

    name: str
    kept: RouteNode
    dropped: tuple[RouteNode, ...]

    @property
    def nodes(self) -> tuple[RouteNode, ...]:
        """Every node in the conflict, kept node first."""
        return (self.kept, *self.dropped)


@dataclass(frozen=True, slots=True)
class ConflictResolution:
    """Deduplicated nodes plus the conflicts found while deduplicating."""

    nodes: tuple[RouteNode, ...]
    conflicts: tuple[RouteConflict, ...]


def resolve_conflicts(
    nodes: Iterable[RouteNode],
    collector: RouteCollector | None = None,
) -> ConflictResolution:
    """Keep the first node per name and report the rest.

    Groups preserve first-seen order.  Conflicts are never fatal; each one
    is recorded on *collector* when given.

    """
    groups: dict[str, list[RouteNode]] = {}
    for node in nodes:
        groups.setdefault(node.name, []).append(node)

    kept: list[RouteNode] = []
    conflicts: list[RouteConflict] = []

    for name, items in groups.items():
        kept.append(items[0])
        if len(items) > 1:
            conflict = RouteConflict(name=name, kept=items[0], dropped=tuple(items[1:]))
            conflicts.append(conflict)
            if collector is not None:
                collector.record_conflict(conflict)

    return ConflictResolution(nodes=tuple(kept), conflicts=tuple(conflicts))


def compare_names(a: str, b: str) -> int:
    """Three-way comparison implementing the canonical route order."""
    if a == b:
        return 0
    if a == ROOT_ROUTE_NAME:
        return -1
    if b == ROOT_ROUTE_NAME:
        return 1
    if a == NOT_FOUND_ROUTE_NAME:
        return -1
    if b == NOT_FOUND_ROUTE_NAME:
        return 1
    return -1 if collation_key(a) < collation_key(b) else 1


def order_nodes(nodes: Iterable[RouteNode]) -> tuple[RouteNode, ...]:
    """Sort nodes into canonical order (stable for equal names)."""
    return tuple(sorted(nodes, key=cmp_to_key(lambda x, y: compare_names(x.name, y.name))))


def canonicalize(
    nodes: Iterable[RouteNode],
    collector: RouteCollector | None = None,
) -> ConflictResolution:
    """Deduplicate and order *nodes* in one step."""
    resolution = resolve_conflicts(nodes, collector)
    return ConflictResolution(
        nodes=order_nodes(resolution.nodes),
        conflicts=resolution.conflicts,
    )
