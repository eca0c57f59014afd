"""Stat differ — classify routes as added or renamed across cycles.

Compares the current canonical route list against the snapshot persisted
by the previous cycle.  The comparison key is the page file's identity
(inode), not its path, so moving or renaming a page is told apart from
deleting one page and creating an unrelated one.

For every node backed by a real file:

    name unknown and identity unknown        -> added
    identity known under a different name    -> renamed (carries old name)
    otherwise                                -> unchanged

Builtin and reuse nodes are never diffed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from warren.content.snapshot import SnapshotEntry

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from warren.content.snapshot import RouteStatSnapshot
    from warren.observability.collector import RouteCollector
    from warren.routes.nodes import RouteNode


@dataclass(frozen=True, slots=True)
class RenamedRoute:
    """A route whose page file was seen before under another name.

    Attributes:
        node: The node as resolved in the current cycle.
        old_name: The name the same file had in the previous cycle.

    """

    node: RouteNode
    old_name: str


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Routes added and renamed since the previous cycle."""

    added: tuple[RouteNode, ...] = ()
    renamed: tuple[RenamedRoute, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.renamed


def diff_nodes(
    nodes: Iterable[RouteNode],
    snapshot: Mapping[str, SnapshotEntry],
    collector: RouteCollector | None = None,
) -> DiffResult:
    """Classify *nodes* against the previous cycle's *snapshot*.

    Nodes keep their input order within ``added`` and ``renamed``.  The
    result is recorded on *collector* when given, even when empty.

    """
    # identity -> first name that held it, in snapshot order
    names_by_identity: dict[int, str] = {}
    for name, entry in snapshot.items():
        names_by_identity.setdefault(entry.identity, name)

    added: list[RouteNode] = []
    renamed: list[RenamedRoute] = []

    for node in nodes:
        if node.is_synthetic:
            continue

        old_name = names_by_identity.get(node.identity)

        if old_name is None:
            if node.name not in snapshot:
                added.append(node)
            continue

        if old_name != node.name:
            renamed.append(RenamedRoute(node=node, old_name=old_name))

    result = DiffResult(added=tuple(added), renamed=tuple(renamed))
    if collector is not None:
        collector.record_diff(result)
    return result


def build_snapshot(nodes: Iterable[RouteNode]) -> RouteStatSnapshot:
    """Snapshot of the identities behind *nodes*, excluding synthetic nodes."""
    return {
        node.name: SnapshotEntry(absolute_path=node.absolute_path, identity=node.identity)
        for node in nodes
        if not node.is_synthetic
    }
