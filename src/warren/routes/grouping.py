"""Group page nodes by the role of their file.

Generators emit separate import records for layouts, error boundaries,
loading fallbacks and pages.  The role comes from the file's base name:

    dashboard/layout.tsx   -> layouts
    dashboard/error.tsx    -> errors
    dashboard/loading.tsx  -> loadings
    dashboard/index.tsx    -> pages
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from warren.routes.nodes import RouteNode


@dataclass(frozen=True, slots=True)
class NodeGroups:
    """Page-file nodes split by role.  Synthetic nodes are never included."""

    layouts: tuple[RouteNode, ...] = ()
    errors: tuple[RouteNode, ...] = ()
    loadings: tuple[RouteNode, ...] = ()
    pages: tuple[RouteNode, ...] = ()


def file_role(glob: str) -> str:
    """Return ``layout``, ``error``, ``loading`` or ``page`` for a page glob."""
    stem = PurePosixPath(glob).stem
    if stem in ("layout", "error", "loading"):
        return stem
    return "page"


def group_nodes(nodes: Iterable[RouteNode]) -> NodeGroups:
    """Split page-file nodes into layouts, errors, loadings and pages."""
    buckets: dict[str, list[RouteNode]] = {
        "layout": [],
        "error": [],
        "loading": [],
        "page": [],
    }
    for node in nodes:
        if node.is_builtin or node.is_reuse:
            continue
        buckets[file_role(node.relative_glob)].append(node)

    return NodeGroups(
        layouts=tuple(buckets["layout"]),
        errors=tuple(buckets["error"]),
        loadings=tuple(buckets["loading"]),
        pages=tuple(buckets["page"]),
    )
