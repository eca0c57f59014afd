"""Route resolution — file-path conventions to a canonical route list.

Translates page globs into route paths and params, builds named route
nodes (plus builtin and reuse nodes), removes naming conflicts and sorts
the result into canonical order.

Public API::

    from warren.routes import canonicalize, resolve_nodes, translate_path

    translate_path("/list/edit_[id]_[userId]").route_path  # "/list/edit/:id/:userId"
    resolution = canonicalize(resolve_nodes(files, config))
"""

from warren.routes.conflicts import (
    ConflictResolution,
    RouteConflict,
    canonicalize,
    compare_names,
    order_nodes,
    resolve_conflicts,
)
from warren.routes.grouping import NodeGroups, group_nodes
from warren.routes.naming import collation_key, import_name, pascal_case, path_to_name
from warren.routes.nodes import (
    NO_FILE_IDENTITY,
    RouteNode,
    RouteSourceFile,
    resolve_node,
    resolve_nodes,
)
from warren.routes.translator import TranslatedPath, glob_to_route_path, translate_path

__all__ = [
    "NO_FILE_IDENTITY",
    "ConflictResolution",
    "NodeGroups",
    "RouteConflict",
    "RouteNode",
    "RouteSourceFile",
    "TranslatedPath",
    "canonicalize",
    "collation_key",
    "compare_names",
    "glob_to_route_path",
    "group_nodes",
    "import_name",
    "order_nodes",
    "pascal_case",
    "path_to_name",
    "resolve_conflicts",
    "resolve_node",
    "resolve_nodes",
    "translate_path",
]
