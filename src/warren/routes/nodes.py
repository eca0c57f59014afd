"""Node resolver — build route nodes from discovered page files.

Each page file becomes one ``RouteNode``.  Two families of synthetic nodes
are added on top:

- **builtin** — ``Root`` (``/``) and ``NotFound`` (``*``), always present;
- **reuse** — one per configured reuse route path, rendered by a shared
  placeholder component.

Synthetic nodes are not backed by a file and carry ``NO_FILE_IDENTITY``.

Derived fields (``name``, ``component``, ``import_name``, ``is_lazy``,
``layout``, ``meta``) are computed once, after the route path is fully
normalized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from warren.routes.naming import NOT_FOUND_ROUTE_NAME, ROOT_ROUTE_NAME, import_name
from warren.routes.translator import glob_to_route_path, translate_path

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from warren._types import ParamKind
    from warren.config import WarrenConfig

NO_FILE_IDENTITY = -99

BUILTIN_ROUTES: dict[str, str] = {
    ROOT_ROUTE_NAME: "/",
    NOT_FOUND_ROUTE_NAME: "*",
}


@dataclass(frozen=True, slots=True)
class RouteSourceFile:
    """One discovered page file.

    Attributes:
        source_dir: Configured page directory the file was found under.
        relative_glob: POSIX path relative to *source_dir*.
        absolute_path: Normalized absolute POSIX path.
        import_specifier: Alias-rewritten, extension-stripped import path.
        identity: Inode number, stable across renames.

    """

    source_dir: str
    relative_glob: str
    absolute_path: str
    import_specifier: str
    identity: int


# Stand-in source for nodes without a page file
SYNTHETIC_SOURCE = RouteSourceFile(
    source_dir="",
    relative_glob="",
    absolute_path="",
    import_specifier="",
    identity=NO_FILE_IDENTITY,
)


@dataclass(frozen=True, slots=True)
class RouteNode:
    """A resolved, named, parameterized route (real or synthetic).

    Attributes:
        source: The page file behind this route (``SYNTHETIC_SOURCE`` if none).
        route_path: Normalized route pattern (e.g., ``/about/detail/:id``).
        origin_path: Route path before group removal and param rewriting.
        name: Unique identifier derived from the translated route path
            (before any ``route_path`` override).
        component: Component key; equal to *name* for page routes.
        import_name: *name* as an importable identifier.
        params: Parameter name -> kind, in path order.
        layout_group: Label of the ``(group)`` segment, or *None*.
        is_builtin: True for ``Root`` and ``NotFound``.
        is_reuse: True for configured reuse routes.
        is_lazy: Whether generated code should import the page lazily.
        layout: Name of the layout wrapping the route (empty for builtins).
        redirect: Path the route redirects to (only set on ``Root``).
        meta: Route metadata from the configured hook, or *None*.

    """

    source: RouteSourceFile
    route_path: str
    origin_path: str
    name: str
    component: str
    import_name: str = ""
    params: dict[str, ParamKind] = field(default_factory=dict)
    layout_group: str | None = None
    is_builtin: bool = False
    is_reuse: bool = False
    is_lazy: bool = False
    layout: str = ""
    redirect: str | None = None
    meta: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.is_builtin and self.is_reuse:
            msg = f"Route {self.name!r} cannot be both builtin and reuse"
            raise ValueError(msg)

    @property
    def identity(self) -> int:
        return self.source.identity

    @property
    def relative_glob(self) -> str:
        return self.source.relative_glob

    @property
    def absolute_path(self) -> str:
        return self.source.absolute_path

    @property
    def import_specifier(self) -> str:
        return self.source.import_specifier

    @property
    def is_synthetic(self) -> bool:
        """True if no page file backs this node."""
        return self.source.identity == NO_FILE_IDENTITY

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view of the node for code generators."""
        return {
            "name": self.name,
            "path": self.route_path,
            "origin_path": self.origin_path,
            "component": self.component,
            "import_name": self.import_name,
            "import_path": self.import_specifier,
            "params": dict(self.params),
            "group": self.layout_group,
            "is_builtin": self.is_builtin,
            "is_reuse": self.is_reuse,
            "is_lazy": self.is_lazy,
            "layout": self.layout,
            "redirect": self.redirect,
            "meta": self.meta,
            "glob": self.relative_glob,
            "file_path": self.absolute_path,
            "inode": self.identity,
        }


def resolve_node(source: RouteSourceFile, config: WarrenConfig) -> RouteNode:
    """Resolve a single page file into a route node."""
    raw_path = glob_to_route_path(source.relative_glob, config.page_extensions)
    translated = translate_path(raw_path)
    name = config.derive_name(translated.route_path)

    return RouteNode(
        source=source,
        route_path=config.derive_route_path(translated.route_path),
        origin_path=translated.origin_path,
        name=name,
        component=name,
        import_name=import_name(name),
        params=translated.params,
        layout_group=translated.layout_group,
        is_lazy=config.route_lazy(name),
        layout=config.derive_layout(name),
        meta=config.derive_meta(name),
    )


def create_builtin_nodes(config: WarrenConfig) -> list[RouteNode]:
    """Create the ``Root`` and ``NotFound`` nodes."""
    components = {
        ROOT_ROUTE_NAME: "",
        NOT_FOUND_ROUTE_NAME: config.not_found_component,
    }
    return [
        RouteNode(
            source=SYNTHETIC_SOURCE,
            route_path=path,
            origin_path=path,
            name=name,
            component=components[name],
            is_builtin=True,
            redirect=config.root_redirect if name == ROOT_ROUTE_NAME else None,
        )
        for name, path in BUILTIN_ROUTES.items()
    ]


def resolve_reuse_nodes(config: WarrenConfig) -> list[RouteNode]:
    """Create one placeholder-backed node per configured reuse route."""
    nodes: list[RouteNode] = []
    for path in config.reuse_routes:
        route_path = path if path.startswith("/") else f"/{path}"
        translated = translate_path(route_path)
        name = config.derive_name(translated.route_path)
        nodes.append(RouteNode(
            source=SYNTHETIC_SOURCE,
            route_path=translated.route_path,
            origin_path=translated.origin_path,
            name=name,
            component=config.default_reuse_component,
            import_name=import_name(name),
            params=translated.params,
            layout_group=translated.layout_group,
            is_reuse=True,
            layout=config.derive_layout(name),
            meta=config.derive_meta(name),
        ))
    return nodes


def resolve_nodes(
    sources: Sequence[RouteSourceFile] | Iterable[RouteSourceFile],
    config: WarrenConfig,
) -> list[RouteNode]:
    """Resolve every page file plus the builtin and reuse nodes.

    The result is not yet deduplicated or ordered.  Builtin nodes come
    first, then page nodes in discovery order, then reuse nodes; conflict
    resolution keeps the first node per name, so that order decides which
    node survives a name clash.

    """
    page_nodes = [resolve_node(source, config) for source in sources]
    return [*create_builtin_nodes(config), *page_nodes, *resolve_reuse_nodes(config)]
