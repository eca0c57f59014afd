"""Warren configuration.

WarrenConfig is the central configuration object, frozen after creation.
Every stage of a regeneration cycle reads it; none of them mutate it.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from warren._errors import ConfigError
from warren._types import LazyFunc, LayoutFunc, MetaFunc, NameFunc, PathFunc
from warren.routes.naming import DEFAULT_SPLATS_ALIAS, pascal_case, path_to_name
from warren.tsconfig import resolve_alias_from_tsconfig


def _default_layouts() -> dict[str, str]:
    return {
        "base": "src/layouts/base/index.tsx",
        "blank": "src/layouts/blank/index.tsx",
    }


def _always_lazy(_name: str) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class WarrenConfig:
    """Configuration for a route generation project.

    Attributes:
        root: Project root directory.  Always resolved to an absolute path
              on construction.
        page_dirs: Page directories scanned for route files, relative to
            *root*.  Earlier directories win naming conflicts.
        page_include: Glob patterns (relative to a page directory) that
            select page files.
        page_exclude: Glob patterns for files that are never pages.
        layouts: Layout name -> layout file.  The first entry is the
            default layout for every route.  At least one is required.
        reuse_routes: Literal route paths that get a placeholder component
            instead of a page file.
        default_reuse_component: Component key for reuse routes.
        not_found_component: Component key for the builtin ``NotFound`` route.
        splats_alias: Name suffix used for a trailing catch-all segment.
        root_redirect: Path the builtin ``Root`` route redirects to.
        debounce_ms: Quiet window for coalescing watch events.
        watch_file: Whether ``warren watch`` should watch page directories.
        alias: Import alias -> directory (relative to *root* or absolute),
            merged over the aliases found in *tsconfig* (explicit entries win),
            used to build import specifiers.
        tsconfig: tsconfig file (relative to *root*) whose
            ``compilerOptions.paths`` seed *alias*; *None* skips it.
        temp_dir: Directory (relative to *root*) holding persisted state.
        route_name: Optional override deriving a route name from a route path.
        route_path: Optional override rewriting the route path emitted for
            a page.  Names and params still come from the file path.
        route_layout: Optional override picking a layout (by name) per route.
        route_meta: Optional hook attaching metadata to a route (by name).
        route_lazy: Predicate deciding whether a route (by name) is lazy.
        layout_lazy: Predicate deciding whether a layout (by name) is lazy.

    """

    root: Path = field(default_factory=Path.cwd)
    page_dirs: tuple[str, ...] = ("src/pages",)
    page_include: tuple[str, ...] = ("**/*.tsx",)
    page_exclude: tuple[str, ...] = ("**/components/**", "**/modules/**")
    layouts: Mapping[str, str] = field(default_factory=_default_layouts)
    reuse_routes: tuple[str, ...] = ()
    default_reuse_component: str = "Wip"
    not_found_component: str = "404"
    splats_alias: str = DEFAULT_SPLATS_ALIAS
    root_redirect: str = "/home"
    debounce_ms: int = 500
    watch_file: bool = True
    alias: Mapping[str, str] = field(default_factory=dict)
    tsconfig: str | None = "tsconfig.json"
    temp_dir: str = ".temp"
    route_name: NameFunc | None = None
    route_path: PathFunc | None = None
    route_layout: LayoutFunc | None = None
    route_meta: MetaFunc | None = None
    route_lazy: LazyFunc = _always_lazy
    layout_lazy: LazyFunc = _always_lazy

    def __post_init__(self) -> None:
        root = Path(self.root)
        if not root.is_absolute():
            root = root.resolve()
        object.__setattr__(self, "root", root)

        # YAML and TOML hand us lists (or a bare string); normalize to tuples
        for name in ("page_dirs", "page_include", "page_exclude", "reuse_routes"):
            value = getattr(self, name)
            if isinstance(value, str):
                value = (value,)
            object.__setattr__(self, name, tuple(value))

        object.__setattr__(self, "layouts", dict(self.layouts))
        alias = resolve_alias_from_tsconfig(root, self.tsconfig) if self.tsconfig else {}
        object.__setattr__(self, "alias", {**alias, **self.alias})
        object.__setattr__(
            self, "default_reuse_component", pascal_case(self.default_reuse_component)
        )
        object.__setattr__(self, "not_found_component", pascal_case(self.not_found_component))

        if not self.layouts:
            msg = "At least one layout is required (config key 'layouts')."
            raise ConfigError(msg)
        if not self.page_dirs:
            msg = "At least one page directory is required (config key 'page_dirs')."
            raise ConfigError(msg)
        if not self.page_include:
            msg = "At least one include pattern is required (config key 'page_include')."
            raise ConfigError(msg)
        if self.debounce_ms <= 0:
            msg = f"debounce_ms must be positive, got {self.debounce_ms}"
            raise ConfigError(msg)

    @property
    def page_paths(self) -> tuple[Path, ...]:
        """Absolute paths of the page directories, in configured order."""
        return tuple(self.root / page_dir for page_dir in self.page_dirs)

    @property
    def page_extensions(self) -> tuple[str, ...]:
        """File extensions implied by the include patterns (``**/*.tsx`` -> ``tsx``)."""
        extensions: list[str] = []
        for pattern in self.page_include:
            ext = pattern.rsplit(".", maxsplit=1)[-1]
            if ext not in extensions:
                extensions.append(ext)
        return tuple(extensions)

    @property
    def temp_path(self) -> Path:
        """Absolute path to the persisted state directory."""
        return self.root / self.temp_dir

    @property
    def default_layout(self) -> str:
        """Name of the layout every route uses unless told otherwise."""
        return next(iter(self.layouts))

    @property
    def alias_paths(self) -> dict[str, str]:
        """Alias -> absolute POSIX directory."""
        return {
            key: (self.root / directory).as_posix()
            for key, directory in self.alias.items()
        }

    def derive_name(self, route_path: str) -> str:
        """Derive the route name for *route_path* using the configured function."""
        if self.route_name is not None:
            return self.route_name(route_path)
        return path_to_name(route_path, self.splats_alias)

    def derive_route_path(self, route_path: str) -> str:
        """The route path emitted for a page, after the configured override."""
        if self.route_path is not None:
            return self.route_path(route_path)
        return route_path

    def derive_layout(self, name: str) -> str:
        """The layout wrapping route *name*.

        Raises:
            ConfigError: If the override names a layout that is not configured.

        """
        if self.route_layout is None:
            return self.default_layout
        layout = self.route_layout(name)
        if layout not in self.layouts:
            msg = f"Route {name!r} uses unknown layout {layout!r} (configured: {', '.join(self.layouts)})"
            raise ConfigError(msg)
        return layout

    def derive_meta(self, name: str) -> dict[str, Any] | None:
        """Metadata for route *name*, or *None* if the hook gives none."""
        if self.route_meta is None:
            return None
        meta = self.route_meta(name)
        return None if meta is None else dict(meta)
