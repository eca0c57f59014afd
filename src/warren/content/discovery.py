"""Page discovery — enumerate page files and record their identity.

Walks every configured page directory, keeps files that match an include
pattern and no exclude pattern, and stats each one for its inode.  The
result is sorted by (page directory order, relative path) so that
downstream conflict resolution does not depend on directory-enumeration
order.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from warren._errors import DiscoveryError
from warren.routes.nodes import RouteSourceFile

if TYPE_CHECKING:
    from collections.abc import Mapping

    from warren.config import WarrenConfig

# Extensions stripped from import specifiers
_IMPORT_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx", ".ts", ".js")


def matches_page(glob: str, include: tuple[str, ...], exclude: tuple[str, ...]) -> bool:
    """Return True if *glob* matches an include pattern and no exclude pattern."""
    path = PurePosixPath(glob)
    if not any(path.full_match(pattern) for pattern in include):
        return False
    return not any(path.full_match(pattern) for pattern in exclude)


def resolve_import_path(file_path: str, alias: Mapping[str, str]) -> str:
    """Rewrite *file_path* through the first matching alias and drop its extension.

    ``/proj/src/pages/about/index.tsx`` with ``{"@": "/proj/src"}``
    -> ``@/pages/about/index``

    """
    import_path = file_path
    for key, directory in alias.items():
        if import_path.startswith(directory):
            import_path = key + import_path[len(directory):]
            break

    for ext in _IMPORT_EXTENSIONS:
        if import_path.endswith(ext):
            return import_path[: -len(ext)]
    return import_path


def iter_page_globs(page_path: Path, config: WarrenConfig) -> list[str]:
    """List page globs under *page_path*, sorted.  Empty if the directory is missing."""
    if not page_path.is_dir():
        return []

    globs: list[str] = []
    for file in page_path.rglob("*"):
        if not file.is_file():
            continue
        glob = file.relative_to(page_path).as_posix()
        if matches_page(glob, config.page_include, config.page_exclude):
            globs.append(glob)
    return sorted(globs)


def resolve_source_file(glob: str, page_dir: str, config: WarrenConfig) -> RouteSourceFile:
    """Build a RouteSourceFile for one page glob.

    Raises:
        DiscoveryError: If the file cannot be stat'd.

    """
    absolute = Path(os.path.normpath(config.root / page_dir / glob)).as_posix()
    try:
        info = os.stat(absolute)
    except OSError as exc:
        msg = f"Failed to stat page file {absolute}: {exc}"
        raise DiscoveryError(msg) from exc

    return RouteSourceFile(
        source_dir=page_dir,
        relative_glob=glob,
        absolute_path=absolute,
        import_specifier=resolve_import_path(absolute, config.alias_paths),
        identity=info.st_ino,
    )


def discover_files(config: WarrenConfig) -> tuple[RouteSourceFile, ...]:
    """Discover every page file across the configured page directories.

    Raises:
        DiscoveryError: If any page file cannot be stat'd.  No partial
            result is returned.

    """
    files: list[RouteSourceFile] = []
    for page_dir, page_path in zip(config.page_dirs, config.page_paths, strict=True):
        for glob in iter_page_globs(page_path, config):
            files.append(resolve_source_file(glob, page_dir, config))
    return tuple(files)
