"""Persisted state — identity snapshot, route backup and exclude list.

Everything lives in one directory under the project root (``.temp`` by
default), which is added to ``.gitignore`` on first use:

    .temp/.node-backup.json   route name -> {"filepath", "inode"}  (snapshot)
    .temp/.route-backup.json  route name -> arbitrary route overrides
    .temp/.exclude-glob.json  list of page globs ignored by watch triggers

Unreadable or malformed files are treated as empty; they are never fatal.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from warren.config import WarrenConfig

NODE_BACKUP = ".node-backup.json"
ROUTE_BACKUP = ".route-backup.json"
EXCLUDE_GLOB = ".exclude-glob.json"
GIT_IGNORE = ".gitignore"


@dataclass(frozen=True, slots=True)
class SnapshotEntry:
    """Identity of the file behind a route in a previous cycle."""

    absolute_path: str
    identity: int


type RouteStatSnapshot = dict[str, SnapshotEntry]


def _read_json(path: Path) -> Any:
    """Load JSON from *path*, or *None* if missing or malformed."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def parse_snapshot(data: Any) -> RouteStatSnapshot:
    """Build a snapshot from decoded JSON, skipping malformed entries."""
    if not isinstance(data, dict):
        return {}

    snapshot: RouteStatSnapshot = {}
    for name, item in data.items():
        if not isinstance(item, dict):
            continue
        inode = item.get("inode")
        if not isinstance(inode, int) or isinstance(inode, bool):
            continue
        snapshot[name] = SnapshotEntry(
            absolute_path=str(item.get("filepath", "")),
            identity=inode,
        )
    return snapshot


class TempStore:
    """Reads and writes warren's persisted state for one project.

    Args:
        config: Project configuration (uses ``root`` and ``temp_path``).

    """

    __slots__ = ("_root", "_temp")

    def __init__(self, config: WarrenConfig) -> None:
        self._root = config.root
        self._temp = config.temp_path

    @property
    def node_backup_path(self) -> Path:
        return self._temp / NODE_BACKUP

    @property
    def route_backup_path(self) -> Path:
        return self._temp / ROUTE_BACKUP

    @property
    def exclude_glob_path(self) -> Path:
        return self._temp / EXCLUDE_GLOB

    def init(self) -> None:
        """Create missing state files and ignore the temp dir in git."""
        self._init_gitignore()
        for path, empty in (
            (self.node_backup_path, {}),
            (self.route_backup_path, {}),
            (self.exclude_glob_path, []),
        ):
            if not path.exists():
                _write_json(path, empty)

    def _init_gitignore(self) -> None:
        gitignore = self._root / GIT_IGNORE
        entry = self._temp.relative_to(self._root).as_posix()
        content = gitignore.read_text(encoding="utf-8") if gitignore.exists() else ""
        if entry in content.splitlines():
            return
        gitignore.write_text(f"{content}\n{entry}", encoding="utf-8")

    # ----- Snapshot -----

    def read_snapshot(self) -> RouteStatSnapshot:
        """The previous cycle's snapshot; empty if missing or malformed."""
        return parse_snapshot(_read_json(self.node_backup_path))

    def write_snapshot(self, snapshot: Mapping[str, SnapshotEntry]) -> None:
        """Replace the persisted snapshot with *snapshot*."""
        _write_json(self.node_backup_path, {
            name: {"filepath": entry.absolute_path, "inode": entry.identity}
            for name, entry in snapshot.items()
        })

    # ----- Route backup -----

    def read_route_backup(self) -> dict[str, Any]:
        """Persisted route overrides; empty if missing or malformed."""
        data = _read_json(self.route_backup_path)
        return data if isinstance(data, dict) else {}

    def update_route_backup(self, routes: Mapping[str, Any]) -> dict[str, Any]:
        """Merge *routes* into the route backup and return the merged result.

        Each cycle merges the path, layout and metadata of routes that
        carry metadata.  Code generators may merge their own per-route
        overrides here too; entries are never removed.

        """
        backup = self.read_route_backup()
        backup.update(routes)
        _write_json(self.route_backup_path, backup)
        return backup

    # ----- Exclude list -----

    def read_exclude_globs(self) -> tuple[str, ...]:
        """Globs ignored by watch triggers; empty if missing or malformed."""
        data = _read_json(self.exclude_glob_path)
        if not isinstance(data, list):
            return ()
        return tuple(item for item in data if isinstance(item, str))

    def is_excluded(self, glob: str) -> bool:
        """True if *glob* is listed in, or matched by, the exclude list."""
        path = PurePosixPath(glob)
        return any(
            glob == pattern or path.full_match(pattern)
            for pattern in self.read_exclude_globs()
        )
