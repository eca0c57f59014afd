"""Content layer — page discovery, persisted state, diffing and watching.

Discovers page files and their identities, persists the identity
snapshot between cycles, classifies added and renamed routes, and
coalesces filesystem events into regeneration triggers.
"""

from warren.content.differ import DiffResult, RenamedRoute, build_snapshot, diff_nodes
from warren.content.discovery import discover_files, matches_page, resolve_import_path
from warren.content.snapshot import SnapshotEntry, TempStore
from warren.content.watcher import ChangeCoalescer, PageChange, PageWatcher, page_change_for

__all__ = [
    "ChangeCoalescer",
    "DiffResult",
    "PageChange",
    "PageWatcher",
    "RenamedRoute",
    "SnapshotEntry",
    "TempStore",
    "build_snapshot",
    "diff_nodes",
    "discover_files",
    "matches_page",
    "page_change_for",
    "resolve_import_path",
]
