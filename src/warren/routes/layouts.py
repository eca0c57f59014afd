"""Layout entries — configured layouts resolved for code generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from warren.content.discovery import resolve_import_path
from warren.routes.naming import import_name

if TYPE_CHECKING:
    from warren.config import WarrenConfig

_LAYOUT_SUFFIX = "Layout"


@dataclass(frozen=True, slots=True)
class LayoutEntry:
    """A configured layout.

    Attributes:
        name: Layout key from the configuration (e.g., ``base``).
        import_path: Alias-rewritten, extension-stripped import path.
        import_name: Identifier for the import, always ending in ``Layout``.
        is_lazy: Whether the layout is imported lazily.

    """

    name: str
    import_path: str
    import_name: str
    is_lazy: bool


def resolve_layouts(config: WarrenConfig) -> tuple[LayoutEntry, ...]:
    """Resolve configured layouts in declaration order."""
    entries: list[LayoutEntry] = []
    aliases = config.alias_paths
    for name, file_path in config.layouts.items():
        ident = import_name(name)
        if not ident.endswith(_LAYOUT_SUFFIX):
            ident = f"{ident}{_LAYOUT_SUFFIX}"
        absolute = (config.root / file_path).as_posix()
        entries.append(LayoutEntry(
            name=name,
            import_path=resolve_import_path(absolute, aliases),
            import_name=ident,
            is_lazy=config.layout_lazy(name),
        ))
    return tuple(entries)
