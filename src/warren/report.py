"""Cycle report — mode-aware summary of a regeneration cycle.

Prints route counts, timing, added/renamed routes and naming conflicts to
stderr.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from warren.config import WarrenConfig
    from warren.generator import GenerationResult
    from warren.routes.nodes import RouteNode


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""

_MODE_STYLES: dict[str, tuple[str, str]] = {
    "generate": (_GREEN, "generate"),
    "watch": (_CYAN, "watch"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _origin(node: RouteNode) -> str:
    if node.is_builtin:
        return "builtin"
    if node.is_reuse:
        return "reuse"
    return node.relative_glob


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def format_summary(result: GenerationResult, config: WarrenConfig, mode: str) -> str:
    """Render the cycle summary as text."""
    from warren import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}warren{_RESET} {_DIM}v{__version__}{_RESET}  {_mode_badge(mode)}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    timing = f" {_DIM}in {result.duration_ms:.0f}ms{_RESET}" if result.duration_ms > 0 else ""
    lines.append(
        f"  {_DIM}├─{_RESET} {_plural(len(result.nodes), 'route')} from "
        f"{_plural(result.file_count, 'page file')}{timing}"
    )
    lines.append(f"  {_DIM}├─{_RESET} pages: {_DIM}{', '.join(config.page_dirs)}{_RESET}")

    for node in result.diff.added:
        lines.append(f"  {_DIM}├─{_RESET} {_GREEN}+{_RESET} {node.name} {_DIM}{node.route_path}{_RESET}")
    for item in result.diff.renamed:
        lines.append(
            f"  {_DIM}├─{_RESET} {_CYAN}~{_RESET} {item.old_name} -> {item.node.name}"
        )

    if mode == "watch":
        lines.append(f"  {_DIM}└─{_RESET} {_DIM}Watching for page changes...{_RESET}")
    else:
        lines.append(f"  {_DIM}└─{_RESET} state: {_DIM}{config.temp_path}{_RESET}")

    if result.conflicts:
        lines.append("")
        lines.append(f"  {_YELLOW}!{_RESET} conflicting routes, the first one is used:")
        for conflict in result.conflicts:
            for node in conflict.nodes:
                marker = "kept" if node is conflict.kept else "dropped"
                lines.append(
                    f"    {conflict.name:<24} {node.route_path:<24} {_origin(node)} "
                    f"{_DIM}({marker}){_RESET}"
                )

    lines.append("")
    return "\n".join(lines)


def print_summary(
    result: GenerationResult,
    config: WarrenConfig,
    mode: str = "generate",
    *,
    stream: TextIO | None = None,
) -> None:
    """Print the cycle summary to *stream* (stderr by default)."""
    print(format_summary(result, config, mode), file=stream or sys.stderr)


def format_route_table(nodes: tuple[RouteNode, ...]) -> str:
    """Plain-text table of routes: name, path, params, origin."""
    rows = [("NAME", "PATH", "PARAMS", "SOURCE")]
    for node in nodes:
        params = ", ".join(
            f"{name}?" if kind == "optional" else name for name, kind in node.params.items()
        )
        rows.append((node.name, node.route_path, params or "-", _origin(node)))

    widths = [max(len(row[i]) for row in rows) for i in range(3)]
    return "\n".join(
        f"{row[0]:<{widths[0]}}  {row[1]:<{widths[1]}}  {row[2]:<{widths[2]}}  {row[3]}"
        for row in rows
    )
