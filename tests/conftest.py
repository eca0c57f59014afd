"""Shared test fixtures for warren."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from warren.config import WarrenConfig
from warren.routes.nodes import RouteSourceFile

PAGE_DIR = "src/pages"

# Plain summaries regardless of the terminal running the tests
os.environ.setdefault("NO_COLOR", "1")


@pytest.fixture
def config(tmp_path: Path) -> WarrenConfig:
    """A WarrenConfig rooted at a temp directory."""
    return WarrenConfig(root=tmp_path)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a minimal project with a handful of page files.

    Returns the project root.  Pages live in ``src/pages``::

        about.tsx
        list/[id].tsx
        docs/[...slug].tsx
        (builtin)/login/index.tsx
        components/Button.tsx      (excluded)
    """
    for glob in (
        "about.tsx",
        "list/[id].tsx",
        "docs/[...slug].tsx",
        "(builtin)/login/index.tsx",
        "components/Button.tsx",
    ):
        write_page(tmp_path, glob)
    return tmp_path


def write_page(root: Path, glob: str, page_dir: str = PAGE_DIR) -> Path:
    """Write a page file and return its path."""
    path = root / page_dir / glob
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("export default function Page() { return null; }\n")
    return path


def make_source(
    glob: str,
    identity: int = 1,
    *,
    page_dir: str = PAGE_DIR,
    root: str = "/proj",
) -> RouteSourceFile:
    """Create a RouteSourceFile without touching the filesystem."""
    absolute = f"{root}/{page_dir}/{glob}"
    return RouteSourceFile(
        source_dir=page_dir,
        relative_glob=glob,
        absolute_path=absolute,
        import_specifier=absolute.rsplit(".", maxsplit=1)[0],
        identity=identity,
    )
