"""Shared type definitions for warren."""

from collections.abc import Callable, Mapping
from typing import Any, Literal

# Parameter kind recorded for each ``:name`` token in a route path
type ParamKind = Literal["required", "optional"]

# Normalized route pattern (e.g., "/about/detail/:id")
type RoutePath = str

# PascalCase route identifier (e.g., "AboutDetailId")
type RouteName = str

# Page file path relative to its page directory (e.g., "list/[id].tsx")
type PageGlob = str

# Filesystem identity of a page file (inode number)
type Identity = int

# Derives a route name from a normalized route path
type NameFunc = Callable[[RoutePath], RouteName]

# Decides whether a route (by name) is lazily imported
type LazyFunc = Callable[[RouteName], bool]

# Rewrites the route path emitted for a page
type PathFunc = Callable[[RoutePath], RoutePath]

# Picks the layout (by configured name) wrapping a route
type LayoutFunc = Callable[[RouteName], str]

# Attaches metadata to a route; None means no metadata
type MetaFunc = Callable[[RouteName], Mapping[str, Any] | None]
