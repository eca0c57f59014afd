"""tsconfig.json path aliases.

Reads ``compilerOptions.paths`` so that projects get the same import
aliases the TypeScript compiler uses::

    {"compilerOptions": {"baseUrl": ".", "paths": {"@/*": ["./src/*"]}}}
    -> {"@": "src"}

Targets are resolved against ``baseUrl`` and returned relative to the
project root.  Only the first target of each alias is used.
"""

from __future__ import annotations

import json
import posixpath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

_WILDCARD = "/*"


def _strip_wildcard(value: str) -> str:
    return value.replace(_WILDCARD, "")


def resolve_alias_from_tsconfig(root: Path, tsconfig: str = "tsconfig.json") -> dict[str, str]:
    """Alias -> directory (relative to *root*) from a tsconfig file.

    A missing file, malformed JSON (including JSONC comments) or a
    malformed ``paths`` table yields an empty mapping.

    """
    try:
        data = json.loads((root / tsconfig).read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}

    compiler = data.get("compilerOptions") if isinstance(data, dict) else None
    if not isinstance(compiler, dict):
        return {}
    paths = compiler.get("paths")
    if not isinstance(paths, dict):
        return {}

    base_url = compiler.get("baseUrl", ".")
    if not isinstance(base_url, str):
        base_url = "."

    alias: dict[str, str] = {}
    for key, targets in paths.items():
        if not isinstance(targets, list) or not targets or not isinstance(targets[0], str):
            continue
        target = posixpath.normpath(posixpath.join(base_url, _strip_wildcard(targets[0])))
        alias[_strip_wildcard(key)] = target
    return alias
