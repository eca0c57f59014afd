"""Load WarrenConfig from warren.yaml if present.

Merges file config with keyword overrides. Overrides take precedence.
"""

from __future__ import annotations

from pathlib import Path

from warren.config import WarrenConfig

_CONFIG_KEYS: frozenset[str] = frozenset({
    "page_dirs",
    "page_include",
    "page_exclude",
    "layouts",
    "reuse_routes",
    "default_reuse_component",
    "not_found_component",
    "splats_alias",
    "root_redirect",
    "debounce_ms",
    "watch_file",
    "alias",
    "temp_dir",
    "tsconfig",
})


def load_config(root: Path, **overrides: object) -> WarrenConfig:
    """Load WarrenConfig from root, optionally merging warren.yaml.

    Looks for warren.yaml, warren.yml, or warren.toml in root. If found, loads
    and merges with overrides. Overrides take precedence.

    Raises:
        ConfigError: If the merged configuration is missing required values.

    """
    file_config = _read_warren_config(Path(root))
    merged = {**file_config, **overrides}
    return WarrenConfig(root=Path(root), **merged)


def _read_warren_config(root: Path) -> dict[str, object]:
    """Read warren config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("warren.yaml", "warren.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "warren.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    import yaml

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_warren_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    import tomllib

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return _flatten_warren_section(data)


def _flatten_warren_section(data: dict[str, object]) -> dict[str, object]:
    """Extract warren.* keys into top-level config, dropping unknown keys."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _CONFIG_KEYS:
            result[k] = v
    section = data.get("warren")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _CONFIG_KEYS:
                result[k] = v
    return result
