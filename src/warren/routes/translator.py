"""Path translator — file-path conventions to route patterns.

Translates a page file's path (relative to its page directory) into a
normalized route path plus a parameter map:

    about/index.tsx            -> /about
    list/[id].tsx              -> /list/:id            {id: required}
    list/[[id]].tsx            -> /list/:id?           {id: optional}
    list/edit_[id]_[userId]    -> /list/edit/:id/:userId
    docs/[...slug].tsx         -> /docs/*              {slug: required}
    (builtin)/login/index.tsx  -> /login               layout group "builtin"

The bracket rewriters only bring a path into the canonical ``:name`` /
``:name?`` form; the final parameter map is always harvested from that
canonical form.
"""

import re
from dataclasses import dataclass, field

from warren._types import ParamKind

# Trailing catch-all segment: /[...slug]
_CATCH_ALL_REG = re.compile(r"/\[\.\.\.(\w+)\]$")

# Optional param: [[id]]
_OPTIONAL_PARAM_REG = re.compile(r"\[\[(\w+)\]\]")

# Required param: [id]
_REQUIRED_PARAM_REG = re.compile(r"\[(\w+)\]")

# Canonical param token: :id or :id?
_ROUTE_PARAM_REG = re.compile(r":(\w+)(\?)?")

# Layout group segment: /(group)/
_GROUP_REG = re.compile(r"/\((\w+)\)/")

_INDEX_SUFFIX = "/index"


@dataclass(frozen=True, slots=True)
class TranslatedPath:
    """Result of translating one file path.

    Attributes:
        route_path: Normalized route pattern (e.g., ``/list/:id?``).
        params: Parameter name -> kind, in path order.
        layout_group: Group label from a ``(group)`` segment, or *None*.
        origin_path: The input path before any rewriting.

    """

    route_path: str
    params: dict[str, ParamKind] = field(default_factory=dict)
    layout_group: str | None = None
    origin_path: str = ""


def glob_to_route_path(glob: str, extensions: tuple[str, ...] = ("tsx",)) -> str:
    """Turn a page glob into a raw (untranslated) route path.

    Prefixes ``/``, strips a configured page extension and collapses a
    trailing ``/index``.  A top-level index file maps to ``/``.

    ``about/index.tsx`` -> ``/about``, ``list/[id].tsx`` -> ``/list/[id]``

    """
    path = glob if glob.startswith("/") else f"/{glob}"

    for ext in extensions:
        suffix = f".{ext}"
        if path.endswith(suffix):
            path = path[: -len(suffix)]
            break

    if path.endswith(_INDEX_SUFFIX):
        path = path[: -len(_INDEX_SUFFIX)]

    return path or "/"


def extract_group(path: str) -> tuple[str, str | None]:
    """Collapse the first ``/(group)/`` segment out of *path*.

    Returns the new path and the group label (or *None* if no group).

    """
    match = _GROUP_REG.search(path)
    if match is None:
        return path, None
    return path[: match.start()] + "/" + path[match.end():], match.group(1)


def rewrite_params(path: str) -> tuple[str, dict[str, ParamKind]]:
    """Rewrite bracket params in *path* into canonical ``:name`` tokens.

    Returns the rewritten path and the params the rewriter consumed
    directly (only the catch-all name, which leaves no ``:`` token behind).

    """
    catch_all = _CATCH_ALL_REG.search(path)
    if catch_all is not None:
        # The catch-all is authoritative; other brackets are left untouched
        return path[: catch_all.start()] + "/*", {catch_all.group(1): "required"}

    if _OPTIONAL_PARAM_REG.search(path):
        path = _OPTIONAL_PARAM_REG.sub(r":\1?", path)
    elif _REQUIRED_PARAM_REG.search(path):
        path = _REQUIRED_PARAM_REG.sub(r":\1", path)
    else:
        return path, {}

    # edit_:id_:userId -> edit/:id/:userId
    return path.replace("_:", "/:"), {}


def harvest_params(route_path: str) -> dict[str, ParamKind]:
    """Collect ``:name`` / ``:name?`` tokens from a canonical route path."""
    params: dict[str, ParamKind] = {}
    for match in _ROUTE_PARAM_REG.finditer(route_path):
        params[match.group(1)] = "optional" if match.group(2) == "?" else "required"
    return params


def translate_path(raw_path: str) -> TranslatedPath:
    """Translate an extension-stripped, index-collapsed path into a route.

    Applies group extraction, bracket rewriting and parameter harvesting.
    A path with neither param nor group markers is returned unchanged
    with an empty parameter map.

    """
    path, group = extract_group(raw_path)
    path, consumed = rewrite_params(path)
    params = {**consumed, **harvest_params(path)}

    return TranslatedPath(
        route_path=path,
        params=params,
        layout_group=group,
        origin_path=raw_path,
    )
