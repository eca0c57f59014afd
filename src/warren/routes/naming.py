"""Route naming — derive stable identifiers from normalized route paths.

Names are a pure function of the route path::

    /about/detail/:id    -> AboutDetailId
    /list/:id?           -> ListId
    /docs/*              -> DocsSplats
    /user-center/profile -> UserCenterProfile

Import names are the same identifiers made safe for use as code
identifiers (purely numeric names get a leading underscore).  ``collation_key``
gives names a fixed, locale-independent sort order.
"""

import re
import unicodedata

# Matches a separator (or start of string) followed by the character to capitalize
_PASCAL_REG = re.compile(r"(^|[-_])(\w)")

_NUMERIC_REG = re.compile(r"^\d+$")

ROOT_ROUTE_NAME = "Root"
NOT_FOUND_ROUTE_NAME = "NotFound"
DEFAULT_SPLATS_ALIAS = "Splats"


def pascal_case(value: str) -> str:
    """Convert a kebab or snake case string to PascalCase.

    ``user-center`` -> ``UserCenter``, ``edit_profile`` -> ``EditProfile``.
    """
    return _PASCAL_REG.sub(lambda match: match.group(2).upper(), value)


def import_name(name: str) -> str:
    """Return *name* as an importable identifier.

    ``404`` -> ``_404``, ``user-center`` -> ``UserCenter``.
    """
    key = pascal_case(name)
    if _NUMERIC_REG.match(name):
        key = f"_{key}"
    return key


def path_to_name(route_path: str, splats_alias: str = DEFAULT_SPLATS_ALIAS) -> str:
    """Derive a route name from a normalized route path.

    Parameter markers (``:`` and ``?``) are dropped, a trailing ``/*``
    becomes ``-<splats_alias>``, and the remaining segments are joined
    and PascalCased.  The bare root path ``/`` maps to ``Root``.

    """
    clean = route_path.replace(":", "").replace("?", "")

    if clean.endswith("/*"):
        clean = f"{clean[:-2]}-{splats_alias}"

    kebab = "-".join(part for part in clean.split("/") if part)
    if not kebab:
        return ROOT_ROUTE_NAME
    return pascal_case(kebab)


def _char_weight(ch: str) -> tuple[int, str]:
    # Punctuation and symbols < digits < letters
    if ch.isalpha():
        return 2, ch
    if ch.isdigit():
        return 1, ch
    return 0, ch


def collation_key(name: str) -> tuple[tuple[tuple[int, str], ...], str, str, str]:
    """Locale-independent sort key following root-locale collation.

    Names compare level by level, like ICU's root collator:

    1. base characters, ignoring case and accents (punctuation before
       digits before letters);
    2. accents;
    3. case, lowercase first.

    ``Userinfo`` sorts before ``UserList`` and ``alpha`` before ``Zeta``.
    The name itself breaks any remaining tie, so the order is total.

    """
    decomposed = unicodedata.normalize("NFD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return (
        tuple(_char_weight(ch) for ch in base),
        decomposed.casefold(),
        decomposed.swapcase(),
        name,
    )
