"""Warren — a file-convention route table generator.

Turns a directory of page files into a typed route table.  Brackets mark
params, parentheses mark layout groups, underscores pack several params
into one file name and ``[...name]`` is a catch-all.  Page files are
tracked by inode, so renaming a page shows up as a rename rather than a
delete plus an add.

Quick start::

    import warren

    result = warren.generate("my-app/")
    for node in result.nodes:
        print(node.name, node.route_path, node.params)

Two modes::

    warren.generate("my-app/")    # One regeneration cycle
    warren.watch("my-app/")       # Regenerate on page add/delete

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "RouteGenerator",
    "WarrenConfig",
    "__version__",
    "generate",
    "translate_path",
    "watch",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warren`` fast while providing a clean top-level API.
    """
    if name == "WarrenConfig":
        from warren.config import WarrenConfig

        return WarrenConfig

    if name == "RouteGenerator":
        from warren.generator import RouteGenerator

        return RouteGenerator

    if name == "generate":
        from warren.generator import generate

        return generate

    if name == "watch":
        from warren.generator import watch

        return watch

    if name == "translate_path":
        from warren.routes.translator import translate_path

        return translate_path

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
