"""Warren CLI — warren generate / warren watch / warren routes.

Entry point for the ``warren`` command-line interface.
"""

from __future__ import annotations

import argparse
import json
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the warren CLI."""
    parser = argparse.ArgumentParser(
        prog="warren",
        description="File-convention route table generator with rename-stable names.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # warren generate
    generate_parser = subparsers.add_parser(
        "generate",
        help="Run one regeneration cycle",
    )
    generate_parser.add_argument("root", nargs="?", default=".", help="Project root directory")

    # warren watch
    watch_parser = subparsers.add_parser(
        "watch",
        help="Regenerate whenever page files are added or removed",
    )
    watch_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    watch_parser.add_argument(
        "--debounce", type=int, default=None, help="Debounce window in milliseconds",
    )

    # warren routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Print the resolved route table without persisting anything",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    routes_parser.add_argument("--json", action="store_true", help="Emit JSON")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from warren import __version__

    return __version__


def _print_routes(root: str, as_json: bool) -> None:
    from pathlib import Path

    from warren.config_loader import load_config
    from warren.generator import RouteGenerator
    from warren.report import format_route_table

    generator = RouteGenerator(load_config(Path(root)))
    nodes, conflicts, _ = generator.resolve()

    if as_json:
        payload = {
            "routes": [node.to_dict() for node in nodes],
            "conflicts": [
                {"name": c.name, "kept": c.kept.relative_glob, "dropped": [n.relative_glob for n in c.dropped]}
                for c in conflicts
            ],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(format_route_table(nodes))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from warren._errors import WarrenError
    from warren.generator import generate, watch

    try:
        if args.command == "generate":
            generate(root=args.root)
        elif args.command == "watch":
            overrides = {} if args.debounce is None else {"debounce_ms": args.debounce}
            watch(root=args.root, **overrides)
        elif args.command == "routes":
            _print_routes(args.root, args.json)
    except WarrenError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
