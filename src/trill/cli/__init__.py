"""trill CLI: serve an app or print its route table.

Entry point registered as ``trill`` in ``pyproject.toml``::

    [project.scripts]
    trill = "trill.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``trill`` command."""
    parser = argparse.ArgumentParser(
        prog="trill",
        description="trill: a small HTTP request router for ASGI.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- trill run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an app")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- trill routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from trill.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from trill.cli._routes import run_routes

        run_routes(args)
