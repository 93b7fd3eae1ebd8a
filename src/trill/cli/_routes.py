"""``trill routes``: list registered routes.

Prints one row per route in match-priority order within each method.
Routes added implicitly (HEAD for GET) are marked ``(derived)``.
"""

import argparse
import sys

from trill.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Resolve ``args.app``, freeze it, and print METHOD, PATTERN, HANDLER."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.router.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        handler_name = getattr(route.handler, "__name__", str(route.handler))
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        if route.derived:
            handler_name = f"{handler_name} (derived)"
        rows.append((route.method, route.path, handler_name))

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(7, *(len(r[1]) for r in rows))  # "PATTERN" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))
