"""``trill run``: serve an app with pounce."""

import argparse
import sys

from trill.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override app config."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app._ensure_frozen()

    from trill.server.dev import run_server as serve

    serve(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        workers=app.config.workers,
        reload=app.config.debug,
        reload_dirs=app.config.reload_dirs,
        log_level=app.config.log_level,
        app_path=args.app,
    )
