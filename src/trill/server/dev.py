"""Server startup.

Serves the live trill App object with pounce. Debug mode runs a single
worker with auto-reload; otherwise the configured worker count is used.
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    reload_dirs: tuple[str, ...] = (),
    log_level: str = "info",
    app_path: str | None = None,
) -> None:
    """Start a pounce server for the given trill App.

    Pounce's ``run()`` takes an import string (e.g. ``"myapp:app"``), but
    trill has a live ``App`` object, so ``pounce.Server`` is used directly
    with the ASGI callable.

    Args:
        app: ASGI callable (trill App instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count; forced to 1 when *reload* is on.
        reload: Enable auto-reload on file changes.
        reload_dirs: Extra directories to watch alongside cwd.
        log_level: Server log level.
        app_path: Optional ``"module:attribute"`` import string. When
            provided, pounce reimports the app on each reload cycle.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
        reload_dirs=reload_dirs,
        log_level=log_level,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
