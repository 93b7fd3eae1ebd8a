"""trill: a small HTTP request router for ASGI.

Maps a method + path to the first registered handler whose pattern
matches, binding ``:name`` segments and ``*`` suffixes along the way.

Basic usage::

    from trill import App

    app = App()

    @app.get("/hello/:name")
    def hello(name: str):
        return f"Hello, {name}!"

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "NotFound",
    "Redirect",
    "Request",
    "Response",
    "RoutePatternError",
    "Router",
    "TrillError",
    "get_param",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trill`` fast while providing a clean top-level API.
    """
    if name == "App":
        from trill.app import App

        return App

    if name == "AppConfig":
        from trill.config import AppConfig

        return AppConfig

    if name == "Request":
        from trill.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from trill.http import response as _resp

        return getattr(_resp, name)

    if name == "Router":
        from trill.routing.router import Router

        return Router

    if name in ("get_param", "get_request"):
        from trill import context as _ctx

        return getattr(_ctx, name)

    if name in ("ConfigurationError", "HTTPError", "NotFound", "RoutePatternError", "TrillError"):
        from trill import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
