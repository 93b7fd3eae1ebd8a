"""Method-keyed route table with first-registered-wins matching.

Routes are registered during setup and the table is frozen with
``compile()`` before serving begins. After that the table is read-only,
so concurrent dispatch needs no locks.
"""

import logging
from collections.abc import Callable
from typing import Any

from trill.errors import NotFound
from trill.routing.pattern import compile_pattern
from trill.routing.route import Route, RouteMatch

logger = logging.getLogger("trill.routing")

METHODS: tuple[str, ...] = ("GET", "HEAD", "POST", "PUT", "DELETE", "OPTIONS", "PATCH")

# Registering under a key also registers the same pattern + handler under
# each listed method. HEAD mirrors GET routing; the body is dropped on send.
DERIVED_METHODS: dict[str, tuple[str, ...]] = {"GET": ("HEAD",)}


def trailing_slash_redirect(path: str) -> str | None:
    """Return the redirect target for a trailing-slash path, else ``None``.

    Applies to every path longer than ``/`` that ends in ``/``. Exactly one
    slash is removed, so repeated slashes collapse over successive redirects::

        "/users/"  -> "/users"
        "/a//"     -> "/a/"
        "/"        -> None
        "/users"   -> None
    """
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return None


class Router:
    """Route table keyed by HTTP method.

    Each method holds its routes in registration order, which is also
    match priority: the first route whose pattern matches wins, so a
    catch-all registered after specific routes acts as a fallback and a
    duplicate registration is never reached.

    Usage::

        router = Router()
        router.get("/users/:id", show_user)
        router.get("/static/*", serve_static)
        router.compile()
        match = router.match("GET", "/users/42")
        match.path_params  # {"id": "42"}
    """

    __slots__ = ("_compiled", "_table")

    def __init__(self) -> None:
        self._table: dict[str, list[Route]] = {}
        self._compiled = False

    # -- Registration --

    def add(
        self,
        method: str,
        pattern: str,
        handler: Callable[..., Any],
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for *method* requests matching *pattern*.

        Method names are stored exactly as given. Derived routes (HEAD for
        GET) are appended right after the primary one.

        Raises ``RoutePatternError`` for malformed patterns and
        ``RuntimeError`` once the router has been compiled.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        compiled = compile_pattern(pattern)
        route = Route(method=method, pattern=compiled, handler=handler, name=name)
        self._table.setdefault(method, []).append(route)
        logger.debug("Registered %s %s", method, compiled.source)

        for derived_method in DERIVED_METHODS.get(method, ()):
            derived = Route(
                method=derived_method,
                pattern=compiled,
                handler=handler,
                name=name,
                derived=True,
            )
            self._table.setdefault(derived_method, []).append(derived)
            logger.debug("Registered %s %s (derived from %s)", derived_method, compiled.source, method)

        return route

    def get(self, pattern: str, handler: Callable[..., Any], *, name: str | None = None) -> Route:
        """Register a GET route (and its derived HEAD route)."""
        return self.add("GET", pattern, handler, name=name)

    def head(self, pattern: str, handler: Callable[..., Any], *, name: str | None = None) -> Route:
        """Register a HEAD route."""
        return self.add("HEAD", pattern, handler, name=name)

    def post(self, pattern: str, handler: Callable[..., Any], *, name: str | None = None) -> Route:
        """Register a POST route."""
        return self.add("POST", pattern, handler, name=name)

    def put(self, pattern: str, handler: Callable[..., Any], *, name: str | None = None) -> Route:
        """Register a PUT route."""
        return self.add("PUT", pattern, handler, name=name)

    def delete(self, pattern: str, handler: Callable[..., Any], *, name: str | None = None) -> Route:
        """Register a DELETE route."""
        return self.add("DELETE", pattern, handler, name=name)

    def options(self, pattern: str, handler: Callable[..., Any], *, name: str | None = None) -> Route:
        """Register an OPTIONS route."""
        return self.add("OPTIONS", pattern, handler, name=name)

    def patch(self, pattern: str, handler: Callable[..., Any], *, name: str | None = None) -> Route:
        """Register a PATCH route."""
        return self.add("PATCH", pattern, handler, name=name)

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """All registered routes, grouped by method in first-registration order.

        Within a method, routes are in match-priority order.
        """
        return [route for routes in self._table.values() for route in routes]

    @property
    def methods(self) -> frozenset[str]:
        """Methods with at least one registered route."""
        return frozenset(self._table)

    def routes_for(self, method: str) -> tuple[Route, ...]:
        """Candidate routes for *method*, in match-priority order."""
        return tuple(self._table.get(method, ()))

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    # -- Matching --

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the first route for *method* whose pattern matches *path*.

        Only *method*'s own candidates are tried; a path registered under
        another method still yields ``NotFound``.

        Raises ``NotFound`` if no candidate matches.
        """
        for route in self._table.get(method, ()):
            result = route.pattern.match(path)
            if result is not None:
                return RouteMatch(
                    route=route,
                    path_params=result.params,
                    wildcard=result.wildcard,
                )

        raise NotFound(f"No route matches {method} {path!r}")
