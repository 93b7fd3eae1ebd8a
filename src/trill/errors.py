"""trill exception hierarchy.

Shared across Router, App and the server pipeline so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class TrillError(Exception):
    """Base for all trill-specific errors."""


class ConfigurationError(TrillError):
    """Raised when app or route configuration is invalid.

    Surfaces at registration time, before any request is served.
    """


class RoutePatternError(ConfigurationError):
    """A route pattern that can never be matched as written.

    Raised by ``compile_pattern()`` when a route is registered, so a typo
    like ``/users/:`` fails at startup instead of silently never matching.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


@dataclass(frozen=True, slots=True)
class HTTPError(TrillError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or by handlers. The ASGI handler catches these
    and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 (conventional name in web frameworks)
    """404: no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
