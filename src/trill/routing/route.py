"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from trill.routing.pattern import Pattern


@dataclass(frozen=True, slots=True)
class Route:
    """A registered (method, pattern, handler) triple.

    Created by ``Router.add()``. ``derived`` marks routes the router added
    on the caller's behalf (HEAD for every GET).
    """

    method: str
    pattern: Pattern
    handler: Callable[..., Any]
    name: str | None = None
    derived: bool = False

    @property
    def path(self) -> str:
        """The pattern source as registered."""
        return self.pattern.source

    @property
    def has_named_params(self) -> bool:
        return self.pattern.has_named_params

    @property
    def has_wildcard(self) -> bool:
        return self.pattern.has_wildcard


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
    wildcard: str | None = None
