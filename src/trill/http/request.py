"""Immutable HTTP request.

Frozen metadata with async body access. Path parameters are attached by
building a new ``Request`` for the matched route, so each dispatch owns
its own bindings.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from trill._internal.asgi import Receive, Scope
from trill.http.headers import Headers
from trill.http.query import QueryParams

if TYPE_CHECKING:
    from trill.routing.route import RouteMatch


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` and ``wildcard`` are empty until the router matches;
    the handler always receives the matched copy from ``with_match()``.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    path_params: dict[str, str] = field(default_factory=dict)
    wildcard: str | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: body cache, shared between a request and its matched copy
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Path parameters --

    def param(self, name: str, default: str = "") -> str:
        """Return the value bound to the named segment *name*.

        Returns *default* (empty string) when the matched pattern has no
        segment called *name*.
        """
        return self.path_params.get(name, default)

    def with_match(self, match: RouteMatch) -> Request:
        """Return a copy carrying *match*'s parameters and wildcard remainder."""
        return replace(self, path_params=dict(match.path_params), wildcard=match.wildcard)

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as received."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        The ASGI receive channel is consumed once; later calls return the
        cached bytes.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as UTF-8 text."""
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON."""
        return json.loads(await self.body())

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive | None = None) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
