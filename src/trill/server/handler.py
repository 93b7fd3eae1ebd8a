"""ASGI handler: translates ASGI scope/messages to trill types.

The only component that touches raw ASGI directly. Builds a Request from
the scope, normalizes trailing slashes, dispatches through the router and
sends the Response back through ASGI send().
"""

import inspect
import logging
from collections.abc import Callable
from contextvars import Token
from typing import Any

from trill._internal.asgi import Receive, Scope, Send
from trill._internal.invoke import invoke
from trill.context import request_var
from trill.errors import HTTPError
from trill.http.request import Request
from trill.http.response import Response
from trill.routing.route import RouteMatch
from trill.routing.router import Router, trailing_slash_redirect
from trill.server.errors import handle_http_error, handle_internal_error
from trill.server.negotiation import negotiate
from trill.server.sender import send_response

logger = logging.getLogger("trill.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool = False,
    redirect_status: int = 301,
) -> None:
    """Process a single HTTP request.

    1. A path longer than ``/`` ending in ``/`` is redirected to the
       slash-stripped path; no route is consulted.
    2. The router tries the request method's routes in registration order.
    3. The first match's handler runs with the matched request set as the
       current request.
    4. No match raises ``NotFound``, answered by the 404 handler if one is
       registered, otherwise a plain 404.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    # Set request context var (reset after dispatch)
    token: Token[Request] = request_var.set(request)
    try:
        target = trailing_slash_redirect(request.path)
        if target is not None:
            response = _redirect(request, target, redirect_status)
        else:
            match = router.match(request.method, request.path)
            response = await _invoke_handler(match, request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)
    finally:
        request_var.reset(token)

    await send_response(response, send, head=request.method == "HEAD")


def _redirect(request: Request, target: str, status: int) -> Response:
    """Build the trailing-slash redirect, keeping the query string."""
    qs = request.query.raw
    location = f"{target}?{qs.decode('latin-1')}" if qs else target
    logger.debug("%d %s %s -> %s", status, request.method, request.path, location)
    return Response(body="", status=status, content_type="text/plain; charset=utf-8").with_header(
        "Location", location
    )


async def _invoke_handler(match: RouteMatch, request: Request) -> Response:
    """Call the matched route handler with its own copy of the request.

    The matched copy carries this match's parameters only, and is the
    current request for exactly as long as the handler runs.
    """
    handler = match.route.handler
    matched = request.with_match(match)

    token = request_var.set(matched)
    try:
        kwargs = _build_handler_kwargs(handler, matched, matched.path_params)
        result = await invoke(handler, **kwargs)
    finally:
        request_var.reset(token)

    return negotiate(result)


def _build_handler_kwargs(
    handler: Callable[..., Any],
    request: Request,
    path_params: dict[str, str],
) -> dict[str, Any]:
    """Inspect handler signature and build kwargs from request + path params.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters (by name, converted to the annotated type when
       the conversion succeeds)
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in path_params:
            value = path_params[name]
            if param.annotation is not inspect.Parameter.empty and param.annotation is not str:
                try:
                    kwargs[name] = param.annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value

    return kwargs
