"""Error handling pipeline for trill requests.

Maps HTTPError exceptions (including the router's ``NotFound``) and
unexpected failures to Response objects, using registered error handlers
or plain-text defaults.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any

from trill.errors import HTTPError
from trill.http.request import Request
from trill.http.response import Response
from trill.server.negotiation import negotiate

logger = logging.getLogger("trill.server")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    return negotiate(result)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
) -> Response:
    """Map an HTTPError to a Response using registered error handlers.

    A handler's response always carries the error's status, whatever the
    handler returned, so a not-found handler always answers 404.
    """
    logger.debug("%d %s %s - %s", exc.status, request.method, request.path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        return response.with_status(exc.status)

    resp = Response(
        body=exc.detail or f"Error {exc.status}",
        status=exc.status,
        content_type="text/plain; charset=utf-8",
    )
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        if response.status == 200:
            response = response.with_status(500)
        return response

    body = "Internal Server Error"
    if debug:
        body = "".join(traceback.format_exception(exc))
    return Response(body=body, status=500, content_type="text/plain; charset=utf-8")
