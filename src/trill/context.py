"""Request-scoped context via ContextVar.

Provides ``request_var``, the ``Request`` currently being handled on this
task or thread, plus accessors for code that does not receive the request
as an argument.

The server pipeline sets ``request_var`` to the matched request right
before the handler runs and resets it in a ``finally`` block, so path
parameters never outlive the handler call and never cross requests.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    threads. No locks needed.
"""

from contextvars import ContextVar

from trill.http.request import Request

request_var: ContextVar[Request] = ContextVar("trill_request")
"""The current request. Set by the ASGI handler around each handler call."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


def get_param(name: str, default: str = "") -> str:
    """Return the path parameter *name* for the current request.

    Returns *default* when the parameter is unbound or no request is
    being handled.
    """
    request = request_var.get(None)
    if request is None:
        return default
    return request.param(name, default)
