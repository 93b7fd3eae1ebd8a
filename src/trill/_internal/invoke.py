"""Call sync or async handlers uniformly.

Route handlers, not-found handlers, error handlers and lifespan hooks can
all be ``def`` or ``async def``. The awaitable check lives here so
callers never branch on it.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
