"""trill application class.

Mutable during setup (route registration, error handlers, hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from trill._internal.asgi import Receive, Scope, Send
from trill._internal.invoke import invoke
from trill._internal.types import ErrorHandler, Handler
from trill.config import AppConfig
from trill.routing.pattern import compile_pattern
from trill.routing.router import Router
from trill.server.handler import handle_request

logger = logging.getLogger("trill.app")


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    method: str
    pattern: str
    handler: Handler
    name: str | None


class App:
    """The trill application.

    Mutable during setup. Frozen at runtime when ``app.run()`` or
    ``__call__()`` is first invoked; the route table is read-only from
    then on.

    Usage::

        app = App()

        @app.get("/users/:id")
        def show_user(id: int):
            return {"id": id}

        @app.not_found
        def missing(request):
            return f"nothing at {request.path}"

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the router, even when several workers receive
        their first request at the same time.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_pending_routes",
        # Compiled state (populated by _freeze)
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._router: Router | None = None

    # -- Route registration --

    def route(
        self,
        pattern: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            pattern: URL pattern. ``:name`` binds one segment, a final
                ``*`` matches any remainder.
            methods: HTTP methods. Defaults to ``["GET"]``. A GET route
                also answers HEAD.
            name: Optional route name, shown by ``trill routes``.

        Raises ``RoutePatternError`` immediately if *pattern* is malformed.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            compile_pattern(pattern)
            for method in methods or ["GET"]:
                self._pending_routes.append(_PendingRoute(method.upper(), pattern, func, name))
            return func

        return decorator

    def get(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register a GET (and HEAD) route via decorator."""
        return self.route(pattern, methods=["GET"], name=name)

    def head(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register a HEAD route via decorator."""
        return self.route(pattern, methods=["HEAD"], name=name)

    def post(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register a POST route via decorator."""
        return self.route(pattern, methods=["POST"], name=name)

    def put(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register a PUT route via decorator."""
        return self.route(pattern, methods=["PUT"], name=name)

    def delete(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register a DELETE route via decorator."""
        return self.route(pattern, methods=["DELETE"], name=name)

    def options(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register an OPTIONS route via decorator."""
        return self.route(pattern, methods=["OPTIONS"], name=name)

    def patch(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register a PATCH route via decorator."""
        return self.route(pattern, methods=["PATCH"], name=name)

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    def not_found(self, func: ErrorHandler) -> ErrorHandler:
        """Register the handler for requests no route matches.

        Its response is always sent with status 404, whatever the handler
        returns. Same as ``@app.error(404)``.
        """
        return self.error(404)(func)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def router(self) -> Router:
        """The compiled router. Freezes the app if needed."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and serve it with pounce.

        Debug mode runs a single auto-reloading worker.
        """
        self._ensure_frozen()

        from trill.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            reload_dirs=self.config.reload_dirs,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
            redirect_status=self.config.redirect_status,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs registered startup/shutdown hooks.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        await invoke(hook)
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    await invoke(hook)
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the route table in registration order.

        MUST only be called while holding _freeze_lock.
        """
        router = Router()
        for pending in self._pending_routes:
            router.add(pending.method, pending.pattern, pending.handler, name=pending.name)
        router.compile()
        self._router = router
        self._frozen = True
        logger.debug("Compiled %d routes", len(router.routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and handlers before calling app.run()."
            )
            raise RuntimeError(msg)
