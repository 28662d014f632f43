"""Wren application class.

Mutable during setup (route and error handler registration). Frozen at
runtime when ``app.run()``, the ASGI lifespan startup, or the first
request triggers ``_freeze()``.

Freezing is the explicit, ordered startup sequence:

1. Compose and compile every layout × page template (fail-fast).
2. Create the renderer over the finished registry.
3. Create the asset guard over the static directory.
4. Compile the route table.

After freezing, the router, registry, renderer and guard are read-only
and shared by every request without locking.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.types import ErrorHandler, Handler
from wren.assets.files import FileServer
from wren.assets.guard import AssetGuard
from wren.config import AppConfig
from wren.routing.route import Route
from wren.routing.router import Router
from wren.server.handler import handle_request
from wren.templating.registry import TemplateRegistry, build_registry
from wren.templating.renderer import TemplateRenderer

logger = logging.getLogger("wren.app")


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None


class App:
    """The wren application.

    Usage::

        app = App(AppConfig.from_env())

        @app.route("/")
        def home():
            return app.renderer.render("main", "home")

    Thread safety:
        Setup is single-threaded (decorators at import time). The freeze
        transition uses a Lock plus a double check so exactly one thread
        builds the registry and router, even when several workers take
        their first request at once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_guard",
        "_pending_routes",
        "_registry",
        "_renderer",
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._registry: TemplateRegistry | None = None
        self._renderer: TemplateRenderer | None = None
        self._guard: AssetGuard | None = None

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL path pattern. Use ``{param}`` for path parameters
                and ``{param:path}`` for a catch-all tail.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_routes.append(_PendingRoute(path, func, methods, name))
            return func

        return decorator

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

    # -- Compiled state --

    @property
    def registry(self) -> TemplateRegistry:
        """The composed template registry (freezes the app on first use)."""
        self._ensure_frozen()
        assert self._registry is not None
        return self._registry

    @property
    def renderer(self) -> TemplateRenderer:
        """The template renderer (freezes the app on first use)."""
        self._ensure_frozen()
        assert self._renderer is not None
        return self._renderer

    @property
    def guard(self) -> AssetGuard:
        """The static asset guard (freezes the app on first use)."""
        self._ensure_frozen()
        assert self._guard is not None
        return self._guard

    @property
    def router(self) -> Router:
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and start serving.

        Template composition happens here, before the listener binds: a
        malformed fragment raises ``TemplateBuildError`` and no socket is
        ever opened.
        """
        self._ensure_frozen()

        from wren.server.serve import run_server

        run_server(self, host or self.config.host, port or self.config.port)

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
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, before the first HTTP request. A
        build failure is logged and reported as ``lifespan.startup.failed``
        so the server refuses to start.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.error("startup failed: %s", exc)
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
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
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock. Nothing is
        published unless every step succeeds.
        """
        # 1. Compose templates; raises TemplateBuildError on any defect
        registry = build_registry(self.config)

        # 2. Renderer over the immutable registry
        renderer = TemplateRenderer(registry)

        # 3. Static assets: the guard is the only way into the file server
        files = FileServer(self.config.static_dir, cache_control=self.config.cache_control)
        guard = AssetGuard(self.config.static_dir, files)

        # 4. Route table
        router = Router()
        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            router.add(Route(pending.path, pending.handler, methods, pending.name))
        router.compile()

        self._registry = registry
        self._renderer = renderer
        self._guard = guard
        self._router = router
        self._frozen = True

        logger.debug("app frozen with %d routes", len(router.routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and error handlers before calling app.run()."
            )
            raise RuntimeError(msg)
