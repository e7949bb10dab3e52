"""certgate application class.

Mutable during setup (collaborators, middleware, lifecycle hooks).
Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from certgate._internal.asgi import Receive, Scope, Send
from certgate._internal.invoke import run_hooks
from certgate.collaborators import Collaborators
from certgate.config import GatewayConfig
from certgate.middleware.cors import CORSMiddleware
from certgate.middleware.protocol import Middleware
from certgate.routing.route import ApiRoute
from certgate.routing.router import ApiRouter
from certgate.server.dispatch import Dispatcher
from certgate.server.handler import handle_request
from certgate.server.static import SPAStaticFiles

logger = logging.getLogger("certgate.app")


def startup_banner(config: GatewayConfig) -> tuple[str, ...]:
    """The four status lines logged once the app is ready."""
    static_name = Path(config.static_dir).as_posix().lstrip("/")
    return (
        f"GIE Certificate System running on http://localhost:{config.port}",
        f"Static files served from /{static_name} directory",
        "API functions available in development mode",
        "Server started successfully",
    )


class App:
    """The certgate application.

    Usage::

        app = App(
            GatewayConfig.from_env(),
            collaborators=Collaborators(certificates=list_certificates),
        )
        app.run()

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock with a
        double check so exactly one thread compiles the app even when
        several workers deliver their first request at once.
    """

    __slots__ = (
        "_cors",
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "collaborators",
        "config",
    )

    def __init__(
        self,
        config: GatewayConfig | None = None,
        *,
        collaborators: Collaborators | None = None,
    ) -> None:
        self.config: GatewayConfig = config or GatewayConfig()
        self.collaborators: Collaborators = collaborators or Collaborators()
        self._middleware_list: list[Middleware] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._cors: CORSMiddleware | None = None
        self._router: ApiRouter | None = None
        self._dispatcher: Dispatcher | None = None
        self._middleware: tuple[Middleware, ...] = ()

    # -- Setup --

    def configure(self, **overrides: Any) -> None:
        """Replace config fields; ``None`` values are ignored."""
        self._check_not_frozen()
        self.config = self.config.with_overrides(**overrides)

    def add_middleware(self, middleware: Middleware) -> None:
        """Add middleware; it runs inside the built-in CORS middleware."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run during ASGI lifespan startup (sync or async)."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run during ASGI lifespan shutdown (sync or async)."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def routes(self) -> tuple[ApiRoute, ...]:
        """The compiled routing table (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    @property
    def router(self) -> ApiRouter:
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    # -- Running --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the pounce server and block until it stops."""
        from certgate.server.production import run_server

        self._ensure_frozen()
        run_server(
            self,
            host=host or self.config.host,
            port=port or self.config.port,
            workers=self.config.workers,
            log_level=self.config.log_level,
            log_format=self.config.log_format,
            request_timeout=self.config.request_timeout,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        self._ensure_frozen()
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        assert self._dispatcher is not None
        await handle_request(
            scope,
            receive,
            send,
            dispatcher=self._dispatcher,
            middleware=self._middleware,
            cors=self._cors,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    await self.shutdown()
                except Exception as exc:
                    logger.exception("Shutdown failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks, then log the status banner."""
        self._ensure_frozen()
        await run_hooks(self._startup_hooks)
        for line in startup_banner(self.config):
            logger.info(line)

    async def shutdown(self) -> None:
        """Run shutdown hooks."""
        logger.info("Server shutting down")
        await run_hooks(self._shutdown_hooks)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        config = self.config
        configured = self.collaborators.configured()
        self._router = ApiRouter(self.collaborators)
        self._dispatcher = Dispatcher(
            self._router,
            SPAStaticFiles(
                config.static_dir,
                index=config.index_file,
                cache_control=config.cache_control,
            ),
            timeout=config.collaborator_timeout,
        )
        self._cors = CORSMiddleware(config.cors)
        self._middleware = (self._cors, *self._middleware_list)
        self._frozen = True

        missing = [slot for slot in Collaborators.slots() if slot not in configured]
        if missing:
            logger.warning("Collaborators not configured (answering 501): %s", ", ".join(missing))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register middleware and hooks before calling app.run()."
            )
            raise RuntimeError(msg)
