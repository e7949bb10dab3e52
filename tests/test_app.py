"""Tests for the App class: setup, freeze, lifespan, middleware ordering."""

import asyncio
import logging
from typing import Any

import pytest

from certgate.app import App, startup_banner
from certgate.collaborators import Collaborators
from certgate.config import GatewayConfig
from certgate.http.request import Request
from certgate.http.response import Response
from certgate.routing import API_ROUTES
from certgate.testing import TestClient


class TestAppSetup:
    def test_default_config(self) -> None:
        app = App()
        assert app.config == GatewayConfig()
        assert app.collaborators == Collaborators()

    def test_configure(self) -> None:
        app = App()
        app.configure(port=8080, host=None)
        assert app.config.port == 8080
        assert app.config.host == "0.0.0.0"

    def test_routes_freeze_the_app(self) -> None:
        app = App()
        assert app.routes == API_ROUTES

    def test_cannot_add_middleware_after_freeze(self) -> None:
        app = App()
        _ = app.router

        async def mw(request, next):
            return await next(request)

        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.add_middleware(mw)

    def test_cannot_configure_after_freeze(self) -> None:
        app = App()
        _ = app.routes
        with pytest.raises(RuntimeError):
            app.configure(port=1)

    def test_cannot_add_hooks_after_freeze(self) -> None:
        app = App()
        _ = app.routes
        with pytest.raises(RuntimeError):
            app.on_startup(lambda: None)

    def test_double_freeze_is_safe(self) -> None:
        app = App()
        router = app.router
        assert app.router is router

    def test_warns_about_unconfigured_slots(self, caplog) -> None:
        app = App(collaborators=Collaborators(certificates=lambda request: []))
        with caplog.at_level(logging.WARNING, logger="certgate.app"):
            _ = app.routes

        assert "not configured" in caplog.text
        assert "certificate_lookup, lookup, login, setup_database" in caplog.text

    def test_no_warning_when_fully_configured(self, make_app, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="certgate.app"):
            _ = make_app().routes
        assert "not configured" not in caplog.text

    def test_hooks_returned_for_decorator_use(self) -> None:
        app = App()

        def hook() -> None:
            pass

        assert app.on_startup(hook) is hook
        assert app.on_shutdown(hook) is hook


class TestStartupBanner:
    def test_lines(self) -> None:
        assert startup_banner(GatewayConfig(port=5000)) == (
            "GIE Certificate System running on http://localhost:5000",
            "Static files served from /public directory",
            "API functions available in development mode",
            "Server started successfully",
        )

    def test_uses_configured_port(self) -> None:
        assert "localhost:8123" in startup_banner(GatewayConfig(port=8123))[0]

    @pytest.mark.parametrize(
        ("static_dir", "shown"),
        [
            ("public", "/public"),
            ("./dist/", "/dist"),
            (".well/", "/.well"),
            ("../public", "/../public"),
        ],
    )
    def test_static_dir_shown_as_given(self, static_dir: str, shown: str) -> None:
        line = startup_banner(GatewayConfig(static_dir=static_dir))[1]
        assert line == f"Static files served from {shown} directory"

    async def test_logged_on_startup(self, caplog) -> None:
        app = App(GatewayConfig(port=6000))
        with caplog.at_level(logging.INFO, logger="certgate.app"):
            await app.startup()

        messages = [r.getMessage() for r in caplog.records if r.name == "certgate.app"]
        assert "GIE Certificate System running on http://localhost:6000" in messages
        assert messages[-1] == "Server started successfully"


class TestMiddlewareOrdering:
    async def test_user_middleware_runs_inside_cors(self, make_app) -> None:
        seen: list[str] = []

        async def tag(request: Request, next) -> Response:
            seen.append(request.method)
            response = await next(request)
            return response.with_header("X-Tag", "1")

        app = make_app()
        app.add_middleware(tag)
        async with TestClient(app) as client:
            preflight = await client.options("/api/lookup")
            normal = await client.get("/api/lookup")

        # OPTIONS is answered by CORS before user middleware runs
        assert seen == ["GET"]
        assert preflight.header("x-tag") is None
        assert normal.header("x-tag") == "1"
        assert normal.header("access-control-allow-origin") == "*"

    async def test_registration_order(self, make_app) -> None:
        order: list[str] = []

        def make(name: str):
            async def mw(request: Request, next) -> Response:
                order.append(name)
                return await next(request)

            return mw

        app = make_app()
        app.add_middleware(make("first"))
        app.add_middleware(make("second"))
        async with TestClient(app) as client:
            await client.get("/")

        assert order == ["first", "second"]


class TestNonHttpScopes:
    async def test_websocket_scope_ignored(self, make_app) -> None:
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "websocket.connect"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await make_app()({"type": "websocket", "path": "/"}, receive, send)
        assert sent == []


async def _lifespan_exchange(app: App) -> tuple[list[dict[str, Any]], bool]:
    """Drive the lifespan protocol; return (sent messages, startup ok)."""
    sent: list[dict[str, Any]] = []
    receive_queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    async def receive() -> dict[str, Any]:
        return await receive_queue.get()

    async def send(message: dict[str, Any]) -> None:
        sent.append(message)

    scope: dict[str, Any] = {
        "type": "lifespan",
        "asgi": {"version": "3.0", "spec_version": "2.0"},
    }

    task = asyncio.create_task(app(scope, receive, send))
    await receive_queue.put({"type": "lifespan.startup"})
    await asyncio.sleep(0.01)

    startup_ok = any(m["type"] == "lifespan.startup.complete" for m in sent)
    if startup_ok:
        await receive_queue.put({"type": "lifespan.shutdown"})
    await asyncio.wait_for(task, timeout=2.0)
    return sent, startup_ok


class TestLifespanProtocol:
    async def test_happy_path(self) -> None:
        app = App()
        events: list[str] = []

        @app.on_startup
        async def connect() -> None:
            events.append("startup")

        @app.on_shutdown
        def disconnect() -> None:
            events.append("shutdown")

        sent, ok = await _lifespan_exchange(app)

        assert ok is True
        assert events == ["startup", "shutdown"]
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_startup_failure(self) -> None:
        app = App()

        @app.on_startup
        async def bad_setup() -> None:
            msg = "Database connection refused"
            raise ConnectionError(msg)

        sent, ok = await _lifespan_exchange(app)

        assert ok is False
        failed = [m for m in sent if m["type"] == "lifespan.startup.failed"]
        assert len(failed) == 1
        assert "Database connection refused" in failed[0]["message"]

    async def test_startup_failure_skips_banner(self, caplog) -> None:
        app = App()

        @app.on_startup
        def bad_setup() -> None:
            raise RuntimeError("nope")

        with caplog.at_level(logging.INFO, logger="certgate.app"):
            await _lifespan_exchange(app)

        assert "Server started successfully" not in caplog.text
        assert "Startup failed" in caplog.text

    async def test_shutdown_failure(self) -> None:
        app = App()

        @app.on_shutdown
        def bad_teardown() -> None:
            raise RuntimeError("pool already closed")

        sent, ok = await _lifespan_exchange(app)

        assert ok is True
        assert sent[-1] == {"type": "lifespan.shutdown.failed", "message": "pool already closed"}

    async def test_shutdown_logged(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="certgate.app"):
            await _lifespan_exchange(App())
        assert "Server shutting down" in caplog.text
