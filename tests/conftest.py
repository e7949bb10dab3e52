"""Shared fixtures: a throwaway SPA directory and recording collaborators."""

from pathlib import Path

import pytest

from certgate.app import App
from certgate.collaborators import Collaborators
from certgate.config import GatewayConfig
from certgate.http.request import Request
from certgate.http.response import json_response

INDEX_HTML = "<!doctype html><div id=root></div>"


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """A built SPA: index document, a stylesheet, and a nested asset."""
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text(INDEX_HTML)
    (public / "existing-file.css").write_text("body { color: red; }")
    (public / "app.js").write_text("console.log('hello');")
    assets = public / "assets"
    assets.mkdir()
    (assets / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return public


class Recorder:
    """Collaborator that records each request and echoes what it saw."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.requests: list[Request] = []

    async def __call__(self, request: Request):
        self.requests.append(request)
        return json_response(
            {
                "handler": self.name,
                "method": request.method,
                "path": request.path,
                "query": request.query.to_dict(),
            }
        )


@pytest.fixture
def recorders() -> dict[str, Recorder]:
    return {slot: Recorder(slot) for slot in Collaborators.slots()}


@pytest.fixture
def make_app(static_dir: Path, recorders: dict[str, Recorder]):
    """Factory for an App wired to the recorders, overridable per test."""

    def _make(**collaborators) -> App:
        slots = {**recorders, **collaborators}
        return App(
            GatewayConfig(static_dir=static_dir, collaborator_timeout=1.0),
            collaborators=Collaborators(**slots),
        )

    return _make


@pytest.fixture
def index_html() -> str:
    return INDEX_HTML
