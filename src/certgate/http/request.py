"""Immutable HTTP request.

Frozen metadata with async, cached body access. Routing changes to the
query string (the lookup-by-number route) produce a new ``Request``
through ``with_query()``; the original is never mutated.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncIterator
from dataclasses import dataclass, field, replace
from typing import Any

from certgate._internal.asgi import Receive, Scope
from certgate.http.headers import Headers
from certgate.http.query import QueryParams


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """A single inbound HTTP request.

    ``raw_path`` is the undecoded request target path when the server
    provides one.

    Body access (``body()``, ``text()``, ``json()``) reads the ASGI
    receive channel once; the bytes are cached in ``_cache`` which is
    shared with any copy made by ``with_query()``.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    raw_path: str | None = None

    _receive: Receive = field(default=_empty_receive, repr=False, compare=False)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def is_json(self) -> bool:
        """True when the client declared a JSON body."""
        return "json" in (self.content_type or "")

    @property
    def url(self) -> str:
        """Path plus query string, as the client would have sent it."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw.decode('latin-1')}"
        return self.path

    def with_query(self, **values: str) -> Request:
        """Return a copy whose query parameters include *values*."""
        return replace(self, query=self.query.merged(**values))

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield body chunks straight from the receive channel."""
        while True:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def body(self) -> bytes:
        """Read the full request body (cached after the first read)."""
        if "body" not in self._cache:
            self._cache["body"] = b"".join([chunk async for chunk in self.stream()])
        return self._cache["body"]

    async def text(self) -> str:
        """Read the body as UTF-8 text."""
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON. An empty body parses to ``None``."""
        if "json" not in self._cache:
            raw = await self.body()
            self._cache["json"] = json_module.loads(raw) if raw.strip() else None
        return self._cache["json"]

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI ``http`` scope."""
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            raw_path=raw_path.decode("latin-1") if raw_path else None,
            _receive=receive,
        )
