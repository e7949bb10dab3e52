"""HTTP response with a chainable ``.with_*()`` transformation API.

Each transformation returns a new Response. Collaborators build their own
responses with these helpers; the dispatcher builds the JSON error bodies
and the static branch builds file responses.
"""

from __future__ import annotations

import json as json_module
import mimetypes
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# mimetypes reads the platform registry, which is not reliable for these
_CONTENT_TYPES: dict[str, str] = {
    ".css": "text/css; charset=utf-8",
    ".html": "text/html; charset=utf-8",
    ".js": "text/javascript; charset=utf-8",
    ".mjs": "text/javascript; charset=utf-8",
    ".json": "application/json",
    ".map": "application/json",
    ".svg": "image/svg+xml",
    ".webmanifest": "application/manifest+json",
    ".woff2": "font/woff2",
}


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        name = name.lower()
        for key, value in self.headers:
            if key.lower() == name:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body_bytes)


def json_response(data: Any, status: int = 200) -> Response:
    """Serialize *data* as a JSON response."""
    return Response(
        body=json_module.dumps(data, ensure_ascii=False),
        status=status,
        content_type=JSON_CONTENT_TYPE,
    )


def guess_content_type(path: str | Path) -> str:
    """Content type for a file, inferred from its extension."""
    suffix = Path(path).suffix.lower()
    if suffix in _CONTENT_TYPES:
        return _CONTENT_TYPES[suffix]
    content_type, _ = mimetypes.guess_type(str(path))
    return content_type or "application/octet-stream"


def file_response(path: str | Path, body: bytes, *, cache_control: str | None = None) -> Response:
    """Build a 200 response carrying a file's raw contents."""
    response = Response(body=body, content_type=guess_content_type(path))
    if cache_control:
        response = response.with_header("Cache-Control", cache_control)
    return response
