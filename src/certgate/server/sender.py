"""ASGI response sending: translates a Response into ASGI messages."""

from certgate._internal.asgi import Send, encode_headers
from certgate.http.response import Response


def _body_allowed(status: int, method: str) -> bool:
    """Whether a response to *method* with *status* may carry a body."""
    # RFC 9110: 1xx, 204 and 304 never have a body; HEAD gets headers only.
    if method == "HEAD":
        return False
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, method: str = "GET") -> None:
    """Translate a certgate Response into ASGI send() calls.

    Content-Length always reflects the full body, including for ``HEAD``.
    Exactly one Content-Type is sent; a ``Content-Type`` entry in
    ``response.headers`` replaces ``response.content_type``.
    """
    full_body = response.body_bytes
    body = full_body if _body_allowed(response.status, method) else b""
    length = len(full_body) if method == "HEAD" else len(body)

    content_type = response.content_type.encode("latin-1")
    extra: list[tuple[bytes, bytes]] = []
    for name, value in encode_headers(response.headers):
        if name == b"content-type":
            # A handler-set header wins over the response field
            content_type = value
        elif name != b"content-length":
            extra.append((name, value))

    raw_headers = [(b"content-type", content_type), *extra]
    raw_headers.append((b"content-length", str(length).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send({"type": "http.response.body", "body": body})
