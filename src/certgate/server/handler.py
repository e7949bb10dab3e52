"""ASGI handler: translates ASGI scope/messages to certgate types.

The only component that touches raw ``http`` scopes. Builds a Request,
runs it through the middleware chain around the dispatcher, and sends the
Response back through ASGI ``send()``.
"""

import logging

from certgate._internal.asgi import Receive, Scope, Send
from certgate.http.request import Request
from certgate.http.response import Response
from certgate.middleware.cors import CORSMiddleware
from certgate.middleware.protocol import Middleware, Next, chain
from certgate.server.sender import send_response

logger = logging.getLogger("certgate.server")


def internal_error_response(cors: CORSMiddleware | None = None) -> Response:
    """Plain 500 for failures outside any collaborator."""
    response = Response(
        body="Internal Server Error",
        status=500,
        content_type="text/plain; charset=utf-8",
    )
    return cors.apply(response) if cors is not None else response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Next,
    middleware: tuple[Middleware, ...] = (),
    cors: CORSMiddleware | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline.

    *middleware* is applied outermost first. Any exception escaping the
    chain is logged and answered with a plain 500 so the server keeps
    serving.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    pipeline = chain(dispatcher, middleware)

    try:
        response = await pipeline(request)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = internal_error_response(cors)

    await send_response(response, send, method=request.method)
