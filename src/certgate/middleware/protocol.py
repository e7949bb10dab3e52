"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The gateway checks the shape, not the lineage.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from certgate.http.request import Request
from certgate.http.response import Response

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for certgate middleware.

    Accepts both functions and callable objects::

        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            return response.with_header("X-Time", f"{time.monotonic() - start:.3f}")
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...


def chain(handler: Next, middleware: tuple[Middleware, ...]) -> Next:
    """Wrap *handler* so ``middleware[0]`` runs outermost."""
    for mw in reversed(middleware):

        async def call(req: Request, _mw: Middleware = mw, _next: Next = handler) -> Response:
            return await _mw(req, _next)

        handler = call
    return handler
