"""Request dispatch: API routing table first, static site for everything else.

Branch order is fixed and total. A path under ``/api/`` is answered by a
collaborator, a 404 listing the available endpoints, or a 500 describing the
collaborator failure, and never reaches the static branch. Every other path
is served from the static directory with index-document fallback.
"""

import logging

import anyio

from certgate._internal.invoke import invoke_offloaded
from certgate.errors import CollaboratorTimeout
from certgate.http.request import Request
from certgate.http.response import Response, json_response
from certgate.routing.route import ApiMatch
from certgate.routing.router import AVAILABLE_ENDPOINTS, ApiRouter, is_api_path
from certgate.server.static import SPAStaticFiles

logger = logging.getLogger("certgate.server")


def api_not_found(path: str) -> Response:
    """404 body for an ``/api/`` path with no routing-table entry."""
    return json_response(
        {
            "error": "API endpoint not found",
            "endpoint": path,
            "availableEndpoints": list(AVAILABLE_ENDPOINTS),
        },
        status=404,
    )


def api_internal_error(exc: BaseException, path: str) -> Response:
    """500 body for a collaborator that raised."""
    return json_response(
        {
            "error": "Internal server error",
            "details": str(exc),
            "endpoint": path,
        },
        status=500,
    )


def coerce_response(result: object) -> Response:
    """Accept a collaborator's return value as a response.

    ``Response`` passes through untouched; ``dict`` and ``list`` become a
    200 JSON body. Anything else is a collaborator bug.
    """
    if isinstance(result, Response):
        return result
    if isinstance(result, (dict, list)):
        return json_response(result)
    msg = f"Collaborator returned {type(result).__name__}, expected Response, dict or list"
    raise TypeError(msg)


class Dispatcher:
    """Innermost request handler, wrapped by the middleware chain.

    Usage::

        dispatcher = Dispatcher(ApiRouter(collaborators), SPAStaticFiles("public"))
        response = await dispatcher(request)
    """

    __slots__ = ("router", "static", "timeout")

    def __init__(
        self,
        router: ApiRouter,
        static: SPAStaticFiles,
        *,
        timeout: float | None = 30.0,
    ) -> None:
        self.router = router
        self.static = static
        self.timeout = timeout

    async def __call__(self, request: Request) -> Response:
        if is_api_path(request.path):
            return await self.dispatch_api(request)
        return await self.static(request)

    async def dispatch_api(self, request: Request) -> Response:
        path = request.path
        logger.info("API Request: %s %s", request.method, path)

        match = self.router.match(path, request.raw_path)
        if match is None:
            logger.info("API endpoint not found: %s", path)
            return api_not_found(path)

        try:
            return await self._call_collaborator(match, request)
        except Exception as exc:
            logger.exception("API Error: %s %s", request.method, path)
            return api_internal_error(exc, path)

    async def _call_collaborator(self, match: ApiMatch, request: Request) -> Response:
        if match.query_updates:
            request = request.with_query(**match.query_updates)

        if self.timeout is None:
            return coerce_response(await invoke_offloaded(match.handler, request))

        result: object = None
        with anyio.move_on_after(self.timeout) as scope:
            result = await invoke_offloaded(match.handler, request)
        if scope.cancelled_caught:
            raise CollaboratorTimeout(match.route.collaborator, self.timeout)
        return coerce_response(result)
