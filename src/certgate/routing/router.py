"""The API routing table and its compiled router.

The table is data: an ordered tuple of ``ApiRoute`` rows evaluated top to
bottom, first match wins. ``ApiRouter`` binds each row to a collaborator
once, at startup, so no module loading happens per request.
"""

from certgate.collaborators import Collaborators
from certgate.routing.route import ApiMatch, ApiRoute

API_PREFIX = "/api/"

API_ROUTES: tuple[ApiRoute, ...] = (
    ApiRoute("/api/certificates", "certificates"),
    ApiRoute("/api/certificates/lookup/", "certificate_lookup", match="prefix", inject="number"),
    ApiRoute("/api/lookup", "lookup"),
    ApiRoute("/api/auth/login", "login"),
    ApiRoute("/api/setup/database", "setup_database"),
)

# Reported in 404 bodies. Fixed list, not derived from API_ROUTES.
AVAILABLE_ENDPOINTS: tuple[str, ...] = (
    "/api/lookup",
    "/api/certificates",
    "/api/auth/login",
    "/api/setup/database",
)


def is_api_path(path: str) -> bool:
    return path.startswith(API_PREFIX)


class ApiRouter:
    """Routing table bound to collaborators.

    Usage::

        router = ApiRouter(Collaborators(certificates=list_certs))
        match = router.match("/api/certificates")
        if match is not None:
            response = await match.handler(request)
    """

    __slots__ = ("_bound", "_routes")

    def __init__(
        self,
        collaborators: Collaborators | None = None,
        routes: tuple[ApiRoute, ...] = API_ROUTES,
    ) -> None:
        collaborators = collaborators or Collaborators()
        self._routes = routes
        # Resolve every slot now so a bad table fails at startup
        self._bound = tuple((route, collaborators.get(route.collaborator)) for route in routes)

    @property
    def routes(self) -> tuple[ApiRoute, ...]:
        """The routing table, in evaluation order."""
        return self._routes

    def match(self, path: str, raw_path: str | None = None) -> ApiMatch | None:
        """First route matching *path*, or ``None``. Method-agnostic."""
        for route, handler in self._bound:
            if route.matches(path):
                updates = route.query_updates(path, raw_path)
                return ApiMatch(route=route, handler=handler, query_updates=updates)
        return None

    def handler_for(self, route: ApiRoute) -> object:
        """The collaborator bound to *route*."""
        for bound_route, handler in self._bound:
            if bound_route is route:
                return handler
        raise KeyError(route.path)
