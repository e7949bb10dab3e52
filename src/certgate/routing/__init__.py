"""Routing: the fixed, ordered API routing table.

Rows are plain data, bound to collaborators when the app freezes.
"""

from certgate.routing.route import ApiMatch, ApiRoute
from certgate.routing.router import API_ROUTES, AVAILABLE_ENDPOINTS, ApiRouter, is_api_path

__all__ = [
    "API_ROUTES",
    "AVAILABLE_ENDPOINTS",
    "ApiMatch",
    "ApiRoute",
    "ApiRouter",
    "is_api_path",
]
