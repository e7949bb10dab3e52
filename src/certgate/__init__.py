"""certgate: HTTP front door for the GIE certificate system.

Dispatches ``/api/*`` requests to five pluggable collaborators through a
fixed routing table and serves the single-page application for every other
path, falling back to its index document.

Basic usage::

    from certgate import App, Collaborators, GatewayConfig

    app = App(
        GatewayConfig.from_env(),
        collaborators=Collaborators(certificates=list_certificates),
    )
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "API_ROUTES",
    "AVAILABLE_ENDPOINTS",
    "App",
    "CertgateError",
    "CollaboratorTimeout",
    "Collaborators",
    "ConfigurationError",
    "GatewayConfig",
    "Request",
    "Response",
    "json_response",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import certgate`` cheap for the CLI entry point.
    """
    if name == "App":
        from certgate.app import App

        return App

    if name == "GatewayConfig":
        from certgate.config import GatewayConfig

        return GatewayConfig

    if name == "Collaborators":
        from certgate.collaborators import Collaborators

        return Collaborators

    if name == "Request":
        from certgate.http.request import Request

        return Request

    if name in ("Response", "json_response"):
        from certgate.http import response as _resp

        return getattr(_resp, name)

    if name in ("API_ROUTES", "AVAILABLE_ENDPOINTS"):
        from certgate.routing import router as _router

        return getattr(_router, name)

    if name in ("CertgateError", "CollaboratorTimeout", "ConfigurationError"):
        from certgate import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
