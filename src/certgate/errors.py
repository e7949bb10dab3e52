"""certgate exception hierarchy.

Shared by the config layer, the collaborator registry, and the dispatcher
so startup and request paths raise and catch the same types.
"""


class CertgateError(Exception):
    """Base for all certgate-specific errors."""


class ConfigurationError(CertgateError):
    """Raised when the gateway configuration is invalid.

    Surfaces at startup (``GatewayConfig.from_env()``, collaborator
    resolution, ``App._freeze()``), never while serving a request.
    """


class CollaboratorTimeout(CertgateError, TimeoutError):  # noqa: N818
    """A collaborator did not produce a response within its deadline.

    The dispatcher converts this into the same 500 response used for any
    other collaborator failure.
    """

    def __init__(self, slot: str, timeout: float) -> None:
        self.slot = slot
        self.timeout = timeout
        super().__init__(f"Collaborator {slot!r} timed out after {timeout:g}s")
