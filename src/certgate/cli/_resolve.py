"""App resolution shared by ``certgate run`` and ``certgate routes``.

An explicit ``"module:attribute"`` string names an App instance or a
zero-argument factory. Without one, the default gateway is assembled from
the environment.
"""

from certgate.app import App
from certgate.collaborators import Collaborators, resolve_import_string
from certgate.config import GatewayConfig


def default_app() -> App:
    """Gateway configured from ``PORT`` and ``CERTGATE_<SLOT>`` variables."""
    return App(GatewayConfig.from_env(), collaborators=Collaborators.from_env())


def resolve_app(import_string: str | None) -> App:
    """Resolve an import string (or ``None``) to a certgate App.

    When the attribute portion is omitted it defaults to ``app``
    (``"myproject.gateway"`` resolves to ``myproject.gateway:app``).
    Factories are called once.

    Raises:
        ConfigurationError: If the module or attribute cannot be found.
        TypeError: If the resolved object is not an App, or a factory fails.
    """
    if import_string is None:
        return default_app()

    if ":" not in import_string:
        import_string = f"{import_string}:app"

    obj = resolve_import_string(import_string)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a certgate.App instance"
        raise TypeError(msg)

    return obj
