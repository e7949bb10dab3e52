"""Gateway configuration.

GatewayConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups. The only value read from
the environment is the listening port (``PORT``).
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from certgate.errors import ConfigurationError
from certgate.middleware.cors import CORSConfig

DEFAULT_PORT = 5000


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """Gateway configuration. Immutable after creation.

    All fields have working defaults. Override what you need::

        config = GatewayConfig(port=8080, static_dir="dist")
    """

    # Server
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    workers: int = 1  # 0 = auto-detect from CPU count
    request_timeout: float = 30.0

    # Static site
    static_dir: str | Path = "public"
    index_file: str = "index.html"
    cache_control: str = "no-cache"

    # Collaborators (None = no deadline)
    collaborator_timeout: float | None = 30.0

    # Logging
    log_level: str = "info"
    log_format: str = "text"

    cors: CORSConfig = field(default_factory=CORSConfig)

    @property
    def static_path(self) -> Path:
        """The static directory as an absolute, resolved path."""
        return Path(self.static_dir).resolve()

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "GatewayConfig":
        """Build a config from ``PORT`` in *environ*, then apply *overrides*.

        Raises ``ConfigurationError`` if ``PORT`` is set but not a valid port.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        raw_port = env.get("PORT", "").strip()
        if raw_port:
            try:
                port = int(raw_port)
            except ValueError:
                msg = f"PORT must be an integer, got {raw_port!r}"
                raise ConfigurationError(msg) from None
            if not 0 <= port <= 65535:
                msg = f"PORT out of range: {port}"
                raise ConfigurationError(msg)
            values["port"] = port

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "GatewayConfig":
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
