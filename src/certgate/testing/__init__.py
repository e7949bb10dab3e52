"""Test utilities for certgate applications.

    from certgate.testing import TestClient
"""

from certgate.testing.client import TestClient

__all__ = ["TestClient"]
