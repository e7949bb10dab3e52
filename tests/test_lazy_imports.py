"""Tests for certgate.__init__ lazy exports."""

import pytest

import certgate


@pytest.mark.parametrize("name", certgate.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    assert getattr(certgate, name) is not None


def test_exports_are_the_real_objects() -> None:
    from certgate.app import App
    from certgate.routing.router import API_ROUTES

    assert certgate.App is App
    assert certgate.API_ROUTES is API_ROUTES


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        certgate.__getattr__("ThisDoesNotExist")
