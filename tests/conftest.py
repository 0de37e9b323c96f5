"""Shared fixtures."""

import pytest

from snap_eligibility.parameters import load_parameters, reset_parameters


@pytest.fixture
def params():
    """The bundled Vermont parameter table."""
    return load_parameters()


@pytest.fixture(autouse=True)
def _fresh_parameter_cache(monkeypatch):
    monkeypatch.delenv("SNAP_ELIGIBILITY_PARAMETERS", raising=False)
    reset_parameters()
    yield
    reset_parameters()
