"""
Pytest fixtures for the UQFF test suite.
"""

import pytest
from app import create_app
from uqff.registry import build_default_registry
from uqff.parameters import AstrophysicalSystem


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def registry():
    """Fully populated default registry."""
    return build_default_registry()


@pytest.fixture
def system_params():
    """Default system parameter map (SGR 1745-2900, t = 1e10 s)."""
    return AstrophysicalSystem().to_param_map()
