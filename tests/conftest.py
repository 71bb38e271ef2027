"""
Shared pytest fixtures for formbinding tests.

Provides a Flask application built from TestingConfig, a fresh rendering
context per test, structlog capture, and the form fixtures from
tests.fixtures.form_fixtures.
"""

from typing import Any, Dict

import pytest
import structlog
from structlog.testing import capture_logs

from config.settings import EnvironmentManager, TestingConfig
from formbinding import metrics
from formbinding.app import create_app
from formbinding.descriptor import clear_descriptor_cache

from tests.fixtures.form_fixtures import (  # noqa: F401
    install_form,
    login_form,
    profile_form,
    register_form,
)


@pytest.fixture
def testing_config(monkeypatch):
    """TestingConfig isolated from any .env file on the developer machine."""
    for key in ('LOG_LEVEL', 'LOG_FORMAT', 'LOG_FILE', 'FORMS_TEMPLATE_DATA_ATTR',
                'FORMS_INJECT_TEMPLATE_DATA', 'FORMS_METRICS_ENABLED'):
        monkeypatch.delenv(key, raising=False)
    return TestingConfig(EnvironmentManager(env_file=''))


@pytest.fixture
def app(testing_config):
    """Flask application configured for testing."""
    app = create_app(config=testing_config)
    yield app
    metrics.set_enabled(True)


@pytest.fixture
def request_context(app):
    with app.test_request_context('/'):
        yield


@pytest.fixture
def context() -> Dict[str, Any]:
    """Rendering context of a single request."""
    return {}


@pytest.fixture
def captured_logs():
    with capture_logs() as logs:
        yield logs


@pytest.fixture(autouse=True)
def reset_state():
    yield
    clear_descriptor_cache()
    structlog.contextvars.clear_contextvars()
