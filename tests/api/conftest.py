"""Fixtures for the HTTP layer: a test app serving the translation routes."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import get_limiter
from infrastructure.services import get_translation_service
from modules.translations.api import router as translations_router
from utils.tests import create_test_app

API_PREFIX = "/api/i18n"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    get_limiter().reset()
    yield
    get_limiter().reset()


@pytest.fixture
def translations_app(service):
    app = create_test_app(translations_router, prefix=API_PREFIX)
    app.dependency_overrides[get_translation_service] = lambda: service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(translations_app):
    return TestClient(translations_app)
