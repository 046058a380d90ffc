from fastapi.testclient import TestClient

from api.routes.system import router as system_router
from infrastructure.configuration import Settings
from infrastructure.services import get_settings
from utils.tests import create_test_app

app = create_test_app(system_router)
client = TestClient(app)


def test_get_version_unknown():
    app.dependency_overrides[get_settings] = lambda: Settings(GIT_SHA="Unknown")
    response = client.get("/version")
    app.dependency_overrides.clear()
    assert response.status_code == 200
    assert response.json() == {"version": "Unknown"}


def test_get_version_known():
    app.dependency_overrides[get_settings] = lambda: Settings(GIT_SHA="foo")
    response = client.get("/version")
    app.dependency_overrides.clear()
    assert response.status_code == 200
    assert response.json() == {"version": "foo"}


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "I18n API Server is running"}


def test_info():
    app.dependency_overrides[get_settings] = lambda: Settings(GIT_SHA="abc")
    response = client.get("/")
    app.dependency_overrides.clear()
    body = response.json()
    assert body["name"] == "i18n-api"
    assert body["version"] == "abc"
    assert isinstance(body["timestamp"], int)
