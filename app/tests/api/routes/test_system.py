from unittest.mock import MagicMock

from infrastructure.services import get_settings


def test_get_version_returns_git_sha(app, client):
    settings = MagicMock()
    settings.GIT_SHA = "abc123"
    app.dependency_overrides[get_settings] = lambda: settings

    response = client.get("/version")

    assert response.status_code == 200
    assert response.json() == {"version": "abc123"}


def test_get_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
