"""
Pytest fixtures for frontend/Flask tests.
"""

import pytest

import frontend.app as app_module


@pytest.fixture
def app():
    """Flask app fixture with test configuration."""
    app_module.app.config["TESTING"] = True
    return app_module.app


@pytest.fixture
def client(app, service, mocker):
    """
    Flask test client whose routes use the in-memory job service.

    Routes reach the store through frontend.app._get_service, so patching it
    keeps every request away from MongoDB.
    """
    mocker.patch.object(app_module, "_service", None)
    mocker.patch.object(app_module, "_get_service", return_value=service)
    return app.test_client()


@pytest.fixture
def create_job(client, acme_fields):
    """POST a job and return its JSON body."""
    def _create(**overrides):
        response = client.post("/api/jobs", json={**acme_fields, **overrides})
        assert response.status_code == 201
        return response.get_json()

    return _create
