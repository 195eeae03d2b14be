"""
Tests for the password login routes and the auth gate
"""

import pytest
from fastapi.testclient import TestClient

from content_factory.core import SESSION_COOKIE_NAME
from content_factory.main import create_app
from content_factory.services.storage import FileBasedWorkflowRepository


@pytest.fixture
def client(tmp_path, llm):
    app = create_app(repository=FileBasedWorkflowRepository(tmp_path / "auth-store"), llm_provider=llm)
    with TestClient(app) as test_client:
        yield test_client


def test_login_sets_session_cookie(client):
    response = client.post("/auth/login", json={"username": "alice", "password": "alice-password"})

    assert response.status_code == 200
    body = response.json()
    assert body["authenticated"] is True
    assert body["auth_enabled"] is True
    assert body["user"] == "alice"
    assert body["token"].startswith("alice.")
    assert SESSION_COOKIE_NAME in response.cookies

    session = client.get("/auth/session").json()
    assert session == {"authenticated": True, "auth_enabled": True, "user": "alice", "token": None}
    assert client.get("/api/workflow").status_code == 200


def test_wrong_password(client):
    response = client.post("/auth/login", json={"username": "alice", "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid username or password"}


def test_password_only_opens_its_own_account(client, source_text):
    alice = client.post("/auth/login", json={"username": "alice", "password": "alice-password"}).json()
    project = client.post(
        "/api/workflow",
        json={"title": "t", "originalText": source_text},
        headers={"Authorization": f"Bearer {alice['token']}"},
    ).json()
    client.cookies.clear()

    impostor = client.post("/auth/login", json={"username": "alice", "password": "bob-password"})
    assert impostor.status_code == 401
    assert client.get(f"/api/workflow/{project['id']}").status_code == 401

    bob = client.post("/auth/login", json={"username": "bob", "password": "bob-password"}).json()
    client.cookies.clear()
    response = client.get(
        f"/api/workflow/{project['id']}",
        headers={"Authorization": f"Bearer {bob['token']}"},
    )
    assert response.status_code == 403


def test_unknown_account_is_rejected(client):
    response = client.post("/auth/login", json={"username": "mallory", "password": "alice-password"})
    assert response.status_code == 401


def test_username_with_separator_is_rejected(client):
    response = client.post("/auth/login", json={"username": "a.b", "password": "alice-password"})
    assert response.status_code == 400


def test_logout_clears_session(client):
    client.post("/auth/login", json={"username": "alice", "password": "alice-password"})
    client.post("/auth/logout")
    assert client.get("/auth/session").json()["authenticated"] is False
    assert client.get("/api/workflow").status_code == 401


def test_auth_disabled_uses_default_user(client, monkeypatch, source_text):
    monkeypatch.setenv("AUTH_ENABLED", "false")
    monkeypatch.setenv("AUTH_DEFAULT_USER", "solo")

    login = client.post("/auth/login", json={"username": "anyone", "password": "whatever"}).json()
    assert login == {"authenticated": True, "auth_enabled": False, "user": "solo", "token": None}

    project = client.post("/api/workflow", json={"title": "t", "originalText": source_text}).json()
    assert project["owner"] == "solo"


def test_custom_open_paths(client, monkeypatch):
    monkeypatch.setenv("AUTH_OPEN_PATHS", "/api/workflow/stages")
    assert client.get("/api/workflow/stages").status_code == 200
