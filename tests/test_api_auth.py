from fastapi.testclient import TestClient

from vidshare.api.app import create_app
from vidshare.services.container import ServiceContainer


def test_root_and_health(client):
    assert client.get("/").json() == {"message": "vidshare backend running"}
    assert client.get("/health").json() == {"backend": "running", "database": "connected"}


def test_register_returns_token_and_public_user(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": "secret123"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["token"]
    assert body["user"]["username"] == "alice"
    assert body["user"]["avatar"] == "https://i.pravatar.cc/150"
    assert "userId" in body["user"]
    assert "passwordHash" not in body["user"]
    assert "password_hash" not in body["user"]


def test_register_duplicate_email(client, register_user):
    register_user("alice")

    response = client.post(
        "/api/auth/register",
        json={"username": "other", "email": "alice@example.com", "password": "secret123"},
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Email already exists"}


def test_register_rejects_unknown_fields(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": "secret123", "isAdmin": True},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid request"
    assert any("isAdmin" in error["loc"] for error in body["errors"])


def test_register_rejects_short_password(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": "123"},
    )

    assert response.status_code == 400


def test_login(client, register_user):
    registered = register_user("alice")

    response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["userId"] == registered["user"]["userId"]


def test_login_unknown_user(client):
    response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"})

    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


def test_login_wrong_password(client, register_user):
    register_user("alice")

    response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope-nope"})

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid password"}


def test_protected_route_requires_token(client):
    assert client.get("/api/users/me").json() == {"message": "No token provided"}
    assert client.get("/api/users/me").status_code == 401


def test_protected_route_rejects_bad_scheme(client, register_user):
    token = register_user("alice")["token"]

    response = client.get("/api/users/me", headers={"Authorization": f"Token {token}"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid Authorization format"}


def test_protected_route_rejects_forged_token(client):
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not.a.jwt"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid Token"}


def test_health_reports_unavailable_database(settings, video_store, user_store):
    def broken() -> bool:
        raise ConnectionError("database down")

    container = ServiceContainer.build(
        settings, video_store=video_store, user_store=user_store, health_check=broken
    )
    client = TestClient(create_app(container=container))

    assert client.get("/health").json() == {"backend": "running", "database": "unavailable"}
