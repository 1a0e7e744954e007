from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from juliaydavid.main import create_app
from tests.conftest import PASSWORDS


def test_login_returns_verifiable_token(client):
    for username, password in PASSWORDS.items():
        response = client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200
        body = response.json()
        assert body["username"] == username

        identity = client.app.state.ctx.tokens.verify(body["token"])
        assert identity.username == username


def test_wrong_password(client):
    response = client.post("/api/login", json={"username": "Julia", "password": "incorrecta"})
    assert response.status_code == 401
    assert response.json() == {"error": "Credenciales incorrectas"}
    assert "token" not in response.json()


def test_unknown_user(client):
    response = client.post("/api/login", json={"username": "Nadie", "password": "x"})
    assert response.status_code == 401


def test_missing_fields(client):
    response = client.post("/api/login", json={"username": "Julia"})
    assert response.status_code == 400
    assert response.json() == {"error": "Usuario y contraseña requeridos"}


def test_login_without_secret_key_fails_closed(settings):
    settings.SECRET_KEY = None
    with TestClient(create_app(settings)) as client:
        response = client.post("/api/login", json={"username": "Julia", "password": PASSWORDS["Julia"]})
    assert response.status_code == 500
    assert response.json() == {"error": "Configuración del servidor incompleta"}


def test_malformed_and_expired_tokens(client):
    response = client.post("/api/messages", json={"text": "hola"}, headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.json() == {"error": "Token inválido"}
    assert response.headers["www-authenticate"] == "Bearer"

    tokens = client.app.state.ctx.tokens
    old = tokens.create_access_token(
        1, "Julia",
        expires_delta=timedelta(seconds=1),
        issued_at=datetime.now(timezone.utc) - timedelta(minutes=1),
    )
    response = client.post("/api/messages", json={"text": "hola"}, headers={"Authorization": f"Bearer {old}"})
    assert response.status_code == 401
    assert response.json() == {"error": "Token expirado"}


def test_health_and_unknown_route(client):
    assert client.get("/api/health").json() == {"status": "ok"}

    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
