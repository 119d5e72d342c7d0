"""Auth API — login, the bearer guard chain and 401 responses.

Tests:
    - Login returns a token that authenticates later requests
    - Wrong password and unknown email give identical 401 bodies (minus timestamp)
    - Missing, malformed, forged and expired tokens all give 401 with WWW-Authenticate
    - Public routes (register, login, health) need no token
    - Login email is normalized like the registered one; health reports the app version
"""

from datetime import datetime, timedelta, timezone

from socialgraph import __version__
from socialgraph.api.dependencies import get_token_config, get_token_validator
from socialgraph.core.tokens import TokenConfig, TokenIssuer, TokenValidator
from socialgraph.infrastructure import database
from socialgraph.main import app


def _strip_timestamp(body):
    body["error"].pop("timestamp", None)
    return body


async def test_login_returns_token_and_user_id(client, register):
    user = await register("alice")
    response = await client.post(
        "/api/v1/login", json={"email": "alice@example.com", "password": "secret1"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == user["id"]
    assert data["token"].count(".") == 2


async def test_login_with_mixed_case_domain_as_registered(client, register):
    user = await register("bob", email="Bob@Example.COM")
    assert user["email"] == "Bob@example.com"
    for email in ("Bob@Example.COM", " Bob@example.com "):
        response = await client.post(
            "/api/v1/login", json={"email": email, "password": "secret1"},
        )
        assert response.status_code == 200, email
        assert response.json()["user_id"] == user["id"]


async def test_token_authenticates_requests(client, signup):
    user, headers = await signup("alice")
    response = await client.get(f"/api/v1/users/{user['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["handle"] == "alice"


async def test_login_failures_identical(client, register):
    await register("alice")
    wrong_password = await client.post(
        "/api/v1/login", json={"email": "alice@example.com", "password": "nope-nope"},
    )
    unknown_email = await client.post(
        "/api/v1/login", json={"email": "ghost@example.com", "password": "secret1"},
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert _strip_timestamp(wrong_password.json()) == _strip_timestamp(unknown_email.json())
    assert wrong_password.json()["error"]["message"] == "Invalid email or password"


async def test_login_malformed_email_is_401(client):
    response = await client.post(
        "/api/v1/login", json={"email": "not-an-email", "password": "secret1"},
    )
    assert response.status_code == 401


async def test_missing_token_is_401(client):
    response = await client.get("/api/v1/publications")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"


async def test_wrong_scheme_is_401(client, signup):
    _, headers = await signup("alice")
    token = headers["Authorization"].split()[1]
    response = await client.get(
        "/api/v1/publications", headers={"Authorization": f"Token {token}"},
    )
    assert response.status_code == 401


async def test_forged_token_is_401(client, signup):
    _, headers = await signup("alice")
    header, payload, signature = headers["Authorization"].split()[1].split(".")
    forged = f"{header}.{payload}.{signature[::-1]}"
    response = await client.get(
        "/api/v1/publications", headers={"Authorization": f"Bearer {forged}"},
    )
    assert response.status_code == 401


async def test_token_signed_with_other_secret_is_401(client, register):
    user = await register("alice")
    config = get_token_config()
    other = TokenConfig(secret="some-other-secret", ttl=config.ttl)
    token = TokenIssuer(other).issue(user["id"])
    response = await client.get(
        "/api/v1/publications", headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 401


async def test_expired_token_is_401(client, signup):
    _, headers = await signup("alice")
    later = datetime.now(timezone.utc) + timedelta(hours=7)
    app.dependency_overrides[get_token_validator] = lambda: TokenValidator(
        get_token_config(), clock=lambda: later,
    )
    response = await client.get("/api/v1/publications", headers=headers)
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


async def test_token_still_valid_five_hours_later(client, signup):
    _, headers = await signup("alice")
    later = datetime.now(timezone.utc) + timedelta(hours=5)
    app.dependency_overrides[get_token_validator] = lambda: TokenValidator(
        get_token_config(), clock=lambda: later,
    )
    response = await client.get("/api/v1/publications", headers=headers)
    assert response.status_code == 200


async def test_health_is_public(client):
    live = await client.get("/api/v1/health/")
    assert live.status_code == 200
    assert live.json()["version"] == app.version == __version__
    ready = await client.get("/api/v1/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database_is_503(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "reason": "database_unavailable"}
