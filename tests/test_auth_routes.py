import threading

from sqlalchemy import func, select

from shortlist_api.config import settings
from shortlist_api.database import AsyncSessionLocal
from shortlist_api.limiter import limiter
from shortlist_api.models import AuditLog, User
from shortlist_api.services import auth as auth_service


def test_register_returns_user_and_token(client):
    """Registration creates the account and logs it in."""
    response = client.post(
        "/v1/auth/register",
        json={"name": "Ada", "email": "Ada@Example.com", "password": "correct horse"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "ada@example.com"
    assert data["user"]["name"] == "Ada"
    assert isinstance(data["user"]["id"], int)
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]
    assert data["token"]["token_type"] == "bearer"
    assert data["token"]["access_token"]
    assert data["token"]["expires_in"] == 60 * 60


def test_register_duplicate_email_conflicts(client, register):
    register(email="ada@example.com")
    response = client.post(
        "/v1/auth/register",
        json={"name": "Ada again", "email": "ada@example.com", "password": "another pass"},
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "conflict"


def test_register_duplicate_email_is_case_insensitive(client, register):
    register(email="ada@example.com")
    response = client.post(
        "/v1/auth/register",
        json={"name": "Ada", "email": "ADA@EXAMPLE.COM", "password": "correct horse"},
    )
    assert response.status_code == 409


def test_register_rejects_invalid_body(client):
    """Malformed registration bodies are 400, not FastAPI's default 422."""
    bad_bodies = [
        {"name": "Ada", "email": "not-an-email", "password": "correct horse"},
        {"name": "Ada", "email": "ada@example.com", "password": "short"},
        {"name": "   ", "email": "ada@example.com", "password": "correct horse"},
        {"email": "ada@example.com", "password": "correct horse"},
    ]
    for body in bad_bodies:
        response = client.post("/v1/auth/register", json=body)
        assert response.status_code == 400, body
        error = response.json()["error"]
        assert error["code"] == "validation_error"
        assert error["details"]


def test_validation_errors_do_not_echo_passwords(client):
    response = client.post(
        "/v1/auth/register",
        json={"name": "Ada", "email": "ada@example.com", "password": "s3cr3t!"},
    )
    assert response.status_code == 400
    assert "s3cr3t!" not in response.text


def test_login_returns_token(client, register):
    register(email="ada@example.com", password="correct horse")
    response = client.post(
        "/v1/auth/login",
        json={"email": "ada@example.com", "password": "correct horse"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]

    # The token opens the authenticated group
    shortlist = client.get(
        "/v1/users/shortlist",
        headers={"Authorization": f"Bearer {data['access_token']}"},
    )
    assert shortlist.status_code == 200


def test_login_with_wrong_password(client, register):
    register(email="ada@example.com", password="correct horse")
    response = client.post(
        "/v1/auth/login",
        json={"email": "ada@example.com", "password": "wrong horse"},
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "authentication_error"
    assert response.headers["www-authenticate"] == "Bearer"


def test_login_unknown_email_matches_wrong_password(client, register):
    """Unknown accounts and bad passwords are indistinguishable."""
    register(email="ada@example.com", password="correct horse")
    wrong_password = client.post(
        "/v1/auth/login",
        json={"email": "ada@example.com", "password": "wrong horse"},
    )
    unknown = client.post(
        "/v1/auth/login",
        json={"email": "nobody@example.com", "password": "correct horse"},
    )
    assert unknown.status_code == 401
    assert unknown.json() == wrong_password.json()


def test_register_and_login_are_audited(client, register):
    register(email="ada@example.com", password="correct horse")
    client.post("/v1/auth/login", json={"email": "ada@example.com", "password": "correct horse"})

    async def fetch_actions():
        async with AsyncSessionLocal() as session:
            result = await session.execute(select(AuditLog).order_by(AuditLog.id))
            return [(log.action, log.user_email) for log in result.scalars().all()]

    actions = client.portal.call(fetch_actions)
    assert actions == [
        ("user_registered", "ada@example.com"),
        ("user_logged_in", "ada@example.com"),
    ]


def test_racing_duplicate_registration_conflicts(client, register, monkeypatch):
    """
    If the email is taken after the pre-check passed, the unique index
    turns the insert into a 409 and nothing from the loser is kept.
    """
    async def never_taken(db, email):
        return False

    register(email="ada@example.com")
    monkeypatch.setattr("shortlist_api.routes.auth.email_taken", never_taken)

    response = client.post(
        "/v1/auth/register",
        json={"name": "Ada again", "email": "ada@example.com", "password": "another pass"},
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "conflict"

    async def count_rows():
        async with AsyncSessionLocal() as session:
            users = await session.scalar(select(func.count(User.id)))
            audits = await session.scalar(select(func.count(AuditLog.id)))
            return users, audits

    assert client.portal.call(count_rows) == (1, 1)


def test_login_is_rate_limited(client, monkeypatch):
    monkeypatch.setattr(settings, "AUTH_RATE_LIMIT", "2/minute")
    limiter.reset()
    try:
        credentials = {"email": "nobody@example.com", "password": "whatever"}
        for _ in range(2):
            assert client.post("/v1/auth/login", json=credentials).status_code == 401

        response = client.post("/v1/auth/login", json=credentials)
        assert response.status_code == 429
        error = response.json()["error"]
        assert error["code"] == "rate_limited"
        assert "2 per 1 minute" in error["message"]
    finally:
        limiter.reset()


def test_password_work_runs_off_the_event_loop(client, register, monkeypatch):
    loop_thread = client.portal.call(threading.get_ident)
    threads = []

    def recording_hash(password):
        threads.append(threading.get_ident())
        return auth_service.hash_password(password)

    def recording_verify(password, password_hash):
        threads.append(threading.get_ident())
        return auth_service.verify_password(password, password_hash)

    monkeypatch.setattr("shortlist_api.routes.auth.hash_password", recording_hash)
    monkeypatch.setattr("shortlist_api.routes.auth.verify_password", recording_verify)

    register(email="ada@example.com", password="correct horse")
    response = client.post(
        "/v1/auth/login",
        json={"email": "ada@example.com", "password": "correct horse"},
    )
    assert response.status_code == 200

    assert len(threads) == 2
    assert loop_thread not in threads
