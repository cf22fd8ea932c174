"""Shared helpers: test settings, a controllable clock and an API test case base."""

import unittest
from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi.testclient import TestClient
from httpx import Response

from salon_api.core.config import Settings
from salon_api.core.roles import UserRole
from salon_api.main import create_app
from salon_api.models import Base, User

ACCESS_SECRET = "test-access-secret-0123456789abcdef0123"
REFRESH_SECRET = "test-refresh-secret-0123456789abcdef012"
PASSWORD = "Passw0rd"


def make_settings(**overrides: Any) -> Settings:
    """Settings for an isolated in-memory app; no .env file is read."""
    values: dict[str, Any] = {
        "APP_ENV": "test",
        "DATABASE_URL": "sqlite://",
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
        "JWT_SECRET": ACCESS_SECRET,
        "JWT_REFRESH_SECRET": REFRESH_SECRET,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FrozenClock:
    """Callable clock for TokenService; advance it to cross expiry boundaries."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def find_keys(obj: Any, needle: str) -> list[str]:
    """Every key, at any depth, whose name contains needle (case-insensitive)."""
    found: list[str] = []
    if isinstance(obj, dict):
        for key, value in obj.items():
            if needle.lower() in str(key).lower():
                found.append(key)
            found.extend(find_keys(value, needle))
    elif isinstance(obj, list):
        for item in obj:
            found.extend(find_keys(item, needle))
    return found


class AppTestCase(unittest.TestCase):
    """Builds a fresh app with its own in-memory database for every test."""

    settings_overrides: dict[str, Any] = {}

    def setUp(self) -> None:
        self.settings = make_settings(**self.settings_overrides)
        self.app = create_app(self.settings)
        self.engine = self.app.state.engine
        Base.metadata.create_all(self.engine)
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def session(self):
        return self.app.state.session_factory()

    def register(
        self,
        email: str = "alice@example.com",
        password: str = PASSWORD,
        first_name: str = "Alice",
        last_name: str = "Smith",
        **extra: Any,
    ) -> Response:
        body = {
            "email": email,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
            **extra,
        }
        return self.client.post("/api/v1/auth/register", json=body)

    def login(self, email: str = "alice@example.com", password: str = PASSWORD) -> Response:
        return self.client.post("/api/v1/auth/login", json={"email": email, "password": password})

    def access_token(self, email: str = "alice@example.com", password: str = PASSWORD) -> str:
        response = self.login(email, password)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["data"]["tokens"]["accessToken"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def set_role(self, email: str, role: UserRole) -> None:
        """Change a role straight in the store, bypassing the API."""
        with self.session() as db:
            user = db.query(User).filter(User.email == email).one()
            user.role = role.value
            db.commit()

    def get_user_row(self, email: str) -> User | None:
        with self.session() as db:
            user = db.query(User).filter(User.email == email).first()
            if user is not None:
                db.expunge(user)
            return user
