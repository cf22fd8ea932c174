"""Tests for the create_user command-line script."""

import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salon_api.models import Base, User
from salon_api.scripts import create_user
from tests.support import PASSWORD, make_settings


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        patches = [
            patch.object(create_user, "get_settings", return_value=make_settings()),
            patch.object(create_user, "build_engine", return_value=self.engine),
            patch.object(create_user, "load_dotenv"),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def tearDown(self) -> None:
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def _row(self, email: str) -> User | None:
        with sessionmaker(bind=self.engine)() as db:
            return db.query(User).filter(User.email == email).first()

    def test_creates_admin(self) -> None:
        code = create_user.main(["Owner@Example.com", PASSWORD, "Salon", "Owner", "admin"])
        self.assertEqual(code, 0)
        user = self._row("owner@example.com")
        self.assertEqual(user.role, "admin")
        self.assertTrue(user.check_password(PASSWORD))

    def test_defaults_to_customer(self) -> None:
        self.assertEqual(create_user.main(["cara@example.com", PASSWORD, "Cara", "Lee"]), 0)
        self.assertEqual(self._row("cara@example.com").role, "customer")

    def test_duplicate_email_fails(self) -> None:
        self.assertEqual(create_user.main(["cara@example.com", PASSWORD, "Cara", "Lee"]), 0)
        self.assertEqual(create_user.main(["cara@example.com", PASSWORD, "Cara", "Lee"]), 1)

    def test_weak_password_fails(self) -> None:
        self.assertEqual(create_user.main(["cara@example.com", "weak", "Cara", "Lee"]), 1)
        self.assertIsNone(self._row("cara@example.com"))


if __name__ == "__main__":
    unittest.main()
