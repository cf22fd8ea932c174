"""Unit tests for salon_api.core.config: settings validation."""

import unittest

from pydantic import ValidationError

from tests.support import ACCESS_SECRET, make_settings


class TestJwtSettings(unittest.TestCase):
    def test_secrets_must_differ(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            make_settings(JWT_REFRESH_SECRET=ACCESS_SECRET)
        self.assertIn("must differ", str(ctx.exception))

    def test_prod_rejects_default_secrets(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(
                APP_ENV="prod",
                JWT_SECRET="change-me-in-production",
                JWT_REFRESH_SECRET="another-refresh-secret-abcdefghijklmnop",
            )

    def test_prod_accepts_custom_secrets(self) -> None:
        settings = make_settings(APP_ENV="prod")
        self.assertTrue(settings.is_production)

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_SECRET="   ")

    def test_non_hmac_algorithm_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_ALGORITHM="RS256")

    def test_algorithm_normalized(self) -> None:
        self.assertEqual(make_settings(JWT_ALGORITHM=" hs512 ").JWT_ALGORITHM, "HS512")

    def test_expiry_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_ACCESS_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            make_settings(JWT_REFRESH_EXPIRE_MINUTES=60 * 24 * 365)


class TestDatabaseSettings(unittest.TestCase):
    def test_postgres_and_sqlite_accepted(self) -> None:
        for url in ("postgresql://u:p@db:5432/salon", "sqlite://", "sqlite:///./salon.db"):
            with self.subTest(url=url):
                self.assertEqual(make_settings(DATABASE_URL=url).DATABASE_URL, url)

    def test_other_scheme_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="mysql://u:p@db/salon")

    def test_pool_timeout_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DB_POOL_TIMEOUT_SEC=0)


class TestMiscSettings(unittest.TestCase):
    def test_bcrypt_rounds_bounds(self) -> None:
        for rounds in (3, 17):
            with self.subTest(rounds=rounds):
                with self.assertRaises(ValidationError):
                    make_settings(BCRYPT_ROUNDS=rounds)

    def test_log_level_normalized(self) -> None:
        self.assertEqual(make_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")

    def test_api_prefix_trailing_slash_removed(self) -> None:
        self.assertEqual(make_settings(API_V1_PREFIX="/api/v1/").API_V1_PREFIX, "/api/v1")


if __name__ == "__main__":
    unittest.main()
