"""Unit tests for accounts.core.config.Settings validation."""

import unittest

from pydantic import SecretStr, ValidationError

from accounts.core.config import Settings


class TestSettingsValidation(unittest.TestCase):
    def test_defaults_are_valid(self) -> None:
        settings = Settings(JWT_SECRET=SecretStr("x" * 32))
        self.assertEqual(settings.ACCESS_TOKEN_EXPIRE_MINUTES, 1440)
        self.assertGreaterEqual(
            settings.REFRESH_TOKEN_EXPIRE_MINUTES, settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    def test_default_database_url_names_psycopg2_driver(self) -> None:
        # A bare postgresql:// URL resolves to psycopg 3 on newer SQLAlchemy.
        default = Settings.model_fields["DATABASE_URL"].default
        self.assertTrue(default.startswith("postgresql+psycopg2://"))

    def test_rejects_non_postgres_url(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://root@localhost/accounts")

    def test_rejects_blank_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET=SecretStr("   "))

    def test_rejects_refresh_shorter_than_access(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(ACCESS_TOKEN_EXPIRE_MINUTES=120, REFRESH_TOKEN_EXPIRE_MINUTES=60)

    def test_rejects_out_of_range_bcrypt_rounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=2)


if __name__ == "__main__":
    unittest.main()
