"""Unit tests for book_network.core.config.Settings validators."""

import unittest

from pydantic import ValidationError

from book_network.core.config import Settings


class TestSettingsValidation(unittest.TestCase):
    def test_accepts_postgres_and_sqlite(self) -> None:
        for url in ("postgresql+psycopg2://u:p@db:5432/books", "sqlite://", "sqlite:///./books.db"):
            with self.subTest(url=url):
                self.assertEqual(Settings(DATABASE_URL=f"  {url} ").DATABASE_URL, url)

    def test_rejects_other_database_urls(self) -> None:
        for url in ("", "mysql://u:p@db/books"):
            with self.subTest(url=url):
                with self.assertRaises(ValidationError):
                    Settings(DATABASE_URL=url)

    def test_log_level_is_normalized(self) -> None:
        self.assertEqual(Settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            Settings(LOG_LEVEL="chatty")

    def test_bcrypt_rounds_range(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=3)
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=17)

    def test_activation_settings_range(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(ACTIVATION_CODE_LENGTH=3)
        with self.assertRaises(ValidationError):
            Settings(ACTIVATION_TOKEN_EXPIRE_MINUTES=0)

    def test_blank_jwt_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET="   ")

    def test_default_role_is_stripped(self) -> None:
        self.assertEqual(Settings(DEFAULT_ROLE=" USER ").DEFAULT_ROLE, "USER")


if __name__ == "__main__":
    unittest.main()
