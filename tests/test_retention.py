"""Unit and integration tests for token retention: delete-only run_token_retention."""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock

from book_network.core.database import SessionLocal, engine
from book_network.models import Base, Token
from book_network.models.base import utcnow
from book_network.repositories import TokenRepository, UserRepository
from book_network.services.retention import run_token_retention


def _settings(enabled: bool = True, hours: int = 48) -> MagicMock:
    settings = MagicMock()
    settings.TOKEN_RETENTION_ENABLED = enabled
    settings.TOKEN_RETENTION_HOURS = hours
    return settings


class TestRetentionDisabled(unittest.TestCase):
    """When TOKEN_RETENTION_ENABLED is False, run_token_retention does nothing."""

    def test_returns_zero_and_does_not_touch_session(self) -> None:
        session = MagicMock()
        self.assertEqual(run_token_retention(session, _settings(enabled=False)), 0)
        session.execute.assert_not_called()
        session.commit.assert_not_called()


class TestRetentionNoOldTokens(unittest.TestCase):
    def test_returns_zero_and_commits(self) -> None:
        session = MagicMock()
        session.execute.return_value.rowcount = 0
        self.assertEqual(run_token_retention(session, _settings()), 0)
        session.commit.assert_called_once()


class TestRetentionIntegration(unittest.TestCase):
    """Against the in-memory database: only tokens expired before the cutoff are removed."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)

    def test_deletes_only_long_expired_tokens(self) -> None:
        user = UserRepository(self.db).create(email="a@x.com", password_hash="h")
        tokens = TokenRepository(self.db)
        now = utcnow()
        tokens.create(user, "old", created_at=now - timedelta(hours=80), expires_at=now - timedelta(hours=72))
        tokens.create(user, "recent", created_at=now - timedelta(hours=2), expires_at=now - timedelta(hours=1))
        tokens.create(user, "live", created_at=now, expires_at=now + timedelta(minutes=15))
        self.db.commit()

        deleted = run_token_retention(self.db, _settings(hours=48))

        self.assertEqual(deleted, 1)
        remaining = sorted(t.token for t in self.db.query(Token).all())
        self.assertEqual(remaining, ["live", "recent"])

    def test_is_idempotent(self) -> None:
        user = UserRepository(self.db).create(email="a@x.com", password_hash="h")
        now = utcnow()
        TokenRepository(self.db).create(
            user, "old", created_at=now - timedelta(hours=80), expires_at=now - timedelta(hours=72)
        )
        self.db.commit()
        self.assertEqual(run_token_retention(self.db, _settings()), 1)
        self.assertEqual(run_token_retention(self.db, _settings()), 0)


if __name__ == "__main__":
    unittest.main()
