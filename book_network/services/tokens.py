"""Activation token lifecycle: issue a short numeric code, then consume it exactly once."""

import logging
import secrets
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from book_network.core.exceptions import (
    TokenAlreadyValidatedError,
    TokenExpiredError,
    TokenNotFoundError,
)
from book_network.models import Token, User
from book_network.models.base import as_utc, utcnow
from book_network.repositories import TokenRepository

if TYPE_CHECKING:
    from book_network.core.config import Settings

logger = logging.getLogger(__name__)

ACTIVATION_CODE_ALPHABET = "0123456789"

# Attempts at drawing a code not already in the tokens table.
MAX_CODE_ATTEMPTS = 10


def generate_activation_code(length: int) -> str:
    return "".join(secrets.choice(ACTIVATION_CODE_ALPHABET) for _ in range(length))


def is_token_valid(token: Token, now: datetime | None = None) -> bool:
    """A token is valid iff now is strictly before expires_at and it has not been validated."""
    now = now or utcnow()
    return token.validated_at is None and now < as_utc(token.expires_at)


class TokenService:
    def __init__(self, tokens: TokenRepository, settings: "Settings") -> None:
        self.tokens = tokens
        self.code_length = settings.ACTIVATION_CODE_LENGTH
        self.lifetime = timedelta(minutes=settings.ACTIVATION_TOKEN_EXPIRE_MINUTES)

    def issue_activation_token(self, user: User, now: datetime | None = None) -> Token:
        """Persist a fresh activation code for user. The caller commits."""
        now = now or utcnow()
        for _ in range(MAX_CODE_ATTEMPTS):
            value = generate_activation_code(self.code_length)
            if not self.tokens.exists(value):
                break
        else:
            raise RuntimeError("Could not generate a unique activation code")
        token = self.tokens.create(user, value, created_at=now, expires_at=now + self.lifetime)
        logger.info(
            "Activation token issued: user_id=%s expires_at=%s",
            user.id,
            token.expires_at.isoformat(),
        )
        return token

    def consume(self, value: str, now: datetime | None = None) -> Token:
        """
        Mark the token validated and return it (owning user loaded).

        Raises TokenNotFoundError, TokenAlreadyValidatedError or TokenExpiredError;
        none of them is retried.
        """
        now = now or utcnow()
        token = self.tokens.get_by_value(value)
        if token is None:
            raise TokenNotFoundError()
        if token.validated_at is not None:
            raise TokenAlreadyValidatedError()
        if not is_token_valid(token, now):
            logger.info("Expired token presented: token_id=%s user_id=%s", token.id, token.user_id)
            raise TokenExpiredError()
        return self.tokens.mark_validated(token, now)
