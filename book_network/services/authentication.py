"""Authentication provider: verify an email/password pair against the credential store."""

import logging

from book_network.core.exceptions import (
    AccountDisabledError,
    AccountLockedError,
    AuthenticationFailedError,
)
from book_network.core.security import PasswordHasher
from book_network.repositories import UserRepository
from book_network.schemas.auth import AuthenticatedPrincipal
from book_network.services.authorization import is_account_non_locked, is_enabled, to_principal

logger = logging.getLogger(__name__)


class AuthenticationProvider:
    """
    Looks up a user by email and checks the password with the hasher.

    An unknown email and a wrong password raise the same
    AuthenticationFailedError. For unknown emails the hasher still runs
    against a dummy digest so both paths cost one bcrypt check. Account
    status (locked, disabled) is only reported after the password matched.
    """

    def __init__(self, users: UserRepository, hasher: PasswordHasher) -> None:
        self.users = users
        self.hasher = hasher
        self._dummy_hash = _dummy_hash_for(hasher)

    def authenticate(self, email: str, password: str) -> AuthenticatedPrincipal:
        user = self.users.get_by_email(email)
        if user is None:
            self.hasher.verify(password, self._dummy_hash)
            logger.info("Authentication failed: email=%s", email)
            raise AuthenticationFailedError()
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Authentication failed: email=%s", email)
            raise AuthenticationFailedError()
        if not is_account_non_locked(user):
            logger.info("Authentication refused, account locked: user_id=%s", user.id)
            raise AccountLockedError()
        if not is_enabled(user):
            logger.info("Authentication refused, account disabled: user_id=%s", user.id)
            raise AccountDisabledError()
        return to_principal(user)


_DUMMY_HASHES: dict[int, str] = {}


def _dummy_hash_for(hasher: PasswordHasher) -> str:
    # Computed once per cost factor so the unknown-email path does equivalent bcrypt work.
    if hasher.rounds not in _DUMMY_HASHES:
        _DUMMY_HASHES[hasher.rounds] = hasher.hash("book-network-timing-dummy")
    return _DUMMY_HASHES[hasher.rounds]
