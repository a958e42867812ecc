"""User persistence: lookups with roles loaded up front and audited writes."""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from book_network.core.exceptions import DuplicateEmailError, ImmutableFieldError
from book_network.models import Role, User
from book_network.models.base import created_date_changed, utcnow

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Reads return fully materialized users (roles included) so callers never
    depend on lazy loading. Writes flush but do not commit; the caller owns
    the transaction.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).options(selectinload(User.roles)).where(User.email == email)
        return self.session.scalars(stmt).first()

    def get_by_id(self, user_id: int) -> User | None:
        stmt = select(User).options(selectinload(User.roles)).where(User.id == user_id)
        return self.session.scalars(stmt).first()

    def list_all(self) -> list[User]:
        stmt = select(User).options(selectinload(User.roles)).order_by(User.id)
        return list(self.session.scalars(stmt).all())

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        firstname: str = "",
        lastname: str = "",
        date_of_birth=None,
        enabled: bool = False,
        account_locked: bool = False,
        roles: Iterable[Role] = (),
    ) -> User:
        """Insert a user. Raises DuplicateEmailError if the email is taken."""
        user = User(
            email=email,
            password_hash=password_hash,
            firstname=firstname,
            lastname=lastname,
            date_of_birth=date_of_birth,
            enabled=enabled,
            account_locked=account_locked,
            created_date=utcnow(),
            last_modified_date=None,
        )
        user.roles = list(roles)
        self.session.add(user)
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Rejected duplicate user email=%s", email)
            raise DuplicateEmailError() from e
        return user

    def save(self, user: User) -> User:
        """
        Flush changes to an existing user and stamp last_modified_date.
        Raises ImmutableFieldError if created_date was reassigned.
        """
        if created_date_changed(user):
            raise ImmutableFieldError()
        user.last_modified_date = utcnow()
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateEmailError() from e
        return user

    def assign_role(self, user: User, role: Role) -> User:
        if role not in user.roles:
            user.roles.append(role)
        return self.save(user)

    def set_locked(self, user: User, locked: bool) -> User:
        user.account_locked = locked
        return self.save(user)
