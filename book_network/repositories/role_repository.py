"""Role persistence with unique names and audited writes."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from book_network.core.exceptions import DuplicateRoleNameError, ImmutableFieldError
from book_network.models import Role
from book_network.models.base import created_date_changed, utcnow

logger = logging.getLogger(__name__)


class RoleRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_name(self, name: str) -> Role | None:
        return self.session.scalars(select(Role).where(Role.name == name)).first()

    def list_all(self) -> list[Role]:
        return list(self.session.scalars(select(Role).order_by(Role.name)).all())

    def create(self, name: str) -> Role:
        """Insert a role. Raises DuplicateRoleNameError if the name is taken."""
        role = Role(name=name, created_date=utcnow(), last_modified_date=None)
        self.session.add(role)
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Rejected duplicate role name=%s", name)
            raise DuplicateRoleNameError() from e
        return role

    def rename(self, role: Role, name: str) -> Role:
        if created_date_changed(role):
            raise ImmutableFieldError()
        role.name = name
        role.last_modified_date = utcnow()
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateRoleNameError() from e
        return role
