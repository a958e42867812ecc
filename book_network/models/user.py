"""ORM model for application users (credentials and role-based access control)."""

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String
from sqlalchemy.orm import relationship

from book_network.models.base import Base
from book_network.models.role import users_roles


class User(Base):
    """
    User account; email is the login identifier.

    Plain persisted record: authorities and the principal view are derived by
    book_network.services.authorization, not by this class. Audit timestamps
    are set by the repositories.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    firstname = Column(String(255), nullable=False, default="")
    lastname = Column(String(255), nullable=False, default="")
    date_of_birth = Column(Date, nullable=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    account_locked = Column(Boolean, nullable=False, default=False)
    enabled = Column(Boolean, nullable=False, default=False)
    created_date = Column(DateTime(timezone=True), nullable=False)
    last_modified_date = Column(DateTime(timezone=True), nullable=True)

    roles = relationship("Role", secondary=users_roles)
    tokens = relationship(
        "Token",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
