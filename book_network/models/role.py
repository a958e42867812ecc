"""ORM model for roles (named permission groupings granted to users)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from book_network.models.base import Base

# Many-to-many mapping between users and roles. User owns the relationship for writes.
users_roles = Table(
    "users_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """
    Role granted to users; its name becomes one authority string.

    users is the non-owning side of the users_roles mapping and is never
    serialized in API responses.
    """

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True, index=True)
    created_date = Column(DateTime(timezone=True), nullable=False)
    last_modified_date = Column(DateTime(timezone=True), nullable=True)

    users = relationship("User", secondary=users_roles, viewonly=True)

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name!r})>"
