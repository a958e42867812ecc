"""SQLAlchemy ORM models."""

from book_network.models.base import Base
from book_network.models.role import Role, users_roles
from book_network.models.token import Token
from book_network.models.user import User

__all__ = ["Base", "Role", "Token", "User", "users_roles"]
