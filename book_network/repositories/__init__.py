"""Repositories: explicit queries and write paths for the credential store."""

from book_network.repositories.role_repository import RoleRepository
from book_network.repositories.token_repository import TokenRepository
from book_network.repositories.user_repository import UserRepository

__all__ = ["RoleRepository", "TokenRepository", "UserRepository"]
