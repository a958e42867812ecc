"""Per-request wiring of the collaborators built at startup (hasher, settings) with a DB session."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from book_network.core.config import Settings
from book_network.core.database import get_db
from book_network.core.security import PasswordHasher
from book_network.repositories import TokenRepository, UserRepository
from book_network.services.authentication import AuthenticationProvider
from book_network.services.tokens import TokenService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_authentication_provider(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AuthenticationProvider:
    return AuthenticationProvider(users, hasher)


def get_token_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TokenService:
    return TokenService(TokenRepository(db), settings)
