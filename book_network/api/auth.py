"""Registration, login (JWT issuance) and account activation. Public under /auth/**."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from book_network.api.deps import (
    get_app_settings,
    get_authentication_provider,
    get_password_hasher,
    get_token_service,
)
from book_network.core.config import Settings
from book_network.core.database import get_db
from book_network.core.exceptions import (
    AccountDisabledError,
    AccountLockedError,
    AuthenticationFailedError,
    DuplicateEmailError,
    TokenAlreadyValidatedError,
    TokenExpiredError,
    TokenNotFoundError,
)
from book_network.core.security import PasswordHasher, create_access_token
from book_network.repositories import RoleRepository, UserRepository
from book_network.schemas.auth import (
    ActivationResponse,
    AuthenticationRequest,
    AuthenticationResponse,
    RegistrationRequest,
    RegistrationResponse,
)
from book_network.services.authentication import AuthenticationProvider
from book_network.services.tokens import TokenService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def register(
    body: RegistrationRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RegistrationResponse:
    """
    Create a disabled account holding the default role and issue an activation code.
    The account can log in once GET /auth/activate-account has consumed the code.
    """
    role = RoleRepository(db).get_by_name(settings.DEFAULT_ROLE)
    if role is None:
        logger.error("Default role %s is missing; run create_role first", settings.DEFAULT_ROLE)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Role {settings.DEFAULT_ROLE} was not initialized.",
        )
    try:
        user = UserRepository(db).create(
            email=body.email,
            password_hash=hasher.hash(body.password),
            firstname=body.firstname,
            lastname=body.lastname,
            date_of_birth=body.date_of_birth,
            enabled=False,
            account_locked=False,
            roles=[role],
        )
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    token = token_service.issue_activation_token(user)
    db.commit()
    logger.info("User registered: user_id=%s", user.id)
    return RegistrationResponse(
        user_id=user.id,
        email=user.email,
        message="Registration accepted. Activate the account with the activation code.",
        activation_token=token.token if settings.APP_ENV == "dev" else None,
    )


@router.post("/authenticate", response_model=AuthenticationResponse)
def authenticate(
    body: AuthenticationRequest,
    provider: Annotated[AuthenticationProvider, Depends(get_authentication_provider)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthenticationResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        principal = provider.authenticate(body.email, body.password)
    except (AuthenticationFailedError, AccountLockedError, AccountDisabledError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    return AuthenticationResponse(token=create_access_token(principal, settings))


@router.get("/activate-account", response_model=ActivationResponse)
def activate_account(
    token: Annotated[str, Query(min_length=1, max_length=255)],
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> ActivationResponse:
    """Consume an activation code and enable its account. Expired or used codes are final."""
    try:
        consumed = token_service.consume(token)
    except TokenNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except TokenAlreadyValidatedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except TokenExpiredError as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=e.message) from e

    user = consumed.user
    user.enabled = True
    UserRepository(db).save(user)
    db.commit()
    logger.info("Account activated: user_id=%s", user.id)
    return ActivationResponse(email=user.email, message="Account activated.")
