"""
Request gate: public allow-list, JWT bearer filter and stateless authentication.

Every request starts UNAUTHENTICATED. Public paths are served without an
identity. Anything else must carry "Authorization: Bearer <jwt>"; the gate
decodes it, reloads the user, and attaches an AuthenticatedPrincipal to
request.state.principal (AUTHENTICATED) or answers 401. Nothing is kept
between requests: no cookies or server-side sessions are read or issued.
"""

import enum
import logging
from typing import TYPE_CHECKING, Annotated

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from book_network.core.security import decode_access_token
from book_network.repositories import UserRepository
from book_network.schemas.auth import AuthenticatedPrincipal
from book_network.services.authorization import (
    has_authority,
    is_account_non_locked,
    is_enabled,
    to_principal,
)

if TYPE_CHECKING:
    from book_network.core.config import Settings

logger = logging.getLogger(__name__)

# Ant-style patterns: a trailing "/**" matches the prefix itself and everything below it.
PUBLIC_PATHS: tuple[str, ...] = (
    "/auth/**",
    "/v2/api-docs",
    "/v3/api-docs",
    "/v3/api-docs/**",
    "/swagger-resources",
    "/swagger-resources/**",
    "/configuration/ui",
    "/configuration/security",
    "/swagger-ui/**",
    "/webjars/**",
    "/swagger-ui.html",
)

BEARER_PREFIX = "Bearer "


class GateState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class BearerTokenError(Exception):
    """Missing, malformed, expired or otherwise unacceptable bearer credential."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def path_matches(pattern: str, path: str) -> bool:
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return path == prefix or path.startswith(prefix + "/")
    return path == pattern


def is_public_path(path: str, patterns: tuple[str, ...] = PUBLIC_PATHS) -> bool:
    return any(path_matches(pattern, path) for pattern in patterns)


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise BearerTokenError("Not authenticated")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise BearerTokenError("Not authenticated")
    return token


def authenticate_bearer(session: Session, token: str, settings: "Settings") -> AuthenticatedPrincipal:
    """
    Validate a JWT and reload its user so lock/disable and role changes apply immediately.
    Raises BearerTokenError on any failure.
    """
    try:
        payload = decode_access_token(token, settings)
    except jwt.PyJWTError as e:
        raise BearerTokenError("Invalid or expired token") from e
    email = payload.get("sub")
    if not email or not isinstance(email, str):
        raise BearerTokenError("Invalid token payload")
    user = UserRepository(session).get_by_email(email)
    if user is None:
        raise BearerTokenError("User not found")
    if not is_account_non_locked(user) or not is_enabled(user):
        raise BearerTokenError("User account is not active")
    return to_principal(user)


class RequestGateMiddleware(BaseHTTPMiddleware):
    """Classify each request as public or protected and establish identity for protected ones."""

    def __init__(
        self,
        app,
        session_factory: sessionmaker,
        settings: "Settings",
        public_paths: tuple[str, ...] = PUBLIC_PATHS,
    ):
        super().__init__(app)
        self._session_factory = session_factory
        self._settings = settings
        self._public_paths = public_paths

    async def dispatch(self, request: Request, call_next):
        request.state.gate_state = GateState.UNAUTHENTICATED
        request.state.principal = None

        if is_public_path(request.url.path, self._public_paths):
            return await call_next(request)

        request.state.gate_state = GateState.AUTHENTICATING
        try:
            token = extract_bearer_token(request.headers.get("Authorization"))
            principal = await run_in_threadpool(self._authenticate, token)
        except BearerTokenError as e:
            logger.debug(
                "Rejected %s %s: %s", request.method, request.url.path, e.message
            )
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": e.message},
                headers={"WWW-Authenticate": "Bearer"},
            )

        request.state.principal = principal
        request.state.gate_state = GateState.AUTHENTICATED
        return await call_next(request)

    def _authenticate(self, token: str) -> AuthenticatedPrincipal:
        session = self._session_factory()
        try:
            return authenticate_bearer(session, token, self._settings)
        finally:
            session.close()


def get_current_principal(request: Request) -> AuthenticatedPrincipal:
    """Dependency: the principal the gate attached. Raises 401 if the request is unauthenticated."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


def require_authorities(*authorities: str):
    """Dependency factory: require any one of the given authorities. Raises 403 otherwise."""

    def checker(
        principal: Annotated[AuthenticatedPrincipal, Depends(get_current_principal)],
    ) -> AuthenticatedPrincipal:
        if not has_authority(principal, *authorities):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires one of: {', '.join(authorities)}",
            )
        return principal

    return checker
