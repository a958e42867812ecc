"""Pydantic request/response schemas."""

from book_network.schemas.auth import (
    ActivationResponse,
    AuthenticatedPrincipal,
    AuthenticationRequest,
    AuthenticationResponse,
    CurrentUserResponse,
    RegistrationRequest,
    RegistrationResponse,
)
from book_network.schemas.role import RoleCreateRequest, RoleResponse, RolesListResponse

__all__ = [
    "ActivationResponse",
    "AuthenticatedPrincipal",
    "AuthenticationRequest",
    "AuthenticationResponse",
    "CurrentUserResponse",
    "RegistrationRequest",
    "RegistrationResponse",
    "RoleCreateRequest",
    "RoleResponse",
    "RolesListResponse",
]
