"""Role administration. Listing needs any authenticated user; creation needs ADMIN."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from book_network.core.database import get_db
from book_network.core.exceptions import DuplicateRoleNameError
from book_network.core.request_gate import get_current_principal, require_authorities
from book_network.repositories import RoleRepository
from book_network.schemas.auth import AuthenticatedPrincipal
from book_network.schemas.role import RoleCreateRequest, RoleResponse, RolesListResponse

ADMIN_AUTHORITY = "ADMIN"

router = APIRouter()


@router.get("", response_model=RolesListResponse)
def list_roles(
    _principal: Annotated[AuthenticatedPrincipal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> RolesListResponse:
    roles = RoleRepository(db).list_all()
    return RolesListResponse(roles=[RoleResponse.model_validate(r) for r in roles])


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
def create_role(
    body: RoleCreateRequest,
    _admin: Annotated[AuthenticatedPrincipal, Depends(require_authorities(ADMIN_AUTHORITY))],
    db: Annotated[Session, Depends(get_db)],
) -> RoleResponse:
    try:
        role = RoleRepository(db).create(body.name)
    except DuplicateRoleNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    db.commit()
    return RoleResponse.model_validate(role)
