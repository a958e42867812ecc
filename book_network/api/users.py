"""Current-user endpoint (protected)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from book_network.core.request_gate import get_current_principal
from book_network.schemas.auth import AuthenticatedPrincipal, CurrentUserResponse

router = APIRouter()


@router.get("/me", response_model=CurrentUserResponse)
def get_me(
    principal: Annotated[AuthenticatedPrincipal, Depends(get_current_principal)],
) -> CurrentUserResponse:
    """Return the identity the request was authenticated as."""
    return CurrentUserResponse(
        id=principal.id,
        email=principal.email,
        full_name=principal.full_name,
        authorities=sorted(principal.authorities),
    )
