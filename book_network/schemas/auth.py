"""Request/response schemas for auth endpoints and the authenticated principal."""

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegistrationRequest(BaseModel):
    """New account details; the account stays disabled until activated."""

    firstname: str = Field(..., min_length=1, max_length=255, description="First name")
    lastname: str = Field(..., min_length=1, max_length=255, description="Last name")
    email: EmailStr = Field(..., description="Email address, used as the login identifier")
    password: str = Field(..., min_length=8, max_length=128, description="Password")
    date_of_birth: date | None = Field(default=None, description="Date of birth")


class RegistrationResponse(BaseModel):
    """Accepted registration. activation_token is only populated in the dev environment."""

    user_id: int
    email: str
    message: str
    activation_token: str | None = None


class AuthenticationRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class AuthenticationResponse(BaseModel):
    """JWT access token returned after successful login."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class ActivationResponse(BaseModel):
    email: str
    message: str


class AuthenticatedPrincipal(BaseModel):
    """Identity attached to a request once authentication succeeds."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    full_name: str
    authorities: frozenset[str] = frozenset()


class CurrentUserResponse(BaseModel):
    """Response for GET /users/me."""

    id: int
    email: str
    full_name: str
    authorities: list[str]
