"""Request/response schemas for role administration."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoleCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=64, description="Unique role name, e.g. USER")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Role name must not be blank")
        return v


class RoleResponse(BaseModel):
    """Role as exposed by the API. The users holding the role are never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_date: datetime
    last_modified_date: datetime | None = None


class RolesListResponse(BaseModel):
    roles: list[RoleResponse]
