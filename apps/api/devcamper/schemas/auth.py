"""Authentication schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    USER = "user"
    PUBLISHER = "publisher"
    ADMIN = "admin"


class AuthPrincipal(BaseModel):
    """Normalized authenticated principal used by business services."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1)
    role: Role = Role.USER
