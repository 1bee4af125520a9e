"""User administration schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from devcamper.schemas.auth import Role


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    email: EmailStr
    role: Role = Role.USER
    password: str = Field(min_length=6)


class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1)
    email: EmailStr | None = None
    role: Role | None = None


class User(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    created_at: datetime
