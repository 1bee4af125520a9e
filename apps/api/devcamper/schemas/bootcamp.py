"""Bootcamp API schemas."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

_URL_PATTERN = r"^https?://[^\s/$.?#].[^\s]*$"


class Career(str, Enum):
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    UI_UX = "UI/UX"
    DATA_SCIENCE = "Data Science"
    BUSINESS = "Business"
    OTHER = "Other"


class GeoLocation(BaseModel):
    """GeoJSON point; coordinates are ``[longitude, latitude]``."""

    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(min_length=2, max_length=2)
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None


class CreateBootcampRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=500)
    website: str | None = Field(default=None, pattern=_URL_PATTERN)
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = None
    address: str = Field(min_length=1)
    careers: list[Career] = Field(min_length=1)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False


class UpdateBootcampRequest(BaseModel):
    """Partial update; the owner and location are not writable here."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    website: str | None = Field(default=None, pattern=_URL_PATTERN)
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = None
    careers: list[Career] | None = Field(default=None, min_length=1)
    housing: bool | None = None
    job_assistance: bool | None = None
    job_guarantee: bool | None = None
    accept_gi: bool | None = None


class Bootcamp(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    location: GeoLocation | None = None
    careers: list[Career]
    average_rating: float | None = None
    average_cost: float | None = None
    photo: str = "no-photo.jpg"
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False
    user: str
    created_at: datetime


class BootcampSummary(BaseModel):
    """Parent bootcamp fields embedded in course and review payloads."""

    id: str
    name: str
    description: str
