"""Review API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from devcamper.schemas.bootcamp import BootcampSummary


class CreateReviewRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1)
    rating: int = Field(ge=1, le=10)


class UpdateReviewRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, min_length=1, max_length=100)
    text: str | None = Field(default=None, min_length=1)
    rating: int | None = Field(default=None, ge=1, le=10)


class Review(BaseModel):
    id: str
    title: str
    text: str
    rating: int
    bootcamp: str | BootcampSummary
    user: str
    created_at: datetime
