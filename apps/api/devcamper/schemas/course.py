"""Course API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from devcamper.schemas.bootcamp import BootcampSummary


class MinimumSkill(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CreateCourseRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    weeks: str = Field(min_length=1)
    tuition: float = Field(ge=0)
    minimum_skill: MinimumSkill
    scholarship_available: bool = False


class UpdateCourseRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    weeks: str | None = Field(default=None, min_length=1)
    tuition: float | None = Field(default=None, ge=0)
    minimum_skill: MinimumSkill | None = None
    scholarship_available: bool | None = None


class Course(BaseModel):
    id: str
    title: str
    description: str
    weeks: str
    tuition: float
    minimum_skill: MinimumSkill
    scholarship_available: bool = False
    bootcamp: str | BootcampSummary
    user: str
    created_at: datetime
