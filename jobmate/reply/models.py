"""Input models for reply generation.

All fields are optional partial views of the persisted records; the
generator falls back to generic wording when a field is missing.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobmate.matching.models import (
    clean_string_list,
    clean_text,
    non_negative_or_none,
)


class RequesterProfile(BaseModel):
    """The client who posted the job."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, description="Requester id")
    first_name: str | None = Field(
        default=None, alias="firstName", description="Greeting name"
    )

    @field_validator("id", "first_name", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return clean_text(v)


class JobPost(BaseModel):
    """The job being replied to."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, description="Job id")
    title: str | None = Field(default=None, description="Job title")
    category: str | None = Field(default=None, description="Service category name")
    description: str | None = Field(default=None, description="Job description")
    urgency: str | None = Field(
        default=None, alias="urgencyLevel", description="low/medium/high/urgent"
    )
    budget_min: float | None = Field(default=None, alias="budgetMin")
    budget_max: float | None = Field(default=None, alias="budgetMax")

    @field_validator("id", "title", "category", "description", "urgency", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return clean_text(v)

    @field_validator("budget_min", "budget_max", mode="before")
    @classmethod
    def _budget(cls, v: Any) -> float | None:
        return non_negative_or_none(v)

    @property
    def is_urgent(self) -> bool:
        return (self.urgency or "").lower() in {"high", "urgent"}


class SpecialistProfile(BaseModel):
    """The specialist the reply is written for."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, description="Specialist id")
    first_name: str | None = Field(default=None, alias="firstName")
    skills: tuple[str, ...] = Field(default=(), description="Ordered skill list")
    hourly_rate: float | None = Field(default=None, alias="hourlyRate")
    years_of_experience: int | None = Field(default=None, alias="yearsOfExperience")
    completed_jobs: int | None = Field(default=None, alias="completedJobs")

    @field_validator("id", "first_name", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return clean_text(v)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, v: Any) -> tuple[str, ...]:
        return clean_string_list(v)

    @field_validator("hourly_rate", mode="before")
    @classmethod
    def _rate(cls, v: Any) -> float | None:
        return non_negative_or_none(v)

    @field_validator("years_of_experience", "completed_jobs", mode="before")
    @classmethod
    def _count(cls, v: Any) -> int | None:
        number = non_negative_or_none(v)
        return int(number) if number is not None else None
