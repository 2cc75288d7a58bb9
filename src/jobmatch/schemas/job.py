from __future__ import annotations

from datetime import datetime
from typing import Any

import pendulum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobPosting(BaseModel):
    """Source-neutral job posting schema."""

    job_id: str
    title: str = ""
    company_name: str = ""
    description: str = ""
    location: str | None = None
    workplace_type: str | None = None
    employment_type: str | None = None
    experience_level: str | None = None
    industry: str | None = None
    job_type: str | None = None
    skills: list[str] = Field(default_factory=list)
    posted_at: datetime | None = None
    salary_range: str | None = None
    seniority_level: str | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("job_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", "company_name", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator(
        "location",
        "workplace_type",
        "employment_type",
        "experience_level",
        "industry",
        "job_type",
        "salary_range",
        "seniority_level",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return [str(item) for item in value if item is not None and str(item).strip()]

    @field_validator("posted_at", mode="before")
    @classmethod
    def _parse_posted_at(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            # epoch milliseconds, as emitted by the platform API
            return pendulum.from_timestamp(value / 1000)
        try:
            parsed = pendulum.parse(str(value))
        except ValueError:
            return None
        return parsed if isinstance(parsed, datetime) else None
