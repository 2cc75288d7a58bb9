from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

FACET_FIELDS: tuple[str, ...] = (
    "workplace",
    "country",
    "city",
    "career_level",
    "job_category",
    "job_type",
    "date_posted",
)

_CAMEL_KEYS = {
    "careerLevel": "career_level",
    "jobCategory": "job_category",
    "jobType": "job_type",
    "datePosted": "date_posted",
    "searchQuery": "search_query",
}


class FilterCriteria(BaseModel):
    """Active search and filter selections."""

    workplace: list[str] = Field(default_factory=list)
    country: str = ""
    city: str = ""
    career_level: str = ""
    job_category: str = ""
    job_type: str = ""
    date_posted: str = ""
    search_query: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("workplace", mode="before")
    @classmethod
    def _normalize_workplace(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [str(item).strip() for item in value if item is not None and str(item).strip()]

    @field_validator(
        "country",
        "city",
        "career_level",
        "job_category",
        "job_type",
        "date_posted",
        "search_query",
        mode="before",
    )
    @classmethod
    def _normalize_token(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> "FilterCriteria":
        """Build criteria from UI state, accepting camelCase keys."""
        if not payload:
            return cls()
        data = payload.get("filters", payload)
        if "searchQuery" in payload and "searchQuery" not in data:
            data = {**data, "searchQuery": payload["searchQuery"]}
        return cls.model_validate({_CAMEL_KEYS.get(key, key): value for key, value in data.items()})

    def active_facets(self) -> list[str]:
        """Names of the facets that carry a selection, search excluded."""
        return [name for name in FACET_FIELDS if getattr(self, name)]

    def active_count(self) -> int:
        return len(self.active_facets()) + (1 if self.search_query else 0)

    def is_active(self) -> bool:
        return self.active_count() > 0
