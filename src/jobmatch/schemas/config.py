"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError


class CoreConfig(BaseModel):
    relaxation_threshold: int | None = None
    fallback_score: int | None = None


class ScorerConfig(BaseModel):
    skills: dict[str, Any] | None = None
    experience: dict[str, Any] | None = None
    workplace: dict[str, Any] | None = None
    goals: dict[str, Any] | None = None


class FilterConfig(BaseModel):
    workplace_synonyms: dict[str, list[str]] | None = None
    country_aliases: dict[str, list[str]] | None = None
    date_posted_days: dict[str, int] | None = None
    default_date_window_days: int | None = None


class SessionConfig(BaseModel):
    pending_max_age_days: float | None = None


class AppConfig(BaseModel):
    core: CoreConfig = Field(default_factory=CoreConfig)
    scorers: ScorerConfig = Field(default_factory=ScorerConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("core", "scorers", "filters", "session"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
