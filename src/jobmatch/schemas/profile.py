from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def _as_text(value: Any) -> str | None:
    """Coerce loosely typed profile values into text, ``None`` when blank."""
    if value is None or value is False:
        return None
    if isinstance(value, (list, tuple)):
        value = ",".join(str(item) for item in value if item is not None)
    text = str(value).strip()
    return text or None


def _as_style_text(value: Any) -> str | None:
    """Like ``_as_text`` but a container is present even when it renders empty."""
    if isinstance(value, (list, tuple, dict)):
        if isinstance(value, dict):
            value = list(value.values())
        return ",".join(str(item) for item in value if item is not None).strip()
    return _as_text(value)


class CandidateProfile(BaseModel):
    """AI-derived candidate profile, normalized at the model boundary.

    Generated profiles are loosely typed, so every field degrades to a neutral
    value instead of failing validation:

    * ``skills`` keeps non-blank strings; a comma separated string is split.
      ``None`` means absent, ``[]`` means present but empty.
    * ``experience`` keeps lists; any other container (empty ones included) or
      truthy value becomes ``[]``, and falsy scalars become ``None``.
    * ``work_style`` is coerced to text; a container stays present even when it
      renders as ``""``, a blank string is ``None``.
    * ``career_goals`` is coerced to text, blank is ``None``.
    """

    skills: list[str] | None = None
    experience: list[Any] | None = None
    work_style: str | None = None
    career_goals: str | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("skills", mode="before")
    @classmethod
    def _normalize_skills(cls, value: Any) -> list[str] | None:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.split(",")
        elif not isinstance(value, (list, tuple, set)):
            return None
        return [str(item).strip() for item in value if item is not None and str(item).strip()]

    @field_validator("experience", mode="before")
    @classmethod
    def _normalize_experience(cls, value: Any) -> list[Any] | None:
        if isinstance(value, list):
            return value
        if isinstance(value, tuple):
            return list(value)
        if isinstance(value, (dict, set)):
            return []
        if not value:
            return None
        return []

    @field_validator("work_style", mode="before")
    @classmethod
    def _normalize_work_style(cls, value: Any) -> str | None:
        return _as_style_text(value)

    @field_validator("career_goals", mode="before")
    @classmethod
    def _normalize_text(cls, value: Any) -> str | None:
        return _as_text(value)

    @property
    def experience_years(self) -> int | None:
        """Number of experience entries, used as a proxy for years."""
        if self.experience is None:
            return None
        return len(self.experience)

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> "CandidateProfile | None":
        """Build a profile from a backend payload, unwrapping ``aiProfile``."""
        if not payload:
            return None
        data = payload.get("aiProfile", payload)
        if not isinstance(data, dict) or not data:
            return None
        return cls.model_validate(
            {
                "skills": data.get("skills"),
                "experience": data.get("experience"),
                "work_style": data.get("work_style", data.get("workStyle")),
                "career_goals": data.get("career_goals", data.get("careerGoals")),
            }
        )
