"""Experience level fit scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...schemas import CandidateProfile, JobPosting


def _default_brackets() -> dict[str, tuple[int | None, int | None]]:
    return {
        "entry": (None, 2),
        "junior": (None, 3),
        "mid": (2, 5),
        "senior": (5, None),
    }


@dataclass
class ExperienceConfig:
    """Seniority keywords mapped to inclusive (min, max) year brackets."""

    max_points: float = 30.0
    neutral_points: float = 15.0
    brackets: dict[str, tuple[int | None, int | None]] = field(default_factory=_default_brackets)


class ExperienceFitScorer:
    """All-or-nothing fit between the job level and the candidate's years."""

    method = "experience"

    def __init__(self, *, config: ExperienceConfig | None = None) -> None:
        self._config = config or ExperienceConfig()

    @property
    def neutral_points(self) -> float:
        return self._config.neutral_points

    def evaluate(self, job: JobPosting, profile: CandidateProfile) -> dict[str, Any]:
        years = profile.experience_years
        if not job.experience_level or years is None:
            return {
                "method": self.method,
                "points": self._config.neutral_points,
                "metadata": {"status": "insufficient_data"},
            }

        level = job.experience_level.lower()
        bracket = self._matching_bracket(level, years)
        return {
            "method": self.method,
            "points": self._config.max_points if bracket else 0.0,
            "metadata": {
                "status": "fit" if bracket else "mismatch",
                "experience_years": years,
                "bracket": bracket,
            },
        }

    def _matching_bracket(self, level: str, years: int) -> str | None:
        for keyword, (minimum, maximum) in self._config.brackets.items():
            if keyword not in level:
                continue
            if minimum is not None and years < minimum:
                continue
            if maximum is not None and years > maximum:
                continue
            return keyword
        return None
