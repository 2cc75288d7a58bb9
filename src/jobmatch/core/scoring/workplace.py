"""Workplace preference fit scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import CandidateProfile, JobPosting


@dataclass
class WorkplaceConfig:
    """Point allocation and preference keywords for workplace fit."""

    max_points: float = 20.0
    neutral_points: float = 10.0
    preferences: tuple[str, ...] = ("remote", "office")


class WorkplaceFitScorer:
    """Compare the candidate's work style with the job's employment type."""

    method = "workplace"

    def __init__(self, *, config: WorkplaceConfig | None = None) -> None:
        self._config = config or WorkplaceConfig()

    @property
    def neutral_points(self) -> float:
        return self._config.neutral_points

    def evaluate(self, job: JobPosting, profile: CandidateProfile) -> dict[str, Any]:
        if not job.location or profile.work_style is None:
            return {
                "method": self.method,
                "points": self._config.neutral_points,
                "metadata": {"status": "insufficient_data"},
            }

        work_style = profile.work_style.lower()
        employment = (job.employment_type or "").lower()
        matched = next(
            (
                keyword
                for keyword in self._config.preferences
                if keyword in work_style and keyword in employment
            ),
            None,
        )
        return {
            "method": self.method,
            "points": self._config.max_points if matched else 0.0,
            "metadata": {
                "status": "fit" if matched else "mismatch",
                "preference": matched,
            },
        }
