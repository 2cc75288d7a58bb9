"""Skill overlap scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import CandidateProfile, JobPosting


@dataclass
class SkillsConfig:
    """Points awarded for skill overlap."""

    max_points: float = 40.0
    neutral_points: float = 25.0


class SkillsOverlapScorer:
    """Share of job skills covered by the candidate, either way round."""

    method = "skills"

    def __init__(self, *, config: SkillsConfig | None = None) -> None:
        self._config = config or SkillsConfig()

    @property
    def neutral_points(self) -> float:
        return self._config.neutral_points

    def evaluate(self, job: JobPosting, profile: CandidateProfile) -> dict[str, Any]:
        if not job.skills or profile.skills is None:
            return {
                "method": self.method,
                "points": self._config.neutral_points,
                "metadata": {"status": "insufficient_data"},
            }

        candidate_skills = [skill.lower() for skill in profile.skills]
        matched = [
            skill
            for skill in job.skills
            if any(self._overlaps(skill.lower(), own) for own in candidate_skills)
        ]
        coverage = len(matched) / len(job.skills)
        return {
            "method": self.method,
            "points": coverage * self._config.max_points,
            "metadata": {
                "status": "scored",
                "matched": matched,
                "coverage": coverage,
            },
        }

    @staticmethod
    def _overlaps(job_skill: str, candidate_skill: str) -> bool:
        return candidate_skill in job_skill or job_skill in candidate_skill
