"""Career goal alignment bonus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import CandidateProfile, JobPosting


@dataclass
class GoalsConfig:
    """Bonus awarded when career goals and the posting share a lead word."""

    max_points: float = 10.0


class GoalAlignmentScorer:
    method = "goals"
    neutral_points = 0.0

    def __init__(self, *, config: GoalsConfig | None = None) -> None:
        self._config = config or GoalsConfig()

    def evaluate(self, job: JobPosting, profile: CandidateProfile) -> dict[str, Any]:
        if not job.description or not profile.career_goals:
            return {
                "method": self.method,
                "points": 0.0,
                "metadata": {"status": "insufficient_data"},
            }

        description = job.description.lower()
        goals = profile.career_goals.lower()
        goal_word = _first_word(goals)
        title_word = _first_word(job.title.lower())

        # an empty lead word is contained in any text and counts as aligned
        aligned = goal_word in description or title_word in goals
        return {
            "method": self.method,
            "points": self._config.max_points if aligned else 0.0,
            "metadata": {
                "status": "aligned" if aligned else "unaligned",
                "goal_word": goal_word,
                "title_word": title_word,
            },
        }


def _first_word(text: str) -> str:
    return text.split(" ")[0]
