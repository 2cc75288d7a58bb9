"""Core match engine components."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .assembly import AssemblyOutcome, MatchResult, ResultAssembler
from .engine import MatchEngine
from .facets import FacetConfig, FacetEvaluator
from .relaxation import FilterResult, RelaxationStrategy
from .scoring import (
    ExperienceFitScorer,
    GoalAlignmentScorer,
    MatchScorer,
    ScoreBreakdown,
    SkillsOverlapScorer,
    WorkplaceFitScorer,
)


@runtime_checkable
class ScoreComponent(Protocol):
    """Scoring component contract."""

    method: str

    def evaluate(self, job: Any, profile: Any) -> dict:
        """Return the points awarded to a job for the given profile."""


__all__ = [
    "AssemblyOutcome",
    "ExperienceFitScorer",
    "FacetConfig",
    "FacetEvaluator",
    "FilterResult",
    "GoalAlignmentScorer",
    "MatchEngine",
    "MatchResult",
    "MatchScorer",
    "RelaxationStrategy",
    "ResultAssembler",
    "ScoreBreakdown",
    "ScoreComponent",
    "SkillsOverlapScorer",
    "WorkplaceFitScorer",
]
