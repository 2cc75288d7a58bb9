"""Match score components and aggregation."""

from .experience import ExperienceConfig, ExperienceFitScorer
from .goals import GoalAlignmentScorer, GoalsConfig
from .scorer import ComponentScore, MatchScorer, ScoreBreakdown
from .skills import SkillsConfig, SkillsOverlapScorer
from .workplace import WorkplaceConfig, WorkplaceFitScorer


def default_components() -> list:
    """Components in the order their points are reported."""
    return [
        SkillsOverlapScorer(),
        ExperienceFitScorer(),
        WorkplaceFitScorer(),
        GoalAlignmentScorer(),
    ]


__all__ = [
    "ComponentScore",
    "ExperienceConfig",
    "ExperienceFitScorer",
    "GoalAlignmentScorer",
    "GoalsConfig",
    "MatchScorer",
    "ScoreBreakdown",
    "SkillsConfig",
    "SkillsOverlapScorer",
    "WorkplaceConfig",
    "WorkplaceFitScorer",
    "default_components",
]
