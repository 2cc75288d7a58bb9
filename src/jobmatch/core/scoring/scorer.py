"""Match score aggregation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable

import structlog

from ...schemas import CandidateProfile, JobPosting


@dataclass(slots=True)
class ComponentScore:
    """Normalized component output."""

    method: str
    points: float
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ScoreBreakdown:
    """Final score together with the components that produced it."""

    score: int
    components: list[ComponentScore]
    raw_total: float | None
    fallback: bool = False


class MatchScorer:
    """Sum component points into a 0-100 compatibility score."""

    DEFAULT_FALLBACK_SCORE = 50
    MAX_SCORE = 100

    def __init__(
        self,
        components: Iterable[Any],
        *,
        fallback_score: int | None = None,
    ) -> None:
        self._components = list(components)
        self._fallback_score = (
            self.DEFAULT_FALLBACK_SCORE if fallback_score is None else fallback_score
        )
        self._logger = structlog.get_logger(__name__)

    def score(self, job: JobPosting, profile: CandidateProfile | None) -> int:
        return self.breakdown(job, profile).score

    def breakdown(self, job: JobPosting, profile: CandidateProfile | None) -> ScoreBreakdown:
        if profile is None:
            return ScoreBreakdown(
                score=self._fallback_score,
                components=[],
                raw_total=None,
                fallback=True,
            )

        components = [
            self._normalize_component(component, component.evaluate(job, profile))
            for component in self._components
        ]
        total = sum(item.points for item in components)
        if not math.isfinite(total):
            self._logger.warning("score.non_finite", job_id=job.job_id, total=str(total))
            return ScoreBreakdown(
                score=self._fallback_score,
                components=components,
                raw_total=None,
                fallback=True,
            )

        return ScoreBreakdown(
            score=min(max(_round_half_up(total), 0), self.MAX_SCORE),
            components=components,
            raw_total=total,
        )

    def _normalize_component(self, component: Any, payload: dict[str, Any]) -> ComponentScore:
        method = payload.get("method")
        if method is None:
            raise ValueError("Component result must include 'method'.")
        metadata = dict(payload.get("metadata") or {})
        try:
            points = float(payload.get("points", 0.0))
        except (TypeError, ValueError):
            points = math.nan
        if not math.isfinite(points):
            points = float(getattr(component, "neutral_points", 0.0))
            metadata["substituted"] = True
            self._logger.warning("score.component_non_finite", method=str(method))
        return ComponentScore(method=str(method), points=points, metadata=metadata)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
