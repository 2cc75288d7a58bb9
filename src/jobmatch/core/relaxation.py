"""Primary filtering with an OR-of-facets fallback."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

import structlog

from ..schemas import CandidateProfile, FilterCriteria, JobPosting
from .facets import FacetEvaluator
from .scoring import MatchScorer, ScoreBreakdown


@dataclass(slots=True)
class FilterResult:
    """Selected jobs and whether they came from the relaxed fallback.

    ``breakdowns`` is aligned with ``jobs`` when the set was ranked by score,
    ``None`` when the jobs kept source order unscored.
    """

    jobs: list[JobPosting]
    is_related: bool
    mode: str
    breakdowns: list[ScoreBreakdown] | None = None


class RelaxationStrategy:
    """Pick the result set for a list of jobs and the active criteria.

    Primary filtering ANDs every active facet. When that leaves fewer than
    ``threshold`` jobs while filters are active, any job satisfying at least
    one facet is kept instead and the set is flagged as related. The
    free-text search is never relaxed.
    """

    DEFAULT_THRESHOLD = 3

    def __init__(
        self,
        *,
        facets: FacetEvaluator,
        scorer: MatchScorer,
        threshold: int | None = None,
    ) -> None:
        self._facets = facets
        self._scorer = scorer
        self._threshold = self.DEFAULT_THRESHOLD if threshold is None else threshold
        self._logger = structlog.get_logger(__name__)

    @property
    def threshold(self) -> int:
        return self._threshold

    def select_result_set(
        self,
        jobs: Sequence[JobPosting],
        criteria: FilterCriteria,
        profile: CandidateProfile | None = None,
        *,
        as_of: datetime | None = None,
    ) -> FilterResult:
        if not criteria.is_active():
            ranked, breakdowns = self._rank_by_score(jobs, profile)
            return FilterResult(
                jobs=ranked,
                is_related=False,
                mode="unfiltered",
                breakdowns=breakdowns,
            )

        primary = [
            job for job in jobs if self._facets.matches_primary(job, criteria, as_of=as_of)
        ]
        if len(primary) >= self._threshold or not criteria.active_facets():
            return FilterResult(jobs=primary, is_related=False, mode="primary")

        relaxed = [
            job for job in jobs if self._facets.matches_relaxed(job, criteria, as_of=as_of)
        ]
        self._logger.debug(
            "filter.relaxed",
            primary_count=len(primary),
            relaxed_count=len(relaxed),
            threshold=self._threshold,
            facets=criteria.active_facets(),
        )
        ranked, breakdowns = self._rank_by_score(relaxed, profile)
        return FilterResult(
            jobs=ranked,
            is_related=True,
            mode="relaxed",
            breakdowns=breakdowns,
        )

    def _rank_by_score(
        self,
        jobs: Sequence[JobPosting],
        profile: CandidateProfile | None,
    ) -> tuple[list[JobPosting], list[ScoreBreakdown]]:
        scored = [(job, self._scorer.breakdown(job, profile)) for job in jobs]
        # sorted() is stable, so equal scores keep source order
        scored.sort(key=lambda pair: pair[1].score, reverse=True)
        return [job for job, _ in scored], [breakdown for _, breakdown in scored]
