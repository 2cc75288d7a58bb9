"""Final ordering and annotation of match results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from ..schemas import CandidateProfile, JobPosting
from .relaxation import FilterResult
from .scoring import MatchScorer, ScoreBreakdown

PendingStatus = Literal["none", "pinned", "missing", "deferred"]


@dataclass(slots=True)
class MatchResult:
    """A job with its derived score and display flags."""

    job: JobPosting
    match_score: int
    is_related: bool = False
    is_pending_application: bool = False
    breakdown: ScoreBreakdown | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = self.job.model_dump(mode="json")
        payload.update(
            {
                "match_score": self.match_score,
                "is_related": self.is_related,
                "is_pending_application": self.is_pending_application,
            }
        )
        if self.breakdown is not None:
            payload["score_components"] = {
                item.method: item.points for item in self.breakdown.components
            }
        return payload


@dataclass(slots=True)
class AssemblyOutcome:
    """Assembled results plus what the caller must do with its pending state."""

    results: list[MatchResult]
    is_related: bool
    mode: str
    pending_status: PendingStatus = "none"
    clear_pending: bool = False
    notify_unavailable: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def job_ids(self) -> list[str]:
        return [item.job.job_id for item in self.results]


class ResultAssembler:
    """Score every selected job and pin the pending application first."""

    def __init__(self, *, scorer: MatchScorer) -> None:
        self._scorer = scorer

    def assemble(
        self,
        filter_result: FilterResult,
        profile: CandidateProfile | None,
        pending_job_id: str | None = None,
        *,
        notice_shown: bool = False,
    ) -> AssemblyOutcome:
        breakdowns = filter_result.breakdowns
        if breakdowns is None:
            breakdowns = [self._scorer.breakdown(job, profile) for job in filter_result.jobs]
        results = [
            MatchResult(
                job=job,
                match_score=breakdown.score,
                is_related=filter_result.is_related,
                breakdown=breakdown,
            )
            for job, breakdown in zip(filter_result.jobs, breakdowns)
        ]
        outcome = AssemblyOutcome(
            results=results,
            is_related=filter_result.is_related,
            mode=filter_result.mode,
        )
        # an empty id means no pending application
        if not pending_job_id:
            return outcome

        pending_key = str(pending_job_id)
        outcome.metadata["pending_job_id"] = pending_key
        if not results:
            outcome.pending_status = "deferred"
            return outcome

        index = next(
            (idx for idx, item in enumerate(results) if item.job.job_id == pending_key),
            None,
        )
        if index is None:
            outcome.pending_status = "missing"
            outcome.clear_pending = True
            outcome.notify_unavailable = not notice_shown
            return outcome

        pinned = results.pop(index)
        pinned.is_pending_application = True
        results.insert(0, pinned)
        outcome.pending_status = "pinned"
        return outcome
