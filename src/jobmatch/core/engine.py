"""Match engine orchestration."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..schemas import CandidateProfile, FilterCriteria, JobPosting
from .assembly import AssemblyOutcome, ResultAssembler
from .relaxation import RelaxationStrategy


class MatchEngine:
    """Filter, relax, score and assemble a job list in one pure call."""

    def __init__(
        self,
        *,
        relaxation: RelaxationStrategy,
        assembler: ResultAssembler,
    ) -> None:
        self._relaxation = relaxation
        self._assembler = assembler

    def run(
        self,
        jobs: Sequence[JobPosting],
        profile: CandidateProfile | None,
        criteria: FilterCriteria | None = None,
        *,
        pending_job_id: str | None = None,
        notice_shown: bool = False,
        as_of: datetime | None = None,
    ) -> AssemblyOutcome:
        criteria = criteria or FilterCriteria()
        filter_result = self._relaxation.select_result_set(
            jobs,
            criteria,
            profile,
            as_of=as_of,
        )
        outcome = self._assembler.assemble(
            filter_result,
            profile,
            pending_job_id,
            notice_shown=notice_shown,
        )
        outcome.metadata.update(
            {
                "input_count": len(jobs),
                "active_filters": criteria.active_count(),
                "relaxation_threshold": self._relaxation.threshold,
            }
        )
        return outcome
