"""Pydantic schema definitions for source-neutral data structures."""

from __future__ import annotations

from .criteria import FACET_FIELDS, FilterCriteria
from .job import JobPosting
from .profile import CandidateProfile
from .session import PendingApplication, SessionState

__all__ = [
    "CandidateProfile",
    "FACET_FIELDS",
    "FilterCriteria",
    "JobPosting",
    "PendingApplication",
    "SessionState",
]
