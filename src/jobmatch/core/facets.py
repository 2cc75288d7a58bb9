"""Per-facet filter predicates."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

import pendulum

from ..schemas import FilterCriteria, JobPosting


def _default_workplace_synonyms() -> dict[str, list[str]]:
    return {
        "on-site": ["on-site", "full time", "office"],
        "remote": ["remote"],
        "hybrid": ["hybrid", "flexible"],
    }


def _default_country_aliases() -> dict[str, list[str]]:
    return {
        "usa": ["united states", "america", "us"],
        "uk": ["united kingdom", "britain", "england", "scotland", "wales"],
        "uae": ["united arab emirates", "dubai", "abu dhabi"],
    }


def _default_date_posted_days() -> dict[str, int]:
    return {
        "today": 1,
        "week": 7,
        "month": 30,
        "3months": 90,
    }


@dataclass
class FacetConfig:
    """Token tables for fuzzy facet matching."""

    workplace_synonyms: dict[str, list[str]] = field(default_factory=_default_workplace_synonyms)
    country_aliases: dict[str, list[str]] = field(default_factory=_default_country_aliases)
    date_posted_days: dict[str, int] = field(default_factory=_default_date_posted_days)
    default_date_window_days: int = 365


# A facet check answers True (satisfied), False (violated) or None when the job
# lacks the field the facet inspects.
FacetOutcome = bool | None


class FacetEvaluator:
    """Evaluate jobs against filter facets and the free-text search."""

    def __init__(
        self,
        *,
        config: FacetConfig | None = None,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config or FacetConfig()
        self._now_provider = now_provider or pendulum.now
        self._checks: dict[str, Callable[[JobPosting, Any, datetime | None], FacetOutcome]] = {
            "workplace": self._check_workplace,
            "country": self._check_country,
            "city": self._check_city,
            "career_level": self._check_career_level,
            "job_category": self._check_job_category,
            "job_type": self._check_job_type,
            "date_posted": self._check_date_posted,
        }

    def matches_search(self, job: JobPosting, query: str) -> bool:
        if not query:
            return True
        needle = query.lower()
        fields = [job.title, job.company_name, job.description, job.location or ""]
        if any(needle in text.lower() for text in fields):
            return True
        return any(needle in skill.lower() for skill in job.skills)

    def evaluate_facets(
        self,
        job: JobPosting,
        criteria: FilterCriteria,
        *,
        as_of: datetime | None = None,
    ) -> dict[str, FacetOutcome]:
        """Return the outcome of every active facet, keyed by facet name."""
        return {
            name: self._checks[name](job, getattr(criteria, name), as_of)
            for name in criteria.active_facets()
        }

    def matches_primary(
        self,
        job: JobPosting,
        criteria: FilterCriteria,
        *,
        as_of: datetime | None = None,
    ) -> bool:
        if not self.matches_search(job, criteria.search_query):
            return False
        outcomes = self.evaluate_facets(job, criteria, as_of=as_of)
        return all(outcome is not False for outcome in outcomes.values())

    def matches_relaxed(
        self,
        job: JobPosting,
        criteria: FilterCriteria,
        *,
        as_of: datetime | None = None,
    ) -> bool:
        if not self.matches_search(job, criteria.search_query):
            return False
        outcomes = self.evaluate_facets(job, criteria, as_of=as_of)
        return any(outcome is True for outcome in outcomes.values())

    def _check_workplace(self, job: JobPosting, selected: list[str], _as_of: datetime | None) -> FacetOutcome:
        workplace = (job.workplace_type or "").lower()
        if not workplace:
            return False
        for token in selected:
            key = token.lower()
            needles = self._config.workplace_synonyms.get(key, [key])
            if any(needle.lower() in workplace for needle in needles):
                return True
        return False

    def _check_country(self, job: JobPosting, country: str, _as_of: datetime | None) -> FacetOutcome:
        if not job.location:
            return None
        location = job.location.lower()
        key = country.lower()
        if key in location:
            return True
        return any(alias in location for alias in self._config.country_aliases.get(key, []))

    @staticmethod
    def _contains(haystack: str | None, needle: str) -> FacetOutcome:
        if not haystack:
            return None
        return needle.lower() in haystack.lower()

    def _check_city(self, job: JobPosting, city: str, _as_of: datetime | None) -> FacetOutcome:
        return self._contains(job.location, city)

    def _check_career_level(self, job: JobPosting, level: str, _as_of: datetime | None) -> FacetOutcome:
        return self._contains(job.experience_level, level)

    def _check_job_category(self, job: JobPosting, category: str, _as_of: datetime | None) -> FacetOutcome:
        target = job.industry or job.title
        return category.lower() in target.lower()

    def _check_job_type(self, job: JobPosting, job_type: str, _as_of: datetime | None) -> FacetOutcome:
        return self._contains(job.job_type, job_type)

    def _check_date_posted(self, job: JobPosting, window: str, as_of: datetime | None) -> FacetOutcome:
        if job.posted_at is None:
            return None
        max_days = self._config.date_posted_days.get(
            window.lower(), self._config.default_date_window_days
        )
        reference = pendulum.instance(as_of) if as_of is not None else self._now_provider()
        elapsed = reference - pendulum.instance(job.posted_at)
        age_days = math.floor(elapsed.total_seconds() / 86400)
        return age_days <= max_days
