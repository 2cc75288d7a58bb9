"""Platform REST API job adapter."""

from __future__ import annotations

import json
from typing import Any

from ..schemas import JobPosting

_FIELD_MAP = {
    "job_id": ("id", "job_id", "jobId"),
    "title": ("title",),
    "company_name": ("companyName", "company_name", "company"),
    "description": ("description",),
    "location": ("location",),
    "workplace_type": ("workplaceType", "workplace_type"),
    "employment_type": ("employmentType", "employment_type"),
    "experience_level": ("experienceLevel", "experience_level"),
    "industry": ("industry",),
    "job_type": ("jobType", "job_type"),
    "skills": ("skills",),
    "posted_at": ("postedAt", "posted_at", "createdAt"),
    "salary_range": ("salaryRange", "salary_range"),
    "seniority_level": ("seniorityLevel", "seniority_level"),
}


class PlatformJobAdapter:
    """Adapter converting platform API job records into JobPosting dicts."""

    source = "platform"

    def can_handle(self, blob: bytes | str | dict[str, Any], metadata: dict[str, Any]) -> bool:
        source = metadata.get("source")
        if source:
            return str(source).lower() == self.source
        try:
            data = self._load(blob)
        except ValueError:
            return False
        return "id" in data and "title" in data

    def parse_job(self, blob: bytes | str | dict[str, Any]) -> dict[str, Any]:
        data = self._load(blob)
        values = {
            field: _first_present(data, keys) for field, keys in _FIELD_MAP.items()
        }
        job = JobPosting.model_validate(
            {key: value for key, value in values.items() if value is not None}
        )
        return job.model_dump(mode="python")

    @staticmethod
    def _load(blob: bytes | str | dict[str, Any]) -> dict[str, Any]:
        if isinstance(blob, dict):
            return blob
        if isinstance(blob, bytes):
            blob = blob.decode("utf-8")
        try:
            data = json.loads(blob)
        except json.JSONDecodeError as exc:
            raise ValueError("Invalid platform job payload") from exc
        if not isinstance(data, dict):
            raise ValueError("Platform job payload must be an object")
        return data


def _first_present(data: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None
