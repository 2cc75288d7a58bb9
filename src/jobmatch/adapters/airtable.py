"""Airtable job posting adapter."""

from __future__ import annotations

import json
from typing import Any

from ..schemas import JobPosting


class AirtableJobAdapter:
    """Adapter converting Airtable job rows into JobPosting dicts.

    Rows arrive either flattened (``recordId``, ``jobTitle`` ...) or as raw
    Airtable records with the columns under ``fields`` and the record id at the
    top level.
    """

    source = "airtable"

    def can_handle(self, blob: bytes | str | dict[str, Any], metadata: dict[str, Any]) -> bool:
        source = metadata.get("source")
        if source:
            return str(source).lower() == self.source
        try:
            data = self._load(blob)
        except ValueError:
            return False
        return "recordId" in data or "fields" in data

    def parse_job(self, blob: bytes | str | dict[str, Any]) -> dict[str, Any]:
        data = self._load(blob)
        fields = data.get("fields")
        row = dict(fields) if isinstance(fields, dict) else dict(data)
        record_id = data.get("recordId") or data.get("id") or row.get("recordId")

        job = JobPosting(
            job_id=record_id if record_id is not None else "",
            title=row.get("jobTitle") or row.get("Job Title") or "",
            company_name=row.get("companyName") or row.get("Company Name") or "",
            description=row.get("jobDescription") or row.get("Job Description") or "",
            location=row.get("location") or row.get("Location"),
            workplace_type=row.get("workplaceType") or row.get("Workplace Type"),
            employment_type=row.get("employmentType") or row.get("Employment Type"),
            experience_level=row.get("experienceLevel") or row.get("Experience Level"),
            industry=row.get("industry") or row.get("Industry"),
            skills=row.get("skills") or row.get("Skills") or [],
            posted_at=row.get("postedDate") or row.get("Posted Date"),
            salary_range=row.get("salaryRange") or row.get("Salary Range"),
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
            raise ValueError("Invalid Airtable payload") from exc
        if not isinstance(data, dict):
            raise ValueError("Airtable payload must be an object")
        return data
