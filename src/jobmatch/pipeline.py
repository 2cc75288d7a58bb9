"""Match pipeline assembly and execution."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Iterable, List

import pendulum
import structlog
import yaml
from pydantic import ValidationError

from .adapters import AirtableJobAdapter, JobSourceAdapter, PlatformJobAdapter
from .core import AssemblyOutcome, MatchEngine
from .schemas import CandidateProfile, FilterCriteria, JobPosting, SessionState
from . import __version__


class AdapterRegistry:
    """Registry mapping job sources to adapters."""

    def __init__(self, adapters: Iterable[JobSourceAdapter], *, default_source: str = "platform"):
        self._adapters = {adapter.source: adapter for adapter in adapters}
        self._default_source = default_source

    def get(self, source: str) -> JobSourceAdapter:
        try:
            return self._adapters[source]
        except KeyError as exc:
            raise KeyError(f"Unsupported source: {source!r}") from exc

    def detect(self, record: dict[str, Any]) -> JobSourceAdapter:
        for adapter in self._adapters.values():
            if adapter.can_handle(record, {}):
                return adapter
        return self.get(self._default_source)

    def sources(self) -> List[str]:
        return list(self._adapters.keys())


class JobLoadError(ValueError):
    """Raised when job loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[JobPosting]):
        super().__init__("Job loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Job loading failed: {self.errors}"


class JobLoader:
    """Load job postings from JSON arrays or JSONL files through adapters."""

    def __init__(self, registry: AdapterRegistry):
        self._registry = registry

    def load(self, path: Path) -> list[JobPosting]:
        jobs: list[JobPosting] = []
        errors: list[str] = []
        seen: set[str] = set()

        for label, record in self._records(path, errors):
            try:
                adapter = self._resolve_adapter(record)
            except KeyError:
                errors.append(f"{label}: unsupported source '{record.get('source')}'")
                continue
            payload = record.get("payload", record) if "source" in record else record
            try:
                job = JobPosting.model_validate(adapter.parse_job(payload))
            except (ValidationError, ValueError) as exc:
                errors.append(f"{label}: {exc}")
                continue
            if not job.job_id:
                errors.append(f"{label}: missing job id")
                continue
            if job.job_id in seen:
                errors.append(f"{label}: duplicate job id '{job.job_id}'")
                continue
            seen.add(job.job_id)
            jobs.append(job)

        if errors:
            raise JobLoadError(errors, jobs)
        return jobs

    def _resolve_adapter(self, record: dict[str, Any]) -> JobSourceAdapter:
        source = record.get("source")
        if source:
            return self._registry.get(str(source))
        return self._registry.detect(record)

    @staticmethod
    def _records(path: Path, errors: list[str]) -> list[tuple[str, dict[str, Any]]]:
        records: list[tuple[str, dict[str, Any]]] = []
        with path.open("r", encoding="utf-8") as handle:
            if path.suffix == ".jsonl":
                for idx, line in enumerate(handle, start=1):
                    raw = line.strip()
                    if not raw:
                        continue
                    try:
                        record = json.loads(raw)
                    except json.JSONDecodeError as exc:
                        errors.append(f"line {idx}: invalid JSON ({exc})")
                        continue
                    if not isinstance(record, dict):
                        errors.append(f"line {idx}: record must be an object")
                        continue
                    records.append((f"line {idx}", record))
                return records

            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid jobs JSON: {exc}") from exc

        if isinstance(data, dict):
            data = data.get("jobs", [])
        if not isinstance(data, list):
            raise ValueError("Jobs JSON must be a list or an object with a 'jobs' list")
        for idx, record in enumerate(data):
            if not isinstance(record, dict):
                errors.append(f"item {idx}: record must be an object")
                continue
            records.append((f"item {idx}", record))
        return records


class ProfileLoader:
    """Load the viewing user's AI profile."""

    def load(self, path: Path) -> CandidateProfile | None:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid profile JSON: {exc}") from exc
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ValueError("Profile JSON must be an object")
        return CandidateProfile.from_payload(data)


class CriteriaLoader:
    """Load filter selections from JSON or YAML."""

    def load(self, path: Path) -> FilterCriteria:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid criteria file: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("Criteria must be a mapping")
        return FilterCriteria.from_payload(data)


class SessionStore:
    """JSON file holding the pending application and notice flags."""

    def __init__(self, path: Path):
        self._path = path

    def load(self) -> SessionState:
        if not self._path.exists():
            return SessionState()
        raw = self._path.read_text(encoding="utf-8").strip()
        if not raw:
            return SessionState()
        try:
            return SessionState.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ValueError(f"Invalid session state: {exc}") from exc

    def save(self, state: SessionState) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(state.model_dump_json(indent=2), encoding="utf-8")


class OutputWriter:
    """Persist match results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, default=_json_default),
            encoding="utf-8",
        )


class MatchPipeline:
    """End-to-end job matching orchestrator."""

    DEFAULT_PENDING_MAX_AGE_DAYS = 7.0

    def __init__(
        self,
        *,
        engine: MatchEngine,
        registry: AdapterRegistry,
        job_loader: JobLoader | None = None,
        profile_loader: ProfileLoader | None = None,
        criteria_loader: CriteriaLoader | None = None,
        writer: OutputWriter | None = None,
        pending_max_age_days: float | None = None,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._engine = engine
        self._registry = registry
        self._jobs = job_loader or JobLoader(registry)
        self._profiles = profile_loader or ProfileLoader()
        self._criteria = criteria_loader or CriteriaLoader()
        self._writer = writer or OutputWriter()
        self._pending_max_age_days = (
            self.DEFAULT_PENDING_MAX_AGE_DAYS
            if pending_max_age_days is None
            else pending_max_age_days
        )
        self._now_provider = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        jobs_path: Path,
        output_path: Path,
        profile_path: Path | None = None,
        criteria_path: Path | None = None,
        pending_job_id: str | None = None,
        session_store: SessionStore | None = None,
        as_of: str | None = None,
        audit_logger: "AuditLogger | None" = None,
    ) -> dict[str, Any]:
        load_errors: list[str] = []
        try:
            jobs = self._jobs.load(jobs_path)
        except JobLoadError as exc:
            jobs = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("jobs.partial_load", errors=exc.errors)

        profile = self._profiles.load(profile_path) if profile_path else None
        criteria = self._criteria.load(criteria_path) if criteria_path else FilterCriteria()
        reference = self._resolve_as_of(as_of)

        session = session_store.load() if session_store else SessionState()
        notices: list[str] = []
        if pending_job_id is None:
            pending_job_id = self._pending_from_session(session, reference)

        outcome = self._engine.run(
            jobs,
            profile,
            criteria,
            pending_job_id=pending_job_id,
            notice_shown=session.pending_notice_shown,
            as_of=reference,
        )

        if outcome.clear_pending:
            session.pending_application = None
        if outcome.notify_unavailable:
            session.pending_notice_shown = True
            notices.append("pending_job_unavailable")
            self._logger.warning("pending.unavailable", job_id=pending_job_id)
        if session_store:
            session_store.save(session)

        payload = self._build_payload(
            outcome=outcome,
            criteria=criteria,
            job_count=len(jobs),
            load_errors=load_errors,
            notices=notices,
            reference=reference,
        )
        self._writer.write(output_path, payload)

        if audit_logger:
            audit_logger.append(
                {
                    "timestamp": reference.isoformat(),
                    "criteria": criteria.model_dump(),
                    "mode": outcome.mode,
                    "is_related": outcome.is_related,
                    "job_ids": outcome.job_ids,
                    "pending_status": outcome.pending_status,
                    "notices": notices,
                }
            )

        self._logger.info(
            "pipeline.result",
            job_count=len(jobs),
            result_count=len(outcome.results),
            mode=outcome.mode,
            is_related=outcome.is_related,
            pending_status=outcome.pending_status,
        )
        return payload

    def _pending_from_session(self, session: SessionState, reference: datetime) -> str | None:
        pending = session.pending_application
        if pending is None:
            return None
        if pending.is_expired(reference, max_age_days=self._pending_max_age_days):
            self._logger.info("pending.expired", job_id=pending.job_id)
            session.pending_application = None
            return None
        return pending.job_id

    def _resolve_as_of(self, as_of: str | None) -> datetime:
        if as_of is None:
            return self._now_provider()
        try:
            return pendulum.parse(as_of)
        except ValueError as exc:
            raise ValueError(f"Invalid as-of date: {as_of!r}") from exc

    def _build_payload(
        self,
        *,
        outcome: AssemblyOutcome,
        criteria: FilterCriteria,
        job_count: int,
        load_errors: list[str],
        notices: list[str],
        reference: datetime,
    ) -> dict[str, Any]:
        metadata = {
            "job_count": job_count,
            "result_count": len(outcome.results),
            "mode": outcome.mode,
            "is_related": outcome.is_related,
            "active_filters": criteria.active_count(),
            "criteria": criteria.model_dump(),
            "pending_status": outcome.pending_status,
            "notices": notices,
            "errors": load_errors,
            "as_of": reference,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        return {
            "metadata": metadata,
            "results": [item.to_dict() for item in outcome.results],
        }


def default_registry() -> AdapterRegistry:
    """Return the default adapter registry."""
    return AdapterRegistry(adapters=[PlatformJobAdapter(), AirtableJobAdapter()])


def _json_default(value):  # type: ignore[override]
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False, default=_json_default))
            handle.write("\n")
