from __future__ import annotations

from datetime import datetime
from typing import Any

import pendulum
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class PendingApplication(BaseModel):
    """A job the user started applying to on a previous visit."""

    job_id: str
    saved_at: datetime

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _accept_client_shape(cls, data: Any) -> Any:
        # browser storage writes {"jobId": ..., "timestamp": <epoch ms>}
        if isinstance(data, dict):
            data = dict(data)
            if "job_id" not in data and "jobId" in data:
                data["job_id"] = data.pop("jobId")
            if "saved_at" not in data and "timestamp" in data:
                data["saved_at"] = data.pop("timestamp")
        return data

    @field_validator("job_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("saved_at", mode="before")
    @classmethod
    def _parse_saved_at(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return pendulum.from_timestamp(value / 1000)
        if isinstance(value, str):
            return pendulum.parse(value)
        return value

    def is_expired(self, as_of: datetime, *, max_age_days: float = 7.0) -> bool:
        saved_at = pendulum.instance(self.saved_at)
        elapsed = pendulum.instance(as_of) - saved_at
        return elapsed.total_seconds() >= max_age_days * 86400


class SessionState(BaseModel):
    """Client-side state the engine reads but never owns."""

    pending_application: PendingApplication | None = None
    pending_notice_shown: bool = False

    model_config = ConfigDict(extra="ignore")
