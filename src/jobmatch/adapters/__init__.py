"""Source-specific job posting adapters."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .airtable import AirtableJobAdapter
from .platform import PlatformJobAdapter


@runtime_checkable
class JobSourceAdapter(Protocol):
    """Source-specific job adapter contract.

    Implementations transform source-native job records into source-neutral
    dictionaries that conform to the shared JobPosting schema.
    """

    source: str

    def can_handle(self, blob: bytes | str | dict[str, Any], metadata: dict) -> bool:
        """Return True when the adapter can parse the given job record."""

    def parse_job(self, blob: bytes | str | dict[str, Any]) -> dict:
        """Parse a job record and return a source-neutral dictionary."""


__all__ = ["JobSourceAdapter", "AirtableJobAdapter", "PlatformJobAdapter"]
