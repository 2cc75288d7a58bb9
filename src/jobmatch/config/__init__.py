"""Configuration management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas.config import load_config


def load_settings(path: str | Path) -> dict[str, Any]:
    """Load a YAML settings file and return validated container settings."""
    with Path(path).open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    return load_config(raw).to_settings()


__all__ = ["load_settings"]
