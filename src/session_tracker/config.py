"""Tracker configuration loaded from the project directory."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

CONFIG_FILENAME = ".session-tracker.json"


class TrackerConfig(BaseModel):
    """Settings for a tracking session."""

    enabled: bool = True
    include_untracked: bool = True
    poll_interval: float = Field(default=2.0, gt=0)
    max_display_lines: int = Field(default=200, ge=0)  # 0 = unlimited


def load_config(project_root: Path) -> TrackerConfig:
    """Load ``.session-tracker.json`` from the project root, if present."""
    config_file = Path(project_root) / CONFIG_FILENAME
    if not config_file.exists():
        return TrackerConfig()

    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{config_file} must contain a JSON object")

    try:
        return TrackerConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {config_file}: {e}") from e
