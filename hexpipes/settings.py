"""Puzzle settings for hexpipes.

Settings are loaded from YAML (config/puzzle.yaml by default) and
validated into an immutable PuzzleSettings model.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "puzzle.yaml"


class PuzzleSettings(BaseModel):
    """Tunable values for generating and scrambling a puzzle."""

    model_config = ConfigDict(frozen=True)

    radius: int = Field(default=2, ge=0)
    max_attempts: int = Field(default=1000, ge=1)
    force_rotation: bool = False
    ensure_unsolved: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> PuzzleSettings:
        """Create settings from a dictionary (YAML data)."""
        return cls.model_validate(data)


def load_settings(path: Path | str | None = None) -> PuzzleSettings:
    """
    Load puzzle settings from a YAML file.

    Args:
        path: Path to a YAML file with a `puzzle:` section. If None, uses
              the packaged config/puzzle.yaml.

    Returns:
        PuzzleSettings; defaults if the file is missing or has no
        `puzzle:` section

    Raises:
        pydantic.ValidationError: If a value is out of range
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        return PuzzleSettings()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data and "puzzle" in data:
        return PuzzleSettings.from_dict(data["puzzle"] or {})
    return PuzzleSettings()
