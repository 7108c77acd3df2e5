"""
cutsheet.config - YAML config loading, preset merging, validation.

Handles loading cutsheet.yaml from a project directory, applying preset
defaults, and validating all export parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from cutsheet.exceptions import ConfigError

CONFIG_FILENAME = "cutsheet.yaml"

VIDEO_DIMENSIONS: dict[str, tuple[int, int]] = {
    "vertical": (1080, 1920),
    "horizontal": (1920, 1080),
    "square": (1080, 1080),
}


class CutsheetConfig(BaseModel):
    """Resolved configuration for a Cutsheet project."""

    project_name: str = "untitled"
    preset: str = "social"

    frame_rate: int = Field(default=30, gt=0)
    ratio: str = "vertical"

    export_edl: bool = False
    export_fcpxml: bool = True

    music_level_db: float = Field(default=-12.0, le=0.0)
    skip_placeholder_media: bool = True

    config_path: Path | None = None

    @field_validator("ratio")
    @classmethod
    def validate_ratio(cls, v: str) -> str:
        if v not in VIDEO_DIMENSIONS:
            raise ValueError(f"ratio must be one of: {set(VIDEO_DIMENSIONS)}")
        return v

    @field_validator("preset")
    @classmethod
    def validate_preset(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("preset must not be empty")
        return v

    @property
    def dimensions(self) -> tuple[int, int]:
        return VIDEO_DIMENSIONS[self.ratio]


BUILTIN_PRESETS: dict[str, dict[str, Any]] = {
    "social": {
        "frame_rate": 30,
        "ratio": "vertical",
        "export_edl": False,
        "export_fcpxml": True,
        "music_level_db": -12.0,
    },
    "widescreen": {
        "frame_rate": 30,
        "ratio": "horizontal",
        "export_edl": True,
        "export_fcpxml": True,
        "music_level_db": -12.0,
    },
    "cinema": {
        "frame_rate": 24,
        "ratio": "horizontal",
        "export_edl": True,
        "export_fcpxml": True,
        "music_level_db": -18.0,
    },
}


def load_preset(name: str, presets_dir: Path | None = None) -> dict[str, Any]:
    """Load a preset by name, checking custom presets first."""
    if presets_dir and presets_dir.exists():
        preset_file = presets_dir / f"{name}.yaml"
        if preset_file.exists():
            with open(preset_file) as f:
                return yaml.safe_load(f) or {}
    if name in BUILTIN_PRESETS:
        return BUILTIN_PRESETS[name].copy()
    raise ConfigError(f"Unknown preset: {name}")


def merge_config(project_config: dict[str, Any], preset: dict[str, Any]) -> dict[str, Any]:
    """Merge project config with preset defaults. Project config takes precedence."""
    merged = preset.copy()
    for key, value in project_config.items():
        if value is not None:
            merged[key] = value
    return merged


def load_config(project_dir: Path) -> CutsheetConfig:
    """Load and validate configuration from a project directory."""
    config_file = project_dir / CONFIG_FILENAME
    if not config_file.exists():
        raise FileNotFoundError(f"No {CONFIG_FILENAME} found in {project_dir}")

    with open(config_file) as f:
        raw_config = yaml.safe_load(f) or {}

    preset_name = raw_config.get("preset", "social")
    presets_dir = project_dir / "presets"
    search_dir = presets_dir if presets_dir.exists() else None
    preset = load_preset(preset_name, search_dir)

    if "inherits" in preset:
        parent = load_preset(preset.pop("inherits"), search_dir)
        preset = merge_config(preset, parent)

    merged = merge_config(raw_config, preset)
    merged["config_path"] = config_file

    try:
        return CutsheetConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid {config_file}: {e}") from e


def create_default_config(project_name: str, preset: str = "social") -> dict[str, Any]:
    """Create a default config for a new project."""
    defaults: dict[str, Any] = {
        "project_name": project_name,
        "preset": preset,
    }
    if preset in BUILTIN_PRESETS:
        defaults = merge_config(defaults, BUILTIN_PRESETS[preset])
    return defaults


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
