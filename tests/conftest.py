"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml

# Rich wraps console output at the detected terminal width; pin a wide one so
# CLI output assertions don't depend on the runner's terminal or tmp path length.
os.environ["COLUMNS"] = "200"


@pytest.fixture
def sample_manifest() -> dict:
    """Return a studio manifest with real, placeholder and missing media."""
    return {
        "project_name": "test_project",
        "title": "Spring Launch",
        "created": "2026-10-01T10:00:00",
        "preset": "widescreen",
        "scenes": [
            {
                "id": "s1",
                "index": 0,
                "duration_ms": 2000,
                "image_url": "https://cdn.example.com/s1.png",
                "vo_segment": {
                    "id": "vo1",
                    "audio_url": "https://cdn.example.com/vo1.mp3",
                    "duration_ms": 1800,
                },
            },
            {
                "id": "s2",
                "index": 1,
                "duration_ms": 2500,
                "image_url": "https://cdn.example.com/s2.png",
                "vo_segment": {"id": "vo2", "audio_url": "mock://vo2.mp3", "duration_ms": None},
            },
            {
                "id": "s3",
                "index": 2,
                "duration_ms": 3000,
                "image_url": "mock://s3.png",
                "vo_segment": None,
            },
        ],
        "music_url": "https://cdn.example.com/bed.mp3",
    }


@pytest.fixture
def tmp_project(tmp_path: Path, sample_manifest: dict) -> Path:
    """Create a temporary project directory with config and manifest."""
    project_dir = tmp_path / "test_project"
    project_dir.mkdir()
    (project_dir / "exports").mkdir()
    (project_dir / "jobs").mkdir()

    config = {"project_name": "test_project", "preset": "widescreen"}
    with open(project_dir / "cutsheet.yaml", "w") as f:
        yaml.dump(config, f)

    with open(project_dir / "project.json", "w") as f:
        json.dump(sample_manifest, f)

    return project_dir
