"""
cutsheet.project - Project directory management.

Handles project creation, directory structure, and manifest management.
A project directory holds:

    cutsheet.yaml    export configuration
    project.json     studio manifest (scenes, voiceover, music)
    exports/         generated EDL / FCPXML files
    jobs/            render job records
    presets/         optional custom presets
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from cutsheet.config import CONFIG_FILENAME, create_default_config, write_config
from cutsheet.exceptions import ProjectError
from cutsheet.io import read_json, write_json


class StudioDirectory:
    """Represents a Cutsheet project directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.config_path = path / CONFIG_FILENAME
        self.manifest_path = path / "project.json"
        self.exports_dir = path / "exports"
        self.jobs_dir = path / "jobs"
        self.presets_dir = path / "presets"

    def exists(self) -> bool:
        return self.config_path.exists() and self.manifest_path.exists()

    def create(self, preset: str = "social", title: str | None = None) -> None:
        """Create the project directory structure."""
        self.path.mkdir(parents=True, exist_ok=True)
        self.exports_dir.mkdir(exist_ok=True)
        self.jobs_dir.mkdir(exist_ok=True)
        self.presets_dir.mkdir(exist_ok=True)

        config = create_default_config(self.path.name, preset)
        write_config(config, self.config_path)

        manifest = {
            "project_name": self.path.name,
            "title": title or self.path.name,
            "created": datetime.now().isoformat(timespec="seconds"),
            "preset": preset,
            "scenes": [],
            "music_url": None,
        }
        self.save_manifest(manifest)

    def load_manifest(self) -> dict[str, Any]:
        """Load the studio manifest."""
        if not self.manifest_path.exists():
            raise ProjectError(f"Manifest not found: {self.manifest_path}")
        return read_json(self.manifest_path)

    def save_manifest(self, manifest: dict[str, Any]) -> None:
        write_json(self.manifest_path, manifest)

    def job_path(self, job_id: str) -> Path:
        return self.jobs_dir / f"{job_id}.json"


def generate_job_id(jobs_dir: Path) -> str:
    """Generate the next free render job ID."""
    existing = {p.stem for p in jobs_dir.glob("*.json")} if jobs_dir.exists() else set()
    counter = 1
    while True:
        job_id = f"job_{counter:03d}"
        if job_id not in existing:
            return job_id
        counter += 1
