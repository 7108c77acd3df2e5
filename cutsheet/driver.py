"""
cutsheet.driver - Export driver.

Runs one export job for a project: assembles the timeline from the studio
manifest, writes the requested interchange files, and keeps a render job
record (status, log lines, artifact URLs) under jobs/.

Failures are recorded on the job and re-raised; nothing is retried here.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from cutsheet.assembly import build_edl_project, build_fcpxml_project, load_studio_project
from cutsheet.config import CutsheetConfig, load_config
from cutsheet.exceptions import ExportError
from cutsheet.export.edl import generate_edl
from cutsheet.export.fcpxml import generate_fcpxml
from cutsheet.io import path_to_file_url, read_json, write_json, write_text
from cutsheet.logging import logger
from cutsheet.project import StudioDirectory, generate_job_id

JOB_STATUSES = ("queued", "processing", "completed", "failed")


class RenderJob(BaseModel):
    """Persistent record of one export run."""

    id: str
    project_name: str
    status: str = "queued"
    logs: list[str] = Field(default_factory=list)
    artifacts: dict[str, str] = Field(default_factory=dict)
    error: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: datetime | None = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in JOB_STATUSES:
            raise ValueError(f"status must be one of: {JOB_STATUSES}")
        return v

    def log(self, message: str) -> None:
        logger.info("[%s] %s", self.id, message)
        self.logs.append(message)


def save_job(directory: StudioDirectory, job: RenderJob) -> None:
    write_json(directory.job_path(job.id), job.model_dump(mode="json"))


def load_jobs(project_dir: Path) -> list[RenderJob]:
    """Load all render job records, newest first."""
    jobs_dir = StudioDirectory(project_dir).jobs_dir
    if not jobs_dir.exists():
        return []
    jobs = [RenderJob(**read_json(path)) for path in jobs_dir.glob("*.json")]
    jobs.sort(key=lambda j: j.created_at, reverse=True)
    return jobs


def _write_artifact(path: Path, content: str) -> None:
    try:
        write_text(path, content)
    except OSError as e:
        raise ExportError(f"Could not write {path}: {e}") from e


def run_export(
    project_dir: Path,
    config: CutsheetConfig | None = None,
    export_edl: bool | None = None,
    export_fcpxml: bool | None = None,
    job_id: str | None = None,
    output_dir: Path | None = None,
) -> RenderJob:
    """Export a project's timeline to EDL and/or FCPXML.

    Args:
        project_dir: Path to project directory
        config: Resolved config (loaded from cutsheet.yaml when omitted)
        export_edl: Override config.export_edl
        export_fcpxml: Override config.export_fcpxml
        job_id: Job ID to record under (next free ID when omitted)
        output_dir: Where to write files (project exports/ when omitted)

    Returns:
        The completed RenderJob

    Raises:
        ExportError: If no format is selected
        CutsheetError: Any assembly or export failure. The job is marked
            failed before any error propagates
    """
    directory = StudioDirectory(project_dir)
    if config is None:
        config = load_config(project_dir)

    want_edl = config.export_edl if export_edl is None else export_edl
    want_fcpxml = config.export_fcpxml if export_fcpxml is None else export_fcpxml
    if not (want_edl or want_fcpxml):
        raise ExportError("No export format selected")

    out_dir = output_dir or directory.exports_dir
    job = RenderJob(
        id=job_id or generate_job_id(directory.jobs_dir),
        project_name=config.project_name,
        status="processing",
    )
    job.log("Starting export...")
    save_job(directory, job)

    try:
        studio = load_studio_project(directory.manifest_path)
        job.log(f"Loaded {len(studio.scenes)} scene(s)")

        if want_edl:
            job.log("Generating EDL...")
            content = generate_edl(build_edl_project(studio, config.frame_rate))
            path = out_dir / f"{config.project_name}.edl"
            _write_artifact(path, content)
            job.artifacts["edl_url"] = path_to_file_url(path)

        if want_fcpxml:
            job.log("Generating FCPXML...")
            content = generate_fcpxml(build_fcpxml_project(studio, config))
            path = out_dir / f"{config.project_name}.fcpxml"
            _write_artifact(path, content)
            job.artifacts["fcpxml_url"] = path_to_file_url(path)
    except Exception as e:
        logger.error("Export %s failed: %s", job.id, e)
        job.status = "failed"
        job.error = str(e)
        save_job(directory, job)
        raise

    job.status = "completed"
    job.completed_at = datetime.now()
    job.log("Export complete")
    save_job(directory, job)
    return job
