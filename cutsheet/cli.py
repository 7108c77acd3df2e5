"""
cutsheet.cli - Typer CLI entry point.

Provides subcommands for creating projects and exporting timelines.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cutsheet import __version__
from cutsheet.config import BUILTIN_PRESETS, CONFIG_FILENAME, load_config
from cutsheet.exceptions import CutsheetError
from cutsheet.logging import configure_logging
from cutsheet.project import StudioDirectory
from cutsheet.utils import format_duration

app = typer.Typer(
    name="cutsheet",
    help="Render-export toolkit for AI-assisted short video.\n\n"
    "Turns studio scenes, voiceover and music into CMX 3600 EDL and "
    "FCPXML timelines for Premiere, Resolve and Final Cut.",
    add_completion=False,
)
console = Console()


def find_project_dir() -> Path | None:
    """Find the project directory by looking for cutsheet.yaml."""
    current = Path.cwd()
    while current != current.parent:
        if (current / CONFIG_FILENAME).exists():
            return current
        current = current.parent
    return None


def require_project_dir() -> Path:
    project_dir = find_project_dir()
    if not project_dir:
        console.print("[red]Error: Not in a Cutsheet project directory[/red]")
        console.print("[dim]Run 'cutsheet init' first or cd into a project directory[/dim]")
        raise typer.Exit(1)
    return project_dir


def version_callback(value: bool) -> None:
    if value:
        console.print(f"cutsheet {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Cutsheet - render-export toolkit for AI-assisted short video."""
    configure_logging(verbose)


@app.command("init")
def init_project(
    name: str = typer.Argument(..., help="Project name"),
    preset: str = typer.Option(
        "social",
        "--preset",
        "-p",
        help="Export preset: social, widescreen, or cinema",
    ),
    title: str | None = typer.Option(None, "--title", "-t", help="Timeline title"),
    path: str = typer.Option(".", "--path", "-d", help="Directory to create project in"),
) -> None:
    """Create a new Cutsheet project."""
    project_path = Path(path) / name

    if preset not in BUILTIN_PRESETS:
        console.print(f"[red]Error: Unknown preset '{preset}'[/red]")
        console.print(f"[dim]Valid presets: {', '.join(BUILTIN_PRESETS)}[/dim]")
        raise typer.Exit(1)

    if project_path.exists():
        console.print(f"[red]Error: Directory '{project_path}' already exists[/red]")
        raise typer.Exit(1)

    try:
        StudioDirectory(project_path).create(preset=preset, title=title)
    except OSError as e:
        console.print(f"[red]Error creating project: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Created project '{name}' with preset '{preset}'")
    console.print(f"[dim]  {project_path}[/dim]")
    console.print("\nNext steps:")
    console.print(f"  cd {name}")
    console.print("  add scenes to project.json, then run: cutsheet export")


@app.command("export")
def export_timeline(
    format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Export format: edl, fcpxml, or all (default: from cutsheet.yaml)",
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output directory"),
    job_id: str | None = typer.Option(None, "--job-id", help="Record under this job ID"),
) -> None:
    """Export the timeline to EDL and/or FCPXML."""
    project_dir = require_project_dir()

    export_edl = export_fcpxml = None
    if format is not None:
        format = format.lower()
        if format not in ("edl", "fcpxml", "all"):
            console.print(
                f"[red]Error: Unknown format '{format}'. Use 'edl', 'fcpxml' or 'all'.[/red]"
            )
            raise typer.Exit(1)
        export_edl = format in ("edl", "all")
        export_fcpxml = format in ("fcpxml", "all")

    from cutsheet.driver import run_export

    try:
        config = load_config(project_dir)
        job = run_export(
            project_dir,
            config=config,
            export_edl=export_edl,
            export_fcpxml=export_fcpxml,
            job_id=job_id,
            output_dir=Path(output) if output else None,
        )
    except CutsheetError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    for key, url in job.artifacts.items():
        label = key.removesuffix("_url").upper()
        console.print(f"[green]✓[/green] {label}: {url}")
    console.print(f"[dim]  Job {job.id}, {config.frame_rate} fps[/dim]")


@app.command("timecode")
def timecode_cmd(
    seconds: float = typer.Argument(..., help="Position in seconds"),
    fps: float = typer.Option(30, "--fps", "-r", help="Frame rate"),
) -> None:
    """Convert seconds to SMPTE timecode."""
    from cutsheet.export.timecode import seconds_to_timecode

    try:
        console.print(seconds_to_timecode(seconds, fps))
    except CutsheetError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("validate")
def validate_project() -> None:
    """Validate config and assemble the timeline without writing files."""
    project_dir = require_project_dir()

    from cutsheet.assembly import build_edl_project, load_studio_project

    try:
        config = load_config(project_dir)
        console.print("[green]✓[/green] config: Valid")
    except CutsheetError as e:
        console.print(f"[red]✗[/red] config: {e}")
        raise typer.Exit(1)

    try:
        studio = load_studio_project(StudioDirectory(project_dir).manifest_path)
        timeline = build_edl_project(studio, config.frame_rate)
    except CutsheetError as e:
        console.print(f"[red]✗[/red] timeline: {e}")
        raise typer.Exit(1)

    table = Table(title=f"Timeline: {timeline.title}")
    table.add_column("Track", style="cyan")
    table.add_column("Clips", style="green")
    for track in ("V", "A1", "A2"):
        table.add_row(track, str(len(timeline.clips_on(track))))
    console.print(table)
    console.print(
        f"[green]✓[/green] timeline: {len(timeline.clips)} clip(s), "
        f"{format_duration(timeline.duration)}"
    )


@app.command("status")
def show_status() -> None:
    """Show render job history."""
    project_dir = require_project_dir()

    from cutsheet.driver import load_jobs

    jobs = load_jobs(project_dir)
    if not jobs:
        console.print("[dim]No export jobs yet[/dim]")
        return

    table = Table(title="Render Jobs")
    table.add_column("Job", style="cyan")
    table.add_column("Status")
    table.add_column("Created")
    table.add_column("Artifacts / Error")

    colors = {"completed": "green", "failed": "red", "processing": "yellow"}
    for job in jobs:
        color = colors.get(job.status, "white")
        details = job.error or ", ".join(job.artifacts)
        table.add_row(
            job.id,
            f"[{color}]{job.status}[/{color}]",
            job.created_at.isoformat(timespec="seconds"),
            details,
        )
    console.print(table)


if __name__ == "__main__":
    app()
