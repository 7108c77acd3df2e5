"""
cutsheet.assembly - Studio project to timeline assembly.

Lays scenes end to end and multiplexes them onto three tracks:

- V:  one still/video per scene, for the scene's length
- A1: the scene's voiceover, starting with the scene
- A2: a single music bed spanning the whole timeline

The same layout feeds both exporters; the EDL gets a timeline Project,
FCPXML gets assets plus clip placements.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cutsheet.exceptions import InvalidProjectError, ProjectError
from cutsheet.export.fcpxml import FcpxmlAsset, FcpxmlClip, FcpxmlProject, FcpxmlTimeline
from cutsheet.io import read_json
from cutsheet.logging import logger
from cutsheet.timeline import Clip, Project
from cutsheet.utils import ms_to_seconds

PLACEHOLDER_SCHEME = "mock://"


def is_placeholder(url: str | None) -> bool:
    """Placeholder media produced by mock generators, not a real file."""
    return bool(url) and url.startswith(PLACEHOLDER_SCHEME)


@dataclass(frozen=True)
class VoSegment:
    id: str
    audio_url: str | None = None
    duration_ms: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_id: str = "") -> VoSegment:
        return cls(
            id=str(data.get("id") or default_id),
            audio_url=data.get("audio_url") or None,
            duration_ms=data.get("duration_ms") or None,
        )


@dataclass(frozen=True)
class Scene:
    id: str
    index: int
    duration_ms: int
    image_url: str | None = None
    vo_segment: VoSegment | None = None

    @property
    def duration(self) -> float:
        return ms_to_seconds(self.duration_ms)

    @property
    def vo_duration(self) -> float:
        """Voiceover length, falling back to the scene length."""
        if self.vo_segment and self.vo_segment.duration_ms:
            return ms_to_seconds(self.vo_segment.duration_ms)
        return self.duration

    @property
    def vo_audio_url(self) -> str | None:
        return self.vo_segment.audio_url if self.vo_segment else None

    @classmethod
    def from_dict(cls, data: dict[str, Any], position: int = 0) -> Scene:
        index = int(data.get("index", position))
        # Unnamed scenes are keyed by manifest position so asset ids stay distinct
        scene_id = str(data.get("id") or f"scene{position + 1}")
        duration_ms = data.get("duration_ms")
        if isinstance(duration_ms, bool) or not isinstance(duration_ms, (int, float)):
            raise InvalidProjectError(f"Scene {scene_id}: duration_ms must be a number")
        if duration_ms <= 0:
            raise InvalidProjectError(f"Scene {scene_id}: duration_ms must be > 0, got {duration_ms}")

        vo_data = data.get("vo_segment")
        return cls(
            id=scene_id,
            index=index,
            duration_ms=duration_ms,
            image_url=data.get("image_url") or None,
            vo_segment=VoSegment.from_dict(vo_data, default_id=scene_id) if vo_data else None,
        )


@dataclass(frozen=True)
class StudioProject:
    """Render-ready studio state: ordered scenes plus an optional music bed."""

    title: str
    scenes: tuple[Scene, ...] = field(default_factory=tuple)
    music_url: str | None = None

    @property
    def duration(self) -> float:
        return sum(scene.duration for scene in self.scenes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StudioProject:
        scenes = [Scene.from_dict(s, i) for i, s in enumerate(data.get("scenes", []))]
        scenes.sort(key=lambda s: s.index)
        for label, ids in (
            ("scene", [s.id for s in scenes]),
            ("voiceover", [s.vo_segment.id for s in scenes if s.vo_segment]),
        ):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            if duplicates:
                raise InvalidProjectError(f"Duplicate {label} id(s): {', '.join(duplicates)}")
        return cls(
            title=data.get("title") or data.get("project_name", ""),
            scenes=tuple(scenes),
            music_url=data.get("music_url") or None,
        )


def load_studio_project(path: Path) -> StudioProject:
    """Load a studio project manifest (project.json)."""
    if not path.exists():
        raise ProjectError(f"Manifest not found: {path}")
    try:
        data = read_json(path)
    except json.JSONDecodeError as e:
        raise ProjectError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ProjectError(f"Manifest must be a JSON object: {path}")
    return StudioProject.from_dict(data)


def _require_scenes(studio: StudioProject) -> None:
    if not studio.scenes:
        raise InvalidProjectError("No scenes to render")


def build_edl_project(studio: StudioProject, frame_rate: int | float) -> Project:
    """Assemble the EDL timeline from studio state.

    Clips are emitted per scene (picture, then voiceover), with the music
    bed last.

    Raises:
        InvalidProjectError: If there are no scenes or the title is blank
    """
    _require_scenes(studio)

    clips: list[Clip] = []
    cursor = 0.0
    for scene in studio.scenes:
        number = scene.index + 1
        if scene.image_url:
            clips.append(
                Clip(
                    clip_name=f"Scene{number}",
                    source_file=scene.image_url,
                    start_time=cursor,
                    duration=scene.duration,
                    track="V",
                )
            )
        if scene.vo_audio_url:
            clips.append(
                Clip(
                    clip_name=f"VO{number}",
                    source_file=scene.vo_audio_url,
                    start_time=cursor,
                    duration=scene.vo_duration,
                    track="A1",
                )
            )
        cursor += scene.duration

    if studio.music_url:
        clips.append(
            Clip(
                clip_name="Music",
                source_file=studio.music_url,
                start_time=0.0,
                duration=cursor,
                track="A2",
            )
        )

    logger.debug("Assembled %d clip(s) from %d scene(s)", len(clips), len(studio.scenes))
    return Project(title=studio.title, frame_rate=frame_rate, clips=tuple(clips))


def build_fcpxml_project(studio: StudioProject, config) -> FcpxmlProject:
    """Assemble FCPXML assets and placements from studio state.

    Placeholder media is left out when ``config.skip_placeholder_media`` is
    set; the music bed is attenuated to ``config.music_level_db``.
    """
    _require_scenes(studio)
    if not studio.title.strip():
        raise InvalidProjectError("Project title must not be empty")

    def usable(url: str | None) -> bool:
        return bool(url) and not (config.skip_placeholder_media and is_placeholder(url))

    assets: list[FcpxmlAsset] = []
    video_clips: list[FcpxmlClip] = []
    audio_clips: list[FcpxmlClip] = []

    cursor = 0.0
    for scene in studio.scenes:
        number = scene.index + 1
        if usable(scene.image_url):
            asset_id = f"asset-{scene.id}"
            assets.append(FcpxmlAsset(asset_id, f"Scene {number}", scene.image_url, scene.duration, "image"))
            video_clips.append(FcpxmlClip(asset_id, cursor, scene.duration))

        if usable(scene.vo_audio_url):
            asset_id = f"vo-{scene.vo_segment.id}"
            assets.append(FcpxmlAsset(asset_id, f"VO {number}", scene.vo_audio_url, scene.vo_duration, "audio"))
            audio_clips.append(FcpxmlClip(asset_id, cursor, scene.vo_duration))

        cursor += scene.duration

    if usable(studio.music_url):
        assets.append(FcpxmlAsset("music", "Background Music", studio.music_url, cursor, "audio"))
        audio_clips.append(FcpxmlClip("music", 0.0, cursor, audio_level=config.music_level_db))

    width, height = config.dimensions
    timeline = FcpxmlTimeline(
        name=studio.title,
        duration=cursor,
        frame_rate=config.frame_rate,
        width=width,
        height=height,
    )
    return FcpxmlProject(
        name=studio.title,
        timeline=timeline,
        assets=tuple(assets),
        video_clips=tuple(video_clips),
        audio_clips=tuple(audio_clips),
    )
