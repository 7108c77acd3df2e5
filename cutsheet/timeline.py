"""
cutsheet.timeline - Timeline model handed to the exporters.

A Project is an ordered list of placed clips. Insertion order is the event
order in the exported EDL; clips are never re-sorted by start time, and
may overlap or leave gaps on a track.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real

from cutsheet.exceptions import InvalidClipError, InvalidProjectError

VALID_TRACKS = ("V", "A1", "A2")


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class Clip:
    """One placed media event on the master timeline.

    Times are in seconds. ``source_in`` is where playback starts inside the
    source asset; it defaults to 0 so the usable source range is
    ``[0, duration)``.
    """

    clip_name: str
    source_file: str
    start_time: float
    duration: float
    track: str = "V"
    source_in: float = 0.0

    def __post_init__(self) -> None:
        for name in ("start_time", "duration", "source_in"):
            value = getattr(self, name)
            if not _is_number(value) or not math.isfinite(value):
                raise InvalidClipError(self.clip_name, f"{name} must be a finite number, got {value!r}")
        if self.duration <= 0:
            raise InvalidClipError(self.clip_name, f"duration must be > 0, got {self.duration}")
        if self.start_time < 0:
            raise InvalidClipError(self.clip_name, f"start_time must be >= 0, got {self.start_time}")
        if self.source_in < 0:
            raise InvalidClipError(self.clip_name, f"source_in must be >= 0, got {self.source_in}")
        if self.track not in VALID_TRACKS:
            raise InvalidClipError(
                self.clip_name, f"track must be one of {', '.join(VALID_TRACKS)}, got {self.track!r}"
            )

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    @property
    def source_out(self) -> float:
        return self.source_in + self.duration


@dataclass(frozen=True)
class Project:
    """The export unit: a titled, frame-rated sequence of clips."""

    title: str
    frame_rate: int | float
    clips: tuple[Clip, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise InvalidProjectError("Project title must not be empty")
        if not _is_number(self.frame_rate) or not math.isfinite(self.frame_rate):
            raise InvalidProjectError(f"frame_rate must be a number, got {self.frame_rate!r}")
        if self.frame_rate <= 0:
            raise InvalidProjectError(f"frame_rate must be > 0, got {self.frame_rate}")

        clips = tuple(self.clips)
        for i, clip in enumerate(clips, 1):
            if not isinstance(clip, Clip):
                raise InvalidProjectError(f"Entry {i} is not a Clip: {clip!r}")
        object.__setattr__(self, "clips", clips)

    @property
    def duration(self) -> float:
        """Latest clip end on any track, 0.0 for an empty project."""
        return max((clip.end_time for clip in self.clips), default=0.0)

    def clips_on(self, track: str) -> list[Clip]:
        return [clip for clip in self.clips if clip.track == track]
