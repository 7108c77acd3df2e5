"""
cutsheet.export.timecode - Timecode math utilities.

Converts between seconds and non-drop-frame SMPTE timecode (HH:MM:SS:FF).

Rounding: the product ``seconds * fps`` is snapped to the nearest frame
with ties going up, so 1/60 s at 30 fps lands on frame 1.

Hours are not wrapped at 24. CMX 3600 readers expect a two-digit hour
field, so timelines past 99 hours produce a wider field that strict
parsers may reject.
"""

from __future__ import annotations

import math
from numbers import Real

from cutsheet.exceptions import TimecodeError


def validate_frame_rate(fps: float) -> None:
    """Raise TimecodeError unless fps is a finite positive number."""
    if isinstance(fps, bool) or not isinstance(fps, Real):
        raise TimecodeError(f"Frame rate must be a number, got {fps!r}")
    if not math.isfinite(fps) or fps <= 0:
        raise TimecodeError(f"Frame rate must be > 0, got {fps}")


def timebase(fps: float) -> int:
    """Frames counted per timecode second (29.97 counts as 30)."""
    validate_frame_rate(fps)
    return max(1, round(fps))


def seconds_to_frames(seconds: float, fps: float) -> int:
    """Quantize a time in seconds to a frame count, rounding half up.

    Args:
        seconds: Time in seconds (>= 0)
        fps: Frames per second

    Returns:
        Frame count
    """
    validate_frame_rate(fps)
    if isinstance(seconds, bool) or not isinstance(seconds, Real):
        raise TimecodeError(f"Seconds must be a number, got {seconds!r}")
    if not math.isfinite(seconds) or seconds < 0:
        raise TimecodeError(f"Seconds must be finite and >= 0, got {seconds}")
    product = seconds * fps
    # floor(x + 0.5) misrounds 0.49999999999999994; compare the remainder instead
    frames = math.floor(product)
    if product - frames >= 0.5:
        frames += 1
    return frames


def frames_to_timecode(total_frames: int, fps: float) -> str:
    """Convert a frame count to HH:MM:SS:FF.

    Args:
        total_frames: Total number of frames (>= 0)
        fps: Frames per second

    Returns:
        Timecode string
    """
    if total_frames < 0:
        raise TimecodeError(f"Frame count must be >= 0, got {total_frames}")
    base = timebase(fps)

    ff = total_frames % base
    total_seconds = total_frames // base
    ss = total_seconds % 60
    mm = (total_seconds // 60) % 60
    hh = total_seconds // 3600

    return f"{hh:02d}:{mm:02d}:{ss:02d}:{ff:02d}"


def seconds_to_timecode(seconds: float, fps: float) -> str:
    """Convert seconds to non-drop-frame timecode.

    Examples:
        >>> seconds_to_timecode(2.5, 30)
        '00:00:02:15'
        >>> seconds_to_timecode(65, 24)
        '00:01:05:00'
    """
    return frames_to_timecode(seconds_to_frames(seconds, fps), fps)


def timecode_to_frames(timecode: str, fps: float) -> int:
    """Convert HH:MM:SS:FF timecode back to a frame count.

    Raises:
        TimecodeError: If the string is not four numeric fields or the
            frame field is out of range for the frame rate
    """
    base = timebase(fps)
    parts = timecode.strip().split(":")
    if len(parts) != 4 or not all(p.isdigit() for p in parts):
        raise TimecodeError(f"Malformed timecode: {timecode!r}")

    hh, mm, ss, ff = (int(p) for p in parts)
    if mm > 59 or ss > 59 or ff >= base:
        raise TimecodeError(f"Timecode field out of range: {timecode!r}")

    return (hh * 3600 + mm * 60 + ss) * base + ff


def timecode_to_seconds(timecode: str, fps: float) -> float:
    """Convert HH:MM:SS:FF timecode to seconds."""
    return float(timecode_to_frames(timecode, fps) / fps)
