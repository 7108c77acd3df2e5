"""
cutsheet.export.fcpxml - FCPXML 1.11 generator.

Generates Final Cut Pro XML for handoff to Final Cut, Resolve and
Premiere: one format resource, one asset per media file, video clips on
the spine and voiceover/music in an audio block.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from pathlib import Path
from urllib.parse import quote
from xml.sax.saxutils import escape

from cutsheet.exceptions import ExportError
from cutsheet.export.timecode import seconds_to_frames, validate_frame_rate
from cutsheet.logging import logger

# Characters encodeURI leaves untouched besides alphanumerics and "-_.~"
_URI_SAFE = ";,/?:@&=+$!*'()#"

_NTSC_RATES = {23.976: 24, 29.97: 30, 59.94: 60}


@dataclass(frozen=True)
class FcpxmlAsset:
    id: str
    name: str
    url: str
    duration: float
    kind: str = "image"


@dataclass(frozen=True)
class FcpxmlClip:
    """Placement of an asset on the sequence. Times in seconds."""

    asset_id: str
    start: float
    duration: float
    offset: float = 0.0
    audio_level: float | None = None


@dataclass(frozen=True)
class FcpxmlTimeline:
    name: str
    duration: float
    frame_rate: int | float
    width: int
    height: int


@dataclass(frozen=True)
class FcpxmlProject:
    name: str
    timeline: FcpxmlTimeline
    assets: tuple[FcpxmlAsset, ...] = field(default_factory=tuple)
    video_clips: tuple[FcpxmlClip, ...] = field(default_factory=tuple)
    audio_clips: tuple[FcpxmlClip, ...] = field(default_factory=tuple)


def _frame_fraction(fps: float) -> Fraction:
    """Duration of one frame as an exact fraction of a second."""
    validate_frame_rate(fps)
    for ntsc, base in _NTSC_RATES.items():
        if abs(fps - ntsc) < 0.01:
            return Fraction(1001, base * 1000)
    return 1 / Fraction(fps).limit_denominator(1000)


def frame_duration(fps: float) -> str:
    """Get the FCPXML frameDuration attribute for a frame rate.

    Returns:
        Rational time like "1/30s" or "1001/30000s"
    """
    frac = _frame_fraction(fps)
    return f"{frac.numerator}/{frac.denominator}s"


def seconds_to_fcpxml_time(seconds: float, fps: float) -> str:
    """Convert seconds to FCPXML rational time, snapped to whole frames.

    Args:
        seconds: Time in seconds
        fps: Frames per second

    Returns:
        Time string like "75/30s"
    """
    frames = seconds_to_frames(seconds, fps)
    frac = _frame_fraction(fps)
    return f"{frames * frac.numerator}/{frac.denominator}s"


def _rate_label(fps: float) -> str:
    if float(fps).is_integer():
        return str(int(fps))
    return f"{float(fps):.2f}".replace(".", "")


def media_url(url: str) -> str:
    """Turn a media reference into a percent-encoded URL.

    References that already carry a scheme pass through; bare paths become
    file:// URLs.
    """
    if "://" in url:
        return quote(url, safe=_URI_SAFE)
    return f"file://{quote(Path(url).as_posix(), safe=_URI_SAFE)}"


def _attr(value: object) -> str:
    return escape(str(value), {'"': "&quot;"})


def _asset_line(asset: FcpxmlAsset, fps: float, format_id: str) -> str:
    line = (
        f'        <asset id="{_attr(asset.id)}" name="{_attr(asset.name)}" '
        f'src="{_attr(media_url(asset.url))}" start="0s" '
        f'duration="{seconds_to_fcpxml_time(asset.duration, fps)}"'
    )
    if asset.kind == "image":
        line += f' hasVideo="1" format="{format_id}"'
    elif asset.kind == "video":
        line += f' hasVideo="1" hasAudio="0" videoSources="1" format="{format_id}"'
    elif asset.kind == "audio":
        line += ' hasAudio="1" audioSources="1" audioChannels="2" audioRate="48000"'
    else:
        raise ExportError(f"Unknown asset kind for {asset.id}: {asset.kind!r}")
    return line + "/>"


def _clip_line(clip: FcpxmlClip, fps: float, indent: str) -> str:
    line = (
        f'{indent}<asset-clip ref="{_attr(clip.asset_id)}" '
        f'offset="{seconds_to_fcpxml_time(clip.start, fps)}" '
        f'duration="{seconds_to_fcpxml_time(clip.duration, fps)}" '
        f'start="{seconds_to_fcpxml_time(clip.offset, fps)}" tcFormat="NDF"'
    )
    if clip.audio_level is not None:
        line += f' audioLevel="{clip.audio_level:g}dB"'
    return line + "/>"


def generate_fcpxml(project: FcpxmlProject) -> str:
    """Generate an FCPXML 1.11 document.

    Args:
        project: Assets and clip placements to serialize

    Returns:
        FCPXML content as string
    """
    timeline = project.timeline
    fps = timeline.frame_rate
    rate = _rate_label(fps)
    format_id = f"r{timeline.width}x{timeline.height}p{rate}"

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        "<!DOCTYPE fcpxml>",
        '<fcpxml version="1.11">',
        "    <resources>",
        f'        <format id="{format_id}" '
        f'name="FFVideoFormat{timeline.width}x{timeline.height}p{rate}" '
        f'frameDuration="{frame_duration(fps)}" '
        f'width="{timeline.width}" height="{timeline.height}"/>',
    ]
    lines.extend(_asset_line(asset, fps, format_id) for asset in project.assets)

    lines.extend(
        [
            "    </resources>",
            "    <library>",
            f'        <event name="{_attr(project.name)}">',
            f'            <project name="{_attr(timeline.name)}">',
            f'                <sequence duration="{seconds_to_fcpxml_time(timeline.duration, fps)}" '
            f'format="{format_id}" tcStart="0s" tcFormat="NDF" '
            'audioLayout="stereo" audioRate="48k">',
            "                    <spine>",
        ]
    )
    indent = " " * 24
    lines.extend(_clip_line(clip, fps, indent) for clip in project.video_clips)
    lines.append("                    </spine>")

    if project.audio_clips:
        lines.append("                    <audio>")
        lines.extend(_clip_line(clip, fps, indent) for clip in project.audio_clips)
        lines.append("                    </audio>")

    lines.extend(
        [
            "                </sequence>",
            "            </project>",
            "        </event>",
            "    </library>",
            "</fcpxml>",
        ]
    )

    logger.debug(
        "FCPXML '%s': %d asset(s), %d video clip(s), %d audio clip(s)",
        project.name,
        len(project.assets),
        len(project.video_clips),
        len(project.audio_clips),
    )
    return "\n".join(lines) + "\n"
