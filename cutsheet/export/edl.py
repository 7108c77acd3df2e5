"""
cutsheet.export.edl - CMX 3600 EDL generator.

Generates Edit Decision List files for import into Premiere Pro,
DaVinci Resolve, and other NLEs. Output layout is whitespace-sensitive;
legacy NLE parsers rely on the exact column spacing below.
"""

from __future__ import annotations

from cutsheet.export.timecode import seconds_to_timecode
from cutsheet.logging import logger
from cutsheet.timeline import Clip, Project

CLIP_NAME_WIDTH = 32


def generate_edl_header(title: str) -> str:
    return f"TITLE: {title}\nFCM: NON-DROP FRAME\n\n"


def generate_edl_event(event_number: int, clip: Clip, fps: float) -> str:
    """Render one event block: the event line plus its two comment lines.

    Args:
        event_number: 1-based event number
        clip: Clip to place
        fps: Project frame rate

    Returns:
        Event block, each line terminated by a newline
    """
    src_in_tc = seconds_to_timecode(clip.source_in, fps)
    src_out_tc = seconds_to_timecode(clip.source_in + clip.duration, fps)
    rec_in_tc = seconds_to_timecode(clip.start_time, fps)
    rec_out_tc = seconds_to_timecode(clip.start_time + clip.duration, fps)

    event_line = (
        f"{event_number:03d}  {clip.clip_name:<{CLIP_NAME_WIDTH}} {clip.track}     C        "
        f"{src_in_tc} {src_out_tc} {rec_in_tc} {rec_out_tc}"
    )
    return (
        f"{event_line}\n"
        f"* FROM CLIP NAME: {clip.clip_name}\n"
        f"* SOURCE FILE: {clip.source_file}\n"
    )


def generate_edl(project: Project) -> str:
    """Generate a CMX 3600 EDL from a timeline project.

    Events are numbered from 001 in the order the clips appear in
    ``project.clips``. Source timecodes run from the clip's source in-point;
    record timecodes are the clip's placement on the master timeline. Every
    event is a straight cut.

    Args:
        project: Timeline to serialize

    Returns:
        EDL content as string
    """
    events = [
        generate_edl_event(i, clip, project.frame_rate) for i, clip in enumerate(project.clips, 1)
    ]
    logger.debug("EDL '%s': %d event(s) at %s fps", project.title, len(events), project.frame_rate)
    return generate_edl_header(project.title) + "\n".join(events)
