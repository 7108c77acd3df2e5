"""
cutsheet.utils - Shared utility functions.
"""

from __future__ import annotations


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS or MM:SS.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (HH:MM:SS if >= 1 hour, otherwise MM:SS)
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def ms_to_seconds(milliseconds: int | float | None) -> float:
    """Convert a millisecond duration from the studio manifest to seconds."""
    if not milliseconds:
        return 0.0
    return milliseconds / 1000
