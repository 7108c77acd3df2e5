"""
cutsheet.exceptions - Custom exception classes.

All Cutsheet-specific exceptions inherit from CutsheetError.
"""


class CutsheetError(Exception):
    """Base exception for all Cutsheet errors."""

    pass


class ConfigError(CutsheetError):
    """Configuration loading or validation error."""

    pass


class ProjectError(CutsheetError):
    """Project directory or manifest error."""

    pass


class TimelineError(CutsheetError):
    """Timeline construction error."""

    pass


class InvalidClipError(TimelineError):
    """Clip violates timeline invariants (duration, offsets, track)."""

    def __init__(self, clip_name: str, message: str):
        self.clip_name = clip_name
        self.message = message
        super().__init__(f"{clip_name}: {message}")


class InvalidProjectError(TimelineError):
    """Project-level data cannot be turned into a timeline."""

    pass


class TimecodeError(CutsheetError):
    """Value cannot be expressed as SMPTE timecode."""

    pass


class ExportError(CutsheetError):
    """Timeline export error."""

    pass
