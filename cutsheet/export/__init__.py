"""
cutsheet.export - Timeline export.

Interchange formats for Premiere, Resolve and Final Cut:
- EDL (CMX 3600) - universal, one event per clip
- FCPXML (1.11) - assets, spine and audio lanes
"""

from __future__ import annotations
