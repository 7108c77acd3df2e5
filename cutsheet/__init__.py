"""
Cutsheet - render-export core for AI-assisted short-video production.

Turns a studio project (scenes, voiceover segments, music bed) into a
frame-accurate timeline and writes NLE interchange files: CMX 3600 EDL
and FCPXML 1.11.
"""

__version__ = "0.1.0"
