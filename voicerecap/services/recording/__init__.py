"""
Recording module - Per-session recording state machine.
"""

from .controller import RecordingController

__all__ = ["RecordingController"]
