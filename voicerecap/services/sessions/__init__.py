"""
Sessions module - Connected device sessions and their recording state.
"""

from .handle import SessionHandle
from .registry import RecordingState, SessionEntry, SessionRegistry

__all__ = ["RecordingState", "SessionEntry", "SessionHandle", "SessionRegistry"]
