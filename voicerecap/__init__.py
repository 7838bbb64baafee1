"""VoiceRecap: record what a session hears and summarize it in one line."""

__version__ = "0.1.0"
