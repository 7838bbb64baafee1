"""
Summarization module - One-line recording summaries.
"""

from .summarizer import NO_SPEECH_SUMMARY, SummaryOutcome, TranscriptSummarizer

__all__ = ["NO_SPEECH_SUMMARY", "SummaryOutcome", "TranscriptSummarizer"]
