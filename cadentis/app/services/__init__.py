"""Instrumented analysis orchestration and result rendering."""

from .analysis_service import VerseAnalysisService
from .result_formatter import VerseResultFormatter

__all__ = ["VerseAnalysisService", "VerseResultFormatter"]
