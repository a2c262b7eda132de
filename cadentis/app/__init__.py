"""Service layer and application facade for :mod:`cadentis`."""

from .app import CadentisApp
from .services import VerseAnalysisService, VerseResultFormatter

__all__ = ["CadentisApp", "VerseAnalysisService", "VerseResultFormatter"]
