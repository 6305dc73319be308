"""Pydantic models for vidscore."""

from .snapshot import EXPORT_VERSION, AnalysisSnapshot, ExportDocument, ExportedAnalysis
from .source import VideoStatistics
from .video import WARNING_MESSAGES, ScoreWarning, VideoRecord, warning_text

__all__ = [
    # Main model
    "VideoRecord",
    "ScoreWarning",
    "WARNING_MESSAGES",
    "warning_text",
    # Fetched data
    "VideoStatistics",
    # History and exchange
    "AnalysisSnapshot",
    "ExportDocument",
    "ExportedAnalysis",
    "EXPORT_VERSION",
]
