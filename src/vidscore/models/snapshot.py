"""Saved analyses and the export file layout."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .video import VideoRecord

EXPORT_VERSION = "1.0"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisSnapshot(BaseModel):
    """Named, timestamped, immutable copy of a catalog.

    Stored in the history list and written out by exports.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    date: datetime = Field(default_factory=_utcnow)
    videos: list[VideoRecord] = Field(default_factory=list)
    show_results: bool = False

    @property
    def video_count(self) -> int:
        return len(self.videos)


class ExportedAnalysis(BaseModel):
    """The ``analysis`` object of an export file."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str
    videos: list[VideoRecord]
    show_results: bool = False


class ExportDocument(BaseModel):
    """Top-level export file.

    {"version": "1.0", "exportDate": ..., "analysis": {"name", "videos", "showResults"}}
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    version: str = EXPORT_VERSION
    export_date: datetime = Field(default_factory=_utcnow)
    analysis: ExportedAnalysis

    def to_snapshot(self, name: str | None = None) -> AnalysisSnapshot:
        """Turn the exported analysis into a fresh history entry."""
        return AnalysisSnapshot(
            name=name or self.analysis.name,
            videos=list(self.analysis.videos),
            show_results=self.analysis.show_results,
        )
