"""JSON export and import of analyses.

File layout (version 1.0):

    {
      "version": "1.0",
      "exportDate": "2024-05-01T10:00:00Z",
      "analysis": {
        "name": "My analysis",
        "videos": [ ... ],
        "showResults": true
      }
    }
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from vidscore.errors import ImportFormatError
from vidscore.models import (
    EXPORT_VERSION,
    AnalysisSnapshot,
    ExportDocument,
    ExportedAnalysis,
    VideoRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "Video analysis"


@dataclass
class ImportReport:
    """Outcome of a batch import: what made it in and what failed."""

    snapshots: list[AnalysisSnapshot] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def build_export(
    name: str | None,
    videos: Iterable[VideoRecord],
    show_results: bool,
    export_date: datetime | None = None,
) -> ExportDocument:
    """Build an export document; a blank name falls back to the default."""
    return ExportDocument(
        version=EXPORT_VERSION,
        export_date=export_date or datetime.now(timezone.utc),
        analysis=ExportedAnalysis(
            name=(name or "").strip() or DEFAULT_EXPORT_NAME,
            videos=list(videos),
            show_results=show_results,
        ),
    )


def snapshot_export(snapshot: AnalysisSnapshot, export_date: datetime | None = None) -> ExportDocument:
    """Build the export document for a saved snapshot."""
    return build_export(snapshot.name, snapshot.videos, snapshot.show_results, export_date)


def to_dict(document: ExportDocument) -> dict[str, Any]:
    """Convert an export document to the plain dictionary written to disk."""
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def dumps_export(document: ExportDocument, indent: int = 2) -> str:
    """Serialize an export document as indented JSON."""
    return json.dumps(to_dict(document), indent=indent, ensure_ascii=False)


def export_filename(name: str, date: datetime | None = None) -> str:
    """File name for an export: whitespace runs become underscores, plus the date."""
    date = date or datetime.now(timezone.utc)
    stem = re.sub(r"\s+", "_", name.strip())
    return f"{stem}_{date.strftime('%Y-%m-%d')}.json"


def write_export(document: ExportDocument, directory: str | Path, filename: str | None = None) -> Path:
    """Write an export document into a directory and return its path."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / (filename or export_filename(document.analysis.name, document.export_date))
    path.write_text(dumps_export(document), encoding="utf-8")
    logger.info("Exported %r to %s", document.analysis.name, path)
    return path


def export_all(snapshots: Iterable[AnalysisSnapshot], directory: str | Path) -> list[Path]:
    """Write one export file per snapshot, dated by when each was saved."""
    paths = []
    for snapshot in snapshots:
        document = snapshot_export(snapshot)
        filename = export_filename(snapshot.name, snapshot.date)
        paths.append(write_export(document, directory, filename=filename))
    return paths


def _upgrade_legacy_video(video: Any) -> None:
    """Fill in fields that exports from the first app revision never wrote.

    That revision scored without normalization, so its raw score doubles
    as the normalized one.
    """
    if not isinstance(video, dict) or video.get("score") is None:
        return
    video.setdefault("normalizedScore", video["score"])
    video.setdefault("warnings", [])


def parse_export(text: str | bytes) -> ExportDocument:
    """Parse and validate the contents of an export file.

    Raises:
        ImportFormatError: If the JSON is malformed, ``version`` or
            ``analysis`` is missing, ``analysis.videos`` is not a list, or
            a video entry is invalid
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ImportFormatError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict) or not data.get("version"):
        raise ImportFormatError("Invalid file format: missing 'version'")
    analysis = data.get("analysis")
    if not isinstance(analysis, dict):
        raise ImportFormatError("Invalid file format: missing 'analysis'")
    if not isinstance(analysis.get("videos"), list):
        raise ImportFormatError("Invalid file format: 'analysis.videos' must be a list")

    analysis.setdefault("name", "")
    analysis.setdefault("showResults", False)
    data.setdefault("exportDate", datetime.now(timezone.utc).isoformat())
    for video in analysis["videos"]:
        _upgrade_legacy_video(video)

    try:
        return ExportDocument.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ImportFormatError(f"Invalid file format: {location}: {first['msg']}") from e


def read_export(path: str | Path) -> ExportDocument:
    """Read and validate one export file.

    Raises:
        ImportFormatError: If the file cannot be read or is not a valid export
    """
    try:
        content = Path(path).read_bytes()
    except OSError as e:
        raise ImportFormatError(f"Could not read file: {e}") from e
    return parse_export(content)


def import_files(paths: Iterable[str | Path]) -> ImportReport:
    """Import several export files independently.

    A bad file is reported in ``errors`` and does not stop the others.
    An analysis without a name is named after its file.
    """
    report = ImportReport()
    for path in paths:
        path = Path(path)
        try:
            document = read_export(path)
        except ImportFormatError as e:
            logger.warning("Skipping %s: %s", path, e)
            report.errors.append(f"Error processing {path.name}: {e}")
            continue
        name = document.analysis.name or path.stem or f"Imported analysis {datetime.now():%Y-%m-%d %H:%M}"
        report.snapshots.append(document.to_snapshot(name=name))
    return report
