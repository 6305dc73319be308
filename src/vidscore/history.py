"""Saved analyses, persisted to a local JSON file.

The file holds a JSON array of snapshots and is rewritten after every
change. A missing file is an empty history; an unreadable one is logged
and also treated as empty.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from vidscore.catalog import Catalog
from vidscore.config import get_config
from vidscore.errors import ValidationError
from vidscore.models import AnalysisSnapshot

logger = logging.getLogger(__name__)

_SNAPSHOT_LIST = TypeAdapter(list[AnalysisSnapshot])


class HistoryStore:
    """Ordered list of AnalysisSnapshots keyed by snapshot id.

    Args:
        path: JSON file backing the history (default: from config).
            Pass None together with ``persist=False`` for an in-memory store.
        persist: Write to disk after each change
    """

    def __init__(self, path: str | Path | None = None, persist: bool = True):
        self.path = Path(path) if path is not None else get_config().storage.history_path
        self.persist = persist
        self._snapshots: list[AnalysisSnapshot] = self._load() if persist else []

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[AnalysisSnapshot]:
        return iter(self._snapshots)

    @property
    def snapshots(self) -> list[AnalysisSnapshot]:
        return list(self._snapshots)

    def get(self, snapshot_id: str) -> AnalysisSnapshot | None:
        for snapshot in self._snapshots:
            if snapshot.id == snapshot_id:
                return snapshot
        return None

    def save(self, name: str, catalog: Catalog) -> AnalysisSnapshot:
        """Store an immutable copy of the catalog under a name.

        Raises:
            ValidationError: If the name is blank or the catalog is empty
            OSError: If the history file cannot be written
        """
        if len(catalog) == 0:
            raise ValidationError("There are no videos to save")
        if not name or not name.strip():
            raise ValidationError("A name is required to save the analysis")

        snapshot = AnalysisSnapshot(
            name=name.strip(),
            videos=catalog.records,
            show_results=catalog.show_results,
        )
        self._commit([*self._snapshots, snapshot])
        logger.info("Saved analysis %r (%s, %d videos)", snapshot.name, snapshot.id, len(catalog))
        return snapshot

    def extend(self, snapshots: Iterable[AnalysisSnapshot]) -> int:
        """Append already-built snapshots (e.g. from an import)."""
        added = list(snapshots)
        if added:
            self._commit([*self._snapshots, *added])
        return len(added)

    def delete(self, snapshot_id: str) -> bool:
        """Delete a snapshot by id. Returns False if it did not exist."""
        remaining = [s for s in self._snapshots if s.id != snapshot_id]
        if len(remaining) == len(self._snapshots):
            return False
        self._commit(remaining)
        return True

    def load_into(self, snapshot_id: str, catalog: Catalog) -> AnalysisSnapshot:
        """Replace the catalog contents with a saved snapshot.

        Raises:
            ValidationError: If no snapshot has that id
        """
        snapshot = self.get(snapshot_id)
        if snapshot is None:
            raise ValidationError(f"No saved analysis with id {snapshot_id!r}")
        catalog.replace(snapshot.videos, show_results=snapshot.show_results)
        return snapshot

    def _load(self) -> list[AnalysisSnapshot]:
        if not self.path.exists():
            return []
        try:
            return _SNAPSHOT_LIST.validate_json(self.path.read_bytes())
        except (OSError, PydanticValidationError) as e:
            logger.error("Error loading history from %s: %s", self.path, e)
            return []

    def _commit(self, snapshots: list[AnalysisSnapshot]) -> None:
        """Write the new list, then adopt it. A failed write changes nothing."""
        self._write(snapshots)
        self._snapshots = snapshots

    def _write(self, snapshots: list[AnalysisSnapshot]) -> None:
        if not self.persist:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = _SNAPSHOT_LIST.dump_json(snapshots, by_alias=True, exclude_none=True, indent=2)
        self.path.write_bytes(payload)
