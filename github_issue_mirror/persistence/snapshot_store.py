"""Persists the snapshot cache as a JSON file.

The sync engine never touches storage; this store is what the command line
workflows use to load snapshots before a batch and save them afterwards.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from github_issue_mirror.schemas.snapshots import SnapshotCache

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class SnapshotStoreError(Exception):
    """Raised when the snapshot cache file cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initializes the exception with the cache path and what went wrong."""
        super().__init__(f"Snapshot cache {path}: {reason}")
        self.path = path
        self.reason = reason


class JSONSnapshotStore:
    """Snapshot cache backed by a single JSON file."""

    def __init__(self, path: Path) -> None:
        """Initialize the store with the path of its JSON file."""
        self.path = path

    def load(self) -> SnapshotCache:
        """Load the cache, returning an empty one when the file does not exist yet."""
        if not self.path.exists():
            logger.info("No snapshot cache found, starting empty", path=str(self.path))
            return SnapshotCache()
        try:
            payload: Any = json.loads(self.path.read_text(encoding="utf-8"))
            cache = SnapshotCache.model_validate(payload)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise SnapshotStoreError(self.path, f"invalid cache file ({exc})") from exc
        logger.debug(
            "Loaded snapshot cache",
            path=str(self.path),
            repository_count=len(cache.repositories),
            project_count=len(cache.projects),
        )
        return cache

    def save(self, cache: SnapshotCache) -> None:
        """Write the cache atomically by writing a temporary file and renaming it into place."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(cache.model_dump_json(indent=2))
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise SnapshotStoreError(self.path, f"failed to persist cache ({exc})") from exc
        logger.debug("Saved snapshot cache", path=str(self.path))
