# src/fxrates/adapters/persistence/file_store.py
"""
File Store - Rates Snapshot Persistence

This module stores the current rates snapshot as a pretty-printed JSON file
in the provider payload shape, so the last good rates survive a restart.

Files that USE this module:
- fxrates.application.snapshot_store (RateSnapshotStore loads on start, saves on refresh)
- tests.test_file_store (unit tests)

Files that this module USES:
- fxrates.domain.models (RateSnapshot JSON mapping)
- fxrates.domain.errors (StorageUnavailableError)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from fxrates.domain.errors import StorageUnavailableError
from fxrates.domain.models import RateSnapshot

log = logging.getLogger(__name__)


def save_snapshot(path: Path, snapshot: RateSnapshot) -> None:
    """
    Save snapshot to a JSON file using an atomic write.

    Writes a temp file in the same directory, fsyncs it and renames it over
    the target, so readers never see a half-written file.

    Args:
        path: Target file path
        snapshot: Snapshot to persist

    Raises:
        StorageUnavailableError: If the directory cannot be created or the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        log.error("Failed to create directory %s: %s", path.parent, e)
        raise StorageUnavailableError(f"Cannot create directory {path.parent}: {e}") from e

    try:
        temp_fd, temp_path = tempfile.mkstemp(suffix=".json.tmp", dir=str(path.parent), text=True)
    except OSError as e:
        raise StorageUnavailableError(f"Cannot write to {path.parent}: {e}") from e

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_json(), f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())

        os.replace(temp_path, str(path))
    except OSError as e:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise StorageUnavailableError(f"Failed to save rates file {path}: {e}") from e

    log.debug("Rates snapshot for %s written to %s", snapshot.as_of_date, path)


def _quarantine(path: Path, reason: Exception) -> None:
    """Move an unusable rates file aside as <name>.corrupt."""
    backup_path = path.with_suffix(path.suffix + ".corrupt")
    try:
        shutil.copy2(path, backup_path)
        path.unlink()
        log.warning("Rates file unusable, backed up to %s: %s", backup_path, reason)
    except OSError as backup_error:
        log.error("Failed to back up unusable rates file %s: %s", path, backup_error)


def load_snapshot(path: Path) -> Optional[RateSnapshot]:
    """
    Load the persisted snapshot.

    A missing file is not an error. A file that is not valid JSON or does not
    hold a valid snapshot is backed up as ``<name>.corrupt`` and ignored.

    Args:
        path: File path to read

    Returns:
        RateSnapshot if the file exists and is valid, None otherwise

    Raises:
        StorageUnavailableError: If the file exists but cannot be read
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        raw = path.read_bytes()
    except OSError as e:
        log.error("Cannot read rates file %s: %s", path, e)
        raise StorageUnavailableError(f"Cannot read rates file {path}: {e}") from e

    try:
        return RateSnapshot.from_json(json.loads(raw))
    except (ValueError, TypeError, KeyError) as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        _quarantine(path, e)
        return None
