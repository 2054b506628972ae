"""Persistence for the Budget Buddy aggregate record.

All app state lives in a single JSON document.  ``AppDataStore`` owns that
file: it loads it (merging over defaults so that records written by older
versions pick up new fields), saves it as a whole, and handles backup export
and restore.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from . import config
from .defaults import default_record
from .models import AppData

logger = logging.getLogger(__name__)

# Top-level fields merged key by key instead of replaced wholesale.
NESTED_MERGE_FIELDS = ('pocketMoneyInfo', 'budgetStreak', 'autoCategoryMap')
REQUIRED_BACKUP_FIELDS = ('pocketMoneyInfo', 'allExpenses')
LIST_BACKUP_FIELDS = ('archivedMonths', 'quickExpenses')


class StorageWriteError(OSError):
    """Raised when the record cannot be written to disk."""


class BackupError(ValueError):
    """Raised when a restore file is rejected."""


def merge_with_defaults(stored: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay ``stored`` on the default record.

    Unknown top-level keys are dropped.  For the nested merge fields, keys
    missing from the stored value keep their default.
    """
    merged = default_record()
    for key, value in stored.items():
        if key not in merged:
            continue
        if key in NESTED_MERGE_FIELDS:
            if isinstance(value, dict):
                merged[key] = {**merged[key], **value}
            continue
        merged[key] = value
    return merged


def validate_backup_payload(payload: Any) -> List[str]:
    """Return the problems found in a parsed backup; empty when valid."""
    if not isinstance(payload, dict):
        return ['backup must be a JSON object']
    problems = [f"missing '{name}'" for name in REQUIRED_BACKUP_FIELDS if name not in payload]
    if 'pocketMoneyInfo' in payload and not isinstance(payload['pocketMoneyInfo'], dict):
        problems.append("'pocketMoneyInfo' must be an object")
    if 'allExpenses' in payload and not isinstance(payload['allExpenses'], dict):
        problems.append("'allExpenses' must be an object keyed by month")
    for name in LIST_BACKUP_FIELDS:
        if name in payload and not isinstance(payload[name], list):
            problems.append(f"'{name}' must be a list")
    return problems


class AppDataStore:
    """Loads and saves the whole ``AppData`` record from one JSON file."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize the store.

        Args:
            path: JSON file holding the record. Defaults to
                ``config.APP_DATA_FILE``.
        """
        self.path = Path(path) if path is not None else config.APP_DATA_FILE

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> AppData:
        """Load the record, falling back to defaults.

        A missing file yields the default record.  A corrupt file is logged
        and also yields the default record; this method never raises for
        unreadable data.
        """
        if not self.path.exists():
            return AppData.from_dict(default_record())
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                stored = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.error("Failed to read app data from %s, resetting to defaults: %s", self.path, exc)
            return AppData.from_dict(default_record())
        if not isinstance(stored, dict):
            logger.error("App data in %s is not an object, resetting to defaults", self.path)
            return AppData.from_dict(default_record())
        try:
            return AppData.from_dict(merge_with_defaults(stored))
        except (TypeError, ValueError, OverflowError) as exc:
            logger.error("App data in %s is malformed, resetting to defaults: %s", self.path, exc)
            return AppData.from_dict(default_record())

    def save(self, data: AppData) -> None:
        """Replace the stored record with ``data``.

        Raises:
            StorageWriteError: If the file cannot be written. The previous
                record is left in place.
        """
        self._write_json(self.path, data.to_dict())
        logger.debug("Saved app data to %s", self.path)

    def update(self, mutator: Callable[[AppData], Any]) -> AppData:
        """Load, apply ``mutator`` in place, save, and return the record."""
        data = self.load()
        mutator(data)
        self.save(data)
        return data

    # Backup / restore -----------------------------------------------------

    def export_backup(self, target: Optional[Path] = None, today: Optional[date] = None) -> Path:
        """Write the full record to a backup file and return its path."""
        if target is None:
            stamp = (today or date.today()).isoformat()
            target = config.BACKUP_DIR / f"{config.BACKUP_FILE_PREFIX}{stamp}.json"
        target = Path(target)
        self._write_json(target, self.load().to_dict())
        logger.info("Exported backup to %s", target)
        return target

    def import_backup(self, source: Union[str, Path]) -> AppData:
        """Restore the record from a backup file on disk.

        Raises:
            BackupError: If the file cannot be read or is not a valid backup.
        """
        try:
            text = Path(source).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as exc:
            raise BackupError(f"Could not read backup file {source}: {exc}") from exc
        return self.import_backup_text(text)

    def import_backup_text(self, text: str) -> AppData:
        """Restore the record from backup file contents.

        The existing record is only replaced when the backup is valid.

        Raises:
            BackupError: If ``text`` is not a valid backup.
        """
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise BackupError(f"Backup file is not valid JSON: {exc}") from exc
        problems = validate_backup_payload(payload)
        if problems:
            raise BackupError("Invalid backup file format: " + "; ".join(problems))
        try:
            data = AppData.from_dict(merge_with_defaults(payload))
        except (TypeError, ValueError, OverflowError) as exc:
            raise BackupError(f"Invalid backup file format: {exc}") from exc
        self.save(data)
        logger.info("Restored app data from backup into %s", self.path)
        return data

    # Internal ---------------------------------------------------------------

    @staticmethod
    def _write_json(target: Path, payload: Dict[str, Any]) -> None:
        tmp = target.with_name(target.name + '.tmp')
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open('w', encoding='utf-8') as handle:
                json.dump(payload, handle, indent=2, ensure_ascii=False)
            os.replace(tmp, target)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageWriteError(f"Failed to save app data to {target}: {exc}") from exc
