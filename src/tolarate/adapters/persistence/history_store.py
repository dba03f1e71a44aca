# src/tolarate/adapters/persistence/history_store.py
"""
History Store - Price History Persistence

This module keeps the price history as a JSON array in a single file
(prices.json by default). Each run appends one entry:

    {
      "date": "2026-10-18T08:38:00.123456+00:00",
      "gold": {"perGram": 37512.3, "perTola": 437532.1},
      "silver": {"perKg": 481230.0, "perTola": 5612.9},
      "ratio": 77.95
    }

The file grows without bound; trimming is left to whoever owns the file.

Files that USE this module:
- tolarate.app (appends each run's prices and reads the previous entry)
- tests.test_history_store (unit tests)

Files that this module USES:
- tolarate.domain (ConvertedPrices, HistoryStoreError, InvalidSnapshotError)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from tolarate.domain.errors import HistoryStoreError, InvalidSnapshotError
from tolarate.domain.models import ConvertedPrices

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    date: datetime
    prices: ConvertedPrices

    def to_json(self) -> dict:
        """
        Convert HistoryEntry to JSON-serializable dictionary.

        Returns:
            Dictionary with ISO-formatted date and camelCase price keys
        """
        d = {"date": self.date.isoformat()}
        d.update(self.prices.to_json())
        return d

    @staticmethod
    def from_json(data: dict) -> "HistoryEntry":
        """
        Create HistoryEntry from JSON dictionary.

        Args:
            data: Dictionary with date and prices

        Returns:
            HistoryEntry with a UTC date
        """
        # Accept both "...Z" and "+00:00"
        date = datetime.fromisoformat(str(data["date"]).replace("Z", "+00:00"))
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return HistoryEntry(
            date=date.astimezone(timezone.utc),
            prices=ConvertedPrices.from_json(data),
        )


class HistoryStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_raw(self) -> list:
        """
        Read the raw JSON array.

        A corrupt file is copied to *.json.corrupt and treated as empty so the
        next append starts a fresh history instead of failing every run.
        """
        if not self.path.exists():
            return []

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            backup_path = self.path.with_suffix(".json.corrupt")
            try:
                shutil.copy2(self.path, backup_path)
                log.warning("History file corrupted (JSON decode error), backed up to %s: %s",
                            backup_path, e)
            except OSError as backup_error:
                log.error("Failed to back up corrupt history file: %s", backup_error)
            return []
        except OSError as e:
            raise HistoryStoreError(f"Failed to read history file {self.path}: {e}") from e

        if not isinstance(data, list):
            log.warning("History file %s does not hold a JSON array, starting fresh", self.path)
            return []
        return data

    def load(self) -> List[HistoryEntry]:
        """
        Load all parseable history entries, oldest first.

        Entries with a missing or malformed field are skipped with a warning.
        """
        entries: List[HistoryEntry] = []
        for i, raw in enumerate(self._read_raw()):
            try:
                entries.append(HistoryEntry.from_json(raw))
            except (KeyError, ValueError, TypeError) as e:
                log.warning("Skipping malformed history entry #%d: %s", i, e)
        return entries

    def latest(self) -> Optional[HistoryEntry]:
        """Return the most recent entry, or None when the history is empty."""
        entries = self.load()
        return entries[-1] if entries else None

    def append(self, prices: ConvertedPrices, ts: Optional[datetime] = None) -> int:
        """
        Append one entry and rewrite the file atomically.

        Uses temporary file + atomic rename so an interrupted run never leaves
        a half-written history behind.

        Args:
            prices: Converted prices to store
            ts: Entry timestamp (defaults to now, UTC)

        Returns:
            Number of entries after the append

        Raises:
            InvalidSnapshotError: If any price is missing, negative or non-finite
            HistoryStoreError: If the file cannot be written
        """
        if not prices.is_valid():
            raise InvalidSnapshotError(f"Refusing to store invalid prices: {prices}")

        history = self._read_raw()
        entry = HistoryEntry(date=ts or datetime.now(timezone.utc), prices=prices)
        history.append(entry.to_json())

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise HistoryStoreError(f"Failed to create history directory: {e}") from e

        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(self.path.parent),
            text=True,
        )
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(history, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, str(self.path))
        except (OSError, TypeError, ValueError) as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise HistoryStoreError(f"Failed to save history file: {e}") from e

        log.info("Updated %s with new entry. Total entries: %d", self.path, len(history))
        return len(history)
