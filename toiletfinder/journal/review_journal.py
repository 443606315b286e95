"""
Review Journal - append-only log of user-submitted reviews.

Survives reloads so user reviews can be reapplied to freshly fetched data.
"""

import json
import os
import shutil
import logging
from typing import List, Optional

from toiletfinder.models.review import UserReviewEntry, utc_now_iso

logger = logging.getLogger(__name__)


class ReviewJournal:
    """
    Append-only store of UserReviewEntry records.

    File-backed when journal_path is given, memory-only otherwise.
    Entries are returned in insertion order.
    """

    def __init__(self, journal_path: Optional[str] = None):
        """
        Initialize journal from disk or create a new empty journal.

        Args:
            journal_path: Path to the journal JSON file, or None for memory-only
        """
        self.journal_path = journal_path
        self.version = "1.0.0"
        self.last_updated = utc_now_iso()
        self._entries: List[UserReviewEntry] = []

        if journal_path and os.path.exists(journal_path):
            self._load()
        elif journal_path:
            logger.info(f"No existing journal found at {journal_path}, starting empty")

    def _load(self) -> None:
        """Load journal from disk."""
        try:
            with open(self.journal_path, 'r') as f:
                data = json.load(f)

            # A bare list is the browser localStorage export format
            if isinstance(data, list):
                entries_list = data
            elif isinstance(data, dict):
                self.version = data.get("version", "1.0.0")
                self.last_updated = data.get("last_updated", self.last_updated)
                entries_list = data.get("entries", [])
            else:
                raise ValueError(f"Unexpected journal structure: {type(data).__name__}")

            self._entries = self._parse_entries(entries_list)
            logger.info(f"Loaded {len(self._entries)} journal entries")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse journal JSON: {e}")
            self._try_restore_from_backup()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read journal: {e}")
            self._try_restore_from_backup()

    @staticmethod
    def _parse_entries(entries_list) -> List[UserReviewEntry]:
        """Entries from raw dicts, skipping any that are malformed."""
        if not isinstance(entries_list, list):
            raise ValueError(f"Journal entries must be a list, got {type(entries_list).__name__}")

        entries = []
        for entry_data in entries_list:
            try:
                entries.append(UserReviewEntry.from_dict(entry_data))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed journal entry: {e}")
        return entries

    def _try_restore_from_backup(self) -> None:
        """Attempt to restore from backup file if the main journal is corrupted."""
        backup_path = f"{self.journal_path}.backup"
        if not os.path.exists(backup_path):
            logger.warning("No backup file found. Starting with empty journal.")
            self._entries = []
            return

        logger.warning(f"Attempting to restore from backup: {backup_path}")
        try:
            with open(backup_path, 'r') as f:
                data = json.load(f)
            entries_list = data if isinstance(data, list) else data.get("entries", [])
            self._entries = self._parse_entries(entries_list)
            shutil.copy(backup_path, self.journal_path)
            logger.info("Successfully restored from backup")
        except (OSError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Backup restoration failed: {e}. Starting with empty journal.")
            self._entries = []

    def entries(self) -> List[UserReviewEntry]:
        """All entries in insertion order."""
        return list(self._entries)

    def entries_for(self, toilet_id: str) -> List[UserReviewEntry]:
        """Entries for one toilet, in insertion order."""
        return [entry for entry in self._entries if entry.toilet_id == toilet_id]

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: UserReviewEntry) -> None:
        """
        Append an entry and persist it before returning.

        Raises:
            OSError: If the journal cannot be written; the entry is not kept
        """
        pending = self._entries + [entry]
        if self.journal_path:
            self._save(pending)
        self._entries = pending
        logger.debug(f"Journaled review {entry.id} for toilet {entry.toilet_id}")

    def _save(self, entries: List[UserReviewEntry]) -> None:
        """
        Persist entries with atomic write pattern.
        Creates backup before write.
        """
        directory = os.path.dirname(self.journal_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        if os.path.exists(self.journal_path):
            backup_path = f"{self.journal_path}.backup"
            shutil.copy(self.journal_path, backup_path)
            logger.debug(f"Created backup: {backup_path}")

        last_updated = utc_now_iso()
        data = {
            "version": self.version,
            "last_updated": last_updated,
            "entries": [entry.to_dict() for entry in entries]
        }

        # Atomic write: write to temp file, then rename
        temp_path = f"{self.journal_path}.tmp"
        try:
            with open(temp_path, 'w') as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, self.journal_path)
            self.last_updated = last_updated
            logger.info(f"Journal saved: {len(entries)} entries")

        except OSError as e:
            logger.error(f"Failed to save journal: {e}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise
