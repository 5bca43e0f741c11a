"""Waitlist service: durable storage for deferred imports."""

import json
import sqlite3
from abc import ABC, abstractmethod
from typing import List, Optional
from datetime import date, datetime
from models.import_record import ImportRecord
from models.waitlist_entry import WaitlistEntry

_WAITLIST_SELECT_FIELDS = "id, first, last, email, date, roles, created_at"


class WaitlistStoreError(Exception):
    """Raised when the waitlist table cannot be written."""


class WaitlistStore(ABC):
    """What import runs and sweeps need from the waitlist.

    WaitlistService implements this on top of SQLite.
    """

    @abstractmethod
    def insert(self, record: ImportRecord) -> int:
        """Queue a record; returns the new entry id.

        Raises:
            WaitlistStoreError: If the record cannot be stored.
        """

    @abstractmethod
    def entries_for_date(self, activation_date: date) -> List[WaitlistEntry]:
        """Get entries whose activation date is exactly `activation_date`."""

    @abstractmethod
    def delete_by_email(self, email: str) -> int:
        """Remove entries by email; returns how many were removed.

        Raises:
            WaitlistStoreError: If the delete fails.
        """


class WaitlistService(WaitlistStore):
    """Service for managing the import waitlist.

    Every method opens its own connection and commits before returning, so
    nothing is cached between calls and each read sees the latest rows.
    """

    def __init__(self, db_manager):
        """Initialize the waitlist service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def insert(self, record: ImportRecord) -> int:
        """Add an import record to the waitlist.

        Duplicate emails are allowed; the table has no uniqueness constraint.

        Args:
            record: Record with an activation date.

        Returns:
            ID of the new waitlist entry.

        Raises:
            ValueError: If the record has no activation date.
            WaitlistStoreError: If the insert fails.
        """
        if record.activation_date is None:
            raise ValueError(f"Cannot waitlist {record.email} without an activation date")

        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO import_waitlist (first, last, email, date, roles)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        record.first_name,
                        record.last_name,
                        record.email,
                        record.activation_date.isoformat(),
                        json.dumps(list(record.roles)),
                    ),
                )
                conn.commit()
                return cursor.lastrowid
        except sqlite3.Error as e:
            raise WaitlistStoreError(
                f"Could not add {record.email} to the waitlist: {e}"
            ) from e

    def entries_for_date(self, activation_date: date) -> List[WaitlistEntry]:
        """Get all entries whose activation date is exactly the given date.

        Args:
            activation_date: The date to match.

        Returns:
            List of WaitlistEntry objects ordered by id (insertion order).
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_WAITLIST_SELECT_FIELDS}
                FROM import_waitlist
                WHERE date = ?
                ORDER BY id
                """,
                (activation_date.isoformat(),),
            )
            return [self._row_to_entry(row) for row in cursor.fetchall()]

    def find(self, entry_id: int) -> Optional[WaitlistEntry]:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_WAITLIST_SELECT_FIELDS} FROM import_waitlist WHERE id = ?",
                (entry_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_entry(row)
            return None

    def find_all(self) -> List[WaitlistEntry]:
        """Get every waitlist entry, soonest activation date first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_WAITLIST_SELECT_FIELDS} FROM import_waitlist ORDER BY date, id"
            )
            return [self._row_to_entry(row) for row in cursor.fetchall()]

    def delete_by_email(self, email: str) -> int:
        """Remove waitlist entries by email.

        All entries with this email are removed, whatever their date.

        Args:
            email: Email address to match.

        Returns:
            Number of entries deleted (0 if none matched).

        Raises:
            WaitlistStoreError: If the delete fails.
        """
        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM import_waitlist WHERE email = ?", (email,)
                )
                conn.commit()
                return cursor.rowcount
        except sqlite3.Error as e:
            raise WaitlistStoreError(
                f"Could not remove {email} from the waitlist: {e}"
            ) from e

    def delete(self, entry_id: int) -> bool:
        """Delete a single waitlist entry by ID.

        Returns:
            True if the entry was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM import_waitlist WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_entry(self, row: tuple) -> WaitlistEntry:
        return WaitlistEntry(
            id=row[0],
            first_name=row[1],
            last_name=row[2],
            email=row[3],
            activation_date=date.fromisoformat(row[4]),
            roles=tuple(json.loads(row[5])),
            created_at=datetime.fromisoformat(row[6]) if row[6] else None,
        )
