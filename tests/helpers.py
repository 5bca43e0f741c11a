"""Helper utilities for tests."""

import sqlite3
from pathlib import Path
from typing import Dict, List

from db.migrator import Migrator
from models.user import UserPayload
from services.users import IdentityStore, IdentityStoreError


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    Migrator(migrations_dir).apply_pending(conn)


class FakeIdentityStore(IdentityStore):
    """In-memory identity store that can be told to reject emails or fail lookups."""

    def __init__(self, taken=(), reject_emails=(), unavailable_prefixes=()):
        self.taken = set(taken)
        self.reject_emails = set(reject_emails)
        self.unavailable_prefixes = tuple(unavailable_prefixes)
        self.created: Dict[int, UserPayload] = {}
        self.lookups: List[str] = []

    def create_user(self, payload: UserPayload) -> int:
        if payload.email in self.reject_emails:
            raise IdentityStoreError(f"Email {payload.email} is already taken")
        user_id = len(self.created) + 1
        self.created[user_id] = payload
        self.taken.add(payload.username)
        return user_id

    def username_taken(self, username: str) -> bool:
        self.lookups.append(username)
        if self.unavailable_prefixes and username.startswith(self.unavailable_prefixes):
            raise IdentityStoreError("lookup backend unavailable")
        return username in self.taken


class RecordingSink:
    """Progress sink that keeps every event for assertions."""

    def __init__(self):
        self.progress_events = []
        self.finished_events = []
        self.sweep_events = []

    def progress(self, processed, total):
        self.progress_events.append((processed, total))

    def finished(self, success, result):
        self.finished_events.append((success, result))

    def sweep_finished(self, created, errored):
        self.sweep_events.append((created, errored))
