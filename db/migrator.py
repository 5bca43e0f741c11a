"""Applying the SQL files in db/migrations in filename order."""

import sqlite3
from pathlib import Path
from typing import List, Set

from logger import get_logger

logger = get_logger("db.migrator")


class Migrator:
    """Tracks and applies schema migrations.

    Applied migrations are recorded in the schema_migrations table by
    filename, so a file is never applied twice.

    Args:
        migrations_dir: Directory containing NNN_description.sql files.
    """

    def __init__(self, migrations_dir: Path):
        self.migrations_dir = migrations_dir

    def available(self) -> List[str]:
        """Get all migration filenames, sorted."""
        if not self.migrations_dir.exists():
            return []
        return sorted(p.name for p in self.migrations_dir.glob("*.sql"))

    def applied(self, conn: sqlite3.Connection) -> Set[str]:
        self._ensure_table(conn)
        cursor = conn.execute("SELECT migration_file FROM schema_migrations")
        return {row[0] for row in cursor.fetchall()}

    def pending(self, conn: sqlite3.Connection) -> List[str]:
        applied = self.applied(conn)
        return [m for m in self.available() if m not in applied]

    def apply_pending(self, conn: sqlite3.Connection) -> List[str]:
        """Apply every pending migration.

        Args:
            conn: Open database connection.

        Returns:
            Filenames applied, in order.

        Raises:
            sqlite3.Error: If a migration fails. It is rolled back and later
                           migrations are not attempted.
        """
        pending = self.pending(conn)
        for migration_file in pending:
            self._apply(conn, migration_file)
        return pending

    def _apply(self, conn: sqlite3.Connection, migration_file: str) -> None:
        sql = (self.migrations_dir / migration_file).read_text()
        try:
            conn.executescript(sql)
            conn.execute(
                "INSERT INTO schema_migrations (migration_file) VALUES (?)",
                (migration_file,),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Error applying migration {migration_file}: {e}")
            raise
        logger.info(f"Applied migration: {migration_file}")

    def _ensure_table(self, conn: sqlite3.Connection) -> None:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS schema_migrations (
                migration_file TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.commit()
