import sqlite3

from config import get_migrations_dir
from db.migrator import Migrator


class TestMigrator:
    """Tests for Migrator."""

    def test_available_sorted(self):
        available = Migrator(get_migrations_dir()).available()

        assert available == sorted(available)
        assert "001_create_users.sql" in available
        assert "002_create_import_waitlist.sql" in available

    def test_apply_pending_creates_tables(self, test_db):
        applied = Migrator(get_migrations_dir()).apply_pending(test_db)

        tables = {
            row[0]
            for row in test_db.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        assert applied == ["001_create_users.sql", "002_create_import_waitlist.sql"]
        assert {"users", "import_waitlist", "schema_migrations"} <= tables

    def test_apply_twice_is_noop(self, test_db):
        migrator = Migrator(get_migrations_dir())
        migrator.apply_pending(test_db)

        assert migrator.apply_pending(test_db) == []
        assert migrator.pending(test_db) == []

    def test_failed_migration_not_recorded(self, tmp_path, test_db):
        (tmp_path / "001_ok.sql").write_text("CREATE TABLE ok (id INTEGER);")
        (tmp_path / "002_bad.sql").write_text("CREATE TABLE broken (;")
        migrator = Migrator(tmp_path)

        try:
            migrator.apply_pending(test_db)
        except sqlite3.Error:
            pass

        assert migrator.applied(test_db) == {"001_ok.sql"}
        assert migrator.pending(test_db) == ["002_bad.sql"]

    def test_missing_dir(self, tmp_path):
        assert Migrator(tmp_path / "nope").available() == []
