#!/usr/bin/env python3
"""Reset script for Rollcall.

Deletes the data directory (database with users and waitlist, and logs),
then recreates the database schema.
"""

import shutil
import sys

from config import load_config
from db.manager import DatabaseManager
from db.migrator import Migrator


def reset():
    """Reset the application state."""
    print("Rollcall Reset Script")
    print("=" * 50)

    config = load_config()

    if not config.enable_reset:
        print("\nReset is disabled in configuration (enable_reset=false).")
        print("To enable reset, set enable_reset=true in ~/.config/rollcall.toml")
        sys.exit(1)

    print(f"\nData directory: {config.base_dir}")
    print(f"Database: {config.db_path}")
    print(f"Logs: {config.log_dir}")

    response = input(
        "\nThis will delete ALL users and waitlist entries. Continue? (yes/no): "
    )
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    if config.base_dir.exists():
        print(f"\nDeleting {config.base_dir}...")
        shutil.rmtree(config.base_dir)
        print("✓ Data directory deleted")
    else:
        print(f"\n✓ Data directory does not exist: {config.base_dir}")

    print("\nRunning migrations...")
    db_manager = DatabaseManager(config)
    with db_manager.connect() as conn:
        applied = Migrator(db_manager.get_migrations_dir()).apply_pending(conn)
    print(f"✓ Applied {len(applied)} migration(s)")

    print("\n" + "=" * 50)
    print("Reset complete! Database has been recreated.")
    print(f"Database location: {config.db_path}")


if __name__ == "__main__":
    reset()
