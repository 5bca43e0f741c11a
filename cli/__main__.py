#!/usr/bin/env python3
"""
Rollcall CLI - Import users from CSV and activate waitlisted imports.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    import    Import users from a CSV file
    waitlist  List, sweep and delete deferred imports
    users     Inspect created users
    migrate   Database migrations

Examples:
    python -m cli migrate apply
    python -m cli import run staff.csv --role editor --role viewer
    python -m cli waitlist list
    python -m cli waitlist sweep
    python -m cli --quiet waitlist sweep
    python -m cli waitlist delete 42
    python -m cli waitlist sweep --date 2025-03-01
"""

import sys
import argparse
from cli import imports, waitlist, users, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Rollcall - CSV user import with activation-date waitlist",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Log to the log file only (for scheduled sweeps)",
    )

    imports.setup_parser(subparsers)
    waitlist.setup_parser(subparsers)
    users.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()

            setup_logging(config, console=not args.quiet)

            # Commands that use db_manager directly: migrate
            if args.command == "migrate":
                args.func(args, DatabaseManager(config))
            else:
                args.func(args, Services(config))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
