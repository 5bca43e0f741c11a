#!/usr/bin/env python3

import sys
from cli.imports import parse_today
from importing.runner import SweepInProgressError
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all waitlist entries."""
    entries = services.waitlist.find_all()

    if not entries:
        logger.info("Waitlist is empty.")
        return

    logger.info("\nWaitlist:")
    logger.info("=" * 80)
    for entry in entries:
        logger.info(f"ID: {entry.id}")
        logger.info(f"Name: {entry.first_name} {entry.last_name}")
        logger.info(f"Email: {entry.email}")
        logger.info(f"Activation date: {entry.activation_date.isoformat()}")
        logger.info(f"Roles: {', '.join(entry.roles)}")
        logger.info("-" * 80)

    logger.info(f"\nTotal entries: {len(entries)}")


def cmd_sweep(args, services):
    """Create users for waitlist entries that are due.

    With --date, sweeps that date only. Otherwise sweeps today plus each
    configured offset (by default today and one week from today).
    """
    sweeper = services.sweeper()

    try:
        if args.date:
            results = [sweeper.sweep_due(parse_today(args.date))]
        else:
            results = sweeper.sweep_offsets(
                parse_today(args.today), services.config.sweep_offsets
            )
    except SweepInProgressError as e:
        logger.error(str(e))
        sys.exit(1)

    errors = 0
    for result in results:
        logger.info(
            f"{result.date.isoformat()}: {len(result.success)} created, "
            f"{len(result.error)} failed"
        )
        for failure in result.failures:
            logger.info(f"  ✗ {failure}")
        errors += len(result.error)

    if errors:
        sys.exit(1)


def cmd_delete(args, services):
    """Remove a single waitlist entry by ID without creating its user."""
    entry = services.waitlist.find(args.entry_id)
    if not entry:
        logger.error(f"Waitlist entry with ID '{args.entry_id}' not found.")
        logger.info("Use 'python -m cli waitlist list' to see waitlist entries.")
        sys.exit(1)

    services.waitlist.delete(entry.id)
    logger.info(f"✓ Removed waitlist entry {entry.id}")
    logger.info(f"  Name: {entry.first_name} {entry.last_name}")
    logger.info(f"  Email: {entry.email}")
    logger.info(f"  Activation date: {entry.activation_date.isoformat()}")


def setup_parser(subparsers):
    """Setup waitlist subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "waitlist",
        help="Manage the import waitlist",
        description="List deferred imports, activate the ones that are due, or remove one",
    )

    waitlist_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available waitlist commands",
        dest="subcommand",
        required=True,
    )

    # waitlist list
    list_parser = waitlist_subparsers.add_parser("list", help="List waitlist entries")
    list_parser.set_defaults(func=cmd_list)

    # waitlist sweep
    sweep_parser = waitlist_subparsers.add_parser(
        "sweep", help="Create users whose activation date has arrived"
    )
    sweep_parser.add_argument(
        "--date", help="Sweep only this activation date (YYYY-MM-DD)", default=None
    )
    sweep_parser.add_argument(
        "--today", help="Treat this date as today (YYYY-MM-DD)", default=None
    )
    sweep_parser.set_defaults(func=cmd_sweep)

    # waitlist delete
    delete_parser = waitlist_subparsers.add_parser(
        "delete", help="Remove a waitlist entry without creating the user"
    )
    delete_parser.add_argument("entry_id", type=int, help="Waitlist entry ID")
    delete_parser.set_defaults(func=cmd_delete)
