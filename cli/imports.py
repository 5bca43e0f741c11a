#!/usr/bin/env python3

import sys
from datetime import date
from pathlib import Path
from importing.rows import ImportFileError, open_csv, parse_date, ParseError
from importing.runner import ImportRunner
from models.import_record import RunConfig
from logger import get_logger

logger = get_logger()


def parse_today(value):
    """Parse a --today/--date option, defaulting to the current date."""
    if not value:
        return date.today()
    try:
        return parse_date(value)
    except ParseError as e:
        logger.error(str(e))
        sys.exit(1)


def cmd_run(args, services):
    """Import users from a CSV file.

    Args:
        args: Parsed command-line arguments with csv_file, role, notify,
              skip_header and today
        services: Services container with users and waitlist services
    """
    config = services.config
    roles = list(config.default_roles) + list(args.role or [])

    try:
        run_config = RunConfig(
            roles=tuple(roles),
            notify=args.notify or config.notify_on_creation,
        )
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    today = parse_today(args.today)

    try:
        rows = open_csv(Path(args.csv_file), skip_header=args.skip_header)
    except ImportFileError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Importing users from: {args.csv_file}")
    logger.info(f"Roles: {', '.join(run_config.roles)}")
    logger.info(f"Rows: {len(rows)}")
    logger.info("-" * 80)

    runner = ImportRunner(
        rows,
        run_config,
        services.creator(run_config.notify),
        services.waitlist,
        today,
        chunk_size=config.chunk_size,
    )

    try:
        result = runner.run()
    except KeyboardInterrupt:
        # Let the current chunk finish, then stop
        runner.cancel()
        result = runner.run()

    logger.info(f"\n✓ Created {len(result.created)} user(s)")
    for user_id, record in result.created.items():
        logger.info(f"  {user_id}: {record.first_name} {record.last_name} <{record.email}>")

    logger.info(f"✓ Waitlisted {len(result.waitlisted)} user(s)")
    for entry_id, record in result.waitlisted.items():
        logger.info(
            f"  {entry_id}: {record.first_name} {record.last_name} <{record.email}> "
            f"on {record.activation_date.isoformat()}"
        )

    if result.failed:
        logger.info(f"  ({len(result.failed)} user(s) could not be created)")
    if result.skipped:
        logger.info(f"  ({result.skipped} malformed row(s) skipped)")
    if not result.successful:
        logger.info("No users imported.")

    if not runner.success:
        sys.exit(1)


def setup_parser(subparsers):
    """Setup import subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "import",
        help="Import users from CSV",
        description="Create users from a CSV file, waitlisting future activation dates",
    )

    import_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available import commands",
        dest="subcommand",
        required=True,
    )

    # import run
    run_parser = import_subparsers.add_parser(
        "run", help="Import a CSV file (first,last,email[,activation date])"
    )
    run_parser.add_argument("csv_file", help="Path to the CSV file")
    run_parser.add_argument(
        "--role",
        action="append",
        help="Role to assign (repeatable; added after configured default roles)",
    )
    run_parser.add_argument(
        "--notify", action="store_true", help="Notify users when they are created"
    )
    run_parser.add_argument(
        "--skip-header", action="store_true", help="Ignore the first row of the file"
    )
    run_parser.add_argument(
        "--today", help="Treat this date as today (YYYY-MM-DD)", default=None
    )
    run_parser.set_defaults(func=cmd_run)
