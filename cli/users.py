#!/usr/bin/env python3

from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all users in the identity store."""
    users = services.users.find_all()

    if not users:
        logger.info("No users found.")
        return

    logger.info("\nUsers:")
    logger.info("=" * 80)
    for user in users:
        logger.info(f"ID: {user.id}")
        logger.info(f"Username: {user.username}")
        logger.info(f"Name: {user.first_name} {user.last_name}")
        logger.info(f"Email: {user.email}")
        logger.info(f"Roles: {', '.join(user.roles)}")
        logger.info(f"Status: {'active' if user.status else 'blocked'}")
        logger.info("-" * 80)

    logger.info(f"\nTotal users: {len(users)}")


def setup_parser(subparsers):
    """Setup users subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "users",
        help="Inspect users",
        description="List users in the local identity store",
    )

    users_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available user commands",
        dest="subcommand",
        required=True,
    )

    # users list
    list_parser = users_subparsers.add_parser("list", help="List all users")
    list_parser.set_defaults(func=cmd_list)
