"""Deciding whether an imported record becomes a user now or later."""

from datetime import date
from enum import Enum

from models.import_record import ImportRecord


class Decision(Enum):
    CREATE_NOW = "create_now"
    DEFER = "defer"


def decide(record: ImportRecord, today: date) -> Decision:
    """Route a record to immediate creation or to the waitlist.

    Records without an activation date, or with a date that is today or
    already past (a late upload), are created now. Only a date strictly
    after `today` defers the record.

    Args:
        record: The parsed import record.
        today: The current date, supplied by the caller.

    Returns:
        Decision.CREATE_NOW or Decision.DEFER.
    """
    if record.activation_date is None or record.activation_date <= today:
        return Decision.CREATE_NOW
    return Decision.DEFER
