"""WaitlistEntry model representing a deferred import."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from models.import_record import ImportRecord


@dataclass
class WaitlistEntry:
    """A persisted import record waiting for its activation date.

    Attributes:
        id: Unique identifier (assigned on insert).
        first_name: First name from the uploaded row.
        last_name: Last name from the uploaded row.
        email: Email address; used to remove the entry after activation.
        activation_date: Date on which the user should be created.
        roles: Role identifiers, in the order they were selected.
        created_at: Timestamp when the entry was queued.
    """

    id: int
    first_name: str
    last_name: str
    email: str
    activation_date: date
    roles: Tuple[str, ...]
    created_at: Optional[datetime] = None

    def to_record(self) -> ImportRecord:
        """Rebuild the ImportRecord this entry was created from."""
        return ImportRecord(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            activation_date=self.activation_date,
            roles=self.roles,
        )
