"""Result models for import runs and waitlist sweeps.

These are built up while a run is in progress and handed back to the
caller at the end. They are never persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List

from models.import_record import ImportRecord
from models.waitlist_entry import WaitlistEntry


@dataclass(frozen=True)
class Progress:
    processed: int
    total: int

    @property
    def done(self) -> bool:
        return self.processed >= self.total


@dataclass
class RunResult:
    """Outcome of importing one file.

    Attributes:
        created: Records created immediately, keyed by new user id.
        waitlisted: Records deferred to the waitlist, keyed by entry id.
        failed: CreationError for each record the identity store rejected.
        skipped: Number of rows that could not be parsed.
        processed: Rows handled so far.
        total: Rows in the file.
    """

    created: Dict[int, ImportRecord] = field(default_factory=dict)
    waitlisted: Dict[int, ImportRecord] = field(default_factory=dict)
    failed: list = field(default_factory=list)
    skipped: int = 0
    processed: int = 0
    total: int = 0

    @property
    def successful(self) -> int:
        """Rows that ended up either created or waitlisted."""
        return len(self.created) + len(self.waitlisted)


@dataclass
class SweepResult:
    """Outcome of promoting the waitlist entries due on one date.

    Attributes:
        date: The activation date that was swept.
        success: Entries whose user was created.
        error: Entries left on the waitlist because creation failed.
        failures: CreationError for each entry in `error`, same order.
        removed: Entries not attempted because an earlier entry with the
                 same email was created and the delete by email took them
                 off the waitlist too.
    """

    date: date
    success: List[WaitlistEntry] = field(default_factory=list)
    error: List[WaitlistEntry] = field(default_factory=list)
    failures: list = field(default_factory=list)
    removed: List[WaitlistEntry] = field(default_factory=list)
