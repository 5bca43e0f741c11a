"""Import runs and waitlist sweeps.

An ImportRunner works through the rows of one uploaded file a chunk at a
time. The host calls step() repeatedly (or run() to loop until done), so
the run can be interrupted and resumed at chunk boundaries without a
background thread.

A Sweeper promotes waitlist entries whose activation date has arrived. The
host's scheduler decides when to call it; usually once a day for today and
for one week from today.
"""

import threading
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from importing.activation import Decision, decide
from importing.creator import CreationError, UserCreator
from importing.rows import ParseError, parse_row
from importing.sinks import LoggingProgressSink, ProgressSink
from models.import_record import RunConfig
from models.results import Progress, RunResult, SweepResult
from services.waitlist import WaitlistStore, WaitlistStoreError
from logger import get_logger

logger = get_logger("importing.runner")

DEFAULT_CHUNK_SIZE = 100


class SweepInProgressError(Exception):
    """Raised when another sweep holds the sweep slot for too long."""


class ImportRunner:
    """Processes one file's rows into created users and waitlist entries.

    Args:
        rows: The file's rows, each already split into fields.
        run_config: Roles and notify flag for every row of this run.
        creator: UserCreator used for immediate creations.
        waitlist: Waitlist store for deferred records.
        today: Date used to decide between creating and deferring.
        sink: Receives progress after each chunk and the final result.
        chunk_size: Maximum rows handled per step().
    """

    def __init__(
        self,
        rows: Iterable[Sequence[str]],
        run_config: RunConfig,
        creator: UserCreator,
        waitlist: WaitlistStore,
        today: date,
        sink: Optional[ProgressSink] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self.run_config = run_config
        self.creator = creator
        self.waitlist = waitlist
        self.today = today
        self.sink = sink or LoggingProgressSink()
        self.chunk_size = chunk_size

        self._rows = [list(row) for row in rows]
        self.result = RunResult(total=len(self._rows))
        self._cancelled = False
        self._finished = False
        self._success = False

    @property
    def progress(self) -> Progress:
        return Progress(self.result.processed, self.result.total)

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def success(self) -> bool:
        """Whether the run finished with every row processed."""
        return self._success

    def cancel(self) -> None:
        """Stop the run at the next chunk boundary.

        The row being handled (and the rest of its chunk) still completes.
        """
        if not self._finished:
            logger.info("Import cancellation requested")
            self._cancelled = True

    def step(self) -> Progress:
        """Process the next chunk of rows.

        Returns:
            Progress after the chunk. Calling step() after the run has
            finished does nothing and returns the final progress.
        """
        if self._finished:
            return self.progress

        if self._cancelled:
            self._finish(success=False)
            return self.progress

        start = self.result.processed
        for row in self._rows[start:start + self.chunk_size]:
            self._process_row(self.result.processed + 1, row)
            self.result.processed += 1

        self.sink.progress(self.result.processed, self.result.total)

        if self.result.processed >= self.result.total:
            self._finish(success=True)

        return self.progress

    def run(self) -> RunResult:
        """Step through the remaining rows until done or cancelled."""
        while not self._finished:
            self.step()
        return self.result

    def _process_row(self, line_num: int, row: List[str]) -> None:
        try:
            record = parse_row(row, self.run_config)
        except ParseError as e:
            logger.warning(f"Skipping malformed line {line_num}: {e}")
            self.result.skipped += 1
            return

        if decide(record, self.today) is Decision.DEFER:
            try:
                entry_id = self.waitlist.insert(record)
            except WaitlistStoreError as e:
                # Not retried; the record is lost for this run
                logger.error(f"Line {line_num}: {e}")
                return
            logger.debug(
                f"Waitlisted {record.email} until {record.activation_date.isoformat()}"
            )
            self.result.waitlisted[entry_id] = record
            return

        try:
            user_id = self.creator.create(record)
        except CreationError as e:
            self.result.failed.append(e)
            return
        self.result.created[user_id] = record

    def _finish(self, success: bool) -> None:
        self._finished = True
        self._success = success
        logger.info(
            f"Import run {'completed' if success else 'cancelled'}: "
            f"{len(self.result.created)} created, "
            f"{len(self.result.waitlisted)} waitlisted, "
            f"{len(self.result.failed)} failed, "
            f"{self.result.skipped} skipped of {self.result.total} row(s)"
        )
        self.sink.finished(success, self.result)


class Sweeper:
    """Promotes due waitlist entries into users.

    All sweepers in the process share one slot, so two sweeps never handle
    the same entries at the same time.

    Args:
        creator: UserCreator used for each due entry.
        waitlist: Waitlist store to read from and delete from.
        sink: Receives the counts at the end of each sweep.
        lock_timeout: Seconds to wait for the sweep slot before giving up.
    """

    slot = threading.Lock()

    def __init__(
        self,
        creator: UserCreator,
        waitlist: WaitlistStore,
        sink: Optional[ProgressSink] = None,
        lock_timeout: float = 30.0,
    ):
        self.creator = creator
        self.waitlist = waitlist
        self.sink = sink or LoggingProgressSink()
        self.lock_timeout = lock_timeout

    def sweep_due(self, activation_date: date) -> SweepResult:
        """Create users for every waitlist entry due on the given date.

        Created entries are removed from the waitlist by email, which also
        removes any later entry with the same email; those are reported in
        `removed` and not created again. Entries that fail stay on the
        waitlist and are retried by the next sweep of the same date.

        Args:
            activation_date: The date to sweep.

        Returns:
            SweepResult with the success and error split.

        Raises:
            SweepInProgressError: If the sweep slot is not free in time.
        """
        if not self._acquire():
            raise SweepInProgressError(
                f"Another waitlist sweep is running; gave up after {self.lock_timeout}s"
            )

        try:
            result = SweepResult(date=activation_date)
            entries = self.waitlist.entries_for_date(activation_date)
            logger.info(
                f"Sweeping {len(entries)} waitlist entr{'y' if len(entries) == 1 else 'ies'} "
                f"for {activation_date.isoformat()}"
            )

            removed_emails = set()
            for entry in entries:
                if entry.email in removed_emails:
                    # Already gone with an earlier entry sharing this email
                    logger.info(
                        f"Skipping waitlist entry {entry.id}: {entry.email} was "
                        f"already removed in this sweep"
                    )
                    result.removed.append(entry)
                    continue

                try:
                    self.creator.create(entry.to_record())
                except CreationError as e:
                    result.error.append(entry)
                    result.failures.append(e)
                    continue

                result.success.append(entry)
                try:
                    if self.waitlist.delete_by_email(entry.email):
                        removed_emails.add(entry.email)
                except WaitlistStoreError as e:
                    logger.warning(
                        f"{e}; the entry may be created again by a later sweep"
                    )
        finally:
            self.slot.release()

        self.sink.sweep_finished(len(result.success), len(result.error))
        return result

    def sweep_offsets(self, today: date, offsets: Iterable[int]) -> List[SweepResult]:
        """Sweep `today + n days` for each offset, in the order given."""
        return [
            self.sweep_due(today + timedelta(days=offset)) for offset in offsets
        ]

    def _acquire(self) -> bool:
        if self.lock_timeout <= 0:
            return self.slot.acquire(blocking=False)
        return self.slot.acquire(timeout=self.lock_timeout)
