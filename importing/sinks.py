"""Progress sinks: where an import run or sweep reports its status."""

from abc import ABC, abstractmethod

from models.results import RunResult
from logger import get_logger

logger = get_logger("importing.progress")


class ProgressSink(ABC):
    """Receives progress and completion events from runs and sweeps."""

    @abstractmethod
    def progress(self, processed: int, total: int) -> None:
        """Called after each chunk of an import run."""
        pass

    @abstractmethod
    def finished(self, success: bool, result: RunResult) -> None:
        """Called exactly once when an import run completes or is cancelled."""
        pass

    @abstractmethod
    def sweep_finished(self, created: int, errored: int) -> None:
        """Called when a sweep for one date completes."""
        pass


class LoggingProgressSink(ProgressSink):
    """Default sink that writes events to the application log."""

    def progress(self, processed: int, total: int) -> None:
        logger.info(f"Processed {processed} of {total} row(s)")

    def finished(self, success: bool, result: RunResult) -> None:
        if success:
            logger.info(
                f"Import finished: {len(result.created)} created, "
                f"{len(result.waitlisted)} waitlisted"
            )
        else:
            logger.warning(
                f"Import stopped after {result.processed} of {result.total} row(s)"
            )

    def sweep_finished(self, created: int, errored: int) -> None:
        logger.info(f"Waitlist sweep finished: {created} created, {errored} failed")
