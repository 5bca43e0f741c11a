"""Notifications sent when an imported user is created."""

from abc import ABC, abstractmethod

from models.user import UserPayload
from logger import get_logger

logger = get_logger("importing.notify")


class Notifier(ABC):
    """Abstract base class for new-user notification channels."""

    @abstractmethod
    def user_created(self, user_id: int, payload: UserPayload) -> None:
        """Tell the new user (or an admin) that the account exists.

        Raises:
            Exception: Implementations may raise; the creator logs and
                       carries on, since the user already exists.
        """
        pass


class LogNotifier(Notifier):
    """Records notifications in the application log instead of sending them."""

    def user_created(self, user_id: int, payload: UserPayload) -> None:
        logger.info(
            f"Notify {payload.email}: account '{payload.username}' created (ID: {user_id})"
        )
