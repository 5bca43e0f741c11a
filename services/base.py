"""Base services container for dependency injection."""

import threading
from typing import Optional

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.users import UserService
        from services.waitlist import WaitlistService

        self.users = UserService(self.db_manager)
        self.waitlist = WaitlistService(self.db_manager)
        self._creators = {}
        self._creation_lock = threading.Lock()

    def creator(self, notify: Optional[bool] = None):
        """Get the shared UserCreator.

        One creator exists per notify setting; all of them share the lock
        that serializes username allocation and user creation.

        Args:
            notify: Send new-user notifications. Defaults to
                    config.notify_on_creation.
        """
        from importing.creator import UserCreator
        from importing.notify import LogNotifier

        if notify is None:
            notify = self.config.notify_on_creation
        if notify not in self._creators:
            self._creators[notify] = UserCreator(
                self.users,
                notifier=LogNotifier() if notify else None,
                lock=self._creation_lock,
            )
        return self._creators[notify]

    def sweeper(self, sink=None):
        """Build a Sweeper over the waitlist using configured settings."""
        from importing.runner import Sweeper

        return Sweeper(
            self.creator(),
            self.waitlist,
            sink=sink,
            lock_timeout=self.config.sweep_lock_timeout,
        )
