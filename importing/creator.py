"""Turning import records into identity-store users."""

import threading
from typing import Optional

from importing.notify import Notifier
from importing.usernames import allocate, base_username
from models.import_record import ImportRecord
from models.user import UserPayload
from services.users import IdentityStore, IdentityStoreError
from logger import get_logger

logger = get_logger("importing.creator")


class CreationError(Exception):
    """Raised when the identity store rejects an imported record.

    Carries enough context to report the failure without the original row.

    Attributes:
        first_name: First name of the record.
        last_name: Last name of the record.
        username: Username that was attempted.
        email: Email of the record.
        cause: The underlying error message.
    """

    def __init__(
        self,
        first_name: str,
        last_name: str,
        username: str,
        email: str,
        cause: str,
    ):
        self.first_name = first_name
        self.last_name = last_name
        self.username = username
        self.email = email
        self.cause = cause
        super().__init__(
            f"Could not create user {first_name} {last_name} "
            f"(username: {username}) (email: {email}); exception: {cause}"
        )


class UserCreator:
    """Creates one user per import record.

    Username allocation is a read-then-write race against the identity
    store, so allocation and creation run under one lock. Creators that
    write to the same store concurrently must share that lock.

    Args:
        identity_store: Store providing create_user and username_taken.
        notifier: Optional notifier called after each successful creation.
        lock: Lock shared with other creators writing to the same store.
    """

    def __init__(
        self,
        identity_store: IdentityStore,
        notifier: Optional[Notifier] = None,
        lock: Optional[threading.Lock] = None,
    ):
        self.identity_store = identity_store
        self.notifier = notifier
        self._lock = lock or threading.Lock()

    def create(self, record: ImportRecord) -> int:
        """Create a user from an import record.

        Args:
            record: Parsed (or waitlisted) import record.

        Returns:
            ID of the created user.

        Raises:
            CreationError: If the identity store rejects the user. No user is
                           created in that case.
        """
        with self._lock:
            # Reported as the attempted username if the lookup itself fails
            username = base_username(record.first_name, record.last_name)
            try:
                username = allocate(username, self.identity_store.username_taken)
                payload = self.build_payload(record, username)
                user_id = self.identity_store.create_user(payload)
            except IdentityStoreError as e:
                error = CreationError(
                    record.first_name, record.last_name, username, record.email, str(e)
                )
                logger.error(str(error))
                raise error from e

        logger.info(f"Created user {username} (ID: {user_id})")
        self._notify(user_id, payload)
        return user_id

    def build_payload(self, record: ImportRecord, username: str) -> UserPayload:
        return UserPayload(
            username=username,
            email=record.email,
            first_name=record.first_name,
            last_name=record.last_name,
            roles=record.roles,
            status=True,
            activation_date=record.activation_date,
        )

    def _notify(self, user_id: int, payload: UserPayload) -> None:
        if self.notifier is None:
            return
        # The user exists at this point; a failed notification must not undo that
        try:
            self.notifier.user_created(user_id, payload)
        except Exception as e:
            logger.warning(f"Notification for {payload.email} failed: {e}")
