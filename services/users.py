"""User service: the local SQLite-backed identity store."""

import json
import sqlite3
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional
from models.user import User, UserPayload

_USER_SELECT_FIELDS = """id, username, email, first_name, last_name, roles, status,
       activation_date, created_at"""


class IdentityStoreError(Exception):
    """Raised when the identity store rejects or fails to persist a user."""


class IdentityStore(ABC):
    """What the import layer needs from an identity store.

    Hosts with their own user directory implement these two methods; the
    bundled UserService implements them on top of SQLite.
    """

    @abstractmethod
    def create_user(self, payload: UserPayload) -> int:
        """Create and persist a user.

        Returns:
            The new user's id.

        Raises:
            IdentityStoreError: If the payload is rejected.
        """

    @abstractmethod
    def username_taken(self, username: str) -> bool:
        """Check whether a username is already in use."""


class UserService(IdentityStore):
    """Service for managing users."""

    def __init__(self, db_manager):
        """Initialize the user service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create_user(self, payload: UserPayload) -> int:
        """Create a new user.

        Args:
            payload: Values for the new user.

        Returns:
            ID of the created user.

        Raises:
            IdentityStoreError: If the insert fails (e.g., duplicate email
                                or username).
        """
        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO users (username, email, first_name, last_name,
                                       roles, status, activation_date)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        payload.username,
                        payload.email,
                        payload.first_name,
                        payload.last_name,
                        json.dumps(list(payload.roles)),
                        1 if payload.status else 0,
                        (
                            payload.activation_date.isoformat()
                            if payload.activation_date
                            else None
                        ),
                    ),
                )
                conn.commit()
                return cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise IdentityStoreError(f"User rejected: {e}") from e
        except sqlite3.Error as e:
            raise IdentityStoreError(f"Could not save user: {e}") from e

    def username_taken(self, username: str) -> bool:
        """Check whether a username is already in use.

        Raises:
            IdentityStoreError: If the lookup fails (e.g., database locked).
        """
        try:
            with self.db_manager.connect() as conn:
                cursor = conn.execute(
                    "SELECT 1 FROM users WHERE username = ? LIMIT 1", (username,)
                )
                return cursor.fetchone() is not None
        except sqlite3.Error as e:
            raise IdentityStoreError(f"Could not look up username {username}: {e}") from e

    def find(self, user_id: int) -> Optional[User]:
        """Get a single user by ID.

        Args:
            user_id: The user ID to find.

        Returns:
            User object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_USER_SELECT_FIELDS} FROM users WHERE id = ?", (user_id,)
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_user(row)
            return None

    def find_by_username(self, username: str) -> Optional[User]:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_USER_SELECT_FIELDS} FROM users WHERE username = ?",
                (username,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_user(row)
            return None

    def find_all(self) -> List[User]:
        """Get all users, ordered by id."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(f"SELECT {_USER_SELECT_FIELDS} FROM users ORDER BY id")
            return [self._row_to_user(row) for row in cursor.fetchall()]

    def _row_to_user(self, row: tuple) -> User:
        """Convert a database row to a User object.

        Args:
            row: Database row tuple.

        Returns:
            User object.
        """
        return User(
            id=row[0],
            username=row[1],
            email=row[2],
            first_name=row[3],
            last_name=row[4],
            roles=tuple(json.loads(row[5])),
            status=bool(row[6]),
            activation_date=date.fromisoformat(row[7]) if row[7] else None,
            created_at=datetime.fromisoformat(row[8]) if row[8] else None,
        )
