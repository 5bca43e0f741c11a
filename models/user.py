from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class UserPayload:
    """Values handed to the identity store to create one user."""

    username: str
    email: str
    first_name: str
    last_name: str
    roles: Tuple[str, ...]
    status: bool = True  # enabled on creation
    activation_date: Optional[date] = None


@dataclass
class User:
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    roles: Tuple[str, ...]
    status: bool
    activation_date: Optional[date]
    created_at: Optional[datetime] = None
