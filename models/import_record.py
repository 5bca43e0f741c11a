"""ImportRecord and RunConfig models for CSV user imports."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple


@dataclass(frozen=True)
class RunConfig:
    """Settings shared by every row of a single import run.

    Attributes:
        roles: Role identifiers applied to each imported user, in order.
        notify: Whether newly created users should be notified.

    Raises:
        ValueError: If no role is given.
    """

    roles: Tuple[str, ...]
    notify: bool = False

    def __post_init__(self):
        # Accept any iterable of roles, drop blanks and repeats, keep order
        roles = tuple(dict.fromkeys(r.strip() for r in self.roles if r and r.strip()))
        if not roles:
            raise ValueError(
                "At least one role must be selected for the imported user(s)"
            )
        object.__setattr__(self, "roles", roles)


@dataclass(frozen=True)
class ImportRecord:
    first_name: str
    last_name: str
    email: str
    activation_date: Optional[date]  # None = activate immediately
    roles: Tuple[str, ...]
