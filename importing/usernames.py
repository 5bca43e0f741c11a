"""Collision-free username allocation."""

from typing import Callable


def base_username(first_name: str, last_name: str) -> str:
    """Preferred username: first and last name run together, lowercased."""
    return f"{first_name}{last_name}".lower()


def allocate(base: str, exists: Callable[[str], bool]) -> str:
    """Find the first unused username starting from `base`.

    Tries `base`, then `base1`, `base2`, ... until `exists` returns False.
    Every call asks `exists` again; nothing is remembered between calls, so
    callers that create users concurrently must serialize allocate + create.

    There is no upper bound on the suffix; n users sharing a name cost
    n + 1 lookups for the next one.

    Args:
        base: Preferred username.
        exists: Lookup returning True if a username is already taken.

    Returns:
        The first available username.
    """
    candidate = base
    suffix = 0
    while exists(candidate):
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate
