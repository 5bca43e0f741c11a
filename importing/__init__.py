from importing.activation import Decision, decide
from importing.creator import CreationError, UserCreator
from importing.rows import ImportFileError, ParseError, open_csv, parse_row
from importing.runner import ImportRunner, SweepInProgressError, Sweeper
from importing.usernames import allocate, base_username

__all__ = [
    "CreationError",
    "Decision",
    "ImportFileError",
    "ImportRunner",
    "ParseError",
    "SweepInProgressError",
    "Sweeper",
    "UserCreator",
    "allocate",
    "base_username",
    "decide",
    "open_csv",
    "parse_row",
]
