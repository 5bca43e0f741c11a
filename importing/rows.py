"""Reading uploaded CSV files and turning rows into ImportRecords.

Expected format (no header unless skipped by the caller):
- column 0: first name
- column 1: last name
- column 2: email
- column 3: optional activation date (YYYY-MM-DD or MM/DD/YYYY)
"""

import csv
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Sequence

from models.import_record import ImportRecord, RunConfig

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")


class ParseError(ValueError):
    """Raised when a CSV row cannot be turned into an ImportRecord."""


class ImportFileError(Exception):
    """Raised when the uploaded file cannot be opened or read at all."""


def parse_date(value: str) -> date:
    """Parse an activation date in one of the accepted formats.

    Raises:
        ParseError: If the value matches none of the formats.
    """
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ParseError(f"Invalid activation date: {value!r}")


def parse_row(columns: Sequence[str], config: RunConfig) -> ImportRecord:
    """Turn one CSV row into an ImportRecord.

    Args:
        columns: Fields of the row, already split by the CSV reader.
        config: Settings for the current run; roles come from here.

    Returns:
        ImportRecord for the row.

    Raises:
        ParseError: If the row has fewer than 3 columns, a required field is
                    blank, or the activation date is not a valid date.
    """
    if len(columns) < 3:
        raise ParseError(f"Expected at least 3 columns, got {len(columns)}")

    first_name = columns[0].strip()
    last_name = columns[1].strip()
    email = columns[2].strip()

    if not first_name or not last_name or not email:
        raise ParseError("First name, last name and email are required")

    activation_date: Optional[date] = None
    date_str = columns[3].strip() if len(columns) > 3 else ""
    if date_str:
        activation_date = parse_date(date_str)

    return ImportRecord(
        first_name=first_name,
        last_name=last_name,
        email=email,
        activation_date=activation_date,
        roles=config.roles,
    )


def open_csv(path: Path, skip_header: bool = False) -> List[List[str]]:
    """Read every row of an uploaded CSV file.

    Args:
        path: Path to the file.
        skip_header: Drop the first row.

    Returns:
        List of rows, each a list of fields. Blank lines are dropped.

    Raises:
        ImportFileError: If the file cannot be opened, decoded or parsed as CSV.
    """
    try:
        with open(path, "r", newline="", encoding="utf-8-sig") as f:
            rows = [row for row in csv.reader(f) if row]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise ImportFileError(f"Could not read {path}: {e}") from e

    if skip_header and rows:
        rows = rows[1:]
    return rows
