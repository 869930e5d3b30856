"""Codecs for string-typed spreadsheet cells."""

import json
import math
from collections.abc import Iterator
from datetime import UTC, date, datetime

HEADER_ROWS = 1


def data_rows(rows: list[list[str]]) -> Iterator[tuple[int, list[str]]]:
    """Yield (sheet row number, row) pairs, skipping the header row."""
    for offset, row in enumerate(rows[HEADER_ROWS:]):
        yield offset + HEADER_ROWS + 1, row


def cell(row: list[str], index: int) -> str:
    """Return a cell value; the Sheets API trims trailing empty cells."""
    if index < len(row):
        return str(row[index]).strip()
    return ""


def parse_bool(value: str) -> bool:
    return value.strip().upper() == "TRUE"


def format_bool(value: bool) -> str:
    return "TRUE" if value else "FALSE"


def parse_float(value: str) -> float | None:
    """Parse a decimal cell; blanks and junk decode as missing."""
    if not value.strip():
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def parse_int(value: str) -> int | None:
    parsed = parse_float(value)
    if parsed is None:
        return None
    return int(parsed)


def format_number(value: float | int | None) -> str:
    """Format a number as a plain decimal string, blank for None."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_datetime(value: str) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_datetime(value: datetime | None) -> str:
    """Format as an ISO-8601 UTC timestamp with millisecond precision."""
    if value is None:
        return ""
    return (
        value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


def parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_list(value: str) -> list[str]:
    """Parse a comma-joined list cell."""
    return [chunk.strip() for chunk in value.split(",") if chunk.strip()]


def format_list(values: list[str]) -> str:
    return ",".join(value.strip() for value in values if value.strip())


def parse_id_list(value: str) -> list[str]:
    """Parse an id list stored either as a JSON array or comma-joined."""
    if value.startswith("["):
        try:
            decoded = json.loads(value)
        except ValueError:
            decoded = None
        if isinstance(decoded, list):
            return [str(item) for item in decoded if str(item).strip()]
    return parse_list(value)


def format_id_list(values: list[str]) -> str:
    return json.dumps(values)
