"""Access-log record parsing.

Input lines are quoted CSV in the common-log column order:

    "remotehost","rfc931","authuser","date","request","status","bytes"
    "10.0.0.2","-","apache",1549573860,"GET /api/user HTTP/1.0",200,1234

Only ``date`` (unix epoch seconds) and ``request`` are used downstream.
"""

import csv
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from trafficmon.errors import RecordParseError

_FIELD_COUNT = 7
_TIMESTAMP_FIELD = 3
_REQUEST_FIELD = 4

# Plain ASCII decimal only; int() alone would also take underscores,
# surrounding whitespace and non-ASCII digits.
_TIMESTAMP_RE = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class Entry:
    timestamp: int
    method: str
    path: str
    section: str


def parse_fields(fields: list[str]) -> Entry:
    """Build an Entry from already-split CSV fields."""
    if len(fields) != _FIELD_COUNT:
        raise RecordParseError(
            f"malformed input, expected {_FIELD_COUNT} fields, got: {fields}"
        )

    raw_ts = fields[_TIMESTAMP_FIELD]
    if not _TIMESTAMP_RE.fullmatch(raw_ts):
        raise RecordParseError(f"malformed input, invalid timestamp value: {raw_ts}")
    timestamp = int(raw_ts)
    # Must be renderable as a calendar time for alert lines.
    try:
        datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        raise RecordParseError(
            f"malformed input, timestamp out of range: {raw_ts}"
        ) from None

    request = fields[_REQUEST_FIELD]
    tokens = request.split(" ")
    if len(tokens) < 3:
        raise RecordParseError(f"malformed request data: {request}")

    path = tokens[1]
    parts = path.split("/")
    if len(parts) < 2:
        raise RecordParseError(f"malformed request path: {path}")

    return Entry(timestamp=timestamp, method=tokens[0], path=path, section=parts[1])


def parse_line(line: str) -> Entry:
    """Split one raw CSV line and parse it."""
    try:
        fields = next(csv.reader([line]))
    except csv.Error:
        raise RecordParseError(f"malformed CSV line: {line!r}") from None
    return parse_fields(fields)
