"""Last-Write-Wins - pure merge decision and instant formatting.

Invariants:
    - A candidate is applied unless a stored timestamp exists and the
      candidate's timestamp is readable and not strictly greater than it
    - Absent, blank, zero or unreadable candidate timestamps never block a write
    - Naive instants are read as UTC
    - Formatted instants look like 2024-01-01T00:00:00.000Z
"""

import re
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# "Mon Jan 01 2024 00:00:00 GMT+0000 (Coordinated Universal Time)"
_DATE_STRING_FORMAT = "%a %b %d %Y %H:%M:%S GMT%z"
_ZONE_NAME = re.compile(r"\s*\([^)]*\)\s*$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_instant(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def _parse_text(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        pass
    return datetime.strptime(_ZONE_NAME.sub("", text), _DATE_STRING_FORMAT)


def parse_instant(value: str | datetime) -> datetime:
    """Parse an instant: ISO-8601, RFC 2822, or a browser Date string.

    Raises ValueError when unparseable.
    """
    if isinstance(value, datetime):
        moment = value
    else:
        moment = _parse_text(value.strip())
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def coerce_candidate_timestamp(
    value: str | int | float | datetime | None,
) -> datetime | None:
    """Client timestamp → aware datetime, or None when it cannot gate a write.

    Numbers are epoch milliseconds, the other form browser clients send;
    0 counts as absent. Unreadable values also come back as None.
    """
    if value is None or value == 0 or (isinstance(value, str) and not value.strip()):
        return None
    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return _EPOCH + timedelta(milliseconds=value)
        return parse_instant(value)
    except (TypeError, ValueError, OverflowError):
        return None


def should_apply(
    existing_timestamp: str | None, candidate_timestamp: datetime | None,
) -> bool:
    """Decide whether a write replaces the stored record.

    existing_timestamp is None when no record is stored yet; the first write
    for a user is always applied.
    """
    if candidate_timestamp is None or existing_timestamp is None:
        return True
    try:
        existing = parse_instant(existing_timestamp)
    except ValueError:
        # unreadable stored instant loses to any client write
        return True
    return candidate_timestamp > existing
