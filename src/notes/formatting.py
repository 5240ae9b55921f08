"""Date formatting and the Note -> NoteDisplay transform."""

import math
from datetime import datetime, tzinfo
from typing import Iterable, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import FormattedDate, Note, NoteDisplay

NO_DATE = "No Date Provided"
NO_TIME = "No Time Provided"
INVALID_DATE = "Invalid Date"
INVALID_TIME = "Invalid Time"
INVALID_FORMAT = "Invalid Date Format"
NOT_AVAILABLE = "N/A"

TZ = Union[str, tzinfo, None]


def resolve_zone(tz: TZ) -> Optional[tzinfo]:
    """Turn an IANA name into a tzinfo. None means the local zone."""
    if tz is None or isinstance(tz, tzinfo):
        return tz
    return ZoneInfo(tz)


def _zone_or_local(tz: TZ) -> Optional[tzinfo]:
    try:
        return resolve_zone(tz)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def localize(naive: datetime, zone: Optional[tzinfo]) -> datetime:
    """Attach zone (or the local zone) to a naive datetime."""
    if zone is None:
        return naive.astimezone()
    return naive.replace(tzinfo=zone)


def now_in(zone: Optional[tzinfo]) -> datetime:
    if zone is None:
        return datetime.now().astimezone()
    return datetime.now(zone)


def parse_iso(value: str, zone: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse an ISO-8601 string into an aware datetime in zone, or None."""
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if dt.tzinfo is None:
        dt = localize(dt, zone)
    return dt.astimezone(zone)


def _is_missing(value) -> bool:
    if value is None or value is False or value == "":
        return True
    return isinstance(value, float) and math.isnan(value)


def _to_datetime(value, zone: Optional[tzinfo]) -> Optional[datetime]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            dt = datetime.fromtimestamp(value / 1000, tz=zone)
        except (OverflowError, OSError, ValueError):
            return None
        return dt if zone is not None else dt.astimezone()
    if isinstance(value, str):
        return parse_iso(value, zone)
    return None


def format_date(value: Union[int, float, str, None], tz: TZ = None) -> FormattedDate:
    """Format an epoch-millisecond number or ISO string four ways.

    Missing input yields the "No Date Provided" sentinels; input that is
    present but cannot be parsed yields the "Invalid Date" sentinels, so
    callers can tell missing data from malformed data. Epoch 0 is a date.
    An unknown zone name renders in the local zone.
    """
    if _is_missing(value):
        return FormattedDate(
            full_date=NO_DATE,
            date_only=NO_DATE,
            time_only=NO_TIME,
            formatted_date=NO_DATE,
        )

    dt = _to_datetime(value, _zone_or_local(tz))
    if dt is None:
        return FormattedDate(
            full_date=str(value),
            date_only=INVALID_DATE,
            time_only=INVALID_TIME,
            formatted_date=INVALID_FORMAT,
        )

    return FormattedDate(
        full_date=dt.isoformat(timespec="milliseconds"),
        date_only=dt.strftime("%m-%d-%Y"),
        time_only=dt.strftime("%H:%M"),
        formatted_date=dt.strftime("%m-%d-%Y %H:%M"),
    )


def to_display(note: Note, tz: TZ = None) -> NoteDisplay:
    """Project a Note into its display record."""
    if _is_missing(note.performed_on):
        performed_on = NOT_AVAILABLE
    else:
        performed_on = format_date(note.performed_on, tz).formatted_date

    return NoteDisplay(
        public_id=note.id,
        name=f"{note.note_category or 'Note'}\ncreated by {note.author_name or ''}",
        occurred_on=format_date(note.created_on, tz),
        performed_on=performed_on,
        text=note.text or "",
        author_name=note.author_name or "",
        note_category=note.note_category,
    )


def sort_by_recency(records: Iterable[NoteDisplay]) -> list[NoteDisplay]:
    """Newest first by creation date. Unparseable dates go last, in input order."""

    def key(record: NoteDisplay):
        dt = parse_iso(record.occurred_on.full_date)
        if dt is None:
            return (1, 0.0)
        return (0, -dt.timestamp())

    return sorted(records, key=key)
