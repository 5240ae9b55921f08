"""Date-aware search over display records.

A query matches a record when it is a case-insensitive substring of one of
the record's text fields, or when the query reads as a date or time that
falls within a window of the record's creation date. The window depends on
which tokens the user typed:

- no ``:``, no four-digit year: same month and day, any year
- no ``:``, with a year: same calendar day
- ``:`` only (e.g. ``14:30``): same hour, minutes within 5
- date and time: within 10 minutes
"""

import re
from datetime import datetime, tzinfo
from typing import Optional, Sequence

import structlog

from .formatting import TZ, localize, now_in, parse_iso, resolve_zone
from .models import DateParseResult, NoteDisplay

logger = structlog.get_logger().bind(source="notes_search")

# (strptime format, has year, has date). Tried in order; first match wins.
DATE_PATTERNS: tuple[tuple[str, bool, bool], ...] = (
    ("%m/%d/%Y", True, True),
    ("%d/%m/%Y", True, True),
    ("%d-%m-%Y", True, True),
    ("%Y/%m/%d", True, True),
    ("%Y-%m-%d", True, True),
    ("%Y.%m.%d", True, True),
    ("%m/%d/%Y, %I:%M %p", True, True),
    ("%d/%m/%Y, %I:%M %p", True, True),
    ("%m/%d/%Y %H:%M", True, True),
    ("%d/%m/%Y %H:%M", True, True),
    ("%Y/%m/%d %H:%M", True, True),
    ("%Y-%m-%d %H:%M", True, True),
    ("%I:%M %p", False, False),
    ("%H:%M", False, False),
    ("%m/%Y", True, True),
    ("%m-%Y", True, True),
    ("%Y/%m", True, True),
    ("%Y-%m", True, True),
    ("%m/%d", False, True),
    ("%d/%m", False, True),
)

# Offsets of (year, month, day) inside a separator-free digit run.
DIGIT_LAYOUTS: tuple[tuple[int, int, int], ...] = (
    (0, 4, 6),  # yyyymmdd
    (4, 0, 2),  # mmddyyyy
    (4, 2, 0),  # ddmmyyyy
)

MIN_YEAR, MAX_YEAR = 2000, 2050

_SEPARATORS = re.compile(r"[/\-.]")
_DIGITS = re.compile(r"\d+")
_FOUR_DIGITS = re.compile(r"\d{4}")
_DAY_MONTH = re.compile(r"\d{1,2}[-/.]\d{1,2}")


def fuzzy_match(text: Optional[str], query: str) -> bool:
    """Case-insensitive substring test. Empty text or query never matches."""
    if not text or not query:
        return False
    return query.lower() in text.lower()


def _parse_pattern(query: str, fmt: str, has_year: bool, has_date: bool, zone) -> datetime:
    # Borrow the missing parts from today so strptime never defaults to 1900.
    today = now_in(zone)
    if not has_date:
        naive = datetime.strptime(f"{today:%Y-%m-%d} {query}", f"%Y-%m-%d {fmt}")
    elif not has_year:
        naive = datetime.strptime(f"{today.year} {query}", f"%Y {fmt}")
    else:
        naive = datetime.strptime(query, fmt)
    return localize(naive, zone)


def _parse_digit_run(digits: str, zone) -> Optional[datetime]:
    for year_at, month_at, day_at in DIGIT_LAYOUTS:
        if len(digits) < max(year_at + 4, month_at + 2, day_at + 2):
            continue
        year = int(digits[year_at : year_at + 4])
        month = int(digits[month_at : month_at + 2])
        day = int(digits[day_at : day_at + 2])
        if not (MIN_YEAR <= year <= MAX_YEAR and 1 <= month <= 12 and 1 <= day <= 31):
            continue
        try:
            return localize(datetime(year, month, day), zone)
        except ValueError:
            continue
    return None


def recognize_date(query: str, tz: TZ = None) -> DateParseResult:
    """Try to read query as a date, time or date-time in timezone tz.

    Explicit patterns are tried first against the query as typed. Failing
    those, a run of at least six digits (separators removed) is read as
    yyyymmdd, mmddyyyy or ddmmyyyy, whichever first gives a plausible date.
    """
    result = DateParseResult()
    query = query.strip()
    normalized = _SEPARATORS.sub("", query)

    try:
        zone = resolve_zone(tz)
        for fmt, has_year, has_date in DATE_PATTERNS:
            try:
                value = _parse_pattern(query, fmt, has_year, has_date, zone)
            except ValueError:
                continue
            result.is_date = True
            result.value = value
            result.has_year = has_year
            break

        if not result.is_date and len(normalized) >= 6 and _DIGITS.fullmatch(normalized):
            value = _parse_digit_run(normalized, zone)
            if value is not None:
                result.is_date = True
                result.value = value
                result.has_year = True
    except Exception as e:
        logger.debug("date_parse_error", query=query, error=str(e))
        return DateParseResult()

    return result


def _within_window(record: NoteDisplay, query: str, parsed: DateParseResult, zone: Optional[tzinfo]) -> bool:
    occurred = parse_iso(record.occurred_on.full_date, zone)
    if occurred is None:
        return False
    value = parsed.value

    if ":" not in query:
        if parsed.has_year and occurred.year != value.year:
            return False
        if not _FOUR_DIGITS.search(query):
            return (occurred.month, occurred.day) == (value.month, value.day)
        return occurred.date() == value.date()

    if not _DAY_MONTH.search(query) and not _FOUR_DIGITS.search(query):
        return occurred.hour == value.hour and abs(occurred.minute - value.minute) <= 5

    return abs((occurred - value).total_seconds()) <= 10 * 60


def _matches_text(record: NoteDisplay, query: str) -> bool:
    return (
        fuzzy_match(record.public_id, query)
        or fuzzy_match(record.name, query)
        or fuzzy_match(record.text, query)
        or fuzzy_match(record.author_name, query)
        or fuzzy_match(record.note_category, query)
        or fuzzy_match(record.performed_on, query)
    )


def filter_notes(records: Sequence[NoteDisplay], query: Optional[str], tz: TZ = None) -> list[NoteDisplay]:
    """Keep records matching query by substring or by date window.

    A blank query returns the records unchanged.
    """
    if not query or not query.strip():
        return list(records)

    query = query.strip()
    parsed = recognize_date(query, tz)
    zone = resolve_zone(tz)

    matched = []
    for record in records:
        if _matches_text(record, query):
            matched.append(record)
        elif parsed.is_date and _within_window(record, query, parsed, zone):
            matched.append(record)
    return matched
