"""Cursor pagination over an already sorted and filtered list."""

from typing import NamedTuple, Optional, Sequence

from .models import NoteDisplay


class Page(NamedTuple):
    items: list[NoteDisplay]
    next_cursor: Optional[str]


def paginate(records: Sequence[NoteDisplay], page_size: int, after: Optional[str] = None) -> Page:
    """Return up to page_size records following the record whose id is ``after``.

    An unknown cursor restarts from the beginning. ``next_cursor`` is the id
    of the last returned record, and is None once nothing remains.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")

    start = 0
    if after:
        for i, record in enumerate(records):
            if record.public_id == after:
                start = i + 1
                break

    items = list(records[start : start + page_size])
    has_more = start + page_size < len(records)
    next_cursor = items[-1].public_id if has_more and items else None
    return Page(items=items, next_cursor=next_cursor)
