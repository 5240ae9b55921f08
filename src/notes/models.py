"""Data models for remote notes and their display projections."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Timestamp = Union[int, float, str]


class Note(BaseModel):
    """A note as returned by the remote ``notes.get`` operation.

    Notes are owned by the server and never mutated locally. Keys the model
    does not know about are kept so a later transformer can use them. Tags
    the display path never reads are typed ``Any`` and kept as sent, so only
    a missing ``_id`` can reject a record.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: str = Field(alias="_id")
    text: Optional[str] = ""
    author_id: Any = None
    author_name: Optional[str] = ""
    created_on: Optional[Timestamp] = None  # epoch milliseconds
    user: Any = None
    external_note: Any = None
    editor_id: Any = None
    editor_name: Any = None
    updated_on: Any = None
    subject: Any = None
    category: Any = None
    note_category: Optional[str] = None
    performed_on: Optional[Timestamp] = None  # when the work was done, not when it was logged
    tag_numbers: Any = None
    version: Any = None
    software_type: Any = None
    stack_replacements: Any = None
    workorder_id: Any = None
    stack_inspections: Any = None

    @field_validator("id", "text", "author_name", "note_category", mode="before")
    @classmethod
    def numbers_to_str(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class FormattedDate(BaseModel):
    """One timestamp rendered four ways."""

    full_date: str
    date_only: str
    time_only: str
    formatted_date: str


class NoteDisplay(BaseModel):
    """Presentation record derived from a Note."""

    public_id: str
    name: str
    occurred_on: FormattedDate
    performed_on: str = "N/A"
    text: str = ""
    author_name: str = ""
    note_category: Optional[str] = None


class NotesPage(BaseModel):
    """One page of display records plus the cursor for the next page."""

    notes: list[NoteDisplay] = Field(default_factory=list)
    next_cursor: Optional[str] = None


@dataclass
class CacheEntry:
    """Cached payload with its creation and expiry times (epoch seconds)."""

    data: Any
    timestamp: float
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


@dataclass
class DateParseResult:
    """Outcome of reading a search query as a date or time."""

    is_date: bool = False
    value: Optional[datetime] = None
    has_year: bool = False
    # Unused downstream; kept so callers relying on the shape keep working.
    api_filters: list[str] = field(default_factory=list)
