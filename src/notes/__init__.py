"""Notes feed: fetch, cache, format, search and page remote notes."""

from .cache import TTLCache
from .client import BackendCallError, HttpBackendClient, NotesError
from .fetcher import NotesFetcher, extract_notes
from .formatting import format_date, sort_by_recency, to_display
from .manager import NotesManager
from .models import DateParseResult, FormattedDate, Note, NoteDisplay, NotesPage
from .pagination import Page, paginate
from .search import filter_notes, fuzzy_match, recognize_date

__version__ = "0.1.0"

__all__ = [
    "BackendCallError",
    "DateParseResult",
    "FormattedDate",
    "HttpBackendClient",
    "Note",
    "NoteDisplay",
    "NotesError",
    "NotesFetcher",
    "NotesManager",
    "NotesPage",
    "Page",
    "TTLCache",
    "extract_notes",
    "filter_notes",
    "format_date",
    "fuzzy_match",
    "paginate",
    "recognize_date",
    "sort_by_recency",
    "to_display",
]
