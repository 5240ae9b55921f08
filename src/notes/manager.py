"""Top-level entry point used by presentation code."""

from typing import Optional

import structlog

from .cache import DEFAULT_TTL_SECONDS, TTLCache
from .client import BackendClient
from .fetcher import NotesFetcher
from .formatting import TZ, format_date, sort_by_recency, to_display
from .models import NotesPage
from .pagination import paginate
from .search import filter_notes

logger = structlog.get_logger().bind(source="notes_manager")

DEFAULT_PAGE_SIZE = 50


class NotesManager:
    """Fetch, format, search and page notes for a list view.

    The backend returns its whole collection unpaginated, so sorting,
    filtering and paging all happen here.
    """

    format_date = staticmethod(format_date)

    def __init__(
        self,
        client: BackendClient,
        cache: Optional[TTLCache] = None,
        timezone: TZ = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
    ):
        self.cache = cache if cache is not None else TTLCache(default_ttl=ttl_seconds)
        self.fetcher = NotesFetcher(client, self.cache, ttl_seconds=ttl_seconds)
        self.timezone = timezone

    async def list_notes(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        after: Optional[str] = None,
        search_query: Optional[str] = None,
        force_fresh: bool = False,
    ) -> NotesPage:
        """Return one page of notes, newest first.

        Never raises: any failure is logged and reported as an empty page
        with no cursor.

        Args:
            page_size: Max notes in the page
            after: Cursor from the previous page (id of its last note)
            search_query: Free-text or date query; blank means no filter
            force_fresh: Bypass the cache and refetch
        """
        try:
            notes = await self.fetcher.fetch_all(force_fresh=force_fresh)
            records = sort_by_recency(to_display(n, self.timezone) for n in notes)
            if search_query and search_query.strip():
                records = filter_notes(records, search_query, self.timezone)
            page = paginate(records, page_size, after)
            return NotesPage(notes=page.items, next_cursor=page.next_cursor)
        except Exception as e:
            logger.error("list_notes_failed", error=str(e), error_type=type(e).__name__)
            return NotesPage()

    def refresh(self) -> None:
        """Forget all cached data. The next list_notes call refetches."""
        self.cache.invalidate()
