"""Fetch the full note collection from the backend, through the cache."""

import asyncio
from collections.abc import Mapping
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from observability import CACHE_HIT, CACHE_MISS, FETCH, FETCH_ERROR, metrics

from .cache import DEFAULT_TTL_SECONDS, TTLCache
from .client import BackendClient
from .models import Note

logger = structlog.get_logger().bind(source="notes_fetcher")

FETCH_OPERATION = "notes.get"

# Where the note list may sit inside the response envelope, most specific
# first. The empty path is the envelope itself.
ENVELOPE_PATHS: tuple[tuple[str, ...], ...] = (
    ("data", "data"),
    ("data", "value", "data"),
    ("value", "data"),
    ("data",),
    (),
)


def _lookup(envelope: Any, path: tuple[str, ...]) -> Any:
    node = envelope
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def extract_notes(envelope: Any) -> list:
    """Return the raw note list from a response envelope.

    The first path in ENVELOPE_PATHS that holds a list wins. An envelope
    matching none of them yields an empty list.
    """
    for path in ENVELOPE_PATHS:
        node = _lookup(envelope, path)
        if isinstance(node, (list, tuple)):
            return list(node)
    return []


def parse_notes(raw: list) -> list[Note]:
    """Validate raw records, skipping any that are not notes."""
    notes = []
    for item in raw:
        try:
            notes.append(Note.model_validate(item))
        except ValidationError as e:
            logger.warning("note_skipped", error_count=e.error_count(), record=item)
    return notes


def _log_response(envelope: Any, count: int) -> None:
    # Diagnostics only; must never affect the fetch result.
    try:
        logger.debug("notes_raw_response", envelope=envelope)
        logger.info("notes_fetched", count=count)
    except Exception:
        pass


def _retrieve_exception(task: asyncio.Future) -> None:
    # Every waiter may have been cancelled; the error is already logged.
    if not task.cancelled():
        task.exception()


class NotesFetcher:
    """Serve the note collection from the cache, or the backend on a miss.

    Concurrent misses for the same key share one backend call.
    """

    def __init__(
        self,
        client: BackendClient,
        cache: Optional[TTLCache] = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
    ):
        self.client = client
        self.cache = cache if cache is not None else TTLCache(default_ttl=ttl_seconds)
        self.ttl_seconds = ttl_seconds
        self._inflight: dict[str, asyncio.Future] = {}

    async def fetch_all(self, force_fresh: bool = False) -> list[Note]:
        """Return every note. Backend errors propagate unchanged and are not cached."""
        key = self.cache.make_key(FETCH_OPERATION)

        if not force_fresh:
            cached = self.cache.get(key)
            if cached is not None:
                metrics.counter(CACHE_HIT)
                logger.debug("notes_cache_hit", key=key, count=len(cached))
                return list(cached)

        metrics.counter(CACHE_MISS)
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_remote(key))
            task.add_done_callback(_retrieve_exception)
            self._inflight[key] = task
        else:
            logger.debug("notes_fetch_joined", key=key)
        return list(await asyncio.shield(task))

    async def _fetch_remote(self, key: str) -> list[Note]:
        try:
            with metrics.timer(FETCH):
                envelope = await self.client.call(FETCH_OPERATION, {})
        except Exception as e:
            metrics.counter(FETCH_ERROR)
            logger.error("notes_fetch_failed", error=str(e))
            raise
        finally:
            self._inflight.pop(key, None)

        notes = parse_notes(extract_notes(envelope))
        _log_response(envelope, len(notes))
        self.cache.put(key, notes, ttl=self.ttl_seconds)
        return notes
