"""Tests for the NotesManager facade."""

import pytest

from conftest import FakeBackend
from notes.cache import TTLCache
from notes.client import BackendCallError
from notes.formatting import NO_DATE
from notes.manager import NotesManager


@pytest.fixture
def manager(backend, clock):
    return NotesManager(backend, cache=TTLCache(clock=clock), timezone="UTC")


class TestListNotes:
    @pytest.mark.asyncio
    async def test_sorted_newest_first(self, manager):
        page = await manager.list_notes()
        assert [n.public_id for n in page.notes] == ["n-002", "n-004", "n-001", "n-003"]
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_paging(self, manager):
        first = await manager.list_notes(page_size=3)
        assert [n.public_id for n in first.notes] == ["n-002", "n-004", "n-001"]
        assert first.next_cursor == "n-001"

        second = await manager.list_notes(page_size=3, after=first.next_cursor)
        assert [n.public_id for n in second.notes] == ["n-003"]
        assert second.next_cursor is None

    @pytest.mark.asyncio
    async def test_search_then_page(self, manager):
        page = await manager.list_notes(page_size=1, search_query="3/15")
        assert [n.public_id for n in page.notes] == ["n-004"]
        assert page.next_cursor == "n-004"

        page = await manager.list_notes(page_size=5, after="n-004", search_query="3/15")
        assert [n.public_id for n in page.notes] == ["n-001", "n-003"]
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_blank_search_lists_everything(self, manager):
        page = await manager.list_notes(search_query="  ")
        assert len(page.notes) == 4

    @pytest.mark.asyncio
    async def test_uses_cache_between_calls(self, manager, backend):
        await manager.list_notes()
        await manager.list_notes(search_query="acme")
        assert len(backend.calls) == 1

    @pytest.mark.asyncio
    async def test_force_fresh(self, manager, backend):
        await manager.list_notes()
        await manager.list_notes(force_fresh=True)
        assert len(backend.calls) == 2

    @pytest.mark.asyncio
    async def test_failure_returns_empty_page(self):
        manager = NotesManager(FakeBackend(error=BackendCallError("down")), timezone="UTC")
        page = await manager.list_notes()
        assert page.notes == []
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_bad_page_size_returns_empty_page(self, manager):
        page = await manager.list_notes(page_size=0)
        assert page.notes == []

    @pytest.mark.asyncio
    async def test_unrecognized_envelope_is_empty(self):
        manager = NotesManager(FakeBackend(envelope={"status": "ok"}), timezone="UTC")
        page = await manager.list_notes()
        assert page.notes == []

    @pytest.mark.asyncio
    async def test_notes_with_numeric_tags_are_listed(self):
        raw = [
            {"_id": "a", "created_on": 3000},
            {"_id": "b", "created_on": 2000, "workorder_id": 12345},
            {"_id": "c", "created_on": 1000, "version": 2},
        ]
        manager = NotesManager(FakeBackend(envelope={"data": raw}), timezone="UTC")
        page = await manager.list_notes()
        assert [n.public_id for n in page.notes] == ["a", "b", "c"]


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_forces_refetch(self, manager, backend):
        await manager.list_notes()
        manager.refresh()
        assert len(backend.calls) == 1
        await manager.list_notes()
        assert len(backend.calls) == 2

    def test_refresh_does_not_fetch(self, manager, backend):
        manager.refresh()
        assert backend.calls == []


class TestFormatDate:
    def test_static_formatter(self):
        assert NotesManager.format_date(None).formatted_date == NO_DATE
        assert NotesManager.format_date(0, "UTC").date_only == "01-01-1970"
