"""Shared test fixtures for the notes feed."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def epoch_ms(*args) -> int:
    """UTC wall-clock components -> epoch milliseconds."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


class FakeBackend:
    """Async stand-in for the backend client. Records every call."""

    def __init__(self, envelope=None, error: Exception | None = None):
        self.envelope = envelope
        self.error = error
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    async def call(self, operation: str, params: dict):
        self.calls.append((operation, params))
        if self.error is not None:
            raise self.error
        return self.envelope

    async def close(self):
        self.closed = True


class FakeClock:
    """Manually advanced clock in epoch seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def raw_notes():
    """Raw notes as the backend sends them, deliberately unsorted."""
    return [
        {
            "_id": "n-001",
            "user": "u-1",
            "text": "Replaced the intake filter on pump 3",
            "external_note": False,
            "created_on": epoch_ms(2024, 3, 15, 14, 32),
            "author_id": "a-1",
            "author_name": "Dana Reyes",
            "note_category": "Maintenance",
            "performed_on": epoch_ms(2024, 3, 14, 9, 0),
            "workorder_id": "WO-77",
        },
        {
            "_id": "n-002",
            "text": "Quarterly inspection signed off",
            "created_on": epoch_ms(2024, 6, 1, 8, 5),
            "author_id": "a-2",
            "author_name": "Sam Okafor",
            "note_category": "Inspection",
            "performed_on": None,
        },
        {
            "_id": "n-003",
            "text": "Vendor ACME confirmed parts shipment",
            "created_on": epoch_ms(2023, 3, 15, 7, 45),
            "author_id": "a-3",
            "author_name": "Lee Park",
            "note_category": None,
        },
        {
            "_id": "n-004",
            "text": "Checked pressure readings after restart",
            "created_on": epoch_ms(2024, 3, 15, 18, 0),
            "author_id": "a-1",
            "author_name": "Dana Reyes",
            "note_category": "Maintenance",
        },
    ]


@pytest.fixture
def backend(raw_notes):
    return FakeBackend(envelope={"call": {}, "data": {"data": raw_notes, "success": True}})
