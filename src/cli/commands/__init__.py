"""CLI command modules."""

from .notes import list_notes, parse_date

__all__ = ["list_notes", "parse_date"]
