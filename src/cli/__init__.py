"""Command-line interface for the notes feed."""
