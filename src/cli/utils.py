"""Shared CLI utilities."""

import sys

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def get_components(config):
    """Build the backend client and notes manager from config.

    Args:
        config: NotesConfig model

    Exits with status 1 when no backend URL is configured.
    """
    from notes import HttpBackendClient, NotesManager

    backend = config.backend
    if not backend.base_url:
        console.print(
            "[red]Config error:[/] backend.base_url is not set.\n"
            "Add it to notes.yaml or ~/.notes/config.yaml."
        )
        sys.exit(1)

    client = HttpBackendClient(
        backend.base_url,
        api_token=backend.api_token,
        timeout=backend.timeout,
    )
    manager = NotesManager(
        client,
        timezone=config.display.timezone,
        ttl_seconds=config.cache.ttl_seconds,
    )
    return {
        "config": config,
        "client": client,
        "manager": manager,
    }
