"""structlog setup for the notes CLI.

Everything goes to stderr so ``notes list`` output on stdout stays clean.
"""

import logging
import re
import sys

import structlog

# Event keys that carry raw backend payloads (see notes.fetcher)
PAYLOAD_KEYS = ("envelope", "record")
MAX_PAYLOAD_CHARS = 2000

_SECRETS = [
    (re.compile(r"(Bearer\s+)[\w.~+/=-]{8,}"), r"\1REDACTED"),
    (re.compile(r"((?:api[_-]?)?token['\"]?\s*[:=]\s*['\"]?)[\w.-]{8,}", re.I), r"\1REDACTED"),
]

# Chatty per-request loggers from the HTTP stack
_QUIET_LOGGERS = ("httpx", "httpcore")


def _cap_payload(value) -> str:
    text = value if isinstance(value, str) else repr(value)
    if len(text) <= MAX_PAYLOAD_CHARS:
        return text
    return f"{text[:MAX_PAYLOAD_CHARS]}... [{len(text)} chars]"


def _scrub(_, __, event_dict: dict) -> dict:
    """Truncate backend payloads, then mask bearer and API tokens."""
    for key in PAYLOAD_KEYS:
        if key in event_dict:
            event_dict[key] = _cap_payload(event_dict[key])
    for key, value in event_dict.items():
        if isinstance(value, str):
            for pattern, replacement in _SECRETS:
                value = pattern.sub(replacement, value)
            event_dict[key] = value
    return event_dict


def setup_logging(json_mode: bool = False, level: str = "INFO") -> None:
    """Send structlog and stdlib records through one stderr handler.

    Args:
        json_mode: JSON lines instead of the console renderer.
        level: Log level name; unknown names fall back to INFO.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _scrub,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING)
