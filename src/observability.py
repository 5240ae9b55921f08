"""Observability: cache and fetch metrics for the notes feed."""

import time
from collections import Counter
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Any, Optional

import structlog

logger = structlog.get_logger().bind(source="observability")

CACHE_HIT = "notes.cache_hit"
CACHE_MISS = "notes.cache_miss"
FETCH = "notes.fetch"
FETCH_ERROR = "notes.fetch_error"


@dataclass
class TimerStats:
    count: int = 0
    total: float = 0.0
    max: float = 0.0

    def add(self, seconds: float):
        self.count += 1
        self.total += seconds
        self.max = max(self.max, seconds)


class Metrics:
    """Named counters and running timer totals for one process."""

    def __init__(self):
        self._counters: Counter = Counter()
        self._timers: dict[str, TimerStats] = {}

    def counter(self, name: str, value: int = 1):
        self._counters[name] += value

    def count(self, name: str) -> int:
        return self._counters[name]

    @contextmanager
    def timer(self, name: str):
        """Add the wall time of the enclosed block to name, even if it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timing(name).add(time.perf_counter() - start)

    def timing(self, name: str) -> TimerStats:
        return self._timers.setdefault(name, TimerStats())

    def hit_ratio(self) -> Optional[float]:
        """Share of fetch_all calls served from the cache, None before any call."""
        hits, misses = self.count(CACHE_HIT), self.count(CACHE_MISS)
        if hits + misses == 0:
            return None
        return hits / (hits + misses)

    def summary(self) -> dict[str, Any]:
        return {
            "counters": dict(self._counters),
            "timers": {name: asdict(stats) for name, stats in self._timers.items()},
        }

    def reset(self):
        self._counters.clear()
        self._timers.clear()


# Module-level singleton
metrics = Metrics()


def log_run_summary() -> dict[str, Any]:
    """Log how the cache and backend fared during this run. Returns what was logged."""
    fetches = metrics.timing(FETCH)
    ratio = metrics.hit_ratio()
    report = {
        "cache_hits": metrics.count(CACHE_HIT),
        "cache_misses": metrics.count(CACHE_MISS),
        "hit_ratio": round(ratio, 3) if ratio is not None else None,
        "fetches": fetches.count,
        "fetch_errors": metrics.count(FETCH_ERROR),
        "fetch_seconds": round(fetches.total, 3),
        "slowest_fetch_seconds": round(fetches.max, 3),
    }
    logger.debug("run_summary", **report)
    return report
