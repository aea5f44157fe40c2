import logging
import time

from jaegerdev.models import CacheEntry

log = logging.getLogger("jaegerdev.cache")

DEFAULT_TTL_MS = 30_000


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class ConfigCache:
    """Single-slot cache for the last backend fetch.

    Failed fetches are cached too (as an all-None BackendConfig), so a dead
    backend is asked at most once per TTL window instead of on every page load.

    Every fetch takes a generation number when it starts. A result is only
    stored if nothing newer has been stored in the meantime, so a slow fetch
    that finishes late cannot replace a fresher entry.
    """

    def __init__(self, ttl_ms: float = DEFAULT_TTL_MS, clock=None):
        self.ttl_ms = ttl_ms
        self._clock = clock or _monotonic_ms
        self._entry: CacheEntry | None = None
        self._generation = 0

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    def age_ms(self, now=None) -> float | None:
        if self._entry is None:
            return None
        now = self._clock() if now is None else now
        return now - self._entry.fetched_at_ms

    def invalidate(self):
        self._entry = None

    async def get(self, fetch_fn, now=None, ttl_ms=None):
        now = self._clock() if now is None else now
        ttl_ms = self.ttl_ms if ttl_ms is None else ttl_ms

        entry = self._entry
        if entry is not None and now - entry.fetched_at_ms <= ttl_ms:
            return entry.value

        self._generation += 1
        generation = self._generation
        value = await fetch_fn()

        current = self._entry
        if current is None or current.generation < generation:
            self._entry = CacheEntry(value=value, fetched_at_ms=now, generation=generation)
        else:
            log.debug(f"Dropping fetch #{generation}, cache already holds #{current.generation}")
        return value
