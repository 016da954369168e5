"""TTL-bound contribution cache over a key/value store."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import ValidationError

from contribgrid.errors import CacheError, CacheReadError, CacheWriteError
from contribgrid.io.store import KeyValueStore
from contribgrid.models import CacheEntry, ContributionsResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

TTL_MS = 24 * 60 * 60 * 1000


def cache_key(entity: str, year: int) -> str:
    """Return the storage key for an (entity, year) pair."""
    return f"contributions_{entity}_{year}"


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheOutcome(Generic[T]):
    """Result of a cache operation.

    ``error`` is set when the backing store failed; ``value`` is ``None`` on a
    miss or a failed read.
    """

    value: T | None = None
    error: CacheError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ContributionCache:
    """Read-through cache entries keyed by ``contributions_<entity>_<year>``.

    ``read``/``write`` report storage faults in a :class:`CacheOutcome`.
    ``get``/``set`` are the best-effort variants used by the fetcher: they
    log and discard the failure case, so caching never affects correctness.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        ttl_ms: int = TTL_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.store = store
        self.ttl_ms = ttl_ms
        self._clock = clock

    def read(self, entity: str, year: int) -> CacheOutcome[ContributionsResponse]:
        key = cache_key(entity, year)
        try:
            raw = self.store.get(key)
        except Exception as exc:  # noqa: BLE001 - any backend fault is a miss
            return CacheOutcome(error=CacheReadError(key, str(exc)))

        if raw is None:
            return CacheOutcome()

        try:
            entry = CacheEntry.model_validate_json(raw)
        except ValidationError as exc:
            return CacheOutcome(error=CacheReadError(key, f"unreadable entry ({exc.error_count()} errors)"))

        age = self._clock() - entry.timestamp
        if age >= self.ttl_ms:
            logger.debug("Cache entry %s expired (age %sms)", key, age)
            try:
                self.store.delete(key)
            except Exception as exc:  # noqa: BLE001 - stale entry is still a miss
                return CacheOutcome(error=CacheReadError(key, f"delete failed: {exc}"))
            return CacheOutcome()

        return CacheOutcome(value=entry.data)

    def write(self, entity: str, year: int, response: ContributionsResponse) -> CacheOutcome[None]:
        key = cache_key(entity, year)
        entry = CacheEntry(data=response, timestamp=self._clock())
        try:
            self.store.set(key, entry.model_dump_json().encode("utf-8"))
        except Exception as exc:  # noqa: BLE001 - quota or permission faults
            return CacheOutcome(error=CacheWriteError(key, str(exc)))
        return CacheOutcome()

    def get(self, entity: str, year: int) -> ContributionsResponse | None:
        outcome = self.read(entity, year)
        if outcome.error is not None:
            logger.warning("Ignoring cache read failure: %s", outcome.error)
            return None
        if outcome.value is None:
            logger.debug("Cache miss for %s", cache_key(entity, year))
        else:
            logger.debug("Cache hit for %s", cache_key(entity, year))
        return outcome.value

    def set(self, entity: str, year: int, response: ContributionsResponse) -> None:
        outcome = self.write(entity, year, response)
        if outcome.error is not None:
            logger.warning("Ignoring cache write failure: %s", outcome.error)


__all__ = ["CacheOutcome", "ContributionCache", "TTL_MS", "cache_key", "now_ms"]
