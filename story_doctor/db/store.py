"""In-process ephemeral store for sessions, question sets and cached values.

Three independent namespaces:
- sessions: bounded by SESSION_CAPACITY, oldest-inserted entry evicted first
- question sets: bounded by QUESTION_SET_CAPACITY, same eviction
- generic TTL cache: absolute expiry per entry, lazily expired on read and
  periodically swept by ``run_cache_sweeper``

Nothing here survives a restart. A single ``Store`` is built at startup and
handed to request handlers; tests build a fresh one per test.
"""

import asyncio
import threading
from collections.abc import Callable
from time import monotonic
from typing import Any, Generic, TypeVar

from story_doctor.core.config import Settings
from story_doctor.core.logging import get_logger
from story_doctor.core.schemas_assessment import QuestionSet, Session

logger = get_logger(__name__)

DEFAULT_SESSION_CAPACITY = 1000
DEFAULT_QUESTION_SET_CAPACITY = 500
DEFAULT_CACHE_TTL_SECONDS = 30 * 60
DEFAULT_SWEEP_INTERVAL_SECONDS = 5 * 60

T = TypeVar("T", Session, QuestionSet)


class BoundedCollection(Generic[T]):
    """
    Id-keyed collection with a hard size cap.

    When an insert pushes the size over capacity, the entry that was
    inserted first is dropped (insertion order, not access order).
    Overwriting an existing id keeps its original position.
    """

    def __init__(self, name: str, capacity: int):
        """
        Args:
            name: Namespace name used in logs
            capacity: Max number of entries kept
        """
        self.name = name
        self.capacity = capacity
        self._items: dict[str, T] = {}
        self._lock = threading.Lock()

    def set(self, item: T) -> None:
        with self._lock:
            self._items[item.id] = item

            if len(self._items) > self.capacity:
                oldest_key = next(iter(self._items))
                del self._items[oldest_key]
                logger.debug(f"Evicted {self.name} entry {oldest_key} (capacity {self.capacity})")

    def get(self, item_id: str) -> T | None:
        return self._items.get(item_id)

    def update(self, item_id: str, **fields: Any) -> T | None:
        """
        Shallow-merge fields into an existing entry.

        Returns:
            Updated entry, or None if the id is unknown
        """
        with self._lock:
            existing = self._items.get(item_id)
            if existing is None:
                return None

            updated = existing.model_copy(update=fields)
            self._items[item_id] = updated
            return updated

    def delete(self, item_id: str) -> bool:
        with self._lock:
            return self._items.pop(item_id, None) is not None

    def get_all(self) -> list[T]:
        return list(self._items.values())

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class SessionStore(BoundedCollection[Session]):
    def __init__(self, capacity: int = DEFAULT_SESSION_CAPACITY):
        super().__init__("session", capacity)


class QuestionSetStore(BoundedCollection[QuestionSet]):
    def __init__(self, capacity: int = DEFAULT_QUESTION_SET_CAPACITY):
        super().__init__("question_set", capacity)

    def get_by_work_id(self, work_id: str) -> QuestionSet | None:
        """
        Most recently created question set for a work.

        Linear scan over all stored sets; bounded by capacity.
        """
        candidates = [qs for qs in self._items.values() if qs.work_id == work_id]
        if not candidates:
            return None
        return max(candidates, key=lambda qs: qs.created_at)


class TTLCache:
    """
    String-keyed cache where each entry carries an absolute expiry instant.

    ``get`` is authoritative for freshness: it never returns an expired
    value, whether or not a sweep has run since.
    """

    def __init__(
        self,
        default_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = monotonic,
    ):
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl)

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def cleanup(self) -> int:
        """
        Drop every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._lock:
            expired = [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]
            for k in expired:
                del self._entries[k]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)


class Store:
    """All ephemeral namespaces behind one handle."""

    def __init__(
        self,
        session_capacity: int = DEFAULT_SESSION_CAPACITY,
        question_set_capacity: int = DEFAULT_QUESTION_SET_CAPACITY,
        cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = monotonic,
    ):
        self.sessions = SessionStore(session_capacity)
        self.question_sets = QuestionSetStore(question_set_capacity)
        self.cache = TTLCache(cache_ttl_seconds, clock=clock)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        return cls(
            session_capacity=settings.SESSION_CAPACITY,
            question_set_capacity=settings.QUESTION_SET_CAPACITY,
            cache_ttl_seconds=settings.CACHE_TTL_SECONDS,
        )

    def clear(self) -> None:
        self.sessions.clear()
        self.question_sets.clear()
        self.cache.clear()


async def run_cache_sweeper(
    cache: TTLCache,
    interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
) -> None:
    """
    Periodically evict expired cache entries until cancelled.

    Args:
        cache: Cache to sweep
        interval_seconds: Delay between sweeps
    """
    logger.info(f"Cache sweeper started (interval={interval_seconds}s)")
    while True:
        await asyncio.sleep(interval_seconds)
        removed = cache.cleanup()
        if removed:
            logger.debug(f"Cache sweep removed {removed} expired entries")
