"""Fetch orchestrator - read-through cache with one in-flight request per key."""

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from functools import partial
from threading import RLock
from typing import Callable, Dict, List, Optional, Protocol

from src.dashboard.config import CACHE_MAX_AGE, FETCH_WORKERS, TOP_SCORERS_LIMIT
from src.dashboard.models import CacheEntry, ErrorInfo, FetchStatus, QueryKey, ResultSet
from src.dashboard.query_key import decode_key

logger = logging.getLogger(__name__)

CompletionListener = Callable[[QueryKey, CacheEntry], None]


class TopScorersService(Protocol):
    def fetch_top_scorers(
        self, competition: str, season_end_year: int, limit: int
    ) -> ResultSet: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FetchOrchestrator:
    """Owns the key -> CacheEntry map for one dashboard session.

    * A fresh successful entry is served without calling the service.
    * A pending entry is shared: no second request is issued for its key.
    * Otherwise a PENDING entry is stored first and one fetch is submitted
      to the executor. Its completion replaces the entry with SUCCESS or
      FAILURE and is announced to every completion listener.

    Failures are never retried automatically; ``on_key_changed`` and
    ``retry`` are the only paths that re-fetch a failed key.
    """

    def __init__(
        self,
        service: TopScorersService,
        executor: Optional[Executor] = None,
        limit: int = TOP_SCORERS_LIMIT,
        max_age: Optional[timedelta] = CACHE_MAX_AGE,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        self.service = service
        self.limit = limit
        self.max_age = max_age
        self._clock = clock
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=FETCH_WORKERS, thread_name_prefix="scorers-fetch"
        )
        self._lock = RLock()
        self._entries: Dict[QueryKey, CacheEntry] = {}
        self._listeners: List[CompletionListener] = []
        self.requests_issued = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, key: QueryKey) -> CacheEntry:
        """Return the entry for ``key``, fetching only on a miss or stale hit.

        A FAILURE entry is returned as-is.
        """
        return self._resolve(key, refetch_failure=False)

    def on_key_changed(self, key: QueryKey) -> CacheEntry:
        """Entry point for a selection change; re-fetches a failed key."""
        return self._resolve(key, refetch_failure=True)

    def retry(self, key: QueryKey) -> CacheEntry:
        """Force a new request for ``key`` unless one is already in flight."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_pending:
                return entry
            pending = self._start_pending(key)
        return self._dispatch(key, pending)

    def get(self, key: QueryKey) -> Optional[CacheEntry]:
        """Peek at the entry for ``key`` without triggering a fetch."""
        with self._lock:
            return self._entries.get(key)

    def invalidate(self, key: QueryKey) -> bool:
        """Evict the entry for ``key``. Returns True if one was removed.

        A request still in flight for the key completes into nothing.
        """
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug("Invalidated %s %d", key.competition, key.season_end_year)
        return removed

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def subscribe(self, listener: CompletionListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: CompletionListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def shutdown(self) -> None:
        """Stop the executor if this orchestrator created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            by_status = {status.value: 0 for status in FetchStatus}
            for entry in self._entries.values():
                by_status[entry.status.value] += 1
        return {
            "entries": sum(by_status.values()),
            "requests_issued": self.requests_issued,
            **by_status,
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, key: QueryKey, refetch_failure: bool) -> CacheEntry:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                if entry.is_pending:
                    return entry
                if entry.status is FetchStatus.FAILURE and not refetch_failure:
                    return entry
                if entry.is_fresh(self._clock(), self.max_age):
                    logger.debug(
                        "Cache hit: %s %d", key.competition, key.season_end_year
                    )
                    return entry
            pending = self._start_pending(key)
        return self._dispatch(key, pending)

    def _start_pending(self, key: QueryKey) -> CacheEntry:
        # Caller holds the lock
        pending = CacheEntry.pending(key, requested_at=self._clock())
        self._entries[key] = pending
        self.requests_issued += 1
        return pending

    def _dispatch(self, key: QueryKey, pending: CacheEntry) -> CacheEntry:
        competition, season = decode_key(key)
        logger.info("Fetching top scorers: %s %d", competition, season)
        try:
            future = self._executor.submit(
                self.service.fetch_top_scorers, competition, season, self.limit
            )
        except Exception:
            # Nothing is in flight, so the key must not stay pending
            with self._lock:
                if self._entries.get(key) is pending:
                    del self._entries[key]
                self.requests_issued -= 1
            logger.exception("Could not dispatch fetch for %s %d", competition, season)
            raise
        future.add_done_callback(partial(self._complete, key, pending))
        # An inline executor may already have completed the entry
        with self._lock:
            return self._entries.get(key, pending)

    def _complete(self, key: QueryKey, pending: CacheEntry, future: Future) -> None:
        now = self._clock()
        exc = future.exception()
        if exc is None:
            entry = pending.succeeded(future.result(), fetched_at=now)
            logger.info(
                "Fetched %d scorers for %s %d",
                len(entry.data.players),
                key.competition,
                key.season_end_year,
            )
        else:
            entry = pending.failed(ErrorInfo.from_exception(exc), fetched_at=now)
            logger.warning(
                "Fetch failed for %s %d: %s",
                key.competition,
                key.season_end_year,
                exc,
            )

        with self._lock:
            if self._entries.get(key) is not pending:
                logger.debug(
                    "Discarding result for evicted entry %s %d",
                    key.competition,
                    key.season_end_year,
                )
                return
            self._entries[key] = entry
            listeners = list(self._listeners)

        for listener in listeners:
            listener(key, entry)
