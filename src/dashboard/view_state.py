"""View state machine - maps the active cache entry to one renderable state."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from src.dashboard.models import (
    CacheEntry,
    DerivedStats,
    FetchStatus,
    QueryKey,
    ResultSet,
)
from src.dashboard.projection import project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Loading:
    key: QueryKey


@dataclass(frozen=True)
class Error:
    key: QueryKey
    message: str


@dataclass(frozen=True)
class Empty:
    key: QueryKey


@dataclass(frozen=True)
class Ready:
    key: QueryKey
    result_set: ResultSet
    stats: DerivedStats


ViewState = Union[Loading, Error, Empty, Ready]
ViewStateHandler = Callable[[ViewState], None]


def to_view_state(key: QueryKey, entry: Optional[CacheEntry]) -> ViewState:
    """Map the cache entry for the active key to a view state.

    A missing entry counts as loading: the fetch has not landed yet.
    """
    if entry is None or entry.status is FetchStatus.PENDING:
        return Loading(key)
    if entry.status is FetchStatus.FAILURE:
        message = entry.error.message if entry.error else "Unknown error"
        return Error(key, message)
    if entry.data is None or entry.data.is_empty:
        return Empty(key)
    return Ready(key, entry.data, project(entry.data))


@dataclass(eq=False)
class Subscription:
    handler: ViewStateHandler
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class ViewStateMachine:
    """Holds the current view state and publishes changes to subscribers.

    Handlers run synchronously in subscription order. A handler that raises
    is logged and the remaining handlers still run.
    """

    def __init__(self, initial: Optional[ViewState] = None):
        self._current: Optional[ViewState] = initial
        self._subs: List[Subscription] = []

    @property
    def current(self) -> Optional[ViewState]:
        return self._current

    def transition(self, key: QueryKey, entry: Optional[CacheEntry]) -> ViewState:
        state = to_view_state(key, entry)
        if state != self._current:
            logger.debug(
                "View state -> %s (%s %d)",
                type(state).__name__,
                key.competition,
                key.season_end_year,
            )
            self._current = state
            self.publish(state)
        return state

    def publish(self, state: ViewState) -> None:
        for sub in list(self._subs):
            if not sub.active:
                continue
            try:
                sub.handler(state)
            except Exception:
                logger.exception("View state handler %r failed", sub.handler)

    def subscribe(self, handler: ViewStateHandler) -> Subscription:
        sub = Subscription(handler=handler)
        self._subs.append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        if sub in self._subs:
            self._subs.remove(sub)
        sub.active = False
