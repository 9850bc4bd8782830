"""Dashboard controller - wires selection changes through fetch and view state."""

import logging
from threading import RLock
from typing import Optional

from src.dashboard.fetch_orchestrator import FetchOrchestrator
from src.dashboard.models import CacheEntry, QueryKey, Selection
from src.dashboard.parameter_store import ParameterStore
from src.dashboard.query_key import derive_key
from src.dashboard.view_state import (
    Subscription,
    ViewState,
    ViewStateHandler,
    ViewStateMachine,
)

logger = logging.getLogger(__name__)


class DashboardController:
    """One dashboard session.

    Coordinates ParameterStore (selection), FetchOrchestrator (cache and
    requests) and ViewStateMachine (what to render). The active key is
    switched before the orchestrator is asked for it, so a completion for
    any other key never reaches the view.
    """

    def __init__(
        self,
        orchestrator: FetchOrchestrator,
        store: Optional[ParameterStore] = None,
        view: Optional[ViewStateMachine] = None,
    ):
        self.orchestrator = orchestrator
        self.store = store or ParameterStore()
        self.view = view or ViewStateMachine()
        self._lock = RLock()
        self._active_key: Optional[QueryKey] = None

        self.store.subscribe(self._on_selection_changed)
        self.orchestrator.subscribe(self._on_fetch_completed)

    def start(self) -> ViewState:
        """Resolve the initial selection."""
        return self._activate(self.store.selection, refetch_failure=False)

    @property
    def active_key(self) -> Optional[QueryKey]:
        return self._active_key

    @property
    def view_state(self) -> Optional[ViewState]:
        return self.view.current

    def select_competition(self, name: str) -> ViewState:
        """Raises InvalidParameter for an unknown competition."""
        self.store.set_competition(name)
        return self.view.current

    def select_season(self, year: int) -> ViewState:
        """Raises InvalidParameter for an unknown season."""
        self.store.set_season(year)
        return self.view.current

    def retry(self) -> ViewState:
        """Re-fetch the active key on explicit request."""
        with self._lock:
            key = self._require_active_key()
            entry = self.orchestrator.retry(key)
            return self._show(key, entry)

    def subscribe(self, handler: ViewStateHandler) -> Subscription:
        return self.view.subscribe(handler)

    def close(self) -> None:
        self.store.unsubscribe(self._on_selection_changed)
        self.orchestrator.unsubscribe(self._on_fetch_completed)
        self.orchestrator.shutdown()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_selection_changed(self, selection: Selection) -> None:
        self._activate(selection, refetch_failure=True)

    def _activate(self, selection: Selection, refetch_failure: bool) -> ViewState:
        key = derive_key(selection)
        with self._lock:
            self._active_key = key
            if refetch_failure:
                entry = self.orchestrator.on_key_changed(key)
            else:
                entry = self.orchestrator.resolve(key)
            return self._show(key, entry)

    def _on_fetch_completed(self, key: QueryKey, entry: CacheEntry) -> None:
        with self._lock:
            if key != self._active_key:
                logger.debug(
                    "Ignoring completion for inactive key %s %d",
                    key.competition,
                    key.season_end_year,
                )
                return
            self._show(key, entry)

    def _show(self, key: QueryKey, entry: CacheEntry) -> ViewState:
        # The orchestrator may have replaced the entry since it was returned
        latest = self.orchestrator.get(key) or entry
        return self.view.transition(key, latest)

    def _require_active_key(self) -> QueryKey:
        if self._active_key is None:
            raise RuntimeError("Dashboard has not been started")
        return self._active_key
