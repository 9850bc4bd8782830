"""Parameter store - current selection, selector UI state and validated mutators."""

import logging
from typing import Callable, List, Optional, Sequence

from src.dashboard.config import (
    COMPETITIONS,
    DEFAULT_COMPETITION,
    DEFAULT_SEASON,
    SEASONS,
    Competition,
)
from src.dashboard.models import Selection

logger = logging.getLogger(__name__)

SelectionListener = Callable[[Selection], None]


class InvalidParameter(ValueError):
    """Raised when a competition or season is not in the configured set."""


class ParameterStore:
    """Holds the user's selection and the open/closed state of the selectors.

    Mutators validate against the configured competitions and seasons. An
    accepted mutation closes any open selector and then notifies listeners
    with the new selection, in that order.
    """

    def __init__(
        self,
        competitions: Sequence[Competition] = COMPETITIONS,
        seasons: Sequence[int] = SEASONS,
        initial: Optional[Selection] = None,
    ):
        if not competitions:
            raise ValueError("competitions cannot be empty")
        if not seasons:
            raise ValueError("seasons cannot be empty")
        self.competitions = tuple(competitions)
        self.seasons = tuple(seasons)

        if initial is None:
            initial = Selection(
                competition=DEFAULT_COMPETITION, season_end_year=DEFAULT_SEASON
            )
        self._validate_competition(initial.competition)
        self._validate_season(initial.season_end_year)
        self._selection = initial

        self.league_dropdown_open = False
        self.season_dropdown_open = False
        self._listeners: List[SelectionListener] = []

    @property
    def selection(self) -> Selection:
        return self._selection

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_competition(self, name: str) -> Selection:
        """Select a competition by display name or key.

        Raises:
            InvalidParameter: if the competition is not configured.
        """
        competition = self._validate_competition(name)
        return self._apply(
            Selection(
                competition=competition.name,
                season_end_year=self._selection.season_end_year,
            )
        )

    def set_season(self, year: int) -> Selection:
        """Select a season by end year.

        Raises:
            InvalidParameter: if the season is not configured.
        """
        self._validate_season(year)
        return self._apply(
            Selection(
                competition=self._selection.competition,
                season_end_year=year,
            )
        )

    def toggle_league_dropdown(self) -> bool:
        self.league_dropdown_open = not self.league_dropdown_open
        return self.league_dropdown_open

    def toggle_season_dropdown(self) -> bool:
        self.season_dropdown_open = not self.season_dropdown_open
        return self.season_dropdown_open

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: SelectionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_competition(self, name_or_key: str) -> Optional[Competition]:
        """Look up a configured competition by display name or key."""
        for competition in self.competitions:
            if name_or_key in (competition.name, competition.key):
                return competition
        return None

    def current_competition(self) -> Competition:
        """Config record for the selected competition (first one if unknown)."""
        return self.find_competition(self._selection.competition) or self.competitions[0]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply(self, selection: Selection) -> Selection:
        # Selector state closes before anyone re-derives from the selection
        self.league_dropdown_open = False
        self.season_dropdown_open = False
        self._selection = selection
        logger.debug(
            "Selection changed: %s %d",
            selection.competition,
            selection.season_end_year,
        )
        for listener in list(self._listeners):
            listener(selection)
        return selection

    def _validate_competition(self, name: str) -> Competition:
        competition = self.find_competition(name)
        if competition is None:
            logger.warning("Rejected unknown competition: %r", name)
            known = ", ".join(c.name for c in self.competitions)
            raise InvalidParameter(
                f"Unknown competition {name!r} (expected one of: {known})"
            )
        return competition

    def _validate_season(self, year) -> None:
        if isinstance(year, bool) or not isinstance(year, int) or year not in self.seasons:
            logger.warning("Rejected unknown season: %r", year)
            known = ", ".join(str(s) for s in self.seasons)
            raise InvalidParameter(
                f"Unknown season {year!r} (expected one of: {known})"
            )
