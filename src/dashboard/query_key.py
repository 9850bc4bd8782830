"""Map a Selection to the key that addresses its cache entry and request."""

from typing import Tuple

from src.dashboard.models import QueryKey, Selection


def derive_key(selection: Selection) -> QueryKey:
    """Build the query key for a selection.

    Every field of the selection goes into the key, so two selections share
    a key only when they are equal.
    """
    return QueryKey(
        competition=selection.competition,
        season_end_year=selection.season_end_year,
    )


def decode_key(key: QueryKey) -> Tuple[str, int]:
    """Recover the upstream request parameters (competition, season)."""
    return key.competition, key.season_end_year
