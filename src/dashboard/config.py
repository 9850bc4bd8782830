from dataclasses import dataclass
from datetime import timedelta
from typing import Optional


@dataclass(frozen=True)
class Competition:
    """A selectable league."""

    key: str
    name: str
    country: str


# Selectable leagues, in display order
COMPETITIONS = (
    Competition(key="premier-league", name="Premier League", country="England"),
    Competition(key="la-liga", name="La Liga", country="Spain"),
    Competition(key="bundesliga", name="Bundesliga", country="Germany"),
    Competition(key="serie-a", name="Serie A", country="Italy"),
    Competition(key="ligue-1", name="Ligue 1", country="France"),
)

# Selectable seasons (end year), most recent first
SEASONS = (2024, 2023, 2022, 2021, 2020, 2019, 2018)

DEFAULT_COMPETITION = "Premier League"
DEFAULT_SEASON = SEASONS[0]

# Number of scorers requested from the data service
TOP_SCORERS_LIMIT = 10

# How long a successful fetch stays fresh. None keeps entries for the
# whole session; a timedelta re-fetches older entries on the next resolve.
CACHE_MAX_AGE: Optional[timedelta] = None

# Worker threads for upstream fetches
FETCH_WORKERS = 4
