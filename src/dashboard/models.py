"""Dashboard data models - selections, query keys, result sets and cache entries."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class Selection:
    """The competition and season the user is looking at."""

    competition: str
    season_end_year: int


@dataclass(frozen=True)
class QueryKey:
    """Cache and request address for a single selection."""

    competition: str
    season_end_year: int


@dataclass(frozen=True)
class PlayerRow:
    """One scorer in the leaderboard."""

    name: str
    nation: str
    goals: int
    assists: int
    minutes_played: int
    expected_goals: float


@dataclass(frozen=True)
class ResultSet:
    """Payload returned by the data service for one query key.

    ``players`` arrives rank-ordered and is never re-sorted.
    """

    competitions_count: int
    seasons_count: int
    players: Tuple[PlayerRow, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return len(self.players) == 0


@dataclass(frozen=True)
class DerivedStats:
    """Summary figures computed from a ResultSet."""

    top_scorer_name: Optional[str]
    top_scorer_goals: Optional[int]
    total_goals_top_n: int
    average_expected_goals_top_n: Optional[float]


@dataclass(frozen=True)
class ErrorInfo:
    """Upstream failure details."""

    message: str
    error_type: str = "DataServiceError"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorInfo":
        return cls(message=str(exc), error_type=type(exc).__name__)


class FetchStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class CacheEntry:
    """State of the request for one query key."""

    key: QueryKey
    status: FetchStatus
    requested_at: datetime
    data: Optional[ResultSet] = None
    error: Optional[ErrorInfo] = None
    fetched_at: Optional[datetime] = None

    @classmethod
    def pending(cls, key: QueryKey, requested_at: datetime) -> "CacheEntry":
        return cls(key=key, status=FetchStatus.PENDING, requested_at=requested_at)

    def succeeded(self, data: ResultSet, fetched_at: datetime) -> "CacheEntry":
        return CacheEntry(
            key=self.key,
            status=FetchStatus.SUCCESS,
            requested_at=self.requested_at,
            data=data,
            fetched_at=fetched_at,
        )

    def failed(self, error: ErrorInfo, fetched_at: datetime) -> "CacheEntry":
        return CacheEntry(
            key=self.key,
            status=FetchStatus.FAILURE,
            requested_at=self.requested_at,
            error=error,
            fetched_at=fetched_at,
        )

    @property
    def is_pending(self) -> bool:
        return self.status is FetchStatus.PENDING

    def is_fresh(self, now: datetime, max_age=None) -> bool:
        """Whether a successful entry can still be served without a fetch."""
        if self.status is not FetchStatus.SUCCESS:
            return False
        if max_age is None or self.fetched_at is None:
            return True
        return now - self.fetched_at < max_age
