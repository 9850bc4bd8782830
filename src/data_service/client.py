"""GraphQL client for the top scorers data service.

Issues one POST per request and maps the response onto ``ResultSet``.
Every failure mode (connection, HTTP status, GraphQL errors, malformed
payload) is raised as ``DataServiceError`` with a readable message.
"""

import logging
from typing import Any, Dict, Optional

import requests

from src.dashboard.models import PlayerRow, ResultSet
from src.data_service.config import GRAPHQL_URL, REQUEST_TIMEOUT, TOP_SCORERS_QUERY

logger = logging.getLogger(__name__)


class DataServiceError(Exception):
    """Raised when the data service cannot produce a top scorers payload."""


def _player_from_dict(raw: Dict[str, Any]) -> PlayerRow:
    """Convert one ``topScorers`` element to a PlayerRow."""
    stats = raw.get("seasonStats") or {}
    return PlayerRow(
        name=raw["name"],
        nation=raw.get("nation") or "",
        goals=int(stats.get("goals") or 0),
        assists=int(stats.get("assists") or 0),
        minutes_played=int(stats.get("minutes") or 0),
        expected_goals=float(stats.get("xG") or 0.0),
    )


def parse_payload(data: Dict[str, Any]) -> ResultSet:
    """Build a ResultSet from the ``data`` member of a GraphQL response.

    Raises:
        DataServiceError: if required fields are missing or mistyped.
    """
    try:
        players = tuple(_player_from_dict(p) for p in data.get("topScorers") or [])
        return ResultSet(
            competitions_count=len(data.get("competitions") or []),
            seasons_count=len(data.get("seasons") or []),
            players=players,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DataServiceError(f"Malformed response from data service: {e}") from e


class TopScorersClient:
    """Fetches top scorers from the GraphQL endpoint."""

    def __init__(
        self,
        url: str = GRAPHQL_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_top_scorers(
        self, competition: str, season_end_year: int, limit: int
    ) -> ResultSet:
        """Query the service for one competition and season.

        Raises:
            DataServiceError: on any transport, HTTP or GraphQL failure.
        """
        body = {
            "query": TOP_SCORERS_QUERY,
            "variables": {
                "competition": competition,
                "seasonEndYear": season_end_year,
                "limit": limit,
            },
        }
        logger.debug("POST %s (%s %d)", self.url, competition, season_end_year)

        try:
            response = self.session.post(self.url, json=body, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise DataServiceError(str(e)) from e
        except ValueError as e:
            raise DataServiceError(f"Invalid JSON from data service: {e}") from e

        if not isinstance(payload, dict):
            raise DataServiceError("Malformed response from data service")

        errors = payload.get("errors")
        if errors:
            first = errors[0]
            message = first.get("message") if isinstance(first, dict) else str(first)
            raise DataServiceError(message or "Data service returned an error")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise DataServiceError("Data service response has no data")

        return parse_payload(data)

    def close(self) -> None:
        self.session.close()
