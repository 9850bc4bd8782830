"""Result projection - derived stats and the ranked leaderboard table.

Everything here is a pure function of a ResultSet. Values keep full
precision; rounding for display happens in the renderer.
"""

from typing import Iterator, Tuple

import pandas as pd

from src.dashboard.models import DerivedStats, PlayerRow, ResultSet

LEADERBOARD_COLUMNS = ["Rank", "Player", "Nation", "Goals", "Assists", "xG", "Minutes"]


def project(result_set: ResultSet) -> DerivedStats:
    """Compute summary stats over every row in ``result_set``.

    Top scorer fields and the xG average are None when there are no players.
    """
    players = result_set.players
    if not players:
        return DerivedStats(
            top_scorer_name=None,
            top_scorer_goals=None,
            total_goals_top_n=0,
            average_expected_goals_top_n=None,
        )

    top = players[0]
    total_xg = sum(p.expected_goals for p in players)
    return DerivedStats(
        top_scorer_name=top.name,
        top_scorer_goals=top.goals,
        total_goals_top_n=sum(p.goals for p in players),
        average_expected_goals_top_n=total_xg / len(players),
    )


def ranked_rows(result_set: ResultSet) -> Iterator[Tuple[int, PlayerRow]]:
    """Yield (rank, row) in upstream order, rank starting at 1."""
    return enumerate(result_set.players, start=1)


def leaderboard_frame(result_set: ResultSet) -> pd.DataFrame:
    """Build the leaderboard table, one row per player in upstream order."""
    records = [
        {
            "Rank": rank,
            "Player": row.name,
            "Nation": row.nation,
            "Goals": row.goals,
            "Assists": row.assists,
            "xG": row.expected_goals,
            "Minutes": row.minutes_played,
        }
        for rank, row in ranked_rows(result_set)
    ]
    return pd.DataFrame.from_records(records, columns=LEADERBOARD_COLUMNS)
