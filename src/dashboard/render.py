"""Plain-text rendering of dashboard view states."""

from typing import List

from src.dashboard.config import Competition
from src.dashboard.projection import leaderboard_frame
from src.dashboard.view_state import Empty, Error, Loading, Ready, ViewState
from src.data_service.config import GRAPHQL_URL


def format_season(season_end_year: int) -> str:
    """2024 -> '2023/2024'."""
    return f"{season_end_year - 1}/{season_end_year}"


def format_xg(value: float) -> str:
    return f"{value:.1f}"


def render(state: ViewState, competition: Competition, endpoint: str = GRAPHQL_URL) -> str:
    """Render a view state as terminal text."""
    season = state.key.season_end_year

    if isinstance(state, Loading):
        return f"Loading {state.key.competition} data..."

    if isinstance(state, Error):
        return "\n".join([
            f"Error: {state.message}",
            f"Make sure your GraphQL API is running on {endpoint}",
        ])

    title = f"Top Scorers - {competition.name} {season} ({format_season(season)})"

    if isinstance(state, Empty):
        return "\n".join([
            title,
            "",
            f"No data available for {state.key.competition} {season}",
            "Try selecting a different season or league",
        ])

    if isinstance(state, Ready):
        return _render_ready(state, title)

    raise TypeError(f"Unknown view state: {state!r}")


def _render_ready(state: Ready, title: str) -> str:
    result = state.result_set
    stats = state.stats

    table = leaderboard_frame(result)
    table_text = table.to_string(
        index=False,
        formatters={
            "xG": format_xg,
            "Minutes": lambda m: f"{m:,}",
        },
    )

    lines: List[str] = [
        f"Competitions: {result.competitions_count}    Seasons: {result.seasons_count}",
        "",
        title,
        table_text,
        "",
        f"Top Scorer: {stats.top_scorer_name} ({stats.top_scorer_goals} goals)",
        f"Total Goals (Top {len(result.players)}): {stats.total_goals_top_n}",
        f"Average xG (Top {len(result.players)}): "
        f"{format_xg(stats.average_expected_goals_top_n)}",
    ]
    return "\n".join(lines)
