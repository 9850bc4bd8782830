"""Show the top scorers leaderboard in the terminal.

Usage:
    python -m src.dashboard.run_dashboard [competition] [season]

Examples:
    python -m src.dashboard.run_dashboard
    python -m src.dashboard.run_dashboard la-liga 2023
    python -m src.dashboard.run_dashboard "Serie A" 2021
"""

import logging
import sys
import threading
from typing import List, Optional

from src.dashboard.dashboard_controller import DashboardController
from src.dashboard.fetch_orchestrator import FetchOrchestrator
from src.dashboard.parameter_store import InvalidParameter, ParameterStore
from src.dashboard.render import render
from src.dashboard.view_state import Error, Loading, ViewState
from src.data_service.client import TopScorersClient
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def run_dashboard(
    competition: Optional[str] = None,
    season: Optional[int] = None,
    service=None,
    timeout: float = 30.0,
) -> ViewState:
    """Load one leaderboard and return the settled view state.

    Prints each state as it is published.

    Raises:
        InvalidParameter: if the competition or season is not configured.
        TimeoutError: if the data service does not answer within ``timeout``.
    """
    store = ParameterStore()
    # Apply the requested selection before the controller starts listening
    if competition is not None:
        store.set_competition(competition)
    if season is not None:
        store.set_season(season)

    owned_client = TopScorersClient() if service is None else None
    controller = DashboardController(FetchOrchestrator(service or owned_client), store)
    settled = threading.Event()

    def on_state(state: ViewState) -> None:
        print(render(state, store.current_competition()))
        if not isinstance(state, Loading):
            settled.set()

    try:
        controller.subscribe(on_state)
        state = controller.start()
        if not isinstance(state, Loading):
            return state

        if not settled.wait(timeout):
            raise TimeoutError(f"No response from data service after {timeout:.0f}s")
        return controller.view_state
    finally:
        controller.close()
        if owned_client is not None:
            owned_client.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the dashboard from command-line arguments and return an exit code."""
    args = sys.argv[1:] if argv is None else argv

    competition = args[0] if len(args) > 0 else None
    try:
        season = int(args[1]) if len(args) > 1 else None
    except ValueError:
        print(f"Invalid selection: season must be a year, got {args[1]!r}", file=sys.stderr)
        return 2

    try:
        state = run_dashboard(competition, season)
    except InvalidParameter as e:
        print(f"Invalid selection: {e}", file=sys.stderr)
        return 2
    except Exception:
        logger.exception("Dashboard failed")
        return 1

    return 1 if isinstance(state, Error) else 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
