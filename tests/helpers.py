"""Factories and test doubles shared across the dashboard test suite."""

import threading
import time
from concurrent.futures import Executor, Future
from typing import Dict, List, Tuple

from src.dashboard.models import PlayerRow, ResultSet


# ------------------------------------------------------------------
# Factories
# ------------------------------------------------------------------

def make_player(name="Player", goals=10, expected_goals=8.0, **overrides) -> PlayerRow:
    defaults = {
        "name": name,
        "nation": "ENG",
        "goals": goals,
        "assists": 3,
        "minutes_played": 2500,
        "expected_goals": expected_goals,
    }
    defaults.update(overrides)
    return PlayerRow(**defaults)


def make_result_set(players=None, competitions_count=5, seasons_count=7) -> ResultSet:
    if players is None:
        players = [
            make_player("Erling Haaland", goals=27, expected_goals=29.2),
            make_player("Cole Palmer", goals=22, expected_goals=17.8),
            make_player("Alexander Isak", goals=21, expected_goals=20.3),
        ]
    return ResultSet(
        competitions_count=competitions_count,
        seasons_count=seasons_count,
        players=tuple(players),
    )


def wait_until(predicate, timeout=5.0, interval=0.01) -> bool:
    """Poll ``predicate`` until it is true or ``timeout`` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


# ------------------------------------------------------------------
# Executors
# ------------------------------------------------------------------

class DeferredExecutor(Executor):
    """Executor that queues work until the test decides to run it."""

    def __init__(self):
        self.queued: List[Tuple[Future, object, tuple, dict]] = []

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        self.queued.append((future, fn, args, kwargs))
        return future

    def run_next(self):
        self._run(self.queued.pop(0))

    def run_all(self):
        while self.queued:
            self.run_next()

    def run_matching(self, competition, season_end_year):
        """Run the first queued call made for this competition and season."""
        for i, (_, _, args, _) in enumerate(self.queued):
            if args[:2] == (competition, season_end_year):
                self._run(self.queued.pop(i))
                return
        raise AssertionError(f"No queued fetch for {competition} {season_end_year}")

    @staticmethod
    def _run(item):
        future, fn, args, kwargs = item
        future.set_running_or_notify_cancel()
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)


class InlineExecutor(Executor):
    """Executor that runs each call before ``submit`` returns."""

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        future.set_running_or_notify_cancel()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


class RejectingExecutor(DeferredExecutor):
    """Deferred executor that refuses new work while ``rejecting`` is set."""

    def __init__(self, rejecting=True):
        super().__init__()
        self.rejecting = rejecting

    def submit(self, fn, /, *args, **kwargs):
        if self.rejecting:
            raise RuntimeError("cannot schedule new futures after shutdown")
        return super().submit(fn, *args, **kwargs)


# ------------------------------------------------------------------
# Data service doubles
# ------------------------------------------------------------------

class FakeScorersService:
    """Data service double returning canned payloads per (competition, season).

    A canned value that is an exception instance is raised instead of
    returned. Unknown selections return ``default``. ``delay`` seconds are
    slept before answering, and a cleared ``gate`` blocks every call until
    it is set.
    """

    def __init__(
        self,
        responses: Dict[Tuple[str, int], object] = None,
        default=None,
        delay: float = 0.0,
        gate: threading.Event = None,
    ):
        self.responses = dict(responses or {})
        self.default = default if default is not None else make_result_set()
        self.delay = delay
        self.gate = gate
        self.calls: List[Tuple[str, int, int]] = []
        self.closed = False
        self._lock = threading.Lock()

    def fetch_top_scorers(self, competition, season_end_year, limit):
        with self._lock:
            self.calls.append((competition, season_end_year, limit))
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.delay:
            time.sleep(self.delay)
        response = self.responses.get((competition, season_end_year), self.default)
        if isinstance(response, Exception):
            raise response
        return response

    def calls_for(self, competition, season_end_year):
        return [c for c in self.calls if c[:2] == (competition, season_end_year)]

    def close(self):
        self.closed = True
