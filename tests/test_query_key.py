"""Tests for query key derivation."""

import itertools

from src.dashboard.config import COMPETITIONS, SEASONS
from src.dashboard.models import QueryKey, Selection
from src.dashboard.query_key import decode_key, derive_key


def _all_selections():
    return [
        Selection(competition=c.name, season_end_year=s)
        for c, s in itertools.product(COMPETITIONS, SEASONS)
    ]


class TestDeriveKey:
    def test_equal_selections_give_equal_keys(self):
        a = Selection("La Liga", 2023)
        b = Selection("La Liga", 2023)
        assert derive_key(a) == derive_key(b)
        assert hash(derive_key(a)) == hash(derive_key(b))

    def test_deterministic(self):
        sel = Selection("Serie A", 2020)
        assert derive_key(sel) == derive_key(sel)

    def test_different_competition_different_key(self):
        assert derive_key(Selection("La Liga", 2023)) != derive_key(
            Selection("Bundesliga", 2023)
        )

    def test_different_season_different_key(self):
        assert derive_key(Selection("La Liga", 2023)) != derive_key(
            Selection("La Liga", 2022)
        )

    def test_injective_over_configured_selections(self):
        selections = _all_selections()
        keys = {derive_key(s) for s in selections}
        assert len(keys) == len(selections)

    def test_returns_query_key(self):
        assert isinstance(derive_key(Selection("Ligue 1", 2018)), QueryKey)


class TestDecodeKey:
    def test_recovers_request_parameters(self):
        for sel in _all_selections():
            assert decode_key(derive_key(sel)) == (sel.competition, sel.season_end_year)
