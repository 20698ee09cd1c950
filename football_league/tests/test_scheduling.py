"""
Tests for double round-robin schedule generation.
Deterministic; each pair meets twice (home and away); at most one game per team per week.
"""
from __future__ import annotations

from collections import Counter

import pytest

from football_league.services.scheduling import (
    double_round_robin_pairings,
    generate_league_schedule,
    round_robin_pairings,
    season_weeks,
)


def _teams(n: int) -> list[str]:
    return [f"T{i}" for i in range(n)]


@pytest.mark.parametrize("n", [0, 1])
def test_fewer_than_two_teams_gives_empty_schedule(n):
    assert generate_league_schedule(_teams(n)) == []
    assert season_weeks(n) == 0


def test_two_teams():
    """2 teams: week 1 A-B, week 2 B-A."""
    fixtures = double_round_robin_pairings(["A", "B"])
    assert fixtures == [(1, "A", "B"), (2, "B", "A")]


def test_four_teams_first_leg_circle_order():
    """Slot 0 fixed; last slot moves to position 1 each round."""
    pairings = round_robin_pairings(["A", "B", "C", "D"])
    assert pairings == [
        (1, "A", "D"), (1, "B", "C"),
        (2, "A", "C"), (2, "D", "B"),
        (3, "A", "B"), (3, "C", "D"),
    ]


def test_four_teams_return_leg_mirrors_first_leg():
    fixtures = double_round_robin_pairings(["A", "B", "C", "D"])
    assert len(fixtures) == 12
    first, second = fixtures[:6], fixtures[6:]
    assert second == [(w + 3, a, h) for w, h, a in first]


def test_four_teams_counts():
    """4 teams: 12 fixtures across 6 weeks, 2 per week."""
    fixtures = generate_league_schedule(_teams(4))
    assert len(fixtures) == 12
    per_week = Counter(f["week_number"] for f in fixtures)
    assert sorted(per_week) == [1, 2, 3, 4, 5, 6]
    assert set(per_week.values()) == {2}


def test_five_teams_counts_and_idle_team():
    """5 teams: 20 fixtures across 10 weeks, 2 per week, one team idle each week."""
    teams = _teams(5)
    fixtures = generate_league_schedule(teams)
    assert len(fixtures) == 20
    per_week = Counter(f["week_number"] for f in fixtures)
    assert sorted(per_week) == list(range(1, 11))
    assert set(per_week.values()) == {2}
    for week in range(1, 11):
        playing = {
            tid
            for f in fixtures if f["week_number"] == week
            for tid in (f["home_team_id"], f["away_team_id"])
        }
        assert len(teams) - len(playing) == 1


def test_three_teams_each_team_idle_once_per_leg():
    pairings = round_robin_pairings(["A", "B", "C"])
    assert pairings == [(1, "B", "C"), (2, "A", "C"), (3, "A", "B")]


@pytest.mark.parametrize("n", range(2, 11))
def test_every_pair_meets_twice_once_at_home(n):
    teams = _teams(n)
    fixtures = double_round_robin_pairings(teams)
    assert len(fixtures) == n * (n - 1)
    ordered_pairs = Counter((h, a) for _, h, a in fixtures)
    assert all(count == 1 for count in ordered_pairs.values())
    assert len(ordered_pairs) == n * (n - 1)
    games = Counter(t for _, h, a in fixtures for t in (h, a))
    assert all(games[t] == 2 * (n - 1) for t in teams)


@pytest.mark.parametrize("n", range(2, 11))
def test_weeks_contiguous_and_one_match_per_team_per_week(n):
    fixtures = double_round_robin_pairings(_teams(n))
    weeks = [w for w, _, _ in fixtures]
    assert weeks == sorted(weeks)
    assert sorted(set(weeks)) == list(range(1, season_weeks(n) + 1))
    for week in set(weeks):
        playing = [t for w, h, a in fixtures if w == week for t in (h, a)]
        assert len(playing) == len(set(playing))


@pytest.mark.parametrize("n", range(2, 11))
def test_no_repeat_pairing_within_half_season(n):
    fixtures = double_round_robin_pairings(_teams(n))
    half = season_weeks(n) // 2
    first_half = [frozenset((h, a)) for w, h, a in fixtures if w <= half]
    assert len(first_half) == len(set(first_half)) == n * (n - 1) // 2


def test_season_weeks():
    assert season_weeks(2) == 2
    assert season_weeks(4) == 6
    assert season_weeks(5) == 10
    assert season_weeks(20) == 38


def test_schedule_is_deterministic():
    teams = _teams(7)
    assert generate_league_schedule(teams) == generate_league_schedule(list(teams))


def test_no_placeholder_in_output():
    teams = _teams(7)
    fixtures = generate_league_schedule(teams)
    ids = {f["home_team_id"] for f in fixtures} | {f["away_team_id"] for f in fixtures}
    assert ids == set(teams)
    for f in fixtures:
        assert f["home_team_id"] != f["away_team_id"]
