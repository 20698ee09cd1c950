"""
Tests for standings order: points, goal difference, goals scored; stable for full ties.
"""
from __future__ import annotations

from football_league.models import Team
from football_league.services.standings import rank_standings, standings_rows


def _team(name: str, points: int, goals_for: int, goals_against: int, position: int = 0) -> Team:
    return Team(
        id=name, season_id="s1", name=name, strength=80, position=position,
        points=points, goals_for=goals_for, goals_against=goals_against,
    )


def test_goal_difference_breaks_points_tie():
    teams = [
        _team("A", 10, 12, 10),  # diff 2
        _team("B", 10, 15, 10),  # diff 5
        _team("C", 7, 8, 7),     # diff 1
    ]
    assert [t.name for t in rank_standings(teams)] == ["B", "A", "C"]


def test_points_dominate_goal_difference():
    teams = [_team("A", 6, 20, 0), _team("B", 9, 3, 3)]
    assert [t.name for t in rank_standings(teams)] == ["B", "A"]


def test_goals_for_breaks_goal_difference_tie():
    teams = [_team("A", 4, 5, 3), _team("B", 4, 8, 6)]
    assert [t.name for t in rank_standings(teams)] == ["B", "A"]


def test_full_ties_keep_input_order():
    teams = [_team(n, 3, 4, 4, position=i) for i, n in enumerate(["D", "A", "C", "B"])]
    assert [t.name for t in rank_standings(teams)] == ["D", "A", "C", "B"]
    mixed = [_team("X", 1, 0, 0), teams[0], _team("Y", 1, 0, 0), teams[1]]
    assert [t.name for t in rank_standings(mixed)] == ["D", "A", "X", "Y"]


def test_input_not_modified():
    teams = [_team("A", 1, 1, 1), _team("B", 3, 1, 0)]
    before = list(teams)
    ranked = rank_standings(teams)
    assert teams == before
    assert ranked is not teams


def test_empty():
    assert rank_standings([]) == []
    assert standings_rows([]) == []


def test_standings_rows_have_rank():
    rows = standings_rows([_team("A", 1, 1, 1), _team("B", 3, 1, 0)])
    assert [(r["rank"], r["name"]) for r in rows] == [(1, "B"), (2, "A")]
    assert rows[0]["goal_difference"] == 1
