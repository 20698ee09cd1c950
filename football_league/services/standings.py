"""
League table ordering.

Order: points desc, goal difference desc, goals scored desc. Python's sort is stable,
so teams tied on all three keep their input order (season insertion order when read
from the store). No head-to-head or disciplinary tie-breaks.
"""
from __future__ import annotations

from typing import Any, Iterable

from football_league.models import Team


def standings_key(team: Team) -> tuple[int, int, int]:
    return (-team.points, -team.goal_difference, -team.goals_for)


def rank_standings(teams: Iterable[Team]) -> list[Team]:
    """Return a new list of teams in table order. Input is not modified."""
    return sorted(teams, key=standings_key)


def standings_rows(teams: Iterable[Team]) -> list[dict[str, Any]]:
    """Ranked table rows with 1-based rank, for the API and the CLI."""
    rows: list[dict[str, Any]] = []
    for rank, team in enumerate(rank_standings(teams), start=1):
        row = team.to_dict()
        row["rank"] = rank
        rows.append(row)
    return rows
