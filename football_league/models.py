"""
Data models for the league simulator.
Domain objects only: no persistence or API logic.

Season-centric: a season owns its teams and its fixture calendar. Structure is
fixed at creation; only team stats, fixture outcomes and the week cursor move,
and only forward. Models are frozen: every change produces a new instance.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any


# ---------- Season status ----------
class SeasonStatus(str, Enum):
    """Season lifecycle: active → completed."""
    ACTIVE = "active"        # Weeks left to play
    COMPLETED = "completed"  # Cursor reached the last scheduled week


POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1


class FixtureAlreadyPlayedError(ValueError):
    """A fixture outcome is set at most once."""


# ---------- Team ----------
@dataclass(frozen=True)
class Team:
    """
    A competitor in one season. Strength is fixed for the season;
    stats accumulate as fixtures are played.
    """
    id: str
    season_id: str
    name: str
    strength: int
    position: int  # insertion order within the season
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0
    created_at: datetime | None = None

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def matches_played(self) -> int:
        return self.wins + self.draws + self.losses

    def update_stats(self, goals_for: int, goals_against: int) -> Team:
        """Return a new Team with one match result applied."""
        wins, draws, losses, points = self.wins, self.draws, self.losses, self.points
        if goals_for > goals_against:
            wins += 1
            points += POINTS_FOR_WIN
        elif goals_for == goals_against:
            draws += 1
            points += POINTS_FOR_DRAW
        else:
            losses += 1
        return replace(
            self,
            goals_for=self.goals_for + goals_for,
            goals_against=self.goals_against + goals_against,
            wins=wins,
            draws=draws,
            losses=losses,
            points=points,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "season_id": self.season_id,
            "name": self.name,
            "strength": self.strength,
            "wins": self.wins,
            "draws": self.draws,
            "losses": self.losses,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "goal_difference": self.goal_difference,
            "points": self.points,
            "played": self.matches_played,
        }


# ---------- Fixture ----------
@dataclass(frozen=True)
class Fixture:
    """
    A scheduled pairing for one week. home_goals/away_goals are None until played.
    """
    id: str
    season_id: str
    week_number: int  # 1-based
    home_team_id: str
    away_team_id: str
    sequence: int  # order within the calendar
    home_goals: int | None = None
    away_goals: int | None = None
    created_at: datetime | None = None

    @property
    def is_played(self) -> bool:
        return self.home_goals is not None

    def record_outcome(self, home_goals: int, away_goals: int) -> Fixture:
        if self.is_played:
            raise FixtureAlreadyPlayedError(
                f"Fixture {self.id} already has an outcome ({self.home_goals}-{self.away_goals})"
            )
        return replace(self, home_goals=home_goals, away_goals=away_goals)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "season_id": self.season_id,
            "week": self.week_number,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "home_goals": self.home_goals,
            "away_goals": self.away_goals,
            "played": self.is_played,
        }


# ---------- Season ----------
@dataclass(frozen=True)
class Season:
    """
    One league season. current_week is the last fully simulated week (0 = not started).
    total_weeks is the highest scheduled week (0 for an empty calendar).
    """
    id: str
    name: str
    current_week: int
    total_weeks: int
    status: str  # SeasonStatus value
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "current_week": self.current_week,
            "total_weeks": self.total_weeks,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
        }


# ---------- SeasonSnapshot ----------
@dataclass(frozen=True)
class SeasonSnapshot:
    """
    Read model returned by season operations.
    week: first week to play after initialization, the week just played after an advance.
    """
    season: Season
    teams: list[Team] = field(default_factory=list)
    fixtures: list[Fixture] = field(default_factory=list)
    week: int = 0

    def fixtures_for_week(self, week_number: int) -> list[Fixture]:
        return [f for f in self.fixtures if f.week_number == week_number]

    def to_dict(self) -> dict[str, Any]:
        names = {t.id: t.name for t in self.teams}
        matches = []
        for f in self.fixtures:
            d = f.to_dict()
            d["home_team"] = names.get(f.home_team_id)
            d["away_team"] = names.get(f.away_team_id)
            matches.append(d)
        return {
            "season_id": self.season.id,
            "season": self.season.to_dict(),
            "teams": [t.to_dict() for t in self.teams],
            "matches": matches,
            "week": self.week,
        }
