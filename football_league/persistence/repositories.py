"""
Repository interfaces for league data.
No business logic: only read/write operations. Writes do not commit;
callers group them with persistence.db.transaction.
"""
from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any

from football_league.models import Fixture, Season, SeasonStatus, Team


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_datetime(s: str | None) -> datetime:
    if s is None:
        raise ValueError("expected datetime string")
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


# ---------- SeasonRepository ----------

_SEASON_COLS = "id, name, current_week, total_weeks, status, created_at"


def _season_from_row(row: sqlite3.Row) -> Season:
    return Season(
        id=row["id"],
        name=row["name"],
        current_week=row["current_week"],
        total_weeks=row["total_weeks"],
        status=row["status"],
        created_at=_parse_datetime(row["created_at"]),
    )


class SeasonRepository:
    """CRUD for seasons. No business logic."""

    def create(
        self,
        conn: sqlite3.Connection,
        name: str,
        total_weeks: int,
        id: str | None = None,
    ) -> Season:
        sid = id or str(uuid.uuid4())
        now = _now_iso()
        status = SeasonStatus.ACTIVE if total_weeks > 0 else SeasonStatus.COMPLETED
        conn.execute(
            f"INSERT INTO seasons ({_SEASON_COLS}) VALUES (?, ?, ?, ?, ?, ?)",
            (sid, name, 0, total_weeks, status.value, now),
        )
        return Season(
            id=sid, name=name, current_week=0, total_weeks=total_weeks,
            status=status.value, created_at=datetime.fromisoformat(now),
        )

    def get(self, conn: sqlite3.Connection, season_id: str) -> Season | None:
        row = conn.execute(
            f"SELECT {_SEASON_COLS} FROM seasons WHERE id = ?",
            (season_id,),
        ).fetchone()
        if row is None:
            return None
        return _season_from_row(row)

    def get_latest(self, conn: sqlite3.Connection) -> Season | None:
        row = conn.execute(
            f"SELECT {_SEASON_COLS} FROM seasons ORDER BY created_at DESC, rowid DESC LIMIT 1"
        ).fetchone()
        if row is None:
            return None
        return _season_from_row(row)

    def update_progress(
        self, conn: sqlite3.Connection, season_id: str, current_week: int, status: str
    ) -> None:
        conn.execute(
            "UPDATE seasons SET current_week = ?, status = ? WHERE id = ?",
            (current_week, status, season_id),
        )


# ---------- TeamRepository ----------

_TEAM_COLS = (
    "id, season_id, name, strength, position, wins, draws, losses, "
    "goals_for, goals_against, points, created_at"
)


def _team_from_row(row: sqlite3.Row) -> Team:
    return Team(
        id=row["id"],
        season_id=row["season_id"],
        name=row["name"],
        strength=row["strength"],
        position=row["position"],
        wins=row["wins"],
        draws=row["draws"],
        losses=row["losses"],
        goals_for=row["goals_for"],
        goals_against=row["goals_against"],
        points=row["points"],
        created_at=_parse_datetime(row["created_at"]),
    )


class TeamRepository:
    """CRUD for teams and their cumulative stats."""

    def create(
        self,
        conn: sqlite3.Connection,
        season_id: str,
        name: str,
        strength: int,
        position: int,
        id: str | None = None,
    ) -> Team:
        tid = id or str(uuid.uuid4())
        now = _now_iso()
        conn.execute(
            "INSERT INTO teams (id, season_id, name, strength, position, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (tid, season_id, name, strength, position, now),
        )
        return Team(
            id=tid, season_id=season_id, name=name, strength=strength, position=position,
            created_at=datetime.fromisoformat(now),
        )

    def get(self, conn: sqlite3.Connection, team_id: str) -> Team | None:
        row = conn.execute(f"SELECT {_TEAM_COLS} FROM teams WHERE id = ?", (team_id,)).fetchone()
        if row is None:
            return None
        return _team_from_row(row)

    def list_by_season(self, conn: sqlite3.Connection, season_id: str) -> list[Team]:
        rows = conn.execute(
            f"SELECT {_TEAM_COLS} FROM teams WHERE season_id = ? ORDER BY position",
            (season_id,),
        ).fetchall()
        return [_team_from_row(r) for r in rows]

    def update_stats(self, conn: sqlite3.Connection, team: Team) -> None:
        """Persist a team's stats as computed by the caller."""
        cur = conn.execute(
            "UPDATE teams SET wins = ?, draws = ?, losses = ?, goals_for = ?, goals_against = ?, points = ? WHERE id = ?",
            (team.wins, team.draws, team.losses, team.goals_for, team.goals_against, team.points, team.id),
        )
        if cur.rowcount != 1:
            raise sqlite3.IntegrityError(f"Team not found: {team.id}")


# ---------- FixtureRepository ----------

_FIXTURE_COLS = (
    "id, season_id, week_number, sequence, home_team_id, away_team_id, "
    "home_goals, away_goals, created_at"
)


def _fixture_from_row(row: sqlite3.Row) -> Fixture:
    return Fixture(
        id=row["id"],
        season_id=row["season_id"],
        week_number=row["week_number"],
        sequence=row["sequence"],
        home_team_id=row["home_team_id"],
        away_team_id=row["away_team_id"],
        home_goals=row["home_goals"],
        away_goals=row["away_goals"],
        created_at=_parse_datetime(row["created_at"]),
    )


class FixtureRepository:
    """CRUD for fixtures. Outcomes are written once (guarded by home_goals IS NULL)."""

    def create(
        self,
        conn: sqlite3.Connection,
        season_id: str,
        week_number: int,
        sequence: int,
        home_team_id: str,
        away_team_id: str,
        id: str | None = None,
    ) -> Fixture:
        fid = id or str(uuid.uuid4())
        now = _now_iso()
        conn.execute(
            f"INSERT INTO fixtures ({_FIXTURE_COLS}) VALUES (?, ?, ?, ?, ?, ?, NULL, NULL, ?)",
            (fid, season_id, week_number, sequence, home_team_id, away_team_id, now),
        )
        return Fixture(
            id=fid, season_id=season_id, week_number=week_number, sequence=sequence,
            home_team_id=home_team_id, away_team_id=away_team_id,
            created_at=datetime.fromisoformat(now),
        )

    def get(self, conn: sqlite3.Connection, fixture_id: str) -> Fixture | None:
        row = conn.execute(
            f"SELECT {_FIXTURE_COLS} FROM fixtures WHERE id = ?", (fixture_id,)
        ).fetchone()
        if row is None:
            return None
        return _fixture_from_row(row)

    def list_by_season(
        self, conn: sqlite3.Connection, season_id: str, week_number: int | None = None
    ) -> list[Fixture]:
        sql = f"SELECT {_FIXTURE_COLS} FROM fixtures WHERE season_id = ?"
        args: tuple[Any, ...] = (season_id,)
        if week_number is not None:
            sql += " AND week_number = ?"
            args += (week_number,)
        sql += " ORDER BY week_number, sequence"
        rows = conn.execute(sql, args).fetchall()
        return [_fixture_from_row(r) for r in rows]

    def max_week(self, conn: sqlite3.Connection, season_id: str) -> int:
        row = conn.execute(
            "SELECT COALESCE(MAX(week_number), 0) FROM fixtures WHERE season_id = ?",
            (season_id,),
        ).fetchone()
        return int(row[0])

    def record_result(self, conn: sqlite3.Connection, fixture: Fixture) -> bool:
        """Write a fixture's outcome. Returns False if the fixture was already played (or missing)."""
        cur = conn.execute(
            "UPDATE fixtures SET home_goals = ?, away_goals = ? WHERE id = ? AND home_goals IS NULL",
            (fixture.home_goals, fixture.away_goals, fixture.id),
        )
        return cur.rowcount == 1
