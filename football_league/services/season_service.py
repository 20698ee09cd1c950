"""
Season service: initialize a season, advance it one week at a time, read standings.
Scheduling, simulation and ranking are pure; this module orchestrates persistence.

Every write operation runs in one transaction: state is read into frozen models,
next state is computed as new instances, and the whole week is persisted or nothing is.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Sequence

from football_league.models import Fixture, Season, SeasonSnapshot, SeasonStatus, Team
from football_league.persistence.db import transaction
from football_league.persistence.repositories import (
    FixtureRepository,
    SeasonRepository,
    TeamRepository,
)
from football_league.services.scheduling import generate_league_schedule
from football_league.services.standings import rank_standings
from football_league.simulation import EntropySource, SeededRNG, simulate_match

logger = logging.getLogger(__name__)

DEFAULT_SEASON_NAME = "League Season"

# ---------- Exceptions ----------


class SeasonComplete(ValueError):
    """Advance requested past the last scheduled week."""


class WeekSequenceError(ValueError):
    """Caller's view of the current week does not match the persisted cursor."""


class PersistenceFailure(RuntimeError):
    """The store failed a read or write. Nothing from the operation was committed."""


class SeasonNotFoundError(PersistenceFailure):
    """No season with the requested id (or no season at all)."""


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as e:
        logger.warning("%s failed: %s", action, e)
        raise PersistenceFailure(f"{action} failed: {e}") from e


# ---------- SeasonService ----------


class SeasonService:
    """
    Domain logic for a league season: schedule at setup, week-by-week simulation,
    standings. Persistence is delegated to repositories.
    Callers must not run two advance_week calls for the same season concurrently.
    """

    def __init__(self) -> None:
        self._season_repo = SeasonRepository()
        self._team_repo = TeamRepository()
        self._fixture_repo = FixtureRepository()

    # ---------- Reads ----------

    def _require_season(self, conn: sqlite3.Connection, season_id: str) -> Season:
        season = self._season_repo.get(conn, season_id)
        if season is None:
            raise SeasonNotFoundError(f"Season not found: {season_id}")
        return season

    def get_season(self, conn: sqlite3.Connection, season_id: str) -> Season:
        with _store_errors("Fetching season"):
            return self._require_season(conn, season_id)

    def latest_season_id(self, conn: sqlite3.Connection) -> str:
        with _store_errors("Fetching latest season"):
            season = self._season_repo.get_latest(conn)
        if season is None:
            raise SeasonNotFoundError("No season has been initialized")
        return season.id

    def get_snapshot(self, conn: sqlite3.Connection, season_id: str, week: int | None = None) -> SeasonSnapshot:
        with _store_errors("Fetching season"):
            season = self._require_season(conn, season_id)
            teams = self._team_repo.list_by_season(conn, season_id)
            fixtures = self._fixture_repo.list_by_season(conn, season_id)
        return SeasonSnapshot(
            season=season,
            teams=teams,
            fixtures=fixtures,
            week=season.current_week if week is None else week,
        )

    def get_standings(self, conn: sqlite3.Connection, season_id: str) -> list[Team]:
        """Teams in table order from the persisted stats."""
        with _store_errors("Fetching standings"):
            self._require_season(conn, season_id)
            teams = self._team_repo.list_by_season(conn, season_id)
        return rank_standings(teams)

    def get_fixtures(
        self, conn: sqlite3.Connection, season_id: str, week_number: int | None = None
    ) -> list[Fixture]:
        with _store_errors("Fetching fixtures"):
            self._require_season(conn, season_id)
            return self._fixture_repo.list_by_season(conn, season_id, week_number)

    # ---------- Initialize ----------

    def initialize_season(
        self,
        conn: sqlite3.Connection,
        teams: Sequence[tuple[str, int]],
        name: str | None = None,
    ) -> SeasonSnapshot:
        """
        Create a season with the given (name, strength) teams, all stats zero, and
        its full double round-robin calendar. Fewer than 2 teams gives an empty calendar.
        Returned snapshot's week is 1, the first week to play.
        """
        # Schedule by position; positions map to team ids once rows exist
        schedule = generate_league_schedule(list(range(len(teams))))
        total_weeks = max((f["week_number"] for f in schedule), default=0)
        with _store_errors("Initializing season"), transaction(conn):
            season = self._season_repo.create(conn, name or DEFAULT_SEASON_NAME, total_weeks=total_weeks)
            created = [
                self._team_repo.create(conn, season.id, team_name, strength, position=i)
                for i, (team_name, strength) in enumerate(teams)
            ]
            logger.info("Created %d teams for season %s", len(created), season.id)
            fixtures = [
                self._fixture_repo.create(
                    conn, season.id,
                    week_number=f["week_number"],
                    sequence=seq,
                    home_team_id=created[f["home_team_id"]].id,
                    away_team_id=created[f["away_team_id"]].id,
                )
                for seq, f in enumerate(schedule)
            ]
        logger.info("Generated %d fixtures over %d weeks", len(fixtures), total_weeks)
        if fixtures:
            first = fixtures[0]
            logger.debug(
                "First fixture: week %d, home %s, away %s",
                first.week_number, first.home_team_id, first.away_team_id,
            )
        return SeasonSnapshot(season=season, teams=created, fixtures=fixtures, week=1)

    # ---------- Advance ----------

    def advance_week(
        self,
        conn: sqlite3.Connection,
        season_id: str,
        rng: EntropySource | None = None,
        expected_week: int | None = None,
    ) -> SeasonSnapshot:
        """
        Simulate every fixture of week current_week + 1, apply both sides' stats,
        persist outcomes, stats and the new cursor together.
        Raises SeasonComplete (no mutation) when no weeks remain.
        """
        rng = rng if rng is not None else SeededRNG()
        with _store_errors(f"Advancing season {season_id}"), transaction(conn):
            season = self._require_season(conn, season_id)
            if expected_week is not None and expected_week != season.current_week:
                raise WeekSequenceError(
                    f"Expected current week {expected_week}, but season is at week {season.current_week}"
                )
            max_week = self._fixture_repo.max_week(conn, season_id)
            week = season.current_week + 1
            if week > max_week:
                raise SeasonComplete(
                    f"Season is complete: week {season.current_week} of {max_week} already played"
                )
            logger.info("Processing week %d of %d", week, max_week)

            teams = {t.id: t for t in self._team_repo.list_by_season(conn, season_id)}
            week_fixtures = self._fixture_repo.list_by_season(conn, season_id, week)
            logger.info("Found %d fixtures for week %d", len(week_fixtures), week)

            played: list[Fixture] = []
            touched: dict[str, Team] = {}
            for fixture in week_fixtures:
                home = teams[fixture.home_team_id]
                away = teams[fixture.away_team_id]
                home_goals, away_goals = simulate_match(home.strength, away.strength, rng)
                played.append(fixture.record_outcome(home_goals, away_goals))
                teams[home.id] = touched[home.id] = home.update_stats(home_goals, away_goals)
                teams[away.id] = touched[away.id] = away.update_stats(away_goals, home_goals)
                logger.debug("Match: %s vs %s, Score: %d-%d", home.name, away.name, home_goals, away_goals)

            for fixture in played:
                if not self._fixture_repo.record_result(conn, fixture):
                    raise PersistenceFailure(f"Fixture {fixture.id} already has an outcome")
            for team in touched.values():
                self._team_repo.update_stats(conn, team)

            status = SeasonStatus.COMPLETED if week == max_week else SeasonStatus.ACTIVE
            self._season_repo.update_progress(conn, season_id, week, status.value)
            if status == SeasonStatus.COMPLETED:
                logger.info("Season %s completed after week %d", season_id, week)

            season = self._require_season(conn, season_id)
            all_fixtures = self._fixture_repo.list_by_season(conn, season_id)
            ordered_teams = sorted(teams.values(), key=lambda t: t.position)
        return SeasonSnapshot(season=season, teams=ordered_teams, fixtures=all_fixtures, week=week)
