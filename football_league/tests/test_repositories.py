"""
Tests for the SQLite repositories and the transaction helper.
"""
from __future__ import annotations

import pytest

from football_league.persistence import (
    FixtureRepository,
    SeasonRepository,
    TeamRepository,
    transaction,
)


@pytest.fixture
def season_with_two_teams(db_conn):
    with transaction(db_conn):
        season = SeasonRepository().create(db_conn, "Test Season", total_weeks=2)
        home = TeamRepository().create(db_conn, season.id, "Home FC", 80, position=0)
        away = TeamRepository().create(db_conn, season.id, "Away FC", 70, position=1)
        fixture = FixtureRepository().create(db_conn, season.id, 1, 0, home.id, away.id)
    return season, home, away, fixture


def test_season_round_trip(db_conn, season_with_two_teams):
    season, *_ = season_with_two_teams
    stored = SeasonRepository().get(db_conn, season.id)
    assert stored == season
    assert stored.current_week == 0
    assert SeasonRepository().get(db_conn, "missing") is None


def test_teams_listed_in_insertion_order(db_conn, season_with_two_teams):
    season, home, away, _ = season_with_two_teams
    teams = TeamRepository().list_by_season(db_conn, season.id)
    assert [t.id for t in teams] == [home.id, away.id]


def test_team_stats_update(db_conn, season_with_two_teams):
    _, home, _, _ = season_with_two_teams
    updated = home.update_stats(2, 0)
    with transaction(db_conn):
        TeamRepository().update_stats(db_conn, updated)
    assert TeamRepository().get(db_conn, home.id) == updated


def test_fixture_result_written_once(db_conn, season_with_two_teams):
    _, _, _, fixture = season_with_two_teams
    repo = FixtureRepository()
    with transaction(db_conn):
        assert repo.record_result(db_conn, fixture.record_outcome(1, 0)) is True
    with transaction(db_conn):
        assert repo.record_result(db_conn, fixture.record_outcome(3, 3)) is False
    stored = repo.get(db_conn, fixture.id)
    assert (stored.home_goals, stored.away_goals) == (1, 0)


def test_max_week(db_conn, season_with_two_teams):
    season, *_ = season_with_two_teams
    assert FixtureRepository().max_week(db_conn, season.id) == 1
    assert FixtureRepository().max_week(db_conn, "missing") == 0


def test_transaction_rolls_back_on_error(db_conn, season_with_two_teams):
    season, *_ = season_with_two_teams
    with pytest.raises(RuntimeError):
        with transaction(db_conn):
            SeasonRepository().update_progress(db_conn, season.id, 2, "completed")
            raise RuntimeError("boom")
    assert SeasonRepository().get(db_conn, season.id).current_week == 0
