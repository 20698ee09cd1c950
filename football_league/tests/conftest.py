"""
Shared fixtures: a temporary SQLite database per test.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root on path (run from project root: python -m pytest)
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from football_league.api import DEFAULT_TEAMS
from football_league.persistence.db import get_connection, init_db, set_db_path
from football_league.services.season_service import SeasonService


@pytest.fixture
def db_path(tmp_path):
    """Temporary DB with all league tables."""
    path = tmp_path / "league_test.db"
    set_db_path(path)
    init_db(db_path=path)
    return path


@pytest.fixture
def db_conn(db_path):
    conn = get_connection(db_path)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def season_service():
    return SeasonService()


@pytest.fixture
def four_club_season(db_conn, season_service):
    """Initialized season with the four default clubs; nothing played."""
    return season_service.initialize_season(db_conn, DEFAULT_TEAMS)
