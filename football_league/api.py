"""
REST API for the league simulator.
Thin wrappers around SeasonService and persistence.
"""
from __future__ import annotations

import logging
import threading
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from football_league.models import FixtureAlreadyPlayedError
from football_league.persistence import get_connection, get_db_path, init_db
from football_league.services.season_service import (
    PersistenceFailure,
    SeasonComplete,
    SeasonNotFoundError,
    SeasonService,
    WeekSequenceError,
)
from football_league.services.standings import standings_rows
from football_league.simulation import SeededRNG

logger = logging.getLogger(__name__)

# Clubs used when initialize is called without a team list
DEFAULT_TEAMS: list[tuple[str, int]] = [
    ("Chelsea", 85),
    ("Arsenal", 82),
    ("Manchester City", 88),
    ("Liverpool", 84),
]


@contextmanager
def db_conn() -> Generator:
    """Yield a DB connection, ensure close on exit."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


# ---------- Per-season write serialization ----------
# Process-local; the store's write transaction covers other processes.
_season_locks: dict[str, threading.Lock] = {}
_season_locks_guard = threading.Lock()


def _season_lock(season_id: str) -> threading.Lock:
    with _season_locks_guard:
        lock = _season_locks.get(season_id)
        if lock is None:
            lock = _season_locks[season_id] = threading.Lock()
        return lock


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    init_db(db_path=get_db_path())
    logger.info("Database ready at %s", get_db_path())
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="Football League Simulator API",
    description="Double round-robin league: fixtures, weekly simulation, standings",
    version="0.1.0",
    lifespan=lifespan,
)


# ---------- Request models ----------


class TeamIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    strength: int = Field(..., description="Strength rating, fixed for the season")


class InitializeSeasonRequest(BaseModel):
    name: str | None = Field(None, max_length=200)
    teams: list[TeamIn] | None = Field(None, description="Defaults to the four built-in clubs")


class PlayNextWeekRequest(BaseModel):
    season_id: str | None = Field(None, description="Defaults to the latest season")
    seed: int | None = Field(None, description="RNG seed for a reproducible week")
    expected_week: int | None = Field(
        None, ge=0, description="Reject the advance unless the season is at this week"
    )


def _resolve_season_id(svc: SeasonService, conn, season_id: str | None) -> str:
    """Explicit season id (must exist), else the most recently initialized season."""
    if season_id is None:
        return svc.latest_season_id(conn)
    return svc.get_season(conn, season_id).id


# ---------- Routes ----------


@app.get("/health")
def health() -> dict[str, Any]:
    return {"status": "ok"}


@app.post("/api/league/initialize")
def initialize_league(req: InitializeSeasonRequest | None = None) -> dict[str, Any]:
    """Create a season with its teams and full fixture calendar. Week 1 is next to play."""
    teams = DEFAULT_TEAMS
    if req is not None and req.teams is not None:
        teams = [(t.name, t.strength) for t in req.teams]
    with db_conn() as conn:
        svc = SeasonService()
        try:
            snapshot = svc.initialize_season(conn, teams, name=req.name if req else None)
        except PersistenceFailure as e:
            raise HTTPException(status_code=500, detail=str(e))
        return snapshot.to_dict()


@app.post("/api/league/play-next")
def play_next_week(req: PlayNextWeekRequest | None = None) -> dict[str, Any]:
    """Simulate every fixture of the next week, persist results, advance the week."""
    req = req or PlayNextWeekRequest()
    rng = SeededRNG(req.seed)
    with db_conn() as conn:
        svc = SeasonService()
        try:
            season_id = _resolve_season_id(svc, conn, req.season_id)
            with _season_lock(season_id):
                snapshot = svc.advance_week(conn, season_id, rng=rng, expected_week=req.expected_week)
        except SeasonNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except SeasonComplete:
            raise HTTPException(status_code=400, detail="Season is complete")
        except (WeekSequenceError, FixtureAlreadyPlayedError) as e:
            raise HTTPException(status_code=409, detail=str(e))
        except PersistenceFailure as e:
            raise HTTPException(status_code=500, detail=str(e))
        return snapshot.to_dict()


@app.get("/api/league/table")
def get_league_table(season_id: str | None = Query(None)) -> dict[str, Any]:
    """Standings: points, then goal difference, then goals scored."""
    with db_conn() as conn:
        svc = SeasonService()
        try:
            sid = _resolve_season_id(svc, conn, season_id)
            teams = svc.get_standings(conn, sid)
        except SeasonNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except PersistenceFailure as e:
            raise HTTPException(status_code=500, detail=str(e))
        return {"season_id": sid, "standings": standings_rows(teams)}


@app.get("/api/league/fixtures")
def get_league_fixtures(
    season_id: str | None = Query(None),
    week: int | None = Query(None, ge=1),
) -> dict[str, Any]:
    """Fixtures for the season, optionally for one week."""
    with db_conn() as conn:
        svc = SeasonService()
        try:
            sid = _resolve_season_id(svc, conn, season_id)
            fixtures = svc.get_fixtures(conn, sid, week)
        except SeasonNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except PersistenceFailure as e:
            raise HTTPException(status_code=500, detail=str(e))
        return {"season_id": sid, "week": week, "fixtures": [f.to_dict() for f in fixtures]}


@app.get("/api/seasons/{season_id}")
def get_season(season_id: str) -> dict[str, Any]:
    """Full season: teams in insertion order, every fixture, current week."""
    with db_conn() as conn:
        svc = SeasonService()
        try:
            snapshot = svc.get_snapshot(conn, season_id)
        except SeasonNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except PersistenceFailure as e:
            raise HTTPException(status_code=500, detail=str(e))
        return snapshot.to_dict()
