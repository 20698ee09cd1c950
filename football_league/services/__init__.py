"""
Service layer: scheduling, standings, season state machine.
Scheduling and ranking are pure; season_service orchestrates persistence.
"""
from .scheduling import generate_league_schedule, round_robin_pairings, season_weeks
from .standings import rank_standings, standings_rows
from .season_service import (
    SeasonService,
    SeasonComplete,
    WeekSequenceError,
    PersistenceFailure,
    SeasonNotFoundError,
)

__all__ = [
    "generate_league_schedule",
    "round_robin_pairings",
    "season_weeks",
    "rank_standings",
    "standings_rows",
    "SeasonService",
    "SeasonComplete",
    "WeekSequenceError",
    "PersistenceFailure",
    "SeasonNotFoundError",
]
