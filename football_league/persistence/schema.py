"""
SQLite schema for league entities.
Migration-friendly: each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def seasons_schema() -> str:
    """One row per season. Owns current_week (0 = not started) and total_weeks."""
    return """
    CREATE TABLE IF NOT EXISTS seasons (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        current_week INTEGER NOT NULL DEFAULT 0,
        total_weeks INTEGER NOT NULL,
        status TEXT NOT NULL DEFAULT 'active',
        created_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS ix_seasons_created_at ON seasons(created_at);
    """


def teams_schema() -> str:
    """Teams belong to a season. position keeps insertion order for stable tie order."""
    return """
    CREATE TABLE IF NOT EXISTS teams (
        id TEXT PRIMARY KEY,
        season_id TEXT NOT NULL,
        name TEXT NOT NULL,
        strength INTEGER NOT NULL,
        position INTEGER NOT NULL,
        wins INTEGER NOT NULL DEFAULT 0,
        draws INTEGER NOT NULL DEFAULT 0,
        losses INTEGER NOT NULL DEFAULT 0,
        goals_for INTEGER NOT NULL DEFAULT 0,
        goals_against INTEGER NOT NULL DEFAULT 0,
        points INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        FOREIGN KEY (season_id) REFERENCES seasons(id)
    );
    CREATE INDEX IF NOT EXISTS ix_teams_season ON teams(season_id);
    """


def fixtures_schema() -> str:
    """Scheduled pairings. home_goals/away_goals NULL = unplayed."""
    return """
    CREATE TABLE IF NOT EXISTS fixtures (
        id TEXT PRIMARY KEY,
        season_id TEXT NOT NULL,
        week_number INTEGER NOT NULL,
        sequence INTEGER NOT NULL,
        home_team_id TEXT NOT NULL,
        away_team_id TEXT NOT NULL,
        home_goals INTEGER,
        away_goals INTEGER,
        created_at TEXT NOT NULL,
        FOREIGN KEY (season_id) REFERENCES seasons(id),
        FOREIGN KEY (home_team_id) REFERENCES teams(id),
        FOREIGN KEY (away_team_id) REFERENCES teams(id),
        CHECK (home_team_id <> away_team_id)
    );
    CREATE INDEX IF NOT EXISTS ix_fixtures_season_week ON fixtures(season_id, week_number);
    CREATE INDEX IF NOT EXISTS ix_fixtures_home ON fixtures(home_team_id);
    CREATE INDEX IF NOT EXISTS ix_fixtures_away ON fixtures(away_team_id);
    """


def all_schema_sql() -> str:
    """Combine all schema DDL for a single execution. Order: seasons, teams, fixtures."""
    return "\n".join([
        seasons_schema(),
        teams_schema(),
        fixtures_schema(),
    ])
