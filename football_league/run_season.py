"""
Run a league season in the terminal: initialize the default clubs, play week by
week, print each week's results and the final table.
Run from project root: python -m football_league.run_season
"""
from __future__ import annotations

import argparse
import logging
import os
import random
from pathlib import Path

from football_league.api import DEFAULT_TEAMS
from football_league.models import SeasonSnapshot
from football_league.persistence import get_connection, init_db, set_db_path
from football_league.services.season_service import SeasonComplete, SeasonService
from football_league.services.standings import standings_rows
from football_league.simulation import SeededRNG


def _print_week(snapshot: SeasonSnapshot) -> None:
    names = {t.id: t.name for t in snapshot.teams}
    print(f"\n  Week {snapshot.week} of {snapshot.season.total_weeks}")
    print("  " + "-" * 44)
    for f in snapshot.fixtures_for_week(snapshot.week):
        print(f"  {names[f.home_team_id]:>18} {f.home_goals} - {f.away_goals} {names[f.away_team_id]}")


def _print_table(snapshot: SeasonSnapshot) -> None:
    print()
    print("=" * 60)
    print(f"  {'#':>2}  {'Team':<18}{'P':>3}{'W':>3}{'D':>3}{'L':>3}{'GF':>4}{'GA':>4}{'GD':>4}{'Pts':>5}")
    print("=" * 60)
    for row in standings_rows(snapshot.teams):
        print(
            f"  {row['rank']:>2}  {row['name']:<18}{row['played']:>3}{row['wins']:>3}{row['draws']:>3}"
            f"{row['losses']:>3}{row['goals_for']:>4}{row['goals_against']:>4}"
            f"{row['goal_difference']:>4}{row['points']:>5}"
        )
    print()


def run(seed: int | None = None, weeks: int | None = None, db_path: Path | None = None) -> None:
    if seed is None:
        seed = random.randint(1, 2**31 - 1)
    if db_path is not None:
        set_db_path(db_path)
    init_db()
    rng = SeededRNG(seed)
    svc = SeasonService()
    conn = get_connection()
    try:
        snapshot = svc.initialize_season(conn, DEFAULT_TEAMS)
        season_id = snapshot.season.id
        print(f"\n  Season {season_id}  [{len(snapshot.teams)} teams, "
              f"{snapshot.season.total_weeks} weeks, seed={seed}]")
        played = 0
        while weeks is None or played < weeks:
            try:
                snapshot = svc.advance_week(conn, season_id, rng=rng)
            except SeasonComplete:
                break
            played += 1
            _print_week(snapshot)
        _print_table(snapshot)
    finally:
        conn.close()


def main():
    parser = argparse.ArgumentParser(description="Simulate a double round-robin league season.")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    parser.add_argument("--weeks", type=int, default=None, help="Play at most this many weeks")
    parser.add_argument("--db", type=Path, default=None, help="SQLite file (default: $LEAGUE_DB_PATH or data/league.db)")
    args = parser.parse_args()
    logging.basicConfig(
        level=os.environ.get("LEAGUE_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(seed=args.seed, weeks=args.weeks, db_path=args.db)


if __name__ == "__main__":
    main()
