"""
Deterministic double round-robin schedule generation for a league season.

Double round-robin: every team meets every other team twice, once at home and once
away. Season length is 2*(N-1) weeks (N even) or 2*N weeks (N odd). Each team plays
at most one match per week.

BYE handling: when the number of teams is odd we pad the rotation with a sentinel
slot. Pairings against that slot are dropped, so each week one team is idle and no
placeholder ever appears in the output.

Uses the circle method: fix first slot, rotate others each week. Same team list
ordering yields the same schedule (deterministic for persistence).
"""
from __future__ import annotations

from typing import Any, Hashable, Sequence

# Slot index stands in for the bye; never mapped to a team
_BYE_SLOT = -1


def season_weeks(team_count: int) -> int:
    """Weeks in a double round-robin season for team_count teams (0 when fewer than 2)."""
    if team_count < 2:
        return 0
    single_round = team_count - 1 if team_count % 2 == 0 else team_count
    return single_round * 2


def round_robin_pairings(team_ids: Sequence[Hashable]) -> list[tuple[int, Hashable, Hashable]]:
    """
    Generate one round of pairings: (week_number, home_team_id, away_team_id).
    The team at the lower slot of each pairing is home. Byes are omitted.
    Deterministic: same team list => same schedule.
    """
    ids = list(team_ids)
    if len(ids) < 2:
        return []
    order = list(range(len(ids)))
    if len(order) % 2 == 1:
        order.append(_BYE_SLOT)
    N = len(order)  # N is even
    weeks = N - 1
    result: list[tuple[int, Hashable, Hashable]] = []
    # Week 0: pair (0, N-1), (1, N-2), (2, N-3), ...
    # Week 1: order [0, N-1, 1, 2, ..., N-2]; pair again by position
    for week in range(weeks):
        for i in range(N // 2):
            home_slot, away_slot = order[i], order[N - 1 - i]
            if home_slot == _BYE_SLOT or away_slot == _BYE_SLOT:
                continue
            result.append((week + 1, ids[home_slot], ids[away_slot]))
        # Rotate: keep 0, then order[N-1], order[1], order[2], ..., order[N-2]
        order = [order[0]] + [order[N - 1]] + order[1 : N - 1]
    return result


def double_round_robin_pairings(team_ids: Sequence[Hashable]) -> list[tuple[int, Hashable, Hashable]]:
    """
    First leg (weeks 1..R) followed by the return leg (weeks R+1..2R) with home and
    away swapped. Ordered by week; within a week, in pairing order.
    """
    first_leg = round_robin_pairings(team_ids)
    if not first_leg:
        return []
    rounds = season_weeks(len(team_ids)) // 2
    return_leg = [(week + rounds, away, home) for week, home, away in first_leg]
    return first_leg + return_leg


def generate_league_schedule(team_ids: Sequence[Hashable]) -> list[dict[str, Any]]:
    """
    Return list of fixtures: { "week_number": int, "home_team_id": ..., "away_team_id": ... }.
    Deterministic; each pair meets twice with home swapped; max one game per team per week.
    """
    pairings = double_round_robin_pairings(team_ids)
    return [
        {"week_number": w, "home_team_id": h, "away_team_id": a}
        for w, h, a in pairings
    ]
