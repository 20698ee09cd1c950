"""
Pure match outcome model: no persistence, no stats updates.

Each side's goals come from its strength scaled by a random boost:
home gets +20%..+50% (home advantage), away gets +0%..+30%.
Goals = floor(factor / 20). Scores are not capped and the two sides are independent.
"""
from __future__ import annotations

import math

from .rng import EntropySource

HOME_BASE_MULTIPLIER = 1.2
AWAY_BASE_MULTIPLIER = 1.0
BOOST_RANGE = 0.3
STRENGTH_PER_GOAL = 20.0


def strength_factor(strength: int, base: float, u: float) -> float:
    return strength * (base + BOOST_RANGE * u)


def goals_from_factor(factor: float) -> int:
    return math.floor(factor / STRENGTH_PER_GOAL)


def simulate_match(home_strength: int, away_strength: int, rng: EntropySource) -> tuple[int, int]:
    """
    Return (home_goals, away_goals) for one fixture.
    Draws two variates from rng, home first. rng is owned by the caller.
    """
    u_home = rng.random()
    u_away = rng.random()
    home_goals = goals_from_factor(strength_factor(home_strength, HOME_BASE_MULTIPLIER, u_home))
    away_goals = goals_from_factor(strength_factor(away_strength, AWAY_BASE_MULTIPLIER, u_away))
    return home_goals, away_goals
