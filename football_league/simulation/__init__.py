"""
Match simulation: strength-based goal model with an injected, seedable entropy source.
"""
from .rng import EntropySource, SeededRNG
from .match_engine import simulate_match, strength_factor, goals_from_factor

__all__ = [
    "EntropySource",
    "SeededRNG",
    "simulate_match",
    "strength_factor",
    "goals_from_factor",
]
