"""
Football league simulator: double round-robin fixtures, strength-based match
outcomes, and a points / goal difference / goals scored league table.
"""
