"""
Genetic-algorithm search for short closed tours over a fixed point set,
using permutation-encoded tours, PMX crossover and segment-reversal mutation.
"""

__all__ = [
    "data",
    "evaluation",
    "evolutionary",
    "operators",
    "permutation",
    "points",
    "population",
]
