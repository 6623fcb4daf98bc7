from .base import Solver, SolveResult, Tour
from .exhaustive import ExhaustiveSolver, exhaustive_tour
from .genetic import GeneticSolver

__all__ = [
    "Solver",
    "SolveResult",
    "Tour",
    "ExhaustiveSolver",
    "exhaustive_tour",
    "GeneticSolver",
]
