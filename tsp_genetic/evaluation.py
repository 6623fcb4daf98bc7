import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .permutation import check_permutation
from .points import PointSet, tour_distance
from .solvers.base import SolveResult, Solver


@dataclass
class Fitness:
    length: float
    runtime: float
    gap: float
    solver_name: str


def evaluate_solver(solver: Solver, points: PointSet, optimum: Optional[float] = None) -> Fitness:
    start = time.perf_counter()
    tour = solver.solve(points)
    runtime = time.perf_counter() - start
    check_permutation(tour, len(points))
    result = SolveResult(
        tour=tour,
        length=tour_distance(points, tour),
        solver_name=solver.name,
        optimum=optimum,
    )
    return Fitness(
        length=result.length,
        runtime=runtime,
        gap=result.gap,
        solver_name=result.solver_name,
    )


def aggregate_fitness(fitnesses: List[Fitness]) -> Dict[str, float]:
    if not fitnesses:
        return {"length": float("inf"), "gap": float("inf"), "runtime": float("inf")}
    length = sum(f.length for f in fitnesses) / len(fitnesses)
    gap = sum(f.gap for f in fitnesses if f.gap != float("inf")) / max(
        1, sum(1 for f in fitnesses if f.gap != float("inf"))
    )
    runtime = sum(f.runtime for f in fitnesses) / len(fitnesses)
    return {"length": length, "gap": gap, "runtime": runtime}
