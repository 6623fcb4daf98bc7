from typing import Tuple

from ..permutation import Permutation, copy_permutation, iter_permutations
from ..points import PointSet, tour_distance
from .base import Solver, Tour


MAX_POINTS = 15


def exhaustive_tour(points: PointSet, max_points: int = MAX_POINTS) -> Tuple[float, Permutation]:
    """
    Try all n! orderings lexicographically and return the shortest.

    Only practical for small instances, so more than max_points points is rejected.
    """
    if len(points) > max_points:
        raise ValueError(
            f"cannot enumerate {len(points)} points in a reasonable time (limit {max_points})"
        )
    best_perm: Permutation = []
    best_dist = float("inf")
    for perm in iter_permutations(len(points)):
        dist = tour_distance(points, perm)
        if dist < best_dist:
            best_dist = dist
            best_perm = copy_permutation(perm)
    return best_dist, best_perm


class ExhaustiveSolver(Solver):
    name = "exhaustive"

    def __init__(self, max_points: int = MAX_POINTS):
        self.max_points = max_points

    def solve(self, points: PointSet) -> Tour:
        _, tour = exhaustive_tour(points, self.max_points)
        return tour
