import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .permutation import (
    InvariantError,
    Permutation,
    check_permutation,
    copy_permutation,
    is_permutation,
    random_permutation,
)
from .points import PointSet, tour_distance, tour_metric


@dataclass
class Population:
    members: List[Permutation]
    points: PointSet
    incumbent: Permutation
    metric: str = "exact"

    def __post_init__(self):
        self._score = tour_metric(self.metric)

    def __len__(self) -> int:
        return len(self.members)

    def fitness(self, perm: Sequence[int]) -> float:
        """Ranking score under this population's metric; lower is better."""
        return self._score(self.points, perm)

    def distance(self, perm: Sequence[int]) -> float:
        return tour_distance(self.points, perm)

    def sort(self) -> None:
        self.members.sort(key=self.fitness)

    @property
    def best(self) -> Permutation:
        return self.members[0]

    @property
    def incumbent_fitness(self) -> float:
        return self.fitness(self.incumbent)

    def copy(self) -> "Population":
        return Population(
            members=[copy_permutation(m) for m in self.members],
            points=self.points,
            incumbent=copy_permutation(self.incumbent),
            metric=self.metric,
        )

    def check_invariants(self, size: Optional[int] = None) -> None:
        if size is not None and len(self.members) != size:
            raise InvariantError(f"population size drifted from {size} to {len(self.members)}")
        n = len(self.points)
        for perm in self.members:
            check_permutation(perm, n)
        check_permutation(self.incumbent, n)


def random_population(
    size: int,
    points: PointSet,
    rng: random.Random,
    metric: str = "exact",
    seed_tour: Optional[Sequence[int]] = None,
) -> Population:
    if size < 1:
        raise ValueError(f"population size must be positive, got {size}")
    n = len(points)
    members = [random_permutation(n, rng) for _ in range(size)]
    if seed_tour is not None and len(seed_tour) == n:
        if not is_permutation(seed_tour):
            raise ValueError(f"seed tour is not a permutation of 0..{n - 1}")
        members[0] = copy_permutation(seed_tour)
    pop = Population(members=members, points=points, incumbent=[], metric=metric)
    pop.sort()
    pop.incumbent = copy_permutation(pop.best)
    return pop
