import random
from typing import Optional, Sequence

from ..evolutionary import EvolutionConfig, GenerationCallback, GeneticSearch
from ..points import PointSet
from .base import Solver, Tour


class GeneticSolver(Solver):
    name = "genetic"

    def __init__(
        self,
        config: EvolutionConfig,
        seed_tour: Optional[Sequence[int]] = None,
        rng: random.Random = None,
        callback: Optional[GenerationCallback] = None,
    ):
        self.cfg = config
        self.seed_tour = seed_tour
        self.rng = rng
        self.callback = callback
        self.search: Optional[GeneticSearch] = None

    def solve(self, points: PointSet) -> Tour:
        self.search = GeneticSearch(self.cfg, points, seed_tour=self.seed_tour, rng=self.rng)
        tour, _ = self.search.run(callback=self.callback)
        return tour
