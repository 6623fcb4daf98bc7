import random
from dataclasses import asdict, dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .operators import Crossover, Mutation, pmx, reverse_subsequence
from .permutation import InvariantError, Permutation, copy_permutation, is_permutation
from .points import METRICS, PointSet
from .population import Population, random_population


@dataclass
class EvolutionConfig:
    population_size: int = 10
    generations: int = 1_000_000
    elite_fraction: float = 0.50
    mutation_rate: float = 0.25
    metric: str = "exact"
    random_seed: Optional[int] = None

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError(f"population_size must be positive, got {self.population_size}")
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")
        if not 0.0 <= self.elite_fraction <= 1.0:
            raise ValueError(f"elite_fraction must lie in [0, 1], got {self.elite_fraction}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must lie in [0, 1], got {self.mutation_rate}")
        if self.metric not in METRICS:
            raise ValueError(f"unknown metric {self.metric!r}; expected one of {sorted(METRICS)}")


def elite_count(elite_fraction: float, population_size: int) -> int:
    """Number of breeding members, truncated down to an even count."""
    k = int(elite_fraction * population_size)
    return k - k % 2


def reproduce(
    population: Population,
    elite_fraction: float,
    mutation_rate: float,
    rng: random.Random,
    crossover: Crossover = pmx,
    mutate: Mutation = reverse_subsequence,
    inplace: bool = False,
) -> Population:
    """
    Advance a ranked population by one generation.

    The best-ranked members are paired off (0 with 1, 2 with 3, ...) and their
    children, each mutated with probability mutation_rate, replace the
    worst-ranked members. The population is then re-ranked and the incumbent
    replaced if the new best member is strictly better.
    """
    size = len(population)
    if size < 1:
        raise InvariantError("cannot reproduce an empty population")
    if not 0.0 <= elite_fraction <= 1.0:
        raise InvariantError(f"elite_fraction must lie in [0, 1], got {elite_fraction}")
    if not 0.0 <= mutation_rate <= 1.0:
        raise InvariantError(f"mutation_rate must lie in [0, 1], got {mutation_rate}")

    pop = population if inplace else population.copy()
    members = pop.members
    k = elite_count(elite_fraction, size)

    children: List[Permutation] = []
    for i in range(0, k, 2):
        u, v = crossover(members[i], members[i + 1], rng)
        children.append(u)
        children.append(v)

    for i, child in enumerate(children):
        if rng.random() < mutation_rate:
            children[i] = mutate(child, rng)

    for offset, child in enumerate(children):
        members[size - 1 - offset] = child

    if len(members) != size:
        raise InvariantError(f"population size drifted from {size} to {len(members)}")

    pop.sort()
    if pop.fitness(pop.best) < pop.incumbent_fitness:
        pop.incumbent = copy_permutation(pop.best)
    return pop


GenerationCallback = Callable[["GeneticSearch"], None]


class GeneticSearch:
    def __init__(
        self,
        config: EvolutionConfig,
        points: PointSet,
        seed_tour: Optional[Sequence[int]] = None,
        rng: random.Random = None,
        crossover: Crossover = pmx,
        mutate: Mutation = reverse_subsequence,
    ):
        self.cfg = config
        self.points = points
        self.rng = rng or random.Random(config.random_seed)
        self.crossover = crossover
        self.mutate = mutate
        self.population: Population = random_population(
            config.population_size,
            points,
            self.rng,
            metric=config.metric,
            seed_tour=seed_tour,
        )
        self.generation = 0

    def step(self) -> None:
        reproduce(
            self.population,
            self.cfg.elite_fraction,
            self.cfg.mutation_rate,
            self.rng,
            crossover=self.crossover,
            mutate=self.mutate,
            inplace=True,
        )
        self.generation += 1

    def run(
        self, generations: Optional[int] = None, callback: Optional[GenerationCallback] = None
    ) -> Tuple[Permutation, float]:
        if generations is None:
            generations = self.cfg.generations
        for _ in range(generations):
            self.step()
            if callback is not None:
                callback(self)
        self.population.check_invariants(self.cfg.population_size)
        return self.best()

    def best(self) -> Tuple[Permutation, float]:
        incumbent = copy_permutation(self.population.incumbent)
        return incumbent, self.population.distance(incumbent)

    def to_state(self) -> Dict:
        return {
            "cfg": asdict(self.cfg),
            "generation": self.generation,
            "population": [list(m) for m in self.population.members],
            "incumbent": list(self.population.incumbent),
            "rng_state": self.rng.getstate(),
        }

    @classmethod
    def from_state(cls, state: Dict, points: PointSet, rng: random.Random = None) -> "GeneticSearch":
        cfg = EvolutionConfig(**state["cfg"])
        search = cls(cfg, points, rng=rng)
        search.generation = state.get("generation", 0)
        members = state.get("population", [])
        if members:
            incumbent = state.get("incumbent") or members[0]
            n = len(points)
            if len(members) != cfg.population_size:
                raise ValueError(
                    f"checkpoint holds {len(members)} members, config expects {cfg.population_size}"
                )
            for perm in list(members) + [incumbent]:
                if len(perm) != n or not is_permutation(perm):
                    raise ValueError(f"checkpoint tour is not a permutation of 0..{n - 1}")
            search.population.members = [list(m) for m in members]
            search.population.incumbent = list(incumbent)
            search.population.sort()
        rng_state = state.get("rng_state")
        if rng is None and rng_state is not None:
            # json turns the state tuple into nested lists.
            version, internal, gauss_next = rng_state
            search.rng.setstate((version, tuple(internal), gauss_next))
        return search
