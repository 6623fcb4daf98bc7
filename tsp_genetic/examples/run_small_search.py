import random

from tsp_genetic.evolutionary import EvolutionConfig, GeneticSearch
from tsp_genetic.points import PointSet
from tsp_genetic.solvers import exhaustive_tour


def main():
    rng = random.Random(7)
    points = PointSet([(rng.uniform(0, 100), rng.uniform(0, 100)) for _ in range(9)])
    optimum, _ = exhaustive_tour(points)

    cfg = EvolutionConfig(population_size=12, generations=2000, random_seed=7)
    search = GeneticSearch(cfg, points)
    generations = 5
    per_round = cfg.generations // generations
    for g in range(generations):
        search.run(per_round)
        perm, dist = search.best()
        print(f"round {g+1}: gen={search.generation} dist={dist:.2f} optimum={optimum:.2f} tour={perm}")


if __name__ == "__main__":
    main()
