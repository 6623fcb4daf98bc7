import argparse
import json
import random
import sys
import time
from pathlib import Path
from typing import List, Optional

from tsp_genetic.data import describe, export_permutation, import_permutation, load_instance
from tsp_genetic.evaluation import Fitness, aggregate_fitness, evaluate_solver
from tsp_genetic.evolutionary import EvolutionConfig, GeneticSearch
from tsp_genetic.permutation import is_permutation
from tsp_genetic.points import PointSet, tour_distance
from tsp_genetic.solvers import ExhaustiveSolver, GeneticSolver
from tsp_genetic.solvers.exhaustive import MAX_POINTS, exhaustive_tour


DEFAULT_BEST_TOUR = Path("shortestpath.csv")


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def save_checkpoint(search: GeneticSearch, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(search.to_state(), indent=2))


def load_checkpoint(points: PointSet, path: Path) -> GeneticSearch:
    state = json.loads(path.read_text())
    return GeneticSearch.from_state(state, points)


def _config_from_args(args) -> EvolutionConfig:
    return EvolutionConfig(
        population_size=args.population_size,
        generations=args.generations,
        elite_fraction=args.elite_fraction,
        mutation_rate=args.mutation_rate,
        metric=args.metric,
        random_seed=args.seed,
    )


def _load_seed_tour(path: Optional[Path], n: int) -> Optional[List[int]]:
    if path is None:
        return None
    seed = import_permutation(path)
    if seed is None:
        log(f"no persisted tour at {path}; starting from a random population")
        return None
    if len(seed) != n:
        log(f"persisted tour at {path} covers {len(seed)} points, not {n}; ignoring it")
        return None
    log(f"loaded persisted tour from {path}")
    return seed


def _progress_logger(every: int):
    def callback(search: GeneticSearch) -> None:
        if every <= 0 or search.generation % every:
            return
        pop = search.population
        log(
            f"gen {search.generation}: best={pop.distance(pop.best):.2f} "
            f"incumbent={pop.distance(pop.incumbent):.2f}"
        )

    return callback


def build_search(points: PointSet, args, seed: Optional[List[int]] = None) -> GeneticSearch:
    checkpoint = Path(args.checkpoint) if args.checkpoint else None
    if args.resume and checkpoint is not None and checkpoint.exists():
        log(f"resuming from {checkpoint}")
        return load_checkpoint(points, checkpoint)
    cfg = _config_from_args(args)
    log("starting new population")
    return GeneticSearch(cfg, points, seed_tour=seed)


def persist_best(path: Path, points: PointSet, perm: List[int], known: Optional[List[int]]) -> List[int]:
    """Write perm to path unless the known tour is shorter; return the tour kept."""
    if known is not None and is_permutation(known):
        if tour_distance(points, known) < tour_distance(points, perm):
            log(f"kept shorter tour already in {path}")
            return known
    export_permutation(path, perm)
    log(f"wrote incumbent tour to {path}")
    return perm


def run(args) -> None:
    t0 = time.perf_counter()
    instance = load_instance(Path(args.points))
    log(f"loaded {describe(instance)} in {time.perf_counter() - t0:.2f}s")

    best_tour = Path(args.best_tour) if args.best_tour else None
    known = _load_seed_tour(best_tour, len(instance.points))
    search = build_search(instance.points, args, seed=known)
    cfg = search.cfg
    remaining = max(0, cfg.generations - search.generation)
    log(
        f"running {remaining} generations: population={cfg.population_size} "
        f"elite={cfg.elite_fraction} mutation={cfg.mutation_rate} metric={cfg.metric}"
    )
    t_run = time.perf_counter()
    perm, dist = search.run(remaining, callback=_progress_logger(args.log_every))
    log(f"finished in {time.perf_counter() - t_run:.2f}s")

    print(f"Path: {perm}\nDist: {dist:.2f}")
    if best_tour is not None:
        persist_best(best_tour, instance.points, perm, known)
    if args.checkpoint:
        save_checkpoint(search, Path(args.checkpoint))
        log(f"wrote checkpoint to {args.checkpoint}")


def naive(args) -> None:
    instance = load_instance(Path(args.points))
    log(f"enumerating all tours of {len(instance.points)} points")
    dist, perm = exhaustive_tour(instance.points, max_points=args.max_points)
    print(f"Path: {perm}\nDist: {dist:.2f}")


def _print_fitness(f: Fitness) -> None:
    print(f"{f.solver_name:>10}: length={f.length:10.2f} runtime={f.runtime:8.3f}s gap={f.gap:8.4f}")


def compare(args) -> None:
    instance = load_instance(Path(args.points))
    points = instance.points
    optimum = instance.optimum
    if len(points) <= args.max_points:
        exact = evaluate_solver(ExhaustiveSolver(args.max_points), points, optimum)
        _print_fitness(exact)
        if optimum is None:
            optimum = exact.length
    elif optimum is None:
        log(f"{len(points)} points exceeds the exhaustive limit and no optimum is known; gaps are infinite")

    rng = random.Random(args.seed)
    trials = []
    for _ in range(args.trials):
        solver = GeneticSolver(_config_from_args(args), rng=rng)
        fitness = evaluate_solver(solver, points, optimum)
        _print_fitness(fitness)
        trials.append(fitness)
    agg = aggregate_fitness(trials)
    print(
        f"{'mean':>10}: length={agg['length']:10.2f} runtime={agg['runtime']:8.3f}s gap={agg['gap']:8.4f}"
    )


def _add_search_args(parser: argparse.ArgumentParser, generations: int) -> None:
    defaults = EvolutionConfig()
    parser.add_argument("--points", required=True, help="CSV (one point per line) or TSPLIB .tsp file")
    parser.add_argument("--population-size", type=int, default=defaults.population_size)
    parser.add_argument("--generations", type=int, default=generations)
    parser.add_argument("--elite-fraction", type=float, default=defaults.elite_fraction)
    parser.add_argument("--mutation-rate", type=float, default=defaults.mutation_rate)
    parser.add_argument("--metric", choices=["exact", "squared"], default=defaults.metric)
    parser.add_argument("--seed", type=int, default=None, help="random seed (default: time based)")


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Genetic TSP solver")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the genetic search for a fixed number of generations")
    _add_search_args(run_parser, EvolutionConfig().generations)
    run_parser.add_argument("--best-tour", default=str(DEFAULT_BEST_TOUR), help="persisted best-known tour")
    run_parser.add_argument("--log-every", type=int, default=10000)
    run_parser.add_argument("--checkpoint", default=None, help="JSON checkpoint to write after the run")
    run_parser.add_argument("--resume", action="store_true", help="resume from --checkpoint if it exists")
    run_parser.set_defaults(func=run)

    naive_parser = subparsers.add_parser("naive", help="Solve exactly by enumerating every tour")
    naive_parser.add_argument("--points", required=True)
    naive_parser.add_argument("--max-points", type=int, default=MAX_POINTS)
    naive_parser.set_defaults(func=naive)

    compare_parser = subparsers.add_parser("compare", help="Compare the genetic search against the baseline")
    _add_search_args(compare_parser, 10000)
    compare_parser.add_argument("--trials", type=int, default=3)
    compare_parser.add_argument("--max-points", type=int, default=10)
    compare_parser.set_defaults(func=compare)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except (ValueError, OSError) as exc:
        parser.exit(2, f"error: {exc}\n")
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)


if __name__ == "__main__":
    main()
