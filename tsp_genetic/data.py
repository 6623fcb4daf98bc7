from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

import numpy as np
import tsplib95

from .permutation import Permutation, is_permutation
from .points import PointSet, tour_distance


@dataclass
class Instance:
    name: str
    path: Path
    points: PointSet
    optimum: Optional[float]


def _is_tsplib(path: Path) -> bool:
    return path.suffix.lower() in (".tsp", ".tour")


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _problem_points(problem, path: Path) -> PointSet:
    coords = problem.node_coords
    if not coords:
        raise ValueError(f"{path} has no NODE_COORD_SECTION")
    return PointSet([coords[node] for node in sorted(coords)])


def _load_csv_points(path: Path) -> PointSet:
    if not path.read_text().strip():
        raise ValueError(f"{path} contains no points")
    rows = np.loadtxt(path, delimiter=",", dtype=np.float64, ndmin=2)
    return PointSet(rows)


def load_points(path: Path) -> PointSet:
    path = Path(path)
    if _is_tsplib(path):
        return _problem_points(tsplib95.load(path), path)
    return _load_csv_points(path)


def _tsplib_tour(path: Path) -> Permutation:
    tour_file = tsplib95.load(path)
    if not tour_file.tours:
        raise ValueError(f"{path} has no TOUR_SECTION")
    # TSPLIB node ids are 1-based.
    return [node - 1 for node in tour_file.tours[0]]


def import_permutation(path: Path) -> Optional[Permutation]:
    """Read a persisted tour; a missing file yields None."""
    path = Path(path)
    if not path.exists():
        return None
    if _is_tsplib(path):
        return _tsplib_tour(path)
    text = path.read_text().strip()
    if not text:
        return None
    return [int(tok) for tok in text.replace("\n", ",").split(",") if tok.strip()]


def export_permutation(path: Path, perm: Sequence[int]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(",".join(str(v) for v in perm) + "\n")


def _load_optimum(points: PointSet, path: Path) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour = _tsplib_tour(candidate)
        if len(tour) != len(points) or not is_permutation(tour):
            continue
        return tour_distance(points, tour)
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    if not _is_tsplib(path):
        return Instance(name=path.stem, path=path, points=_load_csv_points(path), optimum=None)
    problem = tsplib95.load(path)
    points = _problem_points(problem, path)
    name = problem.name or path.stem
    return Instance(name=name, path=path, points=points, optimum=_load_optimum(points, path))


def describe(instance: Instance) -> Dict:
    return {
        "name": instance.name,
        "path": str(instance.path),
        "points": len(instance.points),
        "dimension": instance.points.dimension,
        "optimum": instance.optimum,
    }
