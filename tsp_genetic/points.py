import math
from typing import Callable, Iterable, Iterator, Sequence, Tuple

import numpy as np


Point = Tuple[float, ...]


class PointSet:
    """Immutable, ordered set of points of a common dimension."""

    def __init__(self, coords):
        try:
            arr = np.array(coords, dtype=np.float64)
        except ValueError as exc:
            raise ValueError(f"points must share one dimension: {exc}") from exc
        if arr.ndim >= 1 and arr.shape[0] == 0:
            raise ValueError("point set must contain at least one point")
        if arr.ndim != 2:
            raise ValueError(f"expected a sequence of points, got array of shape {arr.shape}")
        if arr.shape[1] == 0:
            raise ValueError("points must have at least one coordinate")
        arr.flags.writeable = False
        self._coords = arr

    @classmethod
    def from_iterable(cls, rows: Iterable[Sequence[float]]) -> "PointSet":
        return cls([list(r) for r in rows])

    @property
    def coords(self) -> np.ndarray:
        return self._coords

    @property
    def dimension(self) -> int:
        return int(self._coords.shape[1])

    def __len__(self) -> int:
        return int(self._coords.shape[0])

    def __getitem__(self, idx: int) -> Point:
        return tuple(float(x) for x in self._coords[idx])

    def __iter__(self) -> Iterator[Point]:
        for i in range(len(self)):
            yield self[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, PointSet):
            return NotImplemented
        return np.array_equal(self._coords, other._coords)

    def __repr__(self) -> str:
        return f"PointSet(n={len(self)}, dimension={self.dimension})"


def squared_distance(p: Sequence[float], q: Sequence[float]) -> float:
    a = np.asarray(p, dtype=np.float64)
    b = np.asarray(q, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"dimension mismatch: {a.shape} vs {b.shape}")
    d = a - b
    return float(np.dot(d, d))


def distance(p: Sequence[float], q: Sequence[float]) -> float:
    return math.sqrt(squared_distance(p, q))


def _edge_squared_lengths(points: PointSet, perm: Sequence[int]) -> np.ndarray:
    if len(perm) != len(points):
        raise IndexError(
            f"permutation of length {len(perm)} does not match {len(points)} points"
        )
    ordered = points.coords[np.asarray(perm, dtype=np.intp)]
    diff = ordered - np.roll(ordered, -1, axis=0)
    return np.einsum("ij,ij->i", diff, diff)


def tour_distance(points: PointSet, perm: Sequence[int]) -> float:
    return float(np.sqrt(_edge_squared_lengths(points, perm)).sum())


def tour_squared_distance(points: PointSet, perm: Sequence[int]) -> float:
    return float(_edge_squared_lengths(points, perm).sum())


TourMetric = Callable[[PointSet, Sequence[int]], float]

METRICS = {
    "exact": tour_distance,
    "squared": tour_squared_distance,
}


def tour_metric(name: str) -> TourMetric:
    try:
        return METRICS[name]
    except KeyError:
        raise ValueError(f"unknown metric {name!r}; expected one of {sorted(METRICS)}") from None
