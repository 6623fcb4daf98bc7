import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..points import PointSet


Tour = List[int]


class Solver(ABC):
    name: str = "base"

    @abstractmethod
    def solve(self, points: PointSet) -> Tour:
        raise NotImplementedError


@dataclass
class SolveResult:
    tour: Tour
    length: float
    solver_name: str
    optimum: Optional[float] = None

    @property
    def gap(self) -> float:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return float("inf")
        return (self.length - self.optimum) / self.optimum
