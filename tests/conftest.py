import random

import pytest

from tsp_genetic.points import PointSet


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def rectangle():
    return PointSet([(0, 0), (2, 2), (3, 1), (4, 2)])


@pytest.fixture
def square():
    return PointSet([(0, 0), (0, 1), (1, 1), (1, 0)])


@pytest.fixture
def scattered():
    gen = random.Random(99)
    return PointSet([(gen.uniform(0, 50), gen.uniform(0, 50)) for _ in range(12)])
