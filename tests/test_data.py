from pathlib import Path

import pytest

from tsp_genetic import data
from tsp_genetic.data import (
    describe,
    export_permutation,
    import_permutation,
    load_instance,
    load_points,
)


TSP_TEXT = """NAME : square4
TYPE : TSP
DIMENSION : 4
EDGE_WEIGHT_TYPE : EUC_2D
NODE_COORD_SECTION
1 0 0
2 0 10
3 10 10
4 10 0
EOF
"""

TOUR_TEXT = """NAME : square4.opt.tour
TYPE : TOUR
DIMENSION : 4
TOUR_SECTION
1
2
3
4
-1
EOF
"""


def test_load_csv_points(tmp_path):
    path = tmp_path / "cities.csv"
    path.write_text("0,0\n2,2\n3,1\n4,2\n")
    points = load_points(path)
    assert len(points) == 4
    assert points.dimension == 2
    assert points[2] == (3.0, 1.0)


def test_load_single_csv_point(tmp_path):
    path = tmp_path / "one.csv"
    path.write_text("1.5,2.5,3.5\n")
    points = load_points(path)
    assert len(points) == 1
    assert points.dimension == 3


def test_load_empty_csv_is_rejected(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(ValueError):
        load_points(path)


def test_load_ragged_csv_is_rejected(tmp_path):
    path = tmp_path / "ragged.csv"
    path.write_text("0,0\n1,2,3\n")
    with pytest.raises(ValueError):
        load_points(path)


def test_missing_tour_is_none(tmp_path):
    assert import_permutation(tmp_path / "shortestpath.csv") is None


def test_export_then_import(tmp_path):
    path = tmp_path / "out" / "shortestpath.csv"
    export_permutation(path, [2, 0, 3, 1])
    assert path.read_text() == "2,0,3,1\n"
    assert import_permutation(path) == [2, 0, 3, 1]


def test_load_tsplib_instance_with_optimum(tmp_path):
    tsp = tmp_path / "square4.tsp"
    tsp.write_text(TSP_TEXT)
    (tmp_path / "square4.opt.tour").write_text(TOUR_TEXT)
    instance = load_instance(tsp)
    assert instance.name == "square4"
    assert len(instance.points) == 4
    assert instance.points[1] == (0.0, 10.0)
    assert instance.optimum == pytest.approx(40.0)
    assert describe(instance)["points"] == 4


def test_import_tsplib_tour(tmp_path):
    path = tmp_path / "square4.opt.tour"
    path.write_text(TOUR_TEXT)
    assert import_permutation(path) == [0, 1, 2, 3]


def test_csv_instance_has_no_optimum(tmp_path):
    path = tmp_path / "cities.csv"
    path.write_text("0,0\n1,1\n")
    instance = load_instance(path)
    assert instance.name == "cities"
    assert instance.optimum is None


PARTIAL_TOUR_TEXT = """NAME : partial.tour
TYPE : TOUR
DIMENSION : 3
TOUR_SECTION
2
3
4
-1
EOF
"""


def test_tsplib_tour_ids_are_one_based(tmp_path):
    path = tmp_path / "partial.tour"
    path.write_text(PARTIAL_TOUR_TEXT)
    assert import_permutation(path) == [1, 2, 3]


def test_load_instance_parses_problem_once(tmp_path, monkeypatch):
    tsp = tmp_path / "square4.tsp"
    tsp.write_text(TSP_TEXT)
    calls = []
    real_load = data.tsplib95.load

    def counting_load(path, *args, **kwargs):
        calls.append(Path(path))
        return real_load(path, *args, **kwargs)

    monkeypatch.setattr(data.tsplib95, "load", counting_load)
    instance = load_instance(tsp)
    assert instance.name == "square4"
    assert calls == [tsp]
