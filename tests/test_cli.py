import json
from dataclasses import asdict

import pytest

from tsp_genetic.cli import main, persist_best
from tsp_genetic.data import import_permutation, load_points
from tsp_genetic.evolutionary import EvolutionConfig
from tsp_genetic.permutation import is_permutation
from tsp_genetic.points import tour_distance


@pytest.fixture
def cities(tmp_path):
    path = tmp_path / "cities.csv"
    path.write_text("0,0\n2,2\n3,1\n4,2\n1,3\n")
    return path


def test_run_writes_best_tour_and_checkpoint(cities, tmp_path, capsys):
    best = tmp_path / "shortestpath.csv"
    checkpoint = tmp_path / "state.json"
    main(
        [
            "run",
            "--points", str(cities),
            "--best-tour", str(best),
            "--generations", "200",
            "--seed", "1",
            "--log-every", "50",
            "--checkpoint", str(checkpoint),
        ]
    )
    out = capsys.readouterr().out
    assert "Dist:" in out
    assert "gen 200" in out
    assert "no persisted tour" in out
    tour = import_permutation(best)
    assert is_permutation(tour) and len(tour) == 5
    state = json.loads(checkpoint.read_text())
    assert state["generation"] == 200
    assert state["incumbent"] == tour


def test_run_seeds_from_persisted_tour(cities, tmp_path, capsys):
    best = tmp_path / "shortestpath.csv"
    best.write_text("4,3,2,1,0\n")
    main(["run", "--points", str(cities), "--best-tour", str(best), "--generations", "10", "--seed", "3"])
    assert "loaded persisted tour" in capsys.readouterr().out


def test_run_resumes_from_checkpoint(cities, tmp_path, capsys):
    checkpoint = tmp_path / "state.json"
    args = [
        "run",
        "--points", str(cities),
        "--best-tour", str(tmp_path / "best.csv"),
        "--generations", "100",
        "--seed", "2",
        "--checkpoint", str(checkpoint),
    ]
    main(args)
    main(args + ["--resume"])
    out = capsys.readouterr().out
    assert "resuming from" in out
    assert json.loads(checkpoint.read_text())["generation"] == 100


def test_naive(cities, capsys):
    main(["naive", "--points", str(cities)])
    assert "Dist:" in capsys.readouterr().out


def test_compare(cities, capsys):
    main(["compare", "--points", str(cities), "--generations", "300", "--trials", "2", "--seed", "4"])
    out = capsys.readouterr().out
    assert "exhaustive" in out
    assert out.count("genetic") == 2
    assert "mean" in out


def test_bad_config_exits(cities):
    with pytest.raises(SystemExit) as exc:
        main(["run", "--points", str(cities), "--population-size", "0", "--best-tour", ""])
    assert exc.value.code == 2


@pytest.fixture
def skewed(tmp_path):
    # Exact optimum 0,3,2,1; summed squared edges prefer 0,1,3,2 instead.
    path = tmp_path / "skewed.csv"
    path.write_text("0,0\n10,0\n0,1\n0.1,0.5\n")
    return path


def _exact(points_path, tour):
    return tour_distance(load_points(points_path), tour)


def test_squared_metric_never_worsens_persisted_tour(skewed, tmp_path, capsys):
    best = tmp_path / "shortestpath.csv"
    best.write_text("0,3,2,1\n")
    before = _exact(skewed, [0, 3, 2, 1])
    main(
        [
            "run",
            "--points", str(skewed),
            "--best-tour", str(best),
            "--metric", "squared",
            "--population-size", "30",
            "--generations", "50",
            "--seed", "1",
        ]
    )
    assert "kept shorter tour" in capsys.readouterr().out
    assert import_permutation(best) == [0, 3, 2, 1]
    assert _exact(skewed, import_permutation(best)) <= before


def test_resume_never_worsens_persisted_tour(skewed, tmp_path, capsys):
    best = tmp_path / "shortestpath.csv"
    best.write_text("0,3,2,1\n")
    checkpoint = tmp_path / "state.json"
    cfg = EvolutionConfig(population_size=1, generations=0, random_seed=5)
    checkpoint.write_text(
        json.dumps(
            {
                "cfg": asdict(cfg),
                "generation": 0,
                "population": [[0, 1, 3, 2]],
                "incumbent": [0, 1, 3, 2],
            }
        )
    )
    main(
        [
            "run",
            "--points", str(skewed),
            "--best-tour", str(best),
            "--checkpoint", str(checkpoint),
            "--resume",
        ]
    )
    out = capsys.readouterr().out
    assert "resuming from" in out
    assert "kept shorter tour" in out
    assert import_permutation(best) == [0, 3, 2, 1]


def test_persist_best_writes_shorter_tour(skewed, tmp_path):
    best = tmp_path / "shortestpath.csv"
    points = load_points(skewed)
    kept = persist_best(best, points, [0, 3, 2, 1], known=[0, 1, 3, 2])
    assert kept == [0, 3, 2, 1]
    assert import_permutation(best) == [0, 3, 2, 1]
    assert persist_best(best, points, [0, 1, 2, 3], known=None) == [0, 1, 2, 3]
