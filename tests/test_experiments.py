import csv
import random

import numpy as np
import pytest

from designaco import AlgorithmParameters, ConfigurationError, InvariantViolation, SyntheticDesign, run_trial
from designaco.experiments import run_parameter_sweep, run_repeated_trials


def test_synthetic_design_layout():
    d = SyntheticDesign(n_methods=4, n_attributes=3, n_classes=2)
    assert d.nest_number == 7
    assert d.matrix_size() == 10


def test_random_path_covers_every_element_once():
    d = SyntheticDesign(n_methods=4, n_attributes=3, n_classes=3)
    path = d.random_path(random.Random(1))
    assert path[0].number == d.nest_number
    assert path[-1].is_end_of_class
    assert sum(n.is_end_of_class for n in path) == 3
    elements = sorted(n.number for seg in path.segments() for n in seg)
    assert elements == list(range(7))
    assert all(len(seg) >= 1 for seg in path.segments())
    assert 0.0 <= path.combined <= 1.0


def test_design_needs_enough_elements():
    with pytest.raises(InvariantViolation):
        SyntheticDesign(n_methods=1, n_attributes=0, n_classes=2)


@pytest.mark.parametrize("algorithm", ["SIMPLE_ACO", "MMAS"])
@pytest.mark.parametrize("elitism", [False, True])
def test_run_trial(algorithm, elitism):
    d = SyntheticDesign(5, 4, 3)
    params = AlgorithmParameters(algorithm=algorithm, fitness="COMBINED", evaporation_elitism=elitism,
                                 number_of_iterations=12, pheromone_strength="TRIPLE")
    res = run_trial(d, params, n_ants=6, seed=3, snapshot_every=4)
    assert len(res.history) == 12
    assert [it for it, _ in res.snapshots] == [0, 4, 8]
    assert res.matrix.is_symmetric()
    if algorithm == "MMAS":
        assert res.matrix.highest() <= params.mmas_pheromone_maximum


def test_run_trial_update_and_evaporate_order():
    d = SyntheticDesign(5, 4, 3)
    params = AlgorithmParameters(algorithm="SIMPLE_ACO", fitness="COMBINED", number_of_iterations=1)
    update_first = run_trial(d, params, n_ants=3, seed=5, initial=1.0).matrix.values()
    evaporate_first = run_trial(d, params, n_ants=3, seed=5, initial=1.0, evaporate_first=True).matrix.values()
    # same colony: (1 + D) * 0.9 against 0.9 + D for the deposit D of each cell
    assert np.allclose(update_first - 0.9, 0.9 * (evaporate_first - 0.9))
    assert not np.allclose(update_first, evaporate_first)
    assert update_first.min() == pytest.approx(0.9)


def test_evaporate_first_rejects_elitism():
    d = SyntheticDesign(5, 4, 3)
    params = AlgorithmParameters(algorithm="MMAS", fitness="COMBINED", evaporation_elitism=True,
                                 number_of_iterations=3)
    with pytest.raises(ConfigurationError):
        run_trial(d, params, n_ants=4, seed=1, evaporate_first=True)


def test_run_trial_with_antipheromone():
    d = SyntheticDesign(5, 4, 3)
    params = AlgorithmParameters(algorithm="MMAS", fitness="COMBINED", number_of_iterations=10,
                                 mmas_antipheromone=True, antipheromone_phase_percentage=50,
                                 antipheromone_strength="TRIPLE")
    res = run_trial(d, params, n_ants=5, seed=11)
    assert res.matrix.is_symmetric()


def test_trials_are_reproducible():
    d = SyntheticDesign(5, 4, 3)
    params = AlgorithmParameters(number_of_iterations=5)
    a = run_trial(d, params, n_ants=4, seed=9)
    b = run_trial(d, params, n_ants=4, seed=9)
    assert a.history == b.history


def test_repeated_trials_and_sweep(tmp_path):
    d = SyntheticDesign(4, 3, 2)
    base = AlgorithmParameters(algorithm="MMAS", fitness="COMBINED", number_of_iterations=5)
    stats, details = run_repeated_trials(d, base, n_runs=2, n_ants=4)
    assert stats["n_runs"] == 2
    assert len(details) == 2

    csv_path = tmp_path / "grid.csv"
    rows = run_parameter_sweep(d, {"rho": [0.1, 0.2], "mu": [1.0]}, base_params=base, n_runs=1, n_ants=4,
                               csv_path=str(csv_path))
    assert len(rows) == 2
    with open(csv_path, newline="") as f:
        assert len(list(csv.DictReader(f))) == 2
