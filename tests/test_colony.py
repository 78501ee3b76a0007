import pytest

from designaco import ConfigurationError, InvariantViolation, Measure, Representatives

from conftest import single_class_path


def test_from_colony_ranks_each_measure():
    colony = [
        single_class_path(0, cbo=0.3, nac=0.9, atmr=0.5, combined=0.4),
        single_class_path(1, cbo=0.1, nac=0.2, atmr=0.7, combined=0.6),
        single_class_path(2, cbo=0.8, nac=0.5, atmr=0.1, combined=0.2),
        single_class_path(3, cbo=0.5, nac=0.4, atmr=0.9, combined=0.8),
    ]
    reps = Representatives.from_colony(colony)
    assert reps.best_cbo is colony[1]
    assert reps.worst_cbo is colony[2]
    assert reps.best_nac is colony[1]
    assert reps.worst_nac is colony[0]
    assert reps.best_atmr is colony[2]
    assert reps.best_combined_ranked(3) == [colony[2], colony[0], colony[1]]
    assert reps.worst_combined_ranked(3) == [colony[3], colony[1], colony[0]]
    assert reps.best(Measure.CBO) is colony[1]
    assert reps.worst(Measure.COMBINED) is colony[3]


def test_small_colony_leaves_missing_ranks_empty():
    colony = [single_class_path(0, combined=0.2), single_class_path(1, combined=0.7)]
    reps = Representatives.from_colony(colony)
    assert reps.second_best_combined is colony[1]
    assert reps.third_best_combined is None
    assert reps.third_worst_combined is None
    assert reps.best_combined_ranked(2) == [colony[0], colony[1]]
    with pytest.raises(InvariantViolation):
        reps.best_combined_ranked(3)


def test_missing_path_in_colony_rejected():
    with pytest.raises(InvariantViolation):
        Representatives.from_colony([single_class_path(0), None])


def test_empty_colony_rejected():
    with pytest.raises(InvariantViolation):
        Representatives.from_colony([])


def test_worst_atmr_is_not_tracked():
    reps = Representatives.from_colony([single_class_path(0)])
    with pytest.raises(ConfigurationError):
        reps.worst(Measure.ATMR)
