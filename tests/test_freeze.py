import logging

import pytest

from designaco import (FREEZE_DELTA, AlgorithmParameters, Attribute, DesignClass, InvariantViolation,
                       Method, PheromoneMatrix, evaporate, freeze_update)


def frozen_class():
    return DesignClass(methods=[Method(0, "draw"), Method(1, "resize")],
                       attributes=[Attribute(3, "width")], name="Shape")


def test_freeze_pins_method_attribute_pairs():
    m = PheromoneMatrix.uniform(6, 0.5)
    freeze_update(m, [frozen_class()])
    for method in (0, 1):
        assert m.get_at(method, 3) == FREEZE_DELTA
        assert m.get_at(3, method) == FREEZE_DELTA
    # method/method pairs are not frozen
    assert m.get_at(0, 1) == 0.5
    assert m.is_symmetric()


def test_frozen_cells_still_evaporate():
    m = PheromoneMatrix.uniform(6, 0.5)
    freeze_update(m, [frozen_class()])
    evaporate(m, AlgorithmParameters(rho=0.1))
    assert m.get_at(0, 3) == pytest.approx(FREEZE_DELTA * 0.9)
    assert m.get_at(2, 4) == pytest.approx(0.45)


def test_freeze_several_classes():
    m = PheromoneMatrix(6)
    other = DesignClass(methods=[Method(2)], attributes=[Attribute(4), Attribute(5)])
    freeze_update(m, [frozen_class(), other])
    assert m.get_at(2, 4) == FREEZE_DELTA
    assert m.get_at(5, 2) == FREEZE_DELTA
    assert m.get_at(0, 4) == 0.0


def test_freeze_logs_frozen_classes(caplog):
    caplog.set_level(logging.INFO, logger="designaco")
    freeze_update(PheromoneMatrix(6), [frozen_class()])
    assert "class in freeze list" in caplog.text
    assert "width" in caplog.text


def test_freeze_empty_list_is_a_no_op():
    m = PheromoneMatrix.uniform(3, 0.5)
    freeze_update(m, [])
    assert m.lowest() == m.highest() == 0.5


def test_freeze_bad_index_writes_nothing():
    m = PheromoneMatrix.uniform(4, 0.5)
    bad = DesignClass(methods=[Method(0), Method(1)], attributes=[Attribute(2), Attribute(9)])
    with pytest.raises(InvariantViolation):
        freeze_update(m, [bad])
    assert m.get_at(0, 2) == 0.5


def test_freeze_requires_matrix_and_list():
    with pytest.raises(InvariantViolation):
        freeze_update(None, [frozen_class()])
    with pytest.raises(InvariantViolation):
        freeze_update(PheromoneMatrix(4), None)
