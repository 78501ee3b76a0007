from __future__ import annotations
from typing import Optional, Sequence

from .colony import Representatives
from .design import Path
from .errors import InvariantViolation
from .matrix import PheromoneMatrix
from .mmas import MaxMinOperators
from .operators_base import PheromoneOperators, freeze_update
from .parameters import Algorithm, AlgorithmParameters, coerce_enum
from .simple_aco import SimpleACOOperators

OPERATORS = {Algorithm.SIMPLE_ACO: SimpleACOOperators, Algorithm.MMAS: MaxMinOperators}


def operators_for(params: AlgorithmParameters, algorithm: Optional[Algorithm] = None) -> PheromoneOperators:
    if params is None:
        raise InvariantViolation("algorithm parameters are required")
    algorithm = params.algorithm if algorithm is None else algorithm
    return OPERATORS[coerce_enum(Algorithm, algorithm, "algorithm")](params)


def evaporate(matrix: PheromoneMatrix, params: AlgorithmParameters) -> None:
    operators_for(params).evaporate(matrix)


def update(matrix: PheromoneMatrix, colony: Sequence[Path], representatives: Optional[Representatives],
           iteration: int, params: AlgorithmParameters) -> None:
    operators_for(params).update(matrix, colony, representatives, iteration)


def calculate_delta(path: Path, params: AlgorithmParameters) -> float:
    return operators_for(params).calculate_delta(path)


def lay_pheromone_for_path(path: Path, matrix: PheromoneMatrix, params: AlgorithmParameters) -> None:
    operators_for(params).lay_pheromone_for_path(path, matrix)


def lay_antipheromone_for_path(algorithm: Algorithm, path: Path, matrix: PheromoneMatrix,
                               params: AlgorithmParameters) -> None:
    operators_for(params, algorithm).lay_antipheromone_for_path(path, matrix)


__all__ = [
    "OPERATORS",
    "operators_for",
    "evaporate",
    "update",
    "calculate_delta",
    "lay_pheromone_for_path",
    "lay_antipheromone_for_path",
    "freeze_update",
]
