"""Pheromone operators shared by every ACO variant.

Pheromone is deposited for full path designs in proportion to their
fitness: the deposit for a path is ``(1 - fitness) ** mu``. Evaporation
(decay) multiplies every cell by ``1 - rho``, optionally adjusted by a small
elitist term proportional to the cell's distance from the median value.
See Dorigo and Stutzle, "Ant Colony Optimization", MIT Press, 2004.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .colony import Representatives
from .design import DesignClass, Path
from .errors import ConfigurationError, InvariantViolation
from .matrix import PheromoneMatrix, checked_index
from .parameters import ELITIST_FACTOR, FREEZE_DELTA, AlgorithmParameters, Measure

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


def path_edges(path: Path, size: int) -> List[Edge]:
    """Edges (from, to) between consecutive elements of each class of ``path``.

    The chain restarts after every end-of-class marker, so no edge leads into
    or out of a marker. Indices are checked against ``size`` before anything
    is written.
    """
    if path is None:
        raise InvariantViolation("path is required")
    if len(path) == 0 or not path[-1].is_end_of_class:
        raise InvariantViolation("final node of a path must be an end-of-class marker")

    edges: List[Edge] = []
    source: Optional[int] = None
    for node in path:
        if node.is_end_of_class:
            source = None
            continue
        target = checked_index(node.number, size)
        if source is not None:
            edges.append((source, target))
        source = target
    return edges


def freeze_update(matrix: PheromoneMatrix, classes: Iterable[DesignClass]) -> None:
    """Pin every (method, attribute) pair of each class at FREEZE_DELTA."""
    if matrix is None:
        raise InvariantViolation("pheromone matrix is required")
    if classes is None:
        raise InvariantViolation("freeze list is required")
    classes = list(classes)
    size = matrix.size()

    pairs = []
    for c in classes:
        logger.info("class in freeze list: methods=%s attributes=%s",
                    [(m.number, m.name) for m in c.methods],
                    [(a.number, a.name) for a in c.attributes])
        for m in c.methods:
            method_number = checked_index(m.number, size)
            for a in c.attributes:
                pairs.append((method_number, checked_index(a.number, size)))

    for method_number, attribute_number in pairs:
        matrix.set_at(method_number, attribute_number, FREEZE_DELTA)
        matrix.set_at(attribute_number, method_number, FREEZE_DELTA)

    matrix.show()


class PheromoneOperators:
    """Evaporation, deposit and update dispatch; variants override the hooks."""

    def __init__(self, params: AlgorithmParameters):
        if params is None:
            raise InvariantViolation("algorithm parameters are required")
        self.params = params

    # ------------------------------------------------------------------ evaporation

    def evaporate(self, matrix: PheromoneMatrix) -> None:
        if matrix is None:
            raise InvariantViolation("pheromone matrix is required")
        n = matrix.size()
        factor = self.params.evaporation_factor
        if not 0.0 <= factor <= 1.0:
            raise InvariantViolation(f"evaporation factor {factor} outside [0, 1]")

        if not self.params.evaporation_elitism:
            for i in range(n):
                for j in range(n):
                    matrix.set_at(i, j, matrix.get_at(i, j) * factor)
            return

        lowest, highest = math.inf, -math.inf
        for i in range(n):
            for j in range(n):
                prob = matrix.get_at(i, j)
                lowest = min(lowest, prob)
                highest = max(highest, prob)
        if highest - lowest == 0.0:
            raise InvariantViolation("elitist evaporation needs a non-degenerate matrix (highest == lowest)")
        median = lowest + (highest - lowest) / 2.0
        if median == 0.0:
            raise InvariantViolation("elitist evaporation needs a non-zero median")

        for i in range(n):
            for j in range(n):
                prob = matrix.get_at(i, j)
                multiplier = 1.0
                if prob > median:   # scaled by distance below the highest value
                    multiplier = factor * (1 - ((highest - prob) / median) * ELITIST_FACTOR)
                elif prob < median:  # scaled by distance below the median
                    multiplier = factor * (1 + ((median - prob) / median) * ELITIST_FACTOR)
                # at the median the multiplier stays at 1.0
                matrix.set_at(i, j, prob * multiplier)

    # ------------------------------------------------------------------ deposit

    def calculate_delta(self, path: Path) -> float:
        if path is None:
            raise InvariantViolation("path is required")
        measure = self.params.fitness
        if measure not in (Measure.CBO, Measure.NAC, Measure.COMBINED):
            raise ConfigurationError(f"impossible fitness parameter {measure.name}")
        raw = 1.0 - path.fitness(measure)
        if not 0.0 <= raw <= 1.0:
            raise InvariantViolation(f"{measure.name} fitness {path.fitness(measure)} outside [0, 1]")
        return raw ** self.params.mu

    def _bound(self, value: float) -> float:
        # no range enforcement unless a variant imposes one
        return value

    def deposit_plan(self, path: Path, size: int) -> Tuple[float, List[Edge]]:
        """Delta and edges for ``path``, validated without touching a matrix."""
        return self.calculate_delta(path), path_edges(path, size)

    def _apply_deposit(self, matrix: PheromoneMatrix, delta: float, edges: List[Edge]) -> None:
        for source, target in edges:
            value = self._bound(matrix.get_at(source, target) + delta)
            matrix.set_at(source, target, value)
            matrix.set_at(target, source, value)

    def lay_pheromone_for_path(self, path: Path, matrix: PheromoneMatrix) -> None:
        if matrix is None:
            raise InvariantViolation("pheromone matrix is required")
        self._apply_deposit(matrix, *self.deposit_plan(path, matrix.size()))

    # ------------------------------------------------------------------ antipheromone

    def _check_antipheromone_enabled(self) -> None:
        raise NotImplementedError

    def _antipheromone_value(self, value: float) -> float:
        raise NotImplementedError

    def lay_antipheromone_for_path(self, path: Path, matrix: PheromoneMatrix) -> None:
        if matrix is None:
            raise InvariantViolation("pheromone matrix is required")
        self._check_antipheromone_enabled()
        self._apply_antipheromone(matrix, path_edges(path, matrix.size()))

    def _apply_antipheromone(self, matrix: PheromoneMatrix, edges: List[Edge]) -> None:
        for source, target in edges:
            value = self._antipheromone_value(matrix.get_at(source, target))
            matrix.set_at(source, target, value)
            matrix.set_at(target, source, value)

    def progress_percentage(self, iteration: int) -> int:
        total = self.params.number_of_iterations
        if iteration < 0 or iteration > total:
            raise InvariantViolation(f"iteration {iteration} outside [0, {total}]")
        progress = iteration / total * 100.0
        if not 0.0 <= progress <= 100.0:
            raise InvariantViolation(f"Progress Percentage is: {progress}")
        return int(math.floor(progress))

    def in_antipheromone_phase(self, iteration: int) -> bool:
        """True while the search is in its early exploratory window."""
        return self.progress_percentage(iteration) < self.params.antipheromone_phase_percentage

    # ------------------------------------------------------------------ update

    def update(self, matrix: PheromoneMatrix, colony: Sequence[Path],
               representatives: Optional[Representatives], iteration: int) -> None:
        if matrix is None:
            raise InvariantViolation("pheromone matrix is required")
        if colony is None or len(colony) == 0:
            raise InvariantViolation("colony must contain at least one path")
        if any(path is None for path in colony):
            raise InvariantViolation("colony contains a missing path")
        if iteration < 0:
            raise InvariantViolation(f"iteration must be >= 0, got {iteration}")
        if representatives is None:
            representatives = Representatives.from_colony(colony)
        self._update(matrix, colony, representatives, iteration)

    def _update(self, matrix: PheromoneMatrix, colony: Sequence[Path],
                representatives: Representatives, iteration: int) -> None:
        # every check runs before the first write
        size = matrix.size()
        deposits = [self.deposit_plan(path, size) for path in self._depositors(colony, representatives)]
        poor = self._antipheromone_targets(colony, representatives, iteration)
        if poor:
            self._check_antipheromone_enabled()
        poor_edges = [path_edges(path, size) for path in poor]

        for delta, edges in deposits:
            self._apply_deposit(matrix, delta, edges)
        if poor:
            logger.debug("iteration %d: antipheromone for %d path(s)", iteration, len(poor))
        for edges in poor_edges:
            self._apply_antipheromone(matrix, edges)

    def _depositors(self, colony: Sequence[Path], representatives: Representatives) -> List[Path]:
        raise NotImplementedError

    def _antipheromone_targets(self, colony: Sequence[Path], representatives: Representatives,
                               iteration: int) -> List[Path]:
        raise NotImplementedError

    def freeze_update(self, matrix: PheromoneMatrix, classes: Iterable[DesignClass]) -> None:
        freeze_update(matrix, classes)
