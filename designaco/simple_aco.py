from __future__ import annotations
import logging
from typing import List, Sequence

from .colony import Representatives
from .design import Path
from .errors import ConfigurationError
from .operators_base import PheromoneOperators
from .parameters import AlgorithmParameters, Measure

logger = logging.getLogger(__name__)


class SimpleACOOperators(PheromoneOperators):
    """Simple-ACO: every ant lays pheromone, values are unbounded; optional subtractive antipheromone."""
    def __init__(self, params: AlgorithmParameters):
        super().__init__(params)

    def _check_antipheromone_enabled(self) -> None:
        if not self.params.simple_aco_subtractive_antipheromone:
            raise ConfigurationError("Simple-ACO antipheromone requested but subtractive antipheromone is disabled")

    def _antipheromone_value(self, value: float) -> float:
        return value * self.params.phi

    def _depositors(self, colony: Sequence[Path], representatives: Representatives) -> List[Path]:
        return list(colony)

    def _antipheromone_targets(self, colony: Sequence[Path], representatives: Representatives,
                               iteration: int) -> List[Path]:
        p = self.params
        if not (p.simple_aco_subtractive_antipheromone and p.antipheromone_phase_percentage > 0):
            return []
        if not self.in_antipheromone_phase(iteration):
            logger.debug("iteration %d: past the antipheromone phase", iteration)
            return []

        if p.fitness in (Measure.CBO, Measure.COMBINED):
            return [representatives.worst(p.fitness)]
        raise ConfigurationError(f"impossible fitness measure {p.fitness.name} while laying antipheromone")
