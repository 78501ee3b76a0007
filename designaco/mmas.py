from __future__ import annotations
import logging
from typing import List, Sequence

from .colony import Representatives
from .design import Path
from .errors import ConfigurationError
from .operators_base import PheromoneOperators
from .parameters import MMAS_ANTIPHEROMONE_RHO, AlgorithmParameters, Measure

logger = logging.getLogger(__name__)


class MaxMinOperators(PheromoneOperators):
    """MAX-MIN Ant System: only elite paths deposit, enforce tau_min <= tau <= tau_max."""
    def __init__(self, params: AlgorithmParameters):
        super().__init__(params)
        self.tau_min = params.mmas_pheromone_minimum
        self.tau_max = params.mmas_pheromone_maximum

    def _bound(self, value: float) -> float:
        if value < self.tau_min:
            return self.tau_min
        if value > self.tau_max:
            return self.tau_max
        return value

    def _check_antipheromone_enabled(self) -> None:
        if not self.params.mmas_antipheromone:
            raise ConfigurationError("MMAS antipheromone requested but it is disabled")

    def _antipheromone_value(self, value: float) -> float:
        if self.params.mmas_reduce_by_half:
            return max(value * MMAS_ANTIPHEROMONE_RHO, self.tau_min)
        # lay down the minimum pheromone
        return self.tau_min

    def _depositors(self, colony: Sequence[Path], representatives: Representatives) -> List[Path]:
        p = self.params
        if p.fitness in (Measure.CBO, Measure.NAC):
            return [representatives.best(p.fitness)]
        if p.fitness is Measure.COMBINED:
            # k-th best first, best last; never more ranks than ants
            k = min(p.pheromone_strength.value, len(colony))
            return list(reversed(representatives.best_combined_ranked(k)))
        raise ConfigurationError(f"impossible fitness measure {p.fitness.name} in MMAS update")

    def _antipheromone_targets(self, colony: Sequence[Path], representatives: Representatives,
                               iteration: int) -> List[Path]:
        if not self.params.mmas_antipheromone:
            return []
        if not self.in_antipheromone_phase(iteration):
            logger.debug("iteration %d: past the antipheromone phase", iteration)
            return []

        p = self.params
        if p.fitness in (Measure.CBO, Measure.NAC):
            return [representatives.worst(p.fitness)]
        k = min(p.antipheromone_strength.value, len(colony))
        return list(reversed(representatives.worst_combined_ranked(k)))
