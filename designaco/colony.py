from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .design import Path
from .errors import ConfigurationError, InvariantViolation
from .parameters import Measure


@dataclass
class Representatives:
    """Best and worst paths of one colony, per fitness measure."""
    best_cbo: Optional[Path] = None
    best_nac: Optional[Path] = None
    best_atmr: Optional[Path] = None
    best_combined: Optional[Path] = None
    second_best_combined: Optional[Path] = None
    third_best_combined: Optional[Path] = None
    worst_cbo: Optional[Path] = None
    worst_nac: Optional[Path] = None
    worst_combined: Optional[Path] = None
    second_worst_combined: Optional[Path] = None
    third_worst_combined: Optional[Path] = None

    @classmethod
    def from_colony(cls, colony: Sequence[Path]) -> "Representatives":
        # lower pre-scaled fitness is better; ties keep colony order
        if not colony:
            raise InvariantViolation("cannot select representatives of an empty colony")
        if any(path is None for path in colony):
            raise InvariantViolation("colony contains a missing path")
        by_combined = sorted(colony, key=lambda p: p.combined)
        worst_first = sorted(colony, key=lambda p: p.combined, reverse=True)

        def ranked(paths, k):
            # ranks beyond the colony size stay empty
            return paths[k] if k < len(paths) else None

        return cls(
            best_cbo=min(colony, key=lambda p: p.cbo),
            best_nac=min(colony, key=lambda p: p.nac),
            best_atmr=min(colony, key=lambda p: p.atmr),
            best_combined=ranked(by_combined, 0),
            second_best_combined=ranked(by_combined, 1),
            third_best_combined=ranked(by_combined, 2),
            worst_cbo=max(colony, key=lambda p: p.cbo),
            worst_nac=max(colony, key=lambda p: p.nac),
            worst_combined=ranked(worst_first, 0),
            second_worst_combined=ranked(worst_first, 1),
            third_worst_combined=ranked(worst_first, 2),
        )

    def best(self, measure: Measure) -> Path:
        attr = {Measure.CBO: "best_cbo", Measure.NAC: "best_nac",
                Measure.ATMR: "best_atmr", Measure.COMBINED: "best_combined"}[measure]
        return self._require(attr)

    def worst(self, measure: Measure) -> Path:
        attr = {Measure.CBO: "worst_cbo", Measure.NAC: "worst_nac",
                Measure.COMBINED: "worst_combined"}.get(measure)
        if attr is None:
            raise ConfigurationError(f"no worst path is tracked for {measure.name}")
        return self._require(attr)

    def best_combined_ranked(self, k: int) -> List[Path]:
        """Best, 2nd-best, ... Combined paths, ``k`` of them."""
        names = ("best_combined", "second_best_combined", "third_best_combined")
        return [self._require(n) for n in names[:k]]

    def worst_combined_ranked(self, k: int) -> List[Path]:
        names = ("worst_combined", "second_worst_combined", "third_worst_combined")
        return [self._require(n) for n in names[:k]]

    def _require(self, name: str) -> Path:
        path = getattr(self, name)
        if path is None:
            raise InvariantViolation(f"representative path '{name}' is required but missing")
        return path
