from __future__ import annotations
import itertools, statistics, os, random, time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import csv

from .colony import Representatives
from .design import Attribute, EndOfClass, Method, Nest, Node, Path
from .errors import ConfigurationError, InvariantViolation
from .matrix import PheromoneMatrix
from .operators import operators_for
from .parameters import Algorithm, AlgorithmParameters


@dataclass
class SyntheticDesign:
    """Random class-design problem used to drive the operators without a real colony.

    Matrix layout: methods, then attributes, then the nest, then one
    end-of-class marker per class.
    """
    n_methods: int
    n_attributes: int
    n_classes: int
    name: str = "synthetic_design"

    def __post_init__(self):
        if self.n_classes < 1:
            raise InvariantViolation("a design needs at least one class")
        if self.n_methods + self.n_attributes < self.n_classes:
            raise InvariantViolation("every class needs at least one element")

    def elements(self) -> List[Node]:
        methods = [Method(k, f"m{k}") for k in range(self.n_methods)]
        attributes = [Attribute(self.n_methods + k, f"a{k}") for k in range(self.n_attributes)]
        return methods + attributes

    @property
    def nest_number(self) -> int:
        return self.n_methods + self.n_attributes

    def matrix_size(self) -> int:
        return self.nest_number + 1 + self.n_classes

    def random_path(self, rng: random.Random) -> Path:
        elements = self.elements()
        rng.shuffle(elements)
        cuts = sorted(rng.sample(range(1, len(elements)), self.n_classes - 1))
        nodes: List[Node] = [Nest(self.nest_number, "nest")]
        start = 0
        for k, end in enumerate(cuts + [len(elements)]):
            nodes.extend(elements[start:end])
            nodes.append(EndOfClass(self.nest_number + 1 + k, f"eoc{k}"))
            start = end
        cbo, nac, atmr = rng.random(), rng.random(), rng.random()
        return Path(nodes, cbo=cbo, nac=nac, atmr=atmr, combined=(cbo + nac + atmr) / 3.0)

    def random_colony(self, n_ants: int, rng: random.Random) -> List[Path]:
        return [self.random_path(rng) for _ in range(n_ants)]


@dataclass
class TrialResult:
    history: List[Dict[str, float]]
    matrix: PheromoneMatrix
    params: AlgorithmParameters
    elapsed_sec: float
    snapshots: List[Tuple[int, Any]] = field(default_factory=list)


def initial_pheromone(params: AlgorithmParameters) -> float:
    # MMAS starts midway between its bounds
    if params.algorithm is Algorithm.MMAS:
        return (params.mmas_pheromone_minimum + params.mmas_pheromone_maximum) / 2.0
    return 1.0


def run_trial(design: SyntheticDesign, params: AlgorithmParameters, n_ants: int = 20,
              seed: Optional[int] = None, initial: Optional[float] = None,
              evaporate_first: bool = False, snapshot_every: int = 0) -> TrialResult:
    if evaporate_first and params.evaporation_elitism:
        # a uniform starting matrix has no spread for elitist evaporation
        raise ConfigurationError("evaporate_first cannot be combined with evaporation_elitism")
    rng = random.Random(seed)
    ops = operators_for(params)
    matrix = PheromoneMatrix.uniform(design.matrix_size(),
                                     initial_pheromone(params) if initial is None else initial)
    history = []
    snapshots = []
    start = time.time()
    for it in range(params.number_of_iterations):
        colony = design.random_colony(n_ants, rng)
        reps = Representatives.from_colony(colony)
        if evaporate_first:
            ops.evaporate(matrix)
            ops.update(matrix, colony, reps, it)
        else:
            ops.update(matrix, colony, reps, it)
            ops.evaporate(matrix)
        history.append({
            "iteration": it,
            "lowest": matrix.lowest(),
            "highest": matrix.highest(),
            "mean": matrix.mean(),
            "best_combined": reps.best_combined.combined,
        })
        if snapshot_every and it % snapshot_every == 0:
            snapshots.append((it, matrix.snapshot()))
    elapsed = time.time() - start
    return TrialResult(history=history, matrix=matrix, params=params, elapsed_sec=elapsed,
                       snapshots=snapshots)


def run_repeated_trials(design: SyntheticDesign, params: AlgorithmParameters, n_runs: int = 10,
                        n_ants: int = 20, base_seed: int = 42):
    means = []
    highs = []
    times = []
    for r in range(n_runs):
        res = run_trial(design, params, n_ants=n_ants, seed=base_seed + r)
        means.append(res.matrix.mean())
        highs.append(res.matrix.highest())
        times.append(res.elapsed_sec)
    stats = {
        "mean_pheromone": statistics.mean(means),
        "std_pheromone": statistics.stdev(means) if len(means) > 1 else 0.0,
        "max_pheromone": max(highs),
        "mean_time": statistics.mean(times),
        "algo": params.algorithm.name,
        "n_runs": n_runs,
    }
    return stats, list(zip(means, highs, times))


def run_parameter_sweep(design: SyntheticDesign, param_grid: Dict[str, List[Any]],
                        base_params: Optional[AlgorithmParameters] = None, n_runs: int = 5,
                        n_ants: int = 20, base_seed: int = 100, csv_path: Optional[str] = None):
    base_params = base_params or AlgorithmParameters()
    keys = sorted(param_grid.keys())
    rows = []
    for values in itertools.product(*[param_grid[k] for k in keys]):
        params = base_params.with_overrides(**dict(zip(keys, values)))
        stats, _ = run_repeated_trials(design, params, n_runs=n_runs, n_ants=n_ants, base_seed=base_seed)
        row = {**dict(zip(keys, values)), **stats}
        rows.append(row)
        if csv_path is not None:
            write_header = not os.path.exists(csv_path)
            with open(csv_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=row.keys())
                if write_header:
                    w.writeheader()
                w.writerow(row)
    return rows
