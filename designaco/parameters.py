from __future__ import annotations
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping

from .errors import ConfigurationError

# factor for elitist decay / evaporation
ELITIST_FACTOR = 0.02

# the ludicrously high value that freezes a method/attribute pairing
FREEZE_DELTA = 1000000.0

# MMAS antipheromone "reduce by half" multiplier
MMAS_ANTIPHEROMONE_RHO = 0.5


class Algorithm(Enum):
    SIMPLE_ACO = "simple_aco"
    MMAS = "mmas"


class Measure(Enum):
    CBO = "cbo"
    NAC = "nac"
    ATMR = "atmr"
    COMBINED = "combined"


class Strength(Enum):
    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3


def coerce_enum(enum_cls, value, field_name: str):
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if value == member.value or (isinstance(value, str) and value.upper() == member.name):
            return member
    raise ConfigurationError(f"Unknown {field_name}: {value!r}")


@dataclass(frozen=True)
class AlgorithmParameters:
    algorithm: Algorithm = Algorithm.SIMPLE_ACO
    fitness: Measure = Measure.CBO
    rho: float = 0.1              # evaporation rate
    mu: float = 3.0               # reinforcement exponent applied to (1 - fitness)
    phi: float = 0.5              # Simple-ACO antipheromone decay
    evaporation_elitism: bool = False
    mmas_pheromone_minimum: float = 0.01
    mmas_pheromone_maximum: float = 0.99
    simple_aco_subtractive_antipheromone: bool = False
    mmas_antipheromone: bool = False
    mmas_reduce_by_half: bool = True
    antipheromone_phase_percentage: int = 0
    pheromone_strength: Strength = Strength.SINGLE
    antipheromone_strength: Strength = Strength.SINGLE
    number_of_iterations: int = 1000

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "algorithm", coerce_enum(Algorithm, self.algorithm, "algorithm"))
        object.__setattr__(self, "fitness", coerce_enum(Measure, self.fitness, "fitness measure"))
        object.__setattr__(self, "pheromone_strength",
                           coerce_enum(Strength, self.pheromone_strength, "pheromone strength"))
        object.__setattr__(self, "antipheromone_strength",
                           coerce_enum(Strength, self.antipheromone_strength, "antipheromone strength"))

        if not 0.0 <= self.rho <= 1.0:
            raise ConfigurationError(f"rho must lie in [0, 1], got {self.rho}")
        if self.mu < 0.0:
            raise ConfigurationError(f"mu must be >= 0, got {self.mu}")
        if self.phi < 0.0:
            raise ConfigurationError(f"phi must be >= 0, got {self.phi}")
        if self.mmas_pheromone_minimum < 0.0:
            raise ConfigurationError("MMAS pheromone minimum must be >= 0.")
        if self.mmas_pheromone_minimum > self.mmas_pheromone_maximum:
            raise ConfigurationError("MMAS pheromone minimum must be <= maximum.")
        if self.number_of_iterations < 1:
            raise ConfigurationError("number_of_iterations must be >= 1.")
        if not 0 <= self.antipheromone_phase_percentage <= 100:
            raise ConfigurationError(
                f"antipheromone phase percentage must lie in [0, 100], got {self.antipheromone_phase_percentage}")

    @property
    def evaporation_factor(self) -> float:
        return 1.0 - self.rho

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "AlgorithmParameters":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ConfigurationError(f"Unknown parameter(s): {', '.join(unknown)}")
        return cls(**dict(mapping))

    def with_overrides(self, **overrides) -> "AlgorithmParameters":
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        for k, v in d.items():
            if isinstance(v, Enum):
                d[k] = v.name
        return d


def build_parameters(name: str, **overrides) -> AlgorithmParameters:
    if name == "SIMPLE_ACO":
        base = AlgorithmParameters(algorithm=Algorithm.SIMPLE_ACO, fitness=Measure.CBO,
                                   rho=0.1, mu=3.0, phi=0.5)
    elif name == "MMAS":
        base = AlgorithmParameters(algorithm=Algorithm.MMAS, fitness=Measure.COMBINED,
                                   rho=0.1, mu=3.0,
                                   mmas_pheromone_minimum=0.01, mmas_pheromone_maximum=0.99)
    else:
        raise ConfigurationError(f"Unknown preset {name}")
    return base.with_overrides(**overrides) if overrides else base
