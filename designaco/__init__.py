from .errors import PheromoneError, ConfigurationError, InvariantViolation
from .parameters import (Algorithm, Measure, Strength, AlgorithmParameters, build_parameters,
                         ELITIST_FACTOR, FREEZE_DELTA)
from .matrix import PheromoneMatrix
from .design import Node, Nest, Method, Attribute, EndOfClass, DesignClass, Path
from .colony import Representatives
from .operators_base import PheromoneOperators
from .simple_aco import SimpleACOOperators
from .mmas import MaxMinOperators
from .operators import (operators_for, evaporate, update, freeze_update, calculate_delta,
                        lay_pheromone_for_path, lay_antipheromone_for_path)
from .experiments import SyntheticDesign, run_trial, run_repeated_trials, run_parameter_sweep
