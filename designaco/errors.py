from __future__ import annotations


class PheromoneError(Exception):
    """Base class for failures raised by the pheromone operators."""


class ConfigurationError(PheromoneError, ValueError):
    """Unsupported variant, measure or strength, or a disabled toggle was relied on."""


class InvariantViolation(PheromoneError):
    """Numeric or structural state outside its valid range."""
