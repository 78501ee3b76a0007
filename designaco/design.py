from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List

from .errors import ConfigurationError, InvariantViolation
from .parameters import Measure


@dataclass(frozen=True)
class Node:
    number: int     # row/column of the pheromone matrix
    name: str = ""

    @property
    def is_end_of_class(self) -> bool:
        return False


@dataclass(frozen=True)
class Nest(Node):
    """Start marker of every path."""


@dataclass(frozen=True)
class Method(Node):
    pass


@dataclass(frozen=True)
class Attribute(Node):
    pass


@dataclass(frozen=True)
class EndOfClass(Node):
    """Delimits one class of a design from the next; never the source of a transition."""

    @property
    def is_end_of_class(self) -> bool:
        return True


@dataclass
class DesignClass:
    methods: List[Method] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)
    name: str = ""

    @classmethod
    def from_nodes(cls, nodes, name: str = "") -> "DesignClass":
        return cls(methods=[n for n in nodes if isinstance(n, Method)],
                   attributes=[n for n in nodes if isinstance(n, Attribute)],
                   name=name)


@dataclass
class Path:
    """One ant's design: nest, then classes of elements each closed by an EndOfClass.

    Fitness values are pre-scaled so 0.0 is best and 1.0 is worst.
    """
    nodes: List[Node]
    cbo: float = 1.0
    nac: float = 1.0
    atmr: float = 1.0
    combined: float = 1.0

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, idx):
        return self.nodes[idx]

    def fitness(self, measure: Measure) -> float:
        if measure is Measure.CBO:
            return self.cbo
        if measure is Measure.NAC:
            return self.nac
        if measure is Measure.ATMR:
            return self.atmr
        if measure is Measure.COMBINED:
            return self.combined
        raise ConfigurationError(f"impossible fitness measure {measure!r}")

    def segments(self) -> List[List[Node]]:
        """Element nodes of each class, in path order (nest and markers excluded)."""
        if not self.nodes or not self.nodes[-1].is_end_of_class:
            raise InvariantViolation("final node of a path must be an end-of-class marker")
        classes: List[List[Node]] = []
        current: List[Node] = []
        for node in self.nodes[1:]:
            if node.is_end_of_class:
                classes.append(current)
                current = []
            else:
                current.append(node)
        return classes

    def design_classes(self) -> List[DesignClass]:
        return [DesignClass.from_nodes(seg, name=f"class_{k}") for k, seg in enumerate(self.segments())]

