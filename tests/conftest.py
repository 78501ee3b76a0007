import pytest

from designaco import AlgorithmParameters, Attribute, EndOfClass, Method, Nest, Path, PheromoneMatrix

# Layout of the small design used throughout: methods 0-2, attributes 3-4,
# nest 5, end-of-class markers 6 and 7.
SMALL_SIZE = 8


def two_class_path(**fitness):
    """nest -> m0 -> a3 | m1 -> a4 -> m2 |"""
    nodes = [Nest(5, "nest"), Method(0, "m0"), Attribute(3, "a3"), EndOfClass(6),
             Method(1, "m1"), Attribute(4, "a4"), Method(2, "m2"), EndOfClass(7)]
    return Path(nodes, **fitness)


# Layout for update tests: elements 0-9, marker 10, nest 11.
UPDATE_SIZE = 12


def single_class_path(k, **fitness):
    """Path k walks nest -> 2k -> 2k+1, so paths 0..4 share no edge."""
    nodes = [Nest(11), Method(2 * k), Attribute(2 * k + 1), EndOfClass(10)]
    return Path(nodes, **fitness)


def edges_of(k):
    return [(11, 2 * k), (2 * k, 2 * k + 1)]


@pytest.fixture
def small_matrix():
    return PheromoneMatrix.uniform(SMALL_SIZE, 0.5)


@pytest.fixture
def update_matrix():
    return PheromoneMatrix.uniform(UPDATE_SIZE, 0.5)


@pytest.fixture
def simple_params():
    return AlgorithmParameters(algorithm="SIMPLE_ACO", fitness="CBO", rho=0.1, mu=1.0, phi=0.5,
                               number_of_iterations=100)


@pytest.fixture
def mmas_params():
    return AlgorithmParameters(algorithm="MMAS", fitness="COMBINED", rho=0.1, mu=1.0,
                               mmas_pheromone_minimum=0.01, mmas_pheromone_maximum=0.99,
                               number_of_iterations=100)
