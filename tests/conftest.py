"""Shared test fixtures for nsga-bits tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- simple_population: Small evaluated population with rank/crowding computed
- sch_objectives: Schaffer's bi-objective problem as two scalar functions
- sch_space: The SCH search space
- sch_config: Small run configuration for the SCH problem
"""

import numpy as np
import pytest

from nsga_bits import NSGAConfig, Population, crowding_distance_all, decode_population, non_dominated_sort

SCH_SPACE = [(-10.0, 10.0)]


def sch_f1(x: np.ndarray) -> float:
    return float(np.sum(x**2))


def sch_f2(x: np.ndarray) -> float:
    return float(np.sum((x - 2.0) ** 2))


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_population() -> Population:
    """Create a 4-individual population that forms a single Pareto front.

    Genomes are 4-bit encodings over [-10, 10]; objectives are chosen by hand.
    """
    bits = np.array(
        [
            [0, 0, 0, 0],
            [0, 1, 0, 1],
            [1, 0, 1, 0],
            [1, 1, 1, 1],
        ],
        dtype=np.uint8,
    )
    x = decode_population(bits, SCH_SPACE, 4)
    objectives = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])

    ranks = non_dominated_sort(objectives)
    cd = crowding_distance_all(objectives, ranks)

    return Population(bits=bits, x=x, objectives=objectives, rank=ranks, crowding_distance=cd)


@pytest.fixture
def sch_objectives() -> list:
    """Schaffer's SCH problem: minimize x^2 and (x - 2)^2."""
    return [sch_f1, sch_f2]


@pytest.fixture
def sch_space() -> list[tuple[float, float]]:
    """Search space of the SCH problem."""
    return list(SCH_SPACE)


@pytest.fixture
def sch_config() -> NSGAConfig:
    """Small SCH configuration that runs quickly."""
    return NSGAConfig(
        search_space=SCH_SPACE,
        pop_size=20,
        n_generations=10,
        crossover_prob=0.98,
        bits_per_param=16,
    )
