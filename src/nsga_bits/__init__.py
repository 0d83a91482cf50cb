"""nsga-bits: NSGA-II multi-objective optimization over bitstring genomes.

A pure numpy implementation of the Non-dominated Sorting Genetic Algorithm
with a fixed-width binary encoding of bounded real parameters, uniform
crossover and point mutation.

Example (Schaffer's bi-objective problem):
    >>> from nsga_bits import nsga2
    >>> import numpy as np
    >>> def f1(x): return float(np.sum(x**2))
    >>> def f2(x): return float(np.sum((x - 2.0) ** 2))
    >>> result = nsga2([f1, f2], search_space=[(-10, 10)], pop_size=10,
    ...                n_generations=5, crossover_prob=0.98, seed=42)
    >>> len(result)
    10
"""

from nsga_bits.algorithm import nsga2, run
from nsga_bits.codec import decode, decode_population, encode, random_bitstrings
from nsga_bits.config import NSGAConfig
from nsga_bits.evaluation import EvaluationError, combine, lift
from nsga_bits.operators import partner_indices, point_mutation, reproduce, uniform_crossover
from nsga_bits.population import IndividualView, Population
from nsga_bits.primitives import (
    crowding_distance,
    crowding_distance_all,
    dominates,
    dominates_matrix,
    fast_non_dominated_sort,
    non_dominated_sort,
)
from nsga_bits.results import GenerationReport, NSGAResult
from nsga_bits.selection import crowded_better, crowded_tournament
from nsga_bits.survival import environmental_selection

__all__ = [
    # Algorithm
    "nsga2",
    "run",
    "NSGAConfig",
    # Codec
    "decode",
    "decode_population",
    "encode",
    "random_bitstrings",
    # Evaluation
    "combine",
    "lift",
    "EvaluationError",
    # Selection and survival
    "crowded_better",
    "crowded_tournament",
    "environmental_selection",
    # Genetic operators
    "uniform_crossover",
    "point_mutation",
    "partner_indices",
    "reproduce",
    # Primitives
    "dominates",
    "dominates_matrix",
    "fast_non_dominated_sort",
    "non_dominated_sort",
    "crowding_distance",
    "crowding_distance_all",
    # Data structures
    "Population",
    "IndividualView",
    # Result types
    "NSGAResult",
    "GenerationReport",
]
