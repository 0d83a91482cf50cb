"""Result types for bitstring NSGA-II.

- GenerationReport: progress snapshot taken once per generation
- NSGAResult: final population plus rank, crowding distance and run metadata

Both classes are immutable (frozen dataclasses). All numpy arrays are copied
on construction to ensure immutability.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from nsga_bits.population import IndividualView, Population


@dataclass(frozen=True)
class GenerationReport:
    """Progress snapshot of one generation.

    Attributes:
        generation: 1-based generation number.
        n_fronts: Number of Pareto fronts in the ranked parent + offspring union.
        pareto_size: Number of rank-0 individuals kept as parents.
        best_x: Decoded vector of the representative best parent (lowest sum
            of objectives).
        best_objectives: Objective values of that individual.
    """

    generation: int
    n_fronts: int
    pareto_size: int
    best_x: np.ndarray
    best_objectives: np.ndarray

    def __post_init__(self) -> None:
        """Copy the snapshot arrays so later generations cannot alter them."""
        object.__setattr__(self, "best_x", np.array(self.best_x, dtype=np.float64))
        object.__setattr__(self, "best_objectives", np.array(self.best_objectives, dtype=np.float64))


@dataclass(frozen=True)
class NSGAResult:
    """Results from a bitstring NSGA-II run.

    Attributes:
        population: Final population ordered by quality (rank ascending, then
            crowding distance descending).
        rank: Pareto rank for each individual, shape (n,). Rank 0 indicates
            individuals on the Pareto front (non-dominated).
        crowding_distance: Crowding distance for each individual, shape (n,).
            Individuals at the extremes of their front have infinite distance.
        generations: Number of generations completed.
        evaluations: Total number of objective function evaluations performed.
        history: One GenerationReport per completed generation.

    Example:
        >>> result = nsga2([f1, f2], search_space=[(-10, 10)], pop_size=20,
        ...                n_generations=10, crossover_prob=0.98, seed=1)
        >>> front = result.pareto_front
        >>> front.n_obj
        2
    """

    population: Population
    rank: np.ndarray
    crowding_distance: np.ndarray
    generations: int
    evaluations: int
    history: tuple[GenerationReport, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If rank or crowding_distance are not numpy arrays.
            ValueError: If array shapes are inconsistent or the population
                has no objectives.
        """
        n = len(self.population)

        if self.population.objectives is None:
            raise ValueError("population must have objectives computed")

        if not isinstance(self.rank, np.ndarray):
            raise TypeError(f"rank must be a numpy array, got {type(self.rank).__name__}")
        if self.rank.ndim != 1:
            raise ValueError(f"rank must be 1D, got shape {self.rank.shape}")
        if self.rank.shape[0] != n:
            raise ValueError(f"rank has {self.rank.shape[0]} elements, expected {n} to match population size")

        if not isinstance(self.crowding_distance, np.ndarray):
            raise TypeError(f"crowding_distance must be a numpy array, got {type(self.crowding_distance).__name__}")
        if self.crowding_distance.ndim != 1:
            raise ValueError(f"crowding_distance must be 1D, got shape {self.crowding_distance.shape}")
        if self.crowding_distance.shape[0] != n:
            raise ValueError(
                f"crowding_distance has {self.crowding_distance.shape[0]} elements, expected {n} to match population size"
            )

        object.__setattr__(self, "rank", self.rank.copy())
        object.__setattr__(self, "crowding_distance", self.crowding_distance.copy())
        object.__setattr__(self, "history", tuple(self.history))

    def __len__(self) -> int:
        return len(self.population)

    def __iter__(self) -> Iterator[IndividualView]:
        """Iterate over the individuals in quality order."""
        for i in range(len(self.population)):
            yield self.individual(i)

    def individual(self, idx: int) -> IndividualView:
        """Return individual ``idx`` with its rank and crowding distance."""
        view = self.population[idx]
        return IndividualView(
            bits=view.bits,
            x=view.x,
            objectives=view.objectives,
            rank=int(self.rank[idx]),
            crowding_distance=float(self.crowding_distance[idx]),
        )

    @property
    def pareto_front(self) -> Population:
        """Extract the Pareto front (rank-0 individuals) as a new Population."""
        return self.population.take(np.flatnonzero(self.rank == 0))

    @property
    def best(self) -> IndividualView:
        """Representative best individual: lowest sum of objectives.

        Ties go to the earlier (higher quality) individual.
        """
        scores = self.population.objectives.sum(axis=1)
        return self.individual(int(np.argmin(scores)))
