"""Population data structures for bitstring NSGA-II optimization.

This module provides the core data structures for representing populations
of bitstring individuals:

- Population: A struct-of-arrays representation of multiple individuals
- IndividualView: A read-only view of a single individual

Both classes are immutable (frozen dataclasses) to enforce functional style.
Fields that are computed later in the pipeline (objectives, rank, crowding
distance) use None as the "not yet computed" sentinel.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class IndividualView:
    """Read-only view of a single individual in a population.

    Attributes:
        bits: Genome for this individual, shape (n_bits,), values 0/1.
        x: Decoded decision variables, shape (n_params,).
        objectives: Objective values, shape (n_obj,), or None.
        rank: Pareto front rank (0 = first front), or None if not computed.
        crowding_distance: Crowding distance value, or None if not computed.

    Example:
        >>> bits = np.array([[0, 1], [1, 1]], dtype=np.uint8)
        >>> pop = Population(bits=bits, x=np.array([[1.0], [3.0]]))
        >>> pop[1].x
        array([3.])
    """

    bits: np.ndarray
    x: np.ndarray
    objectives: np.ndarray | None
    rank: int | None
    crowding_distance: float | None


@dataclass(frozen=True)
class Population:
    """Immutable struct-of-arrays representation of a bitstring population.

    All arrays are copied on construction to ensure immutability.

    Attributes:
        bits: Genomes for all individuals, shape (n, n_bits), values 0/1.
        x: Decoded decision variables, shape (n, n_params).
        objectives: Objective values, shape (n, n_obj), or None if not evaluated.
        rank: Pareto front ranks, shape (n,), or None if not sorted.
        crowding_distance: Crowding distances, shape (n,), or None if not computed.

    Example:
        >>> bits = np.array([[0, 0], [0, 1], [1, 1]], dtype=np.uint8)
        >>> x = np.array([[0.0], [1.0], [3.0]])
        >>> obj = np.array([[0.0, 4.0], [1.0, 1.0], [9.0, 1.0]])
        >>> pop = Population(bits=bits, x=x, objectives=obj)
        >>> len(pop), pop.n_bits, pop.n_params, pop.n_obj
        (3, 2, 1, 2)
    """

    bits: np.ndarray
    x: np.ndarray
    objectives: np.ndarray | None = None
    rank: np.ndarray | None = None
    crowding_distance: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If bits or x are not numpy arrays.
            ValueError: If array shapes are inconsistent or invalid.
        """
        if not isinstance(self.bits, np.ndarray):
            raise TypeError(f"bits must be a numpy array, got {type(self.bits).__name__}")
        if self.bits.ndim != 2:
            raise ValueError(f"bits must be 2D, got shape {self.bits.shape}")
        if self.bits.size and not np.all((self.bits == 0) | (self.bits == 1)):
            raise ValueError("bits must contain only 0 and 1")

        n = self.bits.shape[0]
        object.__setattr__(self, "bits", self.bits.astype(np.uint8))

        if not isinstance(self.x, np.ndarray):
            raise TypeError(f"x must be a numpy array, got {type(self.x).__name__}")
        if self.x.ndim != 2:
            raise ValueError(f"x must be 2D, got shape {self.x.shape}")
        if self.x.shape[0] != n:
            raise ValueError(f"x has {self.x.shape[0]} individuals, expected {n} to match bits")
        object.__setattr__(self, "x", self.x.astype(np.float64))

        if self.objectives is not None:
            if not isinstance(self.objectives, np.ndarray):
                raise TypeError(f"objectives must be a numpy array, got {type(self.objectives).__name__}")
            if self.objectives.ndim != 2:
                raise ValueError(f"objectives must be 2D, got shape {self.objectives.shape}")
            if self.objectives.shape[0] != n:
                raise ValueError(f"objectives has {self.objectives.shape[0]} individuals, expected {n} to match bits")
            object.__setattr__(self, "objectives", self.objectives.astype(np.float64))

        if self.rank is not None:
            if not isinstance(self.rank, np.ndarray):
                raise TypeError(f"rank must be a numpy array, got {type(self.rank).__name__}")
            if self.rank.ndim != 1:
                raise ValueError(f"rank must be 1D, got shape {self.rank.shape}")
            if self.rank.shape[0] != n:
                raise ValueError(f"rank has {self.rank.shape[0]} elements, expected {n} to match bits")
            if not np.issubdtype(self.rank.dtype, np.integer):
                raise ValueError(f"rank must have integer dtype, got {self.rank.dtype}")
            object.__setattr__(self, "rank", self.rank.copy())

        if self.crowding_distance is not None:
            if not isinstance(self.crowding_distance, np.ndarray):
                raise TypeError(f"crowding_distance must be a numpy array, got {type(self.crowding_distance).__name__}")
            if self.crowding_distance.ndim != 1:
                raise ValueError(f"crowding_distance must be 1D, got shape {self.crowding_distance.shape}")
            if self.crowding_distance.shape[0] != n:
                raise ValueError(
                    f"crowding_distance has {self.crowding_distance.shape[0]} elements, expected {n} to match bits"
                )
            if not np.issubdtype(self.crowding_distance.dtype, np.floating):
                raise ValueError(f"crowding_distance must have float dtype, got {self.crowding_distance.dtype}")
            object.__setattr__(self, "crowding_distance", self.crowding_distance.copy())

    def __len__(self) -> int:
        return self.bits.shape[0]

    def __getitem__(self, idx: int) -> IndividualView:
        """Get a read-only view of a single individual.

        Args:
            idx: Index of the individual (supports negative indexing).

        Returns:
            IndividualView containing the data for the specified individual.

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        original_idx = idx
        if idx < 0:
            idx = n + idx
        if idx < 0 or idx >= n:
            raise IndexError(f"index {original_idx} is out of bounds for population with {n} individuals")

        return IndividualView(
            bits=self.bits[idx],
            x=self.x[idx],
            objectives=self.objectives[idx] if self.objectives is not None else None,
            rank=int(self.rank[idx]) if self.rank is not None else None,
            crowding_distance=float(self.crowding_distance[idx]) if self.crowding_distance is not None else None,
        )

    def take(self, indices: np.ndarray) -> "Population":
        """Return a new Population with the rows at ``indices``.

        Every computed field is carried along; ``None`` fields stay ``None``.
        """
        return Population(
            bits=self.bits[indices],
            x=self.x[indices],
            objectives=self.objectives[indices] if self.objectives is not None else None,
            rank=self.rank[indices] if self.rank is not None else None,
            crowding_distance=self.crowding_distance[indices] if self.crowding_distance is not None else None,
        )

    @property
    def n_bits(self) -> int:
        """Number of bits per genome."""
        return self.bits.shape[1]

    @property
    def n_params(self) -> int:
        """Number of decoded decision variables per individual."""
        return self.x.shape[1]

    @property
    def n_obj(self) -> int | None:
        """Number of objectives, or None if not evaluated."""
        if self.objectives is None:
            return None
        return self.objectives.shape[1]


def concat(a: Population, b: Population) -> Population:
    """Join two evaluated populations into one, dropping rank and crowding.

    Used to build the parent + offspring union; the transient fields of the
    union are recomputed by the caller.

    Raises:
        ValueError: If either population has no objectives.
    """
    if a.objectives is None or b.objectives is None:
        raise ValueError("Both populations must have objectives computed to be joined")
    return Population(
        bits=np.concatenate([a.bits, b.bits]),
        x=np.concatenate([a.x, b.x]),
        objectives=np.concatenate([a.objectives, b.objectives]),
    )
