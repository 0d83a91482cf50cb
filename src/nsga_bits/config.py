"""Run configuration for bitstring NSGA-II."""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from nsga_bits.codec import MAX_BITS_PER_PARAM, validate_bounds


def _check_int(name: str, value: object) -> None:
    if not isinstance(value, (int, np.integer)) or isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")


def _check_probability(name: str, value: object) -> None:
    if not isinstance(value, (int, float, np.integer, np.floating)) or isinstance(value, bool):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


@dataclass(frozen=True)
class NSGAConfig:
    """Validated configuration for one optimization run.

    Everything is checked on construction so that a bad configuration fails
    before any individual is sampled or evaluated.

    Attributes:
        search_space: (min, max) pair per decision parameter. Normalised to a
            float array of shape (n_params, 2).
        pop_size: Population size N.
        n_generations: Number of generation steps to run.
        crossover_prob: Probability that a child is produced by crossover.
        bits_per_param: Bits used to encode each parameter (default 16).
        mutation_rate: Per-bit flip probability, or None for ``1 / n_bits``.

    Example:
        >>> config = NSGAConfig(search_space=[(-10, 10)], pop_size=100, n_generations=50, crossover_prob=0.98)
        >>> config.n_bits
        16
        >>> config.effective_mutation_rate
        0.0625
    """

    search_space: Sequence[Sequence[float]] | np.ndarray
    pop_size: int
    n_generations: int
    crossover_prob: float
    bits_per_param: int = 16
    mutation_rate: float | None = None

    def __post_init__(self) -> None:
        """Validate every field and normalise the search space.

        Raises:
            TypeError: If a field has the wrong type.
            ValueError: If a field is out of range.
        """
        object.__setattr__(self, "search_space", validate_bounds(self.search_space))

        _check_int("pop_size", self.pop_size)
        if self.pop_size <= 0:
            raise ValueError(f"pop_size must be positive, got {self.pop_size}")

        _check_int("n_generations", self.n_generations)
        if self.n_generations <= 0:
            raise ValueError(f"n_generations must be positive, got {self.n_generations}")

        _check_int("bits_per_param", self.bits_per_param)
        if self.bits_per_param <= 0:
            raise ValueError(f"bits_per_param must be positive, got {self.bits_per_param}")
        if self.bits_per_param > MAX_BITS_PER_PARAM:
            raise ValueError(f"bits_per_param must be at most {MAX_BITS_PER_PARAM}, got {self.bits_per_param}")

        _check_probability("crossover_prob", self.crossover_prob)
        if self.mutation_rate is not None:
            _check_probability("mutation_rate", self.mutation_rate)

    @property
    def n_params(self) -> int:
        """Number of decision parameters."""
        return self.search_space.shape[0]

    @property
    def n_bits(self) -> int:
        """Genome length: ``n_params * bits_per_param``."""
        return self.n_params * self.bits_per_param

    @property
    def effective_mutation_rate(self) -> float:
        """Configured mutation rate, or ``1 / n_bits`` when unset."""
        if self.mutation_rate is None:
            return 1.0 / self.n_bits
        return float(self.mutation_rate)
