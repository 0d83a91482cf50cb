"""Crowded-comparison binary tournament for mating selection."""

import numpy as np

from nsga_bits.population import Population


def crowded_better(rank: np.ndarray, crowding_distance: np.ndarray, i: int, j: int) -> int:
    """Return whichever of individuals ``i`` and ``j`` wins crowded comparison.

    Lower rank wins; equal ranks are decided by larger crowding distance.
    A full tie keeps ``i``.

    Example:
        >>> rank = np.array([0, 0, 1])
        >>> cd = np.array([1.0, np.inf, np.inf])
        >>> crowded_better(rank, cd, 0, 1), crowded_better(rank, cd, 2, 0)
        (1, 0)
    """
    if rank[j] < rank[i] or (rank[j] == rank[i] and crowding_distance[j] > crowding_distance[i]):
        return j
    return i


def crowded_tournament(
    pop: Population,
    n_parents: int,
    rng: np.random.Generator,
    rank: np.ndarray,
    crowding_distance: np.ndarray,
) -> np.ndarray:
    """Select parents using binary tournaments under crowded comparison.

    Each draw samples two individuals uniformly at random with replacement
    and keeps the winner.

    Args:
        pop: Population to select from.
        n_parents: Number of parents to select.
        rng: Random number generator for reproducibility.
        rank: Pareto front ranks for all individuals. Shape (n,).
        crowding_distance: Crowding distances for all individuals. Shape (n,).

    Returns:
        Array of shape (n_parents,) with indices into ``pop``.

    Raises:
        ValueError: If the population is empty or rank/crowding_distance do
            not match its size.

    Example:
        >>> parents = crowded_tournament(pop, 10, rng, rank=rank, crowding_distance=cd)
        >>> parents.shape
        (10,)
    """
    pop_size = len(pop)
    if pop_size == 0:
        raise ValueError("cannot select parents from an empty population")
    if len(rank) != pop_size or len(crowding_distance) != pop_size:
        raise ValueError(
            f"rank ({len(rank)}) and crowding_distance ({len(crowding_distance)}) "
            f"must match population size ({pop_size})"
        )

    candidates = rng.integers(0, pop_size, size=(n_parents, 2))
    selected = np.empty(n_parents, dtype=np.intp)
    for k in range(n_parents):
        selected[k] = crowded_better(rank, crowding_distance, candidates[k, 0], candidates[k, 1])

    return selected
