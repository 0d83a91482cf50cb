"""NSGA-II environmental selection.

This module implements the elitist truncation that reduces the doubled
parent + offspring union back to the target population size using Pareto
rank first and crowding distance second.
"""

import numpy as np

from nsga_bits.primitives import crowding_distance, fast_non_dominated_sort


def environmental_selection(
    objectives: np.ndarray,
    n_survivors: int,
) -> tuple[np.ndarray, dict[str, np.ndarray]]:
    """Select survivors using NSGA-II crowded truncation.

    1. Rank the whole population with fast non-dominated sorting and compute
       crowding distance inside every front.
    2. Add whole fronts in rank order while they fit.
    3. Sort the first front that would overflow by crowded comparison (all
       its members share a rank, so by crowding distance, largest first) and
       take only as many as needed.

    Args:
        objectives: Objective values of the union. Shape (n, n_obj).
        n_survivors: Number of survivors to select.

    Returns:
        Tuple of (indices, state) where:
        - indices: Array of shape (n_survivors,) with the selected rows, in
          selection order (front by front, critical front best first).
        - state: Dictionary with the transient fields of each survivor as
          computed on the full input population:
            - 'rank': Pareto front ranks. Shape (n_survivors,).
            - 'crowding_distance': Crowding distances. Shape (n_survivors,).
            - 'n_fronts': Number of fronts in the input population, as a
              0-d integer array.

    Raises:
        ValueError: If n_survivors is not positive or exceeds the population.

    Example:
        >>> obj = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])
        >>> indices, state = environmental_selection(obj, n_survivors=2)
        >>> indices.tolist()
        [0, 3]
    """
    n = objectives.shape[0]
    if n_survivors <= 0:
        raise ValueError(f"n_survivors must be positive, got {n_survivors}")
    if n_survivors > n:
        raise ValueError(f"n_survivors ({n_survivors}) cannot exceed population size ({n})")

    fronts = fast_non_dominated_sort(objectives)

    all_ranks = np.empty(n, dtype=np.int64)
    all_cd = np.empty(n, dtype=np.float64)
    for k, front in enumerate(fronts):
        all_ranks[front] = k
        all_cd[front] = crowding_distance(objectives[front])

    selected: list[int] = []
    for front in fronts:
        if len(selected) + len(front) <= n_survivors:
            selected.extend(front.tolist())
        else:
            remaining = n_survivors - len(selected)
            # Stable sort keeps index order among equal distances
            order = np.argsort(-all_cd[front], kind="stable")
            selected.extend(front[order[:remaining]].tolist())
        if len(selected) == n_survivors:
            break

    selected_arr = np.array(selected, dtype=np.intp)

    return selected_arr, {
        "rank": all_ranks[selected_arr],
        "crowding_distance": all_cd[selected_arr],
        "n_fronts": np.array(len(fronts)),
    }
