"""NSGA-II primitives for Pareto-based ranking and diversity.

This module provides the core pure functions for NSGA-II:
- dominates: scalar Pareto dominance check
- dominates_matrix: vectorized pairwise dominance
- fast_non_dominated_sort: Deb's fast non-dominated sorting, returning fronts
- non_dominated_sort: the same sort expressed as a rank per individual
- crowding_distance: diversity metric for solutions in a Pareto front
- crowding_distance_all: crowding distance for every front of a ranked population

Individuals are addressed by their row index in the objectives array. The
domination bookkeeping (counts and dominated lists) lives in local arrays
built fresh on every call.
"""

import numpy as np


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """Check if solution a Pareto-dominates solution b (minimization).

    A solution a dominates b if and only if:
      - a[i] <= b[i] for ALL objectives (a is at least as good everywhere)
      - a[i] < b[i] for AT LEAST ONE objective (a is strictly better somewhere)

    Two solutions with identical objectives weakly dominate each other; such
    mutual domination is not counted, so neither dominates the other here.

    Args:
        a: Objective values for solution a. Shape (n_obj,).
        b: Objective values for solution b. Shape (n_obj,).

    Returns:
        True if a dominates b, False otherwise.

    Examples:
        >>> dominates(np.array([1.0, 1.0]), np.array([2.0, 2.0]))
        True
        >>> dominates(np.array([1.0, 2.0]), np.array([2.0, 1.0]))
        False
    """
    return bool(np.all(a <= b) and np.any(a < b))


def dominates_matrix(objectives: np.ndarray) -> np.ndarray:
    """Compute pairwise dominance for all individuals (vectorized).

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        Boolean array of shape (n, n) where result[i, j] = True iff
        individual i dominates individual j. The diagonal is always False.
    """
    a = objectives[:, np.newaxis, :]  # (n, 1, n_obj)
    b = objectives[np.newaxis, :, :]  # (1, n, n_obj)

    all_leq = np.all(a <= b, axis=2)
    any_lt = np.any(a < b, axis=2)

    return all_leq & any_lt


def fast_non_dominated_sort(objectives: np.ndarray) -> list[np.ndarray]:
    """Partition individuals into ordered Pareto fronts.

    Deb's fast non-dominated sort, O(M * N^2):

    1. For every p, collect ``dominated[p]`` (indices p dominates) and
       ``domination_count[p]`` (how many individuals dominate p).
    2. Front 0 holds every p with a zero count.
    3. Peeling front k decrements the count of everything its members
       dominate; individuals reaching zero form front k + 1.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        List of integer index arrays. ``fronts[k]`` holds the indices of the
        individuals with rank k, in ascending index order. Every index
        appears in exactly one front.

    Examples:
        >>> objs = np.array([[2.0, 2.0], [1.0, 1.0], [1.0, 3.0]])
        >>> [f.tolist() for f in fast_non_dominated_sort(objs)]
        [[1], [0, 2]]
    """
    n = objectives.shape[0]
    if n == 0:
        return []

    dom = dominates_matrix(objectives)
    dominated = [np.flatnonzero(dom[p]) for p in range(n)]
    domination_count = dom.sum(axis=0).astype(np.int64)

    fronts: list[np.ndarray] = []
    current = np.flatnonzero(domination_count == 0)

    while len(current) > 0:
        fronts.append(current)
        next_front: list[int] = []
        for p in current:
            for q in dominated[p]:
                domination_count[q] -= 1
                if domination_count[q] == 0:
                    next_front.append(int(q))
        current = np.array(sorted(next_front), dtype=np.intp)

    return fronts


def non_dominated_sort(objectives: np.ndarray) -> np.ndarray:
    """Assign each individual the index of its Pareto front.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        Integer array of shape (n,) where rank[i] is the front index for
        individual i. Rank 0 = Pareto optimal (first front).

    Examples:
        >>> objs = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        >>> non_dominated_sort(objs)
        array([0, 1, 2])
    """
    ranks = np.full(objectives.shape[0], -1, dtype=np.int64)
    for k, front in enumerate(fast_non_dominated_sort(objectives)):
        ranks[front] = k
    return ranks


def crowding_distance(front_objectives: np.ndarray) -> np.ndarray:
    """Compute crowding distance for individuals in a single Pareto front.

    For every objective the front is sorted ascending (stable sort); the two
    extremes get infinite distance and each interior individual adds the
    normalized gap between its two neighbours. An objective whose values are
    all equal contributes nothing.

    Args:
        front_objectives: Objective values for individuals in ONE front only.
            Shape (n_front, n_obj).

    Returns:
        Array of shape (n_front,) containing crowding distances.
        Higher values indicate more isolated (preferred) solutions.

    Examples:
        >>> objs = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])
        >>> cd = crowding_distance(objs)
        >>> np.isinf(cd[0]) and np.isinf(cd[-1])  # Boundary points
        True
    """
    n_front = front_objectives.shape[0]

    if n_front == 0:
        return np.array([], dtype=np.float64)
    if n_front <= 2:
        return np.full(n_front, np.inf)

    n_obj = front_objectives.shape[1]
    distances = np.zeros(n_front, dtype=np.float64)

    for m in range(n_obj):
        sorted_indices = np.argsort(front_objectives[:, m], kind="stable")
        values = front_objectives[sorted_indices, m]

        distances[sorted_indices[0]] = np.inf
        distances[sorted_indices[-1]] = np.inf

        obj_range = values[-1] - values[0]
        if obj_range > 0:
            # values[j + 1] - values[j - 1] for every interior position j
            distances[sorted_indices[1:-1]] += (values[2:] - values[:-2]) / obj_range

    return distances


def crowding_distance_all(objectives: np.ndarray, ranks: np.ndarray) -> np.ndarray:
    """Compute crowding distance for all individuals, front by front.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        ranks: Pareto front ranks for all individuals. Shape (n,).

    Returns:
        Array of shape (n,) containing crowding distances computed within
        each individual's own front.
    """
    cd = np.zeros(len(objectives), dtype=np.float64)
    if len(objectives) == 0:
        return cd
    for r in range(int(ranks.max()) + 1):
        mask = ranks == r
        if np.any(mask):
            cd[mask] = crowding_distance(objectives[mask])
    return cd
