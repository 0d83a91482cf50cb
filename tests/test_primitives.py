"""Tests for NSGA-II primitives.

Comprehensive test suite covering:
- TestDominates: Pareto dominance checks
- TestDominatesMatrix: Vectorized pairwise dominance
- TestFastNonDominatedSort: Front partitioning and its invariants
- TestNonDominatedSort: Rank-per-individual form of the sort
- TestCrowdingDistance: Diversity metric computation
"""

import numpy as np
import pytest

from nsga_bits.primitives import (
    crowding_distance,
    crowding_distance_all,
    dominates,
    dominates_matrix,
    fast_non_dominated_sort,
    non_dominated_sort,
)

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def simple_2d_objectives() -> np.ndarray:
    """Simple 2D objectives with clear dominance hierarchy.

    Resulting fronts:
        Front 0: [1,1]
        Front 1: [2,2], [1,3], [3,1]
        Front 2: [3,3]
    """
    return np.array(
        [
            [1.0, 1.0],  # 0: front 0
            [2.0, 2.0],  # 1: front 1
            [3.0, 3.0],  # 2: front 2
            [1.0, 3.0],  # 3: front 1
            [3.0, 1.0],  # 4: front 1
        ]
    )


@pytest.fixture
def pareto_front_2d() -> np.ndarray:
    """A Pareto front where no solution dominates another."""
    return np.array(
        [
            [1.0, 4.0],
            [2.0, 3.0],
            [3.0, 2.0],
            [4.0, 1.0],
        ]
    )


def _assert_front_invariants(objectives: np.ndarray, fronts: list[np.ndarray]) -> None:
    all_indices = np.concatenate(fronts)
    assert sorted(all_indices.tolist()) == list(range(len(objectives)))

    for k, front in enumerate(fronts):
        for p in front:
            for q in front:
                assert not dominates(objectives[p], objectives[q]), f"{p} dominates {q} inside front {k}"
        if k == 0:
            continue
        earlier = np.concatenate(fronts[:k])
        for q in front:
            assert any(dominates(objectives[p], objectives[q]) for p in earlier), (
                f"{q} in front {k} is not dominated by any earlier front"
            )


# =============================================================================
# TestDominates
# =============================================================================


class TestDominates:
    """Tests for the scalar dominates function."""

    def test_clear_dominance(self) -> None:
        """Solution with all better values dominates."""
        assert dominates(np.array([1.0, 1.0]), np.array([2.0, 2.0])) is True

    def test_clear_dominance_reverse_is_false(self) -> None:
        """Dominated solution does not dominate the dominant one."""
        assert dominates(np.array([2.0, 2.0]), np.array([1.0, 1.0])) is False

    def test_identical_solutions_no_dominance(self) -> None:
        """Identical solutions do not dominate each other."""
        a = np.array([1.0, 2.0])
        assert dominates(a, a.copy()) is False

    def test_tradeoff_no_dominance(self) -> None:
        """Solutions with tradeoffs do not dominate each other."""
        a = np.array([1.0, 2.0])
        b = np.array([2.0, 1.0])
        assert dominates(a, b) is False
        assert dominates(b, a) is False

    def test_partial_tie_with_one_better(self) -> None:
        """One tie and one strictly better gives dominance."""
        assert dominates(np.array([1.0, 2.0]), np.array([1.0, 3.0])) is True

    def test_three_objectives(self) -> None:
        """Dominance works with three objectives."""
        assert dominates(np.array([1.0, 1.0, 1.0]), np.array([1.0, 2.0, 1.0])) is True
        assert dominates(np.array([1.0, 2.0, 3.0]), np.array([3.0, 2.0, 1.0])) is False


# =============================================================================
# TestDominatesMatrix
# =============================================================================


class TestDominatesMatrix:
    """Tests for vectorized pairwise dominance."""

    def test_matches_scalar_dominates(self, rng: np.random.Generator) -> None:
        """Every entry agrees with the scalar check."""
        objs = rng.integers(0, 4, size=(12, 2)).astype(np.float64)
        dom = dominates_matrix(objs)
        for i in range(len(objs)):
            for j in range(len(objs)):
                assert dom[i, j] == dominates(objs[i], objs[j])

    def test_diagonal_is_false(self, simple_2d_objectives: np.ndarray) -> None:
        """Nothing dominates itself."""
        dom = dominates_matrix(simple_2d_objectives)
        assert not np.any(np.diag(dom))

    def test_shape(self, simple_2d_objectives: np.ndarray) -> None:
        """Output is (n, n)."""
        assert dominates_matrix(simple_2d_objectives).shape == (5, 5)


# =============================================================================
# TestFastNonDominatedSort
# =============================================================================


class TestFastNonDominatedSort:
    """Tests for the front-partitioning sort."""

    def test_tradeoff_pair_shares_front_zero(self) -> None:
        """[1,2] and [2,1] are mutually non-dominating and both rank 0."""
        fronts = fast_non_dominated_sort(np.array([[1.0, 2.0], [2.0, 1.0]]))
        assert len(fronts) == 1
        assert fronts[0].tolist() == [0, 1]

    def test_dominated_pair_is_peeled(self) -> None:
        """[1,1] is rank 0 and [2,2] rank 1."""
        fronts = fast_non_dominated_sort(np.array([[2.0, 2.0], [1.0, 1.0]]))
        assert [f.tolist() for f in fronts] == [[1], [0]]

    def test_identical_objectives_share_front_zero(self) -> None:
        """Duplicates co-occupy front 0 when nothing else dominates them."""
        fronts = fast_non_dominated_sort(np.array([[1.0, 1.0], [1.0, 1.0], [2.0, 2.0]]))
        assert [f.tolist() for f in fronts] == [[0, 1], [2]]

    def test_identical_objectives_share_later_front(self) -> None:
        """Duplicates dominated by something else share a later front."""
        fronts = fast_non_dominated_sort(np.array([[0.0, 0.0], [1.0, 1.0], [1.0, 1.0]]))
        assert [f.tolist() for f in fronts] == [[0], [1, 2]]

    def test_known_hierarchy(self, simple_2d_objectives: np.ndarray) -> None:
        """Fronts match the hand-computed hierarchy."""
        fronts = fast_non_dominated_sort(simple_2d_objectives)
        assert [f.tolist() for f in fronts] == [[0], [1, 3, 4], [2]]

    def test_single_front(self, pareto_front_2d: np.ndarray) -> None:
        """A Pareto front sorts into a single front."""
        fronts = fast_non_dominated_sort(pareto_front_2d)
        assert len(fronts) == 1
        assert fronts[0].tolist() == [0, 1, 2, 3]

    def test_empty(self) -> None:
        """An empty population has no fronts."""
        assert fast_non_dominated_sort(np.empty((0, 2))) == []

    def test_invariants_on_random_populations(self) -> None:
        """Random populations satisfy the front invariants."""
        for seed in range(10):
            rng = np.random.default_rng(seed)
            # Small integer grid forces plenty of ties and duplicates
            objs = rng.integers(0, 5, size=(30, 2)).astype(np.float64)
            _assert_front_invariants(objs, fast_non_dominated_sort(objs))

    def test_invariants_three_objectives(self) -> None:
        """Invariants hold with three objectives."""
        rng = np.random.default_rng(3)
        objs = rng.uniform(0, 1, size=(40, 3))
        _assert_front_invariants(objs, fast_non_dominated_sort(objs))


# =============================================================================
# TestNonDominatedSort
# =============================================================================


class TestNonDominatedSort:
    """Tests for the rank-per-individual sort."""

    def test_chain(self) -> None:
        """A dominance chain gets increasing ranks."""
        objs = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        np.testing.assert_array_equal(non_dominated_sort(objs), [0, 1, 2])

    def test_known_hierarchy(self, simple_2d_objectives: np.ndarray) -> None:
        """Ranks match the hand-computed hierarchy."""
        np.testing.assert_array_equal(non_dominated_sort(simple_2d_objectives), [0, 1, 2, 1, 1])

    def test_agrees_with_fronts(self, rng: np.random.Generator) -> None:
        """rank[i] == k exactly when i is in fronts[k]."""
        objs = rng.uniform(0, 1, size=(25, 2))
        ranks = non_dominated_sort(objs)
        for k, front in enumerate(fast_non_dominated_sort(objs)):
            assert np.all(ranks[front] == k)

    def test_ranks_are_contiguous(self, rng: np.random.Generator) -> None:
        """Ranks form 0..max with no gaps."""
        ranks = non_dominated_sort(rng.uniform(0, 1, size=(40, 2)))
        np.testing.assert_array_equal(np.unique(ranks), np.arange(ranks.max() + 1))


# =============================================================================
# TestCrowdingDistance
# =============================================================================


class TestCrowdingDistance:
    """Tests for the crowding distance metric."""

    def test_boundary_points_infinite(self, pareto_front_2d: np.ndarray) -> None:
        """The extremes of each objective get infinite distance."""
        cd = crowding_distance(pareto_front_2d)
        assert np.isinf(cd[0]) and np.isinf(cd[3])

    def test_interior_values(self, pareto_front_2d: np.ndarray) -> None:
        """Interior points sum normalized neighbour gaps: 2/3 per objective."""
        cd = crowding_distance(pareto_front_2d)
        np.testing.assert_allclose(cd[1:3], [4.0 / 3.0, 4.0 / 3.0])

    def test_uneven_spacing(self) -> None:
        """Isolated interior points get larger distances."""
        objs = np.array([[0.0, 10.0], [1.0, 9.0], [2.0, 8.0], [10.0, 0.0]])
        cd = crowding_distance(objs)
        assert cd[2] > cd[1]

    def test_zero_range_objective_contributes_nothing(self) -> None:
        """An objective with equal values adds zero and does not divide by zero."""
        objs = np.array([[1.0, 5.0], [2.0, 5.0], [3.0, 5.0], [4.0, 5.0]])
        cd = crowding_distance(objs)
        assert np.all(np.isfinite(cd[1:3]))
        np.testing.assert_allclose(cd[1:3], [2.0 / 3.0, 2.0 / 3.0])

    def test_all_identical(self) -> None:
        """A front of duplicates still gets two boundary points and zeros inside."""
        cd = crowding_distance(np.ones((4, 2)))
        assert np.sum(np.isinf(cd)) == 2
        assert np.all(cd[np.isfinite(cd)] == 0.0)

    def test_small_fronts_all_infinite(self) -> None:
        """Fronts of one or two individuals are all boundary."""
        assert np.all(np.isinf(crowding_distance(np.array([[1.0, 2.0]]))))
        assert np.all(np.isinf(crowding_distance(np.array([[1.0, 2.0], [2.0, 1.0]]))))

    def test_empty(self) -> None:
        """An empty front yields an empty array."""
        assert crowding_distance(np.empty((0, 2))).shape == (0,)

    def test_non_negative(self, rng: np.random.Generator) -> None:
        """Distances are never negative."""
        cd = crowding_distance(rng.uniform(0, 1, size=(20, 3)))
        assert np.all(cd >= 0)

    def test_min_and_max_per_objective_infinite(self) -> None:
        """For every objective, its minimum and maximum holders are infinite."""
        rng = np.random.default_rng(11)
        objs = rng.uniform(0, 1, size=(15, 3))
        cd = crowding_distance(objs)
        for m in range(3):
            assert np.isinf(cd[np.argmin(objs[:, m])])
            assert np.isinf(cd[np.argmax(objs[:, m])])


class TestCrowdingDistanceAll:
    """Tests for per-front crowding over a ranked population."""

    def test_computed_within_each_front(self, simple_2d_objectives: np.ndarray) -> None:
        """Each front is crowded independently of the others."""
        ranks = non_dominated_sort(simple_2d_objectives)
        cd = crowding_distance_all(simple_2d_objectives, ranks)
        # Fronts 0 and 2 are single individuals
        assert np.isinf(cd[0]) and np.isinf(cd[2])
        np.testing.assert_array_equal(cd[[1, 3, 4]], crowding_distance(simple_2d_objectives[[1, 3, 4]]))
