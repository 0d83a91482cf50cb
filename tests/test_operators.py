"""Tests for bitstring genetic operators."""

import numpy as np

from nsga_bits.operators import partner_indices, point_mutation, reproduce, uniform_crossover


class TestUniformCrossover:
    """Tests for uniform crossover."""

    def test_no_crossover_copies_first_parent(self, rng: np.random.Generator) -> None:
        """With p_cross = 0 the child is parent_a."""
        a = np.array([1, 0, 1, 0], dtype=np.uint8)
        b = np.array([0, 1, 0, 1], dtype=np.uint8)
        child = uniform_crossover(a, b, rng, p_cross=0.0)
        np.testing.assert_array_equal(child, a)
        assert child is not a

    def test_child_bits_come_from_a_parent(self, rng: np.random.Generator) -> None:
        """Every child bit equals the same position in one of the parents."""
        a = np.zeros(64, dtype=np.uint8)
        b = np.ones(64, dtype=np.uint8)
        child = uniform_crossover(a, b, rng, p_cross=1.0)
        assert set(np.unique(child).tolist()) <= {0, 1}
        # 64 fair coin flips all landing one way is effectively impossible
        assert 0 < child.sum() < 64

    def test_identical_parents_give_identical_child(self, rng: np.random.Generator) -> None:
        """Crossing a genome with itself reproduces it."""
        a = np.array([1, 1, 0, 1, 0], dtype=np.uint8)
        np.testing.assert_array_equal(uniform_crossover(a, a.copy(), rng, p_cross=1.0), a)

    def test_parents_unchanged(self, rng: np.random.Generator) -> None:
        """Crossover does not modify its inputs."""
        a = np.zeros(8, dtype=np.uint8)
        b = np.ones(8, dtype=np.uint8)
        uniform_crossover(a, b, rng, p_cross=1.0)
        assert a.sum() == 0 and b.sum() == 8


class TestPointMutation:
    """Tests for per-bit flip mutation."""

    def test_zero_rate_is_identity(self, rng: np.random.Generator) -> None:
        """No bits flip at rate 0."""
        bits = np.array([1, 0, 1, 1], dtype=np.uint8)
        np.testing.assert_array_equal(point_mutation(bits, rng, rate=0.0), bits)

    def test_full_rate_flips_everything(self, rng: np.random.Generator) -> None:
        """Every bit flips at rate 1."""
        bits = np.array([1, 0, 1, 1], dtype=np.uint8)
        np.testing.assert_array_equal(point_mutation(bits, rng, rate=1.0), [0, 1, 0, 0])

    def test_default_rate_flips_one_bit_on_average(self) -> None:
        """The default rate of 1/L flips about one bit per genome."""
        rng = np.random.default_rng(0)
        bits = np.zeros(32, dtype=np.uint8)
        flips = [point_mutation(bits, rng).sum() for _ in range(2000)]
        assert 0.8 < np.mean(flips) < 1.2

    def test_input_unchanged(self, rng: np.random.Generator) -> None:
        """Mutation returns a new array."""
        bits = np.zeros(4, dtype=np.uint8)
        out = point_mutation(bits, rng, rate=1.0)
        assert bits.sum() == 0
        assert out.dtype == np.uint8


class TestPartnerIndices:
    """Tests for mating-pool pairing."""

    def test_even_pool(self) -> None:
        """Adjacent slots pair up and the last slot mates with slot 0."""
        assert partner_indices(6).tolist() == [1, 0, 3, 2, 5, 0]

    def test_odd_pool(self) -> None:
        """The unpaired last slot mates with slot 0."""
        assert partner_indices(5).tolist() == [1, 0, 3, 2, 0]

    def test_small_pools(self) -> None:
        """Pools of one and two slots still produce valid partners."""
        assert partner_indices(1).tolist() == [0]
        assert partner_indices(2).tolist() == [1, 0]


class TestReproduce:
    """Tests for building a generation of children."""

    def test_one_child_per_slot(self, rng: np.random.Generator) -> None:
        """Children match the pool shape and are 0/1 genomes."""
        pool = (rng.random((7, 12)) < 0.5).astype(np.uint8)
        children = reproduce(pool, rng, p_cross=0.9)
        assert children.shape == (7, 12)
        assert children.dtype == np.uint8
        assert set(np.unique(children).tolist()) <= {0, 1}

    def test_no_crossover_no_mutation_copies_pool(self, rng: np.random.Generator) -> None:
        """With both operators disabled the children are the pool."""
        pool = (rng.random((6, 10)) < 0.5).astype(np.uint8)
        np.testing.assert_array_equal(reproduce(pool, rng, p_cross=0.0, mutation_rate=0.0), pool)

    def test_children_mix_only_their_pair(self) -> None:
        """Without mutation, child i draws bits only from slot i and its partner."""
        pool = np.array(
            [
                [0, 0, 0, 0],
                [1, 1, 1, 1],
                [0, 0, 0, 0],
                [0, 0, 0, 0],
            ],
            dtype=np.uint8,
        )
        children = reproduce(pool, np.random.default_rng(1), p_cross=1.0, mutation_rate=0.0)
        # Slots 2 and 3 pair with zero genomes only (3 mates with 0)
        np.testing.assert_array_equal(children[2:], np.zeros((2, 4)))

    def test_deterministic_with_seed(self) -> None:
        """The same seed gives the same children."""
        pool = (np.random.default_rng(5).random((8, 16)) < 0.5).astype(np.uint8)
        a = reproduce(pool, np.random.default_rng(2), p_cross=0.98)
        b = reproduce(pool, np.random.default_rng(2), p_cross=0.98)
        np.testing.assert_array_equal(a, b)
