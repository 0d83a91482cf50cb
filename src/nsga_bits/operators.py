"""Genetic operators for bitstring genomes.

This module provides the reproduction operators:

- uniform_crossover: bitwise uniform crossover applied with a probability
- point_mutation: independent per-bit flips
- partner_indices: the mate of every mating-pool slot
- reproduce: build a full generation of children from a mating pool

All randomness comes from the ``rng`` argument.
"""

import numpy as np


def uniform_crossover(
    parent_a: np.ndarray,
    parent_b: np.ndarray,
    rng: np.random.Generator,
    p_cross: float,
) -> np.ndarray:
    """Cross two parents bit by bit, or copy the first parent.

    With probability ``p_cross`` every bit of the child is taken from
    ``parent_a`` or ``parent_b`` with equal probability; otherwise the child
    is a copy of ``parent_a``.

    Args:
        parent_a: Genome, shape (n_bits,).
        parent_b: Genome, shape (n_bits,).
        rng: Random number generator.
        p_cross: Crossover probability in [0, 1].

    Returns:
        New child genome, shape (n_bits,).
    """
    if rng.random() >= p_cross:
        return parent_a.copy()
    take_a = rng.random(parent_a.shape[0]) < 0.5
    return np.where(take_a, parent_a, parent_b).astype(np.uint8)


def point_mutation(
    bits: np.ndarray,
    rng: np.random.Generator,
    rate: float | None = None,
) -> np.ndarray:
    """Flip each bit independently with probability ``rate``.

    Args:
        bits: Genome, shape (n_bits,).
        rng: Random number generator.
        rate: Per-bit flip probability. Defaults to ``1 / n_bits``.

    Returns:
        Mutated copy of the genome.
    """
    if rate is None:
        rate = 1.0 / bits.shape[0]
    flips = rng.random(bits.shape[0]) < rate
    return (bits ^ flips).astype(np.uint8)


def partner_indices(n: int) -> np.ndarray:
    """Return the mate of every slot in a mating pool of size ``n``.

    Slots pair up as (0, 1), (2, 3), ...; the last slot always mates with
    slot 0, which also covers the unpaired remainder of an odd pool.

    Example:
        >>> partner_indices(6).tolist()
        [1, 0, 3, 2, 5, 0]
        >>> partner_indices(5).tolist()
        [1, 0, 3, 2, 0]
    """
    idx = np.arange(n)
    partners = np.where(idx % 2 == 0, idx + 1, idx - 1)
    if n > 0:
        partners[-1] = 0
    return partners


def reproduce(
    pool_bits: np.ndarray,
    rng: np.random.Generator,
    p_cross: float,
    mutation_rate: float | None = None,
) -> np.ndarray:
    """Create one child per mating-pool slot via crossover then mutation.

    Child i uses pool slot i as its first parent and ``partner_indices`` for
    its mate. Children are neither decoded nor evaluated here.

    Args:
        pool_bits: Genomes of the mating pool, shape (n, n_bits).
        rng: Random number generator.
        p_cross: Crossover probability in [0, 1].
        mutation_rate: Per-bit flip probability. Defaults to ``1 / n_bits``.

    Returns:
        Array of shape (n, n_bits) containing the children.

    Example:
        >>> children = reproduce(pool_bits, rng, p_cross=0.98)
        >>> children.shape == pool_bits.shape
        True
    """
    n = pool_bits.shape[0]
    partners = partner_indices(n)
    children = np.empty_like(pool_bits, dtype=np.uint8)

    for i in range(n):
        child = uniform_crossover(pool_bits[i], pool_bits[partners[i]], rng, p_cross)
        children[i] = point_mutation(child, rng, mutation_rate)

    return children
