"""Bitstring codec for bounded real-valued parameter vectors.

Each decision parameter is stored as a fixed-width unsigned integer written
big-endian (first bit most significant) and mapped linearly onto its
(min, max) interval:

    value = min + (max - min) / (2**bits - 1) * int_val

This module provides:
- validate_bounds: normalise a search space to a float (n_params, 2) array
- decode / decode_population: bits -> real vector(s)
- encode: real vector -> bits (nearest grid point)
- random_bitstrings: uniform random genomes
"""

from collections.abc import Sequence

import numpy as np

# Widest encoding for which decode(encode(v)) == v holds for every grid
# point; rounding in the float64 step breaks that from 51 bits up
MAX_BITS_PER_PARAM = 48


def validate_bounds(bounds: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    """Normalise a search space to a float array of shape (n_params, 2).

    Args:
        bounds: Sequence of (min, max) pairs, one per parameter.

    Returns:
        Float64 array of shape (n_params, 2).

    Raises:
        ValueError: If bounds is empty, not a sequence of pairs, contains
            non-finite values, or has a pair with min > max.
    """
    try:
        arr = np.asarray(bounds, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"bounds must be a sequence of (min, max) pairs: {exc}") from exc

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"bounds must have shape (n_params, 2), got {arr.shape}")
    if arr.shape[0] == 0:
        raise ValueError("bounds must contain at least one parameter")
    if not np.all(np.isfinite(arr)):
        raise ValueError("bounds must be finite")
    bad = np.flatnonzero(arr[:, 0] > arr[:, 1])
    if len(bad) > 0:
        i = int(bad[0])
        raise ValueError(f"bounds[{i}] has min {arr[i, 0]} greater than max {arr[i, 1]}")
    return arr


def _check_bits_per_param(bits_per_param: int) -> None:
    if not isinstance(bits_per_param, (int, np.integer)) or isinstance(bits_per_param, bool):
        raise TypeError(f"bits_per_param must be an integer, got {type(bits_per_param).__name__}")
    if bits_per_param <= 0:
        raise ValueError(f"bits_per_param must be positive, got {bits_per_param}")
    if bits_per_param > MAX_BITS_PER_PARAM:
        raise ValueError(f"bits_per_param must be at most {MAX_BITS_PER_PARAM}, got {bits_per_param}")


def _place_values(bits_per_param: int) -> np.ndarray:
    # Big-endian weights: [2**(b-1), ..., 2, 1]
    return 2.0 ** np.arange(bits_per_param - 1, -1, -1, dtype=np.float64)


def decode_population(
    bits: np.ndarray,
    bounds: Sequence[Sequence[float]] | np.ndarray,
    bits_per_param: int,
) -> np.ndarray:
    """Decode a matrix of genomes into real-valued vectors.

    Args:
        bits: Genomes, shape (n, n_params * bits_per_param), values 0/1.
        bounds: Sequence of (min, max) pairs, one per parameter.
        bits_per_param: Width of each parameter's integer encoding.

    Returns:
        Array of shape (n, n_params) of decoded values.

    Raises:
        ValueError: If the genome width does not match
            ``len(bounds) * bits_per_param`` or bits are not binary.

    Example:
        >>> bits = np.array([[0, 0, 0, 0], [1, 1, 1, 1]])
        >>> decode_population(bits, [(-10, 10)], 4)
        array([[-10.],
               [ 10.]])
    """
    _check_bits_per_param(bits_per_param)
    space = validate_bounds(bounds)
    bits = np.asarray(bits)

    if bits.ndim != 2:
        raise ValueError(f"bits must be 2D, got shape {bits.shape}")
    n_params = space.shape[0]
    expected = n_params * bits_per_param
    if bits.shape[1] != expected:
        raise ValueError(
            f"bitstring has {bits.shape[1]} bits, expected {expected} "
            f"({n_params} parameters x {bits_per_param} bits)"
        )
    if bits.size and not np.all((bits == 0) | (bits == 1)):
        raise ValueError("bits must contain only 0 and 1")

    # (n, n_params, bits_per_param) -> (n, n_params) unsigned integers
    chunks = bits.reshape(bits.shape[0], n_params, bits_per_param).astype(np.float64)
    int_vals = chunks @ _place_values(bits_per_param)

    lower = space[:, 0]
    step = (space[:, 1] - lower) / (2.0**bits_per_param - 1.0)
    return lower + step * int_vals


def decode(
    bits: np.ndarray | Sequence[int] | str,
    bounds: Sequence[Sequence[float]] | np.ndarray,
    bits_per_param: int,
) -> np.ndarray:
    """Decode a single genome into its real-valued parameter vector.

    Args:
        bits: Genome as a 1D 0/1 sequence or a string of '0'/'1' characters.
        bounds: Sequence of (min, max) pairs, one per parameter.
        bits_per_param: Width of each parameter's integer encoding.

    Returns:
        Array of shape (n_params,).

    Examples:
        >>> decode("0000", [(-10, 10)], 4)
        array([-10.])
        >>> decode("1111", [(-10, 10)], 4)
        array([10.])
    """
    if isinstance(bits, str):
        if any(c not in "01" for c in bits):
            raise ValueError(f"bitstring must contain only '0' and '1', got {bits!r}")
        bits = np.fromiter((c == "1" for c in bits), dtype=np.uint8, count=len(bits))
    arr = np.asarray(bits)
    if arr.ndim != 1:
        raise ValueError(f"bits must be 1D, got shape {arr.shape}")
    return decode_population(arr[np.newaxis, :], bounds, bits_per_param)[0]


def encode(
    vector: np.ndarray | Sequence[float],
    bounds: Sequence[Sequence[float]] | np.ndarray,
    bits_per_param: int,
) -> np.ndarray:
    """Encode a real-valued vector as the genome of its nearest grid point.

    Values outside their bounds are clipped first. A degenerate parameter
    (min == max) encodes as all zeros.

    Args:
        vector: Values, shape (n_params,).
        bounds: Sequence of (min, max) pairs, one per parameter.
        bits_per_param: Width of each parameter's integer encoding.

    Returns:
        uint8 array of shape (n_params * bits_per_param,).

    Example:
        >>> encode([10.0], [(-10, 10)], 4)
        array([1, 1, 1, 1], dtype=uint8)
    """
    _check_bits_per_param(bits_per_param)
    space = validate_bounds(bounds)
    values = np.asarray(vector, dtype=np.float64)

    if values.ndim != 1 or values.shape[0] != space.shape[0]:
        raise ValueError(f"vector has shape {values.shape}, expected ({space.shape[0]},) to match bounds")
    if not np.all(np.isfinite(values)):
        raise ValueError("vector must be finite")

    lower, upper = space[:, 0], space[:, 1]
    max_int = 2**bits_per_param - 1
    span = upper - lower
    safe_span = np.where(span > 0, span, 1.0)
    fraction = np.where(span > 0, (np.clip(values, lower, upper) - lower) / safe_span, 0.0)
    int_vals = np.rint(fraction * max_int).astype(np.int64)

    shifts = np.arange(bits_per_param - 1, -1, -1, dtype=np.int64)
    bits = (int_vals[:, np.newaxis] >> shifts) & 1
    return bits.reshape(-1).astype(np.uint8)


def random_bitstrings(rng: np.random.Generator, n: int, n_bits: int) -> np.ndarray:
    """Sample ``n`` uniform random genomes of length ``n_bits``.

    Args:
        rng: Random number generator.
        n: Number of genomes.
        n_bits: Bits per genome.

    Returns:
        uint8 array of shape (n, n_bits).
    """
    return (rng.random((n, n_bits)) < 0.5).astype(np.uint8)
