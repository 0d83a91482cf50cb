"""Objective evaluation glue.

The objective functions are external collaborators: pure functions of a
decoded parameter vector. This module combines them into a single
vector-valued evaluator, lifts it to whole populations, and validates every
result so that ranking never sees partial or malformed data.
"""

from collections.abc import Callable, Sequence

import numpy as np

ObjectiveFn = Callable[[np.ndarray], float]
VectorObjectiveFn = Callable[[np.ndarray], Sequence[float] | np.ndarray]


class EvaluationError(RuntimeError):
    """Raised when an objective function fails or returns an unusable result."""


def combine(objectives: Sequence[ObjectiveFn] | VectorObjectiveFn) -> VectorObjectiveFn:
    """Combine objective functions into one vector-valued function.

    Args:
        objectives: Either a sequence of callables each returning a scalar,
            or a single callable returning a sequence of scalars.

    Returns:
        A function mapping a vector to its objective values, in order.

    Raises:
        TypeError: If ``objectives`` is neither callable nor a non-empty
            sequence of callables.

    Example:
        >>> f = combine([lambda x: x.sum(), lambda x: (x**2).sum()])
        >>> f(np.array([1.0, 2.0]))
        array([3., 5.])
    """
    if callable(objectives):
        return objectives

    fns = list(objectives)
    if not fns:
        raise TypeError("objectives must contain at least one function")
    for i, fn in enumerate(fns):
        if not callable(fn):
            raise TypeError(f"objectives[{i}] is not callable, got {type(fn).__name__}")

    def combined(x: np.ndarray) -> np.ndarray:
        return np.array([fn(x) for fn in fns])

    return combined


def _as_objective_row(value: object, n_obj: int | None) -> np.ndarray:
    try:
        row = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise EvaluationError(f"objective result is not numeric: {value!r}") from exc

    row = np.atleast_1d(row)
    if row.ndim != 1:
        raise EvaluationError(f"objective result must be 1D, got shape {row.shape}")
    if row.shape[0] == 0:
        raise EvaluationError("objective result is empty")
    if n_obj is not None and row.shape[0] != n_obj:
        raise EvaluationError(f"objective result has {row.shape[0]} values, expected {n_obj}")
    if not np.all(np.isfinite(row)):
        raise EvaluationError(f"objective result must be finite, got {row.tolist()}")
    return row


def lift(fn: VectorObjectiveFn, n_obj: int | None = None) -> Callable[[np.ndarray], np.ndarray]:
    """Lift a per-individual objective function to work on a population.

    Every result is validated: it must be numeric, finite and have the same
    length for every individual (``n_obj`` if given, otherwise the length of
    the first result).

    Args:
        fn: Vector-valued objective function. Signature: (n_params,) -> (n_obj,)
        n_obj: Expected number of objectives, or None to infer it.

    Returns:
        A function mapping (n, n_params) decoded vectors to (n, n_obj)
        objective values.

    Raises:
        EvaluationError: (from the returned function) if ``fn`` raises or
            returns an unusable result. The original exception is chained.

    Example:
        >>> evaluate = lift(lambda x: np.array([x.sum(), x.prod()]))
        >>> evaluate(np.array([[1.0, 2.0], [3.0, 4.0]]))
        array([[ 3.,  2.],
               [ 7., 12.]])
    """

    def lifted(x: np.ndarray) -> np.ndarray:
        expected = n_obj
        rows = []
        for i in range(x.shape[0]):
            try:
                value = fn(x[i])
            except Exception as exc:
                raise EvaluationError(f"objective function failed for vector {x[i].tolist()}: {exc}") from exc
            row = _as_objective_row(value, expected)
            expected = row.shape[0]
            rows.append(row)

        if not rows:
            return np.empty((0, expected or 0), dtype=np.float64)
        return np.stack(rows)

    return lifted
