"""Performance metrics for multi-objective optimization.

This module provides metrics for evaluating the quality of Pareto front
approximations, primarily using the hypervolume indicator.
"""

import numpy as np
from pymoo.indicators.hv import HV


def hypervolume(objectives: np.ndarray, ref_point: np.ndarray | tuple[float, ...]) -> float:
    """Compute hypervolume indicator.

    The hypervolume (or S-metric) measures the volume of objective space
    dominated by the Pareto front approximation and bounded by a reference point.
    Higher values indicate better convergence and diversity.

    Args:
        objectives: (n, n_obj) objective values of the Pareto front approximation
        ref_point: Reference point, slightly worse than the nadir point of the
            problem's true front.

    Returns:
        Hypervolume value (higher is better for minimization problems)

    Raises:
        ValueError: If objectives array is empty or has wrong shape
    """
    if objectives.size == 0:
        raise ValueError("objectives array cannot be empty")

    if objectives.ndim != 2:
        raise ValueError(f"objectives must be 2D array, got shape {objectives.shape}")

    indicator = HV(ref_point=np.asarray(ref_point, dtype=np.float64))
    return float(indicator(objectives))
