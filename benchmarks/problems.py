"""Benchmark problems for bitstring NSGA-II.

- SCH: Schaffer's single-variable bi-objective problem, the classic NSGA
  demonstration (Pareto set x in [0, 2]).
- ZDT1-3: Zitzler-Deb-Thiele problems with 2 objectives and n variables in
  [0, 1].

References:
    Schaffer, J. D. (1985). Multiple objective optimization with vector
    evaluated genetic algorithms. Proceedings of the 1st ICGA, 93-100.
    Zitzler, E., Deb, K., & Thiele, L. (2000). Comparison of multiobjective
    evolutionary algorithms: Empirical results. Evolutionary computation, 8(2), 173-195.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np


def sch(x: np.ndarray) -> np.ndarray:
    """SCH: f1 = sum(x^2), f2 = sum((x - 2)^2)."""
    return np.array([np.sum(x**2), np.sum((x - 2.0) ** 2)])


def zdt1(x: np.ndarray) -> np.ndarray:
    """ZDT1: Convex Pareto front, f2 = 1 - sqrt(f1) at g = 1."""
    n = len(x)
    f1 = x[0]
    g = 1 + 9 * np.sum(x[1:]) / (n - 1)
    return np.array([f1, g * (1 - np.sqrt(f1 / g))])


def zdt2(x: np.ndarray) -> np.ndarray:
    """ZDT2: Non-convex Pareto front, f2 = 1 - f1^2 at g = 1."""
    n = len(x)
    f1 = x[0]
    g = 1 + 9 * np.sum(x[1:]) / (n - 1)
    return np.array([f1, g * (1 - (f1 / g) ** 2)])


def zdt3(x: np.ndarray) -> np.ndarray:
    """ZDT3: Discontinuous Pareto front."""
    n = len(x)
    f1 = x[0]
    g = 1 + 9 * np.sum(x[1:]) / (n - 1)
    h = 1 - np.sqrt(f1 / g) - (f1 / g) * np.sin(10 * np.pi * f1)
    return np.array([f1, g * h])


@dataclass(frozen=True)
class Problem:
    """A benchmark problem with its search space and hypervolume reference point."""

    name: str
    evaluate: Callable[[np.ndarray], np.ndarray]
    search_space: list[tuple[float, float]]
    ref_point: tuple[float, float]


ZDT_N_VARS: int = 30

PROBLEMS: dict[str, Problem] = {
    "sch": Problem("sch", sch, [(-10.0, 10.0)], (4.4, 4.4)),
    "zdt1": Problem("zdt1", zdt1, [(0.0, 1.0)] * ZDT_N_VARS, (1.1, 1.1)),
    "zdt2": Problem("zdt2", zdt2, [(0.0, 1.0)] * ZDT_N_VARS, (1.1, 1.1)),
    "zdt3": Problem("zdt3", zdt3, [(0.0, 1.0)] * ZDT_N_VARS, (1.1, 1.1)),
}
