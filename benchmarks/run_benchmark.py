"""Benchmark runner comparing nsga-bits and Pymoo on SCH and ZDT problems.

nsga-bits searches the bitstring encoding of each problem; Pymoo runs its
real-coded NSGA-II (SBX + polynomial mutation) as a reference point.

Usage:
    python benchmarks/run_benchmark.py
"""

import json
import logging
import sys
import time
from collections import defaultdict
from datetime import UTC, datetime
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
from pymoo.algorithms.moo.nsga2 import NSGA2
from pymoo.core.problem import Problem as PymooProblem
from pymoo.operators.crossover.sbx import SBX
from pymoo.operators.mutation.pm import PM
from pymoo.operators.sampling.rnd import FloatRandomSampling
from pymoo.optimize import minimize
from pymoo.termination import get_termination

from benchmarks.metrics import hypervolume
from benchmarks.problems import PROBLEMS, Problem

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)
# Per-generation progress from the optimizer is too chatty for a benchmark
logging.getLogger("nsga_bits").setLevel(logging.WARNING)


# Experiment parameters
POP_SIZE = 100
N_GENERATIONS = 250
BITS_PER_PARAM = 16
CROSSOVER_PROB = 0.98
SBX_ETA = 15.0
PM_ETA = 20.0
N_RUNS = 10
SEEDS = list(range(N_RUNS))


def run_nsga_bits(problem: Problem, seed: int) -> tuple[float, float]:
    """Run bitstring NSGA-II from nsga-bits.

    Args:
        problem: The benchmark problem.
        seed: Random seed for reproducibility.

    Returns:
        Tuple of (hypervolume, elapsed_time_seconds).
    """
    from nsga_bits import nsga2

    start_time = time.perf_counter()
    result = nsga2(
        problem.evaluate,
        search_space=problem.search_space,
        pop_size=POP_SIZE,
        n_generations=N_GENERATIONS,
        crossover_prob=CROSSOVER_PROB,
        bits_per_param=BITS_PER_PARAM,
        seed=seed,
    )
    elapsed = time.perf_counter() - start_time

    hv = hypervolume(result.pareto_front.objectives, problem.ref_point)
    return hv, elapsed


class PymooWrappedProblem(PymooProblem):
    """Wrapper to use a benchmark problem with Pymoo."""

    def __init__(self, problem: Problem) -> None:
        bounds = np.asarray(problem.search_space, dtype=np.float64)
        super().__init__(n_var=len(bounds), n_obj=2, xl=bounds[:, 0], xu=bounds[:, 1])
        self._problem_fn = problem.evaluate

    def _evaluate(self, x: np.ndarray, out: dict, *args, **kwargs) -> None:
        out["F"] = np.array([self._problem_fn(xi) for xi in x])


def run_pymoo(problem: Problem, seed: int) -> tuple[float, float]:
    """Run real-coded NSGA-II from Pymoo.

    Args:
        problem: The benchmark problem.
        seed: Random seed for reproducibility.

    Returns:
        Tuple of (hypervolume, elapsed_time_seconds).
    """
    wrapped = PymooWrappedProblem(problem)

    algorithm = NSGA2(
        pop_size=POP_SIZE,
        sampling=FloatRandomSampling(),
        crossover=SBX(eta=SBX_ETA, prob=CROSSOVER_PROB),
        mutation=PM(eta=PM_ETA, prob=1.0 / wrapped.n_var),
        eliminate_duplicates=False,
    )

    termination = get_termination("n_gen", N_GENERATIONS)

    start_time = time.perf_counter()
    result = minimize(wrapped, algorithm, termination, seed=seed, verbose=False)
    elapsed = time.perf_counter() - start_time

    hv = hypervolume(result.opt.get("F"), problem.ref_point)
    return hv, elapsed


RUNNERS = [
    ("nsga-bits", run_nsga_bits),
    ("pymoo", run_pymoo),
]


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary containing metadata and results.
    """
    metadata = {
        "timestamp": datetime.now(UTC).isoformat(),
        "parameters": {
            "pop_size": POP_SIZE,
            "n_generations": N_GENERATIONS,
            "bits_per_param": BITS_PER_PARAM,
            "crossover_prob": CROSSOVER_PROB,
            "sbx_eta": SBX_ETA,
            "pm_eta": PM_ETA,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
        },
    }

    results = []
    total_runs = len(PROBLEMS) * len(RUNNERS) * N_RUNS
    current_run = 0

    for problem in PROBLEMS.values():
        for library_name, runner in RUNNERS:
            for seed in SEEDS:
                current_run += 1
                logger.info(
                    "Running [%d/%d]: %s on %s (seed=%d)",
                    current_run,
                    total_runs,
                    library_name,
                    problem.name.upper(),
                    seed,
                )

                hv, elapsed = runner(problem, seed)

                results.append(
                    {
                        "library": library_name,
                        "problem": problem.name.upper(),
                        "seed": seed,
                        "hypervolume": hv,
                        "time_seconds": elapsed,
                    }
                )

                logger.info("  HV: %.4f, Time: %.2fs", hv, elapsed)

    return {"metadata": metadata, "results": results}


def print_summary(results: dict) -> None:
    """Print a summary table of hypervolume and timing per problem and library.

    Args:
        results: The benchmark results dictionary.
    """
    hv_data = defaultdict(lambda: defaultdict(list))
    time_data = defaultdict(lambda: defaultdict(list))
    for r in results["results"]:
        hv_data[r["problem"]][r["library"]].append(r["hypervolume"])
        time_data[r["problem"]][r["library"]].append(r["time_seconds"])

    problems = sorted(hv_data.keys())
    libraries = [name for name, _ in RUNNERS]

    print("\n" + "=" * 60)
    print("BENCHMARK SUMMARY")
    print("=" * 60)
    print(f"\nParameters: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}\n")

    header = f"{'Problem':<10}" + "".join(f"{lib:>24}" for lib in libraries)
    print(header)
    print("-" * len(header))
    for problem in problems:
        row = f"{problem:<10}"
        for lib in libraries:
            hvs = hv_data[problem][lib]
            row += f"{np.mean(hvs):>14.4f} +/- {np.std(hvs):.4f}" if hvs else f"{'N/A':>24}"
        print(row)

    print("\nTiming (mean seconds per run):")
    header = f"{'Problem':<10}" + "".join(f"{lib:>15}" for lib in libraries)
    print(header)
    print("-" * len(header))
    for problem in problems:
        row = f"{problem:<10}"
        for lib in libraries:
            times = time_data[problem][lib]
            row += f"{np.mean(times):>15.2f}" if times else f"{'N/A':>15}"
        print(row)

    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting benchmark suite")
    logger.info("Parameters: pop_size=%d, generations=%d, runs=%d", POP_SIZE, N_GENERATIONS, N_RUNS)

    results = run_benchmark()

    output_path = Path(__file__).parent / "results" / "benchmark_results.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info("Results saved to %s", output_path)

    print_summary(results)


if __name__ == "__main__":
    main()
