"""Bitstring NSGA-II generation loop.

This module ties the codec, evaluator, ranking, selection and reproduction
together:

- nsga2: keyword-argument entry point that builds an NSGAConfig
- run: the generation loop for a prebuilt configuration

Example:
    >>> from nsga_bits import nsga2
    >>> def f1(x):
    ...     return float(np.sum(x**2))
    >>> def f2(x):
    ...     return float(np.sum((x - 2.0) ** 2))
    >>> result = nsga2(
    ...     [f1, f2],
    ...     search_space=[(-10, 10)],
    ...     pop_size=100,
    ...     n_generations=50,
    ...     crossover_prob=0.98,
    ...     seed=42,
    ... )
    >>> len(result)
    100
"""

import logging
from collections.abc import Callable, Sequence

import numpy as np

from nsga_bits.codec import decode_population, random_bitstrings
from nsga_bits.config import NSGAConfig
from nsga_bits.evaluation import ObjectiveFn, VectorObjectiveFn, combine, lift
from nsga_bits.operators import reproduce
from nsga_bits.population import Population, concat
from nsga_bits.primitives import crowding_distance_all, non_dominated_sort
from nsga_bits.results import GenerationReport, NSGAResult
from nsga_bits.selection import crowded_tournament
from nsga_bits.survival import environmental_selection

logger = logging.getLogger(__name__)

Seed = int | np.random.Generator | None


def nsga2(
    objectives: Sequence[ObjectiveFn] | VectorObjectiveFn,
    search_space: Sequence[Sequence[float]] | np.ndarray,
    pop_size: int,
    n_generations: int,
    crossover_prob: float,
    bits_per_param: int = 16,
    mutation_rate: float | None = None,
    seed: Seed = None,
) -> NSGAResult:
    """Run bitstring NSGA-II multi-objective optimization.

    Args:
        objectives: Objective functions to minimize. Either a sequence of
            callables each mapping a decoded vector to a scalar, or one
            callable returning all objective values.
        search_space: (min, max) pair per decision parameter.
        pop_size: Population size N.
        n_generations: Number of generations to run (positive).
        crossover_prob: Probability a child is produced by uniform crossover.
        bits_per_param: Bits per encoded parameter (default 16).
        mutation_rate: Per-bit flip probability. Defaults to ``1 / n_bits``.
        seed: Random seed or an existing ``np.random.Generator``. Every random
            draw of the run comes from this single source.

    Returns:
        NSGAResult with N individuals ordered by quality.

    Raises:
        TypeError: If a configuration value has the wrong type or the
            objectives are not callable.
        ValueError: If a configuration value is out of range.
        EvaluationError: If an objective function fails or returns an
            unusable result.
    """
    config = NSGAConfig(
        search_space=search_space,
        pop_size=pop_size,
        n_generations=n_generations,
        crossover_prob=crossover_prob,
        bits_per_param=bits_per_param,
        mutation_rate=mutation_rate,
    )
    return run(config, objectives, seed=seed)


def _evaluated(
    bits: np.ndarray,
    config: NSGAConfig,
    evaluate: Callable[[np.ndarray], np.ndarray],
) -> Population:
    x = decode_population(bits, config.search_space, config.bits_per_param)
    return Population(bits=bits, x=x, objectives=evaluate(x))


def _breed(
    parents: Population,
    config: NSGAConfig,
    rng: np.random.Generator,
    rank: np.ndarray,
    crowding_distance: np.ndarray,
) -> np.ndarray:
    pool = crowded_tournament(parents, config.pop_size, rng, rank=rank, crowding_distance=crowding_distance)
    return reproduce(parents.bits[pool], rng, config.crossover_prob, config.effective_mutation_rate)


def _report(generation: int, n_fronts: int, parents: Population) -> GenerationReport:
    best = int(np.argmin(parents.objectives.sum(axis=1)))
    return GenerationReport(
        generation=generation,
        n_fronts=n_fronts,
        pareto_size=int(np.sum(parents.rank == 0)),
        best_x=parents.x[best].copy(),
        best_objectives=parents.objectives[best].copy(),
    )


def _select(union: Population, n_survivors: int) -> tuple[Population, int]:
    indices, state = environmental_selection(union.objectives, n_survivors)
    survivors = Population(
        bits=union.bits[indices],
        x=union.x[indices],
        objectives=union.objectives[indices],
        rank=state["rank"],
        crowding_distance=state["crowding_distance"],
    )
    return survivors, int(state["n_fronts"])


def run(
    config: NSGAConfig,
    objectives: Sequence[ObjectiveFn] | VectorObjectiveFn,
    seed: Seed = None,
) -> NSGAResult:
    """Run the generation loop for a validated configuration.

    Algorithm Flow:
        1. Sample N random genomes, decode and evaluate them (parents).
           Rank and crowd the parents, then breed and evaluate N children.
        2. For each generation:
           a. union = parents + children (2N)
           b. rank the union and compute crowding distance per front
           c. environmental selection keeps N as the new parents
           d. N binary-tournament draws from the new parents form the pool
           e. the pool is reproduced into N children, decoded and evaluated
        3. A final environmental selection over parents + children gives the
           returned population, ordered by rank then crowding distance.

    Args:
        config: Validated run configuration.
        objectives: Objective functions, see ``nsga2``.
        seed: Random seed or an existing ``np.random.Generator``.

    Returns:
        NSGAResult with ``config.pop_size`` individuals.

    Raises:
        TypeError: If the objectives are not callable.
        EvaluationError: If an objective function fails or returns an
            unusable result.
    """
    objective_fn = combine(objectives)
    rng = np.random.default_rng(seed)
    n = config.pop_size

    logger.debug(
        "Starting NSGA-II: %d parameters x %d bits, pop_size=%d, n_generations=%d, "
        "crossover_prob=%s, mutation_rate=%s",
        config.n_params,
        config.bits_per_param,
        n,
        config.n_generations,
        config.crossover_prob,
        config.effective_mutation_rate,
    )

    parents = _evaluated(random_bitstrings(rng, n, config.n_bits), config, lift(objective_fn))
    # Every later evaluation must produce the same number of objectives
    evaluate = lift(objective_fn, n_obj=parents.n_obj)

    init_rank = non_dominated_sort(parents.objectives)
    init_cd = crowding_distance_all(parents.objectives, init_rank)
    children = _evaluated(_breed(parents, config, rng, init_rank, init_cd), config, evaluate)
    evaluations = 2 * n

    history: list[GenerationReport] = []
    for gen in range(1, config.n_generations + 1):
        parents, n_fronts = _select(concat(parents, children), n)
        children = _evaluated(_breed(parents, config, rng, parents.rank, parents.crowding_distance), config, evaluate)
        evaluations += n

        report = _report(gen, n_fronts, parents)
        history.append(report)
        logger.info(
            "Generation %d/%d: %d fronts, best x=%s objectives=%s",
            gen,
            config.n_generations,
            n_fronts,
            np.array2string(report.best_x, precision=6),
            np.array2string(report.best_objectives, precision=6),
        )

    final, _ = _select(concat(parents, children), n)
    order = np.lexsort((-final.crowding_distance, final.rank))
    final = final.take(order)

    logger.debug("NSGA-II finished after %d generations and %d evaluations", config.n_generations, evaluations)

    return NSGAResult(
        population=final,
        rank=final.rank,
        crowding_distance=final.crowding_distance,
        generations=config.n_generations,
        evaluations=evaluations,
        history=tuple(history),
    )
