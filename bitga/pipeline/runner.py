"""
Pipeline Runner Module
======================

Drives the generation loop for a plan from a Config.

Each generation:
1. cross(crossover_rate, generation_gap)
2. mutate(mutation_rate)
3. rank (lazy fitness evaluation) and record statistics
4. select()
"""

import json
import time
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union
from dataclasses import dataclass, field

from ..config import Config
from ..exceptions import InvalidArgumentError
from ..genetics import Individual, create_random
from ..metrics import GenerationStats, RunHistory
from ..optimization.ga import GeneticAlgorithm, GeneticAlgorithmPlan
from ..problems import PROBLEMS

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result from one evolution run"""
    problem: str
    best_individual: Optional[Individual]
    best_fitness: float
    history: RunHistory = field(default_factory=RunHistory)
    generations_run: int = 0
    runtime: float = 0.0
    seed: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'problem': self.problem,
            'best_fitness': self.best_fitness,
            'best_genotype': (self.best_individual.to_genotype_string()
                              if self.best_individual is not None else None),
            'best_phenotype': (self.best_individual.to_phenotype_string()
                               if self.best_individual is not None else None),
            'generations_run': self.generations_run,
            'runtime': self.runtime,
            'seed': self.seed,
            'history': self.history.to_dict(),
        }

    def save_json(self, path: Union[str, Path]):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


class EvolutionRunner:
    """
    Runs a plan for a configured number of generations.

    Usage:
        runner = EvolutionRunner(Config(random_seed=42))
        result = runner.run_problem('knapsack')

        # per-problem defaults
        evolution = problem_evolution_config('michalewicz')
        runner = EvolutionRunner(Config(evolution=evolution))
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize runner.

        Args:
            config: Configuration object (uses default if None)
        """
        self.config = config or Config()

    def build_plan(self, problem: str) -> GeneticAlgorithmPlan:
        """Instantiate a named sample plan with a fresh random source"""
        if problem not in PROBLEMS:
            raise InvalidArgumentError(
                f"unknown problem {problem!r}; choose from {sorted(PROBLEMS)}"
            )
        evo = self.config.evolution
        random = create_random(self.config.rng, self.config.random_seed)
        return PROBLEMS[problem](
            random=random,
            crossover=evo.crossover,
            elite_count=evo.elite_count,
            tournament_size=evo.tournament_size,
        )

    def run_problem(self, problem: str) -> RunResult:
        return self.run(self.build_plan(problem), name=problem)

    def run(self, plan: GeneticAlgorithmPlan, name: str = 'custom') -> RunResult:
        """
        Evolve a population under a plan.

        Args:
            plan: Problem definition
            name: Label stored in the result

        Returns:
            RunResult with best individual and per-generation history
        """
        evo = self.config.evolution
        t0 = time.perf_counter()

        ga = GeneticAlgorithm(plan, evo.population_size)
        ga.set_reverse_order(evo.reverse_order)
        history = RunHistory(maximize=evo.reverse_order)

        for generation in range(evo.generations):
            ga.cross(evo.crossover_rate, evo.generation_gap)
            ga.mutate(evo.mutation_rate)

            ga.sort()
            stats = GenerationStats.from_population(generation, ga.individuals())
            if history.record(stats, ga.get_rank_at(1)):
                logger.info("Generation %d: new best %.6g", generation, stats.best)
                if self.config.verbose:
                    logger.info("%s", history.best_individual.describe())
            else:
                logger.debug("Generation %d: best %.6g mean %.6g",
                             generation, stats.best, stats.mean)

            ga.select()

        runtime = time.perf_counter() - t0
        logger.info("Finished %d generations of %s in %.2fs (best %.6g)",
                    evo.generations, name, runtime, history.best_fitness)

        return RunResult(
            problem=name,
            best_individual=history.best_individual,
            best_fitness=history.best_fitness,
            history=history,
            generations_run=evo.generations,
            runtime=runtime,
            seed=self.config.random_seed,
        )
