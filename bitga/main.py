"""
bitga - Command Line Entry Point
================================

Usage:
    # Evolve the knapsack sample with a fixed seed
    bitga run --problem knapsack --generations 500 --seed 42 -v

    # Michalewicz sample, numpy random source, results to JSON
    bitga run --problem michalewicz --rng numpy --json results/mi.json

    # Print the default configuration, or the one tuned for a problem
    bitga config
    bitga config --problem michalewicz
"""

import argparse
import json
import logging
import sys

from .config import Config, LoggingConfig
from .exceptions import GeneticAlgorithmError
from .problems import PROBLEMS, problem_evolution_config

logger = logging.getLogger(__name__)


def build_config(args) -> Config:
    """Translate parsed arguments into a Config"""
    overrides = {
        'population_size': args.population,
        'generations': args.generations,
        'crossover_rate': args.crossover_rate,
        'generation_gap': args.generation_gap,
        'mutation_rate': args.mutation_rate,
        'elite_count': args.elite,
        'tournament_size': args.tournament,
    }
    evolution = problem_evolution_config(
        args.problem,
        crossover=args.crossover,
        reverse_order=not args.minimize,
        **{key: value for key, value in overrides.items() if value is not None}
    )
    level = 'DEBUG' if args.debug else ('INFO' if args.verbose else 'WARNING')
    return Config(
        evolution=evolution,
        logging=LoggingConfig(level=level),
        random_seed=args.seed,
        rng=args.rng,
        verbose=args.verbose,
    )


def run_problem(args) -> int:
    """Run one sample problem"""
    from .pipeline import EvolutionRunner

    config = build_config(args)
    config.logging.apply()

    result = EvolutionRunner(config).run_problem(args.problem)

    print("\n" + "=" * 60)
    print(f"RESULT: {args.problem} (seed={args.seed}, rng={args.rng})")
    print("=" * 60)
    print(f"Best fitness:    {result.best_fitness:.6g} "
          f"(generation {result.history.best_generation})")
    if result.best_individual is not None:
        print(f"Best genotype:   {result.best_individual.to_genotype_string()}")
        print(f"Best phenotype:  {result.best_individual.to_phenotype_string()}")
    print(f"Generations:     {result.generations_run}")
    print(f"Runtime:         {result.runtime:.2f} s")
    print("=" * 60)

    if args.json:
        result.save_json(args.json)
        print(f"\nResults saved to: {args.json}")

    return 0


def show_config(args) -> int:
    config = Config()
    if args.problem is not None:
        config.evolution = problem_evolution_config(args.problem)
    print(json.dumps(config.to_dict(), indent=2))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog='bitga',
        description='Bit-string genetic algorithm',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Run command
    run_parser = subparsers.add_parser('run', help='Evolve a sample problem')
    run_parser.add_argument('--problem', choices=sorted(PROBLEMS), default='knapsack',
                            help='Sample problem')
    run_parser.add_argument('--generations', type=int, help='Number of generations')
    run_parser.add_argument('--population', type=int, help='Population size')
    run_parser.add_argument('--crossover_rate', type=float, help='Pair crossover probability')
    run_parser.add_argument('--generation_gap', type=float, help='Fraction replaced per generation')
    run_parser.add_argument('--mutation_rate', type=float, help='Per-bit flip probability')
    run_parser.add_argument('--elite', type=int, help='Elite survivors')
    run_parser.add_argument('--tournament', type=int, help='Tournament size')
    run_parser.add_argument('--crossover', choices=['single_point', 'two_point', 'uniform'],
                            default='two_point', help='Crossover strategy')
    run_parser.add_argument('--minimize', action='store_true', help='Rank lowest fitness first')
    run_parser.add_argument('--seed', type=int, help='Random seed')
    run_parser.add_argument('--rng', choices=['java', 'numpy'], default='java',
                            help='Random source')
    run_parser.add_argument('--json', type=str, help='Write result JSON to this path')
    run_parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    run_parser.add_argument('--debug', action='store_true', help='Debug logging')

    # Config command
    config_parser = subparsers.add_parser('config', help='Print the default configuration')
    config_parser.add_argument('--problem', choices=sorted(PROBLEMS),
                               help='Show the defaults tuned for a sample problem')

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == 'run':
            return run_problem(args)
        elif args.command == 'config':
            return show_config(args)
    except GeneticAlgorithmError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
