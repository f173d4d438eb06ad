"""Command-line entry point for running WOA tasks.

Usage:
    whaleopt benchmark --function rastrigin --n-variables 5 --seed 0
    whaleopt jssp --instance test03 --plot convergence.png
    whaleopt jssp --file path/to/la05.txt --n-iterations 500
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from whaleopt.functions.benchmark import BENCHMARKS
from whaleopt.functions.scheduling import MakespanFunction
from whaleopt.problems.jssp import JSSPInstance
from whaleopt.utils.history import History
from whaleopt.visualization import convergence
from whaleopt.whaleopt import Whaleopt


def _add_run_arguments(parser: argparse.ArgumentParser, lower: float, upper: float) -> None:
    parser.add_argument("--n-agents", type=int, default=30, help="Number of whales")
    parser.add_argument("--n-iterations", type=int, default=100, help="Iteration budget")
    parser.add_argument("--lower", type=float, default=lower, help="Lower bound of every variable")
    parser.add_argument("--upper", type=float, default=upper, help="Upper bound of every variable")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the random stream")
    parser.add_argument("--plot", type=str, default=None, help="Image file for the convergence curve")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="whaleopt", description="Whale Optimization Algorithm runner")
    subparsers = parser.add_subparsers(dest="command", required=True)

    bench = subparsers.add_parser("benchmark", help="Optimize a benchmark function")
    bench.add_argument("--function", choices=sorted(BENCHMARKS), default="sphere")
    bench.add_argument("--n-variables", type=int, default=2, help="Number of decision variables")
    bench.add_argument("--maximize", action="store_true", help="Maximize instead of minimize")
    _add_run_arguments(bench, -5.12, 5.12)

    jssp = subparsers.add_parser("jssp", help="Minimize the makespan of a JSSP instance")
    source = jssp.add_mutually_exclusive_group(required=True)
    source.add_argument("--instance", choices=JSSPInstance.available_instances(),
                        help="Bundled instance name")
    source.add_argument("--file", type=str, help="Instance file in the literature format")
    _add_run_arguments(jssp, 0.0, 1.0)

    return parser


def _plot(history: History, title: str, file_path: Optional[str]) -> None:
    if not file_path:
        return

    _, fitness = history.get_convergence("best_agent")
    convergence.plot(fitness, labels=["best fitness"], title=title,
                     ylabel="fitness", file_path=file_path, figsize=(6.4, 8.0))


def run_benchmark(args: argparse.Namespace) -> Whaleopt:
    opt = Whaleopt(
        n_variables=args.n_variables,
        n_agents=args.n_agents,
        bounds=(args.lower, args.upper),
        direction="maximize" if args.maximize else "minimize",
        n_iterations=args.n_iterations,
        function=BENCHMARKS[args.function],
        seed=args.seed,
    )
    history = opt.run()

    position, fitness = history[-1]
    print(f"Best Position: {position} | Fitness: {fitness:.6e}")

    _plot(history, f"WOA - {args.function}", args.plot)

    return opt


def run_jssp(args: argparse.Namespace) -> Whaleopt:
    if args.file:
        instance = JSSPInstance.from_file(args.file)
    else:
        instance = JSSPInstance.from_instance(args.instance)

    function = MakespanFunction(instance)

    opt = Whaleopt(
        n_variables=function.n_variables,
        n_agents=args.n_agents,
        bounds=(args.lower, args.upper),
        direction="minimize",
        n_iterations=args.n_iterations,
        function=function,
        seed=args.seed,
    )
    history = opt.run()

    schedule = function.decode(opt.best_whale.position)
    print(f"Instance: {instance.name} | Makespan: {history[-1][1]:.0f}")
    print(f"Schedule: {' '.join(str(j) for j in schedule)}")

    _plot(history, f"WOA - {instance.name}", args.plot)

    return opt


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.command == "benchmark":
        run_benchmark(args)
    else:
        run_jssp(args)


if __name__ == "__main__":
    main()
