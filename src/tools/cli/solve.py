"""Command line front end: crossover demos, domain dumps and solving."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List

from contracts.errors import InvalidPuzzleError, SettingsError, UnsatisfiableError
from ports.solver_port import solve_puzzle
from project_config import get_section
from solver_evo import GenerationTrace, compute_domains, cross_mpsx, cross_pmx
from solver_evo.engine import STATUS_NOT_FOUND, STATUS_SOLVED
import sudoku_io

NOT_FOUND_MESSAGE = "MAX ITER EXCEEDED"
EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2


def _read(path: str) -> str:
    try:
        return Path(path).read_text("utf-8")
    except OSError as exc:
        raise InvalidPuzzleError(f"cannot read {path}: {exc.strerror or exc}") from exc


def _build_solver_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if args.population is not None:
        env["CLI_PUZZLE_SOLVER_POPULATION_SIZE"] = str(args.population)
    if args.max_generations is not None:
        env["CLI_PUZZLE_SOLVER_MAX_GENERATIONS"] = str(args.max_generations)
    if args.run_log:
        env["CLI_PUZZLE_RUN_LOG_ENABLED"] = "1"
    return env


def cmd_pmx(args: argparse.Namespace) -> int:
    low, upp, parent1, parent2 = sudoku_io.read_pmx_input(_read(args.file))
    try:
        child = cross_pmx(parent1, parent2, low, upp)
    except ValueError as exc:
        raise InvalidPuzzleError(str(exc)) from exc
    print(sudoku_io.format_row(child, spaced=True))
    return EXIT_OK


def cmd_mpsx(args: argparse.Namespace) -> int:
    mask, parents = sudoku_io.read_mpsx_input(_read(args.file))
    try:
        child = cross_mpsx(mask, parents)
    except ValueError as exc:
        raise InvalidPuzzleError(str(exc)) from exc
    print(sudoku_io.format_row(child, spaced=True))
    return EXIT_OK


def cmd_domains(args: argparse.Namespace) -> int:
    grid = sudoku_io.parse_grid(_read(args.file))
    print(sudoku_io.format_domains(compute_domains(grid)))
    return EXIT_OK


def cmd_solve(args: argparse.Namespace) -> int:
    grid = sudoku_io.parse_grid(_read(args.file))
    trace = GenerationTrace(trace_level="summary") if args.trace else None
    verdict = solve_puzzle(
        grid,
        seed=args.seed,
        env=_build_solver_env(args),
        time_budget=args.time_budget,
        trace=trace,
    )
    if trace is not None:
        print(trace.to_json(indent=2), file=sys.stderr)

    if verdict["status"] == STATUS_SOLVED:
        solution = sudoku_io.from_string(verdict["grid"])
        if args.pretty:
            print(sudoku_io.pretty_grid(solution))
        else:
            print(sudoku_io.format_grid(solution, spaced=False))
        return EXIT_OK
    if verdict["status"] == STATUS_NOT_FOUND:
        print(NOT_FOUND_MESSAGE)
        return EXIT_NOT_FOUND
    print(f"unsatisfiable: {verdict['reason']}", file=sys.stderr)
    return EXIT_INVALID


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sudoku-evo", description="Evolutionary Sudoku solver")
    parser.add_argument("--log-level", default=None, help="Logging level (default from config.toml)")
    sub = parser.add_subparsers(dest="command", required=True)

    pmx = sub.add_parser("pmx", help="Partially matched crossover of two rows")
    pmx.add_argument("file", help="Bounds line (1-based) followed by two rows")
    pmx.set_defaults(func=cmd_pmx)

    mpsx = sub.add_parser("mpsx", help="Multiparental sorting crossover")
    mpsx.add_argument("file", help="Mask line followed by parent rows")
    mpsx.set_defaults(func=cmd_mpsx)

    domains = sub.add_parser("domains", help="Print the filtered domain of every cell")
    domains.add_argument("file", help="Puzzle file, '.' for blanks")
    domains.set_defaults(func=cmd_domains)

    solve = sub.add_parser("solve", help="Solve a puzzle")
    solve.add_argument("file", help="Puzzle file, '.' for blanks")
    solve.add_argument("--seed", type=int, default=None)
    solve.add_argument("--time-budget", type=float, default=None, help="Seconds")
    solve.add_argument("--population", type=int, default=None)
    solve.add_argument("--max-generations", type=int, default=None, help="0 for no cap")
    solve.add_argument("--pretty", action="store_true", help="Boxed output")
    solve.add_argument("--trace", action="store_true", help="Print a generation trace to stderr")
    solve.add_argument("--run-log", action="store_true", help="Append a JSONL run event")
    solve.set_defaults(func=cmd_solve)

    return parser


def _configure_logging(level: str | None) -> None:
    if level is None:
        section = get_section("logging", {})
        level = section.get("level", "WARNING") if isinstance(section, dict) else "WARNING"
    name = str(level).upper()
    if not isinstance(logging.getLevelName(name), int):
        raise SettingsError(f"unknown log level {level!r}")
    logging.basicConfig(
        level=name,
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
    )


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        _configure_logging(args.log_level)
        return args.func(args)
    except (InvalidPuzzleError, SettingsError, UnsatisfiableError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
