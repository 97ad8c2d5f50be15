from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .algorithms import ALGORITHMS, run_all
from .config import DEFAULT_ALGORITHMS, DEFAULT_QUANTUM, PRIORITY_KEYS, SchedulerConfig
from .errors import InputArgumentError, SchedulerError
from .report import build_comparison_table, print_result
from .workload_io import load_workload

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Reports usage problems as InputArgumentError instead of exiting with 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise InputArgumentError(f"{message}\n{self.format_usage().strip()}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, Round Robin).",
    )
    parser.add_argument(
        "workload",
        help="Path to the workload file: CSV rows of ProcessID,BurstDuration,ArrivalTime[,Priority], or .json.",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--priority-key",
        choices=PRIORITY_KEYS,
        default="burst",
        help="What the Priority schedule picks by among arrived processes (default: burst).",
    )
    parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(DEFAULT_ALGORITHMS),
        help=f"Algorithms to run (default: {' '.join(DEFAULT_ALGORITHMS)}).",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Print only a table comparing average metrics across algorithms.",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Use the plain-text Gantt chart instead of the colored one.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions to stderr.",
    )
    return parser


def _configure_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(args: argparse.Namespace) -> SchedulerConfig:
    try:
        return SchedulerConfig(
            quantum=args.quantum,
            priority_key=args.priority_key,
            algorithms=tuple(args.algorithms),
        )
    except ValueError as exc:
        raise InputArgumentError(str(exc)) from exc


def main(argv: list[str] | None = None) -> int:
    err_console = Console(stderr=True)

    try:
        args = build_parser().parse_args(argv)
        _configure_logging(args.verbose, err_console)
        config = _load_config(args)
        process_set = load_workload(args.workload)
    except SchedulerError as exc:
        err_console.print(f"[red]Error: {escape(str(exc))}[/red]", highlight=False, soft_wrap=True)
        return 1

    if not process_set:
        logger.warning("Workload %s has no processes", args.workload)

    results = run_all(process_set, config)

    console = Console()
    if args.compare:
        console.print(build_comparison_table(results, title=f"Algorithm comparison: {args.workload}"))
        return 0

    for result in results:
        print_result(console, result, plain=args.plain)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
