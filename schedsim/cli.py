from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithms
from .config import DEFAULT_ALGORITHMS, LOG_LEVELS, resolve_log_level
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt, render_title
from .log import configure_logging
from .models import ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (first-come first-serve, preemptive shortest-job-first).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Logging level for diagnostics on stderr (default: $SCHEDSIM_LOG_LEVEL or WARNING).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Shortcut for --log-level DEBUG.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run scheduling algorithms on a workload file.")
    run_parser.add_argument("workload", help="Path to JSON or CSV workload file.")
    run_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(DEFAULT_ALGORITHMS),
        help=f"Algorithms to run, in order ({', '.join(ALGORITHMS)}; default: {' '.join(DEFAULT_ALGORITHMS)}).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the plain-text Gantt chart instead of the colored one.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument("workload", help="Path to JSON or CSV workload file.")
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(DEFAULT_ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(DEFAULT_ALGORITHMS)}).",
    )

    return parser


def build_schedule_table(result: ScheduleResult) -> Table:
    """
    Per-process table with the averages and throughput in the footer.
    """
    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    system = result.system

    footers = {
        "Wait": f"Average\n{system.average_waiting:.2f}" if system else "",
        "Turnaround": f"Average\n{system.average_turnaround:.2f}" if system else "",
        "Exit": f"Throughput\n{system.throughput:.2f}/t" if system else "",
    }
    for header in ("ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"):
        justify = "center" if header in {"ID", "Priority"} else "right"
        table.add_column(header, justify=justify, footer=footers.get(header, ""))

    for p in result.processes:
        table.add_row(
            str(p.pid),
            str(p.priority),
            str(p.burst_time),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        )

    return table


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(render_title(result.algorithm), highlight=False)

    if plain:
        console.print(render_gantt(result.timeline), highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)

    console.print()
    console.print(build_schedule_table(result))
    console.print()


def build_compare_table(results: Sequence[ScheduleResult], title: str = "Algorithm comparison") -> Table:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")
    summary_table.add_column("CPU utilization", justify="right")

    for result in results:
        sys = result.system
        summary_table.add_row(
            result.algorithm,
            f"{sys.average_waiting:.2f}",
            f"{sys.average_turnaround:.2f}",
            f"{sys.throughput:.3f}",
            f"{sys.cpu_utilization * 100:.1f}%",
        )
    return summary_table


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else resolve_log_level(args.log_level))

    console = Console()
    err_console = Console(stderr=True)

    try:
        processes = load_workload(Path(args.workload))
        results = run_algorithms(args.algorithms, processes)
    except FileNotFoundError as exc:
        err_console.print(f"[red]Workload not found: {escape(str(exc.filename))}[/red]")
        return 2
    except OSError as exc:
        err_console.print(f"[red]Cannot read workload {escape(args.workload)}: {escape(str(exc.strerror or exc))}[/red]")
        return 2
    except SchedulerError as exc:
        logger.debug("Run aborted", exc_info=True)
        err_console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    if not processes:
        logger.warning("Workload %s is empty; reporting zero statistics", args.workload)

    if args.command == "run":
        for result in results:
            _print_result(result, console, plain=args.plain)
        return 0

    if args.command == "compare":
        console.print(build_compare_table(results, title=f"Algorithm comparison: {args.workload}"))
        return 0

    parser.error(f"Unknown command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
