from __future__ import annotations

from typing import Iterable

from rich import box
from rich.console import Console
from rich.table import Table

from .gantt import build_rich_gantt, render_gantt
from .models import ScheduleResult

HEADERS = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]


def print_title(console: Console, title: str) -> None:
    rule = "-" * (len(title) * 2)
    console.print(rule)
    console.print(" " * (len(title) // 2) + title, style="bold")
    console.print(rule)


def build_schedule_table(result: ScheduleResult) -> Table:
    """
    Per-process rows with the run averages and throughput in the footer.
    """
    summary = result.summary
    footer = {
        "Wait": f"Average\n{summary.average_wait:.2f}",
        "Turnaround": f"Average\n{summary.average_turnaround:.2f}",
        "Exit": f"Throughput\n{summary.throughput:.2f}/t",
    }

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for h in HEADERS:
        justify = "center" if h in {"ID", "Priority"} else "right"
        table.add_column(h, footer=footer.get(h, ""), justify=justify)

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


def print_result(console: Console, result: ScheduleResult, plain: bool = False) -> None:
    print_title(console, result.title)
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    if plain:
        console.print(render_gantt(result.timeline), highlight=False)
    else:
        console.print(build_rich_gantt(result.timeline))

    console.print()
    console.print(build_schedule_table(result))
    console.print()


def build_comparison_table(results: Iterable[ScheduleResult], title: str = "Algorithm comparison") -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Algorithm")
    table.add_column("Quantum", justify="right")
    table.add_column("Avg waiting", justify="right")
    table.add_column("Avg turnaround", justify="right")
    table.add_column("Throughput", justify="right")
    table.add_column("Makespan", justify="right")

    for result in results:
        s = result.summary
        table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{s.average_wait:.2f}",
            f"{s.average_turnaround:.2f}",
            f"{s.throughput:.3f}",
            str(s.makespan),
        )

    return table
