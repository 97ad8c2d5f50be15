from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


@dataclass
class _Cell:
    pid: Optional[int]  # None while the CPU is idle
    start_time: int
    end_time: int
    width: int

    @property
    def label(self) -> str:
        return "" if self.pid is None else f"P{self.pid}"


def _width(duration: int, label: str, end_time: int) -> int:
    return max(duration, len(label) + 2, len(str(end_time)) + 1)


def _layout(slices: List[ScheduledSlice]) -> List[_Cell]:
    """
    One cell per slice plus one per idle gap, in time order.

    A cell gets a column per time unit, widened so its label and the time
    mark at its right border always fit.
    """
    cells: List[_Cell] = []
    last_time = 0

    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        if sl.start_time > last_time:
            gap = sl.start_time - last_time
            cells.append(_Cell(None, last_time, sl.start_time, _width(gap, "", sl.start_time)))
        cells.append(_Cell(sl.pid, sl.start_time, sl.end_time, _width(sl.duration, f"P{sl.pid}", sl.end_time)))
        last_time = sl.end_time

    return cells


def _marks_row(cells: List[_Cell]) -> str:
    """Time marks, each starting under the border it belongs to."""
    row = str(cells[0].start_time)
    border = 0
    for cell in cells:
        border += cell.width + 1
        row = row.ljust(border) + str(cell.end_time)
    return row


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: a bar of `=` cells (`.` while idle), the
    process labels, and the time at every cell border.
    """
    if not slices:
        return "(no execution)"

    cells = _layout(slices)
    fill = {True: "=", False: "."}

    bar = "|" + "|".join(fill[c.pid is not None] * c.width for c in cells) + "|"
    labels = " " + " ".join(f" {c.label}".ljust(c.width) for c in cells)

    return "\n".join(["Gantt schedule", bar, labels, _marks_row(cells)])


def build_rich_gantt(slices: List[ScheduledSlice]) -> Panel:
    """
    Build a Rich Panel with one colored, labelled cell per slice and the
    time marks underneath.
    """
    if not slices:
        return Panel("No execution", title="Gantt schedule")

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    cells = _layout(slices)

    bar = Text("|")
    for cell in cells:
        if cell.pid is None:
            bar.append("." * cell.width, style="dim")
        else:
            bar.append(f" {cell.label}".ljust(cell.width), style=f"bold on {pid_color(cell.pid)}")
        bar.append("|")

    table = Table.grid(padding=(0, 0))
    table.add_row(bar)
    table.add_row(Text(_marks_row(cells)))

    return Panel.fit(table, title="Gantt schedule")
