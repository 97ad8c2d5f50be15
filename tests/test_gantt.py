from rich.console import Console

from schedsim.algorithms import schedule_fcfs, schedule_rr
from schedsim.gantt import build_rich_gantt, render_gantt
from schedsim.models import Process, ScheduledSlice
from schedsim.report import build_schedule_table, print_result


def _procs():
    return [
        Process(1, arrival_time=0, burst_time=5, priority=1),
        Process(2, arrival_time=2, burst_time=3, priority=2),
        Process(3, arrival_time=4, burst_time=1, priority=3),
    ]


def _assert_marks_under_borders(bar: str, marks: str):
    borders = [i for i, ch in enumerate(bar) if ch == "|"]
    starts = [i for i, ch in enumerate(marks) if ch.isdigit() and (i == 0 or marks[i - 1] == " ")]
    assert borders == starts


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_render_gantt_fcfs_scenario():
    lines = render_gantt(schedule_fcfs(_procs()).timeline).splitlines()
    assert lines[0] == "Gantt schedule"
    assert lines[1] == "|=====|====|====|"
    assert lines[2].split() == ["P1", "P2", "P3"]
    assert lines[3] == "0     5    8    9"


def test_render_gantt_labels_one_unit_slices():
    lines = render_gantt(schedule_rr(_procs(), quantum=1).timeline).splitlines()
    assert lines[2].split() == ["P1", "P1", "P2", "P1", "P2", "P3", "P1", "P2", "P1"]
    assert lines[3].split() == [str(t) for t in range(10)]
    _assert_marks_under_borders(lines[1], lines[3])


def test_render_gantt_marks_idle_gap():
    lines = render_gantt([ScheduledSlice(1, 0, 2), ScheduledSlice(12, 5, 8)]).splitlines()
    assert lines[1] == "|====|...|=====|"
    assert lines[2].split() == ["P1", "P12"]
    assert lines[3] == "0    2   5     8"


def test_render_gantt_leading_idle_and_wide_times():
    lines = render_gantt([ScheduledSlice(7, 95, 96), ScheduledSlice(8, 96, 110)]).splitlines()
    assert lines[1].startswith("|" + "." * 95 + "|")
    assert lines[2].split() == ["P7", "P8"]
    _assert_marks_under_borders(lines[1], lines[3])


def test_rich_gantt_labels_and_marks():
    console = Console(record=True, width=120)
    console.print(build_rich_gantt(schedule_rr(_procs(), quantum=1).timeline))
    out = console.export_text()
    for pid in ("P1", "P2", "P3"):
        assert pid in out
    assert "0    1    2    3" in out


def test_rich_gantt_empty():
    console = Console(record=True, width=80)
    console.print(build_rich_gantt([]))
    assert "No execution" in console.export_text()


def test_schedule_table_rows_and_footer():
    result = schedule_fcfs([Process(1, 0, 5, 1), Process(2, 2, 3, 2)])
    table = build_schedule_table(result)
    assert table.row_count == 2
    assert [c.header for c in table.columns] == ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]
    assert table.columns[4].footer == "Average\n1.50"


def test_print_result_shows_quantum():
    console = Console(record=True, width=120)
    print_result(console, schedule_rr([Process(1, 0, 2)], quantum=3))
    out = console.export_text()
    assert "Round-robin" in out
    assert "Quantum: 3" in out
