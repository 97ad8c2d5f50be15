from __future__ import annotations

from typing import Dict, List, Sequence

from .models import Process, ProcessMetrics, RunSummary, ScheduleResult, ScheduledSlice


def build_metrics(p: Process, completion_time: int) -> ProcessMetrics:
    """
    Result row for a finished process; waiting time is whatever part of the
    turnaround was not spent on the CPU.
    """
    turnaround_time = completion_time - p.arrival_time
    return ProcessMetrics(
        pid=p.pid,
        priority=p.priority,
        burst_time=p.burst_time,
        arrival_time=p.arrival_time,
        waiting_time=turnaround_time - p.burst_time,
        turnaround_time=turnaround_time,
        completion_time=completion_time,
    )


def order_by_input(processes: Sequence[Process], rows: Dict[int, ProcessMetrics]) -> List[ProcessMetrics]:
    return [rows[p.pid] for p in processes if p.pid in rows]


def compute_run_summary(processes: List[ProcessMetrics], timeline: List[ScheduledSlice]) -> RunSummary:
    """
    Reduce per-process rows to averages and throughput.

    An empty run gives an all-zero summary rather than dividing by zero.
    """
    if not processes:
        return RunSummary()

    n = len(processes)
    makespan = max(p.completion_time for p in processes)
    cpu_busy_time = sum(slice_.duration for slice_ in timeline)

    return RunSummary(
        average_wait=sum(p.waiting_time for p in processes) / n,
        average_turnaround=sum(p.turnaround_time for p in processes) / n,
        throughput=n / makespan if makespan > 0 else 0.0,
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
    )


def finalize(result: ScheduleResult) -> ScheduleResult:
    result.summary = compute_run_summary(result.processes, result.timeline)
    return result
