from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Sequence

from .config import DEFAULT_QUANTUM, MAX_PRIORITY, SchedulerConfig
from .metrics import build_metrics, finalize, order_by_input
from .models import Process, ProcessMetrics, ProcessSet, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)


def _run_in_order(processes: Sequence[Process], order: Sequence[Process], algorithm: str, title: str) -> ScheduleResult:
    """
    Run `order` back to back, each process to completion.

    `service_time` is the CPU clock; when the next process has not arrived
    yet the clock jumps forward and no slice is emitted for the gap.
    """
    service_time = 0
    timeline: List[ScheduledSlice] = []
    rows: Dict[int, ProcessMetrics] = {}

    for p in order:
        waiting_time = max(0, service_time - p.arrival_time)
        start_time = p.arrival_time + waiting_time
        service_time = start_time + p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=service_time))
        rows[p.pid] = build_metrics(p, completion_time=service_time)
        logger.debug("%s: P%s runs %s-%s (waited %s)", algorithm, p.pid, start_time, service_time, waiting_time)

    result = ScheduleResult(
        algorithm=algorithm,
        title=title,
        processes=order_by_input(processes, rows),
        timeline=timeline,
    )
    return finalize(result)


def schedule_fcfs(processes: Sequence[Process]) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive), in the order given.
    """
    return _run_in_order(processes, list(processes), "FCFS", "First-come, first-serve")


def schedule_sjf(processes: Sequence[Process]) -> ScheduleResult:
    """
    Shortest Job First as a static re-ordering.

    Processes are stably sorted by burst time (ties keep their input order)
    and then served back to back exactly like FCFS.
    """
    order = sorted(processes, key=lambda p: p.burst_time)
    return _run_in_order(processes, order, "SJF", "Shortest-job-first")


def schedule_priority(processes: Sequence[Process], key: str = "burst") -> ScheduleResult:
    """
    Dynamic selection among arrived processes, each run to completion.

    At every decision point the pending processes that have arrived are
    compared and the smallest one wins; ties go to the earliest arrival.
    With key="burst" the comparison is on burst time (shortest job); with
    key="priority" it is on the priority field (lower is higher, unset is
    lowest), then arrival, then burst.
    """
    if key == "burst":
        def select(p: Process):
            return p.burst_time
    elif key == "priority":
        def select(p: Process):
            # 0 is "not supplied" and ranks below every real priority.
            return (p.priority or MAX_PRIORITY + 1, p.arrival_time, p.burst_time)
    else:
        raise ValueError(f"Unknown priority key '{key}'")

    # Stays sorted by arrival: pop() removes without reordering.
    pending: List[Process] = sorted(processes, key=lambda p: p.arrival_time)

    service_time = 0
    timeline: List[ScheduledSlice] = []
    rows: Dict[int, ProcessMetrics] = {}

    while pending:
        arrived = [i for i, p in enumerate(pending) if p.arrival_time <= service_time]

        if not arrived:
            service_time = pending[0].arrival_time
            logger.debug("Priority: CPU idle until %s", service_time)
            continue

        idx = min(arrived, key=lambda i: select(pending[i]))
        p = pending.pop(idx)

        start_time = service_time
        service_time = start_time + p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=service_time))
        rows[p.pid] = build_metrics(p, completion_time=service_time)
        logger.debug("Priority: picked P%s out of %d ready, runs %s-%s", p.pid, len(arrived), start_time, service_time)

    result = ScheduleResult(
        algorithm="Priority",
        title="Priority",
        processes=order_by_input(processes, rows),
        timeline=timeline,
    )
    return finalize(result)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive during a slice join the ready queue before the
    preempted process is put back at its end.
    """
    if quantum is None or quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum (use --quantum)")

    not_arrived: Deque[Process] = deque(sorted(processes, key=lambda p: p.arrival_time))
    remaining = {p.pid: p.burst_time for p in processes}

    time = 0
    timeline: List[ScheduledSlice] = []
    rows: Dict[int, ProcessMetrics] = {}
    ready: Deque[Process] = deque()

    def enqueue_new_arrivals(current_time: int) -> None:
        while not_arrived and not_arrived[0].arrival_time <= current_time:
            ready.append(not_arrived.popleft())

    while ready or not_arrived:
        enqueue_new_arrivals(time)

        if not ready:
            # Jump to next arrival if CPU is idle
            time = not_arrived[0].arrival_time
            logger.debug("Round Robin: CPU idle until %s", time)
            continue

        p = ready.popleft()
        run_time = min(quantum, remaining[p.pid])
        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + run_time))

        time += run_time
        remaining[p.pid] -= run_time

        enqueue_new_arrivals(time)

        if remaining[p.pid] > 0:
            ready.append(p)
        else:
            rows[p.pid] = build_metrics(p, completion_time=time)
            logger.debug("Round Robin: P%s finished at %s", p.pid, time)

    result = ScheduleResult(
        algorithm="Round Robin",
        title="Round-robin",
        quantum=quantum,
        processes=order_by_input(processes, rows),
        timeline=timeline,
    )
    return finalize(result)


ALGORITHMS: Dict[str, Callable[[Sequence[Process], SchedulerConfig], ScheduleResult]] = {
    "fcfs": lambda processes, config: schedule_fcfs(processes),
    "sjf": lambda processes, config: schedule_sjf(processes),
    "priority": lambda processes, config: schedule_priority(processes, key=config.priority_key),
    "rr": lambda processes, config: schedule_rr(processes, quantum=config.quantum),
}


def run_algorithm(name: str, processes: Sequence[Process], config: Optional[SchedulerConfig] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (use one of: {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, config or SchedulerConfig())


def run_all(process_set: ProcessSet, config: Optional[SchedulerConfig] = None) -> List[ScheduleResult]:
    """
    Run every configured algorithm, each on its own copy of the workload.

    Algorithm names are checked up front so a bad name fails before any
    schedule is produced.
    """
    config = config or SchedulerConfig()
    unknown = [name for name in config.algorithms if name.lower() not in ALGORITHMS]
    if unknown:
        raise ValueError(f"Unknown algorithm '{unknown[0]}' (use one of: {', '.join(ALGORITHMS)})")

    return [run_algorithm(name, process_set.working_copy(), config) for name in config.algorithms]
