from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import InputFormatError


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass(frozen=True)
class ProcessSet:
    """
    Ordered, read-only collection of processes in the order they were loaded.

    Policies reorder what they are given, so each run takes its own list
    from `working_copy()`.
    """

    processes: Tuple[Process, ...] = ()

    def __post_init__(self) -> None:
        seen: set[int] = set()
        for p in self.processes:
            if p.pid in seen:
                raise InputFormatError(f"Duplicate process id {p.pid}")
            seen.add(p.pid)

    @classmethod
    def of(cls, processes: Iterable[Process]) -> "ProcessSet":
        return cls(tuple(processes))

    def working_copy(self) -> List[Process]:
        return list(self.processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(self.processes)

    def __len__(self) -> int:
        return len(self.processes)


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: int
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class RunSummary:
    average_wait: float = 0.0
    average_turnaround: float = 0.0
    throughput: float = 0.0
    cpu_busy_time: int = 0
    makespan: int = 0


@dataclass
class ScheduleResult:
    algorithm: str
    title: str
    quantum: Optional[int] = None
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    summary: RunSummary = field(default_factory=RunSummary)

    def metrics_for(self, pid: int) -> ProcessMetrics:
        for m in self.processes:
            if m.pid == pid:
                return m
        raise KeyError(pid)
