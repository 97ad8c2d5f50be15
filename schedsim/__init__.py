"""
schedsim package.

Simulates classic CPU scheduling disciplines (FCFS, SJF, Priority and
Round Robin) over a fixed workload and reports per-process timing,
aggregate metrics and a Gantt timeline.
"""

__all__ = ["cli"]
