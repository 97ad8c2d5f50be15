from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

DEFAULT_QUANTUM = 1
MAX_PRIORITY = 50
PRIORITY_KEYS = ("burst", "priority")
DEFAULT_ALGORITHMS = ("fcfs", "sjf", "priority", "rr")


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Knobs shared by a batch of scheduling runs.

    `priority_key` picks what the Priority policy minimises among arrived
    processes: "burst" (shortest job) or "priority" (the priority field).
    """

    quantum: int = DEFAULT_QUANTUM
    priority_key: str = "burst"
    algorithms: Tuple[str, ...] = DEFAULT_ALGORITHMS

    def __post_init__(self) -> None:
        if self.quantum <= 0:
            raise ValueError("Round Robin requires a positive quantum (use --quantum)")
        if self.priority_key not in PRIORITY_KEYS:
            raise ValueError(
                f"Unknown priority key '{self.priority_key}' (use one of: {', '.join(PRIORITY_KEYS)})"
            )
