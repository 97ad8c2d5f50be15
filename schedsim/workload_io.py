from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from typing import List, Mapping, Sequence

from .config import MAX_PRIORITY
from .errors import InputFormatError, InputIOError
from .models import Process, ProcessSet

logger = logging.getLogger(__name__)

# Optional sign and ASCII digits only.
INTEGER_FIELD = re.compile(r"[+-]?[0-9]+")


def load_workload(path: str | Path) -> ProcessSet:
    """
    Load a workload file into a ProcessSet.

    `.json` files hold a list of process objects; anything else is read as
    headerless CSV rows of `ProcessID,BurstDuration,ArrivalTime[,Priority]`.
    """
    path = Path(path)

    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            if path.suffix.lower() == ".json":
                processes = _load_json(f.read(), path)
            else:
                processes = _load_csv(f, path)
    except OSError as exc:
        raise InputIOError(f"Cannot read workload file {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise InputFormatError(f"{path}: not a UTF-8 text file") from exc

    process_set = ProcessSet.of(processes)
    logger.info("Loaded %d processes from %s", len(process_set), path)
    return process_set


def _load_csv(lines, path: Path) -> List[Process]:
    processes: List[Process] = []
    reader = csv.reader(lines)
    try:
        for row in reader:
            if not row or all(not field.strip() for field in row):
                continue
            processes.append(_process_from_row(row, f"{path}:{reader.line_num}"))
    except csv.Error as exc:
        raise InputFormatError(f"{path}: {exc}") from exc
    return processes


def _load_json(text: str, path: Path) -> List[Process]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputFormatError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    if not isinstance(raw, list):
        raise InputFormatError(f"{path}: JSON workload must be a list of process objects")

    return [_process_from_mapping(entry, f"{path}[{i}]") for i, entry in enumerate(raw)]


def _process_from_row(row: Sequence[str], where: str) -> Process:
    if len(row) not in (3, 4):
        raise InputFormatError(
            f"{where}: expected 3 or 4 fields (ProcessID,BurstDuration,ArrivalTime[,Priority]), got {len(row)}"
        )

    pid = _parse_int(row[0], "ProcessID", where)
    burst_time = _parse_int(row[1], "BurstDuration", where)
    arrival_time = _parse_int(row[2], "ArrivalTime", where)
    priority = _parse_int(row[3], "Priority", where) if len(row) == 4 else 0

    return _validated(pid, arrival_time, burst_time, priority, where)


def _process_from_mapping(mapping, where: str) -> Process:
    if not isinstance(mapping, Mapping):
        raise InputFormatError(f"{where}: invalid process entry: {mapping!r}")
    try:
        pid = _parse_int(mapping["pid"], "pid", where)
        burst_time = _parse_int(mapping["burst_time"], "burst_time", where)
        arrival_time = _parse_int(mapping["arrival_time"], "arrival_time", where)
    except KeyError as exc:
        raise InputFormatError(f"{where}: missing field {exc.args[0]!r}") from exc

    priority_val = mapping.get("priority")
    priority = _parse_int(priority_val, "priority", where) if priority_val not in (None, "") else 0

    return _validated(pid, arrival_time, burst_time, priority, where)


def _parse_int(value, name: str, where: str) -> int:
    if isinstance(value, bool):
        raise InputFormatError(f"{where}: {name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not INTEGER_FIELD.fullmatch(text):
        raise InputFormatError(f"{where}: {name} must be an integer, got {value!r}")
    return int(text)


def _validated(pid: int, arrival_time: int, burst_time: int, priority: int, where: str) -> Process:
    if pid <= 0:
        raise InputFormatError(f"{where}: ProcessID must be positive, got {pid}")
    if burst_time <= 0:
        raise InputFormatError(f"{where}: BurstDuration must be positive, got {burst_time}")
    if arrival_time < 0:
        raise InputFormatError(f"{where}: ArrivalTime must not be negative, got {arrival_time}")
    # 0 means the row carried no priority.
    if not 0 <= priority <= MAX_PRIORITY:
        raise InputFormatError(f"{where}: Priority must be between 1 and {MAX_PRIORITY}, got {priority}")

    return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)
