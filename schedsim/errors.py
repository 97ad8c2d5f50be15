from __future__ import annotations


class SchedulerError(Exception):
    """Base class for errors reported to the command-line user."""


class InputArgumentError(SchedulerError):
    """Wrong command-line invocation."""


class InputIOError(SchedulerError):
    """Workload file is missing or cannot be read."""


class InputFormatError(SchedulerError, ValueError):
    """Workload content is malformed, out of range, or has duplicate ids."""
