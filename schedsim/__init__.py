"""
schedsim package.

Simulates CPU scheduling (first-come first-serve and preemptive
shortest-remaining-burst) over a known set of processes and reports
per-process timing and a Gantt timeline.
"""

from .algorithms import ALGORITHMS, run_algorithm, run_algorithms, schedule_fcfs, schedule_srtf
from .errors import EmptyInputError, InvalidProcessError, SchedulerError
from .models import Process, ScheduledSlice, ScheduleResult

__all__ = [
    "ALGORITHMS",
    "EmptyInputError",
    "InvalidProcessError",
    "Process",
    "ScheduleResult",
    "ScheduledSlice",
    "SchedulerError",
    "run_algorithm",
    "run_algorithms",
    "schedule_fcfs",
    "schedule_srtf",
]
