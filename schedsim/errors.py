from __future__ import annotations

from typing import Optional

from .models import Process


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class InvalidProcessError(SchedulerError, ValueError):
    """
    A process record cannot be scheduled: non-positive burst, negative
    arrival or a pid that is already taken. The whole workload is rejected.
    """

    def __init__(self, message: str, process: Optional[Process] = None) -> None:
        super().__init__(message)
        self.process = process


class EmptyInputError(SchedulerError):
    """Raised only when a caller explicitly requires a non-empty workload."""


class WorkloadFormatError(SchedulerError, ValueError):
    pass


class UnknownAlgorithmError(SchedulerError, ValueError):
    pass
