from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .errors import UnknownAlgorithmError
from .metrics import build_result
from .models import Process, ScheduledSlice, ScheduleResult
from .workload_io import prepare_workload

logger = logging.getLogger(__name__)

FCFS_TITLE = "First-come, first-serve"
SRTF_TITLE = "Shortest-job-first (preemptive)"


def schedule_fcfs(processes: Sequence[Process]) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Expects validated processes sorted by arrival time. Idle gaps before a
    late arrival are not logged as slices.
    """
    service_time = 0
    timeline: List[ScheduledSlice] = []

    for p in processes:
        wait = max(0, service_time - p.arrival_time)
        start_time = p.arrival_time + wait
        end_time = start_time + p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=end_time))
        service_time = end_time

    return build_result(FCFS_TITLE, processes, timeline)


@dataclass
class _SrtfState:
    """
    Mutable state of one SRTF run. Processes are referred to by their
    index in the arrival-sorted input, which doubles as the final tie-breaker.
    """

    processes: Sequence[Process]
    remaining: List[int] = field(init=False)
    time: int = 0
    next_arrival: int = 0
    ready: List[int] = field(default_factory=list)
    running: Optional[int] = None
    timeline: List[ScheduledSlice] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.remaining = [p.burst_time for p in self.processes]

    def pending_arrivals(self) -> bool:
        return self.next_arrival < len(self.processes)

    def admit_arrivals(self) -> None:
        # Everything that has arrived by now enters the ready set before any
        # comparison, so simultaneous arrivals are compared together.
        while self.pending_arrivals() and self.processes[self.next_arrival].arrival_time <= self.time:
            self.ready.append(self.next_arrival)
            self.next_arrival += 1

    def sort_key(self, idx: int) -> tuple:
        return (self.remaining[idx], self.processes[idx].arrival_time, idx)

    def dispatch(self, idx: int) -> None:
        self.ready.remove(idx)
        self.running = idx
        self.timeline.append(
            ScheduledSlice(pid=self.processes[idx].pid, start_time=self.time, end_time=self.time)
        )

    def close_slice(self) -> None:
        self.timeline[-1].end_time = self.time


def schedule_srtf(processes: Sequence[Process]) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    Decisions are only taken when a process arrives or the running process
    finishes. The ready process with the smallest remaining burst wins; ties
    go to the earlier arrival, then to the earlier input position. A running
    process is preempted only by a strictly shorter remaining burst.
    """
    state = _SrtfState(processes)

    while state.running is not None or state.ready or state.pending_arrivals():
        if state.running is None and not state.ready:
            # Idle: jump straight to the next arrival.
            state.time = max(state.time, processes[state.next_arrival].arrival_time)

        state.admit_arrivals()

        if state.ready:
            candidate = min(state.ready, key=state.sort_key)
            if state.running is None:
                state.dispatch(candidate)
                logger.debug("t=%d: dispatch pid %s", state.time, processes[candidate].pid)
            elif state.remaining[candidate] < state.remaining[state.running]:
                preempted = state.running
                state.close_slice()
                state.ready.append(preempted)
                state.dispatch(candidate)
                logger.debug(
                    "t=%d: pid %s preempts pid %s (%d < %d remaining)",
                    state.time,
                    processes[candidate].pid,
                    processes[preempted].pid,
                    state.remaining[candidate],
                    state.remaining[preempted],
                )

        running = state.running
        finish_time = state.time + state.remaining[running]
        next_arrival_time = processes[state.next_arrival].arrival_time if state.pending_arrivals() else None

        if next_arrival_time is None or finish_time <= next_arrival_time:
            # Finishing exactly at an arrival counts as finishing first.
            state.time = finish_time
            state.remaining[running] = 0
            state.close_slice()
            state.running = None
            logger.debug("t=%d: pid %s completes", state.time, processes[running].pid)
        else:
            state.remaining[running] -= next_arrival_time - state.time
            state.time = next_arrival_time

    return build_result(SRTF_TITLE, processes, state.timeline)


ALGORITHMS: Dict[str, Callable[[Sequence[Process]], ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "srtf": schedule_srtf,
    # The preemptive scheduler was originally labelled shortest-job-first.
    "sjf": schedule_srtf,
}


def _lookup(name: str) -> Callable[[Sequence[Process]], ScheduleResult]:
    key = name.lower()
    if key not in ALGORITHMS:
        raise UnknownAlgorithmError(
            f"Unknown or unimplemented algorithm '{name}' (choose from {', '.join(ALGORITHMS)})"
        )
    return ALGORITHMS[key]


def run_algorithms(names: Iterable[str], processes: Iterable[Process]) -> List[ScheduleResult]:
    """
    Validate and sort the workload once, then run each named algorithm on it.

    Unknown names are rejected before anything runs.
    """
    funcs = [_lookup(name) for name in names]
    prepared = prepare_workload(processes)

    results = []
    for func in funcs:
        result = func(prepared)
        logger.info(
            "%s: %d processes, makespan %d",
            result.algorithm,
            len(result.processes),
            result.system.makespan if result.system else 0,
        )
        results.append(result)
    return results


def run_algorithm(name: str, processes: Iterable[Process]) -> ScheduleResult:
    """
    Dispatch to the requested algorithm.
    """
    return run_algorithms([name], processes)[0]
