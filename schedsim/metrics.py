from __future__ import annotations

from typing import Dict, List, Sequence

from .models import Process, ProcessMetrics, ScheduledSlice, ScheduleResult, SystemMetrics


def compute_process_metrics(processes: Sequence[Process], timeline: Sequence[ScheduledSlice]) -> List[ProcessMetrics]:
    """
    Derive per-process timing from a finished timeline.

    A process completes at the end of the slice in which its executed time
    first reaches its original burst. Its waiting time is the time other
    processes held the resource between its arrival and its completion; idle
    slices never count. Metrics are returned in the order of ``processes``.
    """
    slices = sorted((s for s in timeline if not s.is_idle), key=lambda s: (s.start_time, s.end_time))

    bursts = {p.pid: p.burst_time for p in processes}
    executed: Dict[int, int] = {pid: 0 for pid in bursts}
    first_start: Dict[int, int] = {}
    completion: Dict[int, int] = {}

    for sl in slices:
        if sl.pid not in executed:
            continue
        first_start.setdefault(sl.pid, sl.start_time)
        executed[sl.pid] += sl.duration
        if sl.pid not in completion and executed[sl.pid] >= bursts[sl.pid]:
            completion[sl.pid] = sl.end_time

    metrics: List[ProcessMetrics] = []
    for p in processes:
        completion_time = completion.get(p.pid, p.arrival_time)
        start_time = first_start.get(p.pid, p.arrival_time)
        waiting_time = sum(
            _overlap(sl, p.arrival_time, completion_time) for sl in slices if sl.pid != p.pid
        )

        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=completion_time,
                waiting_time=waiting_time,
                turnaround_time=waiting_time + p.burst_time,
                response_time=start_time - p.arrival_time,
                priority=p.priority,
            )
        )

    return metrics


def _overlap(sl: ScheduledSlice, start: int, end: int) -> int:
    return max(0, min(sl.end_time, end) - max(sl.start_time, start))


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute averages, throughput and CPU utilization given populated
    per-process metrics and timeline slices.
    """
    if not result.processes:
        system = SystemMetrics(average_waiting=0.0, average_turnaround=0.0, throughput=0.0)
        result.system = system
        return system

    n = len(result.processes)
    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(sl.duration for sl in result.timeline if not sl.is_idle)

    system = SystemMetrics(
        average_waiting=sum(p.waiting_time for p in result.processes) / n,
        average_turnaround=sum(p.turnaround_time for p in result.processes) / n,
        throughput=n / makespan if makespan > 0 else 0.0,
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
    )
    result.system = system
    return system


def build_result(algorithm: str, processes: Sequence[Process], timeline: List[ScheduledSlice]) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        processes=compute_process_metrics(processes, timeline),
        timeline=timeline,
    )
    compute_system_metrics(result)
    return result
