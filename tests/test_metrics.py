import pytest

from schedsim.metrics import build_result, compute_process_metrics, compute_system_metrics
from schedsim.models import IDLE_PID, Process, ScheduledSlice, ScheduleResult


def test_completion_is_where_burst_is_reached():
    procs = [Process(1, 0, 4), Process(2, 1, 1)]
    timeline = [ScheduledSlice(1, 0, 1), ScheduledSlice(2, 1, 2), ScheduledSlice(1, 2, 5)]
    m1, m2 = compute_process_metrics(procs, timeline)
    assert (m1.completion_time, m1.waiting_time, m1.turnaround_time) == (5, 1, 5)
    assert (m2.completion_time, m2.waiting_time, m2.turnaround_time) == (2, 0, 1)
    assert m1.start_time == 0
    assert m2.response_time == 0


def test_idle_slices_are_not_waiting_time():
    procs = [Process(1, 0, 2), Process(2, 1, 2)]
    timeline = [
        ScheduledSlice(1, 0, 2),
        ScheduledSlice(IDLE_PID, 2, 4),
        ScheduledSlice(2, 4, 6),
    ]
    result = build_result("test", procs, timeline)
    m2 = result.processes[1]
    assert m2.waiting_time == 1
    assert result.system.cpu_busy_time == 4
    assert result.system.makespan == 6
    assert result.system.cpu_utilization == pytest.approx(4 / 6)


def test_metrics_keep_process_order_and_priority():
    procs = [Process(9, 0, 1, priority=4), Process(3, 0, 1)]
    timeline = [ScheduledSlice(9, 0, 1), ScheduledSlice(3, 1, 2)]
    metrics = compute_process_metrics(procs, timeline)
    assert [m.pid for m in metrics] == [9, 3]
    assert metrics[0].priority == 4


def test_system_metrics_empty_result():
    result = ScheduleResult(algorithm="empty")
    system = compute_system_metrics(result)
    assert system.throughput == 0.0
    assert system.average_turnaround == 0.0
    assert result.system is system


def test_throughput_uses_latest_completion():
    procs = [Process(1, 0, 2), Process(2, 0, 2)]
    result = build_result("t", procs, [ScheduledSlice(1, 0, 2), ScheduledSlice(2, 2, 4)])
    assert result.system.throughput == pytest.approx(0.5)
    assert result.system.average_waiting == pytest.approx(1.0)
    assert result.system.average_turnaround == pytest.approx(3.0)
