import logging
from pathlib import Path

from rich.logging import RichHandler

from schedsim.algorithms import schedule_srtf
from schedsim.cli import build_schedule_table, main
from schedsim.config import DEFAULT_LOG_LEVEL, resolve_log_level
from schedsim.gantt import build_rich_gantt, render_gantt, render_title
from schedsim.log import configure_logging
from schedsim.models import Process


def _write_workload(tmp_path: Path) -> Path:
    p = tmp_path / "procs.csv"
    p.write_text("1,8,0\n2,2,3\n")
    return p


def test_render_gantt_plain():
    res = schedule_srtf([Process(1, 0, 8), Process(2, 3, 2)])
    text = render_gantt(res.timeline)
    lines = text.splitlines()
    assert lines[0] == "Gantt schedule"
    assert lines[1] == "|   1    |   2    |   1    |"
    assert lines[2].split("\t") == ["0", "3", "5", "10"]


def test_render_gantt_empty():
    assert "(no execution)" in render_gantt([])
    panel, marks = build_rich_gantt([])
    assert marks == ""


def test_rich_gantt_time_marks():
    res = schedule_srtf([Process(1, 0, 8), Process(2, 3, 2)])
    _, marks = build_rich_gantt(res.timeline)
    assert marks.split() == ["0", "3", "5", "10"]


def test_render_title():
    lines = render_title("FCFS").splitlines()
    assert lines[0] == "-" * 8
    assert lines[1].strip() == "FCFS"


def test_schedule_table_has_footer_aggregates():
    res = schedule_srtf([Process(1, 0, 5)])
    table = build_schedule_table(res)
    assert [c.header for c in table.columns] == ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]
    assert table.columns[-1].footer == "Throughput\n0.20/t"
    assert table.row_count == 1


def test_run_command(tmp_path: Path, capsys):
    workload = _write_workload(tmp_path)
    assert main(["run", str(workload), "--plain"]) == 0
    out = capsys.readouterr().out
    assert "First-come, first-serve" in out
    assert "Shortest-job-first (preemptive)" in out
    assert "|   1    |   2    |   1    |" in out


def test_compare_command(tmp_path: Path, capsys):
    workload = _write_workload(tmp_path)
    assert main(["compare", str(workload), "-a", "fcfs", "srtf"]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out


def test_invalid_workload_exit_code(tmp_path: Path, capsys):
    p = tmp_path / "bad.csv"
    p.write_text("1,0,0\n")
    assert main(["run", str(p)]) == 2
    assert "non-positive burst" in capsys.readouterr().err


def test_missing_workload(tmp_path: Path, capsys):
    assert main(["run", str(tmp_path / "nope.csv")]) == 2
    assert "Workload not found" in capsys.readouterr().err


def test_unknown_algorithm_exit_code(tmp_path: Path):
    assert main(["run", str(_write_workload(tmp_path)), "-a", "rr"]) == 2


def test_resolve_log_level(monkeypatch):
    monkeypatch.delenv("SCHEDSIM_LOG_LEVEL", raising=False)
    assert resolve_log_level() == DEFAULT_LOG_LEVEL
    monkeypatch.setenv("SCHEDSIM_LOG_LEVEL", "info")
    assert resolve_log_level() == "INFO"
    assert resolve_log_level("debug") == "DEBUG"
    monkeypatch.setenv("SCHEDSIM_LOG_LEVEL", "chatty")
    assert resolve_log_level() == DEFAULT_LOG_LEVEL


def test_configure_logging_replaces_handler():
    configure_logging("INFO")
    logger = configure_logging("DEBUG")
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_invalid_utf8_workload_exit_code(tmp_path: Path, capsys):
    p = tmp_path / "bad.csv"
    p.write_bytes(b"1,\xff,0\n")
    assert main(["run", str(p)]) == 2
    assert "UTF-8" in capsys.readouterr().err


def test_verbose_trace_goes_to_stderr(tmp_path: Path, capsys):
    workload = _write_workload(tmp_path)
    try:
        assert main(["-v", "run", str(workload), "-a", "srtf"]) == 0
    finally:
        configure_logging(DEFAULT_LOG_LEVEL)
    captured = capsys.readouterr()
    assert "preempts" in captured.err
    assert "preempts" not in captured.out
