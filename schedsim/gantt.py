from __future__ import annotations

from typing import Dict, List, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import GANTT_CELL_WIDTH
from .models import ScheduledSlice


def render_title(title: str) -> str:
    """
    Dashed banner framing an algorithm label.
    """
    rule = "-" * (len(title) * 2)
    return "\n".join([rule, " " * (len(title) // 2) + " " + title, rule])


def render_gantt(slices: List[ScheduledSlice], cell_width: int = GANTT_CELL_WIDTH) -> str:
    """
    Plain-text Gantt chart: one box per slice labelled with its pid, and the
    start time of every slice followed by the final stop time.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    boxes = "|"
    for sl in slices:
        label = "idle" if sl.is_idle else str(sl.pid)
        boxes += label.center(cell_width) + "|"

    marks = "\t".join(str(sl.start_time) for sl in slices)
    marks += "\t" + str(slices[-1].end_time)

    return "\n".join(["Gantt schedule", boxes, marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[Optional[int], str] = {}

    def pid_color(pid: Optional[int]) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = sl.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, sl.duration)
        if sl.is_idle:
            timeline.append(" " * width)
            labels.append(" " * width)
        else:
            timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
            labels.append(str(sl.pid)[:width].ljust(width), style="bold")

        last_time = sl.end_time
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
