from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from .errors import EmptyInputError, InvalidProcessError, WorkloadFormatError
from .models import Process

logger = logging.getLogger(__name__)

# Column order of a headerless CSV row: id, burst, arrival[, priority].
POSITIONAL_COLUMNS = ("pid", "burst_time", "arrival_time", "priority")


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Records are returned in file order; validation and sorting happen in
    prepare_workload.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise WorkloadFormatError(f"Unsupported workload format: {suffix or path.name} (use .json or .csv)")

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadFormatError(f"Invalid JSON in {path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise WorkloadFormatError(f"{path} is not valid UTF-8: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
        except UnicodeDecodeError as exc:
            raise WorkloadFormatError(f"{path} is not valid UTF-8: {exc}") from exc

    if not rows:
        return []

    if _is_header(rows[0]):
        header = [cell.strip() for cell in rows[0]]
        return [_process_from_mapping(dict(zip(header, row))) for row in rows[1:]]

    return [_process_from_mapping(dict(zip(POSITIONAL_COLUMNS, row))) for row in rows]


def _is_header(row: Sequence[str]) -> bool:
    first = row[0].strip()
    return not first.lstrip("-").isdigit()


def _to_int(value) -> int:
    # Whole-number floats are accepted; other non-integral values are rejected, never truncated.
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return int(value)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _to_int(mapping["pid"])
        arrival_time = _to_int(mapping["arrival_time"])
        burst_time = _to_int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    if isinstance(priority_val, str):
        priority_val = priority_val.strip()
    try:
        priority = _to_int(priority_val) if priority_val not in (None, "") else 0
    except (TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid priority in process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def validate_processes(processes: Iterable[Process], allow_empty: bool = True) -> None:
    """
    Reject the whole workload if any record cannot be scheduled.
    """
    seen: set[int] = set()
    count = 0
    for p in processes:
        count += 1
        if p.burst_time <= 0:
            raise InvalidProcessError(f"Process {p.pid} has non-positive burst time {p.burst_time}", p)
        if p.arrival_time < 0:
            raise InvalidProcessError(f"Process {p.pid} has negative arrival time {p.arrival_time}", p)
        if p.pid in seen:
            raise InvalidProcessError(f"Duplicate process id {p.pid}", p)
        seen.add(p.pid)

    if count == 0 and not allow_empty:
        raise EmptyInputError("Workload contains no processes")


def sort_by_arrival(processes: Iterable[Process]) -> List[Process]:
    # sorted() is stable, so equal arrivals keep their input order.
    return sorted(processes, key=lambda p: p.arrival_time)


def prepare_workload(processes: Iterable[Process], allow_empty: bool = True) -> List[Process]:
    """
    Validate a workload and return a new list sorted by arrival time.
    """
    processes = list(processes)
    validate_processes(processes, allow_empty=allow_empty)
    return sort_by_arrival(processes)
