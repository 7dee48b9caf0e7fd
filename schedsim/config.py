"""
Default settings for the simulator and its command-line interface.
"""

from __future__ import annotations

import os
from typing import Optional

# Algorithms run by ``schedsim run`` / ``compare`` when none are given.
DEFAULT_ALGORITHMS = ("fcfs", "srtf")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV = "SCHEDSIM_LOG_LEVEL"

# Width of one process box in the plain-text Gantt chart.
GANTT_CELL_WIDTH = 8


def resolve_log_level(cli_value: Optional[str] = None) -> str:
    """
    Pick the effective log level: command-line flag, then the
    SCHEDSIM_LOG_LEVEL environment variable, then the default.

    Unknown level names in the environment are ignored.
    """
    if cli_value:
        return cli_value.upper()
    env_value = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if env_value in LOG_LEVELS:
        return env_value
    return DEFAULT_LOG_LEVEL
