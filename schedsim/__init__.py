"""
schedsim package.

Simulates FCFS, SJF, Round Robin and Priority CPU scheduling on a process
workload and reports the Gantt chart and per-process metrics.
"""

from .algorithms import (
    ALGORITHMS,
    run_algorithm,
    run_all,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
)
from .models import IDLE, Process, ProcessResult, ScheduleBlock, SimulationResult

__all__ = [
    "ALGORITHMS",
    "IDLE",
    "Process",
    "ProcessResult",
    "ScheduleBlock",
    "SimulationResult",
    "run_algorithm",
    "run_all",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_sjf",
]
