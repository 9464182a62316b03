from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

# Process id used for CPU idle blocks in the Gantt chart.
IDLE = "Idle"


@dataclass(frozen=True)
class Process:
    id: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass(frozen=True)
class ScheduleBlock:
    """
    One contiguous interval of the Gantt chart: a slice of execution for a
    process, or an idle gap when ``process_id`` is ``IDLE``.
    """

    process_id: Union[int, str]
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.process_id == IDLE


@dataclass(frozen=True)
class ProcessResult:
    id: int
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    turnaround_time: int
    waiting_time: int
    response_time: int


@dataclass(frozen=True)
class SimulationResult:
    algorithm: str
    quantum: Optional[int]
    gantt_chart: Tuple[ScheduleBlock, ...] = field(default_factory=tuple)
    process_results: Tuple[ProcessResult, ...] = field(default_factory=tuple)
    avg_waiting_time: float = 0.0
    avg_turnaround_time: float = 0.0

    @property
    def makespan(self) -> int:
        return self.gantt_chart[-1].end_time if self.gantt_chart else 0


@dataclass(frozen=True)
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    starvation_count: int = 0
