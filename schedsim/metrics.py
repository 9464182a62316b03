from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from .models import ProcessResult, ScheduleBlock, SimulationResult, SystemMetrics


@dataclass(frozen=True)
class ComparisonRow:
    key: str
    algorithm: str
    quantum: Optional[int]
    avg_waiting: float
    avg_turnaround: float
    avg_response: float
    best_waiting: bool = False
    best_turnaround: bool = False


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def build_result(
    algorithm: str,
    quantum: Optional[int],
    gantt_chart: Iterable[ScheduleBlock],
    process_results: Iterable[ProcessResult],
) -> SimulationResult:
    """
    Assemble the immutable result of one scheduler run and compute its
    unweighted average waiting and turnaround times.
    """
    blocks = tuple(gantt_chart)
    results = tuple(process_results)
    return SimulationResult(
        algorithm=algorithm,
        quantum=quantum,
        gantt_chart=blocks,
        process_results=results,
        avg_waiting_time=_mean([r.waiting_time for r in results]),
        avg_turnaround_time=_mean([r.turnaround_time for r in results]),
    )


def compute_system_metrics(result: SimulationResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from a finished simulation.
    """
    if not result.process_results:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(r.completion_time for r in result.process_results)
    cpu_busy_time = sum(b.duration for b in result.gantt_chart if not b.is_idle)
    idle_time = sum(b.duration for b in result.gantt_chart if b.is_idle)

    throughput = len(result.process_results) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    # A process counts as starved when it waited more than twice the mean.
    avg_wait = result.avg_waiting_time
    starvation_count = sum(1 for r in result.process_results if r.waiting_time > 2 * avg_wait)

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=idle_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        starvation_count=starvation_count,
    )


def summarize_process_metrics(results: Iterable[ProcessResult]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    results = list(results)
    return {
        "avg_waiting": _mean([r.waiting_time for r in results]),
        "avg_turnaround": _mean([r.turnaround_time for r in results]),
        "avg_response": _mean([r.response_time for r in results]),
        "avg_completion": _mean([r.completion_time for r in results]),
    }


def compare_results(results: Mapping[str, SimulationResult]) -> List[ComparisonRow]:
    """
    Build one comparison row per algorithm, flagging the lowest average
    waiting and turnaround times. Ties are all flagged.
    """
    if not results:
        return []

    best_wait = min(r.avg_waiting_time for r in results.values())
    best_turn = min(r.avg_turnaround_time for r in results.values())

    rows: List[ComparisonRow] = []
    for key, result in results.items():
        summary = summarize_process_metrics(result.process_results)
        rows.append(
            ComparisonRow(
                key=key,
                algorithm=result.algorithm,
                quantum=result.quantum,
                avg_waiting=result.avg_waiting_time,
                avg_turnaround=result.avg_turnaround_time,
                avg_response=summary["avg_response"],
                best_waiting=result.avg_waiting_time == best_wait,
                best_turnaround=result.avg_turnaround_time == best_turn,
            )
        )
    return rows
