from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Sequence, Tuple

from .metrics import build_result
from .models import IDLE, Process, ProcessResult, ScheduleBlock, SimulationResult

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def _arrival_order(p: Process) -> Tuple[int, int]:
    return (p.arrival_time, p.id)


def _process_result(p: Process, start_time: int, completion_time: int) -> ProcessResult:
    turnaround_time = completion_time - p.arrival_time
    return ProcessResult(
        id=p.id,
        arrival_time=p.arrival_time,
        burst_time=p.burst_time,
        priority=p.priority,
        start_time=start_time,
        completion_time=completion_time,
        turnaround_time=turnaround_time,
        waiting_time=turnaround_time - p.burst_time,
        response_time=start_time - p.arrival_time,
    )


def _finish(
    algorithm: str,
    quantum: Optional[int],
    timeline: List[ScheduleBlock],
    metrics: List[ProcessResult],
) -> SimulationResult:
    result = build_result(algorithm, quantum, timeline, metrics)
    logger.debug(f"{algorithm}: {len(metrics)} processes, makespan {result.makespan}")
    return result


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    The run order is fixed up front by (arrival time, id); the CPU idles
    whenever the next process in that order has not arrived yet.
    """
    processes_sorted = sorted(processes, key=_arrival_order)

    time = 0
    timeline: List[ScheduleBlock] = []
    metrics: List[ProcessResult] = []

    for p in processes_sorted:
        if time < p.arrival_time:
            timeline.append(ScheduleBlock(process_id=IDLE, start_time=time, end_time=p.arrival_time))
            time = p.arrival_time

        start_time = time
        end_time = start_time + p.burst_time

        timeline.append(ScheduleBlock(process_id=p.id, start_time=start_time, end_time=end_time))
        metrics.append(_process_result(p, start_time, end_time))

        time = end_time

    return _finish("FCFS", None, timeline, metrics)


def _schedule_non_preemptive(
    processes: Sequence[Process],
    key: Callable[[Process], tuple],
    algorithm: str,
) -> SimulationResult:
    """
    Shared driver for SJF and Priority: at every decision point pick the
    ready process with the smallest ``key`` and run it to completion.
    """
    remaining: List[Process] = list(processes)

    time = 0
    timeline: List[ScheduleBlock] = []
    metrics: List[ProcessResult] = []
    completed_ids: set[int] = set()

    while len(completed_ids) < len(remaining):
        ready = [p for p in remaining if p.arrival_time <= time and p.id not in completed_ids]

        if not ready:
            next_arrival = min(p.arrival_time for p in remaining if p.id not in completed_ids)
            timeline.append(ScheduleBlock(process_id=IDLE, start_time=time, end_time=next_arrival))
            time = next_arrival
            continue

        p = min(ready, key=key)

        start_time = time
        end_time = start_time + p.burst_time

        timeline.append(ScheduleBlock(process_id=p.id, start_time=start_time, end_time=end_time))
        metrics.append(_process_result(p, start_time, end_time))

        completed_ids.add(p.id)
        time = end_time

    return _finish(algorithm, None, timeline, metrics)


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time (tie-breaker:
    earlier arrival, then lower id). A shorter job arriving mid-burst waits.
    """
    return _schedule_non_preemptive(
        processes,
        key=lambda p: (p.burst_time, p.arrival_time, p.id),
        algorithm="SJF (non-preemptive)",
    )


def schedule_priority(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then id.
    """
    return _schedule_non_preemptive(
        processes,
        key=lambda p: (p.priority, p.arrival_time, p.id),
        algorithm="Priority (non-preemptive)",
    )


@dataclass
class _RunState:
    """Per-run working record for one process; never shared with callers."""

    process: Process
    remaining: int
    first_dispatch: Optional[int] = None


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice is executing join the back of the
    ready queue before the preempted process is re-queued. Results are
    reported in id order.
    """
    if quantum is None:
        quantum = DEFAULT_QUANTUM
    if quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum (use --quantum)")

    # Not yet queued, in (arrival time, id) order.
    pending: Deque[_RunState] = deque(
        _RunState(process=p, remaining=p.burst_time) for p in sorted(processes, key=_arrival_order)
    )
    ready: Deque[_RunState] = deque()

    time = 0
    timeline: List[ScheduleBlock] = []
    metrics: List[ProcessResult] = []

    def admit_arrivals(current_time: int) -> None:
        while pending and pending[0].process.arrival_time <= current_time:
            ready.append(pending.popleft())

    admit_arrivals(time)

    while ready or pending:
        if not ready:
            next_arrival = pending[0].process.arrival_time
            timeline.append(ScheduleBlock(process_id=IDLE, start_time=time, end_time=next_arrival))
            time = next_arrival
            admit_arrivals(time)
            continue

        state = ready.popleft()
        if state.first_dispatch is None:
            state.first_dispatch = time

        run_time = min(quantum, state.remaining)
        slice_start = time
        time = slice_start + run_time
        timeline.append(ScheduleBlock(process_id=state.process.id, start_time=slice_start, end_time=time))
        state.remaining -= run_time

        admit_arrivals(time)

        if state.remaining > 0:
            ready.append(state)
        else:
            metrics.append(_process_result(state.process, state.first_dispatch, time))

    metrics.sort(key=lambda r: r.id)
    return _finish("Round Robin", quantum, timeline, metrics)


ALGORITHMS: Dict[str, Callable[..., SimulationResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "rr": schedule_rr,
    "priority": schedule_priority,
}


def run_algorithm(name: str, processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum)


def run_all(processes: Sequence[Process], quantum: Optional[int] = None) -> Dict[str, SimulationResult]:
    return {name: func(processes, quantum=quantum) for name, func in ALGORITHMS.items()}
