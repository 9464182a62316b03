"""
Validation helpers for process input.

Schedulers assume well-formed input; everything here runs before a
simulation and reports problems as user-facing messages.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterable, List, Optional, Sequence

from .models import Process


class ValidationError(ValueError):
    """A single problem with the workload, identified by process id when per-process."""

    message = "Invalid input"

    def __init__(self, process_id: Optional[int] = None, message: Optional[str] = None) -> None:
        self.process_id = process_id
        if message is not None:
            self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.process_id is None:
            return self.message
        return f"P{self.process_id}: {self.message}"


class EmptyProcessList(ValidationError):
    message = "Add at least one process to simulate"


class InvalidArrivalTime(ValidationError):
    message = "Arrival Time must be a non-negative number"


class InvalidBurstTime(ValidationError):
    message = "Burst Time must be a positive number"


class InvalidPriority(ValidationError):
    message = "Priority must be a non-negative number"


class InvalidProcessId(ValidationError):
    message = "Process id must be a positive integer"


class DuplicateProcessId(ValidationError):
    message = "Process id must be unique"


class InvalidTimeQuantum(ValidationError):
    message = "Time Quantum must be a positive number"


class WorkloadError(ValueError):
    """Raised by ensure_valid with every error found in the workload."""

    def __init__(self, errors: Sequence[ValidationError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


def _is_finite_number(value) -> bool:
    # bool is an int subclass but never a meaningful time value
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def validate_process(process: Process) -> List[ValidationError]:
    errors: List[ValidationError] = []

    if isinstance(process.id, bool) or not isinstance(process.id, int) or process.id <= 0:
        errors.append(InvalidProcessId(process.id))

    if not _is_finite_number(process.arrival_time) or process.arrival_time < 0:
        errors.append(InvalidArrivalTime(process.id))
    if not _is_finite_number(process.burst_time) or process.burst_time <= 0:
        errors.append(InvalidBurstTime(process.id))
    if not _is_finite_number(process.priority) or process.priority < 0:
        errors.append(InvalidPriority(process.id))

    return errors


def validate_time_quantum(quantum) -> Optional[InvalidTimeQuantum]:
    if not _is_finite_number(quantum) or quantum <= 0:
        return InvalidTimeQuantum()
    return None


def validate_process_list(processes: Optional[Iterable[Process]]) -> List[ValidationError]:
    """
    Validate an entire process list before simulation.

    Returns every error found; an empty list means the workload can run.
    """
    processes = list(processes or [])
    if not processes:
        return [EmptyProcessList()]

    errors: List[ValidationError] = []
    seen: set = set()
    for p in processes:
        if p.id in seen:
            errors.append(DuplicateProcessId(p.id))
        seen.add(p.id)
        errors.extend(validate_process(p))

    return errors


def ensure_valid(
    processes: Optional[Iterable[Process]],
    quantum=None,
    algorithm: Optional[str] = None,
) -> None:
    """
    Raise WorkloadError if the workload (and, for round-robin, the quantum)
    cannot be simulated.
    """
    errors = validate_process_list(processes)

    check_quantum = algorithm.lower() == "rr" if algorithm is not None else quantum is not None
    if check_quantum:
        quantum_error = validate_time_quantum(quantum)
        if quantum_error is not None:
            errors.append(quantum_error)

    if errors:
        raise WorkloadError(errors)
