import math

import pytest

from schedsim.models import Process
from schedsim.workload_io import load_workload
from schedsim.validators import (
    DuplicateProcessId,
    EmptyProcessList,
    InvalidArrivalTime,
    InvalidBurstTime,
    InvalidPriority,
    InvalidProcessId,
    InvalidTimeQuantum,
    ValidationError,
    WorkloadError,
    ensure_valid,
    validate_process,
    validate_process_list,
    validate_time_quantum,
)


def test_valid_process_has_no_errors():
    assert validate_process(Process(1, 0, 1, 0)) == []


def test_each_field_is_reported():
    errors = validate_process(Process(3, -1, 0, -2))
    assert [type(e) for e in errors] == [InvalidArrivalTime, InvalidBurstTime, InvalidPriority]
    assert all(e.process_id == 3 for e in errors)
    assert str(errors[1]) == "P3: Burst Time must be a positive number"


@pytest.mark.parametrize("value", [math.inf, math.nan, "5", None, True])
def test_non_finite_or_non_numeric_arrival(value):
    errors = validate_process(Process(1, value, 2))
    assert [type(e) for e in errors] == [InvalidArrivalTime]


def test_empty_list():
    errors = validate_process_list([])
    assert [type(e) for e in errors] == [EmptyProcessList]
    assert str(errors[0]) == "Add at least one process to simulate"
    assert [type(e) for e in validate_process_list(None)] == [EmptyProcessList]


def test_duplicate_ids():
    errors = validate_process_list([Process(1, 0, 2), Process(1, 3, 2)])
    assert [type(e) for e in errors] == [DuplicateProcessId]


@pytest.mark.parametrize("quantum", [0, -1, math.inf, math.nan, None])
def test_invalid_quantum(quantum):
    assert isinstance(validate_time_quantum(quantum), InvalidTimeQuantum)


def test_valid_quantum():
    assert validate_time_quantum(2) is None


def test_errors_are_value_errors():
    assert issubclass(ValidationError, ValueError)
    assert issubclass(WorkloadError, ValueError)


def test_ensure_valid_collects_everything():
    with pytest.raises(WorkloadError) as excinfo:
        ensure_valid([Process(1, 0, 0), Process(2, -1, 1)], quantum=0, algorithm="rr")
    kinds = [type(e) for e in excinfo.value.errors]
    assert kinds == [InvalidBurstTime, InvalidArrivalTime, InvalidTimeQuantum]
    assert "P1: Burst Time must be a positive number" in str(excinfo.value)


def test_ensure_valid_checks_quantum_only_for_round_robin():
    ensure_valid([Process(1, 0, 2)], quantum=0, algorithm="fcfs")
    with pytest.raises(WorkloadError):
        ensure_valid([Process(1, 0, 2)], quantum=0, algorithm="RR")


def test_ensure_valid_without_algorithm_checks_given_quantum():
    ensure_valid([Process(1, 0, 2)])
    with pytest.raises(WorkloadError):
        ensure_valid([Process(1, 0, 2)], quantum=-3)


@pytest.mark.parametrize("pid", [0, -3, True, "1", 1.0])
def test_process_id_must_be_positive_int(pid):
    errors = validate_process(Process(pid, 0, 2))
    assert [type(e) for e in errors] == [InvalidProcessId]
    assert "Process id must be a positive integer" in str(errors[0])


def test_loaded_zero_and_negative_ids_are_rejected(tmp_path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nP0,0,1\n-3,0,2\n")
    errors = validate_process_list(load_workload(p))
    assert [type(e) for e in errors] == [InvalidProcessId, InvalidProcessId]
    assert [e.process_id for e in errors] == [0, -3]
