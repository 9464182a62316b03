from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Union

from .models import Process

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.debug(f"Loaded {len(processes)} processes from {path}")
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _parse_number(value) -> Union[int, float]:
    # Keep non-integral and non-finite values so the validator can report them.
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            number = float(text)
    else:
        number = float(value)
    if number.is_integer():
        return int(number)
    return number


def _parse_id(value) -> int:
    text = str(value).strip()
    if text[:1] in {"P", "p"}:
        text = text[1:]
    return int(text)


def _process_from_mapping(mapping) -> Process:
    try:
        raw_id = mapping["id"] if "id" in mapping else mapping["pid"]
        pid = _parse_id(raw_id)
        arrival_time = _parse_number(mapping["arrival_time"])
        burst_time = _parse_number(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _parse_number(priority_val) if priority_val not in (None, "") else 0
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        id=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
