from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence, Tuple, Union

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import IDLE, Process, ScheduleBlock

# One background color per process, wrapping around for larger workloads.
PROCESS_COLORS = [
    "slate_blue1",  # indigo
    "indian_red1",  # rose
    "green3",  # emerald
    "orange1",  # amber
    "medium_purple",  # violet
    "dark_cyan",
    "hot_pink",
    "light_sea_green",  # teal
    "red",
    "dodger_blue1",
    "purple",
    "green",
]

IDLE_COLOR = "grey30"

ColorMap = Dict[Union[int, str], str]


def process_color(index: int) -> str:
    return PROCESS_COLORS[index % len(PROCESS_COLORS)]


def build_color_map(processes: Iterable[Process]) -> ColorMap:
    """
    Map each process id to a color by its position in the input list.
    """
    color_map: ColorMap = {p.id: process_color(i) for i, p in enumerate(processes)}
    color_map[IDLE] = IDLE_COLOR
    return color_map


def _label(block: ScheduleBlock) -> str:
    return "--" if block.is_idle else f"P{block.process_id}"


def render_gantt(blocks: Sequence[ScheduleBlock]) -> str:
    """
    Plain-text Gantt chart: '=' for execution, '.' for idle time.
    """
    if not blocks:
        return "(no execution)"

    line = "|"
    labels = " "
    time_marks = f"{blocks[0].start_time}"

    for block in blocks:
        width = max(1, block.duration)
        line += ("." if block.is_idle else "=") * width
        labels += _label(block)[:width].ljust(width)
        time_marks += f"{block.end_time:>{width}}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(
    blocks: Sequence[ScheduleBlock],
    color_map: Optional[ColorMap] = None,
    visible: Optional[int] = None,
) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    ``visible`` limits the chart to its first N blocks, which is how
    playback reveals the timeline step by step.
    """
    shown = list(blocks if visible is None else blocks[:visible])
    if not shown:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    color_map = dict(color_map or {})
    fallback: ColorMap = {}

    def block_color(block: ScheduleBlock) -> str:
        if block.is_idle:
            return color_map.get(IDLE, IDLE_COLOR)
        if block.process_id in color_map:
            return color_map[block.process_id]
        if block.process_id not in fallback:
            fallback[block.process_id] = process_color(len(fallback))
        return fallback[block.process_id]

    timeline = Text()
    labels = Text()
    time_marks = f"{shown[0].start_time}"

    for block in shown:
        width = max(1, block.duration) * 2
        timeline.append(" " * width, style=f"on {block_color(block)}")
        labels.append(_label(block)[:width].ljust(width), style="dim" if block.is_idle else "bold")
        time_marks += f"{block.end_time:>{width}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    title = "Gantt Chart"
    if visible is not None and visible < len(blocks):
        title += f" (step {len(shown)}/{len(blocks)})"

    panel = Panel.fit(table, title=title)
    return panel, time_marks
