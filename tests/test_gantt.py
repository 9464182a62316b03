from rich.panel import Panel

from schedsim.algorithms import schedule_fcfs
from schedsim.gantt import (
    IDLE_COLOR,
    PROCESS_COLORS,
    build_color_map,
    build_rich_gantt,
    render_gantt,
)
from schedsim.models import IDLE, Process


def test_render_gantt_plain():
    res = schedule_fcfs([Process(1, 0, 5), Process(2, 1, 3)])
    assert render_gantt(res.gantt_chart).splitlines() == [
        "Gantt Chart:",
        "|========|",
        " P1   P2 ",
        "0    5  8",
    ]


def test_render_gantt_shows_idle():
    res = schedule_fcfs([Process(1, 2, 3)])
    lines = render_gantt(res.gantt_chart).splitlines()
    assert lines[1] == "|..===|"
    assert lines[2] == " --P1 "


def test_render_empty():
    assert render_gantt([]) == "(no execution)"


def test_color_map_by_position_and_idle():
    color_map = build_color_map([Process(3, 0, 1), Process(1, 0, 1)])
    assert color_map[3] == PROCESS_COLORS[0]
    assert color_map[1] == PROCESS_COLORS[1]
    assert color_map[IDLE] == IDLE_COLOR


def test_color_map_wraps_around():
    procs = [Process(i, 0, 1) for i in range(1, len(PROCESS_COLORS) + 2)]
    color_map = build_color_map(procs)
    assert color_map[len(PROCESS_COLORS) + 1] == PROCESS_COLORS[0]


def test_rich_gantt_full_and_partial():
    procs = [Process(1, 0, 5), Process(2, 1, 3)]
    res = schedule_fcfs(procs)
    color_map = build_color_map(procs)

    panel, marks = build_rich_gantt(res.gantt_chart, color_map)
    assert isinstance(panel, Panel)
    assert marks.split() == ["0", "5", "8"]

    panel, marks = build_rich_gantt(res.gantt_chart, color_map, visible=1)
    assert "step 1/2" in panel.title
    assert marks.split() == ["0", "5"]


def test_rich_gantt_nothing_visible():
    res = schedule_fcfs([Process(1, 0, 5)])
    panel, marks = build_rich_gantt(res.gantt_chart, visible=0)
    assert marks == ""
    assert panel.title == "Gantt Chart"
