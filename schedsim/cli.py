from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_QUANTUM, run_algorithm
from .gantt import ColorMap, build_color_map, build_rich_gantt
from .metrics import compare_results, compute_system_metrics, summarize_process_metrics
from .models import Process, SimulationResult
from .playback import Playback
from .validators import WorkloadError, ensure_valid
from .workload_io import load_workload

logger = logging.getLogger(__name__)

DEFAULT_STEP_DELAY = 0.6
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Round Robin, Priority).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (ignored by the others, default: {DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Reveal the Gantt chart one block at a time before the summary.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds to wait between steps when --step is used (default: {DEFAULT_STEP_DELAY}).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Check a workload file without running a simulation.",
    )
    validate_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    validate_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Also check a round-robin time quantum.",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def _print_result(result: SimulationResult, color_map: ColorMap, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.gantt_chart, color_map)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Turnaround",
        "Wait",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.process_results:
        proc_table.add_row(
            f"[{color_map.get(p.id, 'white')}]P{p.id}[/]",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.process_results)
    system = compute_system_metrics(result)

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{result.avg_waiting_time:.2f}")
    sys_table.add_row("Avg turnaround", f"{result.avg_turnaround_time:.2f}")
    sys_table.add_row("Avg completion", f"{summary['avg_completion']:.2f}")
    sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
    sys_table.add_row("Makespan", str(system.makespan))
    sys_table.add_row("Idle time", str(system.idle_time))
    sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{system.cpu_utilization*100:.1f}%")
    sys_table.add_row("Starvation count", str(system.starvation_count))

    console.print(sys_table)


def _animate_result(result: SimulationResult, color_map: ColorMap, delay: float, console: Console) -> None:
    """
    Reveal the precomputed Gantt chart one block per tick.
    """
    playback = Playback(len(result.gantt_chart))
    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {result.makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    playback.start()
    playback.tick()
    panel, _ = build_rich_gantt(result.gantt_chart, color_map, visible=playback.visible_steps)
    with Live(panel, console=console, refresh_per_second=8) as live:
        while not playback.is_complete:
            time.sleep(delay)
            playback.tick()
            panel, _ = build_rich_gantt(result.gantt_chart, color_map, visible=playback.visible_steps)
            live.update(panel)


def _load_checked(workload: str, quantum: Optional[int], algorithm: Optional[str]) -> List[Process]:
    processes = load_workload(Path(workload))
    ensure_valid(processes, quantum=quantum, algorithm=algorithm)
    return processes


def _cmd_run(args: argparse.Namespace, console: Console) -> int:
    processes = _load_checked(args.workload, args.quantum, args.algorithm)
    result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
    color_map = build_color_map(processes)
    if args.step:
        try:
            _animate_result(result, color_map, delay=args.step_delay, console=console)
        except KeyboardInterrupt:
            console.print("[yellow]Animation skipped.[/yellow]")
    _print_result(result, color_map, console)
    return 0


def _cmd_compare(args: argparse.Namespace, console: Console) -> int:
    algorithms = [a.lower() for a in args.algorithms]
    unknown = [a for a in algorithms if a not in ALGORITHMS]
    if unknown:
        raise ValueError(f"Unknown algorithm(s): {', '.join(unknown)}")

    quantum_to_check = args.quantum if "rr" in algorithms else None
    processes = _load_checked(args.workload, quantum_to_check, None)
    results = {alg: run_algorithm(alg, processes, quantum=args.quantum) for alg in algorithms}
    rows = sorted(compare_results(results), key=lambda r: r.avg_waiting)

    summary_table = Table(title=f"Algorithm comparison: {args.workload}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for row in rows:
        summary_table.add_row(
            row.algorithm,
            "" if row.quantum is None else str(row.quantum),
            f"[green]{row.avg_waiting:.2f}[/green]" if row.best_waiting else f"{row.avg_waiting:.2f}",
            f"[green]{row.avg_turnaround:.2f}[/green]" if row.best_turnaround else f"{row.avg_turnaround:.2f}",
            f"{row.avg_response:.2f}",
        )

    console.print(summary_table)
    return 0


def _cmd_validate(args: argparse.Namespace, console: Console) -> int:
    processes = load_workload(Path(args.workload))
    try:
        ensure_valid(processes, quantum=args.quantum)
    except WorkloadError as exc:
        console.print(f"[red]{len(exc.errors)} problem(s) in {args.workload}:[/red]")
        for error in exc.errors:
            console.print(f"  - {escape(str(error))}")
        return EXIT_INPUT_ERROR
    console.print(f"[green]Workload OK:[/green] {len(processes)} processes")
    return 0


COMMANDS = {
    "run": _cmd_run,
    "compare": _cmd_compare,
    "validate": _cmd_validate,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    console = Console()
    command = COMMANDS.get(args.command)
    if command is None:
        parser.error(f"Unknown command: {args.command}")
        return 1

    try:
        return command(args, console)
    except (ValueError, OSError) as exc:
        logger.debug("command failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
