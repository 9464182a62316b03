"""
Playback of a precomputed Gantt chart.

The simulation is always computed eagerly; playback only controls how many
of its blocks are visible. Every transition is idempotent and none of them
re-runs a scheduler.
"""

from __future__ import annotations

from enum import Enum


class PlaybackState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


class Playback:
    def __init__(self, total_steps: int) -> None:
        if total_steps < 0:
            raise ValueError("total_steps must be non-negative")
        self.total_steps = total_steps
        self.state = PlaybackState.IDLE
        self.visible_steps = 0

    @property
    def is_complete(self) -> bool:
        return self.state is PlaybackState.COMPLETE

    def start(self) -> None:
        """Begin timed playback from the start, or resume after a pause."""
        if self.state is PlaybackState.IDLE:
            self.visible_steps = 0
            self.state = PlaybackState.RUNNING
            self._check_complete()
        elif self.state is PlaybackState.PAUSED:
            self.state = PlaybackState.RUNNING

    def pause(self) -> None:
        if self.state is PlaybackState.RUNNING:
            self.state = PlaybackState.PAUSED

    def tick(self) -> None:
        """Reveal one block; driven by the playback timer."""
        if self.state is not PlaybackState.RUNNING:
            return
        self._advance()

    def step(self) -> None:
        """Reveal one block manually, without starting the timer."""
        if self.state in (PlaybackState.IDLE, PlaybackState.PAUSED):
            self.state = PlaybackState.PAUSED
            self._advance()

    def reset(self) -> None:
        self.state = PlaybackState.IDLE
        self.visible_steps = 0

    def _advance(self) -> None:
        self.visible_steps = min(self.visible_steps + 1, self.total_steps)
        self._check_complete()

    def _check_complete(self) -> None:
        if self.visible_steps >= self.total_steps:
            self.state = PlaybackState.COMPLETE
