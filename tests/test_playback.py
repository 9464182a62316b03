import pytest

from schedsim.playback import Playback, PlaybackState


def test_starts_idle():
    pb = Playback(3)
    assert pb.state is PlaybackState.IDLE
    assert pb.visible_steps == 0


def test_tick_runs_to_complete():
    pb = Playback(3)
    pb.start()
    assert pb.state is PlaybackState.RUNNING
    for _ in range(3):
        pb.tick()
    assert pb.visible_steps == 3
    assert pb.is_complete
    pb.tick()
    assert pb.visible_steps == 3


def test_tick_ignored_unless_running():
    pb = Playback(3)
    pb.tick()
    assert pb.visible_steps == 0
    pb.start()
    pb.tick()
    pb.pause()
    pb.tick()
    assert pb.visible_steps == 1
    assert pb.state is PlaybackState.PAUSED


def test_pause_and_resume_are_idempotent():
    pb = Playback(4)
    pb.start()
    pb.tick()
    pb.pause()
    pb.pause()
    assert pb.state is PlaybackState.PAUSED
    pb.start()
    pb.start()
    assert pb.state is PlaybackState.RUNNING
    assert pb.visible_steps == 1


def test_step_reveals_one_block_without_running():
    pb = Playback(2)
    pb.step()
    assert pb.state is PlaybackState.PAUSED
    assert pb.visible_steps == 1
    pb.step()
    assert pb.is_complete
    pb.step()
    assert pb.visible_steps == 2


def test_step_ignored_while_running():
    pb = Playback(5)
    pb.start()
    pb.step()
    assert pb.visible_steps == 0


def test_reset_from_any_state():
    pb = Playback(2)
    pb.start()
    pb.tick()
    pb.tick()
    pb.reset()
    assert pb.state is PlaybackState.IDLE
    assert pb.visible_steps == 0
    pb.reset()
    assert pb.state is PlaybackState.IDLE


def test_start_after_complete_is_noop():
    pb = Playback(1)
    pb.start()
    pb.tick()
    pb.start()
    assert pb.is_complete
    assert pb.visible_steps == 1


def test_empty_timeline_completes_immediately():
    pb = Playback(0)
    pb.start()
    assert pb.is_complete


def test_negative_total_rejected():
    with pytest.raises(ValueError):
        Playback(-1)
