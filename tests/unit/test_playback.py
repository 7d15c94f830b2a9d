"""Tests for PlaybackController state transitions and auto-advance."""

import threading

import pytest

from algotrace.playback import PlaybackController
from algotrace.playback_types import PlaybackConfig, PlaybackState
from algotrace.scheduler import ManualScheduler, ScheduledTask, Scheduler
from algotrace.step_data import SortStepData
from algotrace.trace_types import Step, Trace


def _trace(length, algorithm_id="demo"):
    return Trace(
        algorithm_id=algorithm_id,
        steps=tuple(
            Step(id=i, description=f"step {i}", data=SortStepData(array=(i,)))
            for i in range(length)
        ),
    )


class FakeTask(ScheduledTask):
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self):
        return self._cancelled

    def cancel(self):
        self._cancelled = True

    def fire(self):
        """Deliver a tick even if cancelled, as a late timer thread would."""
        self.callback(self)


class FakeScheduler(Scheduler):
    def __init__(self):
        self.tasks = []

    def schedule_repeating(self, interval, callback):
        task = FakeTask(interval, callback)
        self.tasks.append(task)
        return task


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def controller(scheduler):
    ctrl = PlaybackController(scheduler=scheduler)
    ctrl.load(_trace(5))
    return ctrl


class TestInitialState:
    def test_idle_until_loaded(self):
        ctrl = PlaybackController(scheduler=ManualScheduler())
        assert ctrl.state is PlaybackState.IDLE
        assert ctrl.current_step is None
        assert ctrl.trace is None

    def test_commands_are_no_ops_while_idle(self):
        ctrl = PlaybackController(scheduler=ManualScheduler())
        ctrl.play()
        ctrl.step_forward()
        ctrl.step_backward()
        ctrl.seek(3)
        ctrl.reset()
        assert ctrl.state is PlaybackState.IDLE
        assert ctrl.position == 0

    def test_load_moves_to_ready_at_zero(self, controller):
        assert controller.state is PlaybackState.READY
        assert controller.position == 0
        assert controller.current_step.id == 0


class TestManualNavigation:
    def test_step_forward_and_backward(self, controller):
        controller.step_forward()
        controller.step_forward()
        assert controller.position == 2
        controller.step_backward()
        assert controller.position == 1

    def test_stepping_through_whole_trace(self, controller):
        for _ in range(4):
            controller.step_forward()
        assert controller.position == 4
        controller.step_forward()
        assert controller.position == 4
        controller.play()
        assert controller.state is PlaybackState.READY

    def test_forward_then_backward_restores_step(self, controller):
        controller.seek(2)
        before = controller.current_step
        controller.step_forward()
        controller.step_backward()
        assert controller.position == 2
        assert controller.current_step is before

    def test_step_backward_at_start_is_no_op(self, controller):
        controller.step_backward()
        assert controller.position == 0

    def test_step_forward_at_end_is_no_op(self, controller):
        controller.seek(4)
        controller.step_forward()
        assert controller.position == 4
        assert controller.is_at_end

    def test_seek_clamps(self, controller):
        controller.seek(99)
        assert controller.position == 4
        controller.seek(-3)
        assert controller.position == 0

    def test_reset_returns_to_start(self, controller):
        controller.seek(3)
        controller.reset()
        assert controller.position == 0
        assert controller.state is PlaybackState.READY

    def test_navigation_ignored_while_playing(self, controller):
        controller.play()
        controller.step_forward()
        controller.step_backward()
        controller.seek(3)
        assert controller.position == 0
        assert controller.state is PlaybackState.PLAYING


class TestAutoAdvance:
    def test_reaches_last_step_and_auto_pauses(self, controller, scheduler):
        controller.play()
        assert controller.state is PlaybackState.PLAYING
        scheduler.advance(10.0)
        assert controller.position == 4
        assert controller.state is PlaybackState.READY
        assert scheduler.pending == 0

    def test_one_step_per_interval(self, controller, scheduler):
        controller.play()
        scheduler.advance(1.0)
        assert controller.position == 1
        scheduler.advance(1.0)
        assert controller.position == 2

    def test_play_at_end_is_no_op(self, controller, scheduler):
        controller.seek(4)
        controller.play()
        assert controller.state is PlaybackState.READY
        assert scheduler.pending == 0

    def test_pause_cancels_timer(self, controller, scheduler):
        controller.play()
        scheduler.advance(1.0)
        controller.pause()
        assert controller.state is PlaybackState.READY
        assert scheduler.pending == 0
        scheduler.advance(5.0)
        assert controller.position == 1

    def test_pause_when_not_playing_is_no_op(self, controller):
        controller.pause()
        assert controller.state is PlaybackState.READY

    def test_set_speed_while_playing_does_not_double_step(self, controller, scheduler):
        controller.play()
        controller.set_speed(2.0)
        assert scheduler.pending == 1
        assert controller.interval == 0.5
        scheduler.advance(0.5)
        assert controller.position == 1
        scheduler.advance(0.5)
        assert controller.position == 2

    def test_set_speed_keeps_position(self, controller):
        controller.seek(2)
        controller.set_speed(3.0)
        assert controller.position == 2
        assert controller.speed == 3.0

    @pytest.mark.parametrize("speed", [0, -1.5])
    def test_set_speed_rejects_non_positive(self, controller, speed):
        with pytest.raises(ValueError, match="positive"):
            controller.set_speed(speed)

    def test_load_during_play_leaves_no_live_task(self, controller, scheduler):
        controller.play()
        scheduler.advance(1.0)
        controller.load(_trace(3, "other"))
        assert controller.state is PlaybackState.READY
        assert controller.position == 0
        assert scheduler.pending == 0
        scheduler.advance(5.0)
        assert controller.position == 0

    def test_reset_during_play_stops_timer(self, controller, scheduler):
        controller.play()
        scheduler.advance(2.0)
        controller.reset()
        assert scheduler.pending == 0
        assert controller.position == 0

    def test_close_returns_to_idle(self, controller, scheduler):
        controller.play()
        controller.close()
        assert controller.state is PlaybackState.IDLE
        assert controller.trace is None
        assert scheduler.pending == 0


class TestStaleTicks:
    def test_tick_from_cancelled_task_is_dropped(self):
        fake = FakeScheduler()
        ctrl = PlaybackController(scheduler=fake)
        ctrl.load(_trace(5))
        ctrl.play()
        old = fake.tasks[0]
        ctrl.set_speed(2.0)
        assert old.cancelled
        old.fire()
        assert ctrl.position == 0
        fake.tasks[1].fire()
        assert ctrl.position == 1

    def test_tick_after_load_is_dropped(self):
        fake = FakeScheduler()
        ctrl = PlaybackController(scheduler=fake)
        ctrl.load(_trace(5))
        ctrl.play()
        ctrl.load(_trace(5, "other"))
        fake.tasks[0].fire()
        assert ctrl.position == 0
        assert ctrl.state is PlaybackState.READY


class TestListeners:
    def test_listener_sees_every_change(self, scheduler):
        ctrl = PlaybackController(scheduler=scheduler)
        seen = []
        ctrl.add_listener(lambda c: seen.append((c.state, c.position)))
        ctrl.load(_trace(3))
        ctrl.play()
        scheduler.advance(2.0)
        assert seen == [
            (PlaybackState.READY, 0),
            (PlaybackState.PLAYING, 0),
            (PlaybackState.PLAYING, 1),
            (PlaybackState.READY, 2),
        ]

    def test_ignored_commands_do_not_notify(self, controller):
        seen = []
        controller.add_listener(lambda c: seen.append(c.position))
        controller.step_backward()
        controller.pause()
        assert seen == []


class TestPlaybackConfig:
    def test_defaults(self):
        config = PlaybackConfig()
        assert config.base_interval == 1.0
        assert config.speed_choices() == (0.5, 1.0, 1.5, 2.0, 2.5, 3.0)

    def test_interval_uses_config(self):
        ctrl = PlaybackController(
            scheduler=ManualScheduler(), config=PlaybackConfig(base_interval=0.2)
        )
        assert ctrl.interval == 0.2
        ctrl.set_speed(2.0)
        assert ctrl.interval == 0.1

    def test_invalid_config(self):
        with pytest.raises(ValueError, match="base_interval"):
            PlaybackConfig(base_interval=0)
        with pytest.raises(ValueError, match="speed range"):
            PlaybackConfig(min_speed=2.0, max_speed=1.0)

    @pytest.mark.parametrize("step", [0, -0.5])
    def test_non_positive_speed_step(self, step):
        with pytest.raises(ValueError, match="speed_step"):
            PlaybackConfig(speed_step=step)


class TestThreadedPlayback:
    def test_plays_to_end_on_timer_threads(self):
        finished = threading.Event()
        ctrl = PlaybackController(config=PlaybackConfig(base_interval=0.01))

        def on_change(c):
            if c.is_at_end and c.state is PlaybackState.READY:
                finished.set()

        ctrl.add_listener(on_change)
        ctrl.load(_trace(4))
        ctrl.play()
        assert finished.wait(timeout=5)
        assert ctrl.position == 3
        ctrl.close()

    def test_raising_listener_does_not_stall_timer(self):
        finished = threading.Event()
        ctrl = PlaybackController(config=PlaybackConfig(base_interval=0.01))

        def on_change(c):
            if c.is_at_end and c.state is PlaybackState.READY:
                finished.set()

        def broken(c):
            if c.position == 1:
                raise RuntimeError("listener failed")

        ctrl.add_listener(on_change)
        ctrl.add_listener(broken)
        ctrl.load(_trace(4))
        ctrl.play()
        assert finished.wait(timeout=5)
        assert ctrl.position == 3
        ctrl.close()
