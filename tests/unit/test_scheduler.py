"""Tests for the manual and threading schedulers."""

import threading

import pytest

from algotrace.scheduler import ManualScheduler, ThreadingScheduler, get_scheduler


class TestManualScheduler:
    def test_fires_once_per_elapsed_interval(self):
        scheduler = ManualScheduler()
        ticks = []
        scheduler.schedule_repeating(1.0, lambda task: ticks.append(scheduler.now))
        assert scheduler.advance(0.5) == 0
        assert scheduler.advance(2.0) == 2
        assert ticks == [1.0, 2.0]
        assert scheduler.now == 2.5

    def test_tasks_fire_in_due_then_scheduling_order(self):
        scheduler = ManualScheduler()
        order = []
        scheduler.schedule_repeating(2.0, lambda task: order.append("slow"))
        scheduler.schedule_repeating(1.0, lambda task: order.append("fast"))
        scheduler.advance(2.0)
        assert order == ["fast", "slow", "fast"]

    def test_cancelled_task_never_fires(self):
        scheduler = ManualScheduler()
        ticks = []
        task = scheduler.schedule_repeating(1.0, lambda t: ticks.append(1))
        task.cancel()
        task.cancel()
        assert task.cancelled
        assert scheduler.advance(5.0) == 0
        assert ticks == []
        assert scheduler.pending == 0

    def test_callback_can_cancel_its_own_task(self):
        scheduler = ManualScheduler()
        ticks = []

        def once(task):
            ticks.append(scheduler.now)
            task.cancel()

        scheduler.schedule_repeating(1.0, once)
        assert scheduler.advance(10.0) == 1
        assert ticks == [1.0]

    def test_negative_advance_is_rejected(self):
        with pytest.raises(ValueError, match="backwards"):
            ManualScheduler().advance(-1)

    def test_non_positive_interval_is_rejected(self):
        with pytest.raises(ValueError, match="interval"):
            ManualScheduler().schedule_repeating(0, lambda task: None)


class TestThreadingScheduler:
    def test_ticks_until_cancelled(self):
        scheduler = ThreadingScheduler()
        done = threading.Event()
        ticks = []

        def tick(task):
            ticks.append(1)
            if len(ticks) == 3:
                task.cancel()
                done.set()

        scheduler.schedule_repeating(0.01, tick)
        assert done.wait(timeout=5)
        assert ticks == [1, 1, 1]

    def test_cancel_before_first_tick(self):
        scheduler = ThreadingScheduler()
        fired = threading.Event()
        task = scheduler.schedule_repeating(0.05, lambda t: fired.set())
        task.cancel()
        assert not fired.wait(timeout=0.2)
        assert task.cancelled

    def test_raising_callback_keeps_ticking(self):
        scheduler = ThreadingScheduler()
        second = threading.Event()
        ticks = []

        def tick(task):
            ticks.append(1)
            if len(ticks) == 1:
                raise RuntimeError("first tick failed")
            task.cancel()
            second.set()

        scheduler.schedule_repeating(0.01, tick)
        assert second.wait(timeout=5)
        assert len(ticks) == 2


class TestGetScheduler:
    def test_known_kinds(self):
        assert isinstance(get_scheduler("manual"), ManualScheduler)
        assert isinstance(get_scheduler(), ThreadingScheduler)

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown scheduler"):
            get_scheduler("asyncio")
