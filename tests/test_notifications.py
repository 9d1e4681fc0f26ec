"""
Tests for the interval scheduler and the staggered announcer.
"""

import pytest

from fundtracker.services.notifications import (
    CooperativeIntervalScheduler,
    StaggeredAnnouncer,
)


class TestCooperativeIntervalScheduler:
    """Timers fire only when advanced."""

    def test_fires_when_due(self, scheduler, clock):
        calls = []
        scheduler.set_interval(lambda: calls.append(clock.now), 100)

        assert scheduler.advance(clock.advance(99)) == 0
        assert scheduler.advance(clock.advance(1)) == 1
        assert calls == [100]

    def test_repeats_until_cleared(self, scheduler, clock):
        calls = []
        handle = scheduler.set_interval(lambda: calls.append(1), 100)
        scheduler.advance(clock.advance(100))
        scheduler.advance(clock.advance(100))
        scheduler.clear_interval(handle)
        scheduler.advance(clock.advance(100))
        assert len(calls) == 2
        assert scheduler.pending == 0

    def test_catches_up_on_missed_periods(self, scheduler, clock):
        calls = []
        scheduler.set_interval(lambda: calls.append(1), 100)
        assert scheduler.advance(clock.advance(350)) == 3

    def test_fires_in_handle_order(self, scheduler, clock):
        order = []
        scheduler.set_interval(lambda: order.append("a"), 100)
        scheduler.set_interval(lambda: order.append("b"), 100)
        scheduler.advance(clock.advance(100))
        assert order == ["a", "b"]

    def test_callback_can_clear_itself(self, scheduler, clock):
        calls = []
        handles = []

        def once():
            calls.append(1)
            scheduler.clear_interval(handles[0])

        handles.append(scheduler.set_interval(once, 100))
        assert scheduler.advance(clock.advance(1000)) == 1
        assert calls == [1]

    def test_advance_uses_clock_by_default(self, scheduler, clock):
        calls = []
        scheduler.set_interval(lambda: calls.append(1), 50)
        clock.advance(50)
        assert scheduler.advance() == 1

    def test_next_due(self, scheduler, clock):
        assert scheduler.next_due_ms() is None
        scheduler.set_interval(lambda: None, 300)
        scheduler.set_interval(lambda: None, 100)
        assert scheduler.next_due_ms() == 100

    def test_clear_unknown_handle_is_ignored(self, scheduler):
        scheduler.clear_interval(12345)
        assert scheduler.pending == 0

    @pytest.mark.parametrize("interval", [0, -5])
    def test_interval_must_be_positive(self, scheduler, interval):
        with pytest.raises(ValueError):
            scheduler.set_interval(lambda: None, interval)

    def test_handles_are_unique(self, scheduler):
        a = scheduler.set_interval(lambda: None, 10)
        b = scheduler.set_interval(lambda: None, 10)
        assert a != b


class TestStaggeredAnnouncer:
    """One message now, the rest one per interval."""

    @pytest.fixture
    def announcer(self, notifier, scheduler):
        return StaggeredAnnouncer(
            notifier=notifier,
            scheduler=scheduler,
            interval_ms=900,
            duration_ms=3500,
        )

    def test_first_message_immediate(self, announcer, notifier):
        announcer.announce(["a", "b", "c"])
        assert notifier.messages == [("a", 3500)]
        assert announcer.queued == 2
        assert announcer.active is True

    def test_rest_follow_at_interval(self, announcer, notifier, scheduler, clock):
        announcer.announce(["a", "b", "c"])
        scheduler.advance(clock.advance(900))
        assert notifier.texts == ["a", "b"]
        scheduler.advance(clock.advance(900))
        assert notifier.texts == ["a", "b", "c"]

    def test_timer_cleared_with_last_message(self, announcer, scheduler, clock):
        announcer.announce(["a", "b"])
        assert scheduler.pending == 1
        scheduler.advance(clock.advance(900))
        assert scheduler.pending == 0
        assert announcer.active is False
        assert announcer.queued == 0

    def test_single_message_registers_no_timer(self, announcer, notifier, scheduler):
        announcer.announce(["only"])
        assert notifier.texts == ["only"]
        assert scheduler.pending == 0
        assert announcer.active is False

    def test_empty_announcement(self, announcer, notifier, scheduler):
        announcer.announce([])
        assert notifier.messages == []
        assert scheduler.pending == 0

    def test_new_announcement_cancels_previous(self, announcer, notifier, scheduler, clock):
        announcer.announce(["a", "b", "c"])
        announcer.announce(["x", "y"])
        assert scheduler.pending == 1

        scheduler.advance(clock.advance(900))
        scheduler.advance(clock.advance(900))
        assert notifier.texts == ["a", "x", "y"]

    def test_cancel(self, announcer, notifier, scheduler, clock):
        announcer.announce(["a", "b"])
        announcer.cancel()
        scheduler.advance(clock.advance(5000))
        assert notifier.texts == ["a"]
        assert scheduler.pending == 0

    def test_catch_up_delivers_in_order(self, announcer, notifier, scheduler, clock):
        """A late host tick still delivers every message once, in order."""
        announcer.announce(["a", "b", "c", "d"])
        scheduler.advance(clock.advance(10_000))
        assert notifier.texts == ["a", "b", "c", "d"]
        assert scheduler.pending == 0


def test_scheduler_without_clock_uses_monotonic_time():
    scheduler = CooperativeIntervalScheduler()
    scheduler.set_interval(lambda: None, 60_000)
    assert scheduler.advance() == 0
    assert scheduler.pending == 1
