"""Tests for the search debouncer."""

from __future__ import annotations

from ledgr.services.debounce import SearchDebouncer, daemon_timer


def _debouncer(clock, current: str = "", min_length: int = 2):
    committed: list[str] = []
    debouncer = SearchDebouncer(
        committed.append,
        lambda: current,
        delay=0.8,
        min_length=min_length,
        timer_factory=clock,
    )
    return debouncer, committed


def test_only_last_value_of_a_burst_propagates(clock):
    debouncer, committed = _debouncer(clock)

    for text in ("c", "co", "cof"):
        debouncer.on_input(text)
    clock.elapse()

    assert committed == ["cof"]
    assert [timer.cancelled for timer in clock.timers] == [True, True, False]
    assert all(timer.delay == 0.8 for timer in clock.timers)


def test_nothing_propagates_before_the_quiet_period(clock):
    debouncer, committed = _debouncer(clock)

    debouncer.on_input("coffee")

    assert committed == []
    assert debouncer.pending == "coffee"


def test_short_text_is_suppressed(clock):
    debouncer, committed = _debouncer(clock)

    debouncer.on_input("c")
    clock.elapse()

    assert committed == []


def test_empty_text_propagates_as_an_explicit_clear(clock):
    debouncer, committed = _debouncer(clock, current="cof")

    debouncer.on_input("   ")
    clock.elapse()

    assert committed == [""]


def test_unchanged_value_is_not_propagated(clock):
    debouncer, committed = _debouncer(clock, current="cof")

    debouncer.on_input("cof ")
    clock.elapse()

    assert committed == []


def test_superseded_timer_firing_late_is_ignored(clock):
    """A timer already due when a newer keystroke arrives does nothing."""

    debouncer, committed = _debouncer(clock)

    debouncer.on_input("tea")
    debouncer.on_input("teapot")
    clock.timers[0].callback()

    assert committed == []
    clock.elapse()
    assert committed == ["teapot"]


def test_flush_commits_pending_value_immediately(clock):
    debouncer, committed = _debouncer(clock)

    debouncer.on_input("rent")
    debouncer.flush()

    assert committed == ["rent"]
    assert debouncer.pending is None
    clock.elapse()
    assert committed == ["rent"]


def test_cancel_drops_pending_value(clock):
    debouncer, committed = _debouncer(clock)

    debouncer.on_input("rent")
    debouncer.cancel()
    clock.elapse()

    assert committed == []
    assert debouncer.pending is None


def test_daemon_timer_does_not_block_exit():
    timer = daemon_timer(10, lambda: None)
    try:
        assert timer.daemon is True
    finally:
        timer.cancel()
