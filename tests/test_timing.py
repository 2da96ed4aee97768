import time

import pytest

from hmatrix import timing
from hmatrix.timing import (
    Timer,
    clear_timers,
    get_n_runs,
    get_total_time,
    print_time,
    start,
    stop,
    stop_and_print,
)


@pytest.fixture
def fake_clock(monkeypatch):
    state = {"now": 0.0}

    def clock():
        value = state["now"]
        state["now"] += 2.0
        return value

    monkeypatch.setattr(time, "perf_counter", clock)
    return state


@pytest.fixture(autouse=True)
def fresh_timers(monkeypatch):
    monkeypatch.delenv("HMATRIX_DISABLE_TIMER", raising=False)
    clear_timers()
    yield
    clear_timers()


def test_start_stop_records_one_run(fake_clock):
    timer = start("work")
    assert timer.name == "work"
    duration = stop("work")
    assert duration == pytest.approx(2.0)
    assert get_n_runs("work") == 1
    assert get_total_time("work") == pytest.approx(2.0)


def test_repeated_runs_accumulate(fake_clock):
    for _ in range(3):
        start("loop")
        stop("loop")
    assert get_n_runs("loop") == 3
    assert get_total_time("loop") == pytest.approx(6.0)


def test_nested_timer_parent_links(fake_clock):
    outer = start("outer")
    inner = start("inner")
    assert inner.parent is outer
    stop("inner")
    stop("outer")
    assert outer["inner"] is inner
    assert outer.subtimers == {"inner": pytest.approx(inner.total_time)}


def test_stop_with_wrong_name_raises():
    start("a")
    with pytest.raises(ValueError):
        stop("b")
    stop("a")


def test_timer_cannot_start_twice():
    timer = Timer("x")
    timer.start()
    with pytest.raises(RuntimeError):
        timer.start()


def test_timer_stop_without_start_raises():
    with pytest.raises(RuntimeError):
        Timer("x").stop()


def test_clear_only_allowed_on_root():
    with pytest.raises(RuntimeError):
        Timer("named").clear()


def test_clear_removes_subtimers(fake_clock):
    start("gone")
    stop("gone")
    clear_timers()
    with pytest.raises(KeyError):
        get_n_runs("gone")


def test_disabled_timers_do_nothing(monkeypatch):
    monkeypatch.setenv("HMATRIX_DISABLE_TIMER", "1")
    start("ignored")
    assert stop("ignored") == 0.0
    monkeypatch.delenv("HMATRIX_DISABLE_TIMER")
    with pytest.raises(KeyError):
        get_n_runs("ignored")


def test_print_time_single_level(fake_clock, capsys):
    start("outer")
    stop("outer")
    print_time("outer", 0)
    out = capsys.readouterr().out
    assert out == f"{'outer':<35} : 2.0000000\n"


def test_print_time_with_children(fake_clock, capsys):
    start("a")
    start("b")
    stop("b")
    stop("a")
    print_time("a", 1)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("a ")
    assert lines[1].startswith(" |--b ")
    assert lines[1].endswith(": 2.0000000")
    assert lines[2].startswith(" |_Subcounters [%]")
    assert lines[2].endswith(": 33")


def test_stop_and_print_outputs_event(fake_clock, capsys):
    start("job")
    stop_and_print("job", 0)
    out = capsys.readouterr().out
    assert out.startswith("job ")
    assert get_n_runs("job") == 1


def test_print_running_timer_raises():
    timer = Timer("x")
    timer.start()
    with pytest.raises(RuntimeError):
        timer.print_to_depth(0)