"""Hierarchical wall-clock timers and a process-wide timer tree."""

from __future__ import annotations

import math
import time

from hmatrix.config import get_global_value

_DISABLE_KEY = "HMATRIX_DISABLE_TIMER"
_LABEL_WIDTH = 35
_DECIMALS = 7


def _print_value(label: str, value: float | int) -> None:
    if isinstance(value, float):
        text = f"{value:.{_DECIMALS}f}"
    else:
        text = str(value)
    print(f"{label:<{_LABEL_WIDTH}} : {text}")


class Timer:
    """A named timer that accumulates run times and owns named subtimers."""

    def __init__(self, name: str = "", parent: Timer | None = None) -> None:
        self.name = name
        self.parent = parent
        self.total_time = 0.0
        self.times: list[float] = []
        self._subtimers: dict[str, Timer] = {}
        self._running = False
        self._start_time = 0.0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def n_runs(self) -> int:
        return len(self.times)

    @property
    def subtimers(self) -> dict[str, float]:
        """Total time of each subtimer, keyed by name in sorted order."""
        return {name: self._subtimers[name].total_time for name in sorted(self._subtimers)}

    def __contains__(self, event: str) -> bool:
        return event in self._subtimers

    def start(self) -> None:
        if self._running:
            raise RuntimeError(f"timer {self.name!r} is already running")
        self._running = True
        self._start_time = time.perf_counter()

    def start_subtimer(self, event: str) -> None:
        if event not in self._subtimers:
            self._subtimers[event] = Timer(event, self)
        self._subtimers[event].start()

    def stop(self) -> float:
        """Stop the timer and return the duration of this run in seconds."""
        if not self._running:
            raise RuntimeError(f"timer {self.name!r} is not running")
        end_time = time.perf_counter()
        self._running = False
        duration = end_time - self._start_time
        self.times.append(duration)
        self.total_time += duration
        return duration

    def clear(self) -> None:
        """Reset a root timer, discarding all subtimers."""
        if self._running:
            raise RuntimeError("cannot clear a running timer")
        if self.parent is not None or self.name:
            raise RuntimeError("only the unnamed root timer can be cleared")
        self.total_time = 0.0
        self._subtimers.clear()

    def __getitem__(self, event: str) -> Timer:
        return self._subtimers[event]

    def print_to_depth(self, depth: int) -> None:
        """Print this timer and its subtimers down to ``depth`` levels."""
        if self._running:
            raise RuntimeError("cannot print a running timer")
        self._print_to_depth(depth, 0, "")

    def _print_to_depth(self, depth: int, at_depth: int, tag: str) -> None:
        _print_value(self.name if at_depth == 0 else f"{tag}--{self.name}", self.total_time)
        if depth <= 0:
            return
        children = sorted(self._subtimers.values(), key=lambda t: t.total_time, reverse=True)
        for child in children:
            child._print_to_depth(depth - 1, at_depth + 1, tag + " |")
        if children:
            subcounter_sum = sum(child.total_time for child in children)
            share = subcounter_sum / self.total_time * 100 if self.total_time else 0.0
            _print_value(f"{tag} |_Subcounters [%]", int(math.floor(share + 0.5)))


_global_timer = Timer()
_current_timer = _global_timer


def _enabled() -> bool:
    return get_global_value(_DISABLE_KEY) != "1"


def start(event: str) -> Timer:
    """Start ``event`` beneath the current timer and make it current."""
    global _current_timer
    if _enabled():
        _current_timer.start_subtimer(event)
        _current_timer = _current_timer[event]
    return _current_timer


def stop(event: str) -> float:
    """Stop the current timer, which must be ``event``; return its duration."""
    global _current_timer
    if not _enabled():
        return 0.0
    if _current_timer.name != event:
        raise ValueError(f"current timer is {_current_timer.name!r}, not {event!r}")
    duration = _current_timer.stop()
    if _current_timer.parent is not None:
        _current_timer = _current_timer.parent
    return duration


def clear_timers() -> None:
    """Discard every recorded timer."""
    global _current_timer
    _global_timer.clear()
    _current_timer = _global_timer


def stop_and_print(event: str, depth: int) -> None:
    if _enabled():
        stop(event)
        print_time(event, depth)


def print_time(event: str, depth: int) -> None:
    _current_timer[event].print_to_depth(depth)


def get_total_time(event: str) -> float:
    return _current_timer[event].total_time


def get_n_runs(event: str) -> int:
    return _current_timer[event].n_runs