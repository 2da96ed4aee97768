"""Inputs for experiments: reproducible point sets and geometry files."""

from __future__ import annotations

import math
import os
import random

_MT_STATE_SIZE = 624


def _mt19937(seed: int) -> random.Random:
    """Return a Mersenne Twister seeded with the reference 32-bit seeding."""
    state = [seed & 0xFFFFFFFF]
    for i in range(1, _MT_STATE_SIZE):
        prev = state[-1]
        state.append((1812433253 * (prev ^ (prev >> 30)) + i) & 0xFFFFFFFF)
    rng = random.Random()
    rng.setstate((3, tuple(state) + (_MT_STATE_SIZE,), None))
    return rng


def _canonical(rng: random.Random) -> float:
    """Uniform double in [0, 1) built from two 32-bit draws."""
    low = rng.getrandbits(32)
    high = rng.getrandbits(32)
    value = (low + (high << 32)) / 2.0**64
    if value >= 1.0:
        value = math.nextafter(1.0, 0.0)
    return value


def get_sorted_random_vector(n: int) -> list[float]:
    """Return ``n`` uniform values in [0, 1) from a fixed seed, sorted."""
    rng = _mt19937(0)
    return sorted(_canonical(rng) for _ in range(n))


def get_non_negative_vector(n: int) -> list[float]:
    """Return ``[0.0, 1.0, ..., n - 1]``."""
    return [float(i) for i in range(n)]


def read_geometry_file(filename: str | os.PathLike[str]) -> list[list[float]]:
    """Read points from a text file.

    The file starts with the number of points and their dimension, followed
    by the coordinates point by point. The result holds one list per axis.
    """
    with open(filename, encoding="utf-8") as file:
        tokens = file.read().split()
    if len(tokens) < 2:
        raise ValueError(f"{filename}: missing point count and dimension")
    n, dim = int(tokens[0]), int(tokens[1])
    values = [float(token) for token in tokens[2 : 2 + n * dim]]
    if len(values) < n * dim:
        raise ValueError(f"{filename}: expected {n * dim} coordinates, found {len(values)}")
    return [values[axis::dim] for axis in range(dim)]