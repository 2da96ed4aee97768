"""Morton (Z-order) indexing of points in the unit box."""

from __future__ import annotations

from collections.abc import Sequence


def get_cartesian_index(dim: int, morton_index: int) -> list[int]:
    """Decode a Morton index into ``dim`` integer coordinates."""
    if morton_index < 0:
        raise ValueError("Morton index must be non-negative")
    index = [0] * dim
    d = level = 0
    while morton_index != 0:
        index[d] += (morton_index % 2) << level
        morton_index >>= 1
        d = (d + 1) % dim
        if d == 0:
            level += 1
    return index


def get_morton_index(ix: Sequence[int], level: int) -> int:
    """Interleave the lowest ``level`` bits of each coordinate in ``ix``."""
    coords = list(ix)
    dim = len(coords)
    morton_index = 0
    for lev in range(level):
        for d in range(dim):
            morton_index += (coords[d] & 1) << (dim * lev + d)
            coords[d] >>= 1
    return morton_index


def get_box_number(p: Sequence[float], level: int) -> int:
    """Morton index of the box at ``level`` holding point ``p`` of the unit box."""
    nx = 1 << level
    return get_morton_index([int(coord * nx) for coord in p], level)


def normalize_within_box(x: Sequence[Sequence[float]], eps: float) -> list[list[float]]:
    """Scale points (one list per axis) into a cube padded by ``eps``.

    All axes share the same scale so the shape of the point set is kept.
    """
    bmin = []
    bsize = 0.0
    for axis in x:
        lo, hi = min(axis), max(axis)
        bsize = max(bsize, hi - lo)
        bmin.append(lo - eps)
    bsize += 2 * eps
    return [[(v - low) / bsize for v in axis] for axis, low in zip(x, bmin)]


def sort_by_morton_index(
    x: Sequence[Sequence[float]], level: int
) -> tuple[list[list[float]], list[int]]:
    """Order points by the Morton index of their box at ``level``.

    Returns the reordered points (one list per axis) and the permutation,
    where position ``i`` of the result holds original point ``perm[i]``.
    """
    normalized = normalize_within_box(x, 5e-1)
    points = list(zip(*normalized))
    boxes = [get_box_number(point, level) for point in points]
    perm = sorted(range(len(points)), key=boxes.__getitem__)
    reordered = [[axis[i] for i in perm] for axis in x]
    return reordered, perm