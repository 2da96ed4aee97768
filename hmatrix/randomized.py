"""Randomized singular value decompositions of dense matrices."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from hmatrix.dense import Dense

_rng = np.random.default_rng()


def _random_uniform(
    block: np.ndarray, params: Sequence[Sequence[float]], row_start: int, col_start: int
) -> None:
    block[...] = _rng.uniform(0.0, 1.0, size=block.shape)


def _sketch_basis(a: Dense, sample_size: int) -> np.ndarray:
    if sample_size <= 0:
        raise ValueError("sample size must be positive")
    rn = Dense.from_kernel(_random_uniform, [], a.dim[1], sample_size)
    q, _ = np.linalg.qr(a.array @ rn.array)
    return q


def rsvd(a: Dense, sample_size: int) -> tuple[Dense, Dense, Dense]:
    """Randomized SVD ``a ~ U @ S @ V`` from ``sample_size`` random samples.

    ``S`` is diagonal with non-increasing singular values.
    """
    q = _sketch_basis(a, sample_size)
    ub, s, v = np.linalg.svd(q.T @ a.array, full_matrices=False)
    return Dense.from_array(q @ ub), Dense.from_array(np.diag(s)), Dense.from_array(v)


def old_rsvd(a: Dense, sample_size: int) -> tuple[Dense, Dense, Dense]:
    """Randomized SVD that orthogonalizes both sides before a small SVD.

    Returns factors with orthonormal columns (first) and rows (last) and the
    diagonal matrix of singular values of the projected matrix.
    """
    q = _sketch_basis(a, sample_size)
    bt = a.array.T @ q
    qb, rb = np.linalg.qr(bt)
    ur, s, vr = np.linalg.svd(rb)
    u = q @ ur.T
    v = vr.T @ qb.T
    return Dense.from_array(u), Dense.from_array(np.diag(s)), Dense.from_array(v)