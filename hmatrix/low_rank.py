"""Matrices stored as the product of three factors ``U @ S @ V``."""

from __future__ import annotations

import numpy as np

from hmatrix.dense import Dense, Matrix
from hmatrix.randomized import rsvd

_OVERSAMPLING = 5


def _as_dense(a: Matrix, copy: bool) -> Dense:
    if isinstance(a, Dense):
        return a.copy() if copy else a.shallow_copy()
    return a.to_dense()


def _truncated_rrqr_basis(a: np.ndarray, eps: float) -> np.ndarray:
    """Orthonormal column basis ``Q`` with ``||A - Q Q^T A|| <= eps ||A||``.

    Columns are chosen greedily by largest residual norm (column pivoting).
    """
    m, n = a.shape
    threshold = eps * np.linalg.norm(a)
    residual = a.copy()
    basis: list[np.ndarray] = []
    while len(basis) < min(m, n):
        if np.linalg.norm(residual) <= threshold:
            break
        pivot = int(np.argmax(np.sum(residual * residual, axis=0)))
        q = residual[:, pivot].copy()
        if basis:
            current = np.column_stack(basis)
            q -= current @ (current.T @ q)
        length = np.linalg.norm(q)
        if length == 0.0:
            break
        q /= length
        basis.append(q)
        residual -= np.outer(q, q @ residual)
    if not basis:
        return np.zeros((m, 0))
    return np.column_stack(basis)


class LowRank(Matrix):
    """A matrix approximated as ``u @ s @ v``.

    ``u`` is ``n_rows`` x ``rank``, ``s`` is ``rank`` x ``rank`` and ``v`` is
    ``rank`` x ``n_cols``. ``eps`` is the relative error threshold used to
    build the approximation, or 0 when a fixed rank was used.
    """

    def __init__(self, u: Matrix, s: Dense, v: Matrix, copy: bool = True) -> None:
        u_dense = _as_dense(u, copy)
        s_dense = _as_dense(s, copy)
        v_dense = _as_dense(v, copy)
        if u_dense.dim[1] != s_dense.dim[0] or s_dense.dim[1] != v_dense.dim[0]:
            raise ValueError(
                f"incompatible factor shapes {u_dense.dim}, {s_dense.dim}, {v_dense.dim}"
            )
        self.u = u_dense
        self.s = s_dense
        self.v = v_dense
        self.dim = (u_dense.dim[0], v_dense.dim[1])
        self.rank = s_dense.dim[0]
        self.eps = 0.0

    @classmethod
    def from_dense(cls, a: Dense, rank: int | float) -> LowRank:
        """Compress ``a``.

        An integer ``rank`` gives a fixed-rank approximation by randomized SVD.
        A float is taken as a relative error threshold instead: a truncated
        rank-revealing QR then picks the rank, and ``s`` is the identity.
        """
        if isinstance(rank, float):
            return cls._from_dense_accuracy(a, rank)
        n_rows, n_cols = a.dim
        if not 0 < rank <= min(n_rows, n_cols):
            raise ValueError(f"rank {rank} outside 1..{min(n_rows, n_cols)}")
        sample_size = min(rank + _OVERSAMPLING, n_rows, n_cols)
        u, s, v = rsvd(a, sample_size)
        result = cls(
            Dense.from_array(u.array[:, :rank]),
            Dense.from_array(s.array[:rank, :rank]),
            Dense.from_array(v.array[:rank, :]),
            copy=False,
        )
        return result

    @classmethod
    def _from_dense_accuracy(cls, a: Dense, eps: float) -> LowRank:
        if eps <= 0.0:
            raise ValueError("error threshold must be positive")
        q = _truncated_rrqr_basis(a.array, eps)
        result = cls(
            Dense.from_array(q),
            Dense.from_array(np.eye(q.shape[1])),
            Dense.from_array(q.T @ a.array),
            copy=False,
        )
        result.eps = eps
        return result

    @property
    def shape(self) -> tuple[int, int]:
        return self.dim

    def copy(self) -> LowRank:
        """Deep copy of all three factors."""
        result = LowRank(self.u, self.s, self.v, copy=True)
        result.eps = self.eps
        return result

    def to_dense(self) -> Dense:
        """The full product ``u @ s @ v``."""
        return Dense.from_array(self.u.array @ self.s.array @ self.v.array)

    def __repr__(self) -> str:
        return f"LowRank({self.dim[0]}x{self.dim[1]}, rank={self.rank})"