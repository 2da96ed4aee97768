"""Block matrices whose blocks may be of any matrix type."""

from __future__ import annotations

from typing import Any

import numpy as np

from hmatrix.dense import Dense, Matrix


class Hierarchical(Matrix):
    """A two-dimensional grid of sub-matrices.

    ``dim`` is the number of block rows and block columns. Blocks start out
    unset and must be assigned before the matrix is used.
    """

    def __init__(self, n_row_blocks: int = 0, n_col_blocks: int = 1) -> None:
        if n_row_blocks < 0 or n_col_blocks < 0:
            raise ValueError("number of blocks must be non-negative")
        self.dim = (n_row_blocks, n_col_blocks)
        self._blocks: list[list[Matrix | None]] = [
            [None] * n_col_blocks for _ in range(n_row_blocks)
        ]

    def _position(self, pos: Any) -> tuple[int, int]:
        rows, cols = self.dim
        if isinstance(pos, tuple):
            if len(pos) != 2:
                raise IndexError("block index needs a row and a column")
            i, j = pos
        elif cols == 1:
            i, j = pos, 0
        elif rows == 1:
            i, j = 0, pos
        else:
            raise IndexError(f"one-dimensional indexing of a {rows}x{cols} block matrix")
        if not (0 <= i < rows and 0 <= j < cols):
            raise IndexError(f"block ({i}, {j}) outside {rows}x{cols} block matrix")
        return i, j

    def __getitem__(self, pos: Any) -> Matrix:
        i, j = self._position(pos)
        block = self._blocks[i][j]
        if block is None:
            raise LookupError(f"block ({i}, {j}) has not been set")
        return block

    def __setitem__(self, pos: Any, value: Matrix) -> None:
        if not isinstance(value, Matrix):
            raise TypeError(f"blocks must be matrices, not {type(value).__name__}")
        i, j = self._position(pos)
        self._blocks[i][j] = value

    @property
    def shape(self) -> tuple[int, int]:
        rows, cols = self.dim
        n_rows = sum(self[i, 0].shape[0] for i in range(rows)) if cols else 0
        n_cols = sum(self[0, j].shape[1] for j in range(cols)) if rows else 0
        return n_rows, n_cols

    def copy(self) -> Hierarchical:
        """Deep copy of every block."""
        result = Hierarchical(*self.dim)
        result._blocks = [
            [None if block is None else block.copy() for block in row] for row in self._blocks
        ]
        return result

    def to_dense(self) -> Dense:
        """Assemble all blocks into one dense matrix."""
        rows, cols = self.dim
        if rows == 0 or cols == 0:
            return Dense(0, 0)
        return Dense.from_array(
            np.block([[self[i, j].to_dense().array for j in range(cols)] for i in range(rows)])
        )

    def __repr__(self) -> str:
        return f"Hierarchical({self.dim[0]}x{self.dim[1]} blocks)"