"""Contiguous index ranges and their subdivision."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class SplitAxis(enum.IntEnum):
    """Axis along which a range follows the structure of a block matrix."""

    ALONG_ROW = 0
    ALONG_COL = 1


@dataclass
class IndexRange:
    """The indices ``start, start + 1, ..., start + n - 1``."""

    start: int = 0
    n: int = 0

    def split(self, n_splits: int) -> list[IndexRange]:
        """Split into ``n_splits`` parts of equal length, the last possibly shorter."""
        if n_splits <= 0:
            raise ValueError("number of splits must be positive")
        step = -(-self.n // n_splits)
        return [
            IndexRange(self.start + i * step, max(0, min(step, self.n - i * step)))
            for i in range(n_splits)
        ]

    def split_at(self, index: int) -> list[IndexRange]:
        """Split in two at ``index``, counted from the start of the range."""
        if not 0 <= index <= self.n:
            raise ValueError(f"split index {index} outside range of length {self.n}")
        return [
            IndexRange(self.start, index),
            IndexRange(self.start + index, self.n - index),
        ]

    def split_like(self, a, along: int) -> list[IndexRange]:
        """Split to match the first level of block matrix ``a``.

        ``SplitAxis.ALONG_ROW`` follows the column sizes of the blocks in the
        first block row; ``SplitAxis.ALONG_COL`` follows the row sizes of the
        blocks in the first block column.
        """
        axis = SplitAxis(along)
        from hmatrix.dense import get_n_cols, get_n_rows

        if axis is SplitAxis.ALONG_ROW:
            sizes = [get_n_cols(a[0, j]) for j in range(a.dim[1])]
        else:
            sizes = [get_n_rows(a[i, 0]) for i in range(a.dim[0])]
        ranges = []
        offset = self.start
        for size in sizes:
            ranges.append(IndexRange(offset, size))
            offset += size
        return ranges