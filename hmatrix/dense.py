"""Base matrix types and the dense matrix that holds actual elements."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from hmatrix.index_range import IndexRange

Kernel = Callable[[np.ndarray, Sequence[Sequence[float]], int, int], None]
"""Fills a block in place: ``kernel(block, params, row_start, col_start)``."""


class UndefinedOperationError(TypeError):
    """Raised when an operation has no implementation for its operand types."""

    def __init__(self, operation: str, *operands: Any) -> None:
        self.operation = operation
        self.types = tuple(type(operand).__name__ for operand in operands)
        super().__init__(f"{operation}({', '.join(self.types)}) undefined!")


def _check_dims(n_rows: int, n_cols: int) -> None:
    if n_rows < 0 or n_cols < 0:
        raise ValueError(f"matrix dimensions must be non-negative, got {n_rows}x{n_cols}")


class Matrix:
    """Common base of all matrix types; holds no data itself."""

    @property
    def shape(self) -> tuple[int, int]:
        raise UndefinedOperationError("shape", self)

    def copy(self) -> Matrix:
        raise UndefinedOperationError("copy", self)

    def to_dense(self) -> Dense:
        raise UndefinedOperationError("to_dense", self)


class Empty(Matrix):
    """A placeholder block of given size that stores no elements."""

    def __init__(self, n_rows: int = 0, n_cols: int = 0) -> None:
        _check_dims(n_rows, n_cols)
        self.dim = (n_rows, n_cols)

    @property
    def shape(self) -> tuple[int, int]:
        return self.dim

    def copy(self) -> Empty:
        return Empty(*self.dim)

    def __repr__(self) -> str:
        return f"Empty({self.dim[0]}, {self.dim[1]})"


class Dense(Matrix):
    """A dense row-major matrix of floats.

    Several ``Dense`` instances may share one underlying array: shallow copies
    share all of it, and splits made without copying are views of parts of it.
    """

    def __init__(self, n_rows: int = 0, n_cols: int | None = None) -> None:
        if n_cols is None:
            n_cols = 1 if n_rows else 0
        _check_dims(n_rows, n_cols)
        self._array = np.zeros((n_rows, n_cols))
        self._root = self._array

    @classmethod
    def _wrap(cls, array: np.ndarray, root: np.ndarray) -> Dense:
        obj = cls.__new__(cls)
        obj._array = array
        obj._root = root
        return obj

    @classmethod
    def from_array(cls, array: Any) -> Dense:
        """Copy a 2-D array (a 1-D array becomes a column vector)."""
        if isinstance(array, Dense):
            array = array._array
        values = np.array(array, dtype=float)
        if values.ndim == 1:
            values = values.reshape(-1, 1)
        elif values.ndim != 2:
            raise ValueError(f"expected a 1-D or 2-D array, got {values.ndim} dimensions")
        return cls._wrap(values, values)

    @classmethod
    def from_kernel(
        cls,
        kernel: Kernel,
        params: Sequence[Sequence[float]],
        n_rows: int,
        n_cols: int = 1,
        row_start: int = 0,
        col_start: int = 0,
    ) -> Dense:
        """Create an ``n_rows`` x ``n_cols`` matrix whose elements ``kernel`` writes.

        ``params`` holds one sequence of coordinates per axis; ``row_start`` and
        ``col_start`` locate the block's rows and columns among those points.
        """
        result = cls(n_rows, n_cols)
        kernel(result._array, params, row_start, col_start)
        return result

    @property
    def dim(self) -> tuple[int, int]:
        rows, cols = self._array.shape
        return rows, cols

    @property
    def shape(self) -> tuple[int, int]:
        return self.dim

    @property
    def stride(self) -> int:
        """Distance in elements between the starts of consecutive rows."""
        if self._array.shape[0] == 0:
            return self._array.shape[1]
        return self._array.strides[0] // self._array.itemsize

    @property
    def array(self) -> np.ndarray:
        """The elements as a writable NumPy view."""
        return self._array

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        return np.array(self._array, dtype=dtype)

    def copy(self) -> Dense:
        """Deep copy with its own storage."""
        return Dense.from_array(self._array)

    def to_dense(self) -> Dense:
        return self.copy()

    def copy_to(self, a: Dense, row_start: int = 0, col_start: int = 0) -> None:
        """Fill all of ``a`` with the elements of this matrix starting at the offsets."""
        rows, cols = a.dim
        if (
            row_start < 0
            or col_start < 0
            or row_start + rows > self.dim[0]
            or col_start + cols > self.dim[1]
        ):
            raise ValueError(
                f"cannot copy a {rows}x{cols} block at ({row_start}, {col_start}) "
                f"from a {self.dim[0]}x{self.dim[1]} matrix"
            )
        a._array[...] = self._array[row_start : row_start + rows, col_start : col_start + cols]

    def fill(self, value: float) -> Dense:
        """Set every element to ``value``."""
        self._array[...] = value
        return self

    def _vector_index(self, i: int) -> tuple[int, int]:
        rows, cols = self.dim
        if cols == 1:
            return i, 0
        if rows == 1:
            return 0, i
        raise IndexError(f"one-dimensional indexing of a {rows}x{cols} matrix")

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, tuple):
            value = self._array[index]
            return float(value) if np.ndim(value) == 0 else value.copy()
        return float(self._array[self._vector_index(index)])

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, tuple):
            self._array[index] = value
        else:
            self._array[self._vector_index(index)] = value

    def __add__(self, other: object) -> Dense:
        if not isinstance(other, Dense):
            return NotImplemented
        if self.dim != other.dim:
            raise ValueError(f"cannot add {self.dim} and {other.dim} matrices")
        return Dense.from_array(self._array + other._array)

    def shallow_copy(self) -> Dense:
        """A new ``Dense`` sharing this matrix's storage."""
        return Dense._wrap(self._array, self._root)

    def is_submatrix(self) -> bool:
        """Whether this matrix covers only part of its underlying storage."""
        return self._array.shape != self._root.shape

    def split(
        self,
        row_ranges: Sequence[IndexRange],
        col_ranges: Sequence[IndexRange],
        copy: bool = False,
    ) -> list[Dense]:
        """Cut into blocks by row and column ranges, returned in row-major order.

        Without ``copy`` the blocks are views sharing this matrix's storage.
        """
        for ranges, extent, axis in ((row_ranges, self.dim[0], "row"), (col_ranges, self.dim[1], "column")):
            for r in ranges:
                if r.start < 0 or r.n < 0 or r.start + r.n > extent:
                    raise ValueError(f"{axis} range {r} outside 0..{extent}")
        blocks = []
        for r in row_ranges:
            for c in col_ranges:
                view = self._array[r.start : r.start + r.n, c.start : c.start + c.n]
                blocks.append(Dense.from_array(view) if copy else Dense._wrap(view, self._root))
        return blocks

    def split_blocks(self, n_row_splits: int, n_col_splits: int, copy: bool = False) -> list[Dense]:
        """Cut into ``n_row_splits`` x ``n_col_splits`` blocks of equal size.

        The last block along each axis is smaller if the size does not divide.
        """
        return self.split(
            IndexRange(0, self.dim[0]).split(n_row_splits),
            IndexRange(0, self.dim[1]).split(n_col_splits),
            copy,
        )

    def __repr__(self) -> str:
        return f"Dense({self.dim[0]}x{self.dim[1]})"


def get_n_rows(a: Any) -> int:
    """Number of element rows of any matrix type."""
    try:
        return a.shape[0]
    except (UndefinedOperationError, AttributeError):
        raise UndefinedOperationError("get_n_rows", a) from None


def get_n_cols(a: Any) -> int:
    """Number of element columns of any matrix type."""
    try:
        return a.shape[1]
    except (UndefinedOperationError, AttributeError):
        raise UndefinedOperationError("get_n_cols", a) from None