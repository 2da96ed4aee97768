"""Printing, JSON export and memory accounting for matrices of any type."""

from __future__ import annotations

import json
import os
from typing import Any

import numpy as np

from hmatrix.dense import Dense, Empty, Matrix, UndefinedOperationError, get_n_cols, get_n_rows
from hmatrix.hierarchical import Hierarchical
from hmatrix.low_rank import LowRank

VERBOSE = True
"""When false, the printing functions produce no output."""

_LABEL_WIDTH = 35
_DECIMALS = 7
_SEPARATOR_LENGTH = 82

_FLOAT_BYTES = 8
# Sizes of the in-memory structures that describe each matrix type.
_DENSE_STRUCTURE_BYTES = 80
_LOW_RANK_STRUCTURE_BYTES = 280
_PROXY_BYTES = 8
_HIERARCHICAL_STRUCTURE_BYTES = 48


def type_name(a: Any) -> str:
    """Name of the matrix type of ``a``."""
    if isinstance(a, Dense):
        return "Dense"
    if isinstance(a, Empty):
        return "Empty"
    if isinstance(a, LowRank):
        return "LowRank"
    if isinstance(a, Hierarchical):
        return "Hierarchical"
    if isinstance(a, Matrix):
        return "Matrix"
    raise UndefinedOperationError("type_name", a)


def _singular_values(a: Dense) -> list[float]:
    if min(a.dim) == 0:
        return []
    return [float(s) for s in np.linalg.svd(a.array, compute_uv=False)]


def to_json(a: Matrix, i_abs: int = 0, j_abs: int = 0, level: int = 0) -> dict[str, Any]:
    """Describe the structure of ``a`` as a JSON-compatible dictionary.

    Dense and low-rank blocks carry their singular values; block matrices
    list their children row by row with positions on the next level.
    """
    result: dict[str, Any] = {"type": type_name(a), "dim": [get_n_rows(a), get_n_cols(a)]}
    if isinstance(a, Hierarchical):
        rows, cols = a.dim
        result["abs_pos"] = [i_abs, j_abs]
        result["level"] = level
        result["children"] = [
            [to_json(a[i, j], i_abs * rows + i, j_abs * cols + j, level + 1) for j in range(cols)]
            for i in range(rows)
        ]
    elif isinstance(a, LowRank):
        result["abs_pos"] = [i_abs, j_abs]
        result["level"] = level
        result["svalues"] = _singular_values(a.to_dense())
        result["rank"] = a.rank
    elif isinstance(a, Dense):
        result["abs_pos"] = [i_abs, j_abs]
        result["level"] = level
        result["svalues"] = _singular_values(a)
    else:
        raise UndefinedOperationError("to_json", a)
    return result


def write_json(a: Matrix, filename: str | os.PathLike[str]) -> None:
    """Write the structure description of ``a`` to ``filename``."""
    document = to_json(a)
    with open(filename, "w", encoding="utf-8") as out_file:
        json.dump(document, out_file, separators=(",", ":"))


def print_separation_line() -> None:
    print("-" * _SEPARATOR_LENGTH)


def print_matrix(a: Matrix) -> None:
    """Print the elements of ``a`` block by block."""
    if not VERBOSE:
        return
    if isinstance(a, Dense):
        rows, cols = a.dim
        for i in range(rows):
            print("".join(f"{a[i, j]:>20.15g} " for j in range(cols)))
        print_separation_line()
    elif isinstance(a, LowRank):
        print("U : --------------------------------------")
        print_matrix(a.u)
        print("S : --------------------------------------")
        print_matrix(a.s)
        print("V : --------------------------------------")
        print_matrix(a.v)
        print_separation_line()
    elif isinstance(a, Hierarchical):
        rows, cols = a.dim
        for i in range(rows):
            for j in range(cols):
                block = a[i, j]
                print(f"{type_name(block)} ({i},{j})")
                print_matrix(block)
            print()
        print_separation_line()
    else:
        raise UndefinedOperationError("print", a)


def print_heading(s: str) -> None:
    """Print ``s`` as a dashed section heading."""
    if not VERBOSE:
        return
    label = f"{s} "
    print(f"--- {label:-<{_LABEL_WIDTH}}{'-' * (_DECIMALS + 1)}")


def print_value(s: str, v: float | int, fixed: bool = True) -> None:
    """Print a labelled value, floats in fixed or short scientific notation."""
    if not VERBOSE:
        return
    if isinstance(v, (int, np.integer)) and not isinstance(v, bool):
        text = str(int(v))
    elif fixed:
        text = f"{float(v):.{_DECIMALS}f}"
    else:
        text = f"{float(v):.1e}"
    print(f"{s:<{_LABEL_WIDTH}} : {text}")


def get_memory_usage(a: Matrix, include_structure: bool = True) -> int:
    """Bytes used by the elements of ``a``, optionally with its bookkeeping."""
    if isinstance(a, Dense):
        usage = a.dim[0] * a.dim[1] * _FLOAT_BYTES
        if include_structure:
            usage += _DENSE_STRUCTURE_BYTES
        return usage
    if isinstance(a, LowRank):
        usage = sum(get_memory_usage(f, include_structure) for f in (a.u, a.s, a.v))
        if include_structure:
            usage += _LOW_RANK_STRUCTURE_BYTES - _DENSE_STRUCTURE_BYTES
        return usage
    if isinstance(a, Hierarchical):
        rows, cols = a.dim
        usage = sum(
            get_memory_usage(a[i, j], include_structure) for i in range(rows) for j in range(cols)
        )
        if include_structure:
            usage += rows * cols * _PROXY_BYTES + _HIERARCHICAL_STRUCTURE_BYTES
        return usage
    raise UndefinedOperationError("get_memory_usage", a)