# hmatrix

Dense, low-rank and block-structured matrix types built on numpy, with
randomized compression and a few helpers for running numerical experiments.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Matrix types

All matrix types derive from `hmatrix.dense.Matrix` and have a `shape`
(rows, columns of elements), `copy()` and `to_dense()`.

- `hmatrix.dense.Dense` – a row-major matrix of floats. Create it with
  `Dense(n_rows, n_cols)` (zeros), `Dense.from_array(array)` or
  `Dense.from_kernel(kernel, params, n_rows, n_cols, row_start, col_start)`.
  It supports `a[i, j]` indexing (and `a[i]` for vectors), `+` between dense
  matrices of equal size, `fill(value)`, `copy_to(other, row_start, col_start)`,
  `shallow_copy()` (shares storage), `is_submatrix()`, and cutting into blocks
  with `split(row_ranges, col_ranges, copy)` or
  `split_blocks(n_row_splits, n_col_splits, copy)`. Without `copy`, blocks are
  views that write through to the parent. The raw numpy view is `array`.
- `hmatrix.dense.Empty` – a placeholder of a given size that stores nothing.
- `hmatrix.low_rank.LowRank` – a matrix stored as `u @ s @ v`, with `rank`
  and `eps`. `LowRank.from_dense(a, rank)` compresses a `Dense`: an integer
  gives a fixed-rank randomized SVD; a float is a relative error threshold, for
  which a truncated pivoted QR picks the rank and `s` is the identity.
- `hmatrix.hierarchical.Hierarchical` – a grid of blocks of any matrix type,
  indexed as `h[i, j]` (or `h[i]` when it has a single block row or column).
  Blocks must be assigned before use; `to_dense()` assembles them.

`hmatrix.dense.get_n_rows` and `get_n_cols` work on any of them. Operations
that are not defined for a type raise `hmatrix.dense.UndefinedOperationError`.

## Example

```python
import numpy as np

from hmatrix.dense import Dense
from hmatrix.hierarchical import Hierarchical
from hmatrix.low_rank import LowRank


def kernel(block, params, row_start, col_start):
    x = np.asarray(params[0])
    rows = x[row_start : row_start + block.shape[0]]
    cols = x[col_start : col_start + block.shape[1]]
    block[...] = 1.0 / (1e-3 + np.abs(rows[:, None] - cols[None, :]))


points = [list(np.linspace(0.0, 1.0, 128))]
D = Dense.from_kernel(kernel, points, 64, 64, 0, 64)

A = LowRank.from_dense(D, 8)        # fixed rank 8
B = LowRank.from_dense(D, 1e-8)     # rank chosen for a 1e-8 relative error
error = np.linalg.norm(D.array - A.to_dense().array) / np.linalg.norm(D.array)

blocks = D.split_blocks(2, 2, copy=True)
H = Hierarchical(2, 2)
H[0, 0] = blocks[0]
H[0, 1] = LowRank.from_dense(blocks[1], 4)
H[1, 0] = LowRank.from_dense(blocks[2], 4)
H[1, 1] = blocks[3]
print(H.shape)                      # (64, 64)
```

## Randomized SVD

`hmatrix.randomized.rsvd(a, sample_size)` and `old_rsvd(a, sample_size)`
return `(U, S, V)` as `Dense` matrices with `S` diagonal.

## Reporting

`hmatrix.report` provides:

- `type_name(a)` – `"Dense"`, `"Empty"`, `"LowRank"`, `"Hierarchical"` or `"Matrix"`.
- `to_json(a)` / `write_json(a, filename)` – block structure with positions,
  levels, singular values and ranks.
- `print_matrix(a)`, `print_heading(s)`, `print_value(s, v, fixed)`,
  `print_separation_line()` – console output; setting `report.VERBOSE = False`
  silences all but the separation line.
- `get_memory_usage(a, include_structure)` – estimated bytes used.

## Timing

`hmatrix.timing` keeps a process-wide tree of named timers:

```python
from hmatrix import timing

timing.start("total")
timing.start("step")
timing.stop("step")
timing.stop("total")
timing.print_time("total", 1)
print(timing.get_n_runs("total"), timing.get_total_time("total"))
```

`stop_and_print` combines the two; `clear_timers` resets everything. Setting
`HMATRIX_DISABLE_TIMER` to `"1"`, either with
`hmatrix.config.set_global_value` or in the environment, turns the
module-level timing calls into no-ops. `Timer` can also be used on its own.

## Settings

`hmatrix.config.get_global_value(key)` returns a value stored with
`set_global_value(key, value)`, otherwise the environment variable of that
name, otherwise an empty string.

## Utilities

- `hmatrix.experiment` – `get_sorted_random_vector(n)` (fixed-seed, sorted
  values in [0, 1)), `get_non_negative_vector(n)` and
  `read_geometry_file(filename)` (a point count and dimension followed by
  coordinates, returned as one list per axis).
- `hmatrix.morton` – Morton (Z-order) encoding and decoding, box numbers,
  normalization of point clouds and `sort_by_morton_index(x, level)`, which
  returns the reordered points and the permutation.
- `hmatrix.index_range` – `IndexRange` with `split`, `split_at` and
  `split_like`, and the `SplitAxis` enum.

## What the package does not do

The package holds the matrix types and their construction, but no operations
between them beyond `Dense + Dense`: there is no addition or recompression of
low-rank or block matrices, no scaling, subtraction, transposition, norms or
error measures on general matrices, and no block splitting of low-rank or
block matrices. It does not build block matrices automatically from a kernel
or a cluster tree with an admissibility condition, and it has no
factorizations or solvers (LU, QR, triangular solves). Use numpy on
`to_dense()` results for those.