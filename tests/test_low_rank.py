import numpy as np
import pytest

from hmatrix.dense import Dense
from hmatrix.experiment import get_sorted_random_vector
from hmatrix.low_rank import LowRank


def laplacend(block, params, row_start, col_start):
    n_rows, n_cols = block.shape
    dist2 = np.zeros((n_rows, n_cols))
    for axis in params:
        x = np.asarray(axis)
        diff = x[row_start : row_start + n_rows, None] - x[None, col_start : col_start + n_cols]
        dist2 += diff * diff
    block[...] = 1.0 / (np.sqrt(dist2) + 1e-3)


def relative_error(a, b):
    diff = np.sum((a.array - b.to_dense().array) ** 2)
    norm = np.sum(a.array ** 2)
    return np.sqrt(diff / (norm + np.finfo(float).eps))


def test_randomized_svd_case():
    n, rank = 2048, 16
    randx = [get_sorted_random_vector(2 * n)]
    a = Dense.from_kernel(laplacend, randx, n, n, 0, n)
    lr = LowRank.from_dense(a, rank)
    assert relative_error(a, lr) < 1e-8


@pytest.mark.parametrize("m,n,rank", [(64, 64, 1), (32, 21, 4), (64, 21, 8), (32, 64, 2)])
def test_fixed_rank_construction(m, n, rank):
    randx = [get_sorted_random_vector(2 * max(m, n))]
    d = Dense.from_kernel(laplacend, randx, m, n, 0, n)
    lr = LowRank.from_dense(d, rank)
    assert lr.rank == rank
    assert lr.dim == (m, n)
    assert lr.u.dim == (m, rank)
    assert lr.s.dim == (rank, rank)
    assert lr.v.dim == (rank, n)
    assert lr.eps == 0.0


def test_exact_low_rank_matrix_is_recovered():
    rng = np.random.default_rng(1)
    product = rng.normal(size=(30, 3)) @ rng.normal(size=(3, 20))
    lr = LowRank.from_dense(Dense.from_array(product), 3)
    np.testing.assert_allclose(lr.to_dense().array, product, atol=1e-10)


@pytest.mark.parametrize("eps", [1e-6, 1e-8, 1e-10, 1e-12])
@pytest.mark.parametrize("m,n", [(64, 64), (32, 32), (64, 32)])
def test_fixed_accuracy_construction(m, n, eps):
    randx = [get_sorted_random_vector(2 * max(m, n))]
    d = Dense.from_kernel(laplacend, randx, m, n, 0, n)
    lr = LowRank.from_dense(d, eps)
    assert lr.eps == eps
    assert abs(relative_error(d, lr) - eps) <= 10 * eps
    np.testing.assert_allclose(lr.s.array, np.eye(lr.rank))


def test_fixed_accuracy_rank_grows_with_accuracy():
    randx = [get_sorted_random_vector(128)]
    d = Dense.from_kernel(laplacend, randx, 64, 64, 0, 64)
    coarse = LowRank.from_dense(d, 1e-4)
    fine = LowRank.from_dense(d, 1e-10)
    assert coarse.rank <= fine.rank


def test_copy_is_independent():
    lr = LowRank(Dense.from_array(np.ones((3, 2))), Dense.from_array(np.eye(2)),
                 Dense.from_array(np.ones((2, 4))))
    twin = lr.copy()
    twin.u[0, 0] = 7.0
    assert lr.u[0, 0] == 1.0
    assert twin.rank == lr.rank


def test_shallow_construction_shares_factors():
    u = Dense.from_array(np.ones((3, 2)))
    lr = LowRank(u, Dense.from_array(np.eye(2)), Dense.from_array(np.ones((2, 4))), copy=False)
    u[1, 1] = 5.0
    assert lr.u[1, 1] == 5.0


def test_deep_construction_copies_factors():
    u = Dense.from_array(np.ones((3, 2)))
    lr = LowRank(u, Dense.from_array(np.eye(2)), Dense.from_array(np.ones((2, 4))))
    u[1, 1] = 5.0
    assert lr.u[1, 1] == 1.0


def test_to_dense_is_product():
    u = np.arange(6.0).reshape(3, 2)
    s = np.diag([2.0, 3.0])
    v = np.arange(8.0).reshape(2, 4)
    lr = LowRank(Dense.from_array(u), Dense.from_array(s), Dense.from_array(v))
    np.testing.assert_allclose(lr.to_dense().array, u @ s @ v)
    assert lr.shape == (3, 4)


def test_mismatched_factors_rejected():
    with pytest.raises(ValueError):
        LowRank(Dense(3, 2), Dense(3, 3), Dense(3, 4))


@pytest.mark.parametrize("rank", [0, 5])
def test_invalid_rank_rejected(rank):
    with pytest.raises(ValueError):
        LowRank.from_dense(Dense(4, 4), rank)


def test_invalid_threshold_rejected():
    with pytest.raises(ValueError):
        LowRank.from_dense(Dense(4, 4), 0.0)