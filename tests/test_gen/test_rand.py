import pytest
from numpy.testing import assert_allclose, assert_array_equal
import numpy as np

import qubase as qb


dtypes = [np.float32, np.float64, np.complex128, np.complex64]


class TestRandn:

    @pytest.mark.parametrize(
        'dtype', dtypes + [float, complex, 'f8', 'f4', 'c8', 'c16'])
    def test_basic(self, dtype):
        x = qb.randn((2, 3, 4), dtype=dtype)
        assert x.shape == (2, 3, 4)
        assert x.dtype == np.dtype(dtype)

    def test_can_seed(self):
        assert_array_equal(qb.randn((5,), seed=42), qb.randn((5,), seed=42))
        assert not np.allclose(qb.randn((5,), seed=42),
                               qb.randn((5,), seed=43))

    def test_scale_and_loc(self):
        x = qb.randn((1000,), scale=100, loc=50, dtype=float, seed=42)
        assert_allclose(np.mean(x), 50, rtol=1, atol=10)
        assert_allclose(np.std(x), 100, rtol=0.1)

    def test_complex_variance(self):
        x = qb.randn((10000,), dtype=complex, seed=7)
        assert_allclose(np.mean(np.abs(x)**2), 1.0, rtol=0.05)

    def test_bad_dtype(self):
        with pytest.raises(TypeError):
            qb.randn((2,), dtype=int)


class TestRandMatrix:
    @pytest.mark.parametrize('dtype', dtypes)
    def test_rand_matrix(self, dtype):
        a = qb.rand_matrix(3, dtype=dtype)
        assert a.shape == (3, 3)
        assert type(a) == qb.qarray
        assert a.dtype == dtype

    def test_seed(self):
        assert_array_equal(qb.rand_matrix(3, seed=1),
                           qb.rand_matrix(3, seed=1))

    def test_bad_dim(self):
        with pytest.raises(qb.InvalidDimension):
            qb.rand_matrix(0)


class TestRandHerm:
    @pytest.mark.parametrize('dtype', dtypes)
    def test_rand_herm(self, dtype):
        a = qb.rand_herm(3, dtype=dtype)
        assert a.shape == (3, 3)
        assert type(a) == qb.qarray
        assert a.dtype == dtype
        assert_allclose(a, a.H)
        evals = np.linalg.eigvalsh(a)
        assert_allclose(evals.imag, [0, 0, 0], atol=1e-7)


class TestRandPos:
    @pytest.mark.parametrize('dtype', dtypes)
    def test_rand_pos(self, dtype):
        a = qb.rand_pos(3, dtype=dtype)
        assert qb.ispos(a.astype(complex))
        assert a.shape == (3, 3)
        assert type(a) == qb.qarray
        assert a.dtype == dtype


class TestRandRho:
    @pytest.mark.parametrize('dtype', dtypes)
    def test_rand_rho(self, dtype):
        rho = qb.rand_rho(3, dtype=dtype)
        assert rho.shape == (3, 3)
        assert type(rho) == qb.qarray
        assert rho.dtype == dtype
        assert_allclose(qb.tr(rho), 1.0, rtol=1e-5)
        assert qb.isherm(rho, atol=1e-6)


class TestRandKet:
    @pytest.mark.parametrize('dtype', dtypes)
    def test_rand_ket(self, dtype):
        k = qb.rand_ket(5, dtype=dtype)
        assert k.shape == (5, 1)
        assert type(k) == qb.qarray
        assert k.dtype == dtype
        assert_allclose(qb.vdot(k, k), 1.0, rtol=1e-5)

    def test_seed(self):
        assert_array_equal(qb.rand_ket(4, seed=3), qb.rand_ket(4, seed=3))
