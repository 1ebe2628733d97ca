"""Core functions for constructing and manipulating dense quantum objects.
"""

import os
import operator
import functools

import numpy as np
from numexpr import evaluate

from .utils import (
    ShapeMismatch,
    check_opt,
    check_dim,
    check_label,
    check_square_size,
    check_systems,
)


# --------------------------------------------------------------------------- #
#                                Configuration                                #
# --------------------------------------------------------------------------- #

_NUMBA_CACHE_OPT = os.environ.get('QUBASE_NUMBA_CACHE', 'True')
check_opt('QUBASE_NUMBA_CACHE', _NUMBA_CACHE_OPT, ('True', 'False'))
_NUMBA_CACHE = _NUMBA_CACHE_OPT == 'True'

import numba as nb  # noqa

njit = functools.partial(nb.njit, cache=_NUMBA_CACHE)
"""Numba no-python jit, but obeying cache setting."""

ROW_MAJOR = 'C'
"""Memory order used for every flattening and tensor-leg view: the first
index (or first subsystem) is the slowest varying, so ``rho[i, j]`` sits at
position ``i * ncols + j`` of ``res(rho)`` and subsystem 1 is the most
significant digit of a composite basis index.
"""

_NUMEXPR_MIN_SIZE = 23000


def prod(xs):
    """Product (as in multiplication) of an iterable.
    """
    return functools.reduce(operator.mul, xs, 1)


class qarray(np.ndarray):
    """Thin subclass of :class:`numpy.ndarray` with some convenient quantum
    linear algebra related methods and attributes (``.H``, ``&``, etc.), and
    matrix-like preservation of at least 2-dimensions so as to distiguish
    kets and bras.
    """

    def __new__(cls, data, dtype=None, order=None):
        return np.asarray(data, dtype=dtype, order=order).view(cls)

    @property
    def H(self):
        if issubclass(self.dtype.type, np.complexfloating):
            return self.conjugate().transpose()
        else:
            return self.transpose()

    @property
    def A(self):
        return np.asarray(self)

    def __and__(self, other):
        # numpy relies on elementwise `&` for boolean masks, e.g. in isclose
        if self.dtype == bool or np.asarray(other).dtype == bool:
            return np.logical_and(self.A, np.asarray(other))
        return kron_dispatch(self, other)

    def normalize(self, inplace=True):
        return normalize(self, inplace=inplace)

    def nmlz(self, inplace=True):
        return normalize(self, inplace=inplace)

    def tr(self):
        return _trace_dense(np.ascontiguousarray(self))

    def __str__(self):
        with np.printoptions(precision=6, linewidth=120):
            return super().__str__()

    def __repr__(self):
        with np.printoptions(precision=6, linewidth=120):
            return super().__repr__()


# --------------------------------------------------------------------------- #
# Decorators for standardizing output                                         #
# --------------------------------------------------------------------------- #

def ensure_qarray(fn):
    """Decorator that wraps output as a ``qarray``.
    """

    @functools.wraps(fn)
    def qarray_fn(*args, **kwargs):
        out = fn(*args, **kwargs)
        if not isinstance(out, qarray):
            return qarray(out)
        return out

    return qarray_fn


def realify_scalar(x, imag_tol=1e-12):
    try:
        return x.real if abs(x.imag) < abs(x.real) * imag_tol else x
    except AttributeError:
        return x


def realify(fn, imag_tol=1e-12):
    """Decorator that drops ``fn``'s output imaginary part if very small.
    """
    @functools.wraps(fn)
    def realified_fn(*args, **kwargs):
        return realify_scalar(fn(*args, **kwargs), imag_tol=imag_tol)

    return realified_fn


def upcast(fn):
    """Decorator to make sure the types of two numpy arguments match.
    """
    def upcasted_fn(a, b):
        if a.dtype == b.dtype:
            return fn(a, b)
        else:
            common = np.result_type(a, b)
            return fn(a.astype(common), b.astype(common))

    return upcasted_fn


# --------------------------------------------------------------------------- #
# Type and shape checks                                                       #
# --------------------------------------------------------------------------- #

def dag(qob):
    """Conjugate transpose.
    """
    try:
        return qob.H
    except AttributeError:
        return qob.conj().T


def isket(qob):
    """Checks if ``qob`` is in ket form -- an array column.
    """
    return qob.shape[0] > 1 and qob.shape[1] == 1  # Column vector check


def isbra(qob):
    """Checks if ``qob`` is in bra form -- an array row.
    """
    return qob.shape[0] == 1 and qob.shape[1] > 1  # Row vector check


def isop(qob):
    """Checks if ``qob`` is an operator.
    """
    s = qob.shape
    return len(s) == 2 and (s[0] > 1) and (s[1] > 1)


def isvec(qob):
    """Checks if ``qob`` is row-vector, column-vector or one-dimensional.
    """
    shp = qob.shape
    return len(shp) == 1 or (len(shp) == 2 and (shp[0] == 1 or shp[1] == 1))


def isherm(qob, **allclose_opts):
    """Checks if ``qob`` is hermitian.

    Parameters
    ----------
    qob : dense operator
        Matrix to check.

    Returns
    -------
    bool
    """
    qob = np.asarray(qob)
    return np.allclose(qob, dag(qob), **allclose_opts)


def ispos(qob, tol=1e-15):
    """Checks if the dense hermitian ``qob`` is approximately positive
    semi-definite, using the cholesky decomposition.

    Parameters
    ----------
    qob : dense operator
        Matrix to check.

    Returns
    -------
    bool
    """
    try:
        np.linalg.cholesky(np.asarray(qob) + tol * np.eye(qob.shape[0]))
        return True
    except np.linalg.LinAlgError:
        return False


# --------------------------------------------------------------------------- #
# Core accelerated numeric functions                                          #
# --------------------------------------------------------------------------- #

@ensure_qarray
@upcast
@njit
def mul_dense(x, y):  # pragma: no cover
    """Numba-accelerated element-wise multiplication of two dense matrices.
    """
    return x * y


@realify
def vdot(a, b):
    """Accelerated 'Hermitian' inner product of two arrays. In other words,
    ``b`` here will be conjugated by the function.
    """
    return np.vdot(a.ravel(), b.ravel())


@njit
def reshape_for_outer(a, b):  # pragma: no cover
    """Reshape two vectors for an outer product.
    """
    d = a.size
    return d, a.reshape((d, 1)), b.reshape((1, b.size))


def outer(a, b):
    """Outer product between two vectors (no conjugation).
    """
    a, b = np.ascontiguousarray(a), np.ascontiguousarray(b)
    d, a, b = reshape_for_outer(a, b)
    return mul_dense(a, b) if d < 500 else qarray(evaluate('a * b'))


@realify
@njit
def _trace_dense(op):  # pragma: no cover
    """Trace of a dense operator.
    """
    x = 0.0
    for i in range(op.shape[0]):
        x += op[i, i]
    return x


def trace(mat):
    """Trace of a dense operator.

    Parameters
    ----------
    mat : operator
        Square matrix.

    Returns
    -------
    x : float or complex
        Trace of ``mat``, real if the imaginary part is negligible.
    """
    mat = np.asarray(mat)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise ShapeMismatch(
            f"Can only take the trace of a square matrix, got {mat.shape}.")
    return _trace_dense(np.ascontiguousarray(mat))


tr = trace
"""Alias for :func:`trace`."""


# --------------------------------------------------------------------------- #
# Kronecker (tensor) product                                                  #
# --------------------------------------------------------------------------- #

@njit
def reshape_for_kron(a, b):  # pragma: no cover
    """Reshape two arrays for a 'broadcast' tensor (kronecker) product.

    Returns the expected new dimensions as well.
    """
    m, n = a.shape
    p, q = b.shape
    a = a.reshape((m, 1, n, 1))
    b = b.reshape((1, p, 1, q))
    return a, b, m * p, n * q


@ensure_qarray
@upcast
@njit
def kron_dense(a, b):  # pragma: no cover
    """Tensor (kronecker) product of two dense arrays.
    """
    a, b, mp, nq = reshape_for_kron(a, b)
    return (a * b).reshape((mp, nq))


@ensure_qarray
def kron_dense_big(a, b):
    """Parallelized (using numexpr) tensor (kronecker) product for two
    dense arrays.
    """
    a, b, mp, nq = reshape_for_kron(a, b)
    return evaluate('a * b').reshape((mp, nq))


def kron_dispatch(a, b):
    """Kronecker product of two arrays, dispatched based on size of product.
    """
    a, b = np.ascontiguousarray(a), np.ascontiguousarray(b)
    if a.ndim != 2 or b.ndim != 2:
        raise ShapeMismatch("Kronecker product needs two-dimensional arrays, "
                            f"got shapes {a.shape} and {b.shape}.")
    if a.size * b.size > _NUMEXPR_MIN_SIZE:
        return kron_dense_big(a, b)
    return kron_dense(a, b)


def kron(*ops):
    """Tensor (kronecker) product of variable number of arguments.

    Parameters
    ----------
    ops : sequence of vectors or matrices
        Objects to be tensored together, each two-dimensional.

    Returns
    -------
    X : qarray
        Tensor product of ``ops``, with ``ops[0]`` the most significant
        subsystem.

    Examples
    --------
    >>> a = np.array([[1, 2], [3, 4]])
    >>> b = np.array([[1., 1.1], [1.11, 1.111]])
    >>> kron(a, b)
    qarray([[1.   , 1.1  , 2.   , 2.2  ],
            [1.11 , 1.111, 2.22 , 2.222],
            [3.   , 3.3  , 4.   , 4.4  ],
            [3.33 , 3.333, 4.44 , 4.444]])
    """
    return functools.reduce(kron_dispatch, ops)


def kronpow(a, p):
    """Returns `a` tensored with itself `p` times

    Equivalent to ``reduce(lambda x, y: x & y, [a] * p)``.
    """
    return kron(*(a,) * p)


# --------------------------------------------------------------------------- #
#                                Core Functions                               #
# --------------------------------------------------------------------------- #

def normalize(qob, inplace=True):
    """Normalize a quantum object.

    Parameters
    ----------
    qob : dense vector or operator
        Quantum object to normalize. Operators are scaled to unit trace,
        vectors to unit norm.
    inplace : bool, optional
        Whether to act inplace on the given object.

    Returns
    -------
    dense vector or operator
        Normalized quantum object.
    """
    if not inplace:
        qob = qob.copy()

    if isop(qob):
        n_factor = trace(qob)
    else:
        n_factor = vdot(qob, qob)**0.5

    qob[:] /= n_factor
    return qob


nmlz = normalize
"""Alias for :func:`normalize`."""


@ensure_qarray
def identity(d, dtype=complex):
    """Return the identity operator of dimension ``d``.

    Parameters
    ----------
    d : int
        Dimension of identity.
    dtype : numpy dtype, optional
        Scalar type of the elements.

    Returns
    -------
    qarray
    """
    d = check_dim(d, 'd')
    return np.eye(d, dtype=dtype)


eye = identity
"""Alias for :func:`identity`."""


def ket(val, dim, dtype=complex):
    """Basis column vector ``|val>`` with a single unit entry.

    Parameters
    ----------
    val : int
        Label of the non-zero entry, counting from 1.
    dim : int
        Length of the vector.
    dtype : numpy dtype, optional
        Scalar type of the elements.

    Returns
    -------
    qarray
        Column vector of shape ``(dim, 1)``.

    Examples
    --------
    >>> ket(2, 3)
    qarray([[0.+0.j],
            [1.+0.j],
            [0.+0.j]])
    """
    dim = check_dim(dim)
    check_label(val, dim)
    x = np.zeros((dim, 1), dtype=dtype)
    x[val - 1, 0] = 1
    return qarray(x)


def bra(val, dim, dtype=complex):
    """Basis row vector ``<val|``, the conjugate transpose of
    ``ket(val, dim)``.
    """
    return qarray(np.ascontiguousarray(ket(val, dim, dtype=dtype).H))


def ketbra(valk, valb, dim, dtype=complex):
    """Outer product ``|valk><valb|`` of two basis vectors.

    Parameters
    ----------
    valk : int
        Label of the ket, counting from 1.
    valb : int
        Label of the bra, counting from 1.
    dim : int
        Dimension of the space.
    dtype : numpy dtype, optional
        Scalar type of the elements.

    Returns
    -------
    qarray
        Operator of shape ``(dim, dim)``.
    """
    dim = check_dim(dim)
    check_label(valk, dim, 'valk')
    check_label(valb, dim, 'valb')
    x = np.zeros((dim, dim), dtype=dtype)
    x[valk - 1, valb - 1] = 1
    return qarray(x)


def proj(psi):
    """Projector ``|psi><psi|`` onto (unnormalized) vector ``psi``.

    ``psi`` can be one-dimensional, a row or a column, and is always taken
    as a ket.
    """
    psi = np.asarray(psi)
    if not isvec(psi):
        raise ShapeMismatch(
            f"Can only form the projector of a vector, got shape {psi.shape}.")
    return outer(psi, psi.conj())


# --------------------------------------------------------------------------- #
# Vectorization                                                               #
# --------------------------------------------------------------------------- #

def res(rho):
    """Reshape a matrix into a column vector, row by row.

    Parameters
    ----------
    rho : matrix-like
        Matrix of shape ``(m, n)``.

    Returns
    -------
    qarray
        Column vector of shape ``(m * n, 1)`` with ``rho[i, j]`` at position
        ``i * n + j``.

    See Also
    --------
    unres

    Examples
    --------
    >>> res([[1, 2], [3, 4]])
    qarray([[1],
            [2],
            [3],
            [4]])
    """
    rho = np.asarray(rho)
    if rho.ndim != 2:
        raise ShapeMismatch(
            f"Can only vectorize a matrix, got shape {rho.shape}.")
    return qarray(rho.reshape((rho.size, 1), order=ROW_MAJOR).copy())


def unres(phi, cols=None):
    """Reshape a vector back into a matrix, filling it row by row, the
    inverse of :func:`res`.

    Parameters
    ----------
    phi : vector-like
        One-dimensional, row or column vector of length ``d``.
    cols : int, optional
        Number of columns of the output, must divide ``d``. If not given
        the output is taken to be square, which requires ``d`` to be a
        perfect square.

    Returns
    -------
    qarray
        Matrix of shape ``(d // cols, cols)``.

    Raises
    ------
    InvalidDimension
        If ``cols`` is not positive, or is not given and ``d`` is not a
        perfect square.
    ShapeMismatch
        If ``phi`` isn't a vector, or ``cols`` doesn't divide its length.
    """
    phi = np.asarray(phi)
    if not isvec(phi):
        raise ShapeMismatch(
            f"Can only de-vectorize a vector, got shape {phi.shape}.")

    d = phi.size
    if cols is None:
        cols = check_square_size(d, 'len(phi)')
    else:
        cols = check_dim(cols, 'cols')
        if d % cols:
            raise ShapeMismatch(
                f"Wrong number of columns: {cols} doesn't divide the vector "
                f"length {d}.")

    return qarray(phi.reshape((d // cols, cols), order=ROW_MAJOR).copy())


# --------------------------------------------------------------------------- #
# Subsystem permutation                                                       #
# --------------------------------------------------------------------------- #

def subsystem_tensor(p, dims):
    """View the operator ``p`` as a tensor with a 'ket' leg for each
    subsystem followed by a 'bra' leg for each subsystem, so that the
    shape is ``(*dims, *dims)``.

    Uses the :data:`ROW_MAJOR` convention, subsystem ``dims[0]`` being the
    slowest varying factor of both the row and column indices.
    """
    return np.reshape(p, (*dims, *dims), order=ROW_MAJOR)


def permutesystems(rho, dims, systems):
    """Permute the subsystems of an operator.

    Parameters
    ----------
    rho : operator
        Square matrix acting on the composite space ``dims``.
    dims : sequence of int
        Dimensions of the subsystems, ``prod(dims)`` must match the size of
        ``rho``.
    systems : sequence of int
        New order of the subsystems, labelled from 1, such that the
        subsystem originally at position ``systems[k]`` ends up at position
        ``k``. Must be a permutation of ``1..len(dims)``.

    Returns
    -------
    qarray
        Operator with its subsystems reordered. Row and column indices are
        permuted identically.

    Raises
    ------
    ShapeMismatch
        If ``rho`` is not square, or its size doesn't match ``dims``.
    InvalidDimension
        If any of ``dims`` is not a positive integer.
    InvalidIndex
        If ``systems`` is not a permutation of ``1..len(dims)``.

    Examples
    --------
    Move the Pauli X on the second qubit to the first:

    >>> x = np.array([[0, 1], [1, 0]])
    >>> ix = kron(eye(2), x)
    >>> np.allclose(permutesystems(ix, [2, 2], [2, 1]), kron(x, eye(2)))
    True
    """
    rho = np.asarray(rho)
    if rho.ndim != 2 or rho.shape[0] != rho.shape[1]:
        raise ShapeMismatch(
            f"Can only permute the subsystems of a square matrix, got shape "
            f"{rho.shape}.")

    dims = [check_dim(x, 'dims') for x in dims]

    d = rho.shape[0]
    if prod(dims) != d:
        raise ShapeMismatch(
            f"Product of dimensions {tuple(dims)} does not match the size of "
            f"the matrix, {d}.")

    n = len(dims)
    check_systems(systems, n)

    # same permutation for the ket legs and the bra legs
    perm = [int(s) - 1 for s in systems]
    axes = [*perm, *(p + n for p in perm)]

    out = (subsystem_tensor(rho, dims)
           .transpose(axes)
           .reshape((d, d), order=ROW_MAJOR))

    if np.may_share_memory(out, rho):
        out = out.copy()

    return qarray(out)

