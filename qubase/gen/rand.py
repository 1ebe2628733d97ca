"""Functions for generating random quantum objects and states.
"""
import numpy as np

from ..core import qarray, dag, nmlz
from ..utils import check_dim


def randn(shape=(), dtype=float, scale=1.0, loc=0.0, seed=None):
    """Generate normally distributed data.

    Parameters
    ----------
    shape : tuple[int]
        The shape of the output random array.
    dtype : {'complex128', 'float64', 'complex64' 'float32'}, optional
        The data-type of the output array. Complex numbers have real and
        imaginary parts each of variance ``scale**2 / 2``.
    scale : float, optional
        The width of the distribution.
    loc : float, optional
        The location of the distribution.
    seed : None or int, optional
        Seed for a fresh :func:`numpy.random.default_rng`.

    Returns
    -------
    numpy.ndarray
    """
    rng = np.random.default_rng(seed)

    if np.issubdtype(dtype, np.floating):
        x = rng.normal(loc, scale, size=shape)
    elif np.issubdtype(dtype, np.complexfloating):
        x = rng.normal(0.0, scale * 2**-0.5, size=shape + (2,))
        x = x[..., 0] + 1j * x[..., 1] + loc
    else:
        raise TypeError(f"dtype {dtype} not understood - should be "
                        "float or complex.")

    return x.astype(dtype)


def rand_matrix(d, scaled=True, dtype=complex, seed=None):
    """Generate a random matrix of order `d` with normally distributed
    entries. If `scaled` is `True`, then in the limit of large `d` the
    eigenvalues will be distributed on the unit complex disk.

    Parameters
    ----------
    d : int
        Matrix dimension.
    scaled : bool, optional
        Whether to scale the matrices values such that its spectrum
        approximately lies on the unit disk.
    dtype : {complex, float}, optional
        The data type of the matrix elements.
    seed : None or int, optional
        Seed for the random number generator.

    Returns
    -------
    mat : qarray
        Random matrix.
    """
    d = check_dim(d, 'd')
    mat = randn((d, d), dtype=dtype, seed=seed)
    if scaled:
        mat /= d**0.5
    return qarray(mat)


def rand_herm(d, dtype=complex, seed=None):
    """Generate a random hermitian operator of order `d` with normally
    distributed entries. In the limit of large `d` the spectrum will be a
    semi-circular distribution between [-1, 1].

    See Also
    --------
    rand_matrix, rand_pos, rand_rho
    """
    herm = rand_matrix(d, scaled=True, dtype=dtype, seed=seed) / 2**1.5
    return herm + dag(herm)


def rand_pos(d, dtype=complex, seed=None):
    """Generate a random positive operator of size `d`, with normally
    distributed entries. In the limit of large `d` the spectrum will lie
    between [0, 1].

    See Also
    --------
    rand_matrix, rand_herm, rand_rho
    """
    pos = rand_matrix(d, scaled=True, dtype=dtype, seed=seed)
    return pos @ dag(pos)


def rand_rho(d, dtype=complex, seed=None):
    """Generate a random positive operator of size `d` with normally
    distributed entries and unit trace.

    See Also
    --------
    rand_matrix, rand_herm, rand_pos
    """
    return nmlz(rand_pos(d, dtype=dtype, seed=seed))


def rand_ket(d, dtype=complex, seed=None):
    """Generates a normalized ket of length `d` with normally distributed
    entries.
    """
    d = check_dim(d, 'd')
    return nmlz(qarray(randn((d, 1), dtype=dtype, seed=seed)))
