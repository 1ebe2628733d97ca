"""
Functions for generating quantum states.
"""

import numpy as np

from ..core import qarray, eye, res, proj
from ..utils import check_dim, check_opt, check_square_size


def max_mixed(d, dtype=complex):
    """Maximally mixed state ``I / d`` of dimension ``d``.

    Parameters
    ----------
    d : int
        Dimension of the space.
    dtype : numpy dtype, optional
        Scalar type of the elements. Integer types give a ``float64``
        result, since the entries are fractions.

    Returns
    -------
    qarray
    """
    d = check_dim(d, 'd')
    return eye(d, dtype=dtype) / d


def max_entangled(d, dtype=complex):
    """Maximally entangled ket ``sum_i |ii> / sqrt(sqrt(d))`` between two
    subsystems of dimension ``sqrt(d)`` each.

    Parameters
    ----------
    d : int
        Total dimension of the ket, must be a perfect square.
    dtype : numpy dtype, optional
        Scalar type of the elements.

    Returns
    -------
    qarray
        Normalized column vector of shape ``(d, 1)``.

    Examples
    --------
    >>> max_entangled(4).ravel()
    qarray([0.707107+0.j, 0.      +0.j, 0.      +0.j, 0.707107+0.j])
    """
    sd = check_square_size(d, 'd')
    return res(eye(sd, dtype=dtype)) / sd**0.5


def werner_state(d, alpha, dtype=complex):
    """Construct a Werner state, i.e. a mixture of the maximally entangled
    state with the maximally mixed state.

    Parameters
    ----------
    d : int
        Total dimension, must be a perfect square.
    alpha : float
        Weight of the maximally entangled state, in ``[0, 1]``.
    dtype : numpy dtype, optional
        Scalar type of the elements.

    Returns
    -------
    qarray
    """
    if not 0 <= alpha <= 1:
        raise ValueError(f"`alpha` should be in [0, 1], got {alpha}.")

    return (alpha * proj(max_entangled(d, dtype=dtype)) +
            (1 - alpha) * max_mixed(d, dtype=dtype))


_BELL_KEYMAP = {"psi-": "psi-", 0: "psi-", "psim": "psi-",
                "psi+": "psi+", 1: "psi+", "psip": "psi+",
                "phi-": "phi-", 2: "phi-", "phim": "phi-",
                "phi+": "phi+", 3: "phi+", "phip": "phi+"}


def bell_state(s, dtype=complex):
    r"""One of the four bell-states.

    If n = 2**-0.5, they are:

        0. ``'psi-'`` : ``n * ( |01> - |10> )``
        1. ``'psi+'`` : ``n * ( |01> + |10> )``
        2. ``'phi-'`` : ``n * ( |00> - |11> )``
        3. ``'phi+'`` : ``n * ( |00> + |11> )``

    They can be enumerated in this order.

    Parameters
    ----------
    s : str or int
        String of number of state corresponding to above.
    dtype : numpy dtype, optional
        Scalar type of the elements.

    Returns
    -------
    qarray
        The bell-state ``s`` as a column vector.
    """
    check_opt('s', s, tuple(_BELL_KEYMAP))
    c = 2.**-.5
    statemap = {"psi-": [0, c, -c, 0],
                "phi+": [c, 0, 0, c],
                "phi-": [c, 0, 0, -c],
                "psi+": [0, c, c, 0]}
    return qarray(np.reshape(statemap[_BELL_KEYMAP[s]], (4, 1)), dtype=dtype)
