"""
Basic linear algebra building blocks for quantum information.
"""

# Core functions
from .core import (
    prod, qarray, dag, isket, isbra, isop, isvec, isherm, ispos, vdot, outer,
    trace, tr, kron, kronpow, normalize, nmlz, identity, eye, ket, bra,
    ketbra, proj, res, unres, permutesystems, ROW_MAJOR,
)

# Generating objects
from .gen.states import (
    max_mixed, max_entangled, werner_state, bell_state,
)
from .gen.rand import (
    randn, rand_matrix, rand_herm, rand_pos, rand_rho, rand_ket,
)

# Errors
from .utils import (
    DimensionError, InvalidDimension, InvalidIndex, ShapeMismatch,
)

__all__ = [
    # Core ------------------------------------------------------------------ #
    'prod', 'qarray', 'dag', 'isket', 'isbra', 'isop', 'isvec', 'isherm',
    'ispos', 'vdot', 'outer', 'trace', 'tr', 'kron', 'kronpow', 'normalize',
    'nmlz', 'identity', 'eye', 'ket', 'bra', 'ketbra', 'proj', 'res', 'unres',
    'permutesystems', 'ROW_MAJOR',
    # Gen ------------------------------------------------------------------- #
    'max_mixed', 'max_entangled', 'werner_state', 'bell_state', 'randn',
    'rand_matrix', 'rand_herm', 'rand_pos', 'rand_rho', 'rand_ket',
    # Errors ---------------------------------------------------------------- #
    'DimensionError', 'InvalidDimension', 'InvalidIndex', 'ShapeMismatch',
]

from ._version import __version__  # noqa
