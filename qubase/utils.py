"""Misc utility functions, the error hierarchy and argument checks.
"""
import math
from numbers import Integral, Real

from cytoolz import frequencies, isdistinct


class DimensionError(ValueError):
    """Base error for arguments incompatible with the dimensions involved.
    """


class InvalidDimension(DimensionError):
    """A dimension is non-positive, or not of the required form.
    """


class InvalidIndex(DimensionError):
    """A label or subsystem index is out of range or repeated.
    """


class ShapeMismatch(DimensionError):
    """The shape of an array doesn't fit the requested operation.
    """


_CHECK_OPT_MSG = "Option `{}` should be one of {}, but got '{}'."


def check_opt(name, value, valid):
    """Check whether ``value`` takes one of ``valid`` options, and raise an
    informative error if not.
    """
    if value not in valid:
        raise ValueError(_CHECK_OPT_MSG.format(name, valid, value))


def _isint(x):
    return isinstance(x, Integral) and not isinstance(x, bool)


def check_dim(d, name='dim'):
    """Check that ``d`` is a positive integer dimension, and return it as a
    python ``int``. Integer valued floats such as ``2.0`` are accepted.
    """
    if not (isinstance(d, Real) and math.isfinite(d) and
            int(d) == d and d >= 1):
        raise InvalidDimension(
            f"`{name}` should be a positive integer, got {d!r}.")
    return int(d)


def check_label(val, dim, name='val'):
    """Check that the 1-based basis label ``val`` is an integer in
    ``1..dim``.
    """
    if not _isint(val) or not 1 <= val <= dim:
        raise InvalidIndex(
            f"Label `{name}`={val!r} invalid for dimension {dim}, should be "
            f"an integer in 1..{dim}.")


def check_square_size(d, name='d'):
    """Check that ``d`` is a positive perfect square and return its root.
    """
    d = check_dim(d, name)
    sd = math.isqrt(d)
    if sd * sd != d:
        raise InvalidDimension(
            f"`{name}`={d} is not a perfect square.")
    return sd


def check_systems(systems, n):
    """Check ``systems`` is a permutation of the 1-based labels ``1..n``.
    """
    if len(systems) != n:
        raise InvalidIndex(
            f"Expected {n} system labels, got {len(systems)}: {systems}.")

    bad = [s for s in systems if not _isint(s) or not 1 <= s <= n]
    if bad:
        raise InvalidIndex(
            f"System labels {bad} invalid, should be integers in 1..{n}.")

    if not isdistinct(systems):
        repeated = sorted(s for s, c in frequencies(systems).items() if c > 1)
        raise InvalidIndex(
            f"System labels {repeated} repeated, `systems` should be a "
            f"permutation of 1..{n}.")
