"""
Utility functions for libskyalign.

Small vector and angle helpers shared by the precession, coordinate and
catalog modules. Vectors are plain 3-tuples; matrices are 3-tuples of
row 3-tuples so they cannot be mutated in place.
"""

import math
from typing import Tuple

import numpy as np

from .constants import TAU

Vector = Tuple[float, float, float]
Matrix = Tuple[Vector, Vector, Vector]


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp ``x`` into ``[lo, hi]``."""
    return lo if x < lo else hi if x > hi else x


def shortest_angle(a, b):
    """
    Unsigned angular separation between a and b in radians, reduced to [0, π].

    Accepts scalars or numpy arrays.
    """
    diff = np.mod(a - b, TAU)
    return np.minimum(diff, TAU - diff)


def difdeg2n(p1: float, p2: float) -> float:
    """
    Signed distance in degrees p1 - p2 normalized to [-180, 180].

    Examples:
        >>> difdeg2n(10, 20)
        -10.0
        >>> difdeg2n(350, 10)
        -20.0
    """
    diff = (p1 - p2) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def vdot(a: Vector, b: Vector) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vcross(a: Vector, b: Vector) -> Vector:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def vnorm(a: Vector) -> float:
    return math.sqrt(max(vdot(a, a), 0.0))


def vunit(a: Vector) -> Vector:
    """Normalize ``a``; the zero vector stays zero."""
    n = vnorm(a)
    if n == 0:
        return (0.0, 0.0, 0.0)
    return (a[0] / n, a[1] / n, a[2] / n)


def mat_vec(rp: Matrix, v: Vector) -> Vector:
    """Multiply a row-major 3x3 matrix by a column vector."""
    return (
        rp[0][0] * v[0] + rp[0][1] * v[1] + rp[0][2] * v[2],
        rp[1][0] * v[0] + rp[1][1] * v[1] + rp[1][2] * v[2],
        rp[2][0] * v[0] + rp[2][1] * v[1] + rp[2][2] * v[2],
    )


def radec_to_vec(ra: float, dec: float) -> Vector:
    """Unit vector for right ascension / declination in radians."""
    cosd = math.cos(dec)
    return (cosd * math.cos(ra), cosd * math.sin(ra), math.sin(dec))


def vec_to_radec(v: Vector) -> Tuple[float, float]:
    """
    Right ascension [0, 2π) and declination of a vector (any length).

    The zero vector maps to (0, 0).
    """
    r = vnorm(v)
    if r == 0:
        return 0.0, 0.0
    x, y, z = v[0] / r, v[1] / r, v[2] / r
    ra = math.atan2(y, x)
    if ra < 0:
        ra += TAU
    dec = math.asin(clamp(z, -1.0, 1.0))
    return ra, dec


def angle_between(a: Vector, b: Vector) -> float:
    """Angle in radians between two unit vectors."""
    return math.acos(clamp(vdot(a, b), -1.0, 1.0))
