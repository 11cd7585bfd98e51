"""
Long-term precession for libskyalign.

Implements the precession model of Vondrák, Capitaine & Wallace (2011),
including the 2012 erratum, which stays valid for +/-200,000 years around
J2000. Short-term series such as IAU 2006 diverge after a few millennia, so
they cannot be used to look at the sky of the Old Kingdom or earlier.

The model gives two pole vectors in the J2000 mean equatorial frame:
- ltp_pecl(): the ecliptic pole
- ltp_pequ(): the equator pole
and ltp_pmat() builds the rotation from the J2000 mean equator/equinox to
the mean equator/equinox of the epoch.

The coefficient tables are published constants. They are evaluated, never
derived, and must stay exactly as printed.

References:
- Vondrák, J., Capitaine, N. and Wallace, P., 2011, A&A 534, A22
- Vondrák, J., Capitaine, N. and Wallace, P., 2012, A&A 541, C1 (erratum)
"""

import math

from .constants import AS2R, EPS0, TAU
from .utils import Matrix, Vector, vcross, vunit

# Ecliptic pole polynomial: (P, Q) coefficients of T^0..T^3, arcsec
_PQPOL = (
    (+5851.607687, -1600.886300),
    (-0.1189000, +1.1689818),
    (-0.00028913, -0.00000020),
    (+0.000000101, -0.000000437),
)

# Ecliptic pole periodic terms: (period [centuries], Pc, Qc, Ps, Qs), arcsec
_PQPER = (
    (708.15, -5486.751211, -684.661560, 667.666730, -5523.863691),
    (2309.00, -17.127623, 2446.283880, -2354.886252, -549.747450),
    (1620.00, -617.517403, 399.671049, -428.152441, -310.998056),
    (492.20, 413.442940, -356.652376, 376.202861, 421.535876),
    (1183.00, 78.614193, -186.387003, 184.778874, -36.776172),
    (622.00, -180.732815, -316.800070, 335.321713, -145.278396),
    (882.00, -87.676083, 198.296701, -185.138669, -34.744450),  # 2012 erratum
    (547.00, 46.140315, 101.135679, -120.972830, 22.885731),
)

# Equator pole polynomial: (X, Y) coefficients of T^0..T^3, arcsec
_XYPOL = (
    (+5453.282155, -73750.930350),
    (+0.4252841, -0.7675452),
    (-0.00037173, -0.00018725),
    (-0.000000152, +0.000000231),
)

# Equator pole periodic terms: (period [centuries], Xc, Yc, Xs, Ys), arcsec
_XYPER = (
    (256.75, -819.940624, 75004.344875, 81491.287984, 1558.515853),
    (708.15, -8444.676815, 624.033993, 787.163481, 7774.939698),
    (274.20, 2600.009459, 1251.136893, 1251.296102, -2219.534038),
    (241.45, 2755.175630, -1102.212834, -1257.950837, -2523.969396),
    (2309.00, -167.659835, -2660.664980, -2966.799730, 247.850422),
    (492.20, 871.855056, 699.291817, 639.744522, -846.485643),
    (396.10, 44.769698, 153.167220, 131.600209, -1393.124055),
    (288.90, -512.313065, -950.865637, -445.040117, 368.526116),
    (231.10, -819.415595, 499.754645, 584.522874, 749.045012),
    (1610.00, -538.071099, -145.188210, -89.756563, 444.704518),
    (620.00, -189.793622, 558.116553, 524.429630, 235.934465),
    (157.87, -402.922932, -23.923029, -13.549067, 374.049623),
    (220.30, 179.516345, -165.405086, -210.157124, -171.330180),
    (1200.00, -9.814756, 9.344131, -44.919798, -22.899655),
)


def _evaluate_series(epoch: float, periodic, polynomial):
    """Sum periodic and polynomial terms; returns both components in radians."""
    t = (epoch - 2000.0) / 100.0  # centuries since J2000
    u = v = 0.0

    for period, uc, vc, us, vs in periodic:
        a = TAU * t / period
        s, c = math.sin(a), math.cos(a)
        u += c * uc + s * us
        v += c * vc + s * vs

    w = 1.0
    for pu, pv in polynomial:
        u += pu * w
        v += pv * w
        w *= t

    return u * AS2R, v * AS2R


def ltp_pecl(epoch: float) -> Vector:
    """
    Long-term precession of the ecliptic pole.

    Args:
        epoch: Julian epoch (TT), e.g. 2000.0

    Returns:
        Unit vector of the ecliptic pole in the J2000 mean equatorial frame
    """
    p, q = _evaluate_series(epoch, _PQPER, _PQPOL)

    z = math.sqrt(max(1.0 - p * p - q * q, 0.0))
    s = math.sin(EPS0)
    c = math.cos(EPS0)

    return (p, -q * c - z * s, -q * s + z * c)


def ltp_pequ(epoch: float) -> Vector:
    """
    Long-term precession of the equator pole.

    Args:
        epoch: Julian epoch (TT)

    Returns:
        Unit vector of the equator pole in the J2000 mean equatorial frame
    """
    x, y = _evaluate_series(epoch, _XYPER, _XYPOL)

    w = x * x + y * y
    z = math.sqrt(1.0 - w) if w < 1.0 else 0.0
    return (x, y, z)


def ltp_pmat(epoch: float) -> Matrix:
    """
    Long-term precession matrix, J2000 to mean equator/equinox of epoch.

    Args:
        epoch: Julian epoch (TT)

    Returns:
        Row-major 3x3 rotation as a tuple of row tuples. Multiplying a J2000
        unit vector by it gives the mean-of-date unit vector.

    Algorithm:
        1. Equator pole -> third row
        2. Equinox = unit(equator pole x ecliptic pole) -> first row
        3. Second row = equator pole x equinox
    """
    peqr = ltp_pequ(epoch)
    pecl = ltp_pecl(epoch)
    eqx = vunit(vcross(peqr, pecl))
    yrow = vcross(peqr, eqx)
    return (eqx, yrow, peqr)
