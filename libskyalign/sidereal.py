"""
Sidereal time for libskyalign.

Greenwich Mean Sidereal Time from the IAU 1982 expression as given by
Meeus (eq. 12.4). Good to a fraction of a second near J2000, which is
plenty for placing stars on a visual sky; it is not a UT1-precise clock.

Both functions accept a scalar Julian Day or a numpy array of them.
"""

from .constants import DAYS_PER_JULIAN_CENTURY, DEG2RAD, J2000_JD


def gmst_degrees(jd):
    """
    Greenwich Mean Sidereal Time in degrees, [0, 360).

    Args:
        jd: Julian Day (UT), scalar or ndarray

    Returns:
        GMST in degrees
    """
    d = jd - J2000_JD
    t = d / DAYS_PER_JULIAN_CENTURY
    gmst = (
        280.46061837
        + 360.98564736629 * d
        + 0.000387933 * t * t
        - (t * t * t) / 38710000.0
    )
    return gmst % 360.0


def gmst_radians(jd):
    """Greenwich Mean Sidereal Time in radians, [0, 2π)."""
    return gmst_degrees(jd) * DEG2RAD


def local_sidereal_time(jd, lon_rad):
    """
    Local sidereal time in radians (not reduced).

    Args:
        jd: Julian Day (UT)
        lon_rad: Geographic longitude in radians, east positive
    """
    return gmst_radians(jd) + lon_rad
