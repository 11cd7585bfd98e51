"""
Approximate Sun position and civil dawn for libskyalign.

Low-precision solar ephemeris (mean longitude plus a two-term equation of
centre, mean obliquity with a small linear drift) good to a fraction of a
degree near the present. It drives the "dawn" time control only and is no
substitute for a real ephemeris.

Civil dawn is the rising crossing of the Sun's centre through -6° altitude.

FIXME: Precision - The mean elements are referenced to J2000 and drift for
dates many millennia away. The crossing found is still self-consistent with
the model, which is all the time control needs.
"""

import logging
import math
from typing import Tuple

from .constants import (
    CIVIL_DAWN_ALTITUDE_DEG,
    DAWN_BISECTION_ITERATIONS,
    DAWN_SCAN_STEP_MINUTES,
    DEG2RAD,
    J2000_JD,
    TAU,
)
from .coordinates import equatorial_to_horizontal
from .time_utils import julday, month_day_from_day_of_year

logger = logging.getLogger(__name__)


def sun_ra_dec_approx(jd: float) -> Tuple[float, float]:
    """
    Approximate apparent right ascension and declination of the Sun.

    Args:
        jd: Julian Day (UT)

    Returns:
        tuple: (ra, dec) in radians, ra in [0, 2π)

    Formula:
        L = 280.460° + 0.9856474° n        (mean longitude)
        g = 357.528° + 0.9856003° n        (mean anomaly)
        λ = L + 1.915° sin g + 0.020° sin 2g
        ε = 23.439° - 0.0000004° n
        where n = days since J2000.0
    """
    n = jd - J2000_JD
    mean_lon = ((280.460 + 0.9856474 * n) % 360.0) * DEG2RAD
    g = ((357.528 + 0.9856003 * n) % 360.0) * DEG2RAD
    lam = mean_lon + 1.915 * DEG2RAD * math.sin(g) + 0.020 * DEG2RAD * math.sin(2 * g)
    eps = (23.439 - 0.0000004 * n) * DEG2RAD

    sin_lam, cos_lam = math.sin(lam), math.cos(lam)
    ra = math.atan2(math.cos(eps) * sin_lam, cos_lam)
    dec = math.asin(math.sin(eps) * sin_lam)

    if ra < 0:
        ra += TAU
    return ra, dec


def sun_altitude(jd: float, lat: float, lon: float) -> float:
    """Approximate altitude of the Sun's centre in radians (no refraction)."""
    ra, dec = sun_ra_dec_approx(jd)
    return equatorial_to_horizontal(ra, dec, jd, lat, lon).altitude


def find_civil_dawn_hour(year: int, doy: int, lat_deg: float, lon_deg: float) -> float:
    """
    UTC hour at which civil dawn begins.

    Args:
        year: Astronomical year
        doy: Day of year (clamped into the year)
        lat_deg: Observer latitude in degrees
        lon_deg: Observer longitude in degrees, east positive

    Returns:
        float: Decimal UTC hour in [0, 24)

    Algorithm:
        1. Scan the UTC day in 5-minute steps
        2. At the first rising crossing of -6° (previous step below, this
           step at or above) bisect the bracket 28 times
        3. Without a crossing (polar day or night), return the scanned time
           whose altitude came closest to -6°
    """
    month, day = month_day_from_day_of_year(year, doy)
    jd0 = julday(year, month, day, 0, 0, 0)
    lat = lat_deg * DEG2RAD
    lon = lon_deg * DEG2RAD
    target = CIVIL_DAWN_ALTITUDE_DEG * DEG2RAD

    def altitude_at(hour: float) -> float:
        return sun_altitude(jd0 + hour / 24.0, lat, lon)

    best_t = 6.0
    best_err = math.inf
    prev_t = prev_alt = None

    steps = 24 * 60 // DAWN_SCAN_STEP_MINUTES
    for i in range(steps + 1):
        t = i * DAWN_SCAN_STEP_MINUTES / 60.0
        alt = altitude_at(t)

        err = abs(alt - target)
        if err < best_err and t < 24.0:
            best_err, best_t = err, t

        if prev_alt is not None and prev_alt < target <= alt:
            a, b = prev_t, t
            for _ in range(DAWN_BISECTION_ITERATIONS):
                mid = (a + b) / 2.0
                if altitude_at(mid) < target:
                    a = mid
                else:
                    b = mid
            return (a + b) / 2.0

        prev_t, prev_alt = t, alt

    logger.debug(
        "No civil dawn crossing on %d/%03d at lat %.3f; closest approach at %.3f h",
        year,
        doy,
        lat_deg,
        best_t,
    )
    return best_t
