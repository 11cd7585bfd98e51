"""
Transit (culmination) search for libskyalign.

Finds, for a calendar year, the day and UTC hour at which a target crosses
the observer's meridian closest to local midnight, so that the transit is
seen in darkness.

The target is precessed once per year (epoch of June 21, 00:00 UTC), then
every day 1..365 is scanned in 0.1 h steps. The first step on a day where
local sidereal time is within 0.02 rad of the target's right ascension of
date counts as that day's transit. The scan is vectorised over the whole
day x hour grid.

Note:
    The scan always covers 365 days, so December 31 of a leap year is never
    examined. The calendar module is leap-aware; this search deliberately
    keeps the fixed count so that results stay comparable year to year.
"""

from typing import Tuple

import numpy as np

from .constants import (
    SNAP_CULMINATION,
    SNAP_DAWN,
    SNAP_SOLSTICE,
    SOLSTICE_DAY_OF_YEAR,
    TRANSIT_DAYS,
    TRANSIT_EPOCH_DAY,
    TRANSIT_EPOCH_MONTH,
    TRANSIT_HOUR_STEP,
    TRANSIT_TOLERANCE_RAD,
)
from .coordinates import precess_radec
from .precession import ltp_pmat
from .sidereal import gmst_radians
from .time_utils import TimeSpecification, julday, julian_epoch, month_day_from_day_of_year
from .utils import shortest_angle

_HOURS = np.arange(int(round(24.0 / TRANSIT_HOUR_STEP))) * TRANSIT_HOUR_STEP


def transit_epoch(year: int) -> float:
    """Julian epoch used to precess a target for ``year``."""
    return julian_epoch(julday(year, TRANSIT_EPOCH_MONTH, TRANSIT_EPOCH_DAY, 0, 0, 0))


def _day_start_jds(year: int) -> np.ndarray:
    jds = []
    for doy in range(1, TRANSIT_DAYS + 1):
        month, day = month_day_from_day_of_year(year, doy)
        jds.append(julday(year, month, day, 0, 0, 0))
    return np.asarray(jds)


def find_best_transit_time(target, year: int, lon_deg: float) -> Tuple[int, float]:
    """
    Day of year and UTC hour of the transit closest to midnight.

    Args:
        target: CelestialTarget (J2000)
        year: Astronomical year
        lon_deg: Observer longitude in degrees, east positive

    Returns:
        tuple: (day_of_year, hour_utc). (1, 0.0) if no transit is detected.

    Note:
        Ties on the distance to midnight go to the earliest day.
    """
    rp = ltp_pmat(transit_epoch(year))
    ra, _ = precess_radec(target.ra_j2000, target.dec_j2000, rp)
    lon = np.radians(lon_deg)

    jd = _day_start_jds(year)[:, None] + _HOURS[None, :] / 24.0
    diff = shortest_angle(gmst_radians(jd) + lon, ra)
    hit = diff < TRANSIT_TOLERANCE_RAD

    has_transit = hit.any(axis=1)
    if not has_transit.any():
        return 1, 0.0

    first = hit.argmax(axis=1)
    hours = _HOURS[first]
    midnight_dist = np.where(has_transit, np.minimum(hours, 24.0 - hours), np.inf)

    best = int(np.argmin(midnight_dist))
    return best + 1, float(hours[best])


def snap_time(year: int, mode: str, target, observer) -> TimeSpecification:
    """
    Preset day and hour for a year.

    Args:
        year: Astronomical year
        mode: "solstice" (day 172, 00:00), "dawn" (day 172, 06:00) or
            "culmination" (best transit of ``target``)
        target: CelestialTarget used by the culmination mode
        observer: ObserverLocation

    Raises:
        ValueError: If ``mode`` is unknown
    """
    if mode == SNAP_SOLSTICE:
        return TimeSpecification.create(year, SOLSTICE_DAY_OF_YEAR, 0.0)
    if mode == SNAP_DAWN:
        return TimeSpecification.create(year, SOLSTICE_DAY_OF_YEAR, 6.0)
    if mode == SNAP_CULMINATION:
        doy, hour = find_best_transit_time(target, year, observer.longitude_deg)
        return TimeSpecification.create(year, doy, hour)
    raise ValueError(f"Unknown snap mode: {mode}")
