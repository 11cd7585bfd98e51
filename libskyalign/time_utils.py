"""
Time conversion utilities for libskyalign.

Implements calendar arithmetic for deep-time sky reconstruction:
- Proleptic Gregorian leap rule extended to negative (astronomical) years
- Day-of-year <-> month/day conversion
- Calendar date <-> Julian Day number (valid for negative Julian Days)
- Julian epoch <-> Julian Day

Years use astronomical numbering: 0 = 1 BCE, -1 = 2 BCE, and so on.
All algorithms follow Meeus "Astronomical Algorithms" (1998), with floor()
in place of truncation so that BCE dates tens of millennia back stay exact.

Calendar fields are clamped rather than rejected; callers feed raw slider
values and always get a usable date back.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .constants import (
    DAYS_PER_JULIAN_YEAR,
    J2000_EPOCH,
    J2000_JD,
    MONTH_LENGTHS,
)
from .utils import clamp


def is_leap_year(year: int) -> bool:
    """
    Proleptic Gregorian leap-year rule.

    Python's ``%`` is already non-negative for a positive modulus, so the
    rule holds unchanged for negative years (``is_leap_year(-4)`` is True).
    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def month_lengths(year: int) -> Tuple[int, ...]:
    """Month lengths for ``year`` with February adjusted for leap years."""
    if is_leap_year(year):
        return (31, 29) + MONTH_LENGTHS[2:]
    return MONTH_LENGTHS


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def month_day_from_day_of_year(year: int, doy: int) -> Tuple[int, int]:
    """
    Convert a day of year to (month, day).

    Args:
        year: Astronomical year
        doy: Day of year, 1-based. Out-of-range values are clamped into the
            year (0 -> Jan 1, 400 -> Dec 31).

    Returns:
        tuple: (month, day)
    """
    ml = month_lengths(year)
    month = 1
    day = int(doy)
    for length in ml:
        if day > length and month < 12:
            day -= length
            month += 1
        else:
            break
    day = int(clamp(day, 1, ml[month - 1]))
    return month, day


def day_of_year_from_month_day(year: int, month: int, day: int) -> int:
    """Inverse of :func:`month_day_from_day_of_year`."""
    ml = month_lengths(year)
    month = int(clamp(month, 1, 12))
    day = int(clamp(day, 1, ml[month - 1]))
    return sum(ml[: month - 1]) + day


def split_hour(hour: float) -> Tuple[int, int]:
    """
    Split a decimal UTC hour into (hour, minute) with the minute rounded.

    The minute can round up to 60; :func:`julday` treats that as the next
    hour, so no carry is needed here.
    """
    hh = math.floor(hour)
    mm = int(math.floor((hour - hh) * 60.0 + 0.5))
    return hh, mm


def julday(
    year: int,
    month: int,
    day: int,
    hour: float = 0.0,
    minute: float = 0.0,
    second: float = 0.0,
) -> float:
    """
    Convert a proleptic Gregorian calendar date to a Julian Day number.

    Args:
        year: Astronomical year (0 = 1 BCE, negative = earlier)
        month: Month (1-12)
        day: Day of month (1-31)
        hour: Hour (may be fractional)
        minute: Minute (may be fractional)
        second: Second

    Returns:
        float: Julian Day number

    Note:
        JD 2451545.0 = Jan 1, 2000 12:00 (J2000.0 epoch). Julian Days become
        negative before 4713 BCE (astronomical year -4712); floor() keeps the
        count exact there.
    """
    if month <= 2:
        year -= 1
        month += 12

    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    day_fraction = (hour + (minute + second / 60.0) / 60.0) / 24.0

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + b
        - 1524.5
        + day_fraction
    )


def revjul(jd: float) -> Tuple[int, int, int, float]:
    """
    Convert a Julian Day number to a proleptic Gregorian calendar date.

    Args:
        jd: Julian Day number (may be negative)

    Returns:
        tuple: (year, month, day, hour) where hour is decimal (0.0-23.999...)
    """
    jd = jd + 0.5
    z = math.floor(jd)
    f = jd - z

    alpha = math.floor((z - 1867216.25) / 36524.25)
    a = z + 1 + alpha - math.floor(alpha / 4)

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    return int(year), int(month), int(day), f * 24.0


def julian_epoch(jd: float) -> float:
    """Julian epoch (fractional Julian years) for a Julian Day."""
    return J2000_EPOCH + (jd - J2000_JD) / DAYS_PER_JULIAN_YEAR


def jd_from_epoch(epoch: float) -> float:
    """Julian Day for a Julian epoch."""
    return J2000_JD + (epoch - J2000_EPOCH) * DAYS_PER_JULIAN_YEAR


@dataclass(frozen=True)
class TimeSpecification:
    """
    A point in calendar history chosen by the caller.

    Attributes:
        year: Astronomical year (0 = 1 BCE)
        day_of_year: Day of year, 1-based
        hour_utc: Decimal UTC hour in [0, 24)

    Use :meth:`create` to build one from unchecked input.
    """

    year: int
    day_of_year: int
    hour_utc: float

    @classmethod
    def create(cls, year: int, day_of_year: int, hour_utc: float) -> "TimeSpecification":
        year = int(round(year))
        doy = int(clamp(int(round(day_of_year)), 1, days_in_year(year)))
        hour = float(clamp(hour_utc, 0.0, 24.0))
        if hour >= 24.0:
            hour = math.nextafter(24.0, 0.0)
        return cls(year=year, day_of_year=doy, hour_utc=hour)

    @classmethod
    def from_calendar(
        cls, year: int, month: int, day: int, hour_utc: float = 0.0
    ) -> "TimeSpecification":
        return cls.create(year, day_of_year_from_month_day(year, month, day), hour_utc)

    @property
    def month_day(self) -> Tuple[int, int]:
        return month_day_from_day_of_year(self.year, self.day_of_year)

    @property
    def julian_date(self) -> float:
        month, day = self.month_day
        hh, mm = split_hour(self.hour_utc)
        return julday(self.year, month, day, hh, mm, 0)

    @property
    def julian_epoch(self) -> float:
        # TT is taken as UT; Delta T is meaningless tens of millennia back
        return julian_epoch(self.julian_date)


def time_specification_now() -> TimeSpecification:
    """Sample the current UTC instant from the skyfield timescale."""
    from .state import get_timescale

    utc = get_timescale().now().utc
    hour = utc.hour + (utc.minute + utc.second / 60.0) / 60.0
    return TimeSpecification.from_calendar(utc.year, utc.month, utc.day, hour)
