"""
Historical chronology helpers for libskyalign.

Labels astronomical years for display, maps a year to its Egyptian period,
and snaps free-form years to the timeline's coarse increments.

Dates use astronomical year numbering (negative = BCE, 0 = 1 BCE). Period
boundaries follow the conventional chronology (Shaw, Oxford History of
Ancient Egypt); they carry uncertainties of decades in the Old Kingdom.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .constants import YEAR_SNAP_INCREMENT


@dataclass(frozen=True)
class Dynasty:
    name: str
    start: int  # inclusive
    end: int  # exclusive


DYNASTIES = (
    Dynasty("Predynastic", -5000, -3150),
    Dynasty("Early Dynastic", -3150, -2686),
    Dynasty("Old Kingdom", -2686, -2181),
    Dynasty("1st Intermediate", -2181, -2055),
    Dynasty("Middle Kingdom", -2055, -1650),
    Dynasty("2nd Intermediate", -1650, -1550),
    Dynasty("New Kingdom", -1550, -1069),
    Dynasty("3rd Intermediate", -1069, -664),
    Dynasty("Late Period", -664, -332),
    Dynasty("Ptolemaic", -332, -30),
)


def astro_year_label(year: int) -> str:
    """
    Human-readable label for an astronomical year.

    Examples:
        >>> astro_year_label(2024)
        '2024 CE'
        >>> astro_year_label(0)
        '1 BCE'
        >>> astro_year_label(-2560)
        '2561 BCE'
    """
    if year > 0:
        return f"{year} CE"
    return f"{1 - year} BCE"


def dynasty_for_year(year: int) -> Optional[Dynasty]:
    """Period containing ``year``, or None outside the table."""
    for dynasty in DYNASTIES:
        if dynasty.start <= year < dynasty.end:
            return dynasty
    return None


def snap_year(year: float, increment: int = YEAR_SNAP_INCREMENT) -> int:
    """Round ``year`` to the nearest multiple of ``increment`` (halves round up)."""
    return int(math.floor(year / increment + 0.5)) * increment
