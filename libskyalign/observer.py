"""
Observer locations and fixed architectural sight-lines for libskyalign.

Two named sites on the Giza plateau are provided. Each carries a planar
offset (metres East, North, Up from the Khufu base centre) that only the
scene layer uses; the sky math depends on latitude and longitude alone.

Fixed alignment directions are constant horizontal directions tied to a
structure, independent of time:
- King's Chamber south shaft: due South, 45° inclination
- Sphinx sight-line: due East, 15° above the horizon

FIXME: Precision - The shaft azimuth is idealised to due South. Published
horizontal azimuths of the shafts vary and the real shafts are slightly
curved; only the ~45° slope is consistently reported.
"""

from dataclasses import dataclass
from typing import Tuple

from .constants import (
    DEG2RAD,
    DIRECTION_KINGS_SOUTH_SHAFT,
    DIRECTION_SPHINX_SIGHT,
    SITE_KHUFU,
    SITE_SPHINX,
)
from .coordinates import HorizontalDirection
from .utils import clamp


@dataclass(frozen=True)
class ObserverLocation:
    """
    Geographic observer position.

    Attributes:
        latitude_deg: Latitude in degrees, clamped to [-90, 90]
        longitude_deg: Longitude in degrees, east positive
        label: Display name
        offset: Planar scene offset (east, north, up) in metres
    """

    latitude_deg: float
    longitude_deg: float
    label: str = ""
    offset: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self):
        object.__setattr__(self, "latitude_deg", clamp(float(self.latitude_deg), -90.0, 90.0))
        object.__setattr__(self, "longitude_deg", float(self.longitude_deg))

    @property
    def lat_rad(self) -> float:
        return self.latitude_deg * DEG2RAD

    @property
    def lon_rad(self) -> float:
        return self.longitude_deg * DEG2RAD


# Base-centre coordinates as commonly published
SITES = {
    SITE_KHUFU: ObserverLocation(
        latitude_deg=29 + 58 / 60 + 45 / 3600,  # 29°58′45″N
        longitude_deg=31 + 8 / 60 + 3 / 3600,  # 31°08′03″E
        label="Khufu",
        offset=(0.0, 0.0, 0.0),
    ),
    SITE_SPHINX: ObserverLocation(
        latitude_deg=29 + 58 / 60 + 31 / 3600,  # 29°58′31″N, 430 m south of Khufu
        longitude_deg=31 + 8 / 60 + 15 / 3600,  # 31°08′15″E, 320 m east of Khufu
        label="Sphinx",
        offset=(320.0, -430.0, 0.0),
    ),
}

ALIGNMENT_DIRECTIONS = {
    DIRECTION_KINGS_SOUTH_SHAFT: HorizontalDirection.from_degrees(180.0, 45.0),
    DIRECTION_SPHINX_SIGHT: HorizontalDirection.from_degrees(90.0, 15.0),
}

# Sight-line shown for each site
SITE_DIRECTIONS = {
    SITE_KHUFU: DIRECTION_KINGS_SOUTH_SHAFT,
    SITE_SPHINX: DIRECTION_SPHINX_SIGHT,
}


def get_site(key: str) -> ObserverLocation:
    """
    Look up a named observer site.

    Raises:
        ValueError: If ``key`` is not a known site
    """
    if key not in SITES:
        raise ValueError(f"Unknown site: {key}")
    return SITES[key]


def get_alignment_direction(name: str) -> HorizontalDirection:
    """
    Look up a named fixed alignment direction.

    Raises:
        ValueError: If ``name`` is not a known direction
    """
    if name not in ALIGNMENT_DIRECTIONS:
        raise ValueError(f"Unknown alignment direction: {name}")
    return ALIGNMENT_DIRECTIONS[name]


def site_direction(key: str) -> HorizontalDirection:
    """Fixed alignment direction associated with a site."""
    get_site(key)
    return ALIGNMENT_DIRECTIONS[SITE_DIRECTIONS[key]]
