"""
Equatorial to horizontal coordinate transformation for libskyalign.

Maps an equatorial (RA, Dec) direction to the observer's local
East/North/Up frame. Azimuth is measured from North toward East.

Functions:
- equatorial_to_horizontal(): RA/Dec of date -> HorizontalDirection
- equatorial_j2000_to_horizontal(): J2000 RA/Dec + precession matrix -> HorizontalDirection
- target_direction(): convenience wrapper building the matrix from the epoch

Atmospheric refraction, nutation and aberration are ignored.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .constants import DEG2RAD, GEOMETRY_EPSILON, RAD2DEG, TAU
from .precession import ltp_pmat
from .sidereal import local_sidereal_time
from .utils import Matrix, Vector, angle_between, clamp, mat_vec, radec_to_vec, vec_to_radec


@dataclass(frozen=True)
class HorizontalDirection:
    """
    A direction in the observer's horizontal frame.

    Attributes:
        azimuth: Radians in [0, 2π), 0 = North, π/2 = East
        altitude: Radians in [-π/2, π/2]
    """

    azimuth: float
    altitude: float

    @classmethod
    def from_degrees(cls, azimuth_deg: float, altitude_deg: float) -> "HorizontalDirection":
        az = (azimuth_deg * DEG2RAD) % TAU
        alt = clamp(altitude_deg, -90.0, 90.0) * DEG2RAD
        return cls(azimuth=az, altitude=alt)

    @classmethod
    def from_vector(cls, v: Vector) -> "HorizontalDirection":
        """Build from an (East, North, Up) vector of any non-zero length."""
        x, y, z = v
        r = math.sqrt(x * x + y * y + z * z)
        if r == 0:
            return cls(0.0, 0.0)
        az = math.atan2(x, y)
        if az < 0:
            az += TAU
        return cls(azimuth=az, altitude=math.asin(clamp(z / r, -1.0, 1.0)))

    @property
    def vector(self) -> Vector:
        """(East, North, Up) unit vector."""
        cos_alt = math.cos(self.altitude)
        return (
            cos_alt * math.sin(self.azimuth),
            cos_alt * math.cos(self.azimuth),
            math.sin(self.altitude),
        )

    @property
    def azimuth_deg(self) -> float:
        return self.azimuth * RAD2DEG

    @property
    def altitude_deg(self) -> float:
        return self.altitude * RAD2DEG

    def separation(self, other: "HorizontalDirection") -> float:
        """Angle to another direction in radians."""
        return angle_between(self.vector, other.vector)

    def separation_deg(self, other: "HorizontalDirection") -> float:
        return self.separation(other) * RAD2DEG


def equatorial_to_horizontal(
    ra: float, dec: float, jd: float, lat: float, lon: float
) -> HorizontalDirection:
    """
    Convert equatorial coordinates of date to a horizontal direction.

    Args:
        ra: Right ascension of date in radians
        dec: Declination of date in radians
        jd: Julian Day (UT)
        lat: Observer latitude in radians
        lon: Observer longitude in radians, east positive

    Returns:
        HorizontalDirection

    Note:
        Denominators are floored at 1e-12 so the zenith and the poles give a
        finite azimuth instead of a division error.
    """
    h = local_sidereal_time(jd, lon) - ra  # hour angle

    sin_dec, cos_dec = math.sin(dec), math.cos(dec)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)

    sin_alt = clamp(sin_dec * sin_lat + cos_dec * cos_lat * math.cos(h), -1.0, 1.0)
    alt = math.asin(sin_alt)

    cos_alt = math.cos(alt)
    sin_az = -cos_dec * math.sin(h) / max(GEOMETRY_EPSILON, cos_alt)
    cos_az = (sin_dec - sin_alt * sin_lat) / max(GEOMETRY_EPSILON, cos_alt * cos_lat)
    az = math.atan2(sin_az, cos_az)
    if az < 0:
        az += TAU

    return HorizontalDirection(azimuth=az, altitude=alt)


def precess_radec(ra_j2000: float, dec_j2000: float, rp: Matrix):
    """Apply a precession matrix to J2000 RA/Dec; returns RA/Dec of date."""
    return vec_to_radec(mat_vec(rp, radec_to_vec(ra_j2000, dec_j2000)))


def equatorial_j2000_to_horizontal(
    ra_j2000: float,
    dec_j2000: float,
    jd: float,
    lat: float,
    lon: float,
    rp: Matrix,
) -> HorizontalDirection:
    """
    Precess a J2000 direction into the date frame, then convert to horizontal.

    Args:
        ra_j2000: J2000 right ascension in radians
        dec_j2000: J2000 declination in radians
        jd: Julian Day (UT)
        lat: Observer latitude in radians
        lon: Observer longitude in radians, east positive
        rp: Precession matrix from ltp_pmat()
    """
    ra, dec = precess_radec(ra_j2000, dec_j2000, rp)
    return equatorial_to_horizontal(ra, dec, jd, lat, lon)


def target_direction(
    target,
    jd: float,
    epoch: float,
    observer,
    rp: Optional[Matrix] = None,
) -> HorizontalDirection:
    """
    Horizontal direction of a CelestialTarget for an observer.

    Args:
        target: CelestialTarget (J2000 RA/Dec in radians)
        jd: Julian Day (UT)
        epoch: Julian epoch used for precession
        observer: ObserverLocation
        rp: Precomputed precession matrix for ``epoch`` (computed if None)
    """
    if rp is None:
        rp = ltp_pmat(epoch)
    return equatorial_j2000_to_horizontal(
        target.ra_j2000, target.dec_j2000, jd, observer.lat_rad, observer.lon_rad, rp
    )
