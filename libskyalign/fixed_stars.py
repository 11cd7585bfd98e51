"""
Named celestial targets for libskyalign.

J2000 mean equatorial positions of the stars most often tested against the
Giza sight-lines:
- Alnilam (Epsilon Orionis) - centre of Orion's Belt, default reference star
- Alnitak (Zeta Orionis), Mintaka (Delta Orionis) - the other belt stars
- Thuban (Alpha Draconis) - pole star of the Old Kingdom
- Sirius (Alpha Canis Majoris)

Proper motion is not applied. Over tens of millennia this shifts the
faster stars (Sirius moves ~1.3"/yr) by several degrees, which is outside
what this library models.

References:
- Hipparcos catalogue, J2000.0 ICRS positions
"""

from dataclasses import dataclass

from .constants import (
    DEG2RAD,
    TARGET_ALNILAM,
    TARGET_ALNITAK,
    TARGET_MINTAKA,
    TARGET_SIRIUS,
    TARGET_THUBAN,
)


@dataclass(frozen=True)
class CelestialTarget:
    """
    Catalog position in the J2000 mean equatorial frame.

    Attributes:
        ra_j2000: Right ascension in radians, [0, 2π)
        dec_j2000: Declination in radians, [-π/2, π/2]
        name: Display name
    """

    ra_j2000: float
    dec_j2000: float
    name: str = ""

    @classmethod
    def from_sexagesimal(
        cls,
        ra_h: float,
        ra_m: float,
        ra_s: float,
        dec_d: float,
        dec_m: float,
        dec_s: float,
        name: str = "",
        south: bool = False,
    ) -> "CelestialTarget":
        """
        Build from hours/minutes/seconds and degrees/arcmin/arcsec.

        ``south`` marks a negative declination so that -00° values keep
        their sign.
        """
        ra_deg = (ra_h + ra_m / 60.0 + ra_s / 3600.0) * 15.0
        dec_deg = abs(dec_d) + dec_m / 60.0 + dec_s / 3600.0
        if south or dec_d < 0:
            dec_deg = -dec_deg
        return cls(ra_j2000=ra_deg * DEG2RAD, dec_j2000=dec_deg * DEG2RAD, name=name)

    @classmethod
    def from_degrees(cls, ra_deg: float, dec_deg: float, name: str = "") -> "CelestialTarget":
        return cls(ra_j2000=(ra_deg % 360.0) * DEG2RAD, dec_j2000=dec_deg * DEG2RAD, name=name)


FIXED_STARS = {
    TARGET_ALNILAM: CelestialTarget.from_sexagesimal(
        5, 36, 12.8, 1, 12, 7, name="Alnilam", south=True
    ),
    TARGET_ALNITAK: CelestialTarget.from_sexagesimal(
        5, 40, 45.527, 1, 56, 33.26, name="Alnitak", south=True
    ),
    TARGET_MINTAKA: CelestialTarget.from_sexagesimal(
        5, 32, 0.400, 0, 17, 56.74, name="Mintaka", south=True
    ),
    TARGET_THUBAN: CelestialTarget.from_sexagesimal(
        14, 4, 23.35, 64, 22, 33.1, name="Thuban"
    ),
    TARGET_SIRIUS: CelestialTarget.from_sexagesimal(
        6, 45, 8.917, 16, 42, 58.02, name="Sirius", south=True
    ),
}


def get_target(name: str) -> CelestialTarget:
    """
    Look up a named target.

    Accepts any case and ignores anything after a comma ("Alnilam,eps Ori").

    Raises:
        ValueError: If the star is not in the table
    """
    key = name.lower().strip()
    if "," in key:
        key = key.split(",")[0].strip()
    if key not in FIXED_STARS:
        raise ValueError(f"Unknown star: {name}")
    return FIXED_STARS[key]
