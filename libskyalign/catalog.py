"""
Star and constellation catalog reprojection for libskyalign.

Catalogs are parsed once into read-only numpy arrays and reprojected in bulk
whenever the time or the observer changes. One precession matrix is built
per update and shared by every entry, so an update costs O(N + M) with O(1)
precession work.

Parsing accepts the shapes published by d3-celestial:
- GeoJSON FeatureCollection of Point features (stars) or
  LineString/MultiLineString features (constellation lines)
- Plain row arrays ``[ra_deg, dec_deg, mag, ...]`` for stars

Malformed rows are skipped one by one; an unrecognised payload gives an
empty catalog.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .constants import (
    DEFAULT_MAGNITUDE,
    DEG2RAD,
    GEOMETRY_EPSILON,
    MAG_BRIGHTEST,
    MAG_FAINTEST,
    SKY_RADIUS,
    TAU,
    UNKNOWN_CONSTELLATION,
    ZODIAC,
)
from .precession import ltp_pmat
from .sidereal import gmst_radians

logger = logging.getLogger(__name__)


# =============================================================================
# CATALOG ENTRIES
# =============================================================================


@dataclass(frozen=True)
class StarCatalogEntry:
    """A star at its J2000 position (radians) with visual magnitude."""

    ra_j2000: float
    dec_j2000: float
    magnitude: float


@dataclass(frozen=True)
class ConstellationSegment:
    """One constellation line segment between two J2000 points (radians)."""

    ra1: float
    de1: float
    ra2: float
    de2: float
    constellation_id: str


def _finite(*values) -> bool:
    return all(math.isfinite(v) for v in values)


def _to_ra_rad(lon_deg: float) -> float:
    # d3-celestial stores RA as a longitude in [-180, 180]
    return (lon_deg % 360.0) * DEG2RAD


# =============================================================================
# PARSERS
# =============================================================================


def _is_feature_collection(data) -> bool:
    return (
        isinstance(data, dict)
        and data.get("type") == "FeatureCollection"
        and isinstance(data.get("features"), list)
    )


def _star_from_feature(feature) -> Optional[StarCatalogEntry]:
    if not isinstance(feature, dict):
        return None
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        return None
    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None

    props = feature.get("properties") or {}
    mag = props.get("mag") if isinstance(props, dict) else None
    if mag is None and isinstance(props, dict):
        mag = props.get("magnitude")
    if mag is None:
        mag = DEFAULT_MAGNITUDE

    try:
        lon, lat, mag = float(coords[0]), float(coords[1]), float(mag)
    except (TypeError, ValueError):
        return None
    if not _finite(lon, lat, mag):
        return None
    return StarCatalogEntry(_to_ra_rad(lon), lat * DEG2RAD, mag)


def _star_from_row(row) -> Optional[StarCatalogEntry]:
    if not isinstance(row, (list, tuple)) or len(row) < 3:
        return None
    try:
        lon, lat, mag = float(row[0]), float(row[1]), float(row[2])
    except (TypeError, ValueError):
        return None
    if not _finite(lon, lat, mag):
        return None
    return StarCatalogEntry(_to_ra_rad(lon), lat * DEG2RAD, mag)


def parse_stars(data) -> List[StarCatalogEntry]:
    """
    Parse a star dataset into catalog entries.

    Args:
        data: Decoded JSON, either a FeatureCollection of Point features
            (``properties.mag`` or ``properties.magnitude``, default 6.0)
            or a list of ``[ra_deg, dec_deg, mag, ...]`` rows

    Returns:
        list of StarCatalogEntry in input order; empty for unknown shapes
    """
    if _is_feature_collection(data):
        items, convert = data["features"], _star_from_feature
    elif isinstance(data, (list, tuple)):
        items, convert = data, _star_from_row
    else:
        return []

    stars = []
    for item in items:
        entry = convert(item)
        if entry is not None:
            stars.append(entry)

    skipped = len(items) - len(stars)
    if skipped:
        logger.debug("Skipped %d malformed star rows", skipped)
    return stars


def _segment_lines(geometry) -> List:
    kind = geometry.get("type")
    coords = geometry.get("coordinates")
    if not isinstance(coords, list):
        return []
    if kind == "LineString":
        return [coords]
    if kind == "MultiLineString":
        return list(coords)
    return []


def _point(p) -> Optional[Tuple[float, float]]:
    if not isinstance(p, (list, tuple)) or len(p) < 2:
        return None
    try:
        lon, lat = float(p[0]), float(p[1])
    except (TypeError, ValueError):
        return None
    if not _finite(lon, lat):
        return None
    return _to_ra_rad(lon), lat * DEG2RAD


def parse_constellation_segments(data) -> List[ConstellationSegment]:
    """
    Parse constellation lines into individual segments.

    Args:
        data: FeatureCollection of LineString / MultiLineString features.
            The constellation id is taken from ``feature.id``, then
            ``properties.id``, then "unknown".

    Returns:
        list of ConstellationSegment, consecutive point pairs of every line
    """
    segments: List[ConstellationSegment] = []
    if not _is_feature_collection(data):
        return segments

    skipped = 0
    for feature in data["features"]:
        if not isinstance(feature, dict) or not isinstance(feature.get("geometry"), dict):
            skipped += 1
            continue
        props = feature.get("properties")
        const_id = feature.get("id") or (
            props.get("id") if isinstance(props, dict) else None
        ) or UNKNOWN_CONSTELLATION

        for line in _segment_lines(feature["geometry"]):
            if not isinstance(line, list) or len(line) < 2:
                skipped += 1
                continue
            for a, b in zip(line, line[1:]):
                pa, pb = _point(a), _point(b)
                if pa is None or pb is None:
                    skipped += 1
                    continue
                segments.append(ConstellationSegment(pa[0], pa[1], pb[0], pb[1], str(const_id)))

    if skipped:
        logger.debug("Skipped %d malformed constellation entries", skipped)
    return segments


# =============================================================================
# CATALOG ARRAYS
# =============================================================================


def _frozen(values, dtype=float) -> np.ndarray:
    arr = np.asarray(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class StarCatalog:
    """Read-only column arrays of a star catalog."""

    ra: np.ndarray
    dec: np.ndarray
    magnitude: np.ndarray

    @classmethod
    def from_entries(cls, entries: Iterable[StarCatalogEntry]) -> "StarCatalog":
        entries = list(entries)
        return cls(
            ra=_frozen([e.ra_j2000 for e in entries]),
            dec=_frozen([e.dec_j2000 for e in entries]),
            magnitude=_frozen([e.magnitude for e in entries]),
        )

    def __len__(self) -> int:
        return len(self.ra)


@dataclass(frozen=True)
class ConstellationCatalog:
    """Read-only column arrays of constellation segments."""

    ra1: np.ndarray
    de1: np.ndarray
    ra2: np.ndarray
    de2: np.ndarray
    ids: Tuple[str, ...]

    @classmethod
    def from_segments(cls, segments: Iterable[ConstellationSegment]) -> "ConstellationCatalog":
        segments = list(segments)
        return cls(
            ra1=_frozen([s.ra1 for s in segments]),
            de1=_frozen([s.de1 for s in segments]),
            ra2=_frozen([s.ra2 for s in segments]),
            de2=_frozen([s.de2 for s in segments]),
            ids=tuple(s.constellation_id for s in segments),
        )

    def __len__(self) -> int:
        return len(self.ids)


# =============================================================================
# BRIGHTNESS
# =============================================================================


def mag_to_intensity(mag):
    """
    Map visual magnitude to a display intensity in [0.05, 1.0].

    Magnitude is clamped to [-1, 6]; brighter stars get higher intensity.
    Not photometric. Accepts scalars or arrays.
    """
    m = np.clip(mag, MAG_BRIGHTEST, MAG_FAINTEST)
    t = (m - MAG_BRIGHTEST) / (MAG_FAINTEST - MAG_BRIGHTEST)
    intensity = np.power(1.0 - t, 2.2) * 0.95 + 0.05
    if np.ndim(intensity) == 0:
        return float(intensity)
    return intensity


# =============================================================================
# BULK REPROJECTION
# =============================================================================


def horizontal_vectors(ra_j2000, dec_j2000, jd: float, lat: float, lon: float, rp) -> np.ndarray:
    """
    Vectorised J2000 RA/Dec -> horizontal (East, North, Up) unit vectors.

    Same arithmetic as coordinates.equatorial_j2000_to_horizontal(), applied
    to whole arrays with a single precession matrix.

    Returns:
        ndarray of shape (N, 3)
    """
    ra0 = np.asarray(ra_j2000, dtype=float)
    dec0 = np.asarray(dec_j2000, dtype=float)
    if ra0.size == 0:
        return np.empty((0, 3))

    cos_d0 = np.cos(dec0)
    v0 = np.stack([cos_d0 * np.cos(ra0), cos_d0 * np.sin(ra0), np.sin(dec0)], axis=-1)
    vd = v0 @ np.asarray(rp, dtype=float).T

    r = np.linalg.norm(vd, axis=-1)
    r = np.where(r == 0, 1.0, r)
    ra = np.mod(np.arctan2(vd[:, 1], vd[:, 0]), TAU)
    dec = np.arcsin(np.clip(vd[:, 2] / r, -1.0, 1.0))

    h = gmst_radians(jd) + lon - ra
    sin_dec, cos_dec = np.sin(dec), np.cos(dec)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)

    sin_alt = np.clip(sin_dec * sin_lat + cos_dec * cos_lat * np.cos(h), -1.0, 1.0)
    alt = np.arcsin(sin_alt)
    cos_alt = np.cos(alt)
    sin_az = -cos_dec * np.sin(h) / np.maximum(GEOMETRY_EPSILON, cos_alt)
    cos_az = (sin_dec - sin_alt * sin_lat) / np.maximum(GEOMETRY_EPSILON, cos_alt * cos_lat)
    az = np.mod(np.arctan2(sin_az, cos_az), TAU)

    return np.stack([cos_alt * np.sin(az), cos_alt * np.cos(az), sin_alt], axis=-1)


def _write(result: np.ndarray, out: Optional[np.ndarray]) -> np.ndarray:
    if out is None:
        return result
    out[...] = result
    return out


def reproject_stars(
    catalog: StarCatalog,
    jd: float,
    epoch: float,
    observer,
    rp=None,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Horizontal unit vectors for every star.

    Args:
        catalog: StarCatalog
        jd: Julian Day (UT)
        epoch: Julian epoch for precession
        observer: ObserverLocation
        rp: Precession matrix for ``epoch`` (built once here if None)
        out: Optional caller-owned (N, 3) buffer to write into

    Returns:
        (N, 3) array of (East, North, Up) vectors
    """
    if len(catalog) == 0:
        return _write(np.empty((0, 3)), out)
    if rp is None:
        rp = ltp_pmat(epoch)
    result = horizontal_vectors(
        catalog.ra, catalog.dec, jd, observer.lat_rad, observer.lon_rad, rp
    )
    return _write(result, out)


def reproject_segments(
    catalog: ConstellationCatalog,
    jd: float,
    epoch: float,
    observer,
    rp=None,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Horizontal unit vectors for both endpoints of every segment.

    Returns:
        (M, 2, 3) array; ``[:, 0]`` is the first endpoint
    """
    m = len(catalog)
    if m == 0:
        return _write(np.empty((0, 2, 3)), out)
    if rp is None:
        rp = ltp_pmat(epoch)
    ra = np.concatenate([catalog.ra1, catalog.ra2])
    dec = np.concatenate([catalog.de1, catalog.de2])
    v = horizontal_vectors(ra, dec, jd, observer.lat_rad, observer.lon_rad, rp)
    result = np.stack([v[:m], v[m:]], axis=1)
    return _write(result, out)


def nearest_constellation(
    segment_vectors: np.ndarray,
    ids: Sequence[str],
    reference,
    allowed: Iterable[str] = ZODIAC,
    radius: float = SKY_RADIUS,
) -> Optional[str]:
    """
    Constellation whose segment midpoint lies closest to a reference direction.

    Midpoints are taken on the straight chord between the two endpoints on a
    sphere of ``radius`` and compared with the reference direction scaled to
    the same radius. The first segment wins a tie.

    Args:
        segment_vectors: (M, 2, 3) endpoint vectors from reproject_segments()
        ids: Constellation id of each segment
        reference: Reference unit vector (East, North, Up)
        allowed: Ids taking part in the search (zodiac by default)
        radius: Sky sphere radius

    Returns:
        Constellation id, or None when no segment qualifies
    """
    if len(ids) == 0:
        return None
    allowed = frozenset(allowed)
    mask = np.fromiter((cid in allowed for cid in ids), dtype=bool, count=len(ids))
    if not mask.any():
        return None

    mid = (segment_vectors[:, 0, :] + segment_vectors[:, 1, :]) * (0.5 * radius)
    target = np.asarray(reference, dtype=float) * radius
    dist = np.linalg.norm(mid - target, axis=-1)
    dist = np.where(mask, dist, np.inf)
    return ids[int(np.argmin(dist))]


# =============================================================================
# SNAPSHOT
# =============================================================================


@dataclass(frozen=True)
class SkyProjection:
    """
    Reprojected sky for one time and observer.

    Attributes:
        star_vectors: (N, 3) horizontal unit vectors
        star_intensity: (N,) display intensities
        segment_vectors: (M, 2, 3) endpoint unit vectors
        segment_ids: Constellation id of each segment
        highlighted: Nearest allowed constellation to the reference
            direction, or None when no reference was given
    """

    star_vectors: np.ndarray
    star_intensity: np.ndarray
    segment_vectors: np.ndarray
    segment_ids: Tuple[str, ...] = field(default_factory=tuple)
    highlighted: Optional[str] = None


def project_sky(
    stars: StarCatalog,
    segments: ConstellationCatalog,
    time_spec,
    observer,
    reference=None,
    allowed: Iterable[str] = ZODIAC,
    star_out: Optional[np.ndarray] = None,
    segment_out: Optional[np.ndarray] = None,
) -> SkyProjection:
    """
    Reproject both catalogs for a TimeSpecification and ObserverLocation.

    Args:
        stars: StarCatalog
        segments: ConstellationCatalog
        time_spec: TimeSpecification
        observer: ObserverLocation
        reference: Optional HorizontalDirection or unit vector; when given,
            the nearest allowed constellation is reported as ``highlighted``
        allowed: Constellation ids for the nearest search
        star_out: Optional (N, 3) buffer for star vectors
        segment_out: Optional (M, 2, 3) buffer for segment vectors

    Returns:
        SkyProjection
    """
    jd = time_spec.julian_date
    epoch = time_spec.julian_epoch
    rp = ltp_pmat(epoch)

    star_vectors = reproject_stars(stars, jd, epoch, observer, rp=rp, out=star_out)
    segment_vectors = reproject_segments(segments, jd, epoch, observer, rp=rp, out=segment_out)
    intensity = np.asarray(mag_to_intensity(stars.magnitude), dtype=float).reshape(-1)

    highlighted = None
    if reference is not None:
        ref = getattr(reference, "vector", reference)
        highlighted = nearest_constellation(segment_vectors, segments.ids, ref, allowed)

    return SkyProjection(
        star_vectors=star_vectors,
        star_intensity=intensity,
        segment_vectors=segment_vectors,
        segment_ids=segments.ids,
        highlighted=highlighted,
    )
