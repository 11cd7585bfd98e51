from .constants import *
from .time_utils import (
    julday,
    revjul,
    julian_epoch,
    jd_from_epoch,
    is_leap_year,
    days_in_year,
    month_day_from_day_of_year,
    day_of_year_from_month_day,
    TimeSpecification,
    time_specification_now,
)
from .sidereal import gmst_degrees, gmst_radians, local_sidereal_time
from .precession import ltp_pecl, ltp_pequ, ltp_pmat
from .coordinates import (
    HorizontalDirection,
    equatorial_to_horizontal,
    equatorial_j2000_to_horizontal,
    precess_radec,
    target_direction,
)
from .observer import (
    ObserverLocation,
    SITES,
    ALIGNMENT_DIRECTIONS,
    get_site,
    get_alignment_direction,
    site_direction,
)
from .fixed_stars import CelestialTarget, FIXED_STARS, get_target
from .catalog import (
    StarCatalogEntry,
    ConstellationSegment,
    StarCatalog,
    ConstellationCatalog,
    SkyProjection,
    parse_stars,
    parse_constellation_segments,
    mag_to_intensity,
    reproject_stars,
    reproject_segments,
    nearest_constellation,
    project_sky,
)
from .solar import sun_ra_dec_approx, sun_altitude, find_civil_dawn_hour
from .transit import find_best_transit_time, snap_time
from .alignment import (
    AlignmentStep,
    AlignmentResult,
    TargetReadout,
    alignment_error_deg,
    iter_alignment_search,
    search_alignment_year,
    target_readout,
    great_circle_arc,
)
from .chronology import Dynasty, DYNASTIES, astro_year_label, dynasty_for_year, snap_year
from .state import (
    set_site,
    get_site_key,
    get_current_site,
    set_year_range,
    get_year_range,
    set_data_path,
    reset_state,
)
from .utils import difdeg2n, angle_between

__version__ = "0.1.0"
__license__ = "LGPL-3.0"

__all__ = [
    # Calendar and time
    "julday",
    "revjul",
    "julian_epoch",
    "jd_from_epoch",
    "is_leap_year",
    "days_in_year",
    "month_day_from_day_of_year",
    "day_of_year_from_month_day",
    "TimeSpecification",
    "time_specification_now",
    # Sidereal time
    "gmst_degrees",
    "gmst_radians",
    "local_sidereal_time",
    # Precession
    "ltp_pecl",
    "ltp_pequ",
    "ltp_pmat",
    # Coordinates
    "HorizontalDirection",
    "equatorial_to_horizontal",
    "equatorial_j2000_to_horizontal",
    "precess_radec",
    "target_direction",
    # Sites and sight-lines
    "ObserverLocation",
    "SITES",
    "ALIGNMENT_DIRECTIONS",
    "get_site",
    "get_alignment_direction",
    "site_direction",
    # Targets
    "CelestialTarget",
    "FIXED_STARS",
    "get_target",
    # Catalog and sky projection
    "StarCatalogEntry",
    "ConstellationSegment",
    "StarCatalog",
    "ConstellationCatalog",
    "SkyProjection",
    "parse_stars",
    "parse_constellation_segments",
    "mag_to_intensity",
    "reproject_stars",
    "reproject_segments",
    "nearest_constellation",
    "project_sky",
    # Sun
    "sun_ra_dec_approx",
    "sun_altitude",
    "find_civil_dawn_hour",
    # Transit
    "find_best_transit_time",
    "snap_time",
    # Alignment
    "AlignmentStep",
    "AlignmentResult",
    "TargetReadout",
    "alignment_error_deg",
    "iter_alignment_search",
    "search_alignment_year",
    "target_readout",
    "great_circle_arc",
    # Chronology
    "Dynasty",
    "DYNASTIES",
    "astro_year_label",
    "dynasty_for_year",
    "snap_year",
    # State
    "set_site",
    "get_site_key",
    "get_current_site",
    "set_year_range",
    "get_year_range",
    "set_data_path",
    "reset_state",
    # Utilities
    "difdeg2n",
    "angle_between",
]
