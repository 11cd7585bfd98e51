"""
Constants for libskyalign.

Groups the fixed numbers shared across modules:
- Reference epoch and unit conversions
- Long-term precession frame constants
- Search tolerances and step sizes
- Preset identifiers (sites, snap modes, alignment directions)
"""

import math

# =============================================================================
# EPOCHS AND UNITS
# =============================================================================

J2000_JD = 2451545.0  # 2000-01-01 12:00 TT
J2000_EPOCH = 2000.0
DAYS_PER_JULIAN_YEAR = 365.25
DAYS_PER_JULIAN_CENTURY = 36525.0

TAU = 6.283185307179586476925287
DEG2RAD = math.pi / 180.0
RAD2DEG = 180.0 / math.pi
AS2R = 4.848136811095359935899141e-6  # arcsec -> rad

# Obliquity of the ecliptic at J2000 (IAU 2006), radians
EPS0 = 84381.406 * AS2R

# Floor for denominators in the horizontal transform (zenith / pole)
GEOMETRY_EPSILON = 1e-12

# =============================================================================
# CALENDAR
# =============================================================================

MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Day of year used by the solstice snap modes
SOLSTICE_DAY_OF_YEAR = 172

# Years searched back from the present by default
DEFAULT_YEAR_SPAN = 40000

# Year slider snapping increment
YEAR_SNAP_INCREMENT = 95

# =============================================================================
# SOLAR / DAWN
# =============================================================================

CIVIL_DAWN_ALTITUDE_DEG = -6.0
DAWN_SCAN_STEP_MINUTES = 5
DAWN_BISECTION_ITERATIONS = 28

# =============================================================================
# TRANSIT SEARCH
# =============================================================================

TRANSIT_DAYS = 365  # leap days are not scanned
TRANSIT_HOUR_STEP = 0.1
TRANSIT_TOLERANCE_RAD = 0.02
TRANSIT_EPOCH_MONTH = 6
TRANSIT_EPOCH_DAY = 21

# =============================================================================
# ALIGNMENT SEARCH
# =============================================================================

ALIGNMENT_STEP_YEARS = 100
ALIGNMENT_TARGET_ERROR_DEG = 0.5
ALIGNMENT_MAX_ITERATIONS = 5000

# =============================================================================
# CATALOG
# =============================================================================

MAG_BRIGHTEST = -1.0
MAG_FAINTEST = 6.0
DEFAULT_MAGNITUDE = 6.0
UNKNOWN_CONSTELLATION = "unknown"

# IAU abbreviations of the zodiac constellations
ZODIAC = frozenset(
    ["Ari", "Tau", "Gem", "Cnc", "Leo", "Vir", "Lib", "Sco", "Sgr", "Cap", "Aqr", "Psc"]
)

# Radius of the sky sphere used for straight-line distances (metres)
SKY_RADIUS = 3500.0

# Error arc
ERROR_ARC_SEGMENTS = 64
ERROR_ARC_MIN_SIN = 0.001
ERROR_ARC_MAX_DEG = 90.0

# =============================================================================
# PRESET IDENTIFIERS
# =============================================================================

SITE_KHUFU = "khufu"
SITE_SPHINX = "sphinx"
DEFAULT_SITE = SITE_KHUFU

TARGET_ALNILAM = "alnilam"
TARGET_ALNITAK = "alnitak"
TARGET_MINTAKA = "mintaka"
TARGET_THUBAN = "thuban"
TARGET_SIRIUS = "sirius"
DEFAULT_TARGET = TARGET_ALNILAM

DIRECTION_KINGS_SOUTH_SHAFT = "kings_south_shaft"
DIRECTION_SPHINX_SIGHT = "sphinx_sight"

SNAP_SOLSTICE = "solstice"
SNAP_DAWN = "dawn"
SNAP_CULMINATION = "culmination"
SNAP_MODES = (SNAP_SOLSTICE, SNAP_DAWN, SNAP_CULMINATION)
