"""
Global state management for libskyalign.

This module keeps the library's defaults in module-level globals:
- Skyfield data loader and timescale (used to sample "now" in UTC)
- Selected observer site preset
- Valid calendar-year range for searches

Every computation function takes explicit arguments; these globals only
supply defaults when an argument is omitted. Nothing here is locked, so
callers sharing the state across threads must serialize changes themselves.
"""

import os
from typing import Optional, Tuple

from skyfield.api import Loader
from skyfield.timelib import Timescale

from .constants import DEFAULT_SITE, DEFAULT_YEAR_SPAN

# =============================================================================
# GLOBAL STATE VARIABLES
# =============================================================================

_DATA_PATH: Optional[str] = None  # Custom skyfield data directory
_LOADER: Optional[Loader] = None  # Skyfield data loader
_TS: Optional[Timescale] = None  # Timescale object
_SITE_KEY: str = DEFAULT_SITE  # Active observer preset
_YEAR_RANGE: Optional[Tuple[int, int]] = None  # (min_year, max_year)


def get_loader() -> Loader:
    """
    Get or create the Skyfield data loader.

    Returns:
        Loader: Skyfield Loader instance

    Note:
        Data files are cached in the parent directory of this module unless
        set_data_path() chose another directory.
    """
    global _LOADER
    if _LOADER is None:
        data_dir = _DATA_PATH or os.path.join(os.path.dirname(__file__), "..")
        _LOADER = Loader(data_dir)
    return _LOADER


def get_timescale() -> Timescale:
    """
    Get or create the Skyfield timescale object.

    Returns:
        Timescale: Skyfield timescale built from its bundled leap-second data
    """
    global _TS
    if _TS is None:
        _TS = get_loader().timescale()
    return _TS


def set_data_path(path: Optional[str]) -> None:
    """
    Set the directory skyfield uses for its data files.

    Clears the cached loader and timescale so they are rebuilt on next use.
    """
    global _DATA_PATH, _LOADER, _TS
    _DATA_PATH = path
    _LOADER = None
    _TS = None


def set_site(key: str) -> None:
    """
    Select the observer site preset used when no observer is given.

    Raises:
        ValueError: If ``key`` is not a known site
    """
    global _SITE_KEY
    from .observer import SITES

    if key not in SITES:
        raise ValueError(f"Unknown site: {key}")
    _SITE_KEY = key


def get_site_key() -> str:
    return _SITE_KEY


def get_current_site():
    """Return the ObserverLocation of the active site preset."""
    from .observer import SITES

    return SITES[_SITE_KEY]


def current_year() -> int:
    """Current UTC calendar year from the skyfield timescale."""
    return int(get_timescale().now().utc.year)


def set_year_range(min_year: int, max_year: int) -> None:
    """
    Set the valid calendar-year range for alignment searches.

    Reversed bounds are swapped rather than rejected.
    """
    global _YEAR_RANGE
    lo, hi = int(min_year), int(max_year)
    if lo > hi:
        lo, hi = hi, lo
    _YEAR_RANGE = (lo, hi)


def get_year_range() -> Tuple[int, int]:
    """
    Get the valid calendar-year range.

    Defaults to the 40,000 years ending with the current year.
    """
    global _YEAR_RANGE
    if _YEAR_RANGE is None:
        now = current_year()
        _YEAR_RANGE = (now - DEFAULT_YEAR_SPAN, now)
    return _YEAR_RANGE


def reset_state() -> None:
    """Restore default site and year range."""
    global _SITE_KEY, _YEAR_RANGE
    _SITE_KEY = DEFAULT_SITE
    _YEAR_RANGE = None
