"""
pytest configuration and shared fixtures for libskyalign tests.
"""

import pytest

import libskyalign as sky
from libskyalign.constants import *


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================


@pytest.fixture
def standard_jd():
    """Standard Julian Day for testing (J2000.0)."""
    return 2451545.0  # 2000-01-01 12:00:00 TT


@pytest.fixture
def test_dates():
    """Collection of test dates spanning different eras."""
    return [
        (2000, 1, 1, 12.0, "J2000"),
        (1980, 5, 20, 0.0, "Past"),
        (1582, 10, 15, 6.0, "Gregorian reform"),
        (-2560, 6, 21, 0.0, "Great Pyramid"),
        (-10500, 3, 1, 18.0, "Deep past"),
    ]


@pytest.fixture
def test_locations():
    """Collection of test locations with various latitudes."""
    return [
        ("Giza", 29.9792, 31.1342),
        ("London", 51.5074, -0.1278),
        ("Sydney", -33.8688, 151.2093),
        ("Tromso", 69.6492, 18.9553),  # Arctic
        ("Equator", 0.0, 0.0),
    ]


@pytest.fixture
def giza():
    """Khufu site preset."""
    return sky.get_site(SITE_KHUFU)


@pytest.fixture
def alnilam():
    return sky.get_target(TARGET_ALNILAM)


# ============================================================================
# SETUP/TEARDOWN
# ============================================================================


@pytest.fixture(autouse=True)
def reset_skyalign_state():
    """Reset site and year range before each test."""
    sky.reset_state()
    yield
    sky.reset_state()


# ============================================================================
# MARKERS
# ============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
