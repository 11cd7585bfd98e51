"""
Tests for the approximate Sun model and civil dawn search.
"""

import math

import pytest
import swisseph as swe

import libskyalign as sky
from libskyalign.constants import TAU


class TestSunPosition:
    """Approximate Sun position compared with Swiss Ephemeris (Moshier)."""

    @pytest.mark.unit
    def test_j2000(self, standard_jd):
        ra, dec = sky.sun_ra_dec_approx(standard_jd)
        assert abs(math.degrees(ra) - 281.3) < 0.2
        assert abs(math.degrees(dec) + 23.0) < 0.2

    @pytest.mark.unit
    def test_ra_range(self):
        for jd in (2451545.0, 2451625.0, 2451800.0, 2452000.0):
            ra, _ = sky.sun_ra_dec_approx(jd)
            assert 0.0 <= ra < TAU

    @pytest.mark.integration
    def test_matches_swisseph(self, test_dates):
        for year, month, day, hour, label in test_dates:
            if year < 1900:
                continue
            jd = swe.julday(year, month, day, hour, swe.GREG_CAL)
            xx, _ = swe.calc_ut(jd, swe.SUN, swe.FLG_EQUATORIAL | swe.FLG_MOSEPH)
            ra, dec = sky.sun_ra_dec_approx(jd)
            dra = abs(math.degrees(ra) - xx[0]) % 360.0
            assert min(dra, 360.0 - dra) < 0.5, label
            assert abs(math.degrees(dec) - xx[1]) < 0.5, label

    @pytest.mark.unit
    def test_altitude_sign_day_and_night(self):
        lat, lon = math.radians(29.98), math.radians(31.13)
        noon = sky.julday(2000, 6, 21, 10)  # about local noon
        midnight = sky.julday(2000, 6, 21, 22)
        assert sky.sun_altitude(noon, lat, lon) > math.radians(70)
        assert sky.sun_altitude(midnight, lat, lon) < 0


class TestCivilDawn:
    """Tests for the civil dawn search."""

    @pytest.mark.unit
    def test_equator_equinox(self):
        """At the equator on the equinox civil dawn is a little before 06:00."""
        hour = sky.find_civil_dawn_hour(2000, 80, 0.0, 0.0)
        assert 5.5 < hour < 6.5

    @pytest.mark.unit
    def test_crossing_altitude(self, giza):
        hour = sky.find_civil_dawn_hour(2000, 172, giza.latitude_deg, giza.longitude_deg)
        jd = sky.julday(2000, 6, 20) + hour / 24.0
        alt = sky.sun_altitude(jd, giza.lat_rad, giza.lon_rad)
        assert abs(math.degrees(alt) + 6.0) < 0.01

        earlier = sky.sun_altitude(jd - 0.01, giza.lat_rad, giza.lon_rad)
        assert earlier < alt

    @pytest.mark.unit
    def test_giza_summer(self, giza):
        hour = sky.find_civil_dawn_hour(2000, 172, giza.latitude_deg, giza.longitude_deg)
        assert 1.5 < hour < 3.5

    @pytest.mark.unit
    def test_polar_night_returns_closest_approach(self):
        """No crossing: the best approach to -6° is near local noon."""
        hour = sky.find_civil_dawn_hour(2000, 355, 80.0, 0.0)
        assert 0.0 <= hour < 24.0
        assert abs(hour - 12.0) < 0.5

    @pytest.mark.unit
    def test_midnight_sun_stays_in_day(self, test_locations):
        _, lat, lon = [loc for loc in test_locations if loc[0] == "Tromso"][0]
        hour = sky.find_civil_dawn_hour(2000, 172, lat, lon)
        assert 0.0 <= hour < 24.0

    @pytest.mark.unit
    def test_day_of_year_clamped(self):
        assert sky.find_civil_dawn_hour(2023, 500, 30.0, 31.0) == sky.find_civil_dawn_hour(
            2023, 365, 30.0, 31.0
        )

    @pytest.mark.unit
    def test_deep_past(self, giza):
        hour = sky.find_civil_dawn_hour(-2560, 172, giza.latitude_deg, giza.longitude_deg)
        assert 0.0 <= hour < 24.0
