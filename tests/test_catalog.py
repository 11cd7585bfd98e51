"""
Tests for catalog parsing and bulk sky reprojection.
"""

import math

import numpy as np
import pytest

import libskyalign as sky
from libskyalign.catalog import horizontal_vectors


def _star_feature(lon, lat, **props):
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": props,
    }


@pytest.fixture
def star_collection():
    return {
        "type": "FeatureCollection",
        "features": [
            _star_feature(-90.0, 10.0, mag=1.5),
            _star_feature(84.05, -1.2, magnitude=1.69),
            _star_feature(30.0, 45.0),
            {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1.0]}},
            {"type": "Feature", "geometry": None},
            _star_feature("abc", 1.0, mag=2.0),
            "not a feature",
        ],
    }


@pytest.fixture
def line_collection():
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": "Ori",
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[83.0, -1.0], [84.0, -1.2], [85.2, -1.9]],
                },
            },
            {
                "type": "Feature",
                "properties": {"id": "Tau"},
                "geometry": {
                    "type": "MultiLineString",
                    "coordinates": [
                        [[68.9, 16.5], [65.0, 15.6]],
                        [[60.0, 20.0], [56.0, 24.0]],
                    ],
                },
            },
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": [[10.0, 10.0], [12.0, 11.0]]},
            },
            {"type": "Feature", "id": "Gem", "geometry": {"type": "Point", "coordinates": [1, 2]}},
        ],
    }


@pytest.fixture
def random_catalog():
    rng = np.random.default_rng(42)
    n = 200
    entries = [
        sky.StarCatalogEntry(ra, dec, mag)
        for ra, dec, mag in zip(
            rng.uniform(0, 2 * math.pi, n),
            np.arcsin(rng.uniform(-1, 1, n)),
            rng.uniform(-1.5, 7.0, n),
        )
    ]
    return sky.StarCatalog.from_entries(entries)


class TestParseStars:
    """Tests for star dataset parsing."""

    @pytest.mark.unit
    def test_feature_collection(self, star_collection):
        stars = sky.parse_stars(star_collection)
        assert len(stars) == 3

        first = stars[0]
        assert abs(math.degrees(first.ra_j2000) - 270.0) < 1e-9
        assert abs(math.degrees(first.dec_j2000) - 10.0) < 1e-9
        assert first.magnitude == 1.5

        assert stars[1].magnitude == 1.69
        assert stars[2].magnitude == 6.0  # default

    @pytest.mark.unit
    def test_rows(self):
        rows = [
            [10.0, 20.0, 3.0, "extra"],
            [1.0, 2.0],
            ["x", 1.0, 2.0],
            [float("nan"), 0.0, 1.0],
            [350.0, -5.0, 0.5],
        ]
        stars = sky.parse_stars(rows)
        assert len(stars) == 2
        assert abs(math.degrees(stars[0].ra_j2000) - 10.0) < 1e-9
        assert stars[1].magnitude == 0.5

    @pytest.mark.unit
    def test_ra_range(self, star_collection):
        for star in sky.parse_stars(star_collection):
            assert 0.0 <= star.ra_j2000 < 2 * math.pi

    @pytest.mark.unit
    @pytest.mark.parametrize("payload", [None, "stars", 42, {"type": "Feature"}, {}])
    def test_unknown_shape_gives_empty(self, payload):
        assert sky.parse_stars(payload) == []


class TestParseConstellations:
    """Tests for constellation line parsing."""

    @pytest.mark.unit
    def test_segments(self, line_collection):
        segments = sky.parse_constellation_segments(line_collection)
        ids = [s.constellation_id for s in segments]
        assert ids == ["Ori", "Ori", "Tau", "Tau", "unknown"]

    @pytest.mark.unit
    def test_consecutive_pairs(self, line_collection):
        first, second = sky.parse_constellation_segments(line_collection)[:2]
        assert first.ra2 == second.ra1
        assert first.de2 == second.de1
        assert abs(math.degrees(first.ra1) - 83.0) < 1e-9

    @pytest.mark.unit
    def test_unknown_shape_gives_empty(self):
        assert sky.parse_constellation_segments([[1, 2, 3]]) == []
        assert sky.parse_constellation_segments(None) == []


class TestCatalogArrays:
    """Tests for the read-only catalog arrays."""

    @pytest.mark.unit
    def test_read_only(self, star_collection):
        catalog = sky.StarCatalog.from_entries(sky.parse_stars(star_collection))
        assert len(catalog) == 3
        with pytest.raises(ValueError):
            catalog.ra[0] = 0.0

    @pytest.mark.unit
    def test_constellation_catalog(self, line_collection):
        catalog = sky.ConstellationCatalog.from_segments(
            sky.parse_constellation_segments(line_collection)
        )
        assert len(catalog) == 5
        assert catalog.ids[0] == "Ori"
        assert catalog.ra1.shape == (5,)


class TestIntensity:
    """Tests for magnitude to display intensity."""

    @pytest.mark.unit
    def test_endpoints(self):
        assert abs(sky.mag_to_intensity(-1.0) - 1.0) < 1e-12
        assert abs(sky.mag_to_intensity(6.0) - 0.05) < 1e-12

    @pytest.mark.unit
    def test_clamped(self):
        assert sky.mag_to_intensity(-5.0) == sky.mag_to_intensity(-1.0)
        assert sky.mag_to_intensity(12.0) == sky.mag_to_intensity(6.0)

    @pytest.mark.unit
    def test_monotonic(self):
        values = sky.mag_to_intensity(np.linspace(-1.0, 6.0, 50))
        assert isinstance(values, np.ndarray)
        assert np.all(np.diff(values) < 0)
        assert np.all((values >= 0.05) & (values <= 1.0))

    @pytest.mark.unit
    def test_scalar_returns_float(self):
        assert isinstance(sky.mag_to_intensity(2.0), float)


class TestReprojection:
    """Tests for bulk reprojection."""

    @pytest.mark.unit
    def test_bulk_matches_scalar(self, random_catalog, giza):
        jd = sky.julday(-2560, 6, 21, 1.5)
        epoch = sky.julian_epoch(jd)
        rp = sky.ltp_pmat(epoch)
        vectors = sky.reproject_stars(random_catalog, jd, epoch, giza, rp=rp)
        assert vectors.shape == (len(random_catalog), 3)

        for i in range(len(random_catalog)):
            target = sky.CelestialTarget(random_catalog.ra[i], random_catalog.dec[i])
            expected = sky.target_direction(target, jd, epoch, giza, rp=rp).vector
            assert np.allclose(vectors[i], expected, rtol=0, atol=1e-9)

    @pytest.mark.unit
    def test_unit_vectors(self, random_catalog, giza):
        jd = sky.julday(2000, 1, 1, 12)
        vectors = sky.reproject_stars(random_catalog, jd, 2000.0, giza)
        assert np.allclose(np.linalg.norm(vectors, axis=1), 1.0, atol=1e-12)

    @pytest.mark.unit
    def test_segments_shape(self, line_collection, giza):
        catalog = sky.ConstellationCatalog.from_segments(
            sky.parse_constellation_segments(line_collection)
        )
        vectors = sky.reproject_segments(catalog, 2451545.0, 2000.0, giza)
        assert vectors.shape == (5, 2, 3)
        # shared endpoint of the two Ori segments
        assert np.allclose(vectors[0, 1], vectors[1, 0])

    @pytest.mark.unit
    def test_empty_catalogs(self, giza):
        stars = sky.StarCatalog.from_entries([])
        segments = sky.ConstellationCatalog.from_segments([])
        assert sky.reproject_stars(stars, 2451545.0, 2000.0, giza).shape == (0, 3)
        assert sky.reproject_segments(segments, 2451545.0, 2000.0, giza).shape == (0, 2, 3)
        assert horizontal_vectors([], [], 2451545.0, 0.5, 0.5, sky.ltp_pmat(2000.0)).shape == (
            0,
            3,
        )

    @pytest.mark.unit
    def test_out_buffer(self, random_catalog, giza):
        jd = sky.julday(2000, 3, 1, 0)
        fresh = sky.reproject_stars(random_catalog, jd, 2000.0, giza)
        buffer = np.zeros((len(random_catalog), 3))
        result = sky.reproject_stars(random_catalog, jd, 2000.0, giza, out=buffer)
        assert result is buffer
        assert np.array_equal(buffer, fresh)


def _segment(a, b):
    return np.array([a, b], dtype=float)


class TestNearestConstellation:
    """Tests for the highlighted constellation search."""

    @pytest.fixture
    def segments(self):
        vectors = np.stack(
            [
                _segment((0.0, 1.0, 0.0), (0.0, 0.99, 0.14)),  # closest
                _segment((0.1, 0.99, 0.0), (0.1, 0.98, 0.17)),
                _segment((1.0, 0.0, 0.0), (0.99, 0.0, 0.14)),
            ]
        )
        return vectors

    @pytest.mark.unit
    def test_zodiac_filter(self, segments):
        ids = ("Ori", "Tau", "Gem")
        reference = (0.0, 1.0, 0.05)
        assert sky.nearest_constellation(segments, ids, reference) == "Tau"
        assert sky.nearest_constellation(segments, ids, reference, allowed={"Ori"}) == "Ori"

    @pytest.mark.unit
    def test_first_wins_tie(self):
        seg = _segment((0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
        vectors = np.stack([seg, seg])
        assert sky.nearest_constellation(vectors, ("Gem", "Tau"), (1.0, 0.0, 0.0)) == "Gem"

    @pytest.mark.unit
    def test_none_when_nothing_allowed(self, segments):
        assert sky.nearest_constellation(segments, ("Ori", "UMa", "And"), (0, 1, 0)) is None
        assert sky.nearest_constellation(np.empty((0, 2, 3)), (), (0, 1, 0)) is None


class TestProjectSky:
    """Tests for the full sky snapshot."""

    @pytest.mark.unit
    def test_projection(self, star_collection, line_collection, giza):
        stars = sky.StarCatalog.from_entries(sky.parse_stars(star_collection))
        segments = sky.ConstellationCatalog.from_segments(
            sky.parse_constellation_segments(line_collection)
        )
        spec = sky.TimeSpecification.create(-2560, 172, 3.0)
        reference = sky.get_alignment_direction("kings_south_shaft")

        projection = sky.project_sky(stars, segments, spec, giza, reference=reference)
        assert projection.star_vectors.shape == (3, 3)
        assert projection.star_intensity.shape == (3,)
        assert projection.segment_vectors.shape == (5, 2, 3)
        assert projection.segment_ids == segments.ids
        assert projection.highlighted == "Tau"  # only zodiac id in the set

    @pytest.mark.unit
    def test_no_reference(self, star_collection, giza):
        stars = sky.StarCatalog.from_entries(sky.parse_stars(star_collection))
        segments = sky.ConstellationCatalog.from_segments([])
        spec = sky.TimeSpecification.create(2000, 1, 0.0)
        projection = sky.project_sky(stars, segments, spec, giza)
        assert projection.highlighted is None
        assert projection.segment_vectors.shape == (0, 2, 3)

    @pytest.mark.unit
    def test_empty_with_reference(self, giza):
        spec = sky.TimeSpecification.create(2000, 1, 0.0)
        projection = sky.project_sky(
            sky.StarCatalog.from_entries([]),
            sky.ConstellationCatalog.from_segments([]),
            spec,
            giza,
            reference=(0.0, 0.0, 1.0),
        )
        assert projection.highlighted is None
        assert projection.star_intensity.shape == (0,)

    @pytest.mark.unit
    def test_reuses_buffers(self, star_collection, line_collection, giza):
        stars = sky.StarCatalog.from_entries(sky.parse_stars(star_collection))
        segments = sky.ConstellationCatalog.from_segments(
            sky.parse_constellation_segments(line_collection)
        )
        star_out = np.zeros((3, 3))
        segment_out = np.zeros((5, 2, 3))
        spec = sky.TimeSpecification.create(2000, 1, 0.0)
        projection = sky.project_sky(
            stars, segments, spec, giza, star_out=star_out, segment_out=segment_out
        )
        assert projection.star_vectors is star_out
        assert projection.segment_vectors is segment_out
        assert np.any(star_out != 0.0)
