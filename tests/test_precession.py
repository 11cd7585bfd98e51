"""
Unit tests for long-term precession (Vondrák et al. 2011).

ERFA implements the same model (eraLtp, eraLtpecl, eraLtpequ) and serves
as the reference.
"""

import numpy as np
import pytest
import erfa

import libskyalign as sky


EPOCHS = [-200000.0, -40000.0, -10500.0, -2560.0, 0.0, 1000.0, 2000.0, 2026.5, 12000.0]


class TestPolesAgainstErfa:
    """Pole vectors compared with ERFA."""

    @pytest.mark.unit
    @pytest.mark.parametrize("epoch", EPOCHS)
    def test_ecliptic_pole(self, epoch):
        expected = erfa.ltpecl(epoch)
        assert np.allclose(sky.ltp_pecl(epoch), expected, rtol=0, atol=1e-12)

    @pytest.mark.unit
    @pytest.mark.parametrize("epoch", EPOCHS)
    def test_equator_pole(self, epoch):
        expected = erfa.ltpequ(epoch)
        assert np.allclose(sky.ltp_pequ(epoch), expected, rtol=0, atol=1e-12)

    @pytest.mark.unit
    @pytest.mark.parametrize("epoch", EPOCHS)
    def test_matrix(self, epoch):
        expected = erfa.ltp(epoch)
        assert np.allclose(np.array(sky.ltp_pmat(epoch)), expected, rtol=0, atol=1e-12)


class TestMatrixProperties:
    """Structural properties of the precession matrix."""

    @pytest.mark.unit
    @pytest.mark.parametrize("epoch", EPOCHS)
    def test_orthonormal(self, epoch):
        rp = np.array(sky.ltp_pmat(epoch))
        assert np.allclose(rp @ rp.T, np.eye(3), rtol=0, atol=1e-9)
        assert abs(np.linalg.det(rp) - 1.0) < 1e-9

    @pytest.mark.unit
    def test_near_identity_at_j2000(self):
        rp = np.array(sky.ltp_pmat(2000.0))
        assert np.allclose(rp, np.eye(3), rtol=0, atol=1e-6)

    @pytest.mark.unit
    def test_pole_vectors_are_unit(self):
        for epoch in EPOCHS:
            assert abs(np.linalg.norm(sky.ltp_pecl(epoch)) - 1.0) < 1e-12
            assert abs(np.linalg.norm(sky.ltp_pequ(epoch)) - 1.0) < 1e-12

    @pytest.mark.unit
    def test_rows_are_tuples(self):
        rp = sky.ltp_pmat(-2560.0)
        assert isinstance(rp, tuple)
        assert all(isinstance(row, tuple) and len(row) == 3 for row in rp)


class TestPrecessionEffect:
    """Precession of real stars over long spans."""

    @pytest.mark.unit
    def test_thuban_was_pole_star(self):
        """Thuban lay within a degree of the pole in the third millennium BCE."""
        thuban = sky.get_target("thuban")
        rp = sky.ltp_pmat(sky.julian_epoch(sky.julday(-2800, 1, 1)))
        _, dec = sky.precess_radec(thuban.ra_j2000, thuban.dec_j2000, rp)
        assert np.degrees(dec) > 89.0

    @pytest.mark.unit
    def test_identity_epoch_changes_little(self, alnilam):
        rp = sky.ltp_pmat(2000.0)
        ra, dec = sky.precess_radec(alnilam.ra_j2000, alnilam.dec_j2000, rp)
        assert abs(ra - alnilam.ra_j2000) < 1e-5
        assert abs(dec - alnilam.dec_j2000) < 1e-5
