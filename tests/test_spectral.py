# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for the reference tables, the spectral data model and CIE integration.
"""

import numpy as np
import pytest

from lumen_config import config_override
from lumen_errors import ColorValidationError, SpectralLengthError
from lumen_spectral import SpectralDistribution, SpectralIntegrator, as_spectral_arrays
from lumen_tables import (
    CMF_1931_2DEG,
    D65_SPD,
    DAYLIGHT_BASIS,
    GRID_SIZE,
    REF_WHITE_D65,
    TCS_LABELS,
    TCS_NAMES,
    TCS_REFLECTANCES,
    WAVELENGTHS_5NM,
    interpolate_observer,
)


class TestTables:

    def test_grid(self):
        assert WAVELENGTHS_5NM.shape == (GRID_SIZE,)
        assert WAVELENGTHS_5NM[0] == 380.0
        assert WAVELENGTHS_5NM[-1] == 780.0
        np.testing.assert_allclose(np.diff(WAVELENGTHS_5NM), 5.0)

    def test_shapes(self):
        assert CMF_1931_2DEG.shape == (81, 3)
        assert D65_SPD.shape == (81,)
        assert DAYLIGHT_BASIS.shape == (81, 3)
        assert TCS_REFLECTANCES.shape == (14, 81)
        assert len(TCS_NAMES) == len(TCS_LABELS) == 14

    def test_tables_are_read_only(self):
        for table in (WAVELENGTHS_5NM, CMF_1931_2DEG, D65_SPD, TCS_REFLECTANCES):
            assert not table.flags.writeable
            with pytest.raises(ValueError):
                table[0] = 0.0

    def test_observer_peak_at_555(self):
        assert CMF_1931_2DEG[35, 1] == pytest.approx(1.0)
        assert WAVELENGTHS_5NM[35] == 555.0

    def test_d65_normalised_at_560(self):
        assert D65_SPD[36] == pytest.approx(100.0)

    def test_tcs_are_reflectances(self):
        assert TCS_REFLECTANCES.min() >= 0.0
        assert TCS_REFLECTANCES.max() <= 1.0
        assert TCS_LABELS[0] == "R1"
        assert TCS_LABELS[-1] == "R14"

    def test_interpolate_observer_between_samples(self):
        mid = interpolate_observer(557.5)
        np.testing.assert_allclose(mid, 0.5 * (CMF_1931_2DEG[35] + CMF_1931_2DEG[36]))

    def test_interpolate_observer_outside_range_is_zero(self):
        out = interpolate_observer(np.array([300.0, 900.0]))
        assert out.shape == (2, 3)
        np.testing.assert_array_equal(out, 0.0)


class TestSpectralDistribution:

    def test_sorted_on_construction(self):
        sd = SpectralDistribution([600, 500, 550], [1.0, 3.0, 2.0])
        np.testing.assert_array_equal(sd.wavelengths, [500, 550, 600])
        np.testing.assert_array_equal(sd.intensities, [3.0, 2.0, 1.0])

    def test_arrays_are_read_only(self):
        sd = SpectralDistribution([500, 600], [1.0, 2.0])
        with pytest.raises(ValueError):
            sd.intensities[0] = 5.0

    def test_frozen(self):
        sd = SpectralDistribution([500, 600], [1.0, 2.0])
        with pytest.raises(Exception):
            sd.wavelengths = np.array([1.0, 2.0])

    def test_from_pairs_and_properties(self):
        sd = SpectralDistribution.from_pairs([(450, 0.2), (460, 0.9), (470, 0.4)])
        assert len(sd) == 3
        assert sd.peak_wavelength == 460.0
        assert sd.min_wavelength == 450.0
        assert sd.max_wavelength == 470.0

    def test_shifted(self):
        sd = SpectralDistribution([500, 600], [1.0, 2.0]).shifted(5.0)
        np.testing.assert_array_equal(sd.wavelengths, [505.0, 605.0])

    @pytest.mark.parametrize("wl, val", [
        ([500.0], [1.0]),
        ([500.0, 600.0], [1.0]),
        ([500.0, 600.0], [1.0, -0.5]),
        ([500.0, np.nan], [1.0, 1.0]),
        ([500.0, 600.0], [1.0, np.inf]),
    ])
    def test_invalid_input_raises(self, wl, val):
        with pytest.raises(ColorValidationError):
            SpectralDistribution(wl, val)

    def test_as_spectral_arrays_accepts_pairs(self):
        wl, val = as_spectral_arrays([(510, 1.0), (500, 2.0)])
        np.testing.assert_array_equal(wl, [500.0, 510.0])
        np.testing.assert_array_equal(val, [2.0, 1.0])

    def test_as_spectral_arrays_empty(self):
        with pytest.raises(ColorValidationError):
            as_spectral_arrays([])
        wl, val = as_spectral_arrays([], allow_empty=True)
        assert wl.size == val.size == 0


class TestResampling:

    def test_grid_resample_is_identity_on_grid(self, d65_spd):
        np.testing.assert_allclose(SpectralIntegrator.resample_to_grid(d65_spd), D65_SPD)

    def test_grid_resample_flat_edges(self):
        sd = SpectralDistribution([450.0, 650.0], [2.0, 4.0])
        grid = SpectralIntegrator.resample_to_grid(sd)
        assert grid.shape == (81,)
        assert grid[0] == 2.0
        assert grid[-1] == 4.0
        assert grid[WAVELENGTHS_5NM == 550.0][0] == pytest.approx(3.0)

    def test_linear_resample_keeps_nodes(self):
        sd = SpectralDistribution([500.0, 510.0, 520.0], [1.0, 3.0, 2.0])
        out = SpectralIntegrator.resample(sd, step=5.0)
        np.testing.assert_allclose(out.wavelengths, [500, 505, 510, 515, 520])
        np.testing.assert_allclose(out.intensities, [1.0, 2.0, 3.0, 2.5, 2.0])

    @pytest.mark.parametrize("method", ["pchip", "akima", "cubic"])
    def test_spline_resample_close_to_smooth_curve(self, gaussian_spd, method):
        coarse = gaussian_spd(center=550.0, sigma=30.0, step=10.0)
        fine = SpectralIntegrator.resample(coarse, step=1.0, method=method)
        expected = np.exp(-0.5 * ((fine.wavelengths - 550.0) / 30.0) ** 2)
        np.testing.assert_allclose(fine.intensities, expected, atol=1e-2)

    @pytest.mark.parametrize("method", ["pchip", "akima", "cubic"])
    def test_spline_resample_holds_edges(self, method):
        sd = SpectralDistribution([400.0, 450.0, 500.0, 550.0], [1.0, 2.0, 1.5, 3.0])
        out = SpectralIntegrator.resample(sd, step=10.0, start=380.0, end=570.0, method=method)
        assert out.intensities[0] == pytest.approx(1.0)
        assert out.intensities[-1] == pytest.approx(3.0)
        assert out.intensities.min() >= 0.0

    def test_resample_rejects_bad_arguments(self, d65_spd):
        with pytest.raises(ColorValidationError, match="Unknown resampling method"):
            SpectralIntegrator.resample(d65_spd, method="sinc")
        with pytest.raises(ColorValidationError):
            SpectralIntegrator.resample(d65_spd, step=0.0)
        with pytest.raises(ColorValidationError):
            SpectralIntegrator.resample(d65_spd, start=700.0, end=500.0)


class TestIntegration:

    def test_d65_white_point(self, d65_spd):
        xyz = SpectralIntegrator.spectrum_to_xyz(d65_spd)
        assert xyz[1] == pytest.approx(100.0)
        x = xyz[0] / xyz.sum()
        y = xyz[1] / xyz.sum()
        assert x == pytest.approx(0.3127, abs=5e-4)
        assert y == pytest.approx(0.3290, abs=5e-4)

    def test_illuminant_xyz_matches_reference_white(self):
        np.testing.assert_allclose(SpectralIntegrator.illuminant_xyz(D65_SPD), REF_WHITE_D65, rtol=2e-3)

    def test_unnormalised_integration(self, d65_spd):
        raw = SpectralIntegrator.spectrum_to_xyz(d65_spd, normalize=False)
        assert raw[1] != pytest.approx(100.0)
        norm = SpectralIntegrator.spectrum_to_xyz(d65_spd)
        np.testing.assert_allclose(raw * (100.0 / raw[1]), norm)

    def test_empty_spectrum_gives_zero(self):
        np.testing.assert_array_equal(SpectralIntegrator.spectrum_to_xyz([]), [0.0, 0.0, 0.0])

    def test_zero_power_skips_normalisation(self):
        xyz = SpectralIntegrator.illuminant_xyz(np.zeros(81))
        np.testing.assert_array_equal(xyz, 0.0)

    def test_perfect_reflector_equals_white(self):
        white = SpectralIntegrator.illuminant_xyz(D65_SPD)
        sample = SpectralIntegrator.sample_xyz(D65_SPD, np.ones(81))
        np.testing.assert_allclose(sample, white, rtol=1e-12)

    def test_batch_matches_single(self):
        batch = SpectralIntegrator.sample_xyz_batch(D65_SPD, TCS_REFLECTANCES)
        assert batch.shape == (14, 3)
        for i in (0, 8, 13):
            np.testing.assert_allclose(batch[i], SpectralIntegrator.sample_xyz(D65_SPD, TCS_REFLECTANCES[i]))

    def test_length_mismatch_raises(self):
        with pytest.raises(SpectralLengthError):
            SpectralIntegrator.sample_xyz(D65_SPD, np.ones(80))

    def test_length_mismatch_truncates_on_request(self):
        xyz = SpectralIntegrator.sample_xyz(D65_SPD, np.ones(60), truncate=True)
        assert xyz.shape == (3,)
        assert xyz[1] == pytest.approx(100.0)

    def test_length_mismatch_truncates_from_config(self):
        with config_override(truncate_mismatched=True):
            xyz = SpectralIntegrator.sample_xyz_batch(D65_SPD[:70], TCS_REFLECTANCES)
        assert xyz.shape == (14, 3)

    def test_illuminant_needs_full_grid(self):
        with pytest.raises(SpectralLengthError):
            SpectralIntegrator.illuminant_xyz(D65_SPD[:40])

    def test_monochromatic(self):
        xyz = SpectralIntegrator.monochromatic_to_xyz(555.0)
        assert xyz.shape == (3,)
        assert xyz[1] == pytest.approx(100.0)
        np.testing.assert_array_equal(SpectralIntegrator.monochromatic_to_xyz(300.0), 0.0)
        assert SpectralIntegrator.monochromatic_to_xyz([450.0, 550.0]).shape == (2, 3)
