# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for reference illuminants, sample sets and the CRI / TLCI / TM-30
pipelines.
"""

import warnings

import numpy as np
import pytest

from lumen_config import config_override
from lumen_errors import ColorValidationError, SyntheticSampleWarning
from lumen_gamut import GamutGeometry
from lumen_illuminants import (
    daylight_spd,
    daylight_xy,
    illuminant_a_spd,
    planckian_spd,
    reference_illuminant,
)
from lumen_rendering import ColorRenderingEngine as CRE
from lumen_samples import CES_BIN_COUNT, CES_COUNT, color_evaluation_samples, tlci_patches
from lumen_spectral import SpectralDistribution
from lumen_tables import D65_SPD, GRID_SIZE, WAVELENGTHS_5NM


@pytest.fixture
def warm_planckian():
    """A 3000 K blackbody; its CCT-matched reference is (almost) itself."""
    return SpectralDistribution(WAVELENGTHS_5NM, planckian_spd(3000.0))


@pytest.fixture
def green_led(gaussian_spd):
    return gaussian_spd(center=530.0, sigma=12.0, step=1.0)


@pytest.fixture
def white_led():
    """Blue pump plus a broad yellow phosphor."""
    wl = np.arange(380.0, 781.0)
    blue = np.exp(-0.5 * ((wl - 450.0) / 10.0) ** 2)
    phosphor = 0.8 * np.exp(-0.5 * ((wl - 560.0) / 50.0) ** 2)
    return SpectralDistribution(wl, blue + phosphor)


class TestIlluminants:

    def test_planckian_normalised_at_560(self):
        spd = planckian_spd(4000.0)
        assert spd.shape == (GRID_SIZE,)
        assert spd[WAVELENGTHS_5NM == 560.0][0] == pytest.approx(100.0)

    def test_planckian_slope_follows_temperature(self):
        warm, cool = planckian_spd(2000.0), planckian_spd(10000.0)
        assert warm[-1] > warm[0]
        assert cool[0] > cool[-1]

    @pytest.mark.parametrize("T", [0.0, -100.0, float("nan")])
    def test_planckian_invalid_temperature(self, T):
        with pytest.raises(ColorValidationError):
            planckian_spd(T)

    def test_illuminant_a(self):
        np.testing.assert_allclose(illuminant_a_spd(), planckian_spd(2856.0))

    def test_daylight_locus(self):
        x, y = daylight_xy(6504.0)
        assert x == pytest.approx(0.3127, abs=2e-4)
        assert y == pytest.approx(0.3291, abs=2e-4)

    def test_daylight_reconstructs_d65(self):
        np.testing.assert_allclose(daylight_spd(6504.0), D65_SPD, atol=1.0)

    def test_daylight_clamps_with_warning(self):
        with pytest.warns(UserWarning, match="outside"):
            spd = daylight_spd(3000.0)
        np.testing.assert_allclose(spd, daylight_spd(4000.0))

    @pytest.mark.parametrize("cct, kind", [
        (2700.0, "planckian"),
        (4999.9, "planckian"),
        (5000.0, "D-series"),
        (6500.0, "D-series"),
    ])
    def test_reference_switch(self, cct, kind):
        ref = reference_illuminant(cct)
        assert ref.kind == kind
        assert ref.cct == cct


class TestSampleSets:

    def test_tlci_patches(self):
        patches = tlci_patches()
        assert len(patches) == 18
        assert patches.reflectances.shape == (18, GRID_SIZE)
        assert patches.bins is None

    def test_ces(self):
        ces = color_evaluation_samples()
        assert len(ces) == CES_COUNT == 95
        assert ces.reflectances.shape == (CES_COUNT, GRID_SIZE)
        assert ces.bins.min() >= 1
        assert ces.bins.max() <= CES_BIN_COUNT
        assert ces.names[0] == "CES01"

    def test_reflectance_bounds(self):
        assert tlci_patches().reflectances.min() >= 0.01
        assert tlci_patches().reflectances.max() <= 1.0
        assert color_evaluation_samples().reflectances.max() <= 0.99

    def test_built_once(self):
        assert tlci_patches() is tlci_patches()
        assert color_evaluation_samples() is color_evaluation_samples()

    def test_read_only(self):
        with pytest.raises(ValueError):
            tlci_patches().reflectances[0, 0] = 0.5


class TestCRI:

    def test_self_reference_is_near_perfect(self, warm_planckian):
        res = CRE.calculate_cri(warm_planckian)
        assert res.Ra > 99.0
        assert len(res.Ri) == 14
        assert min(res.Ri) > 98.0
        assert res.reference_type == "planckian"
        assert res.cct == pytest.approx(3000, abs=50)

    def test_daylight_source(self, d65_spd):
        res = CRE.calculate_cri(d65_spd)
        assert res.reference_type == "D-series"
        assert res.Ra > 98.0
        assert res.cct == pytest.approx(6504, abs=15)

    def test_narrowband_renders_poorly(self, green_led, warm_planckian):
        narrow = CRE.calculate_cri(green_led)
        assert narrow.Ra < CRE.calculate_cri(warm_planckian).Ra - 20.0
        assert 0.0 <= narrow.Ra <= 100.0

    def test_ra_is_mean_of_first_eight(self, white_led):
        res = CRE.calculate_cri(white_led)
        assert 0.0 < res.Ra < 100.0
        assert res.Ra == pytest.approx(np.mean(res.Ri[:8]), abs=0.11)
        # R9..R14 (saturated red etc.) must not leak into Ra
        assert abs(res.Ra - np.mean(res.Ri)) > 1.0

    def test_values_are_rounded(self, d65_spd):
        res = CRE.calculate_cri(d65_spd)
        assert res.Ra == round(res.Ra, 1)
        assert all(r == round(r, 1) for r in res.Ri)

    def test_no_synthetic_warning(self, d65_spd):
        with warnings.catch_warnings():
            warnings.simplefilter("error", SyntheticSampleWarning)
            CRE.calculate_cri(d65_spd)

    def test_dark_source_raises(self):
        dark = SpectralDistribution(WAVELENGTHS_5NM, np.zeros(GRID_SIZE))
        with pytest.raises(ColorValidationError, match="luminous power"):
            CRE.calculate_cri(dark)


class TestTLCI:

    def test_self_reference(self, warm_planckian):
        with pytest.warns(SyntheticSampleWarning, match="TLCI"):
            res = CRE.calculate_tlci(warm_planckian)
        assert res.Qa > 98.0
        assert len(res.Qi) == 18
        assert all(0.0 <= q <= 100.0 for q in res.Qi)

    def test_mean_of_rounded_patches(self, green_led):
        with config_override(warn_synthetic_samples=False):
            res = CRE.calculate_tlci(green_led)
        assert res.Qa == pytest.approx(round(float(np.mean(res.Qi)), 1))

    def test_warning_points_at_caller(self, d65_spd):
        with pytest.warns(SyntheticSampleWarning) as record:
            CRE.calculate_tlci(d65_spd)
        assert record[0].filename == __file__

    def test_warning_can_be_disabled(self, d65_spd):
        with config_override(warn_synthetic_samples=False):
            with warnings.catch_warnings():
                warnings.simplefilter("error", SyntheticSampleWarning)
                CRE.calculate_tlci(d65_spd)


class TestTM30:

    def test_self_reference(self, warm_planckian):
        with pytest.warns(SyntheticSampleWarning, match="TM-30"):
            res = CRE.calculate_tm30(warm_planckian)
        assert res.Rf > 98.0
        assert res.Rg == pytest.approx(100.0, abs=2.0)
        assert all(abs(h) < 2.0 for h in res.bin_hue_shift)
        assert all(c == pytest.approx(1.0, abs=0.03) for c in res.bin_chroma_change)

    def test_bin_layout(self, d65_spd):
        with config_override(warn_synthetic_samples=False):
            res = CRE.calculate_tm30(d65_spd)
        assert len(res.bin_rf) == CES_BIN_COUNT
        assert len(res.color_vectors) == CES_BIN_COUNT
        assert [v.bin for v in res.color_vectors] == list(range(1, 17))
        assert res.color_vectors[0].hue_angle == pytest.approx(11.25)
        assert res.color_vectors[-1].hue_angle == pytest.approx(348.75)
        assert all(-180.0 <= h <= 180.0 for h in res.bin_hue_shift)

    def test_narrowband_has_lower_fidelity(self, green_led, warm_planckian):
        with config_override(warn_synthetic_samples=False):
            narrow = CRE.calculate_tm30(green_led)
            broad = CRE.calculate_tm30(warm_planckian)
        assert narrow.Rf < broad.Rf
        assert 0.0 <= narrow.Rf <= 100.0
        assert narrow.Rg >= 0.0

    def test_collapsed_reference_gamut(self, d65_spd, monkeypatch):
        monkeypatch.setattr(GamutGeometry, "polygon_area", staticmethod(lambda a, b: 1e-20))
        with config_override(warn_synthetic_samples=False):
            res = CRE.calculate_tm30(d65_spd)
        assert res.Rg == 100.0


class TestEvaluation:

    def test_bundle_matches_individual_metrics(self, d65_spd):
        with pytest.warns(SyntheticSampleWarning):
            bundle = CRE.evaluate_light_source(d65_spd)
        with config_override(warn_synthetic_samples=False):
            assert bundle.tlci == CRE.calculate_tlci(d65_spd)
            assert bundle.tm30 == CRE.calculate_tm30(d65_spd)
        assert bundle.cri == CRE.calculate_cri(d65_spd)

    def test_prepare(self, d65_spd):
        ctx = CRE.prepare(d65_spd)
        assert ctx.grid_spd.shape == (GRID_SIZE,)
        assert ctx.white_xyz[1] == pytest.approx(100.0)
        assert ctx.reference_white_xyz[1] == pytest.approx(100.0)
        assert ctx.reference.kind == "D-series"
