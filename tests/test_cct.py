# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for McCamy CCT, the Planckian locus and Duv.
"""

import numpy as np
import pytest

from lumen_cct import CCT_MIN, CCTDuvEstimator as CCT
from lumen_errors import ColorValidationError
from lumen_tables import CCT_PRESETS, D65_XY


class TestMcCamy:

    def test_d65(self):
        assert CCT.calculate_cct(*D65_XY) == pytest.approx(6505.08, abs=0.1)

    @pytest.mark.parametrize("preset, expected, tol", [
        ("D65", 6504.0, 10.0),
        ("D50", 5003.0, 10.0),
        ("A", 2856.0, 10.0),
    ])
    def test_presets(self, preset, expected, tol):
        p = CCT_PRESETS[preset]
        assert CCT.calculate_cct(p["x"], p["y"]) == pytest.approx(expected, abs=tol)

    def test_singular_point(self):
        with pytest.raises(ColorValidationError, match="undefined"):
            CCT.calculate_cct(0.3, 0.1858)

    def test_non_finite(self):
        with pytest.raises(ColorValidationError):
            CCT.calculate_cct(float("nan"), 0.33)

    def test_rounded_result(self):
        res = CCT.calculate_cct_and_duv(*D65_XY)
        assert res.cct == 6505
        assert isinstance(res.cct, int)
        assert res.duv == round(res.duv, 4)


class TestPlanckianLocus:

    def test_illuminant_a(self):
        np.testing.assert_allclose(CCT.planckian_xy(2856.0), [0.4476, 0.4074], atol=1e-3)

    def test_shapes(self):
        assert CCT.planckian_xy(3000.0).shape == (2,)
        assert CCT.planckian_xy([3000.0, 5000.0, 9000.0]).shape == (3, 2)
        assert CCT.planckian_ucs(np.full((2, 2), 4000.0)).shape == (2, 2, 2)

    def test_out_of_range_falls_back_to_d65(self):
        np.testing.assert_allclose(CCT.planckian_xy(1000.0), D65_XY)
        np.testing.assert_allclose(CCT.planckian_xy(30000.0), D65_XY)

    def test_locus_moves_towards_blue(self):
        xy = CCT.planckian_xy([2000.0, 3000.0, 6500.0, 20000.0])
        assert np.all(np.diff(xy[:, 0]) < 0.0)

    def test_ucs_matches_xy(self):
        x, y = CCT.planckian_xy(4500.0)
        u, v = CCT.planckian_ucs(4500.0)
        d = -2.0 * x + 12.0 * y + 3.0
        assert u == pytest.approx(4.0 * x / d)
        assert v == pytest.approx(6.0 * y / d)


class TestDuv:

    @pytest.mark.parametrize("T", [2700.0, 4000.0, 6500.0])
    def test_on_locus_is_zero(self, T):
        x, y = CCT.planckian_xy(T)
        assert CCT.calculate_duv(x, y) == pytest.approx(0.0, abs=2e-4)

    def test_d65_is_negative(self):
        # D65 sits above the locus (greenish)
        assert CCT.calculate_duv(*D65_XY) == pytest.approx(-0.0032, abs=5e-4)

    def test_sign(self):
        x, y = CCT.planckian_xy(4000.0)
        assert CCT.calculate_duv(x, y + 0.01) < 0.0
        assert CCT.calculate_duv(x, y - 0.01) > 0.0

    @pytest.mark.parametrize("T", [CCT_MIN, 2000.0])
    def test_near_search_edge_is_finite(self, T):
        x, y = CCT.planckian_xy(T)
        assert np.isfinite(CCT.calculate_duv(x, y))


class TestInterpretation:

    @pytest.mark.parametrize("cct, category", [
        (2700, "warm"),
        (3499.9, "warm"),
        (3500, "neutral"),
        (5500, "neutral"),
        (5501, "cool"),
        (9000, "cool"),
    ])
    def test_categories(self, cct, category):
        assert CCT.interpret_cct(cct).category == category

    def test_description(self):
        assert "Daylight" in CCT.interpret_cct(6500).description
