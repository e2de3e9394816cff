# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for chromaticity, CIELAB and display colour conversions.
"""

import numpy as np
import pytest

from lumen_colorspace import LAB_KAPPA, ChromaticitySpace as CS
from lumen_config import config_override
from lumen_errors import ColorValidationError
from lumen_spectral import SpectralIntegrator
from lumen_tables import D65_UV, D65_XY, REF_WHITE_D50, REF_WHITE_D65


class TestChromaticity:

    def test_white_xy(self):
        np.testing.assert_allclose(CS.xyz_to_xy(REF_WHITE_D65), D65_XY, atol=1e-4)

    def test_white_uv(self):
        np.testing.assert_allclose(CS.xyz_to_uv(REF_WHITE_D65), D65_UV, atol=1e-4)

    def test_black_falls_back_to_d65(self):
        np.testing.assert_array_equal(CS.xyz_to_xy([0.0, 0.0, 0.0]), D65_XY)
        np.testing.assert_array_equal(CS.xyz_to_uv([0.0, 0.0, 0.0]), D65_UV)

    def test_ucs_black_is_origin(self):
        np.testing.assert_array_equal(CS.xyz_to_ucs_uv([0.0, 0.0, 0.0]), [0.0, 0.0])
        np.testing.assert_array_equal(CS.xy_to_ucs_uv([1.5, 0.0]), [0.0, 0.0])

    def test_ucs_v_is_two_thirds_of_v_prime(self):
        xyz = np.array([41.24, 21.26, 1.93])
        uv = CS.xyz_to_ucs_uv(xyz)
        uvp = CS.xyz_to_uv(xyz)
        assert uv[0] == pytest.approx(uvp[0])
        assert uv[1] == pytest.approx(uvp[1] * 2.0 / 3.0)

    def test_xy_uv_roundtrip(self):
        xy = np.array([[0.64, 0.33], [0.30, 0.60], [0.15, 0.06]])
        np.testing.assert_allclose(CS.uv_to_xy(CS.xy_to_uv(xy)), xy, atol=1e-12)

    def test_xy_to_uv_degenerate(self):
        np.testing.assert_array_equal(CS.xy_to_uv([1.5, 0.0]), D65_UV)

    def test_shapes_are_preserved(self):
        xyz = np.full((2, 4, 3), 50.0)
        assert CS.xyz_to_xy(xyz).shape == (2, 4, 2)
        assert CS.xyz_to_lab(xyz).shape == (2, 4, 3)
        assert CS.xyz_to_xy(xyz[0, 0]).shape == (2,)

    def test_xyY_roundtrip(self):
        xyz = np.array([[20.0, 30.0, 40.0], [95.047, 100.0, 108.883]])
        np.testing.assert_allclose(CS.xyY_to_xyz(CS.xyz_to_xyY(xyz)), xyz, rtol=1e-12)

    def test_xyY_zero_y(self):
        np.testing.assert_array_equal(CS.xyY_to_xyz([0.3, 0.0, 50.0]), [0.0, 0.0, 0.0])

    def test_uvY_roundtrip(self):
        xyz = np.array([20.0, 30.0, 40.0])
        np.testing.assert_allclose(CS.uvY_to_xyz(CS.xyz_to_uvY(xyz)), xyz, rtol=1e-10)

    def test_nan_raises(self):
        with pytest.raises(ColorValidationError):
            CS.xyz_to_xy([np.nan, 1.0, 1.0])

    def test_wrong_width_raises(self):
        with pytest.raises(ColorValidationError, match="last dimension"):
            CS.xyz_to_xy([1.0, 2.0])


class TestLab:

    def test_white_is_l100(self):
        np.testing.assert_allclose(CS.xyz_to_lab(REF_WHITE_D65), [100.0, 0.0, 0.0], atol=1e-9)

    def test_custom_white(self):
        np.testing.assert_allclose(CS.xyz_to_lab(REF_WHITE_D50, white=REF_WHITE_D50),
                                   [100.0, 0.0, 0.0], atol=1e-9)

    def test_dark_values_use_linear_segment(self):
        lab = CS.xyz_to_lab(REF_WHITE_D65 * 0.005)
        assert lab[0] == pytest.approx(LAB_KAPPA * 0.005, rel=1e-9)

    def test_roundtrip(self):
        xyz = np.array([[41.24, 21.26, 1.93], [18.05, 7.22, 95.05], [0.3, 0.2, 0.1]])
        np.testing.assert_allclose(CS.lab_to_xyz(CS.xyz_to_lab(xyz)), xyz, rtol=1e-9, atol=1e-12)

    def test_invalid_white_raises(self):
        with pytest.raises(ColorValidationError, match="white"):
            CS.xyz_to_lab(REF_WHITE_D65, white=[95.0, 0.0, 108.0])

    def test_lch(self):
        lch = CS.lab_to_lch([50.0, 0.0, -10.0])
        np.testing.assert_allclose(lch, [50.0, 10.0, 270.0], atol=1e-9)
        np.testing.assert_allclose(CS.lch_to_lab(lch), [50.0, 0.0, -10.0], atol=1e-9)

    def test_hue_range(self):
        lch = CS.lab_to_lch(np.array([[50.0, 1.0, -1e-9], [50.0, -1.0, 0.0], [50.0, 0.0, 0.0]]))
        assert np.all(lch[:, 2] >= 0.0)
        assert np.all(lch[:, 2] < 360.0)

    def test_strict_mode_matches_fast_mode(self):
        xyz = np.array([[41.24, 21.26, 1.93], [0.1, 0.1, 0.1]])
        fast = CS.xyz_to_lab(xyz)
        with config_override(strict_ieee=True):
            strict = CS.xyz_to_lab(xyz)
            strict_rgb = CS.xyz_to_rgb(xyz)
        np.testing.assert_allclose(strict, fast, rtol=1e-12)
        np.testing.assert_array_equal(strict_rgb, CS.xyz_to_rgb(xyz))


class TestDisplayRGB:

    def test_white_and_black(self):
        rgb = CS.xyz_to_rgb(REF_WHITE_D65)
        assert rgb.dtype == np.int64
        np.testing.assert_array_equal(rgb, [255, 255, 255])
        np.testing.assert_array_equal(CS.xyz_to_rgb([0.0, 0.0, 0.0]), [0, 0, 0])

    def test_rgb_to_xyz_white(self):
        np.testing.assert_allclose(CS.rgb_to_xyz([255, 255, 255]), REF_WHITE_D65, atol=0.02)

    @pytest.mark.parametrize("rgb", [[255, 0, 0], [0, 128, 255], [12, 200, 77], [128, 128, 128]])
    def test_8bit_roundtrip(self, rgb):
        np.testing.assert_array_equal(CS.xyz_to_rgb(CS.rgb_to_xyz(rgb)), rgb)

    def test_out_of_gamut_saturates(self):
        green_laser = SpectralIntegrator.monochromatic_to_xyz(520.0)
        rgb = CS.xyz_to_rgb(green_laser)
        assert rgb.min() >= 0 and rgb.max() <= 255
        assert not CS.is_in_srgb_gamut(green_laser)

    def test_gamut_check(self):
        assert CS.is_in_srgb_gamut(REF_WHITE_D65)
        mask = CS.is_in_srgb_gamut(np.array([REF_WHITE_D65, [80.0, 10.0, 0.0]]))
        np.testing.assert_array_equal(mask, [True, False])

    def test_linear_rgb_roundtrip(self):
        xyz = np.array([20.0, 30.0, 40.0])
        np.testing.assert_allclose(CS.linear_rgb_to_xyz(CS.xyz_to_linear_rgb(xyz)), xyz, rtol=1e-5)


class TestHSLAndCMYK:

    @pytest.mark.parametrize("rgb, hsl", [
        ([255, 0, 0], [0.0, 100.0, 50.0]),
        ([0, 255, 0], [120.0, 100.0, 50.0]),
        ([0, 0, 255], [240.0, 100.0, 50.0]),
        ([255, 255, 255], [0.0, 0.0, 100.0]),
        ([0, 0, 0], [0.0, 0.0, 0.0]),
    ])
    def test_rgb_to_hsl(self, rgb, hsl):
        np.testing.assert_allclose(CS.rgb_to_hsl(rgb), hsl, atol=1e-9)

    @pytest.mark.parametrize("rgb", [[255, 0, 0], [10, 200, 30], [128, 64, 192], [77, 77, 77]])
    def test_hsl_roundtrip(self, rgb):
        np.testing.assert_array_equal(CS.hsl_to_rgb(CS.rgb_to_hsl(rgb)), rgb)

    def test_cmyk(self):
        np.testing.assert_allclose(CS.rgb_to_cmyk([255, 0, 0]), [0.0, 100.0, 100.0, 0.0])
        np.testing.assert_allclose(CS.rgb_to_cmyk([0, 0, 0]), [0.0, 0.0, 0.0, 100.0])
        assert CS.rgb_to_cmyk([[1, 2, 3], [4, 5, 6]]).shape == (2, 4)

    @pytest.mark.parametrize("rgb", [[255, 0, 0], [10, 200, 30], [0, 0, 0]])
    def test_cmyk_roundtrip(self, rgb):
        np.testing.assert_array_equal(CS.cmyk_to_rgb(CS.rgb_to_cmyk(rgb)), rgb)


class TestHex:

    def test_rgb_to_hex(self):
        assert CS.rgb_to_hex([255, 0, 0]) == "#FF0000"
        assert CS.rgb_to_hex([[0, 0, 0], [18, 52, 86]]) == ["#000000", "#123456"]

    @pytest.mark.parametrize("code, rgb", [
        ("#FF8000", [255, 128, 0]),
        ("ff8000", [255, 128, 0]),
        ("#abc", [170, 187, 204]),
    ])
    def test_hex_to_rgb(self, code, rgb):
        np.testing.assert_array_equal(CS.hex_to_rgb(code), rgb)

    @pytest.mark.parametrize("code", ["#12345", "#GGGGGG", "", "#1234567", None])
    def test_invalid_hex(self, code):
        with pytest.raises(ColorValidationError):
            CS.hex_to_rgb(code)

    def test_xyz_to_hex(self):
        assert CS.xyz_to_hex(REF_WHITE_D65) == "#FFFFFF"


class TestGeometryHelpers:

    TRIANGLE = [(0.64, 0.33), (0.30, 0.60), (0.15, 0.06)]

    def test_point_in_triangle(self):
        assert CS.is_in_gamut(D65_XY, self.TRIANGLE)
        assert not CS.is_in_gamut((0.08, 0.80), self.TRIANGLE)

    def test_vertex_counts_as_inside(self):
        assert CS.is_in_gamut((0.64, 0.33), self.TRIANGLE)

    @pytest.mark.parametrize("i, j", [(0, 1), (1, 2), (0, 2)])
    def test_edge_midpoint_counts_as_inside(self, i, j):
        tri = np.asarray(self.TRIANGLE)
        mid = tri[[i, j]].mean(axis=0)
        assert CS.is_in_gamut(mid, self.TRIANGLE)
        assert CS.is_in_gamut(mid, tri[::-1])

    def test_degenerate_triangle(self):
        assert not CS.is_in_gamut((0.1, 0.1), [(0.0, 0.0), (0.5, 0.5), (1.0, 1.0)])
        assert not CS.is_in_gamut((0.1, 0.1), [(0.0, 0.0), (0.5, 0.5)])

    def test_uv_distance(self):
        assert CS.uv_distance([0.0, 0.0], [0.003, 0.004]) == pytest.approx(0.005)
        d = CS.uv_distance(np.zeros((3, 2)), np.ones((3, 2)))
        np.testing.assert_allclose(d, np.sqrt(2.0))
