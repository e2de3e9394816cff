# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for CIE76, CIE94 and CIEDE2000 colour differences.
"""

import numpy as np
import pytest

from lumen_delta_e import ColorDifferenceEngine as DE
from lumen_errors import ColorValidationError

# Sharma, Wu & Dalal (2005): L1, a1, b1, L2, a2, b2, Delta E00
SHARMA_PAIRS = [
    (50.0000, 2.6772, -79.7751, 50.0000, 0.0000, -82.7485, 2.0425),
    (50.0000, 3.1571, -77.2803, 50.0000, 0.0000, -82.7485, 2.8615),
    (50.0000, 2.8361, -74.0200, 50.0000, 0.0000, -82.7485, 3.4412),
    (50.0000, -1.3802, -84.2814, 50.0000, 0.0000, -82.7485, 1.0000),
    (50.0000, -1.1848, -84.8006, 50.0000, 0.0000, -82.7485, 1.0000),
    (50.0000, -0.9009, -85.5211, 50.0000, 0.0000, -82.7485, 1.0000),
    (50.0000, 0.0000, 0.0000, 50.0000, -1.0000, 2.0000, 2.3669),
    (50.0000, -1.0000, 2.0000, 50.0000, 0.0000, 0.0000, 2.3669),
    (50.0000, 2.4900, -0.0010, 50.0000, -2.4900, 0.0009, 7.1792),
    (50.0000, 2.4900, -0.0010, 50.0000, -2.4900, 0.0010, 7.1792),
    (50.0000, 2.4900, -0.0010, 50.0000, -2.4900, 0.0011, 7.2195),
    (50.0000, 2.4900, -0.0010, 50.0000, -2.4900, 0.0012, 7.2195),
    (50.0000, -0.0010, 2.4900, 50.0000, 0.0009, -2.4900, 4.8045),
    (50.0000, -0.0010, 2.4900, 50.0000, 0.0010, -2.4900, 4.8045),
    (50.0000, -0.0010, 2.4900, 50.0000, 0.0011, -2.4900, 4.7461),
    (50.0000, 2.5000, 0.0000, 50.0000, 0.0000, -2.5000, 4.3065),
    (50.0000, 2.5000, 0.0000, 73.0000, 25.0000, -18.0000, 27.1492),
    (50.0000, 2.5000, 0.0000, 61.0000, -5.0000, 29.0000, 22.8977),
    (50.0000, 2.5000, 0.0000, 56.0000, -27.0000, -3.0000, 31.9030),
    (50.0000, 2.5000, 0.0000, 58.0000, 24.0000, 15.0000, 19.4535),
    (50.0000, 2.5000, 0.0000, 50.0000, 3.1736, 0.5854, 1.0000),
    (50.0000, 2.5000, 0.0000, 50.0000, 3.2972, 0.0000, 1.0000),
    (50.0000, 2.5000, 0.0000, 50.0000, 1.8634, 0.5757, 1.0000),
    (50.0000, 2.5000, 0.0000, 50.0000, 3.2592, 0.3350, 1.0000),
    (60.2574, -34.0099, 36.2677, 60.4626, -34.1751, 39.4387, 1.2644),
    (63.0109, -31.0961, -5.8663, 62.8187, -29.7946, -4.0864, 1.2630),
    (61.2901, 3.7196, -5.3901, 61.4292, 2.2480, -4.9620, 1.8731),
    (35.0831, -44.1164, 3.7933, 35.0232, -40.0716, 1.5901, 1.8645),
    (22.7233, 20.0904, -46.6940, 23.0331, 14.9730, -42.5619, 2.0373),
    (36.4612, 47.8580, 18.3852, 36.2715, 50.5065, 21.2231, 1.4146),
    (90.8027, -2.0831, 1.4410, 91.1528, -1.6435, 0.0447, 1.4441),
    (90.9257, -0.5406, -0.9208, 88.6381, -0.8985, -0.7239, 1.5381),
    (6.7747, -0.2908, -2.4247, 5.8714, -0.0985, -2.2286, 0.6377),
    (2.0776, 0.0795, -1.1350, 0.9033, -0.0636, -0.5514, 0.9082),
]


class TestDeltaE2000:
    """CIEDE2000 against the published reference data."""

    @pytest.mark.parametrize("pair", SHARMA_PAIRS)
    def test_sharma_pair(self, pair):
        lab1, lab2, expected = pair[:3], pair[3:6], pair[6]
        assert DE.delta_e_2000(lab1, lab2) == pytest.approx(expected, abs=1e-4)

    def test_batch_matches_pairs(self):
        data = np.array(SHARMA_PAIRS)
        res = DE.delta_e_2000(data[:, :3], data[:, 3:6])
        assert res.shape == (len(SHARMA_PAIRS),)
        np.testing.assert_allclose(res, data[:, 6], atol=1e-4)

    def test_identical_colours(self):
        assert DE.delta_e_2000([50.0, 10.0, -20.0], [50.0, 10.0, -20.0]) == pytest.approx(0.0, abs=1e-12)

    def test_symmetric(self):
        a, b = [60.2574, -34.0099, 36.2677], [60.4626, -34.1751, 39.4387]
        assert DE.delta_e_2000(a, b) == pytest.approx(DE.delta_e_2000(b, a), abs=1e-9)

    def test_lightness_weight(self):
        a, b = [50.0, 0.0, 0.0], [60.0, 0.0, 0.0]
        assert DE.delta_e_2000(a, b, k_L=2.0) < DE.delta_e_2000(a, b)

    @pytest.mark.parametrize("weights", [{"k_L": 0.0}, {"k_C": -1.0}, {"k_H": float("nan")}])
    def test_invalid_weights(self, weights):
        with pytest.raises(ColorValidationError):
            DE.delta_e_2000([50.0, 0.0, 0.0], [51.0, 0.0, 0.0], **weights)


class TestDeltaE76:

    def test_identical(self):
        assert DE.delta_e_76([50.0, 20.0, -30.0], [50.0, 20.0, -30.0]) == pytest.approx(0.0, abs=1e-10)

    def test_pythagorean(self):
        assert DE.delta_e_76([50.0, 0.0, 0.0], [50.0, 3.0, 4.0]) == pytest.approx(5.0)
        assert DE.delta_e_76([50.0, 0.0, 0.0], [60.0, 0.0, 0.0]) == pytest.approx(10.0)

    def test_returns_float_for_single_pair(self):
        assert isinstance(DE.delta_e_76([50.0, 0.0, 0.0], [50.0, 3.0, 4.0]), float)


class TestDeltaE94:

    def test_identical(self):
        assert DE.delta_e_94([50.0, 20.0, -30.0], [50.0, 20.0, -30.0]) == pytest.approx(0.0, abs=1e-10)

    def test_pure_lightness(self):
        assert DE.delta_e_94([50.0, 0.0, 0.0], [60.0, 0.0, 0.0]) == pytest.approx(10.0)

    def test_asymmetric(self):
        high, low = [50.0, 30.0, 0.0], [50.0, 10.0, 0.0]
        assert DE.delta_e_94(high, low) == pytest.approx(20.0 / 2.35)
        assert DE.delta_e_94(low, high) == pytest.approx(20.0 / 1.45)

    def test_hue_difference(self):
        # C1 = 2.5 so SC = 1.1125, SH = 1.0375; dC = 0 leaves only dH
        res = DE.delta_e_94([50.0, 2.5, 0.0], [50.0, 0.0, -2.5])
        assert res == pytest.approx(np.sqrt(12.5) / 1.0375)

    def test_textiles_halves_lightness(self):
        assert DE.delta_e_94([50.0, 0.0, 0.0], [60.0, 0.0, 0.0], textiles=True) == pytest.approx(5.0)

    def test_invalid_k_L(self):
        with pytest.raises(ColorValidationError, match="k_L"):
            DE.delta_e_94([50.0, 0.0, 0.0], [60.0, 0.0, 0.0], k_L=0.0)


class TestBroadcasting:

    def test_one_against_many(self):
        ref = [50.0, 0.0, 0.0]
        samples = np.array([[50.0, 3.0, 4.0], [60.0, 0.0, 0.0], [50.0, 0.0, 0.0]])
        np.testing.assert_allclose(DE.delta_e_76(ref, samples), [5.0, 10.0, 0.0])
        np.testing.assert_allclose(DE.delta_e_76(samples, ref), [5.0, 10.0, 0.0])
        assert DE.delta_e_2000(ref, samples).shape == (3,)

    def test_mismatched_batches(self):
        with pytest.raises(ColorValidationError, match="broadcastable"):
            DE.delta_e_76(np.zeros((2, 3)), np.zeros((3, 3)))

    def test_wrong_width(self):
        with pytest.raises(ColorValidationError):
            DE.delta_e_2000([50.0, 0.0], [50.0, 0.0])

    def test_nan_rejected(self):
        with pytest.raises(ColorValidationError):
            DE.delta_e_94([np.nan, 0.0, 0.0], [50.0, 0.0, 0.0])
