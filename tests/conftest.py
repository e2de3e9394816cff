# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""

import dataclasses

import numpy as np
import pytest

from lumen_config import configure, get_config
from lumen_spectral import SpectralDistribution
from lumen_tables import D65_SPD, WAVELENGTHS_5NM


@pytest.fixture(autouse=True)
def restore_config():
    """Engine switches are process-wide; undo whatever a test changed."""
    snapshot = get_config()
    yield
    configure(**dataclasses.asdict(snapshot))


@pytest.fixture
def d65_spd():
    return SpectralDistribution(WAVELENGTHS_5NM, D65_SPD)


@pytest.fixture
def gaussian_spd():
    def _make(center=550.0, sigma=10.0, step=1.0):
        wl = np.arange(380.0, 780.0 + step, step)
        return SpectralDistribution(wl, np.exp(-0.5 * ((wl - center) / sigma) ** 2))

    return _make
