# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Synthetic Reflectance Sets
==========================
Approximate reflectance spectra used by the TLCI and TM-30 pipelines.

Neither set is the published one.  Each sample is a flat base level plus
Gaussian bumps (and, for the ColorChecker patches, a low-frequency sine
ripple) on the 5 nm grid:

    patch:  clip(base + ripple * sin(0.3 i) + sum_k G_k(lambda), 0.01, 1.00)
    CES:    clip(base + sum_k G_k(lambda), 0.01, 0.99)

    G_k(lambda) = height_k * exp(-0.5 * ((lambda - centre_k) / width_k)^2)

The Colour Evaluation Samples are spread over the 16 TM-30 hue bins: six per
bin for bins 1-15 and five for bin 16, 95 in total.

Both sets are built on first use, once, under a lock, and published as
read-only arrays.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Final, Optional, Tuple

import numpy as np

from lumen_tables import GRID_SIZE, WAVELENGTHS_5NM, ArrayFloat

__all__ = [
    "CES_COUNT",
    "CES_BIN_COUNT",
    "TLCI_PATCH_COUNT",
    "SampleSet",
    "tlci_patches",
    "color_evaluation_samples",
]

logger = logging.getLogger(__name__)

# (centre nm, width nm, height)
Peak = Tuple[float, float, float]


# =============================================================================
# 1. DEFINITIONS
# =============================================================================

# (name, base, ripple, peaks)
_PATCH_DEFINITIONS: Final[Tuple[Tuple[str, float, float, Tuple[Peak, ...]], ...]] = (
    ("Dark Skin", 0.12, 0.07, ((620, 80, 0.15),)),
    ("Light Skin", 0.35, 0.15, ((600, 100, 0.25),)),
    ("Blue Sky", 0.20, 0.10, ((470, 60, 0.15),)),
    ("Foliage", 0.12, 0.06, ((540, 50, 0.12),)),
    ("Blue Flower", 0.25, 0.12, ((450, 50, 0.12), (650, 60, 0.10))),
    ("Bluish Green", 0.30, 0.12, ((500, 60, 0.20),)),
    ("Orange", 0.10, 0.05, ((600, 50, 0.40),)),
    ("Purplish Blue", 0.15, 0.08, ((440, 40, 0.20),)),
    ("Moderate Red", 0.10, 0.05, ((630, 60, 0.30),)),
    ("Purple", 0.10, 0.05, ((420, 40, 0.10), (680, 60, 0.08))),
    ("Yellow Green", 0.15, 0.08, ((550, 60, 0.30),)),
    ("Orange Yellow", 0.12, 0.06, ((580, 60, 0.45),)),
    ("Blue", 0.10, 0.06, ((450, 40, 0.25),)),
    ("Green", 0.10, 0.05, ((530, 50, 0.25),)),
    ("Red", 0.08, 0.04, ((650, 60, 0.35),)),
    ("Yellow", 0.10, 0.05, ((570, 70, 0.50),)),
    ("Magenta", 0.15, 0.08, ((430, 40, 0.12), (650, 60, 0.18))),
    ("Cyan", 0.25, 0.10, ((490, 50, 0.20),)),
)

# (hue bin, base, peaks)
_CES_DEFINITIONS: Final[Tuple[Tuple[int, float, Tuple[Peak, ...]], ...]] = (
    # 1: red
    (1, 0.08, ((650, 50, 0.40),)),
    (1, 0.10, ((640, 45, 0.35),)),
    (1, 0.06, ((660, 55, 0.45),)),
    (1, 0.12, ((645, 40, 0.30),)),
    (1, 0.09, ((655, 50, 0.38),)),
    (1, 0.07, ((635, 60, 0.42),)),

    # 2: red-orange
    (2, 0.08, ((620, 50, 0.38),)),
    (2, 0.10, ((615, 45, 0.35),)),
    (2, 0.06, ((625, 55, 0.40),)),
    (2, 0.12, ((610, 50, 0.32),)),
    (2, 0.09, ((618, 48, 0.36),)),
    (2, 0.07, ((630, 55, 0.42),)),

    # 3: orange
    (3, 0.08, ((595, 50, 0.42),)),
    (3, 0.10, ((590, 45, 0.38),)),
    (3, 0.06, ((600, 55, 0.45),)),
    (3, 0.12, ((588, 50, 0.35),)),
    (3, 0.09, ((598, 48, 0.40),)),
    (3, 0.07, ((592, 52, 0.43),)),

    # 4: yellow-orange
    (4, 0.10, ((580, 50, 0.45),)),
    (4, 0.12, ((575, 48, 0.42),)),
    (4, 0.08, ((585, 55, 0.48),)),
    (4, 0.14, ((572, 45, 0.38),)),
    (4, 0.11, ((578, 50, 0.44),)),
    (4, 0.09, ((582, 52, 0.46),)),

    # 5: yellow
    (5, 0.10, ((565, 55, 0.48),)),
    (5, 0.12, ((560, 50, 0.45),)),
    (5, 0.08, ((570, 60, 0.50),)),
    (5, 0.14, ((558, 48, 0.42),)),
    (5, 0.11, ((563, 52, 0.46),)),
    (5, 0.09, ((568, 55, 0.47),)),

    # 6: yellow-green
    (6, 0.10, ((550, 50, 0.40),)),
    (6, 0.12, ((545, 48, 0.38),)),
    (6, 0.08, ((555, 55, 0.42),)),
    (6, 0.14, ((540, 45, 0.35),)),
    (6, 0.11, ((548, 50, 0.39),)),
    (6, 0.09, ((552, 52, 0.41),)),

    # 7: green
    (7, 0.08, ((530, 45, 0.35),)),
    (7, 0.10, ((525, 42, 0.32),)),
    (7, 0.06, ((535, 50, 0.38),)),
    (7, 0.12, ((520, 40, 0.30),)),
    (7, 0.09, ((528, 45, 0.34),)),
    (7, 0.07, ((533, 48, 0.36),)),

    # 8: green-cyan
    (8, 0.10, ((510, 45, 0.30),)),
    (8, 0.12, ((505, 42, 0.28),)),
    (8, 0.08, ((515, 50, 0.32),)),
    (8, 0.14, ((500, 40, 0.25),)),
    (8, 0.11, ((508, 45, 0.29),)),
    (8, 0.09, ((512, 48, 0.31),)),

    # 9: cyan
    (9, 0.12, ((490, 45, 0.28),)),
    (9, 0.14, ((485, 42, 0.25),)),
    (9, 0.10, ((495, 50, 0.30),)),
    (9, 0.16, ((482, 40, 0.22),)),
    (9, 0.13, ((488, 45, 0.26),)),
    (9, 0.11, ((492, 48, 0.28),)),

    # 10: blue-cyan
    (10, 0.12, ((478, 40, 0.25),)),
    (10, 0.14, ((473, 38, 0.22),)),
    (10, 0.10, ((483, 45, 0.28),)),
    (10, 0.16, ((470, 35, 0.20),)),
    (10, 0.13, ((475, 40, 0.24),)),
    (10, 0.11, ((480, 42, 0.26),)),

    # 11: blue
    (11, 0.10, ((460, 38, 0.25),)),
    (11, 0.12, ((455, 35, 0.22),)),
    (11, 0.08, ((465, 42, 0.28),)),
    (11, 0.14, ((450, 32, 0.20),)),
    (11, 0.11, ((458, 38, 0.24),)),
    (11, 0.09, ((462, 40, 0.26),)),

    # 12: blue-violet
    (12, 0.10, ((445, 35, 0.22),)),
    (12, 0.12, ((440, 32, 0.20),)),
    (12, 0.08, ((450, 40, 0.25),)),
    (12, 0.14, ((435, 30, 0.18),)),
    (12, 0.11, ((442, 35, 0.21),)),
    (12, 0.09, ((448, 38, 0.23),)),

    # 13: violet
    (13, 0.10, ((430, 30, 0.18), (660, 40, 0.06))),
    (13, 0.12, ((425, 28, 0.16), (665, 42, 0.05))),
    (13, 0.08, ((435, 35, 0.20), (655, 38, 0.07))),
    (13, 0.14, ((420, 25, 0.14), (670, 45, 0.04))),
    (13, 0.11, ((428, 30, 0.17), (662, 40, 0.06))),
    (13, 0.09, ((432, 32, 0.19), (658, 38, 0.07))),

    # 14: purple
    (14, 0.10, ((420, 28, 0.15), (680, 50, 0.10))),
    (14, 0.12, ((415, 25, 0.12), (685, 52, 0.08))),
    (14, 0.08, ((425, 32, 0.18), (675, 48, 0.12))),
    (14, 0.14, ((410, 22, 0.10), (690, 55, 0.07))),
    (14, 0.11, ((418, 28, 0.14), (682, 50, 0.09))),
    (14, 0.09, ((422, 30, 0.16), (678, 48, 0.11))),

    # 15: pink
    (15, 0.12, ((410, 25, 0.10), (660, 55, 0.18))),
    (15, 0.14, ((405, 22, 0.08), (665, 58, 0.15))),
    (15, 0.10, ((415, 28, 0.12), (655, 52, 0.20))),
    (15, 0.16, ((400, 20, 0.06), (670, 60, 0.12))),
    (15, 0.13, ((408, 25, 0.09), (662, 55, 0.17))),
    (15, 0.11, ((412, 26, 0.11), (658, 53, 0.19))),

    # 16: pink-red
    (16, 0.10, ((660, 60, 0.30),)),
    (16, 0.12, ((655, 55, 0.28),)),
    (16, 0.08, ((665, 65, 0.32),)),
    (16, 0.14, ((650, 50, 0.25),)),
    (16, 0.11, ((658, 58, 0.29),)),
)

TLCI_PATCH_COUNT: Final[int] = len(_PATCH_DEFINITIONS)
CES_COUNT: Final[int] = len(_CES_DEFINITIONS)
CES_BIN_COUNT: Final[int] = 16


@dataclass(frozen=True, slots=True)
class SampleSet:
    """
    A named reflectance set on the 5 nm grid.

    Attributes:
        names: One label per sample.
        reflectances: Read-only array, shape (K, 81).
        bins: 1-based TM-30 hue bin per sample, or None for unbinned sets.
    """
    names: Tuple[str, ...]
    reflectances: ArrayFloat
    bins: Optional[np.ndarray] = None

    def __len__(self) -> int:
        return len(self.names)


# =============================================================================
# 2. CONSTRUCTION
# =============================================================================

def _gaussian_reflectance(base: float, peaks: Tuple[Peak, ...],
                          ripple: float = 0.0, ceiling: float = 1.0) -> ArrayFloat:
    value = np.full(GRID_SIZE, base, dtype=np.float64)
    if ripple:
        value += ripple * np.sin(0.3 * np.arange(GRID_SIZE))
    for centre, width, height in peaks:
        value += height * np.exp(-0.5 * ((WAVELENGTHS_5NM - centre) / width) ** 2)
    return np.clip(value, 0.01, ceiling)


def _read_only(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _build_patches() -> SampleSet:
    refl = np.stack([_gaussian_reflectance(base, peaks, ripple=ripple, ceiling=1.0)
                     for _, base, ripple, peaks in _PATCH_DEFINITIONS])
    return SampleSet(tuple(d[0] for d in _PATCH_DEFINITIONS), _read_only(refl))


def _build_ces() -> SampleSet:
    refl = np.stack([_gaussian_reflectance(base, peaks, ceiling=0.99)
                     for _, base, peaks in _CES_DEFINITIONS])
    bins = np.array([d[0] for d in _CES_DEFINITIONS], dtype=np.int64)
    names = tuple(f"CES{i:02d}" for i in range(1, CES_COUNT + 1))
    return SampleSet(names, _read_only(refl), _read_only(bins))


_LOCK = threading.Lock()
_CACHE: Dict[str, SampleSet] = {}
_BUILDERS = {"tlci": _build_patches, "ces": _build_ces}


def _get(key: str) -> SampleSet:
    # double-checked: the fast path never takes the lock
    sample_set = _CACHE.get(key)
    if sample_set is None:
        with _LOCK:
            sample_set = _CACHE.get(key)
            if sample_set is None:
                sample_set = _BUILDERS[key]()
                _CACHE[key] = sample_set
                logger.debug("Built %d synthetic '%s' reflectances", len(sample_set), key)
    return sample_set


def tlci_patches() -> SampleSet:
    """The 18 approximate ColorChecker patches used by TLCI."""
    return _get("tlci")


def color_evaluation_samples() -> SampleSet:
    """The 95 approximate Colour Evaluation Samples used by TM-30, binned by hue."""
    return _get("ces")
