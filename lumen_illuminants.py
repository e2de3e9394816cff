# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Reference illuminants on the 5 nm grid: Planckian radiators, CIE
illuminant A and the CIE D-series daylight reconstruction.  Colour
rendering compares a test source against one of these at the same CCT
(Planckian below 5000 K, D-series from 5000 K up).
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Final, Literal, Tuple

import numpy as np
from numba import njit

from lumen_errors import ColorValidationError, require_finite
from lumen_tables import DAYLIGHT_BASIS, WAVELENGTHS_5NM, ArrayFloat

__all__ = [
    "PLANCK_C2",
    "REFERENCE_SWITCH_CCT",
    "ReferenceIlluminant",
    "planckian_spd",
    "illuminant_a_spd",
    "daylight_xy",
    "daylight_spd",
    "reference_illuminant",
]

logger = logging.getLogger(__name__)

PLANCK_C2: Final[float] = 1.4388e-2          # second radiation constant, m*K
REFERENCE_SWITCH_CCT: Final[float] = 5000.0
DAYLIGHT_MIN_CCT: Final[float] = 4000.0
DAYLIGHT_MAX_CCT: Final[float] = 25000.0
ILLUMINANT_A_CCT: Final[float] = 2856.0

_NORM_INDEX: Final[int] = int(np.argmin(np.abs(WAVELENGTHS_5NM - 560.0)))


@dataclass(frozen=True, slots=True)
class ReferenceIlluminant:
    """Reference SPD on the 5 nm grid with the branch that produced it."""
    spd: np.ndarray
    kind: Literal["planckian", "D-series"]
    cct: float


@njit(cache=True, fastmath=True)
def _planck_kernel(wavelengths_nm: ArrayFloat, T: float) -> ArrayFloat:
    """Relative blackbody exitance; the c1 prefactor cancels on normalisation."""
    out = np.empty_like(wavelengths_nm)
    for i in range(wavelengths_nm.shape[0]):
        lam = wavelengths_nm[i] * 1e-9
        out[i] = 1.0 / (lam ** 5 * (np.exp(PLANCK_C2 / (lam * T)) - 1.0))
    return out


def planckian_spd(T: float) -> ArrayFloat:
    """
    Blackbody SPD at temperature *T* (K), normalised to 100 at 560 nm.

    Raises:
        ColorValidationError: for a non-finite or non-positive temperature.
    """
    T = require_finite(T, "T")
    if T <= 0.0:
        raise ColorValidationError(f"Temperature must be positive, got {T}")
    spd = _planck_kernel(WAVELENGTHS_5NM, T)
    if not spd[_NORM_INDEX] > 0.0:
        raise ColorValidationError(f"Temperature {T} K is too low to normalise at 560 nm")
    return spd * (100.0 / spd[_NORM_INDEX])


def illuminant_a_spd() -> ArrayFloat:
    """CIE standard illuminant A (Planckian at 2856 K)."""
    return planckian_spd(ILLUMINANT_A_CCT)


def daylight_xy(T: float) -> Tuple[float, float]:
    """CIE daylight-locus chromaticity (x_D, y_D) for 4000-25000 K."""
    T = require_finite(T, "T")
    if T <= 7000.0:
        x = -4.6070e9 / T ** 3 + 2.9678e6 / T ** 2 + 0.09911e3 / T + 0.244063
    else:
        x = -2.0064e9 / T ** 3 + 1.9018e6 / T ** 2 + 0.24748e3 / T + 0.237040
    y = -3.0 * x * x + 2.87 * x - 0.275
    return x, y


def daylight_spd(T: float) -> ArrayFloat:
    """
    CIE D-series daylight SPD at correlated colour temperature *T*.

    S = S0 + M1 * S1 + M2 * S2.  Temperatures outside 4000-25000 K are
    clamped to that range with a ``UserWarning``.
    """
    T = require_finite(T, "T")
    clamped = min(max(T, DAYLIGHT_MIN_CCT), DAYLIGHT_MAX_CCT)
    if clamped != T:
        warnings.warn(
            f"Daylight CCT {T:.0f} K is outside {DAYLIGHT_MIN_CCT:.0f}-"
            f"{DAYLIGHT_MAX_CCT:.0f} K; using {clamped:.0f} K.",
            stacklevel=2,
        )
    x, y = daylight_xy(clamped)
    m = 0.0241 + 0.2562 * x - 0.7341 * y
    m1 = (-1.3515 - 1.7703 * x + 5.9114 * y) / m
    m2 = (0.0300 - 31.4424 * x + 30.0717 * y) / m
    return DAYLIGHT_BASIS[:, 0] + m1 * DAYLIGHT_BASIS[:, 1] + m2 * DAYLIGHT_BASIS[:, 2]


def reference_illuminant(cct: float) -> ReferenceIlluminant:
    """
    Select the colour-rendering reference for a test source.

    Planckian below 5000 K; D-series at and above 5000 K.
    """
    cct = require_finite(cct, "cct")
    if cct < REFERENCE_SWITCH_CCT:
        ref = ReferenceIlluminant(planckian_spd(cct), "planckian", cct)
    else:
        ref = ReferenceIlluminant(daylight_spd(cct), "D-series", cct)
    logger.debug("Reference illuminant for %.1f K: %s", cct, ref.kind)
    return ref
