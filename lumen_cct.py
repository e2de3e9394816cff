# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

CCT / Duv Estimator
===================
Correlated colour temperature from CIE 1931 chromaticity (McCamy 1992) and
the signed distance Duv from the Planckian locus in CIE 1960 UCS.

The locus itself is the Kim et al. (2002) rational-polynomial fit of
blackbody chromaticity, valid for 1667-25000 K.  Outside that range the
locus evaluates to the D65 chromaticity.

Duv search (bounded, deterministic, 202 locus evaluations + 2 for the sign):
    1. coarse: 101 samples over seed +/- max(500 K, 10 % of seed),
       clamped to [1667, 25000] K;
    2. fine: 101 samples over the coarse best +/- 2 coarse steps;
    3. sign: cross product of the locus tangent (+/-50 K around the coarse
       best, pointing towards increasing T) with the vector from the nearest
       locus point to the sample.  A non-negative cross product gives a
       positive Duv.  Because the locus runs towards smaller u as T rises,
       this puts points below the locus (pinkish) at positive Duv and
       points above it (greenish, e.g. D65 at about -0.0032) at negative
       Duv, the reverse of the sign used by Ohno (2014).

References:
    - McCamy, C. S. (1992). "Correlated color temperature as an explicit
      function of chromaticity coordinates".
    - Kim, Y.-S. et al. (2002). "Design of advanced color temperature
      control system for HDTV applications".
    - Ohno, Y. (2014). "Practical use and calculation of CCT and Duv".
"""

import logging
from dataclasses import dataclass
from typing import Final, Literal, Tuple, Union

import numpy as np
from numba import njit

from lumen_errors import ColorValidationError, require_finite, require_finite_array
from lumen_tables import CCT_PRESETS, D65_XY, ArrayFloat

__all__ = [
    "CCT_MIN",
    "CCT_MAX",
    "CCT_PRESETS",
    "CCTResult",
    "CCTInterpretation",
    "CCTDuvEstimator",
]

logger = logging.getLogger(__name__)

CCT_MIN: Final[float] = 1667.0
CCT_MAX: Final[float] = 25000.0

_MCCAMY_EPICENTRE_X: Final[float] = 0.3320
_MCCAMY_EPICENTRE_Y: Final[float] = 0.1858
_SEARCH_STEPS: Final[int] = 100
_TANGENT_DT: Final[float] = 50.0

_D65_X, _D65_Y = D65_XY


# =============================================================================
# 1. RESULT TYPES
# =============================================================================

@dataclass(frozen=True, slots=True)
class CCTResult:
    """CCT rounded to the nearest kelvin, Duv rounded to 4 decimals."""
    cct: int
    duv: float


@dataclass(frozen=True, slots=True)
class CCTInterpretation:
    category: Literal["warm", "neutral", "cool"]
    description: str


# =============================================================================
# 2. KERNELS
# =============================================================================

@njit(cache=True, fastmath=True)
def _mccamy(x: float, y: float) -> float:
    n = (x - _MCCAMY_EPICENTRE_X) / (_MCCAMY_EPICENTRE_Y - y)
    return 449.0 * n * n * n + 3525.0 * n * n + 6823.3 * n + 5520.33


@njit(cache=True, fastmath=True)
def _kim_xy(T: float) -> Tuple[float, float]:
    """Kim et al. (2002) blackbody chromaticity; D65 outside 1667-25000 K."""
    if 1667.0 <= T <= 4000.0:
        x = -0.2661239e9 / (T * T * T) - 0.2343589e6 / (T * T) + 0.8776956e3 / T + 0.179910
        if T <= 2222.0:
            y = -1.1063814 * x * x * x - 1.34811020 * x * x + 2.18555832 * x - 0.20219683
        else:
            y = -0.9549476 * x * x * x - 1.37418593 * x * x + 2.09137015 * x - 0.16748867
    elif 4000.0 < T <= 25000.0:
        x = -3.0258469e9 / (T * T * T) + 2.1070379e6 / (T * T) + 0.2226347e3 / T + 0.240390
        y = 3.0817580 * x * x * x - 5.87338670 * x * x + 3.75112997 * x - 0.37001483
    else:
        x = _D65_X
        y = _D65_Y
    return x, y


@njit(cache=True, fastmath=True)
def _ucs(x: float, y: float) -> Tuple[float, float]:
    d = -2.0 * x + 12.0 * y + 3.0
    if d == 0.0:
        return 0.0, 0.0
    return 4.0 * x / d, 6.0 * y / d


@njit(cache=True, fastmath=True)
def _kim_ucs(T: float) -> Tuple[float, float]:
    x, y = _kim_xy(T)
    return _ucs(x, y)


@njit(cache=True, fastmath=True)
def _duv_search(x: float, y: float, seed: float) -> float:
    us, vs = _ucs(x, y)

    span = max(500.0, seed * 0.1)
    t_min = max(CCT_MIN, seed - span)
    t_max = min(CCT_MAX, seed + span)
    dt = (t_max - t_min) / _SEARCH_STEPS

    # seeded from the first sample; fastmath assumes no infinities
    best_t = t_min
    best_u, best_v = _kim_ucs(t_min)
    min_dist = np.sqrt((us - best_u) ** 2 + (vs - best_v) ** 2)
    for i in range(1, _SEARCH_STEPS + 1):
        T = t_min + i * dt
        up, vp = _kim_ucs(T)
        dist = np.sqrt((us - up) ** 2 + (vs - vp) ** 2)
        if dist < min_dist:
            min_dist = dist
            best_t = T
            best_u = up
            best_v = vp

    # Refinement moves the nearest point only; the tangent stays at best_t.
    fine_min = max(CCT_MIN, best_t - 2.0 * dt)
    fine_max = min(CCT_MAX, best_t + 2.0 * dt)
    fine_dt = (fine_max - fine_min) / _SEARCH_STEPS
    for i in range(_SEARCH_STEPS + 1):
        T = fine_min + i * fine_dt
        up, vp = _kim_ucs(T)
        dist = np.sqrt((us - up) ** 2 + (vs - vp) ** 2)
        if dist < min_dist:
            min_dist = dist
            best_u = up
            best_v = vp

    u1, v1 = _kim_ucs(best_t - _TANGENT_DT)
    u2, v2 = _kim_ucs(best_t + _TANGENT_DT)
    cross = (u2 - u1) * (vs - best_v) - (v2 - v1) * (us - best_u)
    if cross >= 0.0:
        return min_dist
    return -min_dist


# =============================================================================
# 3. ESTIMATOR
# =============================================================================

def _checked_xy(x: float, y: float) -> Tuple[float, float]:
    x = require_finite(x, "x")
    y = require_finite(y, "y")
    if y == _MCCAMY_EPICENTRE_Y:
        raise ColorValidationError("McCamy CCT is undefined at y = 0.1858")
    return x, y


class CCTDuvEstimator:
    """Static utility class for CCT and Duv estimation."""

    PRESETS = CCT_PRESETS

    @staticmethod
    def calculate_cct(x: float, y: float) -> float:
        """
        McCamy's cubic CCT approximation, in kelvin (unrounded).

        Accurate roughly between 2000 K and 12500 K; no range guard is
        applied beyond the singular point.

        Raises:
            ColorValidationError: non-finite input or y == 0.1858.
        """
        x, y = _checked_xy(x, y)
        return float(_mccamy(x, y))

    @staticmethod
    def planckian_xy(T: Union[float, ArrayFloat]) -> ArrayFloat:
        """
        Blackbody chromaticity (Kim et al. 2002).

        Returns shape (2,) for scalar T, (..., 2) otherwise.  Temperatures
        outside 1667-25000 K map to the D65 chromaticity.
        """
        temps = require_finite_array(T, "T")
        flat = temps.ravel()
        out = np.empty((flat.size, 2), dtype=np.float64)
        for i in range(flat.size):
            out[i] = _kim_xy(float(flat[i]))
        return out.reshape(temps.shape + (2,))

    @staticmethod
    def planckian_ucs(T: Union[float, ArrayFloat]) -> ArrayFloat:
        """Blackbody chromaticity in CIE 1960 UCS (u, v)."""
        temps = require_finite_array(T, "T")
        flat = temps.ravel()
        out = np.empty((flat.size, 2), dtype=np.float64)
        for i in range(flat.size):
            out[i] = _kim_ucs(float(flat[i]))
        return out.reshape(temps.shape + (2,))

    @staticmethod
    def calculate_duv(x: float, y: float) -> float:
        """
        Signed distance from the Planckian locus in CIE 1960 UCS (unrounded).

        Positive values lie below the locus (pinkish), negative above
        (greenish); D65 gives about -0.0032.
        """
        x, y = _checked_xy(x, y)
        return float(_duv_search(x, y, _mccamy(x, y)))

    @staticmethod
    def calculate_cct_and_duv(x: float, y: float) -> CCTResult:
        """CCT (nearest kelvin) and Duv (4 decimals) in one call."""
        x, y = _checked_xy(x, y)
        seed = _mccamy(x, y)
        duv = _duv_search(x, y, seed)
        logger.debug("CCT %.1f K, Duv %.5f for xy=(%.4f, %.4f)", seed, duv, x, y)
        return CCTResult(cct=int(round(seed)), duv=round(float(duv), 4))

    @staticmethod
    def interpret_cct(cct: float) -> CCTInterpretation:
        """
        Warm below 3500 K, neutral in [3500, 5500] K, cool above 5500 K.
        """
        cct = require_finite(cct, "cct")
        if cct < 3500.0:
            return CCTInterpretation("warm", "Warm White (< 3500K)")
        if cct <= 5500.0:
            return CCTInterpretation("neutral", "Neutral White (3500-5500K)")
        return CCTInterpretation("cool", "Cool White / Daylight (> 5500K)")
