# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Colour Difference Engine
========================
CIE76, CIE94 and CIEDE2000 perceptual distances between CIELAB colours.

All metrics accept ``(3,)`` or ``(N, 3)`` inputs and broadcast 1-vs-N.
Two single colours give a Python float.

CIE94 is asymmetric by definition: the weighting functions SC and SH use
the chroma of the *first* (reference) argument only.

References:
    - CIE Publication 116-1995 (CIE 1994 colour difference).
    - Sharma, G., Wu, W., & Dalal, E. N. (2005). "The CIEDE2000
      color-difference formula: Implementation notes, supplementary test
      data, and mathematical observations".
"""

from typing import Any, Final, Tuple, Union

import numpy as np
from numba import float64, njit, prange

from lumen_errors import ColorValidationError, require_finite, require_finite_array
from lumen_tables import ArrayFloat

__all__ = [
    "C25_7",
    "ColorDifferenceEngine",
]

C25_7: Final[float] = 25.0 ** 7
_DEG2RAD: Final[float] = np.pi / 180.0


# =============================================================================
# 1. KERNELS
# =============================================================================

@njit(float64(float64, float64, float64, float64, float64, float64, float64, float64, float64),
      cache=True, fastmath=True)
def _delta_e_2000_pair(L1: float, a1: float, b1: float, L2: float, a2: float, b2: float,
                       k_L: float, k_C: float, k_H: float) -> float:
    """Single-pair CIEDE2000 with parametric factors."""
    C1 = np.hypot(a1, b1)
    C2 = np.hypot(a2, b2)
    C_bar_7 = ((C1 + C2) * 0.5) ** 7
    G = 0.5 * (1.0 - np.sqrt(C_bar_7 / (C_bar_7 + C25_7)))
    a1_p = (1.0 + G) * a1
    a2_p = (1.0 + G) * a2
    C1_p = np.hypot(a1_p, b1)
    C2_p = np.hypot(a2_p, b2)
    h1_p = np.degrees(np.arctan2(b1, a1_p)) % 360.0
    h2_p = np.degrees(np.arctan2(b2, a2_p)) % 360.0
    chroma_prod = C1_p * C2_p

    dL_p = L2 - L1
    dC_p = C2_p - C1_p
    dh_p = 0.0
    if chroma_prod != 0.0:
        diff = h2_p - h1_p
        if abs(diff) <= 180.0:
            dh_p = diff
        elif diff > 180.0:
            dh_p = diff - 360.0
        else:
            dh_p = diff + 360.0
    dH_p = 2.0 * np.sqrt(chroma_prod) * np.sin(dh_p * _DEG2RAD * 0.5)

    L_bar_p = (L1 + L2) * 0.5
    C_bar_p = (C1_p + C2_p) * 0.5
    # Achromatic pairs keep the plain sum as the mean hue.
    h_bar_p = h1_p + h2_p
    if chroma_prod != 0.0:
        if abs(h1_p - h2_p) <= 180.0:
            h_bar_p *= 0.5
        elif h_bar_p < 360.0:
            h_bar_p = (h_bar_p + 360.0) * 0.5
        else:
            h_bar_p = (h_bar_p - 360.0) * 0.5

    T = (1.0
         - 0.17 * np.cos((h_bar_p - 30.0) * _DEG2RAD)
         + 0.24 * np.cos((2.0 * h_bar_p) * _DEG2RAD)
         + 0.32 * np.cos((3.0 * h_bar_p + 6.0) * _DEG2RAD)
         - 0.20 * np.cos((4.0 * h_bar_p - 63.0) * _DEG2RAD))
    d_theta = 30.0 * np.exp(-((h_bar_p - 275.0) / 25.0) ** 2)
    C_bar_p_7 = C_bar_p ** 7
    R_C = 2.0 * np.sqrt(C_bar_p_7 / (C_bar_p_7 + C25_7))
    R_T = -np.sin(2.0 * d_theta * _DEG2RAD) * R_C
    L_term = (L_bar_p - 50.0) ** 2
    S_L = 1.0 + (0.015 * L_term) / np.sqrt(20.0 + L_term)
    S_C = 1.0 + 0.045 * C_bar_p
    S_H = 1.0 + 0.015 * C_bar_p * T

    tL = dL_p / (k_L * S_L)
    tC = dC_p / (k_C * S_C)
    tH = dH_p / (k_H * S_H)
    return np.sqrt(tL * tL + tC * tC + tH * tH + R_T * tC * tH)


@njit(cache=True, fastmath=True, parallel=True)
def _batch_delta_e_2000(lab1: ArrayFloat, lab2: ArrayFloat,
                        k_L: float, k_C: float, k_H: float) -> ArrayFloat:
    n = lab1.shape[0]
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        res[i] = _delta_e_2000_pair(lab1[i, 0], lab1[i, 1], lab1[i, 2],
                                    lab2[i, 0], lab2[i, 1], lab2[i, 2], k_L, k_C, k_H)
    return res


@njit(cache=True, fastmath=True, parallel=True)
def _batch_delta_e_76(lab1: ArrayFloat, lab2: ArrayFloat) -> ArrayFloat:
    n = lab1.shape[0]
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        dL = lab1[i, 0] - lab2[i, 0]
        da = lab1[i, 1] - lab2[i, 1]
        db = lab1[i, 2] - lab2[i, 2]
        res[i] = np.sqrt(dL * dL + da * da + db * db)
    return res


@njit(cache=True, fastmath=True, parallel=True)
def _batch_delta_e_94(lab1: ArrayFloat, lab2: ArrayFloat,
                      k_L: float, K1: float, K2: float) -> ArrayFloat:
    """CIE94; SC and SH use the chroma of lab1."""
    n = lab1.shape[0]
    res = np.empty(n, dtype=np.float64)
    for i in prange(n):
        L1, a1, b1 = lab1[i, 0], lab1[i, 1], lab1[i, 2]
        L2, a2, b2 = lab2[i, 0], lab2[i, 1], lab2[i, 2]
        C1 = np.sqrt(a1 * a1 + b1 * b1)
        C2 = np.sqrt(a2 * a2 + b2 * b2)
        dL = L1 - L2
        dC = C1 - C2
        da = a1 - a2
        db = b1 - b2
        # rounding can push dH^2 slightly below zero
        dH_sq = da * da + db * db - dC * dC
        if dH_sq < 0.0:
            dH_sq = 0.0
        S_C = 1.0 + K1 * C1
        S_H = 1.0 + K2 * C1
        tL = dL / k_L
        tC = dC / S_C
        res[i] = np.sqrt(tL * tL + tC * tC + dH_sq / (S_H * S_H))
    return res


# =============================================================================
# 2. ENGINE
# =============================================================================

class ColorDifferenceEngine:
    """Static utility class for Lab colour differences."""

    @staticmethod
    def _prepare_inputs(lab1: Any, lab2: Any) -> Tuple[ArrayFloat, ArrayFloat, bool]:
        """
        Validate, promote to (N, 3) and broadcast 1-vs-N.

        Broadcast views are materialised as contiguous arrays before they
        reach the ``prange`` kernels.  The flag reports whether both inputs
        were single colours.
        """
        a = require_finite_array(lab1, "lab1")
        b = require_finite_array(lab2, "lab2")
        scalar = a.ndim == 1 and b.ndim == 1
        l1 = np.ascontiguousarray(np.atleast_2d(a))
        l2 = np.ascontiguousarray(np.atleast_2d(b))
        if l1.ndim != 2 or l2.ndim != 2 or l1.shape[-1] != 3 or l2.shape[-1] != 3:
            raise ColorValidationError(f"Inputs must have shape (N, 3), got {a.shape} and {b.shape}")
        if l1.shape[0] != l2.shape[0]:
            if l1.shape[0] == 1:
                l1 = np.ascontiguousarray(np.broadcast_to(l1, l2.shape))
            elif l2.shape[0] == 1:
                l2 = np.ascontiguousarray(np.broadcast_to(l2, l1.shape))
            else:
                raise ColorValidationError(f"Shapes {a.shape} and {b.shape} are not broadcastable.")
        return l1, l2, scalar

    @staticmethod
    def delta_e_76(lab1: ArrayFloat, lab2: ArrayFloat) -> Union[float, ArrayFloat]:
        """CIE 1976 Delta E: Euclidean distance in Lab."""
        l1, l2, scalar = ColorDifferenceEngine._prepare_inputs(lab1, lab2)
        res = _batch_delta_e_76(l1, l2)
        return float(res[0]) if scalar else res

    @staticmethod
    def delta_e_94(lab1: ArrayFloat, lab2: ArrayFloat,
                   k_L: float = 1.0, K1: float = 0.045, K2: float = 0.015,
                   textiles: bool = False) -> Union[float, ArrayFloat]:
        """
        CIE 1994 Delta E.

        Asymmetric: lab1 is the reference whose chroma drives SC and SH, so
        ``delta_e_94(a, b) != delta_e_94(b, a)`` in general.

        Args:
            lab1: Reference colours, shape (3,) or (N, 3).
            lab2: Sample colours, shape (3,) or (N, 3).
            k_L, K1, K2: Graphic-arts defaults (1, 0.045, 0.015).
            textiles: Use the textile parameters (2, 0.048, 0.014).
        """
        if textiles:
            k_L, K1, K2 = 2.0, 0.048, 0.014
        k_L = require_finite(k_L, "k_L")
        if k_L <= 0.0:
            raise ColorValidationError("k_L must be positive")
        l1, l2, scalar = ColorDifferenceEngine._prepare_inputs(lab1, lab2)
        res = _batch_delta_e_94(l1, l2, k_L, require_finite(K1, "K1"), require_finite(K2, "K2"))
        return float(res[0]) if scalar else res

    @staticmethod
    def delta_e_2000(lab1: ArrayFloat, lab2: ArrayFloat,
                     k_L: float = 1.0, k_C: float = 1.0,
                     k_H: float = 1.0) -> Union[float, ArrayFloat]:
        """
        CIEDE2000 colour difference.

        Reproduces the 34 Sharma et al. (2005) reference pairs to 4 decimals.

        Args:
            lab1: Reference colours, shape (3,) or (N, 3).
            lab2: Sample colours, shape (3,) or (N, 3).
            k_L, k_C, k_H: Parametric weights (default 1.0).
        """
        weights = [require_finite(k, name) for k, name in ((k_L, "k_L"), (k_C, "k_C"), (k_H, "k_H"))]
        if min(weights) <= 0.0:
            raise ColorValidationError("Parametric weights must be positive")
        l1, l2, scalar = ColorDifferenceEngine._prepare_inputs(lab1, lab2)
        res = _batch_delta_e_2000(l1, l2, *weights)
        return float(res[0]) if scalar else res
