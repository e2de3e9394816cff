# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Chromaticity Space
==================
Pure coordinate transforms between tristimulus values and every colour
representation used by the measurement engines: CIE 1931 xy, CIE 1960 uv,
CIE 1976 u'v', CIELAB / LCh, display sRGB (0..255), HSL, CMYK and hex.

Scale convention:
    XYZ is on the Y = 100 scale throughout (D65 white = 95.047, 100,
    108.883).  RGB is display-referred sRGB/D65 with 8-bit integer channels.

Degenerate denominators:
    Chromaticity transforms whose denominator vanishes (black XYZ, y = 0,
    ...) return the D65 chromaticity (0.3127, 0.3290) / (0.1978, 0.4683)
    instead of NaN.  The CIE 1960 transforms return (0, 0).  These are
    domain fallbacks, not errors; NaN / inf *input* raises
    ``ColorValidationError``.

Architecture:
    Every transform has a public ``@handle_shapes`` wrapper that accepts
    ``(W,)`` or ``(..., W)`` input and an internal ``_raw`` fast path that
    assumes validated ``(N, W)`` float64 rows.  Chained transforms call the
    ``_raw`` variants to avoid re-validating at each stage.

References:
    - CIE 15:2004 "Colorimetry"
    - IEC 61966-2-1:1999 (sRGB Standard)
"""

import functools
import re
from typing import Any, Callable, Final, List, Sequence, Union

import numpy as np
from numba import njit

from lumen_config import get_config
from lumen_errors import ColorValidationError, require_finite_array
from lumen_tables import D65_UV, D65_XY, REF_WHITE_D65, ArrayFloat

__all__ = [
    # --- Constants ---
    "LAB_EPSILON",
    "LAB_KAPPA",
    "M_XYZ_TO_SRGB_T",
    "M_SRGB_TO_XYZ_T",
    "SRGB_GAMUT_TOLERANCE",
    "BARYCENTRIC_TOLERANCE",

    # --- Decorators ---
    "handle_shapes",

    # --- Classes ---
    "ChromaticitySpace",
]

# sRGB matrices (IEC 61966-2-1), stored transposed for row-vector products.
_M_XYZ_TO_SRGB_BASE = np.array([
    [ 3.2404542, -1.5371385, -0.4985314],
    [-0.9692660,  1.8760108,  0.0415560],
    [ 0.0556434, -0.2040259,  1.0572252]
], dtype=np.float64)
M_XYZ_TO_SRGB_T: Final[ArrayFloat] = _M_XYZ_TO_SRGB_BASE.T.copy()

_M_SRGB_TO_XYZ_BASE = np.array([
    [ 0.4124564,  0.3575761,  0.1804375],
    [ 0.2126729,  0.7151522,  0.0721750],
    [ 0.0193339,  0.1191920,  0.9503041]
], dtype=np.float64)
M_SRGB_TO_XYZ_T: Final[ArrayFloat] = _M_SRGB_TO_XYZ_BASE.T.copy()

# Exact rational CIELAB constants: epsilon = 216/24389, kappa = 24389/27.
_LAB_DELTA: Final[float] = 6.0 / 29.0
LAB_EPSILON: Final[float] = _LAB_DELTA * _LAB_DELTA * _LAB_DELTA
LAB_KAPPA: Final[float] = (116.0 * 29.0 * 29.0) / (3.0 * 6.0 * 6.0)

# Slack on the [0, 1] linear-RGB test so that the D65 white itself is inside.
SRGB_GAMUT_TOLERANCE: Final[float] = 1e-6
BARYCENTRIC_TOLERANCE: Final[float] = 1e-12    # edge points count as inside

_D65_X, _D65_Y = D65_XY
_D65_U, _D65_V = D65_UV
_DENOM_EPS: Final[float] = 1e-12

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


# =============================================================================
# 1. SHAPE HANDLING
# =============================================================================

def _as_rows(values: Any, width: int, name: str) -> ArrayFloat:
    """Validate and flatten ``(W,)`` / ``(..., W)`` input to (N, W) float64."""
    arr = require_finite_array(values, name)
    if arr.ndim == 0 or arr.shape[-1] != width:
        raise ColorValidationError(
            f"{name}: expected last dimension size {width}, got shape {arr.shape}"
        )
    return np.ascontiguousarray(arr.reshape(-1, width))


def handle_shapes(width: int = 3) -> Callable[[Callable[..., ArrayFloat]], Callable[..., ArrayFloat]]:
    """
    Decorator factory normalising the first argument to (N, width) rows.

    Inputs are validated as finite and reshaped; the result is mapped back
    onto the leading input dimensions.
        - ``(width,)`` in  -> single row out (``res[0]``)
        - ``(..., width)`` in -> ``(..., out_width)`` or ``(...)`` out
    """
    def decorator(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
        @functools.wraps(func)
        def wrapper(arr: Any, *args: Any, **kwargs: Any) -> ArrayFloat:
            src = np.asarray(arr)
            rows = _as_rows(src, width, func.__name__)
            res = func(rows, *args, **kwargs)
            if src.ndim == 1:
                return res[0]
            return res.reshape(src.shape[:-1] + res.shape[1:])
        return wrapper
    return decorator


# =============================================================================
# 2. LOW-LEVEL KERNELS (Numba)
# =============================================================================

@njit(cache=True, fastmath=True)
def _encode_srgb(linear: ArrayFloat) -> ArrayFloat:
    """sRGB OETF on [0, 1] linear values (IEC 61966-2-1)."""
    out = np.empty_like(linear)
    src = linear.ravel()
    dst = out.ravel()
    for i in range(src.size):
        v = src[i]
        if v <= 0.0031308:
            dst[i] = 12.92 * v
        else:
            dst[i] = 1.055 * (v ** (1.0 / 2.4)) - 0.055
    return out


@njit(cache=True, fastmath=True)
def _decode_srgb(encoded: ArrayFloat) -> ArrayFloat:
    """sRGB EOTF on [0, 1] encoded values."""
    out = np.empty_like(encoded)
    src = encoded.ravel()
    dst = out.ravel()
    for i in range(src.size):
        v = src[i]
        if v <= 0.04045:
            dst[i] = v / 12.92
        else:
            dst[i] = ((v + 0.055) / 1.055) ** 2.4
    return out


@njit(cache=True, fastmath=True)
def _lab_forward(t: ArrayFloat) -> ArrayFloat:
    """CIELAB f(t): cube root above epsilon, linear segment below."""
    out = np.empty_like(t)
    src = t.ravel()
    dst = out.ravel()
    for i in range(src.size):
        v = src[i]
        if v > LAB_EPSILON:
            dst[i] = v ** (1.0 / 3.0)
        else:
            dst[i] = (LAB_KAPPA * v + 16.0) / 116.0
    return out


@njit(cache=True, fastmath=True)
def _lab_inverse(t: ArrayFloat) -> ArrayFloat:
    """Inverse of f(t), switching at delta = 6/29."""
    out = np.empty_like(t)
    src = t.ravel()
    dst = out.ravel()
    for i in range(src.size):
        v = src[i]
        if v > _LAB_DELTA:
            dst[i] = v * v * v
        else:
            dst[i] = (116.0 * v - 16.0) / LAB_KAPPA
    return out


# --- fastmath=False twins, selected by lumen_config.strict_ieee ---

@njit(cache=True, fastmath=False)
def _encode_srgb_strict(linear: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(linear)
    src = linear.ravel()
    dst = out.ravel()
    for i in range(src.size):
        v = src[i]
        if v <= 0.0031308:
            dst[i] = 12.92 * v
        else:
            dst[i] = 1.055 * (v ** (1.0 / 2.4)) - 0.055
    return out


@njit(cache=True, fastmath=False)
def _decode_srgb_strict(encoded: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(encoded)
    src = encoded.ravel()
    dst = out.ravel()
    for i in range(src.size):
        v = src[i]
        if v <= 0.04045:
            dst[i] = v / 12.92
        else:
            dst[i] = ((v + 0.055) / 1.055) ** 2.4
    return out


@njit(cache=True, fastmath=False)
def _lab_forward_strict(t: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(t)
    src = t.ravel()
    dst = out.ravel()
    for i in range(src.size):
        v = src[i]
        if v > LAB_EPSILON:
            dst[i] = v ** (1.0 / 3.0)
        else:
            dst[i] = (LAB_KAPPA * v + 16.0) / 116.0
    return out


@njit(cache=True, fastmath=False)
def _lab_inverse_strict(t: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(t)
    src = t.ravel()
    dst = out.ravel()
    for i in range(src.size):
        v = src[i]
        if v > _LAB_DELTA:
            dst[i] = v * v * v
        else:
            dst[i] = (116.0 * v - 16.0) / LAB_KAPPA
    return out


def _srgb_oetf(linear: ArrayFloat) -> ArrayFloat:
    if get_config().strict_ieee:
        return _encode_srgb_strict(linear)
    return _encode_srgb(linear)


def _srgb_eotf(encoded: ArrayFloat) -> ArrayFloat:
    if get_config().strict_ieee:
        return _decode_srgb_strict(encoded)
    return _decode_srgb(encoded)


def _lab_f(t: ArrayFloat) -> ArrayFloat:
    if get_config().strict_ieee:
        return _lab_forward_strict(t)
    return _lab_forward(t)


def _lab_f_inv(t: ArrayFloat) -> ArrayFloat:
    if get_config().strict_ieee:
        return _lab_inverse_strict(t)
    return _lab_inverse(t)


@njit(cache=True, fastmath=True)
def _xyz_to_xy_kernel(xyz: ArrayFloat) -> ArrayFloat:
    """x = X / (X+Y+Z), y = Y / (X+Y+Z); D65 for a zero sum."""
    n = xyz.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in range(n):
        s = xyz[i, 0] + xyz[i, 1] + xyz[i, 2]
        if abs(s) < _DENOM_EPS:
            out[i, 0] = _D65_X
            out[i, 1] = _D65_Y
        else:
            out[i, 0] = xyz[i, 0] / s
            out[i, 1] = xyz[i, 1] / s
    return out


@njit(cache=True, fastmath=True)
def _xyz_to_uv_prime_kernel(xyz: ArrayFloat) -> ArrayFloat:
    """u' = 4X / (X+15Y+3Z), v' = 9Y / (X+15Y+3Z); D65 for a zero denominator."""
    n = xyz.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in range(n):
        d = xyz[i, 0] + 15.0 * xyz[i, 1] + 3.0 * xyz[i, 2]
        if abs(d) < _DENOM_EPS:
            out[i, 0] = _D65_U
            out[i, 1] = _D65_V
        else:
            out[i, 0] = 4.0 * xyz[i, 0] / d
            out[i, 1] = 9.0 * xyz[i, 1] / d
    return out


@njit(cache=True, fastmath=True)
def _xyz_to_ucs_kernel(xyz: ArrayFloat) -> ArrayFloat:
    """CIE 1960 u = 4X / (X+15Y+3Z), v = 6Y / (X+15Y+3Z); (0, 0) when degenerate."""
    n = xyz.shape[0]
    out = np.zeros((n, 2), dtype=np.float64)
    for i in range(n):
        d = xyz[i, 0] + 15.0 * xyz[i, 1] + 3.0 * xyz[i, 2]
        if abs(d) >= _DENOM_EPS:
            out[i, 0] = 4.0 * xyz[i, 0] / d
            out[i, 1] = 6.0 * xyz[i, 1] / d
    return out


@njit(cache=True, fastmath=True)
def _xy_to_uv_prime_kernel(xy: ArrayFloat) -> ArrayFloat:
    n = xy.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in range(n):
        x, y = xy[i, 0], xy[i, 1]
        d = -2.0 * x + 12.0 * y + 3.0
        if abs(d) < _DENOM_EPS:
            out[i, 0] = _D65_U
            out[i, 1] = _D65_V
        else:
            out[i, 0] = 4.0 * x / d
            out[i, 1] = 9.0 * y / d
    return out


@njit(cache=True, fastmath=True)
def _uv_prime_to_xy_kernel(uv: ArrayFloat) -> ArrayFloat:
    n = uv.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in range(n):
        u, v = uv[i, 0], uv[i, 1]
        d = 6.0 * u - 16.0 * v + 12.0
        if abs(d) < _DENOM_EPS:
            out[i, 0] = _D65_X
            out[i, 1] = _D65_Y
        else:
            out[i, 0] = 9.0 * u / d
            out[i, 1] = 4.0 * v / d
    return out


@njit(cache=True, fastmath=True)
def _xy_to_ucs_kernel(xy: ArrayFloat) -> ArrayFloat:
    n = xy.shape[0]
    out = np.zeros((n, 2), dtype=np.float64)
    for i in range(n):
        x, y = xy[i, 0], xy[i, 1]
        d = -2.0 * x + 12.0 * y + 3.0
        if abs(d) >= _DENOM_EPS:
            out[i, 0] = 4.0 * x / d
            out[i, 1] = 6.0 * y / d
    return out


@njit(cache=True, fastmath=True)
def _lab_to_lch_kernel(lab: ArrayFloat) -> ArrayFloat:
    n = lab.shape[0]
    lch = np.empty_like(lab)
    for i in range(n):
        a, b = lab[i, 1], lab[i, 2]
        h = np.degrees(np.arctan2(b, a))
        if h < 0.0:
            h += 360.0
        if h >= 360.0:
            h -= 360.0
        lch[i, 0] = lab[i, 0]
        lch[i, 1] = np.hypot(a, b)
        lch[i, 2] = h
    return lch


@njit(cache=True, fastmath=True)
def _lch_to_lab_kernel(lch: ArrayFloat) -> ArrayFloat:
    n = lch.shape[0]
    lab = np.empty_like(lch)
    for i in range(n):
        h = np.radians(lch[i, 2])
        lab[i, 0] = lch[i, 0]
        lab[i, 1] = lch[i, 1] * np.cos(h)
        lab[i, 2] = lch[i, 1] * np.sin(h)
    return lab


@njit(cache=True, fastmath=True)
def _rgb_to_hsl_kernel(rgb: ArrayFloat) -> ArrayFloat:
    """RGB 0..255 -> (H deg, S %, L %)."""
    n = rgb.shape[0]
    out = np.empty_like(rgb)
    for i in range(n):
        r = rgb[i, 0] / 255.0
        g = rgb[i, 1] / 255.0
        b = rgb[i, 2] / 255.0
        mx = max(r, g, b)
        mn = min(r, g, b)
        light = (mx + mn) * 0.5
        h = 0.0
        s = 0.0
        d = mx - mn
        if d > 0.0:
            if light > 0.5:
                s = d / (2.0 - mx - mn)
            else:
                s = d / (mx + mn)
            if mx == r:
                h = (g - b) / d + (6.0 if g < b else 0.0)
            elif mx == g:
                h = (b - r) / d + 2.0
            else:
                h = (r - g) / d + 4.0
            h *= 60.0
        out[i, 0] = h
        out[i, 1] = s * 100.0
        out[i, 2] = light * 100.0
    return out


@njit(cache=True, fastmath=True)
def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


@njit(cache=True, fastmath=True)
def _hsl_to_rgb_kernel(hsl: ArrayFloat) -> ArrayFloat:
    """(H deg, S %, L %) -> RGB in [0, 1]."""
    n = hsl.shape[0]
    out = np.empty_like(hsl)
    for i in range(n):
        h = (hsl[i, 0] % 360.0) / 360.0
        s = min(max(hsl[i, 1], 0.0), 100.0) / 100.0
        light = min(max(hsl[i, 2], 0.0), 100.0) / 100.0
        if s == 0.0:
            out[i, 0] = light
            out[i, 1] = light
            out[i, 2] = light
            continue
        if light < 0.5:
            q = light * (1.0 + s)
        else:
            q = light + s - light * s
        p = 2.0 * light - q
        out[i, 0] = _hue_to_channel(p, q, h + 1.0 / 3.0)
        out[i, 1] = _hue_to_channel(p, q, h)
        out[i, 2] = _hue_to_channel(p, q, h - 1.0 / 3.0)
    return out


def _to_8bit(unit: ArrayFloat) -> np.ndarray:
    """[0, 1] -> 0..255 integers, rounding halves up."""
    return np.floor(np.clip(unit, 0.0, 1.0) * 255.0 + 0.5).astype(np.int64)


# =============================================================================
# 3. CHROMATICITY SPACE
# =============================================================================

class ChromaticitySpace:
    """Static utility class for tristimulus / chromaticity / display transforms."""

    # =====================================================================
    #  Internal _raw fast-path methods  (assume validated (N, W) float64)
    # =====================================================================

    @staticmethod
    def _xyz_to_lab_raw(xyz: ArrayFloat, white: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        f = _lab_f(np.ascontiguousarray(xyz / white))
        out = np.empty_like(xyz)
        out[:, 0] = 116.0 * f[:, 1] - 16.0
        out[:, 1] = 500.0 * (f[:, 0] - f[:, 1])
        out[:, 2] = 200.0 * (f[:, 1] - f[:, 2])
        return out

    @staticmethod
    def _lab_to_xyz_raw(lab: ArrayFloat, white: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        f = np.empty_like(lab)
        f[:, 1] = (lab[:, 0] + 16.0) / 116.0
        f[:, 0] = lab[:, 1] / 500.0 + f[:, 1]
        f[:, 2] = f[:, 1] - lab[:, 2] / 200.0
        return _lab_f_inv(f) * white

    @staticmethod
    def _xyz_to_linear_rgb_raw(xyz: ArrayFloat) -> ArrayFloat:
        return np.dot(xyz / 100.0, M_XYZ_TO_SRGB_T)

    @staticmethod
    def _xyz_to_rgb_raw(xyz: ArrayFloat) -> np.ndarray:
        linear = np.clip(ChromaticitySpace._xyz_to_linear_rgb_raw(xyz), 0.0, 1.0)
        return _to_8bit(_srgb_oetf(np.ascontiguousarray(linear)))

    @staticmethod
    def _rgb_to_xyz_raw(rgb: ArrayFloat) -> ArrayFloat:
        encoded = np.ascontiguousarray(np.clip(rgb, 0.0, 255.0) / 255.0)
        return np.dot(_srgb_eotf(encoded), M_SRGB_TO_XYZ_T) * 100.0

    @staticmethod
    def _xyz_to_xyY_raw(xyz: ArrayFloat) -> ArrayFloat:
        out = np.empty_like(xyz)
        out[:, :2] = _xyz_to_xy_kernel(xyz)
        out[:, 2] = xyz[:, 1]
        return out

    @staticmethod
    def _xyY_to_xyz_raw(xyY: ArrayFloat) -> ArrayFloat:
        x, y, Y = xyY[:, 0], xyY[:, 1], xyY[:, 2]
        out = np.zeros_like(xyY)
        mask = np.abs(y) > _DENOM_EPS
        if np.any(mask):
            factor = Y[mask] / y[mask]
            out[mask, 0] = x[mask] * factor
            out[mask, 1] = Y[mask]
            out[mask, 2] = (1.0 - x[mask] - y[mask]) * factor
        return out

    # =====================================================================
    #  Chromaticity
    # =====================================================================

    @staticmethod
    @handle_shapes(3)
    def xyz_to_xy(xyz: ArrayFloat) -> ArrayFloat:
        """
        XYZ -> CIE 1931 (x, y).

        Black (X+Y+Z = 0) returns the D65 chromaticity (0.3127, 0.3290).
        """
        return _xyz_to_xy_kernel(xyz)

    @staticmethod
    @handle_shapes(3)
    def xyz_to_uv(xyz: ArrayFloat) -> ArrayFloat:
        """
        XYZ -> CIE 1976 (u', v').

        A zero denominator returns the D65 u'v' (0.1978, 0.4683).
        """
        return _xyz_to_uv_prime_kernel(xyz)

    @staticmethod
    @handle_shapes(2)
    def xy_to_uv(xy: ArrayFloat) -> ArrayFloat:
        """CIE 1931 (x, y) -> CIE 1976 (u', v')."""
        return _xy_to_uv_prime_kernel(xy)

    @staticmethod
    @handle_shapes(2)
    def uv_to_xy(uv: ArrayFloat) -> ArrayFloat:
        """CIE 1976 (u', v') -> CIE 1931 (x, y)."""
        return _uv_prime_to_xy_kernel(uv)

    @staticmethod
    @handle_shapes(3)
    def xyz_to_ucs_uv(xyz: ArrayFloat) -> ArrayFloat:
        """XYZ -> CIE 1960 UCS (u, v)."""
        return _xyz_to_ucs_kernel(xyz)

    @staticmethod
    @handle_shapes(2)
    def xy_to_ucs_uv(xy: ArrayFloat) -> ArrayFloat:
        """CIE 1931 (x, y) -> CIE 1960 UCS (u, v); (0, 0) for a zero denominator."""
        return _xy_to_ucs_kernel(xy)

    @staticmethod
    @handle_shapes(3)
    def xyz_to_xyY(xyz: ArrayFloat) -> ArrayFloat:
        """XYZ -> xyY; black keeps Y = 0 with D65 chromaticity."""
        return ChromaticitySpace._xyz_to_xyY_raw(xyz)

    @staticmethod
    @handle_shapes(3)
    def xyY_to_xyz(xyY: ArrayFloat) -> ArrayFloat:
        """xyY -> XYZ; y = 0 gives (0, 0, 0)."""
        return ChromaticitySpace._xyY_to_xyz_raw(xyY)

    @staticmethod
    @handle_shapes(3)
    def xyz_to_uvY(xyz: ArrayFloat) -> ArrayFloat:
        """XYZ -> (u', v', Y)."""
        out = np.empty_like(xyz)
        out[:, :2] = _xyz_to_uv_prime_kernel(xyz)
        out[:, 2] = xyz[:, 1]
        return out

    @staticmethod
    @handle_shapes(3)
    def uvY_to_xyz(uvY: ArrayFloat) -> ArrayFloat:
        """(u', v', Y) -> XYZ."""
        xyY = np.empty_like(uvY)
        xyY[:, :2] = _uv_prime_to_xy_kernel(np.ascontiguousarray(uvY[:, :2]))
        xyY[:, 2] = uvY[:, 2]
        return ChromaticitySpace._xyY_to_xyz_raw(xyY)

    # =====================================================================
    #  CIELAB / LCh
    # =====================================================================

    @staticmethod
    @handle_shapes(3)
    def xyz_to_lab(xyz: ArrayFloat, white: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """
        XYZ -> CIELAB.

        Args:
            xyz: Tristimulus values, shape (3,) or (..., 3).
            white: Reference white on the same scale (default D65, Y = 100).
        """
        return ChromaticitySpace._xyz_to_lab_raw(xyz, _as_white(white))

    @staticmethod
    @handle_shapes(3)
    def lab_to_xyz(lab: ArrayFloat, white: ArrayFloat = REF_WHITE_D65) -> ArrayFloat:
        """CIELAB -> XYZ relative to *white*."""
        return ChromaticitySpace._lab_to_xyz_raw(lab, _as_white(white))

    @staticmethod
    @handle_shapes(3)
    def lab_to_lch(lab: ArrayFloat) -> ArrayFloat:
        """CIELAB -> LCh with h in [0, 360)."""
        return _lab_to_lch_kernel(lab)

    @staticmethod
    @handle_shapes(3)
    def lch_to_lab(lch: ArrayFloat) -> ArrayFloat:
        return _lch_to_lab_kernel(lch)

    # =====================================================================
    #  Display RGB
    # =====================================================================

    @staticmethod
    @handle_shapes(3)
    def xyz_to_linear_rgb(xyz: ArrayFloat) -> ArrayFloat:
        """XYZ (Y = 100) -> unclamped linear sRGB (1.0 = white)."""
        return ChromaticitySpace._xyz_to_linear_rgb_raw(xyz)

    @staticmethod
    @handle_shapes(3)
    def linear_rgb_to_xyz(rgb: ArrayFloat) -> ArrayFloat:
        """Linear sRGB -> XYZ (Y = 100)."""
        return np.dot(rgb, M_SRGB_TO_XYZ_T) * 100.0

    @staticmethod
    @handle_shapes(3)
    def xyz_to_rgb(xyz: ArrayFloat) -> np.ndarray:
        """
        XYZ (Y = 100) -> 8-bit sRGB.

        Linear values are clamped to [0, 1] before encoding, so out-of-gamut
        colours saturate instead of wrapping.  Returns int64 channels 0..255.
        """
        return ChromaticitySpace._xyz_to_rgb_raw(xyz)

    @staticmethod
    @handle_shapes(3)
    def rgb_to_xyz(rgb: ArrayFloat) -> ArrayFloat:
        """8-bit sRGB (0..255, clamped) -> XYZ (Y = 100)."""
        return ChromaticitySpace._rgb_to_xyz_raw(rgb)

    @staticmethod
    @handle_shapes(3)
    def is_in_srgb_gamut(xyz: ArrayFloat) -> np.ndarray:
        """True where the unclamped linear sRGB lies inside [0, 1]."""
        linear = ChromaticitySpace._xyz_to_linear_rgb_raw(xyz)
        tol = SRGB_GAMUT_TOLERANCE
        return np.all((linear >= -tol) & (linear <= 1.0 + tol), axis=1)

    @staticmethod
    @handle_shapes(3)
    def rgb_to_hsl(rgb: ArrayFloat) -> ArrayFloat:
        """RGB 0..255 -> (H in [0, 360), S %, L %)."""
        return _rgb_to_hsl_kernel(np.clip(rgb, 0.0, 255.0))

    @staticmethod
    @handle_shapes(3)
    def hsl_to_rgb(hsl: ArrayFloat) -> np.ndarray:
        """(H deg, S %, L %) -> RGB 0..255 integers."""
        return _to_8bit(_hsl_to_rgb_kernel(hsl))

    @staticmethod
    @handle_shapes(3)
    def rgb_to_cmyk(rgb: ArrayFloat) -> ArrayFloat:
        """RGB 0..255 -> CMYK percentages, shape (..., 4)."""
        unit = np.clip(rgb, 0.0, 255.0) / 255.0
        k = 1.0 - unit.max(axis=1)
        out = np.zeros((unit.shape[0], 4), dtype=np.float64)
        out[:, 3] = k
        ink = k < 1.0
        if np.any(ink):
            out[ink, :3] = (1.0 - unit[ink] - k[ink, None]) / (1.0 - k[ink, None])
        return out * 100.0

    @staticmethod
    @handle_shapes(4)
    def cmyk_to_rgb(cmyk: ArrayFloat) -> np.ndarray:
        """CMYK percentages -> RGB 0..255 integers."""
        unit = np.clip(cmyk, 0.0, 100.0) / 100.0
        rgb = (1.0 - unit[:, :3]) * (1.0 - unit[:, 3:4])
        return _to_8bit(rgb)

    # =====================================================================
    #  Hex
    # =====================================================================

    @staticmethod
    def rgb_to_hex(rgb: Union[ArrayFloat, Sequence[float]]) -> Union[str, List[str]]:
        """RGB 0..255 -> ``"#RRGGBB"`` (uppercase); a list for (N, 3) input."""
        src = np.asarray(rgb)
        rows = _to_8bit(_as_rows(src, 3, "rgb_to_hex") / 255.0)
        codes = ["#{:02X}{:02X}{:02X}".format(*map(int, row)) for row in rows]
        return codes[0] if src.ndim == 1 else codes

    @staticmethod
    def hex_to_rgb(code: str) -> np.ndarray:
        """
        ``"#RGB"`` / ``"#RRGGBB"`` (``#`` optional) -> RGB 0..255 integers.

        Raises:
            ColorValidationError: for any other string.
        """
        match = _HEX_RE.match(code.strip()) if isinstance(code, str) else None
        if match is None:
            raise ColorValidationError(f"Invalid hex colour: {code!r}")
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return np.array([int(digits[i:i + 2], 16) for i in (0, 2, 4)], dtype=np.int64)

    @staticmethod
    def xyz_to_hex(xyz: Union[ArrayFloat, Sequence[float]]) -> Union[str, List[str]]:
        """XYZ (Y = 100) -> ``"#RRGGBB"``."""
        return ChromaticitySpace.rgb_to_hex(ChromaticitySpace.xyz_to_rgb(xyz))

    # =====================================================================
    #  Geometry helpers
    # =====================================================================

    @staticmethod
    def is_in_gamut(point: Sequence[float], vertices: Sequence[Sequence[float]]) -> bool:
        """
        Barycentric point-in-triangle test in any 2-D chromaticity space.

        Boundary points count as inside.  Returns False unless exactly three
        vertices are given, and for a degenerate (zero-area) triangle.
        """
        p = require_finite_array(point, "point").ravel()
        if p.size != 2:
            raise ColorValidationError(f"point must be (x, y), got {p.size} values")
        if len(vertices) != 3:
            return False
        v = require_finite_array(vertices, "vertices")
        if v.shape != (3, 2):
            return False
        (x1, y1), (x2, y2), (x3, y3) = v
        denom = (y2 - y3) * (x1 - x3) + (x3 - x2) * (y1 - y3)
        if abs(denom) <= BARYCENTRIC_TOLERANCE:
            return False
        a = ((y2 - y3) * (p[0] - x3) + (x3 - x2) * (p[1] - y3)) / denom
        b = ((y3 - y1) * (p[0] - x3) + (x1 - x3) * (p[1] - y3)) / denom
        c = 1.0 - a - b
        lo, hi = -BARYCENTRIC_TOLERANCE, 1.0 + BARYCENTRIC_TOLERANCE
        return bool(lo <= a <= hi and lo <= b <= hi and lo <= c <= hi)

    @staticmethod
    def uv_distance(uv1: ArrayFloat, uv2: ArrayFloat) -> Union[float, ArrayFloat]:
        """Euclidean distance in u'v' (delta u'v'); broadcasts like numpy."""
        a = require_finite_array(uv1, "uv1")
        b = require_finite_array(uv2, "uv2")
        if a.shape[-1] != 2 or b.shape[-1] != 2:
            raise ColorValidationError(f"Expected (..., 2) inputs, got {a.shape} and {b.shape}")
        d = np.hypot(a[..., 0] - b[..., 0], a[..., 1] - b[..., 1])
        return float(d) if d.ndim == 0 else d


def _as_white(white: Any) -> ArrayFloat:
    w = require_finite_array(white, "white").ravel()
    if w.size != 3 or np.any(w <= 0.0):
        raise ColorValidationError(f"Reference white must be 3 positive values, got {w}")
    return w
