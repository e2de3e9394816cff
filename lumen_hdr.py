# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

HDR Signal Toolkit
==================
Transfer functions, tone mapping and HDR10 static-metadata grading.

Transfer functions (inputs are clamped to their legal domain):
    * PQ, SMPTE ST 2084: signal 0..1 <-> absolute luminance 0..10000 cd/m^2.
    * HLG, ITU-R BT.2100: scene-linear 0..1 -> signal (OETF) and signal ->
      display luminance for a peak of Lw cd/m^2 with system gamma
      1.2 + 0.42 log10(Lw / 1000).
    * Plain power-law gamma for the SDR reference.

Every transfer function and tone mapper accepts a scalar or an array and
returns the same shape; scalars come back as Python floats.

References:
    - SMPTE ST 2084:2014 "High Dynamic Range EOTF of Mastering Reference
      Displays".
    - ITU-R BT.2100-2 "Image parameter values for high dynamic range
      television".
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Final, Mapping, Tuple, Union

import numpy as np
from numba import njit

from lumen_errors import ColorValidationError, require_finite, require_finite_array
from lumen_gamut import STANDARD_GAMUTS, GamutGeometry
from lumen_tables import D65_XY, ArrayFloat

__all__ = [
    # --- Constants ---
    "PQ_MAX_NITS",
    "TONE_MAPPERS",

    # --- Transfer Functions ---
    "pq_eotf",
    "pq_inverse_eotf",
    "hlg_oetf",
    "hlg_eotf",
    "gamma_eotf",

    # --- Tone Mapping ---
    "reinhard_tone_map",
    "hable_tone_map",
    "aces_tone_map",

    # --- Curves ---
    "pq_curve",
    "hlg_curve",
    "gamma_curve",
    "tone_map_curve",

    # --- HDR10 ---
    "HDR10Metadata",
    "PeakBrightnessScore",
    "HDRAnalysis",
    "dynamic_range_stops",
    "peak_brightness_score",
    "analyze_hdr10",
]

# --- SMPTE ST 2084 ---
PQ_M1: Final[float] = 0.1593017578125
PQ_M2: Final[float] = 78.84375
PQ_C1: Final[float] = 0.8359375
PQ_C2: Final[float] = 18.8515625
PQ_C3: Final[float] = 18.6875
PQ_MAX_NITS: Final[float] = 10000.0

# --- ITU-R BT.2100 HLG ---
HLG_A: Final[float] = 0.17883277
HLG_B: Final[float] = 1.0 - 4.0 * HLG_A
HLG_C: Final[float] = 0.5 - HLG_A * math.log(4.0 * HLG_A)

HABLE_WHITE: Final[float] = 11.2
DEFAULT_GAMMA: Final[float] = 2.4
DEFAULT_STEPS: Final[int] = 1024

Scalar = Union[float, ArrayFloat]


# =============================================================================
# 1. KERNELS
# =============================================================================

@njit(cache=True, fastmath=True)
def _clamp(v: float, lo: float, hi: float) -> float:
    return min(max(v, lo), hi)


@njit(cache=True, fastmath=True)
def _pq_eotf_kernel(signal: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(signal)
    for i in range(signal.size):
        p = _clamp(signal[i], 0.0, 1.0) ** (1.0 / PQ_M2)
        den = PQ_C2 - PQ_C3 * p
        if den <= 0.0:
            out[i] = 0.0
        else:
            out[i] = PQ_MAX_NITS * (max(p - PQ_C1, 0.0) / den) ** (1.0 / PQ_M1)
    return out


@njit(cache=True, fastmath=True)
def _pq_inverse_kernel(luminance: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(luminance)
    for i in range(luminance.size):
        p = (_clamp(luminance[i], 0.0, PQ_MAX_NITS) / PQ_MAX_NITS) ** PQ_M1
        out[i] = _clamp(((PQ_C1 + PQ_C2 * p) / (1.0 + PQ_C3 * p)) ** PQ_M2, 0.0, 1.0)
    return out


@njit(cache=True, fastmath=True)
def _hlg_oetf_kernel(scene: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(scene)
    for i in range(scene.size):
        L = _clamp(scene[i], 0.0, 1.0)
        if L <= 1.0 / 12.0:
            out[i] = np.sqrt(3.0 * L)
        else:
            out[i] = HLG_A * np.log(12.0 * L - HLG_B) + HLG_C
    return out


@njit(cache=True, fastmath=True)
def _hlg_eotf_kernel(signal: ArrayFloat, Lw: float) -> ArrayFloat:
    peak = max(Lw, 0.0)
    gamma = 1.2 + 0.42 * np.log10(max(Lw, 1.0) / 1000.0)
    out = np.empty_like(signal)
    for i in range(signal.size):
        E = _clamp(signal[i], 0.0, 1.0)
        if E <= 0.5:
            scene = E * E / 3.0
        else:
            scene = (np.exp((E - HLG_C) / HLG_A) + HLG_B) / 12.0
        out[i] = peak * max(scene, 0.0) ** gamma
    return out


@njit(cache=True, fastmath=True)
def _gamma_kernel(signal: ArrayFloat, gamma: float) -> ArrayFloat:
    out = np.empty_like(signal)
    for i in range(signal.size):
        out[i] = _clamp(signal[i], 0.0, 1.0) ** gamma
    return out


@njit(cache=True, fastmath=True)
def _reinhard_kernel(L: ArrayFloat, Lmax: float) -> ArrayFloat:
    """Ld = L (1 + L / Lmax^2) / (1 + L)."""
    m2 = Lmax * Lmax
    out = np.empty_like(L)
    for i in range(L.size):
        v = max(L[i], 0.0)
        out[i] = v * (1.0 + v / m2) / (1.0 + v)
    return out


@njit(cache=True, fastmath=True)
def _hable(x: float) -> float:
    A, B, C, D, E, F = 0.15, 0.5, 0.1, 0.2, 0.02, 0.3
    return (x * (A * x + C * B) + D * E) / (x * (A * x + B) + D * F) - E / F


@njit(cache=True, fastmath=True)
def _hable_kernel(L: ArrayFloat) -> ArrayFloat:
    scale = 1.0 / _hable(HABLE_WHITE)
    out = np.empty_like(L)
    for i in range(L.size):
        out[i] = _hable(max(L[i], 0.0)) * scale
    return out


@njit(cache=True, fastmath=True)
def _aces_kernel(L: ArrayFloat) -> ArrayFloat:
    """Narkowicz ACES filmic fit, clamped to [0, 1]."""
    out = np.empty_like(L)
    for i in range(L.size):
        v = max(L[i], 0.0)
        out[i] = _clamp((v * (2.51 * v + 0.03)) / (v * (2.43 * v + 0.59) + 0.14), 0.0, 1.0)
    return out


def _apply(kernel: Callable[..., ArrayFloat], values: Any, name: str, *args: float) -> Scalar:
    """Run a flat kernel over *values*, preserving shape; 0-d in gives float out."""
    arr = require_finite_array(values, name)
    flat = np.ascontiguousarray(arr.ravel())
    out = kernel(flat, *args).reshape(arr.shape)
    return float(out) if arr.ndim == 0 else out


# =============================================================================
# 2. TRANSFER FUNCTIONS
# =============================================================================

def pq_eotf(E: Scalar) -> Scalar:
    """PQ signal (0..1) -> absolute luminance in cd/m^2 (0..10000)."""
    return _apply(_pq_eotf_kernel, E, "E")


def pq_inverse_eotf(L: Scalar) -> Scalar:
    """Absolute luminance in cd/m^2 -> PQ signal (0..1)."""
    return _apply(_pq_inverse_kernel, L, "L")


def hlg_oetf(L: Scalar) -> Scalar:
    """Normalised scene-linear light (0..1) -> HLG signal (0..1)."""
    return _apply(_hlg_oetf_kernel, L, "L")


def hlg_eotf(E: Scalar, Lw: float = 1000.0) -> Scalar:
    """
    HLG signal -> display luminance in cd/m^2.

    Args:
        E: HLG signal, clamped to 0..1.
        Lw: Nominal peak display luminance (cd/m^2).  The system gamma uses
            max(Lw, 1).
    """
    return _apply(_hlg_eotf_kernel, E, "E", require_finite(Lw, "Lw"))


def gamma_eotf(E: Scalar, gamma: float = DEFAULT_GAMMA) -> Scalar:
    """SDR power-law EOTF, E^gamma; a non-positive gamma falls back to 2.4."""
    gamma = require_finite(gamma, "gamma")
    return _apply(_gamma_kernel, E, "E", gamma if gamma > 0.0 else DEFAULT_GAMMA)


# =============================================================================
# 3. TONE MAPPING
# =============================================================================

def reinhard_tone_map(L: Scalar, Lmax: float) -> Scalar:
    """Extended Reinhard with white point *Lmax*; Lmax maps to 1."""
    Lmax = max(require_finite(Lmax, "Lmax"), np.finfo(np.float64).eps)
    return _apply(_reinhard_kernel, L, "L", Lmax)


def hable_tone_map(L: Scalar) -> Scalar:
    """Hable (Uncharted 2) filmic curve normalised to a linear white of 11.2."""
    return _apply(_hable_kernel, L, "L")


def aces_tone_map(L: Scalar) -> Scalar:
    return _apply(_aces_kernel, L, "L")


TONE_MAPPERS: Final[Mapping[str, Callable[[Scalar, float], Scalar]]] = MappingProxyType({
    "reinhard": reinhard_tone_map,
    "hable": lambda L, Lmax: hable_tone_map(L),
    "aces": lambda L, Lmax: aces_tone_map(L),
})


# =============================================================================
# 4. CURVES
# =============================================================================

def _unit_ramp(steps: int) -> ArrayFloat:
    """max(2, floor(steps)) evenly spaced points on [0, 1]."""
    n = max(2, int(math.floor(require_finite(steps, "steps"))))
    return np.linspace(0.0, 1.0, n)


def pq_curve(steps: int = DEFAULT_STEPS) -> Tuple[ArrayFloat, ArrayFloat]:
    """(signal, luminance) samples of the PQ EOTF."""
    x = _unit_ramp(steps)
    return x, pq_eotf(x)


def hlg_curve(steps: int = DEFAULT_STEPS, Lw: float = 1000.0) -> Tuple[ArrayFloat, ArrayFloat]:
    x = _unit_ramp(steps)
    return x, hlg_eotf(x, Lw)


def gamma_curve(steps: int = DEFAULT_STEPS,
                gamma: float = DEFAULT_GAMMA) -> Tuple[ArrayFloat, ArrayFloat]:
    x = _unit_ramp(steps)
    return x, gamma_eotf(x, gamma)


def tone_map_curve(mapper: Union[str, Callable[[Scalar, float], Scalar]],
                   max_luminance: float,
                   steps: int = DEFAULT_STEPS) -> Tuple[ArrayFloat, ArrayFloat]:
    """
    Sample a tone mapper over 0..max_luminance.

    Args:
        mapper: A name from ``TONE_MAPPERS`` or any callable
                ``mapper(L, max_luminance)``.
        max_luminance: Upper end of the input ramp (negative clamps to 0).
        steps: Number of samples (at least 2).

    Returns:
        (input luminance, mapped output) arrays.
    """
    if isinstance(mapper, str):
        try:
            mapper = TONE_MAPPERS[mapper]
        except KeyError:
            raise ColorValidationError(
                f"Unknown tone mapper '{mapper}'. Choose from: {list(TONE_MAPPERS)}"
            ) from None
    top = max(require_finite(max_luminance, "max_luminance"), 0.0)
    x = _unit_ramp(steps) * top
    return x, np.asarray(mapper(x, top), dtype=np.float64)


# =============================================================================
# 5. HDR10 METADATA
# =============================================================================

XY = Tuple[float, float]

_BT2020 = STANDARD_GAMUTS["BT.2020"]


@dataclass(frozen=True, slots=True)
class HDR10Metadata:
    """
    HDR10 static metadata (SMPTE ST 2086 mastering display + CTA-861.3 levels).

    Luminances are in cd/m^2; primaries and white point in CIE 1931 xy.
    """
    max_cll: float
    max_fall: float
    master_display_max_luminance: float
    master_display_min_luminance: float
    primary_r: XY
    primary_g: XY
    primary_b: XY
    white_point: XY = D65_XY

    def __post_init__(self) -> None:
        for name in ("max_cll", "max_fall",
                     "master_display_max_luminance", "master_display_min_luminance"):
            object.__setattr__(self, name, require_finite(getattr(self, name), name))
        for name in ("primary_r", "primary_g", "primary_b", "white_point"):
            pt = require_finite_array(getattr(self, name), name).ravel()
            if pt.size != 2:
                raise ColorValidationError(f"{name} must be an (x, y) pair")
            object.__setattr__(self, name, (float(pt[0]), float(pt[1])))


@dataclass(frozen=True, slots=True)
class PeakBrightnessScore:
    score: str
    description: str


@dataclass(frozen=True, slots=True)
class HDRAnalysis:
    dynamic_range: float
    peak_brightness: PeakBrightnessScore
    max_cll_to_max_fall_ratio: float
    hdr10_grade: str
    gamut_coverage: float


# (upper bound exclusive, score, description); the last band is open-ended
_BRIGHTNESS_BANDS: Final[Tuple[Tuple[float, str, str], ...]] = (
    (400.0, "Basic SDR", "Insufficient peak brightness for HDR highlights."),
    (600.0, "HDR Entry", "Entry-level HDR highlights with limited specular intensity."),
    (1000.0, "HDR Standard", "Solid HDR rendering for mainstream HDR10 content."),
    (2000.0, "HDR Premium", "High-impact HDR highlights with strong contrast perception."),
)


def dynamic_range_stops(max_nits: float, min_nits: float) -> float:
    """log2(max / min); 0 unless 0 < min < max."""
    hi = require_finite(max_nits, "max_nits")
    lo = require_finite(min_nits, "min_nits")
    if hi <= 0.0 or lo <= 0.0 or hi <= lo:
        return 0.0
    return math.log2(hi / lo)


def peak_brightness_score(max_nits: float) -> PeakBrightnessScore:
    nits = require_finite(max_nits, "max_nits")
    for upper, score, description in _BRIGHTNESS_BANDS:
        if nits < upper:
            return PeakBrightnessScore(score, description)
    if nits <= 4000.0:
        return PeakBrightnessScore(
            "HDR Reference", "Reference-class highlight reproduction for demanding content.")
    return PeakBrightnessScore("HDR Mastering", "Mastering-level peak brightness headroom.")


def _grade(meta: HDR10Metadata, stops: float, coverage: float) -> str:
    if (meta.max_cll >= 1000.0 and meta.max_fall >= 400.0
            and meta.master_display_max_luminance >= 1000.0
            and meta.master_display_min_luminance <= 0.05
            and stops >= 14.0 and coverage >= 90.0):
        return "Premium"
    if (meta.max_cll >= 600.0 and meta.max_fall >= 250.0
            and meta.master_display_max_luminance >= 600.0
            and meta.master_display_min_luminance <= 0.1
            and stops >= 12.0 and coverage >= 75.0):
        return "Standard"
    return "Basic"


def analyze_hdr10(metadata: HDR10Metadata) -> HDRAnalysis:
    """
    Summarise HDR10 metadata.

    Gamut coverage is the xy triangle-area ratio against BT.2020, clamped
    to [0, 100] %.
    """
    stops = dynamic_range_stops(metadata.master_display_max_luminance,
                                metadata.master_display_min_luminance)
    primaries = (metadata.primary_r, metadata.primary_g, metadata.primary_b)
    coverage = min(max(GamutGeometry.coverage(primaries, _BT2020), 0.0), 100.0)
    ratio = metadata.max_cll / metadata.max_fall if metadata.max_fall > 0.0 else 0.0
    return HDRAnalysis(
        dynamic_range=stops,
        peak_brightness=peak_brightness_score(metadata.max_cll),
        max_cll_to_max_fall_ratio=ratio,
        hdr10_grade=_grade(metadata, stops, coverage),
        gamut_coverage=coverage,
    )
