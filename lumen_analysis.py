# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Spectrum and Viewing-Angle Analysis
===================================
Measurement helpers built on the colorimetry core:

    * emission-spectrum peak, FWHM and FWQM, wavelength shifts;
    * one-call chromaticity summary of an SPD (XYZ, xy, u'v', hex, CCT/Duv);
    * viewing-angle colour shift of a display: Delta E and contrast ratio
      of every angle against the normal-incidence (0 deg) measurement, and
      the drift of its white point in xy.

Widths are found by linear interpolation between the samples that bracket
the level on either side of the peak; a side without a crossing yields
``None`` rather than an extrapolated edge.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numba import njit

from lumen_cct import CCTDuvEstimator
from lumen_colorspace import ChromaticitySpace
from lumen_delta_e import ColorDifferenceEngine
from lumen_errors import ColorValidationError, require_finite
from lumen_spectral import SpectralDistribution, SpectralInput, SpectralIntegrator, as_spectral_arrays
from lumen_tables import GRID_END, GRID_START, ArrayFloat

__all__ = [
    # --- Result Types ---
    "SpectrumAnalysis",
    "ChromaticitySummary",
    "ViewingAngleMeasurement",
    "ViewingAngleMetric",
    "WhitePointShift",

    # --- Spectrum ---
    "analyze_spectrum",
    "shift_spectrum",
    "shift_spectrum_clamped",
    "peak_wavelength",
    "fwhm",
    "calculate_chromaticity",

    # --- Viewing Angle ---
    "xy_luminance_to_lab",
    "viewing_angle_metrics",
    "white_point_shift",
]

logger = logging.getLogger(__name__)

Range = Tuple[float, float]


# =============================================================================
# 1. RESULT TYPES
# =============================================================================

@dataclass(frozen=True, slots=True)
class SpectrumAnalysis:
    """
    Peak and band widths of an emission spectrum.

    All wavelengths include the requested shift.  Widths and ranges are
    ``None`` when the spectrum does not fall below the level on both sides
    of the peak.
    """
    peak_wavelength: float
    peak_intensity: float
    fwhm: Optional[float]
    fwhm_range: Optional[Range]
    fwqm: Optional[float]
    fwqm_range: Optional[Range]


@dataclass(frozen=True, slots=True)
class ChromaticitySummary:
    xyz: ArrayFloat
    xy: ArrayFloat
    uv: ArrayFloat
    dominant_wavelength: float
    hex: str
    cct: int
    duv: float


@dataclass(frozen=True, slots=True)
class ViewingAngleMeasurement:
    """One goniometric reading: angle (deg), luminance (cd/m^2) and CIE xy."""
    angle: float
    luminance: float
    x: float
    y: float

    def __post_init__(self) -> None:
        for name in ("angle", "luminance", "x", "y"):
            object.__setattr__(self, name, require_finite(getattr(self, name), name))


@dataclass(frozen=True, slots=True)
class ViewingAngleMetric:
    angle: float
    luminance: float
    x: float
    y: float
    delta_e_ab: float
    delta_e_2000: float
    contrast_ratio: float


@dataclass(frozen=True, slots=True)
class WhitePointShift:
    angle: float
    dx: float
    dy: float
    distance: float


# =============================================================================
# 2. SPECTRUM
# =============================================================================

@njit(cache=True, fastmath=True)
def _width_at_level(wl: ArrayFloat, val: ArrayFloat, peak: int, level: float) -> Tuple[float, float]:
    """Nearest level crossings left and right of *peak*; NaN where none exists."""
    left = np.nan
    for i in range(peak, 0, -1):
        if val[i] >= level and val[i - 1] < level:
            t = (level - val[i - 1]) / (val[i] - val[i - 1])
            left = wl[i - 1] + t * (wl[i] - wl[i - 1])
            break
    right = np.nan
    for i in range(peak, wl.shape[0] - 1):
        if val[i] >= level and val[i + 1] < level:
            t = (level - val[i]) / (val[i + 1] - val[i])
            right = wl[i] + t * (wl[i + 1] - wl[i])
            break
    return left, right


def _band(wl: ArrayFloat, val: ArrayFloat, peak: int, level: float,
          shift: float) -> Tuple[Optional[float], Optional[Range]]:
    left, right = _width_at_level(wl, val, peak, level)
    if np.isnan(left) or np.isnan(right):
        return None, None
    return float(right - left), (float(left + shift), float(right + shift))


def analyze_spectrum(spd: SpectralInput, shift_nm: float = 0.0) -> SpectrumAnalysis:
    """
    Peak wavelength and intensity plus full widths at half and quarter maximum.

    Args:
        spd: Emission spectrum.
        shift_nm: Offset added to every reported wavelength.
    """
    shift = require_finite(shift_nm, "shift_nm")
    wl, val = as_spectral_arrays(spd)
    peak = int(np.argmax(val))
    peak_intensity = float(val[peak])
    half_width, half_range = _band(wl, val, peak, peak_intensity / 2.0, shift)
    quarter_width, quarter_range = _band(wl, val, peak, peak_intensity / 4.0, shift)
    return SpectrumAnalysis(
        peak_wavelength=float(wl[peak] + shift),
        peak_intensity=peak_intensity,
        fwhm=half_width,
        fwhm_range=half_range,
        fwqm=quarter_width,
        fwqm_range=quarter_range,
    )


def shift_spectrum(spd: SpectralInput, nm: float) -> SpectralDistribution:
    wl, val = as_spectral_arrays(spd)
    return SpectralDistribution(wl + require_finite(nm, "nm"), val)


def shift_spectrum_clamped(spd: SpectralInput, nm: float,
                           min_wavelength: float = GRID_START,
                           max_wavelength: float = GRID_END) -> SpectralDistribution:
    """Shift, then zero the intensity of samples that leave [min, max] nm."""
    wl, val = as_spectral_arrays(spd)
    moved = wl + require_finite(nm, "nm")
    lo = require_finite(min_wavelength, "min_wavelength")
    hi = require_finite(max_wavelength, "max_wavelength")
    inside = (moved >= lo) & (moved <= hi)
    return SpectralDistribution(moved, np.where(inside, val, 0.0))


def peak_wavelength(spd: SpectralInput) -> float:
    """Wavelength of the first maximum."""
    wl, val = as_spectral_arrays(spd)
    return float(wl[int(np.argmax(val))])


def fwhm(spd: SpectralInput) -> float:
    """
    Full width at half maximum between the outermost half-level crossings.

    A side without a crossing falls back to the first / last wavelength.
    Fewer than 3 samples give 0.
    """
    wl, val = as_spectral_arrays(spd)
    if wl.size < 3:
        return 0.0
    half = val.max() / 2.0

    left = wl[0]
    for i in range(wl.size - 1):
        if val[i] < half <= val[i + 1]:
            t = (half - val[i]) / (val[i + 1] - val[i])
            left = wl[i] + t * (wl[i + 1] - wl[i])
            break

    right = wl[-1]
    for i in range(wl.size - 1, 0, -1):
        if val[i] < half <= val[i - 1]:
            t = (half - val[i]) / (val[i - 1] - val[i])
            right = wl[i] + t * (wl[i - 1] - wl[i])
            break
    return float(right - left)


def calculate_chromaticity(spd: SpectralInput) -> ChromaticitySummary:
    """
    Colour summary of an emission spectrum.

    The dominant wavelength reported here is the spectral peak, not the
    hue-line construction through the white point.
    """
    xyz = SpectralIntegrator.spectrum_to_xyz(spd)
    xy = ChromaticitySpace.xyz_to_xy(xyz)
    cct = CCTDuvEstimator.calculate_cct_and_duv(float(xy[0]), float(xy[1]))
    return ChromaticitySummary(
        xyz=xyz,
        xy=xy,
        uv=ChromaticitySpace.xyz_to_uv(xyz),
        dominant_wavelength=peak_wavelength(spd),
        hex=ChromaticitySpace.xyz_to_hex(xyz),
        cct=cct.cct,
        duv=cct.duv,
    )


# =============================================================================
# 3. VIEWING ANGLE
# =============================================================================

def xy_luminance_to_lab(x: float, y: float, luminance: float,
                        reference_luminance: float) -> ArrayFloat:
    """
    CIELAB (D65 white) of an xy + luminance reading.

    Luminance is scaled so that *reference_luminance* maps to Y = 100; a
    non-positive reference maps everything to Y = 0.
    """
    lum = require_finite(luminance, "luminance")
    ref = require_finite(reference_luminance, "reference_luminance")
    y_norm = lum / ref * 100.0 if ref > 0.0 else 0.0
    xyz = ChromaticitySpace.xyY_to_xyz([require_finite(x, "x"), require_finite(y, "y"), y_norm])
    return ChromaticitySpace.xyz_to_lab(xyz)


def _reference(measurements: Sequence[ViewingAngleMeasurement]) -> ViewingAngleMeasurement:
    for m in measurements:
        if m.angle == 0.0:
            return m
    return measurements[0]


def _as_measurements(measurements) -> List[ViewingAngleMeasurement]:
    rows = list(measurements)
    for i, m in enumerate(rows):
        if not isinstance(m, ViewingAngleMeasurement):
            raise ColorValidationError(f"Row {i} is not a ViewingAngleMeasurement: {m!r}")
    return rows


def viewing_angle_metrics(measurements: Sequence[ViewingAngleMeasurement]) -> List[ViewingAngleMetric]:
    """
    Delta E76, CIEDE2000 and contrast ratio of each angle against the reference.

    The reference is the 0 deg row, or the first row when none exists.  An
    empty input returns an empty list.
    """
    rows = _as_measurements(measurements)
    if not rows:
        return []
    ref = _reference(rows)
    ref_lum = ref.luminance
    scale = 100.0 / ref_lum if ref_lum > 0.0 else 0.0

    xyY = np.array([[m.x, m.y, m.luminance * scale] for m in rows], dtype=np.float64)
    labs = ChromaticitySpace.xyz_to_lab(ChromaticitySpace.xyY_to_xyz(xyY))
    ref_lab = xy_luminance_to_lab(ref.x, ref.y, ref_lum, ref_lum)

    de_ab = np.atleast_1d(ColorDifferenceEngine.delta_e_76(ref_lab[None, :], labs))
    de_2000 = np.atleast_1d(ColorDifferenceEngine.delta_e_2000(ref_lab[None, :], labs))
    logger.debug("Viewing-angle reference at %.1f deg, %d rows", ref.angle, len(rows))
    return [
        ViewingAngleMetric(
            angle=m.angle, luminance=m.luminance, x=m.x, y=m.y,
            delta_e_ab=float(de_ab[i]),
            delta_e_2000=float(de_2000[i]),
            contrast_ratio=m.luminance / ref_lum if ref_lum > 0.0 else 0.0,
        )
        for i, m in enumerate(rows)
    ]


def white_point_shift(measurements: Sequence[ViewingAngleMeasurement]) -> List[WhitePointShift]:
    """Chromaticity drift (dx, dy, Euclidean distance) against the reference angle."""
    rows = _as_measurements(measurements)
    if not rows:
        return []
    ref = _reference(rows)
    shifts = []
    for m in rows:
        dx = m.x - ref.x
        dy = m.y - ref.y
        shifts.append(WhitePointShift(m.angle, dx, dy, float(np.hypot(dx, dy))))
    return shifts
