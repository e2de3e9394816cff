# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Spectral Integrator
===================
Resampling of arbitrary spectral power distributions onto the 5 nm
reference grid and integration against the CIE 1931 observer.

Conventions:
    - All integrals use the trapezoidal rule (``scipy.integrate.trapezoid``).
    - Normalisation puts Y = 100 for the light source itself (k = 100 / Y)
      or, for reflecting samples, uses the CIE 13.3 factor
      k = 100 / sum(S * y_bar * dlambda).  A zero normalising sum skips the
      scaling and returns the raw (near-zero) values.
    - Resampling never extrapolates numerically; wavelengths outside the
      measured range take the nearest edge value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union

import numpy as np
from scipy.integrate import trapezoid
from scipy.interpolate import Akima1DInterpolator, CubicSpline, PchipInterpolator

from lumen_config import get_config
from lumen_errors import (
    ColorValidationError,
    SpectralLengthError,
    require_finite,
    require_finite_array,
)
from lumen_tables import (
    CMF_1931_2DEG,
    GRID_SIZE,
    GRID_STEP,
    WAVELENGTHS_5NM,
    ArrayFloat,
    interpolate_observer,
)

__all__ = [
    "SpectralDistribution",
    "SpectralInput",
    "SpectralIntegrator",
    "as_spectral_arrays",
]

logger = logging.getLogger(__name__)


# =============================================================================
# 1. DATA MODEL
# =============================================================================

@dataclass(frozen=True, slots=True)
class SpectralDistribution:
    """
    Immutable spectral power distribution.

    Samples are sorted by wavelength on construction and stored as read-only
    float64 arrays.  Irregular sampling is allowed.

    Raises:
        ColorValidationError: fewer than 2 points, mismatched lengths,
            non-finite values or negative intensities.
    """
    wavelengths: np.ndarray
    intensities: np.ndarray

    def __post_init__(self) -> None:
        wl = require_finite_array(self.wavelengths, "wavelengths").ravel()
        val = require_finite_array(self.intensities, "intensities").ravel()
        if wl.shape != val.shape:
            raise ColorValidationError(
                f"wavelengths and intensities differ in length: {wl.size} vs {val.size}"
            )
        if wl.size < 2:
            raise ColorValidationError("A spectral distribution needs at least 2 points")
        if np.any(val < 0.0):
            raise ColorValidationError("Spectral intensities must be non-negative")

        order = np.argsort(wl, kind="stable")
        wl = np.ascontiguousarray(wl[order])
        val = np.ascontiguousarray(val[order])
        wl.setflags(write=False)
        val.setflags(write=False)
        object.__setattr__(self, "wavelengths", wl)
        object.__setattr__(self, "intensities", val)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[float, float]]) -> "SpectralDistribution":
        """Build from an iterable of ``(wavelength_nm, intensity)`` pairs."""
        data = np.asarray(list(pairs), dtype=np.float64)
        if data.ndim != 2 or data.shape[1] != 2:
            raise ColorValidationError(
                f"Expected (wavelength, intensity) pairs, got shape {data.shape}"
            )
        return cls(data[:, 0], data[:, 1])

    def __len__(self) -> int:
        return int(self.wavelengths.size)

    @property
    def peak_wavelength(self) -> float:
        """Wavelength of the first maximum."""
        return float(self.wavelengths[int(np.argmax(self.intensities))])

    @property
    def min_wavelength(self) -> float:
        return float(self.wavelengths[0])

    @property
    def max_wavelength(self) -> float:
        return float(self.wavelengths[-1])

    def shifted(self, nm: float) -> "SpectralDistribution":
        """Return a copy with every wavelength offset by *nm*."""
        return SpectralDistribution(self.wavelengths + require_finite(nm, "shift"), self.intensities)


SpectralInput = Union[SpectralDistribution, Iterable[Tuple[float, float]]]


def as_spectral_arrays(spd: Any, allow_empty: bool = False) -> Tuple[ArrayFloat, ArrayFloat]:
    """
    Normalise a ``SpectralDistribution`` or a sequence of pairs to sorted
    ``(wavelengths, intensities)`` arrays.

    With ``allow_empty=True`` an empty pair sequence yields two empty arrays.
    """
    if isinstance(spd, SpectralDistribution):
        return spd.wavelengths, spd.intensities
    data = require_finite_array(list(spd), "spectrum", allow_empty=allow_empty)
    if data.size == 0:
        empty = np.empty(0, dtype=np.float64)
        return empty, empty
    sd = SpectralDistribution.from_pairs(data)
    return sd.wavelengths, sd.intensities


def _grid_vector(values: Any, name: str) -> ArrayFloat:
    arr = require_finite_array(values, name).ravel()
    return np.ascontiguousarray(arr)


# =============================================================================
# 2. SPECTRAL INTEGRATOR
# =============================================================================

class SpectralIntegrator:
    """Static utility class for spectral resampling and CIE integration."""

    RESAMPLING_METHODS: Tuple[str, ...] = ("linear", "pchip", "akima", "cubic")

    # =====================================================================
    #  Resampling
    # =====================================================================

    @staticmethod
    def resample_to_grid(spd: SpectralInput) -> ArrayFloat:
        """
        Linearly resamples *spd* onto the 81-point 380-780 nm grid.

        Grid points outside the measured range take the nearest edge value
        (flat extrapolation).

        Returns:
            Intensities on ``WAVELENGTHS_5NM``, shape (81,).
        """
        wl, val = as_spectral_arrays(spd)
        return np.interp(WAVELENGTHS_5NM, wl, val)

    @staticmethod
    def resample(spd: SpectralInput, step: float = 1.0,
                 start: Optional[float] = None, end: Optional[float] = None,
                 method: str = "linear") -> SpectralDistribution:
        """
        Resamples *spd* onto a uniform grid ``start..end`` (inclusive).

        Args:
            spd: Input distribution.
            step: Grid spacing in nm (> 0).
            start: First wavelength; defaults to the shortest input wavelength.
            end: Last wavelength; defaults to the longest input wavelength.
            method: 'linear', 'pchip', 'akima' or 'cubic'.  The spline
                    methods are evaluated only inside the measured range;
                    outside it the edge values are held and any spline
                    undershoot below 0 is clipped.

        Returns:
            A new ``SpectralDistribution``.
        """
        wl, val = as_spectral_arrays(spd)
        step = require_finite(step, "step")
        if step <= 0.0:
            raise ColorValidationError(f"step must be positive, got {step}")
        lo = wl[0] if start is None else require_finite(start, "start")
        hi = wl[-1] if end is None else require_finite(end, "end")
        if hi < lo:
            raise ColorValidationError(f"end ({hi}) must not be below start ({lo})")

        grid = lo + step * np.arange(int(np.floor((hi - lo) / step + 1e-9)) + 1)

        methods = {
            "pchip": lambda w, v: PchipInterpolator(w, v, extrapolate=False),
            "akima": lambda w, v: Akima1DInterpolator(w, v),
            "cubic": lambda w, v: CubicSpline(w, v, extrapolate=False),
        }

        if method == "linear":
            out = np.interp(grid, wl, val)
        elif method in methods:
            # spline constructors need strictly increasing abscissae
            uniq_wl, first = np.unique(wl, return_index=True)
            uniq_val = val[first]
            if uniq_wl.size < 2:
                raise ColorValidationError("Spline resampling needs at least 2 distinct wavelengths")
            out = np.interp(grid, uniq_wl, uniq_val)
            inside = (grid >= uniq_wl[0]) & (grid <= uniq_wl[-1])
            if np.any(inside):
                out[inside] = methods[method](uniq_wl, uniq_val)(grid[inside])
            out = np.clip(out, 0.0, None)
        else:
            raise ColorValidationError(
                f"Unknown resampling method '{method}'. "
                f"Choose from: {list(SpectralIntegrator.RESAMPLING_METHODS)}"
            )
        return SpectralDistribution(grid, out)

    # =====================================================================
    #  Integration
    # =====================================================================

    @staticmethod
    def spectrum_to_xyz(spd: SpectralInput, normalize: bool = True) -> ArrayFloat:
        """
        Integrates an arbitrary spectrum against the 1931 observer.

        The observer is interpolated onto the input wavelengths (0 outside
        380-780 nm) and the product is integrated with the trapezoidal rule.

        Args:
            spd: Distribution or sequence of (nm, intensity) pairs.  Empty
                 input returns [0, 0, 0].
            normalize: Scale so that Y = 100 (skipped when Y is 0).

        Returns:
            XYZ, shape (3,).
        """
        wl, val = as_spectral_arrays(spd, allow_empty=True)
        if wl.size == 0:
            return np.zeros(3, dtype=np.float64)
        obs = interpolate_observer(wl)
        xyz = trapezoid(val[:, None] * obs, wl, axis=0)
        if normalize and xyz[1] > 0.0:
            xyz = xyz * (100.0 / xyz[1])
        return xyz

    @staticmethod
    def illuminant_xyz(grid_spd: ArrayFloat) -> ArrayFloat:
        """
        White-point XYZ of a light source sampled on the 5 nm grid, Y = 100.

        A zero-luminosity source is returned unnormalised.
        """
        s = _grid_vector(grid_spd, "illuminant")
        if s.size != GRID_SIZE:
            raise SpectralLengthError(f"Illuminant must have {GRID_SIZE} grid samples, got {s.size}")
        xyz = trapezoid(s[:, None] * CMF_1931_2DEG, dx=GRID_STEP, axis=0)
        if xyz[1] > 0.0:
            xyz = xyz * (100.0 / xyz[1])
        return xyz

    @staticmethod
    def _matched(grid_spd: ArrayFloat, reflectance: ArrayFloat,
                 truncate: Optional[bool]) -> Tuple[ArrayFloat, ArrayFloat, ArrayFloat]:
        """Length check for illuminant x reflectance products."""
        if truncate is None:
            truncate = get_config().truncate_mismatched
        n_s, n_r = grid_spd.shape[-1], reflectance.shape[-1]
        if n_s == n_r == GRID_SIZE:
            return grid_spd, reflectance, CMF_1931_2DEG
        if not truncate:
            raise SpectralLengthError(
                f"Illuminant ({n_s}) and reflectance ({n_r}) must both have "
                f"{GRID_SIZE} grid samples"
            )
        n = min(n_s, n_r, GRID_SIZE)
        if n < 2:
            raise ColorValidationError("Truncated spectra need at least 2 samples")
        logger.debug("Truncating illuminant/reflectance from (%d, %d) to %d samples", n_s, n_r, n)
        return grid_spd[..., :n], reflectance[..., :n], CMF_1931_2DEG[:n]

    @staticmethod
    def sample_xyz(grid_spd: ArrayFloat, reflectance: ArrayFloat,
                   truncate: Optional[bool] = None) -> ArrayFloat:
        """
        Tristimulus of a reflecting sample under a grid illuminant (CIE 13.3).

        Normalised with k = 100 / sum(S * y_bar * dlambda), so a perfect
        reflector has Y = 100.

        Args:
            grid_spd: Illuminant on the 5 nm grid.
            reflectance: Reflectance factors on the same grid.
            truncate: Truncate both arrays to the shorter length instead of
                      raising ``SpectralLengthError``.  ``None`` defers to
                      ``lumen_config``.
        """
        s = _grid_vector(grid_spd, "illuminant")
        r = _grid_vector(reflectance, "reflectance")
        s, r, cmf = SpectralIntegrator._matched(s, r, truncate)
        denom = trapezoid(s * cmf[:, 1], dx=GRID_STEP)
        xyz = trapezoid((s * r)[:, None] * cmf, dx=GRID_STEP, axis=0)
        if denom > 0.0:
            xyz = xyz * (100.0 / denom)
        return xyz

    @staticmethod
    def sample_xyz_batch(grid_spd: ArrayFloat, reflectances: ArrayFloat,
                         truncate: Optional[bool] = None) -> ArrayFloat:
        """
        ``sample_xyz`` for a (K, 81) reflectance matrix.

        Returns:
            XYZ array, shape (K, 3).
        """
        s = _grid_vector(grid_spd, "illuminant")
        refl = require_finite_array(reflectances, "reflectances")
        refl = np.ascontiguousarray(np.atleast_2d(refl))
        if refl.ndim != 2:
            raise ColorValidationError(f"Expected a (K, N) reflectance matrix, got {refl.shape}")
        s, refl, cmf = SpectralIntegrator._matched(s, refl, truncate)
        denom = trapezoid(s * cmf[:, 1], dx=GRID_STEP)
        weighted = refl * s
        xyz = np.stack(
            [trapezoid(weighted * cmf[:, c], dx=GRID_STEP, axis=-1) for c in range(3)],
            axis=-1,
        )
        if denom > 0.0:
            xyz *= 100.0 / denom
        return xyz

    @staticmethod
    def monochromatic_to_xyz(wavelength: Union[float, ArrayFloat]) -> ArrayFloat:
        """
        Observer triple at *wavelength*, scaled so that Y = 100.

        Wavelengths where y_bar is 0 (including outside 380-780 nm) give
        [0, 0, 0].  Scalar input returns shape (3,), array input (..., 3).
        """
        wl = require_finite_array(wavelength, "wavelength")
        obs = interpolate_observer(wl)
        y = obs[..., 1:2]
        scale = np.divide(100.0, y, out=np.zeros_like(y), where=y > 0.0)
        return obs * scale
