# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Exceptions, warnings and input validation helpers.

Every public entry point validates its numeric inputs through the helpers in
this module, so invalid data (NaN, +/-inf, empty sequences, wrong shapes)
fails loudly at the boundary instead of propagating NaN through a pipeline.

Degenerate *domain* cases are not errors and are handled where they occur:
    - zero chromaticity denominators fall back to the D65 constant,
    - a zero-area reference gamut yields 0 % coverage,
    - a zero-luminosity illuminant skips Y-normalisation.
"""

from __future__ import annotations

from typing import Any

import numpy as np

__all__ = [
    "LumenError",
    "ColorValidationError",
    "SpectralLengthError",
    "SyntheticSampleWarning",
    "require_finite",
    "require_finite_array",
    "require_non_negative_array",
]


class LumenError(Exception):
    """Base class for all Lumen exceptions."""


class ColorValidationError(LumenError, ValueError):
    """Raised for invalid numeric input (NaN/inf, empty or mis-shaped data)."""


class SpectralLengthError(ColorValidationError):
    """Illuminant and reflectance arrays have different lengths."""


class SyntheticSampleWarning(UserWarning):
    """
    Result was computed from synthetic (Gaussian) reflectance approximations.

    TLCI and TM-30 use generated sample sets instead of the official measured
    patch data.  Scores are stable and internally consistent but carry an
    accuracy ceiling against the published standards.
    """


def require_finite(value: Any, name: str) -> float:
    """Return *value* as float, raising if it is not a finite real number."""
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise ColorValidationError(f"{name} must be a real number, got {value!r}") from exc
    if not np.isfinite(out):
        raise ColorValidationError(f"{name} must be finite, got {out}")
    return out


def require_finite_array(values: Any, name: str, allow_empty: bool = False) -> np.ndarray:
    """
    Convert *values* to a float64 array and validate it.

    Raises:
        ColorValidationError: if the data is empty (unless ``allow_empty``),
            not numeric, or contains NaN / infinite entries.
    """
    try:
        arr = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ColorValidationError(f"{name} must be numeric") from exc
    if arr.size == 0:
        if allow_empty:
            return arr
        raise ColorValidationError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise ColorValidationError(f"{name} contains NaN or infinite values")
    return arr


def require_non_negative_array(values: Any, name: str) -> np.ndarray:
    """Finite-array validation plus a non-negativity check."""
    arr = require_finite_array(values, name)
    if np.any(arr < 0.0):
        raise ColorValidationError(f"{name} must be non-negative")
    return arr
