# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Gamut Geometry
==============
Triangle areas and area-ratio coverage of display primaries in CIE 1931 xy
and CIE 1976 u'v'.

Coverage here is the ratio of triangle areas x 100.  It is *not* the
intersection of the two triangles, so a wider gamut exceeds 100 %.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final, List, Literal, Mapping, Sequence, Tuple, Union

import numpy as np
from numba import njit

from lumen_colorspace import ChromaticitySpace
from lumen_errors import ColorValidationError, require_finite, require_finite_array
from lumen_tables import D65_XY, ArrayFloat

__all__ = [
    "DiagramMode",
    "AREA_TOLERANCE",
    "GamutPrimaries",
    "CoverageEntry",
    "STANDARD_GAMUTS",
    "GamutGeometry",
]

DiagramMode = Literal["CIE1931", "CIE1976"]
_MODES: Final[Tuple[str, ...]] = ("CIE1931", "CIE1976")

# Areas at or below this are treated as degenerate (collinear vertices).
AREA_TOLERANCE: Final[float] = 1e-12

XY = Tuple[float, float]


# =============================================================================
# 1. DATA TYPES
# =============================================================================

@dataclass(frozen=True, slots=True)
class GamutPrimaries:
    """Red, green and blue primaries (plus white point) in CIE 1931 xy."""
    name: str
    red: XY
    green: XY
    blue: XY
    white_point: XY = D65_XY

    def __post_init__(self) -> None:
        for label in ("red", "green", "blue", "white_point"):
            pt = require_finite_array(getattr(self, label), f"{self.name}.{label}").ravel()
            if pt.size != 2:
                raise ColorValidationError(f"{self.name}.{label} must be an (x, y) pair")
            object.__setattr__(self, label, (float(pt[0]), float(pt[1])))

    def vertices(self) -> ArrayFloat:
        """Primaries as a (3, 2) array in R, G, B order."""
        return np.array([self.red, self.green, self.blue], dtype=np.float64)


@dataclass(frozen=True, slots=True)
class CoverageEntry:
    """Coverage against one standard; areas are the standard's own."""
    standard_name: str
    coverage_xy: float
    coverage_uv: float
    area_xy: float
    area_uv: float


STANDARD_GAMUTS: Final[Mapping[str, GamutPrimaries]] = MappingProxyType({
    "sRGB": GamutPrimaries("sRGB", (0.64, 0.33), (0.30, 0.60), (0.15, 0.06)),
    "DCI-P3": GamutPrimaries("DCI-P3", (0.680, 0.320), (0.265, 0.690), (0.150, 0.060)),
    "BT.2020": GamutPrimaries("BT.2020", (0.708, 0.292), (0.170, 0.797), (0.131, 0.046)),
    "AdobeRGB": GamutPrimaries("Adobe RGB", (0.64, 0.33), (0.21, 0.71), (0.15, 0.06)),
    "NTSC": GamutPrimaries("NTSC", (0.67, 0.33), (0.21, 0.71), (0.14, 0.08),
                           white_point=(0.3101, 0.3162)),
})

PrimariesLike = Union[GamutPrimaries, Sequence[Sequence[float]]]


# =============================================================================
# 2. KERNELS
# =============================================================================

@njit(cache=True, fastmath=True)
def _shoelace(xs: ArrayFloat, ys: ArrayFloat) -> float:
    """Absolute polygon area for ordered vertices (implicitly closed)."""
    n = xs.shape[0]
    acc = 0.0
    for i in range(n):
        j = (i + 1) % n
        acc += xs[i] * ys[j] - xs[j] * ys[i]
    return abs(acc) * 0.5


def _vertices(primaries: Any) -> ArrayFloat:
    if isinstance(primaries, GamutPrimaries):
        return primaries.vertices()
    v = require_finite_array(primaries, "primaries")
    if v.shape != (3, 2):
        raise ColorValidationError(f"Primaries must be three (x, y) pairs, got shape {v.shape}")
    return v


# =============================================================================
# 3. GEOMETRY
# =============================================================================

class GamutGeometry:
    """Static utility class for gamut area and coverage."""

    STANDARDS = STANDARD_GAMUTS

    @staticmethod
    def triangle_area(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> float:
        """Absolute shoelace area; independent of vertex winding."""
        pts = require_finite_array([p1, p2, p3], "triangle")
        if pts.shape != (3, 2):
            raise ColorValidationError(f"Expected three (x, y) points, got shape {pts.shape}")
        (x1, y1), (x2, y2), (x3, y3) = pts
        return float(0.5 * abs(x1 * (y2 - y3) + x2 * (y3 - y1) + x3 * (y1 - y2)))

    @staticmethod
    def polygon_area(xs: Sequence[float], ys: Sequence[float]) -> float:
        """Shoelace area of an ordered polygon; fewer than 3 vertices give 0."""
        x = require_finite_array(xs, "xs").ravel()
        y = require_finite_array(ys, "ys").ravel()
        if x.size != y.size:
            raise ColorValidationError(f"xs and ys differ in length: {x.size} vs {y.size}")
        if x.size < 3:
            return 0.0
        return float(_shoelace(np.ascontiguousarray(x), np.ascontiguousarray(y)))

    @staticmethod
    def gamut_area_xy(primaries: PrimariesLike) -> float:
        """Triangle area of the primaries in CIE 1931 xy."""
        r, g, b = _vertices(primaries)
        return GamutGeometry.triangle_area(r, g, b)

    @staticmethod
    def gamut_area_uv(primaries: PrimariesLike) -> float:
        """Triangle area of the primaries in CIE 1976 u'v'."""
        r, g, b = ChromaticitySpace.xy_to_uv(_vertices(primaries))
        return GamutGeometry.triangle_area(r, g, b)

    @staticmethod
    def gamut_area(primaries: PrimariesLike, mode: DiagramMode = "CIE1931") -> float:
        if mode == "CIE1931":
            return GamutGeometry.gamut_area_xy(primaries)
        if mode == "CIE1976":
            return GamutGeometry.gamut_area_uv(primaries)
        raise ColorValidationError(f"Unknown diagram mode '{mode}'. Choose from: {list(_MODES)}")

    @staticmethod
    def coverage(custom: PrimariesLike, reference: PrimariesLike,
                 mode: DiagramMode = "CIE1931") -> float:
        """
        Area-ratio coverage in percent.

        Returns 0 when the reference triangle is degenerate (area at or below
        ``AREA_TOLERANCE``).
        """
        ref_area = GamutGeometry.gamut_area(reference, mode)
        if ref_area <= AREA_TOLERANCE:
            return 0.0
        return GamutGeometry.gamut_area(custom, mode) / ref_area * 100.0

    @staticmethod
    def all_coverages(custom: PrimariesLike) -> List[CoverageEntry]:
        """Coverage against every registered standard, in registry order."""
        area_xy = GamutGeometry.gamut_area_xy(custom)
        area_uv = GamutGeometry.gamut_area_uv(custom)
        entries = []
        for standard in STANDARD_GAMUTS.values():
            std_xy = GamutGeometry.gamut_area_xy(standard)
            std_uv = GamutGeometry.gamut_area_uv(standard)
            entries.append(CoverageEntry(
                standard_name=standard.name,
                coverage_xy=area_xy / std_xy * 100.0 if std_xy > AREA_TOLERANCE else 0.0,
                coverage_uv=area_uv / std_uv * 100.0 if std_uv > AREA_TOLERANCE else 0.0,
                area_xy=std_xy,
                area_uv=std_uv,
            ))
        return entries

    @staticmethod
    def is_valid_cie_xy(x: float, y: float) -> bool:
        """0 <= x <= 1, 0 <= y <= 1 and x + y <= 1."""
        x = require_finite(x, "x")
        y = require_finite(y, "y")
        return 0.0 <= x <= 1.0 and 0.0 <= y <= 1.0 and x + y <= 1.0

    @staticmethod
    def are_valid_primaries(primaries: PrimariesLike) -> bool:
        return all(GamutGeometry.is_valid_cie_xy(x, y) for x, y in _vertices(primaries))
