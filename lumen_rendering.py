# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Colour Rendering Engine
=======================
Colour-rendering indices of a light source against its CCT-matched
reference illuminant:

    * CRI (CIE 13.3): 14 test colour samples, Von Kries adaptation in
      CIE 1960 UCS, differences in CIE 1964 W*U*V*.  Ra averages R1-R8
      only; R9-R14 are reported but never enter Ra.
    * TLCI: 18 approximate ColorChecker patches, CIEDE2000 in CIELAB.
    * TM-30: 95 approximate Colour Evaluation Samples in 16 hue bins,
      CIEDE2000 fidelity plus gamut area of the binned a*b* polygon.

Every pipeline shares the same preparation: resample the test SPD to the
5 nm grid, take its Y = 100 white point and xy, estimate the McCamy CCT
and pick a Planckian (< 5000 K) or D-series reference.  A black test
source has no defined index and raises ``ColorValidationError``.

Summary values are rounded as part of the result contract: indices to one
decimal, CCT to an integer kelvin.  TLCI and TM-30 use synthetic reflectance
sets and emit ``SyntheticSampleWarning`` (see ``lumen_samples``).
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Final, Tuple

import numpy as np
from numba import njit

from lumen_cct import CCTDuvEstimator
from lumen_colorspace import ChromaticitySpace
from lumen_config import get_config
from lumen_delta_e import ColorDifferenceEngine
from lumen_errors import ColorValidationError, SyntheticSampleWarning
from lumen_gamut import AREA_TOLERANCE, GamutGeometry
from lumen_illuminants import ReferenceIlluminant, reference_illuminant
from lumen_samples import CES_BIN_COUNT, color_evaluation_samples, tlci_patches
from lumen_spectral import SpectralInput, SpectralIntegrator
from lumen_tables import TCS_REFLECTANCES, ArrayFloat

__all__ = [
    "CRI_GENERAL_SAMPLES",
    "TM30_CF",
    "TLCI_SCALE",
    "CRIResult",
    "TLCIResult",
    "ColorVector",
    "TM30Result",
    "LightSourceEvaluation",
    "RenderingContext",
    "ColorRenderingEngine",
]

logger = logging.getLogger(__name__)

CRI_GENERAL_SAMPLES: Final[int] = 8     # Ra = mean(R1..R8)
TM30_CF: Final[float] = 6.73
TLCI_SCALE: Final[float] = 12.0
_BIN_WIDTH: Final[float] = 360.0 / CES_BIN_COUNT

_SYNTHETIC_NOTE: Final[str] = (
    "{} uses synthetic Gaussian reflectance approximations, not the "
    "published sample set; absolute values carry that accuracy ceiling."
)


# =============================================================================
# 1. RESULT TYPES
# =============================================================================

@dataclass(frozen=True, slots=True)
class CRIResult:
    """CIE 13.3 general (Ra) and special (R1..R14) colour rendering indices."""
    Ra: float
    Ri: Tuple[float, ...]
    cct: int
    reference_type: str


@dataclass(frozen=True, slots=True)
class TLCIResult:
    Qa: float
    Qi: Tuple[float, ...]
    cct: int


@dataclass(frozen=True, slots=True)
class ColorVector:
    """Bin-averaged a*b* under reference and test, for the vector graphic."""
    bin: int
    hue_angle: float
    ref_a: float
    ref_b: float
    test_a: float
    test_b: float


@dataclass(frozen=True, slots=True)
class TM30Result:
    """
    TM-30 fidelity (Rf) and gamut (Rg) indices with per-bin detail.

    Attributes:
        bin_hue_shift: test minus reference hue angle of each bin mean, in
                       degrees wrapped to [-180, 180].
        bin_chroma_change: test / reference chroma of each bin mean.
    """
    Rf: float
    Rg: float
    cct: int
    bin_rf: Tuple[float, ...]
    bin_hue_shift: Tuple[float, ...]
    bin_chroma_change: Tuple[float, ...]
    color_vectors: Tuple[ColorVector, ...]


@dataclass(frozen=True, slots=True)
class LightSourceEvaluation:
    cri: CRIResult
    tlci: TLCIResult
    tm30: TM30Result


@dataclass(frozen=True, slots=True)
class RenderingContext:
    """
    Test source prepared once for any number of rendering pipelines.

    Attributes:
        grid_spd: Test SPD on the 5 nm grid, shape (81,).
        white_xyz: Test white point, Y = 100.
        xy: Test chromaticity (D65 when the source is black).
        cct: Unrounded McCamy CCT.
        reference: CCT-matched reference illuminant.
        reference_white_xyz: Reference white point, Y = 100.
    """
    grid_spd: ArrayFloat
    white_xyz: ArrayFloat
    xy: ArrayFloat
    cct: float
    reference: ReferenceIlluminant
    reference_white_xyz: ArrayFloat


# =============================================================================
# 2. KERNELS
# =============================================================================

@njit(cache=True, fastmath=True)
def _kries_terms(u: float, v: float) -> Tuple[float, float]:
    return (4.0 - u - 10.0 * v) / v, (1.708 * v + 0.404 - 1.481 * u) / v


@njit(cache=True, fastmath=True)
def _wuv(u: float, v: float, Y: float, un: float, vn: float) -> Tuple[float, float, float]:
    W = 25.0 * max(1.0, Y) ** (1.0 / 3.0) - 17.0
    return W, 13.0 * W * (u - un), 13.0 * W * (v - vn)


@njit(cache=True, fastmath=True)
def _cri_delta_e_kernel(test_uv: ArrayFloat, test_Y: ArrayFloat,
                        ref_uv: ArrayFloat, ref_Y: ArrayFloat,
                        test_white_uv: ArrayFloat, ref_white_uv: ArrayFloat) -> ArrayFloat:
    """
    W*U*V* distance between Von Kries adapted test colours and reference colours.

    Samples whose adaptation is undefined (v = 0 for the sample or either
    white, or a zero denominator) pass through unadapted.
    """
    n = test_uv.shape[0]
    out = np.empty(n, dtype=np.float64)
    ut, vt = test_white_uv[0], test_white_uv[1]
    ur, vr = ref_white_uv[0], ref_white_uv[1]

    adaptable = vt != 0.0 and vr != 0.0
    c_ratio = 0.0
    d_ratio = 0.0
    if adaptable:
        ct, dt = _kries_terms(ut, vt)
        cr, dr = _kries_terms(ur, vr)
        adaptable = ct != 0.0 and dt != 0.0
        if adaptable:
            c_ratio = cr / ct
            d_ratio = dr / dt

    for i in range(n):
        u, v = test_uv[i, 0], test_uv[i, 1]
        ua, va = u, v
        if adaptable and v != 0.0:
            ck, dk = _kries_terms(u, v)
            denom = 16.518 + 1.481 * c_ratio * ck - d_ratio * dk
            if denom != 0.0:
                ua = (10.872 + 0.404 * c_ratio * ck - 4.0 * d_ratio * dk) / denom
                va = 5.520 / denom

        W1, U1, V1 = _wuv(ua, va, test_Y[i], ur, vr)
        W2, U2, V2 = _wuv(ref_uv[i, 0], ref_uv[i, 1], ref_Y[i], ur, vr)
        out[i] = np.sqrt((W1 - W2) ** 2 + (U1 - U2) ** 2 + (V1 - V2) ** 2)
    return out


def _round1(values: ArrayFloat) -> Tuple[float, ...]:
    return tuple(round(float(v), 1) for v in values)


def _fidelity(mean_delta_e):
    """TM-30 log-scaled fidelity 10 * ln(exp((100 - cf * dE) / 10) + 1)."""
    return 10.0 * np.log(np.exp((100.0 - TM30_CF * mean_delta_e) / 10.0) + 1.0)


def _warn_synthetic(metric: str, stacklevel: int) -> None:
    if get_config().warn_synthetic_samples:
        warnings.warn(_SYNTHETIC_NOTE.format(metric), SyntheticSampleWarning,
                      stacklevel=stacklevel + 1)


# =============================================================================
# 3. ENGINE
# =============================================================================

class ColorRenderingEngine:
    """Static utility class for CRI, TLCI and TM-30."""

    @staticmethod
    def prepare(spd: SpectralInput) -> RenderingContext:
        """
        Resamples the test source and selects its reference illuminant.

        Raises:
            ColorValidationError: invalid SPD, or a source with no luminous
                power (Y = 0), for which no rendering index is defined.
        """
        grid = SpectralIntegrator.resample_to_grid(spd)
        white = SpectralIntegrator.illuminant_xyz(grid)
        if not white[1] > 0.0:
            raise ColorValidationError("Test source has no luminous power in 380-780 nm")
        xy = ChromaticitySpace.xyz_to_xy(white)
        cct = CCTDuvEstimator.calculate_cct(float(xy[0]), float(xy[1]))
        ref = reference_illuminant(cct)
        ref_white = SpectralIntegrator.illuminant_xyz(ref.spd)
        logger.debug("Test source xy=(%.4f, %.4f), CCT %.1f K, reference %s",
                     xy[0], xy[1], cct, ref.kind)
        return RenderingContext(grid, white, xy, cct, ref, ref_white)

    @staticmethod
    def _sample_labs(ctx: RenderingContext, reflectances: ArrayFloat) -> Tuple[ArrayFloat, ArrayFloat]:
        """Lab of each reflectance under test and reference, each against its own white."""
        if np.any(ctx.white_xyz <= 0.0):
            raise ColorValidationError(
                f"Test white {ctx.white_xyz} has a zero tristimulus component; "
                "CIELAB-based indices are undefined"
            )
        test_xyz = SpectralIntegrator.sample_xyz_batch(ctx.grid_spd, reflectances)
        ref_xyz = SpectralIntegrator.sample_xyz_batch(ctx.reference.spd, reflectances)
        return (ChromaticitySpace.xyz_to_lab(test_xyz, ctx.white_xyz),
                ChromaticitySpace.xyz_to_lab(ref_xyz, ctx.reference_white_xyz))

    # =====================================================================
    #  CRI
    # =====================================================================

    @staticmethod
    def _cri(ctx: RenderingContext) -> CRIResult:
        test_xyz = SpectralIntegrator.sample_xyz_batch(ctx.grid_spd, TCS_REFLECTANCES)
        ref_xyz = SpectralIntegrator.sample_xyz_batch(ctx.reference.spd, TCS_REFLECTANCES)
        delta_e = _cri_delta_e_kernel(
            ChromaticitySpace.xyz_to_ucs_uv(test_xyz), np.ascontiguousarray(test_xyz[:, 1]),
            ChromaticitySpace.xyz_to_ucs_uv(ref_xyz), np.ascontiguousarray(ref_xyz[:, 1]),
            ChromaticitySpace.xyz_to_ucs_uv(ctx.white_xyz),
            ChromaticitySpace.xyz_to_ucs_uv(ctx.reference_white_xyz),
        )
        ri = 100.0 - 4.6 * delta_e
        ra = float(np.clip(np.mean(ri[:CRI_GENERAL_SAMPLES]), 0.0, 100.0))
        logger.debug("CRI Ra %.2f (R9 %.2f)", ra, ri[8])
        return CRIResult(Ra=round(ra, 1), Ri=_round1(ri), cct=int(round(ctx.cct)),
                         reference_type=ctx.reference.kind)

    @staticmethod
    def calculate_cri(spd: SpectralInput) -> CRIResult:
        """
        CIE 13.3 colour rendering index.

        Ri = 100 - 4.6 * dE(W*U*V*) for each of the 14 test colour samples;
        Ra is the mean of R1..R8, clamped to [0, 100].  Individual Ri are not
        clamped and can be negative for strongly distorting sources.

        Args:
            spd: Test light source.

        Returns:
            ``CRIResult`` with Ra and Ri to 1 decimal and the integer CCT.
        """
        return ColorRenderingEngine._cri(ColorRenderingEngine.prepare(spd))

    # =====================================================================
    #  TLCI
    # =====================================================================

    @staticmethod
    def _tlci(ctx: RenderingContext) -> TLCIResult:
        patches = tlci_patches()
        test_lab, ref_lab = ColorRenderingEngine._sample_labs(ctx, patches.reflectances)
        delta_e = ColorDifferenceEngine.delta_e_2000(test_lab, ref_lab)
        qi = _round1(np.clip(100.0 * (1.0 - delta_e / TLCI_SCALE), 0.0, 100.0))
        qa = round(float(np.mean(qi)), 1)
        logger.debug("TLCI Qa %.1f over %d patches", qa, len(qi))
        return TLCIResult(Qa=qa, Qi=qi, cct=int(round(ctx.cct)))

    @staticmethod
    def calculate_tlci(spd: SpectralInput) -> TLCIResult:
        """
        Television Lighting Consistency Index.

        Qi = clamp(100 * (1 - dE00 / 12), 0, 100) per patch, rounded to one
        decimal; Qa is the mean of all 18 rounded Qi.
        """
        _warn_synthetic("TLCI", stacklevel=2)
        return ColorRenderingEngine._tlci(ColorRenderingEngine.prepare(spd))

    # =====================================================================
    #  TM-30
    # =====================================================================

    @staticmethod
    def _tm30(ctx: RenderingContext) -> TM30Result:
        ces = color_evaluation_samples()
        test_lab, ref_lab = ColorRenderingEngine._sample_labs(ctx, ces.reflectances)
        delta_e = ColorDifferenceEngine.delta_e_2000(test_lab, ref_lab)
        rf = float(np.clip(_fidelity(np.mean(delta_e)), 0.0, 100.0))

        # bins are 1-based; bin order 1..16 keeps the polygons simple
        idx = ces.bins - 1
        counts = np.bincount(idx, minlength=CES_BIN_COUNT).astype(np.float64)
        counts[counts == 0.0] = 1.0

        def bin_mean(values: ArrayFloat) -> ArrayFloat:
            return np.bincount(idx, weights=values, minlength=CES_BIN_COUNT) / counts

        test_a, test_b = bin_mean(test_lab[:, 1]), bin_mean(test_lab[:, 2])
        ref_a, ref_b = bin_mean(ref_lab[:, 1]), bin_mean(ref_lab[:, 2])
        bin_de = bin_mean(delta_e)

        test_area = GamutGeometry.polygon_area(test_a, test_b)
        ref_area = GamutGeometry.polygon_area(ref_a, ref_b)
        rg = 100.0 * test_area / ref_area if ref_area > AREA_TOLERANCE else 100.0
        rg = max(0.0, rg)

        hue_shift = np.degrees(np.arctan2(test_b, test_a)) - np.degrees(np.arctan2(ref_b, ref_a))
        hue_shift = np.where(hue_shift > 180.0, hue_shift - 360.0, hue_shift)
        hue_shift = np.where(hue_shift < -180.0, hue_shift + 360.0, hue_shift)

        test_chroma = np.hypot(test_a, test_b)
        ref_chroma = np.hypot(ref_a, ref_b)
        chroma_change = tuple(
            round(float(t / r), 2) if r > 0.0 else 1.0 for t, r in zip(test_chroma, ref_chroma)
        )

        vectors = tuple(
            ColorVector(
                bin=b + 1,
                hue_angle=b * _BIN_WIDTH + _BIN_WIDTH / 2.0,
                ref_a=round(float(ref_a[b]), 2),
                ref_b=round(float(ref_b[b]), 2),
                test_a=round(float(test_a[b]), 2),
                test_b=round(float(test_b[b]), 2),
            )
            for b in range(CES_BIN_COUNT)
        )
        logger.debug("TM-30 Rf %.2f, Rg %.2f", rf, rg)
        return TM30Result(
            Rf=round(rf, 1),
            Rg=round(rg, 1),
            cct=int(round(ctx.cct)),
            bin_rf=_round1(_fidelity(bin_de)),
            bin_hue_shift=_round1(hue_shift),
            bin_chroma_change=chroma_change,
            color_vectors=vectors,
        )

    @staticmethod
    def calculate_tm30(spd: SpectralInput) -> TM30Result:
        """
        IES TM-30 fidelity index Rf and gamut index Rg (approximate).

        Rf = 10 * ln(exp((100 - 6.73 * mean dE00) / 10) + 1), clamped to
        [0, 100].  Rg = 100 * area(test) / area(reference) of the 16-vertex
        polygons of bin-averaged a*b*; 100 when the reference polygon is
        degenerate.
        """
        _warn_synthetic("TM-30", stacklevel=2)
        return ColorRenderingEngine._tm30(ColorRenderingEngine.prepare(spd))

    # =====================================================================
    #  Bundle
    # =====================================================================

    @staticmethod
    def evaluate_light_source(spd: SpectralInput) -> LightSourceEvaluation:
        """CRI, TLCI and TM-30 from a single test-source preparation."""
        _warn_synthetic("TLCI / TM-30", stacklevel=2)
        ctx = ColorRenderingEngine.prepare(spd)
        return LightSourceEvaluation(
            cri=ColorRenderingEngine._cri(ctx),
            tlci=ColorRenderingEngine._tlci(ctx),
            tm30=ColorRenderingEngine._tm30(ctx),
        )
