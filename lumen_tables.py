# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Colorimetric Reference Tables
=============================
Immutable constant tables shared by every engine module.

All spectral tables are sampled on the same 5 nm grid (380-780 nm, 81
points) so that integrations can run as plain dot products without any
re-interpolation.  Arrays are published read-only (``writeable=False``) and
mappings are wrapped in ``MappingProxyType``; nothing here is ever mutated
after import.

References:
    - CIE 15:2004 "Colorimetry" (1931 2 deg observer, D65, daylight basis)
    - CIE 13.3-1995 "Method of Measuring and Specifying Colour Rendering
      Properties of Light Sources" (TCS01-TCS14)
"""

from types import MappingProxyType
from typing import Final, Mapping, Tuple, TypeAlias

import numpy as np
import numpy.typing as npt

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Grid ---
    "GRID_START",
    "GRID_END",
    "GRID_STEP",
    "GRID_SIZE",
    "WAVELENGTHS_5NM",

    # --- Spectral Tables ---
    "CMF_1931_2DEG",
    "D65_SPD",
    "DAYLIGHT_BASIS",
    "TCS_REFLECTANCES",
    "TCS_NAMES",
    "TCS_LABELS",

    # --- White Points ---
    "REF_WHITE_D65",
    "REF_WHITE_D50",
    "D65_XY",
    "D65_UV",
    "CCT_PRESETS",

    # --- Functions ---
    "interpolate_observer",
]

# --- Type Aliases ---
# Kernels compile to float64; float32 inputs are copied on entry.
ArrayFloat: TypeAlias = npt.NDArray[np.floating]


def _frozen(values, shape: Tuple[int, ...]) -> ArrayFloat:
    """Build a read-only float64 array and assert its shape at import."""
    arr = np.array(values, dtype=np.float64)
    if arr.shape != shape:
        raise RuntimeError(f"Corrupt reference table: expected {shape}, got {arr.shape}")
    arr.setflags(write=False)
    return arr


# =============================================================================
# 1. WAVELENGTH GRID
# =============================================================================

GRID_START: Final[float] = 380.0
GRID_END: Final[float] = 780.0
GRID_STEP: Final[float] = 5.0
GRID_SIZE: Final[int] = 81

WAVELENGTHS_5NM: Final[ArrayFloat] = _frozen(
    np.linspace(GRID_START, GRID_END, GRID_SIZE), (GRID_SIZE,)
)


# =============================================================================
# 2. CIE 1931 2 DEG STANDARD OBSERVER (x_bar, y_bar, z_bar)
# =============================================================================

CMF_1931_2DEG: Final[ArrayFloat] = _frozen([
    [0.001368, 0.000039, 0.006450],  # 380
    [0.002236, 0.000064, 0.010550],  # 385
    [0.004243, 0.000120, 0.020050],  # 390
    [0.007650, 0.000217, 0.036210],  # 395
    [0.014310, 0.000396, 0.067850],  # 400
    [0.023190, 0.000640, 0.110200],  # 405
    [0.043510, 0.001210, 0.207400],  # 410
    [0.077630, 0.002180, 0.371300],  # 415
    [0.134380, 0.004000, 0.645600],  # 420
    [0.214770, 0.007300, 1.039050],  # 425
    [0.283900, 0.011600, 1.385600],  # 430
    [0.328500, 0.016840, 1.622960],  # 435
    [0.348280, 0.023000, 1.747060],  # 440
    [0.348060, 0.029800, 1.782600],  # 445
    [0.336200, 0.038000, 1.772110],  # 450
    [0.318700, 0.048000, 1.744100],  # 455
    [0.290800, 0.060000, 1.669200],  # 460
    [0.251100, 0.073900, 1.528100],  # 465
    [0.195360, 0.090980, 1.287640],  # 470
    [0.142100, 0.112600, 1.041900],  # 475
    [0.095640, 0.139020, 0.812950],  # 480
    [0.058010, 0.169300, 0.616200],  # 485
    [0.032010, 0.208020, 0.465180],  # 490
    [0.014700, 0.258600, 0.353300],  # 495
    [0.004900, 0.323000, 0.272000],  # 500
    [0.002400, 0.407300, 0.212300],  # 505
    [0.009300, 0.503000, 0.158200],  # 510
    [0.029100, 0.608200, 0.111700],  # 515
    [0.063270, 0.710000, 0.078250],  # 520
    [0.109600, 0.793200, 0.057250],  # 525
    [0.165500, 0.862000, 0.042160],  # 530
    [0.225750, 0.914850, 0.029840],  # 535
    [0.290400, 0.954000, 0.020300],  # 540
    [0.359700, 0.980300, 0.013400],  # 545
    [0.433450, 0.994950, 0.008750],  # 550
    [0.512050, 1.000000, 0.005750],  # 555
    [0.594500, 0.995000, 0.003900],  # 560
    [0.678400, 0.978600, 0.002750],  # 565
    [0.762100, 0.952000, 0.002100],  # 570
    [0.842500, 0.915400, 0.001800],  # 575
    [0.916300, 0.870000, 0.001650],  # 580
    [0.978600, 0.816300, 0.001400],  # 585
    [1.026300, 0.757000, 0.001100],  # 590
    [1.056700, 0.694900, 0.001000],  # 595
    [1.062200, 0.631000, 0.000800],  # 600
    [1.045600, 0.566800, 0.000600],  # 605
    [1.002600, 0.503000, 0.000340],  # 610
    [0.938400, 0.441200, 0.000240],  # 615
    [0.854450, 0.381000, 0.000190],  # 620
    [0.751400, 0.321000, 0.000100],  # 625
    [0.642400, 0.265000, 0.000050],  # 630
    [0.541900, 0.217000, 0.000030],  # 635
    [0.447900, 0.175000, 0.000020],  # 640
    [0.360800, 0.138200, 0.000010],  # 645
    [0.283500, 0.107000, 0.000000],  # 650
    [0.218700, 0.081600, 0.000000],  # 655
    [0.164900, 0.061000, 0.000000],  # 660
    [0.121200, 0.044580, 0.000000],  # 665
    [0.087400, 0.032000, 0.000000],  # 670
    [0.063600, 0.023200, 0.000000],  # 675
    [0.046770, 0.017000, 0.000000],  # 680
    [0.032900, 0.011920, 0.000000],  # 685
    [0.022700, 0.008210, 0.000000],  # 690
    [0.015840, 0.005723, 0.000000],  # 695
    [0.011359, 0.004102, 0.000000],  # 700
    [0.008111, 0.002929, 0.000000],  # 705
    [0.005790, 0.002091, 0.000000],  # 710
    [0.004109, 0.001484, 0.000000],  # 715
    [0.002899, 0.001047, 0.000000],  # 720
    [0.002049, 0.000740, 0.000000],  # 725
    [0.001440, 0.000520, 0.000000],  # 730
    [0.001000, 0.000361, 0.000000],  # 735
    [0.000690, 0.000249, 0.000000],  # 740
    [0.000476, 0.000172, 0.000000],  # 745
    [0.000332, 0.000120, 0.000000],  # 750
    [0.000235, 0.000085, 0.000000],  # 755
    [0.000166, 0.000060, 0.000000],  # 760
    [0.000117, 0.000042, 0.000000],  # 765
    [0.000083, 0.000030, 0.000000],  # 770
    [0.000059, 0.000021, 0.000000],  # 775
    [0.000042, 0.000015, 0.000000],  # 780
], (GRID_SIZE, 3))


# =============================================================================
# 3. ILLUMINANTS
# =============================================================================

# CIE standard illuminant D65, relative SPD (100 at 560 nm).
D65_SPD: Final[ArrayFloat] = _frozen([
    49.9755, 52.3118, 54.6482, 68.7015, 82.7549, 87.1204, 91.486, 92.4589, 93.4318,
    90.057, 86.6823, 95.7736, 104.865, 110.936, 117.008, 117.410, 117.812, 116.336,
    114.861, 115.392, 115.923, 112.367, 108.811, 109.082, 109.354, 108.578, 107.802,
    106.296, 104.790, 106.239, 107.689, 106.047, 104.405, 104.225, 104.046, 102.023,
    100.000, 98.1671, 96.3342, 96.0611, 95.788, 92.2368, 88.6856, 89.3459, 90.0062,
    89.8026, 89.5991, 88.6489, 87.6987, 85.4936, 83.2886, 83.4939, 83.6992, 81.8630,
    80.0268, 80.1207, 80.2146, 81.2462, 82.2778, 80.2810, 78.2842, 74.0027, 69.7213,
    70.6652, 71.6091, 72.979, 74.349, 67.9765, 61.604, 65.7448, 69.8856, 72.4863,
    75.087, 69.3398, 63.5927, 55.0054, 46.4182, 56.6118, 66.8054, 65.0941, 63.3828,
], (GRID_SIZE,))

# CIE daylight basis functions S0, S1, S2 (CIE 15:2004, Table T.2).
DAYLIGHT_BASIS: Final[ArrayFloat] = _frozen([
    [63.40, 38.50, 3.00],  # 380
    [64.60, 36.75, 2.10],  # 385
    [65.80, 35.00, 1.20],  # 390
    [80.30, 39.20, 0.05],  # 395
    [94.80, 43.40, -1.10],  # 400
    [99.80, 44.85, -0.80],  # 405
    [104.80, 46.30, -0.50],  # 410
    [105.35, 45.10, -0.60],  # 415
    [105.90, 43.90, -0.70],  # 420
    [101.35, 40.50, -0.95],  # 425
    [96.80, 37.10, -1.20],  # 430
    [105.35, 36.90, -1.90],  # 435
    [113.90, 36.70, -2.60],  # 440
    [119.75, 36.30, -2.75],  # 445
    [125.60, 35.90, -2.90],  # 450
    [125.55, 34.25, -2.85],  # 455
    [125.50, 32.60, -2.80],  # 460
    [123.40, 30.25, -2.70],  # 465
    [121.30, 27.90, -2.60],  # 470
    [121.30, 26.10, -2.60],  # 475
    [121.30, 24.30, -2.60],  # 480
    [117.40, 22.20, -2.20],  # 485
    [113.50, 20.10, -1.80],  # 490
    [113.30, 18.15, -1.65],  # 495
    [113.10, 16.20, -1.50],  # 500
    [111.95, 14.70, -1.40],  # 505
    [110.80, 13.20, -1.30],  # 510
    [108.65, 10.90, -1.25],  # 515
    [106.50, 8.60, -1.20],  # 520
    [107.65, 7.35, -1.10],  # 525
    [108.80, 6.10, -1.00],  # 530
    [107.05, 5.15, -0.75],  # 535
    [105.30, 4.20, -0.50],  # 540
    [104.85, 3.05, -0.40],  # 545
    [104.40, 1.90, -0.30],  # 550
    [102.20, 0.95, -0.15],  # 555
    [100.00, 0.00, 0.00],  # 560
    [98.00, -0.80, 0.10],  # 565
    [96.00, -1.60, 0.20],  # 570
    [95.55, -2.55, 0.35],  # 575
    [95.10, -3.50, 0.50],  # 580
    [92.10, -3.50, 1.30],  # 585
    [89.10, -3.50, 2.10],  # 590
    [89.80, -4.65, 2.65],  # 595
    [90.50, -5.80, 3.20],  # 600
    [90.40, -6.50, 3.65],  # 605
    [90.30, -7.20, 4.10],  # 610
    [89.35, -7.90, 4.40],  # 615
    [88.40, -8.60, 4.70],  # 620
    [86.20, -9.05, 4.90],  # 625
    [84.00, -9.50, 5.10],  # 630
    [84.55, -10.20, 5.90],  # 635
    [85.10, -10.90, 6.70],  # 640
    [83.50, -10.80, 7.00],  # 645
    [81.90, -10.70, 7.30],  # 650
    [82.25, -11.35, 7.95],  # 655
    [82.60, -12.00, 8.60],  # 660
    [83.75, -13.00, 9.20],  # 665
    [84.90, -14.00, 9.80],  # 670
    [83.10, -13.80, 10.00],  # 675
    [81.30, -13.60, 10.20],  # 680
    [76.60, -12.80, 9.25],  # 685
    [71.90, -12.00, 8.30],  # 690
    [73.10, -12.65, 8.95],  # 695
    [74.30, -13.30, 9.60],  # 700
    [75.35, -13.10, 9.05],  # 705
    [76.40, -12.90, 8.50],  # 710
    [69.85, -11.75, 7.75],  # 715
    [63.30, -10.60, 7.00],  # 720
    [67.50, -11.10, 7.30],  # 725
    [71.70, -11.60, 7.60],  # 730
    [74.35, -11.90, 7.80],  # 735
    [77.00, -12.20, 8.00],  # 740
    [71.10, -11.20, 7.35],  # 745
    [65.20, -10.20, 6.70],  # 750
    [56.45, -9.00, 5.95],  # 755
    [47.70, -7.80, 5.20],  # 760
    [58.15, -9.50, 6.30],  # 765
    [68.60, -11.20, 7.40],  # 770
    [66.80, -10.80, 7.10],  # 775
    [65.00, -10.40, 6.80],  # 780
], (GRID_SIZE, 3))


# =============================================================================
# 4. CIE 13.3 TEST COLOUR SAMPLES
# =============================================================================

TCS_NAMES: Final[Tuple[str, ...]] = (
    "Light Greyish Red",
    "Dark Greyish Yellow",
    "Strong Yellow Green",
    "Moderate Yellowish Green",
    "Light Bluish Green",
    "Light Blue",
    "Light Violet",
    "Light Reddish Purple",
    "Strong Red",
    "Strong Yellow",
    "Strong Green",
    "Strong Blue",
    "Light Yellowish Pink (Skin)",
    "Moderate Olive Green (Leaf)",
)

TCS_LABELS: Final[Tuple[str, ...]] = tuple(f"R{i}" for i in range(1, 15))

# Spectral reflectance factors, one row per sample, 380-780 nm / 5 nm.
TCS_REFLECTANCES: Final[ArrayFloat] = _frozen([
    [  # TCS01
        0.219, 0.239, 0.252, 0.256, 0.256, 0.254, 0.252, 0.248, 0.244,
        0.240, 0.237, 0.232, 0.230, 0.226, 0.225, 0.222, 0.220, 0.218,
        0.216, 0.214, 0.214, 0.214, 0.216, 0.218, 0.223, 0.225, 0.226,
        0.226, 0.225, 0.225, 0.227, 0.230, 0.236, 0.245, 0.253, 0.262,
        0.272, 0.283, 0.298, 0.318, 0.341, 0.367, 0.390, 0.409, 0.424,
        0.435, 0.442, 0.448, 0.450, 0.451, 0.451, 0.451, 0.451, 0.451,
        0.450, 0.450, 0.451, 0.451, 0.453, 0.454, 0.455, 0.457, 0.458,
        0.460, 0.462, 0.463, 0.464, 0.465, 0.466, 0.466, 0.466, 0.466,
        0.467, 0.467, 0.467, 0.467, 0.467, 0.467, 0.467, 0.467, 0.467,
    ],
    [  # TCS02
        0.070, 0.079, 0.089, 0.101, 0.111, 0.116, 0.118, 0.120, 0.121,
        0.122, 0.122, 0.122, 0.123, 0.124, 0.127, 0.128, 0.131, 0.134,
        0.138, 0.143, 0.150, 0.159, 0.174, 0.190, 0.207, 0.225, 0.242,
        0.253, 0.260, 0.264, 0.267, 0.269, 0.272, 0.276, 0.282, 0.289,
        0.299, 0.309, 0.322, 0.329, 0.335, 0.339, 0.341, 0.341, 0.342,
        0.342, 0.342, 0.341, 0.341, 0.339, 0.339, 0.338, 0.338, 0.337,
        0.336, 0.335, 0.334, 0.332, 0.332, 0.331, 0.331, 0.330, 0.329,
        0.328, 0.328, 0.327, 0.326, 0.325, 0.324, 0.324, 0.324, 0.323,
        0.322, 0.321, 0.320, 0.318, 0.316, 0.315, 0.315, 0.314, 0.314,
    ],
    [  # TCS03
        0.065, 0.068, 0.070, 0.072, 0.073, 0.073, 0.074, 0.074, 0.074,
        0.073, 0.073, 0.073, 0.073, 0.073, 0.074, 0.075, 0.077, 0.080,
        0.085, 0.094, 0.109, 0.126, 0.148, 0.172, 0.198, 0.221, 0.241,
        0.260, 0.278, 0.302, 0.339, 0.370, 0.392, 0.399, 0.400, 0.393,
        0.380, 0.365, 0.349, 0.332, 0.315, 0.299, 0.285, 0.272, 0.264,
        0.257, 0.252, 0.247, 0.241, 0.235, 0.229, 0.224, 0.220, 0.217,
        0.216, 0.216, 0.219, 0.224, 0.230, 0.238, 0.251, 0.269, 0.288,
        0.312, 0.340, 0.366, 0.390, 0.412, 0.431, 0.447, 0.460, 0.472,
        0.481, 0.488, 0.493, 0.497, 0.500, 0.502, 0.505, 0.510, 0.516,
    ],
    [  # TCS04
        0.074, 0.083, 0.093, 0.105, 0.116, 0.121, 0.124, 0.126, 0.128,
        0.131, 0.135, 0.139, 0.144, 0.151, 0.161, 0.172, 0.186, 0.205,
        0.229, 0.254, 0.281, 0.308, 0.332, 0.352, 0.370, 0.383, 0.390,
        0.394, 0.395, 0.392, 0.385, 0.377, 0.367, 0.354, 0.341, 0.327,
        0.312, 0.296, 0.280, 0.263, 0.247, 0.229, 0.214, 0.198, 0.185,
        0.175, 0.169, 0.164, 0.160, 0.156, 0.154, 0.152, 0.151, 0.149,
        0.148, 0.148, 0.148, 0.149, 0.151, 0.154, 0.158, 0.162, 0.165,
        0.168, 0.170, 0.171, 0.170, 0.168, 0.166, 0.164, 0.165, 0.168,
        0.172, 0.177, 0.185, 0.194, 0.205, 0.218, 0.232, 0.247, 0.262,
    ],
    [  # TCS05
        0.295, 0.306, 0.310, 0.312, 0.313, 0.315, 0.319, 0.322, 0.326,
        0.330, 0.334, 0.339, 0.346, 0.352, 0.360, 0.369, 0.381, 0.394,
        0.403, 0.410, 0.415, 0.418, 0.419, 0.417, 0.413, 0.409, 0.403,
        0.396, 0.389, 0.381, 0.372, 0.363, 0.353, 0.342, 0.331, 0.320,
        0.308, 0.296, 0.284, 0.271, 0.260, 0.247, 0.232, 0.220, 0.210,
        0.200, 0.194, 0.189, 0.185, 0.183, 0.180, 0.177, 0.176, 0.175,
        0.175, 0.175, 0.175, 0.177, 0.180, 0.183, 0.186, 0.189, 0.192,
        0.195, 0.199, 0.200, 0.199, 0.198, 0.196, 0.195, 0.195, 0.196,
        0.197, 0.200, 0.203, 0.208, 0.212, 0.217, 0.222, 0.226, 0.231,
    ],
    [  # TCS06
        0.151, 0.203, 0.265, 0.339, 0.410, 0.464, 0.492, 0.508, 0.517,
        0.524, 0.531, 0.538, 0.544, 0.551, 0.556, 0.556, 0.554, 0.549,
        0.541, 0.531, 0.519, 0.504, 0.488, 0.469, 0.450, 0.431, 0.414,
        0.395, 0.377, 0.358, 0.341, 0.325, 0.309, 0.293, 0.279, 0.265,
        0.253, 0.241, 0.234, 0.227, 0.225, 0.222, 0.221, 0.220, 0.220,
        0.220, 0.220, 0.220, 0.223, 0.227, 0.233, 0.239, 0.244, 0.251,
        0.258, 0.263, 0.268, 0.273, 0.278, 0.281, 0.283, 0.286, 0.291,
        0.296, 0.302, 0.313, 0.325, 0.338, 0.351, 0.364, 0.376, 0.389,
        0.401, 0.413, 0.425, 0.436, 0.447, 0.458, 0.469, 0.477, 0.485,
    ],
    [  # TCS07
        0.378, 0.459, 0.524, 0.546, 0.551, 0.555, 0.559, 0.560, 0.561,
        0.558, 0.556, 0.551, 0.544, 0.535, 0.522, 0.506, 0.488, 0.469,
        0.448, 0.429, 0.408, 0.385, 0.363, 0.341, 0.324, 0.311, 0.301,
        0.291, 0.283, 0.273, 0.265, 0.260, 0.257, 0.257, 0.259, 0.260,
        0.260, 0.258, 0.256, 0.254, 0.254, 0.259, 0.270, 0.284, 0.302,
        0.324, 0.344, 0.362, 0.377, 0.389, 0.400, 0.410, 0.420, 0.429,
        0.438, 0.445, 0.452, 0.457, 0.462, 0.466, 0.468, 0.470, 0.473,
        0.477, 0.483, 0.489, 0.496, 0.503, 0.511, 0.518, 0.525, 0.532,
        0.539, 0.546, 0.553, 0.559, 0.565, 0.570, 0.575, 0.578, 0.581,
    ],
    [  # TCS08
        0.104, 0.129, 0.170, 0.240, 0.319, 0.416, 0.462, 0.482, 0.490,
        0.488, 0.482, 0.473, 0.462, 0.450, 0.439, 0.426, 0.413, 0.397,
        0.382, 0.366, 0.352, 0.337, 0.325, 0.310, 0.299, 0.289, 0.283,
        0.276, 0.270, 0.262, 0.256, 0.251, 0.250, 0.251, 0.254, 0.258,
        0.264, 0.269, 0.272, 0.274, 0.278, 0.284, 0.295, 0.316, 0.348,
        0.384, 0.434, 0.482, 0.528, 0.568, 0.604, 0.629, 0.648, 0.663,
        0.676, 0.685, 0.693, 0.700, 0.705, 0.709, 0.712, 0.715, 0.717,
        0.719, 0.721, 0.720, 0.719, 0.722, 0.725, 0.727, 0.729, 0.730,
        0.730, 0.730, 0.730, 0.730, 0.730, 0.730, 0.730, 0.730, 0.730,
    ],
    [  # TCS09
        0.066, 0.062, 0.058, 0.055, 0.052, 0.052, 0.051, 0.050, 0.050,
        0.049, 0.048, 0.047, 0.046, 0.044, 0.042, 0.041, 0.038, 0.035,
        0.033, 0.031, 0.030, 0.029, 0.028, 0.028, 0.028, 0.029, 0.030,
        0.030, 0.031, 0.031, 0.032, 0.032, 0.033, 0.034, 0.035, 0.037,
        0.041, 0.044, 0.047, 0.050, 0.054, 0.060, 0.072, 0.095, 0.133,
        0.186, 0.259, 0.339, 0.416, 0.479, 0.532, 0.568, 0.594, 0.611,
        0.624, 0.634, 0.642, 0.649, 0.654, 0.661, 0.667, 0.670, 0.674,
        0.678, 0.682, 0.686, 0.690, 0.693, 0.696, 0.698, 0.700, 0.701,
        0.702, 0.703, 0.704, 0.705, 0.706, 0.707, 0.708, 0.709, 0.710,
    ],
    [  # TCS10
        0.050, 0.054, 0.059, 0.063, 0.066, 0.067, 0.068, 0.069, 0.069,
        0.070, 0.072, 0.073, 0.076, 0.078, 0.083, 0.088, 0.095, 0.103,
        0.113, 0.125, 0.142, 0.162, 0.189, 0.219, 0.262, 0.305, 0.365,
        0.416, 0.465, 0.509, 0.546, 0.581, 0.610, 0.634, 0.653, 0.666,
        0.678, 0.687, 0.693, 0.701, 0.705, 0.707, 0.709, 0.709, 0.711,
        0.712, 0.713, 0.714, 0.714, 0.715, 0.716, 0.717, 0.717, 0.718,
        0.718, 0.718, 0.719, 0.719, 0.719, 0.720, 0.720, 0.720, 0.720,
        0.720, 0.720, 0.720, 0.720, 0.720, 0.720, 0.720, 0.720, 0.720,
        0.720, 0.720, 0.720, 0.720, 0.720, 0.720, 0.720, 0.720, 0.720,
    ],
    [  # TCS11
        0.111, 0.121, 0.127, 0.129, 0.127, 0.121, 0.116, 0.112, 0.108,
        0.105, 0.104, 0.104, 0.105, 0.106, 0.110, 0.115, 0.123, 0.134,
        0.148, 0.167, 0.192, 0.219, 0.252, 0.291, 0.325, 0.347, 0.356,
        0.353, 0.346, 0.333, 0.314, 0.294, 0.271, 0.248, 0.227, 0.206,
        0.188, 0.170, 0.153, 0.138, 0.125, 0.114, 0.106, 0.100, 0.096,
        0.092, 0.090, 0.087, 0.085, 0.082, 0.080, 0.079, 0.078, 0.078,
        0.078, 0.078, 0.081, 0.083, 0.088, 0.093, 0.102, 0.112, 0.125,
        0.141, 0.161, 0.182, 0.203, 0.223, 0.242, 0.257, 0.270, 0.282,
        0.292, 0.302, 0.310, 0.314, 0.317, 0.323, 0.330, 0.334, 0.338,
    ],
    [  # TCS12
        0.120, 0.103, 0.090, 0.082, 0.076, 0.068, 0.064, 0.065, 0.075,
        0.093, 0.123, 0.160, 0.207, 0.256, 0.300, 0.331, 0.346, 0.347,
        0.341, 0.328, 0.307, 0.282, 0.257, 0.230, 0.204, 0.178, 0.154,
        0.129, 0.109, 0.090, 0.075, 0.062, 0.051, 0.041, 0.035, 0.029,
        0.025, 0.022, 0.019, 0.017, 0.017, 0.017, 0.016, 0.016, 0.016,
        0.016, 0.016, 0.016, 0.016, 0.016, 0.018, 0.018, 0.018, 0.018,
        0.019, 0.020, 0.023, 0.024, 0.026, 0.030, 0.035, 0.043, 0.056,
        0.074, 0.097, 0.128, 0.166, 0.210, 0.257, 0.305, 0.354, 0.401,
        0.446, 0.485, 0.520, 0.551, 0.577, 0.599, 0.618, 0.633, 0.645,
    ],
    [  # TCS13
        0.130, 0.147, 0.160, 0.170, 0.177, 0.181, 0.184, 0.189, 0.193,
        0.197, 0.202, 0.208, 0.213, 0.219, 0.225, 0.230, 0.235, 0.240,
        0.245, 0.250, 0.254, 0.258, 0.263, 0.267, 0.269, 0.272, 0.276,
        0.279, 0.282, 0.286, 0.290, 0.292, 0.293, 0.294, 0.295, 0.298,
        0.302, 0.310, 0.323, 0.342, 0.370, 0.407, 0.451, 0.495, 0.536,
        0.572, 0.598, 0.616, 0.628, 0.637, 0.644, 0.649, 0.653, 0.658,
        0.662, 0.666, 0.669, 0.672, 0.676, 0.679, 0.682, 0.685, 0.688,
        0.691, 0.694, 0.696, 0.698, 0.700, 0.702, 0.704, 0.706, 0.708,
        0.710, 0.711, 0.712, 0.713, 0.714, 0.715, 0.716, 0.717, 0.718,
    ],
    [  # TCS14
        0.063, 0.063, 0.063, 0.064, 0.064, 0.064, 0.065, 0.065, 0.066,
        0.067, 0.068, 0.069, 0.069, 0.070, 0.072, 0.073, 0.075, 0.077,
        0.079, 0.082, 0.085, 0.089, 0.093, 0.097, 0.100, 0.103, 0.104,
        0.106, 0.109, 0.111, 0.113, 0.114, 0.113, 0.111, 0.109, 0.106,
        0.103, 0.100, 0.097, 0.094, 0.092, 0.090, 0.088, 0.087, 0.086,
        0.085, 0.084, 0.084, 0.083, 0.083, 0.083, 0.082, 0.082, 0.082,
        0.083, 0.085, 0.089, 0.095, 0.105, 0.120, 0.140, 0.166, 0.197,
        0.233, 0.271, 0.309, 0.346, 0.379, 0.408, 0.434, 0.455, 0.472,
        0.486, 0.497, 0.505, 0.512, 0.517, 0.520, 0.523, 0.525, 0.526,
    ],
], (14, GRID_SIZE))


# =============================================================================
# 5. WHITE POINTS & CHROMATICITY CONSTANTS
# =============================================================================

# Tristimulus whites on the Y = 100 scale used throughout Lumen.
REF_WHITE_D65: Final[ArrayFloat] = _frozen([95.047, 100.0, 108.883], (3,))
REF_WHITE_D50: Final[ArrayFloat] = _frozen([96.422, 100.0, 82.521], (3,))

# Fallback chromaticities for degenerate (zero) denominators.
D65_XY: Final[Tuple[float, float]] = (0.3127, 0.3290)
D65_UV: Final[Tuple[float, float]] = (0.1978, 0.4683)

CCT_PRESETS: Final[Mapping[str, Mapping[str, object]]] = MappingProxyType({
    "D65": MappingProxyType({"x": 0.3127, "y": 0.3290, "label": "D65 (Daylight 6504K)"}),
    "D50": MappingProxyType({"x": 0.3457, "y": 0.3585, "label": "D50 (Horizon 5003K)"}),
    "A": MappingProxyType({"x": 0.4476, "y": 0.4074, "label": "Illuminant A (2856K)"}),
    "C": MappingProxyType({"x": 0.3101, "y": 0.3162, "label": "Illuminant C (6774K)"}),
})


# =============================================================================
# 6. OBSERVER LOOKUP
# =============================================================================

def interpolate_observer(wavelengths: ArrayFloat) -> ArrayFloat:
    """
    Linearly interpolates the 1931 observer at arbitrary wavelengths.

    Wavelengths outside 380-780 nm contribute nothing (all three functions
    are 0 there).

    Args:
        wavelengths: Wavelengths in nm, any shape.

    Returns:
        Array of shape ``wavelengths.shape + (3,)``.
    """
    wl = np.asarray(wavelengths, dtype=np.float64)
    out = np.empty(wl.shape + (3,), dtype=np.float64)
    for c in range(3):
        out[..., c] = np.interp(wl, WAVELENGTHS_5NM, CMF_1931_2DEG[:, c], left=0.0, right=0.0)
    return out
