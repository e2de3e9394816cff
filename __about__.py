# -*- coding: utf-8 -*-
# Lumen: Measuring the colour of light for display engineering
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for the opticsWolf Lumen colorimetry core.
"""

from typing import Final

# Metadata Definitions
__title__: Final[str] = "Lumen"
__description__: Final[str] = (
    "A colorimetry core for display and lighting engineers: spectral "
    "integration, chromaticity transforms, CCT/Duv, colour differences, "
    "gamut coverage and colour-rendering indices (CRI, TLCI, TM-30)."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"

def metadata_summary() -> dict[str, str]:
    """Returns a dictionary of project metadata for introspection."""
    return {
        "title": __title__,
        "version": __version__,
        "author": __author__,
        "license": __license__,
        "description": __description__,
        "copyright": __copyright__,
    }
