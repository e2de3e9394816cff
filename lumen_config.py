# -*- coding: utf-8 -*-
"""
Lumen: Measuring the colour of light for display engineering
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Runtime configuration.

A single immutable ``EngineConfig`` snapshot is published at module level.
Setters build a new snapshot under a lock and swap it in, so readers never
see a half-updated configuration and never need to lock.

Toggle at runtime via:
    import lumen_config
    lumen_config.set_strict_ieee(True)          # fastmath=False kernels
    lumen_config.set_truncate_mismatched(True)  # legacy length handling

    with lumen_config.config_override(warn_synthetic_samples=False):
        ...
"""

from __future__ import annotations

import contextlib
import dataclasses
import threading
from dataclasses import dataclass
from typing import Any, Iterator

__all__ = [
    "EngineConfig",
    "get_config",
    "configure",
    "config_override",
    "set_strict_ieee",
    "set_truncate_mismatched",
]


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """
    Snapshot of the process-wide engine switches.

    Attributes:
        strict_ieee: Dispatch Lab / sRGB transfer functions to the
            ``fastmath=False`` Numba kernels (strict IEEE 754 inf/NaN
            propagation, no floating-point reassociation).
        truncate_mismatched: When an illuminant and a reflectance curve have
            different lengths, truncate both to the shorter one instead of
            raising ``SpectralLengthError``.
        warn_synthetic_samples: Emit ``SyntheticSampleWarning`` from TLCI and
            TM-30 calculations.
    """
    strict_ieee: bool = False
    truncate_mismatched: bool = False
    warn_synthetic_samples: bool = True


_LOCK = threading.Lock()
_CONFIG: EngineConfig = EngineConfig()


def get_config() -> EngineConfig:
    """Return the current (immutable) configuration snapshot."""
    return _CONFIG


def configure(**changes: Any) -> EngineConfig:
    """
    Update one or more switches and return the new snapshot.

    Raises:
        TypeError: for unknown configuration keys.
    """
    global _CONFIG
    valid = {f.name for f in dataclasses.fields(EngineConfig)}
    unknown = set(changes) - valid
    if unknown:
        raise TypeError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")
    with _LOCK:
        _CONFIG = dataclasses.replace(_CONFIG, **{k: bool(v) for k, v in changes.items()})
        return _CONFIG


def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between fast (default) and strict IEEE 754 Numba kernels.

    When ``enabled=True``, all Lab/sRGB transfer functions use
    ``fastmath=False`` kernels that guarantee correct inf/NaN propagation
    at the cost of some throughput.
    """
    configure(strict_ieee=enabled)


def set_truncate_mismatched(enabled: bool = True) -> None:
    """Enable the permissive truncation mode for mismatched spectral lengths."""
    configure(truncate_mismatched=enabled)


@contextlib.contextmanager
def config_override(**changes: Any) -> Iterator[EngineConfig]:
    """
    Temporarily apply *changes*.

    On exit only the overridden keys revert to their prior values; switches
    changed through ``configure`` inside the block are kept.
    """
    global _CONFIG
    previous = _CONFIG
    current = configure(**changes)
    try:
        yield current
    finally:
        with _LOCK:
            _CONFIG = dataclasses.replace(
                _CONFIG, **{k: getattr(previous, k) for k in changes})
