"""Sector minima over a fixed-length range scan.

Sectors are closed index intervals [low, high]. Indices that fall outside the
scan are a configuration error and are never clamped.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..config import MoveSpecs, SectorRange
from ..errors import ScanConfigurationError


@dataclass(frozen=True)
class SectorMinima:
    right: float
    left: float
    center: float


def min_in_range(scan: np.ndarray, low: int, high: int) -> float:
    """Minimum reading in the closed index interval [low, high]."""
    n = len(scan)
    if low < 0 or low > high or high >= n:
        raise ScanConfigurationError(
            f"Index range [{low}, {high}] does not fit a scan of {n} readings"
        )
    return float(np.min(scan[low : high + 1]))


def sector_min(scan: np.ndarray, sector: SectorRange) -> float:
    return min_in_range(scan, sector.low, sector.high)


def sector_minima(scan: np.ndarray, specs: MoveSpecs) -> SectorMinima:
    return SectorMinima(
        right=sector_min(scan, specs.right_range),
        left=sector_min(scan, specs.left_range),
        center=sector_min(scan, specs.center_range),
    )


def sample_at(scan: np.ndarray, index: int) -> float:
    """Single reading at a fixed sensor-geometry index."""
    if index < 0 or index >= len(scan):
        raise ScanConfigurationError(
            f"Sample index {index} does not fit a scan of {len(scan)} readings"
        )
    return float(scan[index])
