"""Simulated 360 degree range scanner over an occupancy grid.

Beam k points at heading - pi + k * 2pi / beams, so beam 0 looks straight back
and beam beams/2 straight ahead, matching the layout the controller's sector
indices assume. Grid cell grid[i, j] covers [j*res, (j+1)*res) x [i*res, (i+1)*res).
"""

from __future__ import annotations

from math import cos, floor, inf, pi, sin
from typing import Optional, Tuple

import numpy as np

_EPS = 1e-9


def _first_crossing(pos: float, d: float, cell: int, res: float) -> Tuple[int, float, float]:
    """(cell step, distance to the first grid line, distance between grid lines) along one axis."""
    if d > 0.0:
        return 1, ((cell + 1) * res - pos) / d, res / d
    if d < 0.0:
        return -1, (cell * res - pos) / d, -res / d
    return 0, inf, inf


def cast_ray(grid: np.ndarray, res: float, x: float, y: float, phi: float, max_range: float) -> float:
    """Distance from (x, y) along ``phi`` to the first occupied cell or the map edge."""
    H, W = grid.shape
    j, i = int(floor(x / res)), int(floor(y / res))
    if not (0 <= i < H and 0 <= j < W) or grid[i, j]:
        return 0.0
    sj, tj, dtj = _first_crossing(x, cos(phi), j, res)
    si, ti, dti = _first_crossing(y, sin(phi), i, res)
    while True:
        t = min(tj, ti)
        if t >= max_range:
            return max_range
        # Corner crossings advance both axes at once
        if tj - t <= _EPS:
            j += sj
            tj += dtj
        if ti - t <= _EPS:
            i += si
            ti += dti
        if not (0 <= i < H and 0 <= j < W) or grid[i, j]:
            return t


class RingScanner:
    def __init__(
        self,
        beams: int = 720,
        max_range_m: float = 5.0,
        resolution_m: float = 0.05,
        noise_std_m: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.beams = int(beams)
        self.max_range = float(max_range_m)
        self.res = float(resolution_m)
        self.noise_std = float(noise_std_m)
        self._rng = rng or np.random.default_rng()
        self._step = 2.0 * pi / self.beams
        self.offsets = -pi + np.arange(self.beams) * self._step

    def beam_index(self, rel_angle: float) -> int:
        """Beam closest to an angle measured from the robot heading."""
        return int(round((rel_angle + pi) / self._step)) % self.beams

    def sense(self, grid: np.ndarray, pose: Tuple[float, float, float]) -> np.ndarray:
        x, y, th = pose
        ranges = np.array(
            [cast_ray(grid, self.res, x, y, th + off, self.max_range) for off in self.offsets]
        )
        if self.noise_std > 0.0:
            ranges += self._rng.normal(0.0, self.noise_std, size=ranges.shape)
        return np.clip(ranges, 0.0, self.max_range)
