"""Rectangular arena with box obstacles and one circular docking target.

The arena also stands in for the external target detector: it reports the
target's center in robot frame when the target is ahead, in range and visible
on the scan, and the (-10, -10) sentinel otherwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..config import SimConfig
from ..types import TargetCandidate
from .scanner import RingScanner


def rasterize_disc(grid: np.ndarray, x: float, y: float, r_m: float, res: float) -> None:
    """Mark all cells inside a disc as occupied."""
    H, W = grid.shape
    radius = max(0.0, float(r_m))
    if radius <= 0.0:
        return
    jc = int(math.floor(x / res))
    ic = int(math.floor(y / res))
    rad_cells = int(math.ceil(radius / res))
    i0 = max(0, ic - rad_cells)
    i1 = min(H - 1, ic + rad_cells)
    j0 = max(0, jc - rad_cells)
    j1 = min(W - 1, jc + rad_cells)
    if i0 > i1 or j0 > j1:
        return
    yy, xx = np.ogrid[i0 : i1 + 1, j0 : j1 + 1]
    mask = (xx - jc) ** 2 + (yy - ic) ** 2 <= rad_cells**2
    grid[i0 : i1 + 1, j0 : j1 + 1][mask] = True


def rasterize_box(grid: np.ndarray, box: Tuple[float, float, float, float], res: float) -> None:
    """Mark cells whose centers fall inside an axis-aligned box (x0, y0, x1, y1)."""
    H, W = grid.shape
    x0, y0, x1, y1 = box
    x0, x1 = min(x0, x1), max(x0, x1)
    y0, y1 = min(y0, y1), max(y0, y1)
    j0 = max(0, int(math.floor(x0 / res)))
    j1 = min(W - 1, int(math.ceil(x1 / res)) - 1)
    i0 = max(0, int(math.floor(y0 / res)))
    i1 = min(H - 1, int(math.ceil(y1 / res)) - 1)
    if i0 > i1 or j0 > j1:
        return
    grid[i0 : i1 + 1, j0 : j1 + 1] = True


@dataclass
class Arena:
    obstacles: np.ndarray  # walls and boxes, target excluded
    target: np.ndarray  # target disc cells
    res: float
    target_xy: Tuple[float, float]
    target_radius: float

    def __post_init__(self) -> None:
        self.grid = self.obstacles | self.target

    @classmethod
    def from_config(cls, cfg: SimConfig) -> "Arena":
        w_m, h_m = cfg.arena_size_m
        res = cfg.resolution_m
        H = int(math.ceil(h_m / res))
        W = int(math.ceil(w_m / res))
        obstacles = np.zeros((H, W), dtype=bool)
        obstacles[0, :] = True
        obstacles[-1, :] = True
        obstacles[:, 0] = True
        obstacles[:, -1] = True
        for box in cfg.obstacles:
            rasterize_box(obstacles, box, res)
        target = np.zeros_like(obstacles)
        tx, ty = cfg.target_xy
        rasterize_disc(target, tx, ty, cfg.target_radius_m, res)
        target &= ~obstacles
        return cls(obstacles, target, res, (tx, ty), cfg.target_radius_m)

    @property
    def size_m(self) -> Tuple[float, float]:
        H, W = self.grid.shape
        return W * self.res, H * self.res

    def collides(self, x: float, y: float, radius: float) -> bool:
        """True if any wall or box cell lies within ``radius`` of (x, y)."""
        H, W = self.obstacles.shape
        res = self.res
        j0 = max(0, int(math.floor((x - radius) / res)))
        j1 = min(W - 1, int(math.floor((x + radius) / res)))
        i0 = max(0, int(math.floor((y - radius) / res)))
        i1 = min(H - 1, int(math.floor((y + radius) / res)))
        if i0 > i1 or j0 > j1:
            return True  # outside the map
        yy, xx = np.ogrid[i0 : i1 + 1, j0 : j1 + 1]
        cx = (xx + 0.5) * res
        cy = (yy + 0.5) * res
        mask = (cx - x) ** 2 + (cy - y) ** 2 <= radius * radius
        return bool(self.obstacles[i0 : i1 + 1, j0 : j1 + 1][mask].any())

    def distance_to_target(self, x: float, y: float) -> float:
        return math.hypot(self.target_xy[0] - x, self.target_xy[1] - y)

    def docked(self, x: float, y: float, robot_radius: float, margin: float = 0.05) -> bool:
        return self.distance_to_target(x, y) <= robot_radius + self.target_radius + margin

    def detect_target(
        self,
        pose: Tuple[float, float, float],
        scan: np.ndarray,
        scanner: RingScanner,
        detect_range_m: float,
        detect_fov_deg: float,
    ) -> TargetCandidate:
        x, y, th = pose
        dx = self.target_xy[0] - x
        dy = self.target_xy[1] - y
        forward = math.cos(th) * dx + math.sin(th) * dy
        lateral = -math.sin(th) * dx + math.cos(th) * dy
        dist = math.hypot(dx, dy)
        if forward <= 0.0 or dist > detect_range_m:
            return TargetCandidate.none()
        bearing = math.atan2(lateral, forward)
        if abs(bearing) > 0.5 * math.radians(detect_fov_deg):
            return TargetCandidate.none()
        # Occluded if the beam toward the target stops well short of its surface
        seen = float(scan[scanner.beam_index(bearing)])
        if seen < dist - self.target_radius - 2.0 * self.res:
            return TargetCandidate.none()
        return TargetCandidate(lateral, forward)
