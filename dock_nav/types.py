from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

import numpy as np

from .constants import NO_TARGET_X, NO_TARGET_Y


class TurnType(Enum):
    """Side the robot keeps the wall on while wall-following.

    The signed direction factor mirrors angular commands between the two sides:
    NONE -> 0, LEFT -> -1, RIGHT -> +1.
    """

    NONE = "none"
    LEFT = "left"
    RIGHT = "right"

    @property
    def direction_factor(self) -> int:
        return _DIRECTION_FACTORS[self]


_DIRECTION_FACTORS = {
    TurnType.NONE: 0,
    TurnType.LEFT: -1,
    TurnType.RIGHT: 1,
}


def direction_factor(turn_type: TurnType) -> int:
    return turn_type.direction_factor


class NavMode(Enum):
    """Top-level controller mode. The switch to TARGET_APPROACH is one-way."""

    GENERAL_NAVIGATION = "general_navigation"
    TARGET_APPROACH = "target_approach"


@dataclass
class MoveStatus:
    """
    Obstacle-avoidance flags refreshed every cycle.

    - can_continue: path ahead is clear enough to drive straight
    - is_close_to_wall: followed wall is within wall_follow_distance
      (only meaningful while is_following_wall; kept when following stops)
    - is_following_wall: wall-follow sub-mode active
    """

    can_continue: bool = True
    is_close_to_wall: bool = False
    is_following_wall: bool = False


@dataclass(frozen=True)
class TargetCandidate:
    """Detected circular target in robot frame: x lateral (left positive), y forward, meters."""

    x: float
    y: float

    @classmethod
    def none(cls) -> "TargetCandidate":
        return cls(NO_TARGET_X, NO_TARGET_Y)

    @property
    def is_visible(self) -> bool:
        return not (self.x == NO_TARGET_X and self.y == NO_TARGET_Y)


@dataclass
class ScanBundle:
    """One cycle of input: range scan plus the detector's latest candidate."""

    ranges: np.ndarray
    circle_x: float = NO_TARGET_X
    circle_y: float = NO_TARGET_Y

    def __post_init__(self) -> None:
        self.ranges = as_scan(self.ranges)

    @property
    def candidate(self) -> TargetCandidate:
        return TargetCandidate(float(self.circle_x), float(self.circle_y))


@dataclass
class ControllerState:
    """All mutable controller state, owned by a single controller instance."""

    status: MoveStatus = field(default_factory=MoveStatus)
    turn_type: TurnType = TurnType.NONE
    mode: NavMode = NavMode.GENERAL_NAVIGATION
    candidate: TargetCandidate = field(default_factory=TargetCandidate.none)

    @property
    def target_lock(self) -> bool:
        return self.mode is NavMode.TARGET_APPROACH


def as_scan(ranges: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ranges as a 1-D float array (no copy when already one)."""
    scan = np.asarray(ranges, dtype=float)
    if scan.ndim != 1:
        raise ValueError(f"Expected 1-D range scan, got shape {scan.shape}")
    return scan
