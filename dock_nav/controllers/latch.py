"""One-way switch from general navigation into the target approach."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ..config import MoveSpecs
from ..constants import (
    WALL_PLACEHOLDER_M,
    LOCK_THRESHOLD_MARGIN_M2,
    LOCK_LATERAL_LIMIT_M,
    LOCK_FORWARD_LIMIT_M,
)
from ..sensors.sectors import sample_at
from ..types import ControllerState, NavMode, TargetCandidate, TurnType

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LatchCheck:
    wall: float
    threshold: float
    fired: bool


def wall_reading(scan: np.ndarray, turn_type: TurnType, specs: MoveSpecs) -> float:
    if turn_type is TurnType.RIGHT:
        return sample_at(scan, specs.right_wall_index)
    if turn_type is TurnType.LEFT:
        return sample_at(scan, specs.left_wall_index)
    return WALL_PLACEHOLDER_M


def lock_threshold(candidate: TargetCandidate) -> float:
    return candidate.x * candidate.x + candidate.y * candidate.y + LOCK_THRESHOLD_MARGIN_M2


def lock_condition(wall: float, candidate: TargetCandidate) -> bool:
    """Target is laterally centered, close, and the corridor behind it is clear."""
    if not candidate.is_visible:
        return False
    return (
        wall * wall > lock_threshold(candidate)
        and -LOCK_LATERAL_LIMIT_M < candidate.x < LOCK_LATERAL_LIMIT_M
        and candidate.y < LOCK_FORWARD_LIMIT_M
    )


class ModeLatch:
    def __init__(self, specs: MoveSpecs):
        self.specs = specs

    def check(self, state: ControllerState, scan: np.ndarray) -> LatchCheck:
        """Evaluate the lock for this cycle; once locked the mode never reverts."""
        if state.target_lock:
            return LatchCheck(float("nan"), float("nan"), False)
        candidate = state.candidate
        wall = wall_reading(scan, state.turn_type, self.specs)
        threshold = lock_threshold(candidate)
        fired = lock_condition(wall, candidate)
        if fired:
            state.mode = NavMode.TARGET_APPROACH
            log.info(
                "Target locked at (%.2f, %.2f), wall %.2f m; switching to approach",
                candidate.x,
                candidate.y,
                wall,
            )
        return LatchCheck(wall, threshold, fired)
