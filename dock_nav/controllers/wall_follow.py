"""General-navigation policy: drive straight, or follow a wall on a random side."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from ..config import MoveSpecs
from ..types import ControllerState, TurnType

log = logging.getLogger(__name__)


class WallFollowBranch(Enum):
    ENTER_WALL_FOLLOW = 1
    DRIVE_STRAIGHT = 2
    TRACK_WALL = 3
    TURN_FROM_OBSTACLE = 4
    REACQUIRE_WALL = 5


@dataclass(frozen=True)
class WallFollowDecision:
    branch: WallFollowBranch
    command: Optional[Tuple[float, float]]  # None: nothing emitted this cycle


def select_branch(can_continue: bool, following: bool, close: bool) -> WallFollowBranch:
    if not following:
        return WallFollowBranch.DRIVE_STRAIGHT if can_continue else WallFollowBranch.ENTER_WALL_FOLLOW
    if not can_continue:
        return WallFollowBranch.TURN_FROM_OBSTACLE
    return WallFollowBranch.TRACK_WALL if close else WallFollowBranch.REACQUIRE_WALL


class WallFollowPolicy:
    """
    Picks the velocity command while in general navigation.

    When an obstacle blocks the robot before any wall is being followed, a side
    is drawn uniformly at random and wall-following starts. That cycle emits no
    command; the chosen direction acts from the next cycle on.
    """

    def __init__(self, specs: MoveSpecs, rng: Optional[np.random.Generator] = None):
        self.specs = specs
        self._rng = rng or np.random.default_rng()

    def set_seed(self, seed: int) -> None:
        self._rng = np.random.default_rng(seed)

    def _draw_turn_type(self) -> TurnType:
        return TurnType.RIGHT if int(self._rng.integers(0, 2)) == 0 else TurnType.LEFT

    def decide(self, state: ControllerState) -> WallFollowDecision:
        s = state.status
        specs = self.specs
        branch = select_branch(s.can_continue, s.is_following_wall, s.is_close_to_wall)

        if branch is WallFollowBranch.ENTER_WALL_FOLLOW:
            state.turn_type = self._draw_turn_type()
            s.is_following_wall = True
            log.info("Obstacle ahead, following wall on the %s", state.turn_type.value)
            return WallFollowDecision(branch, None)

        if branch in (WallFollowBranch.DRIVE_STRAIGHT, WallFollowBranch.TRACK_WALL):
            return WallFollowDecision(branch, (specs.linear_velocity, 0.0))

        factor = state.turn_type.direction_factor
        if branch is WallFollowBranch.TURN_FROM_OBSTACLE:
            return WallFollowDecision(branch, (0.0, factor * specs.angular_velocity))
        return WallFollowDecision(branch, (0.0, -factor * specs.angular_velocity))
