from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..config import MoveSpecs
from ..sensors.sectors import sample_at
from ..types import TurnType

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApproachDecision:
    back: float
    front: float
    diff: float
    command: Optional[Tuple[float, float]]


class TargetApproachController:
    """
    Bang-bang heading corrector for the final docking run.

    Two readings taken at a fixed angular offset along the followed side give
    diff = front - sin(60 deg) * back, which is zero when the heading matches
    the approach corridor. Inside the deadband the robot drives straight,
    otherwise it turns in place at a quarter of the nominal angular speed.
    """

    def __init__(self, specs: MoveSpecs):
        self.specs = specs
        self._k = math.sin(math.radians(specs.approach_angle_deg))

    def samples(self, scan: np.ndarray, turn_type: TurnType) -> Tuple[float, float]:
        """(back, front) readings for the followed side."""
        specs = self.specs
        if turn_type is TurnType.RIGHT:
            return (
                sample_at(scan, specs.right_range.low),
                sample_at(scan, specs.right_front_index),
            )
        return (
            sample_at(scan, specs.left_range.high),
            sample_at(scan, specs.left_front_index),
        )

    def action(self, scan: np.ndarray, turn_type: TurnType) -> ApproachDecision:
        if turn_type is TurnType.NONE:
            # No side to measure against: hold the last command
            log.warning("Target approach without a turn direction; no command issued")
            nan = float("nan")
            return ApproachDecision(nan, nan, nan, None)

        specs = self.specs
        back, front = self.samples(scan, turn_type)
        diff = front - self._k * back
        factor = turn_type.direction_factor
        w_turn = specs.angular_velocity / specs.approach_turn_divisor

        if abs(diff) <= specs.approach_deadband:
            cmd = (specs.linear_velocity, 0.0)
        elif diff > specs.approach_deadband:
            cmd = (0.0, -factor * w_turn)
        else:
            cmd = (0.0, factor * w_turn)
        return ApproachDecision(back, front, diff, cmd)
