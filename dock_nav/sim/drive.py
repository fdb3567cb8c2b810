"""Differential-drive base for the simulator.

The base holds the last velocity command it was given, the way a motor driver
keeps its setpoint until a new ``cmd_vel`` arrives, so cycles that emit no
command keep the robot moving as before.
"""

from __future__ import annotations

from math import cos, sin, pi
from typing import Tuple

from ..controllers.base import ControlCommand

Pose = Tuple[float, float, float]


def wrap_angle(theta: float) -> float:
    return (theta + pi) % (2.0 * pi) - pi


class DriveBase:
    def __init__(self, pose: Pose, v_limit: float, w_limit: float) -> None:
        x, y, th = pose
        self.pose: Pose = (float(x), float(y), wrap_angle(th))
        self.v_limit = abs(float(v_limit))
        self.w_limit = abs(float(w_limit))
        self.held = ControlCommand(0.0, 0.0)

    def apply(self, cmd: ControlCommand) -> None:
        """Latch a new setpoint, saturated to the base's limits."""
        v = min(max(cmd.v, -self.v_limit), self.v_limit)
        w = min(max(cmd.w, -self.w_limit), self.w_limit)
        self.held = ControlCommand(v, w)

    def advance(self, dt: float) -> Pose:
        """Move for ``dt`` seconds under the held setpoint (explicit Euler)."""
        x, y, th = self.pose
        v, w = self.held.v, self.held.w
        self.pose = (
            x + v * cos(th) * dt,
            y + v * sin(th) * dt,
            wrap_angle(th + w * dt),
        )
        return self.pose
