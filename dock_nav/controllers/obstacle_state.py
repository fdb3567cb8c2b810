"""Obstacle-avoidance flag updates from the three sector minima."""

from __future__ import annotations

import logging
from typing import Tuple

from ..config import MoveSpecs
from ..errors import InvariantViolation
from ..sensors.sectors import SectorMinima
from ..types import MoveStatus, TurnType

log = logging.getLogger(__name__)


def clearance_pair(minima: SectorMinima, turn_type: TurnType) -> Tuple[float, float]:
    """
    Return (priority, secondary) clearances for the current turn direction.

    The side the robot keeps the wall on is merged with the center sector and
    held to the stricter threshold; with no direction yet both use the overall
    minimum.
    """
    if turn_type is TurnType.RIGHT:
        return min(minima.center, minima.right), minima.left
    if turn_type is TurnType.LEFT:
        return min(minima.center, minima.left), minima.right
    overall = min(minima.right, minima.left, minima.center)
    return overall, overall


def compute_can_continue(minima: SectorMinima, turn_type: TurnType, specs: MoveSpecs) -> bool:
    priority, secondary = clearance_pair(minima, turn_type)
    return (
        priority > specs.high_security_distance
        and secondary > specs.low_security_distance
    )


def compute_is_close_to_wall(
    minima: SectorMinima, turn_type: TurnType, specs: MoveSpecs
) -> bool:
    if turn_type is TurnType.RIGHT:
        wall = minima.right
    elif turn_type is TurnType.LEFT:
        wall = minima.left
    else:
        log.error("Wall-following without a turn direction")
        raise InvariantViolation("is_close_to_wall evaluated with turn_type NONE while following a wall")
    return wall < specs.wall_follow_distance


def update_move_status(
    status: MoveStatus, minima: SectorMinima, turn_type: TurnType, specs: MoveSpecs
) -> MoveStatus:
    """Refresh status in place; is_close_to_wall only changes while following a wall."""
    status.can_continue = compute_can_continue(minima, turn_type, specs)
    if status.is_following_wall:
        status.is_close_to_wall = compute_is_close_to_wall(minima, turn_type, specs)
    return status
