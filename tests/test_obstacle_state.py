import itertools

import numpy as np
import pytest

from dock_nav.config import MoveSpecs
from dock_nav.controllers.obstacle_state import (
    clearance_pair,
    compute_can_continue,
    compute_is_close_to_wall,
    update_move_status,
)
from dock_nav.errors import InvariantViolation
from dock_nav.sensors.sectors import SectorMinima, sector_minima
from dock_nav.types import MoveStatus, TurnType, direction_factor


def test_direction_factor_values() -> None:
    assert direction_factor(TurnType.NONE) == 0
    assert direction_factor(TurnType.LEFT) == -1
    assert direction_factor(TurnType.RIGHT) == 1


def test_blocked_left_sector_stops_right_wall_follower(params) -> None:
    params.update(
        high_security_distance=1.0,
        low_security_distance=0.3,
        right_range_low_lim=350,
        right_range_high_lim=400,
        left_range_low_lim=300,
        left_range_high_lim=340,
        center_range_low_lim=410,
        center_range_high_lim=440,
    )
    specs = MoveSpecs.from_dict(params)
    scan = np.full(720, 3.0)
    scan[350:401] = 1.5
    scan[300:341] = 0.1
    scan[410:441] = 1.5
    minima = sector_minima(scan, specs)
    assert clearance_pair(minima, TurnType.RIGHT) == (pytest.approx(1.5), pytest.approx(0.1))
    assert compute_can_continue(minima, TurnType.RIGHT, specs) is False


def test_can_continue_swaps_sides_with_turn_direction(specs) -> None:
    # Right side tight but above the low threshold
    minima = SectorMinima(right=0.4, left=2.0, center=2.0)
    assert compute_can_continue(minima, TurnType.LEFT, specs) is True
    assert compute_can_continue(minima, TurnType.RIGHT, specs) is False


def test_can_continue_without_direction_uses_overall_minimum(specs) -> None:
    assert compute_can_continue(SectorMinima(2.0, 2.0, 2.0), TurnType.NONE, specs) is True
    assert compute_can_continue(SectorMinima(2.0, 0.45, 2.0), TurnType.NONE, specs) is False
    assert clearance_pair(SectorMinima(1.0, 0.7, 0.9), TurnType.NONE) == (0.7, 0.7)


def test_can_continue_thresholds_are_strict(specs) -> None:
    minima = SectorMinima(right=0.5, left=2.0, center=2.0)
    assert compute_can_continue(minima, TurnType.RIGHT, specs) is False
    minima = SectorMinima(right=2.0, left=0.3, center=2.0)
    assert compute_can_continue(minima, TurnType.RIGHT, specs) is False


def test_can_continue_false_whenever_a_zone_is_too_close(specs) -> None:
    values = [0.2, 0.4, 1.0]
    for right, left, center in itertools.product(values, repeat=3):
        minima = SectorMinima(right, left, center)
        for turn in TurnType:
            priority, secondary = clearance_pair(minima, turn)
            expected = priority > specs.high_security_distance and secondary > specs.low_security_distance
            assert compute_can_continue(minima, turn, specs) is expected


def test_is_close_to_wall_reads_followed_side(specs) -> None:
    minima = SectorMinima(right=0.5, left=0.9, center=2.0)
    assert compute_is_close_to_wall(minima, TurnType.RIGHT, specs) is True
    assert compute_is_close_to_wall(minima, TurnType.LEFT, specs) is False


def test_is_close_to_wall_without_direction_raises(specs) -> None:
    with pytest.raises(InvariantViolation):
        compute_is_close_to_wall(SectorMinima(1.0, 1.0, 1.0), TurnType.NONE, specs)


def test_update_keeps_close_flag_when_not_following(specs) -> None:
    status = MoveStatus(can_continue=True, is_close_to_wall=True, is_following_wall=False)
    update_move_status(status, SectorMinima(2.0, 2.0, 0.2), TurnType.NONE, specs)
    assert status.can_continue is False
    assert status.is_close_to_wall is True


def test_update_refreshes_close_flag_while_following(specs) -> None:
    status = MoveStatus(can_continue=True, is_close_to_wall=True, is_following_wall=True)
    update_move_status(status, SectorMinima(2.0, 2.0, 2.0), TurnType.RIGHT, specs)
    assert status.can_continue is True
    assert status.is_close_to_wall is False
