import math
from pathlib import Path

import numpy as np
import pytest

from dock_nav.config import MoveSpecs, ScanConfig, SimConfig, load_move_specs
from dock_nav.controllers.base import ControlCommand
from dock_nav.sim.drive import DriveBase
from dock_nav.sim.scanner import RingScanner
from dock_nav.sim.runner import run_episode
from dock_nav.sim.world import Arena
from dock_nav.utils.config import load_config_dict

REPO_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "high_level_control.yaml"


def make_sim(**kw) -> SimConfig:
    cfg = dict(
        resolution_m=0.1,
        arena_size_m=(4.0, 4.0),
        start_pose=(2.05, 2.05, 0.0),
        target_xy=(3.0, 2.05),
        max_steps=5,
        seed=0,
        scan=ScanConfig(beams=720, max_range_m=5.0),
    )
    cfg.update(kw)
    return SimConfig(**cfg)


def test_scanner_full_circle_layout() -> None:
    grid = np.zeros((40, 40), dtype=bool)
    grid[0, :] = grid[-1, :] = grid[:, 0] = grid[:, -1] = True
    scanner = RingScanner(beams=720, max_range_m=5.0, resolution_m=0.1)
    scan = scanner.sense(grid, (2.05, 2.05, 0.0))
    assert scan.shape == (720,)
    assert scan[360] == pytest.approx(1.85, abs=1e-6)  # forward
    assert scan[0] == pytest.approx(1.95, abs=1e-6)  # behind
    assert scan[540] == pytest.approx(1.85, abs=1e-6)  # left
    assert scanner.beam_index(0.0) == 360
    assert scanner.beam_index(math.pi / 2) == 540


def test_scanner_caps_at_max_range() -> None:
    grid = np.zeros((100, 100), dtype=bool)
    scanner = RingScanner(beams=8, max_range_m=4.0, resolution_m=0.1)
    assert np.allclose(scanner.sense(grid, (5.05, 5.05, 0.3)), 4.0)


def test_scanner_inside_obstacle_reads_zero() -> None:
    grid = np.ones((10, 10), dtype=bool)
    scanner = RingScanner(beams=16, max_range_m=4.0, resolution_m=0.1)
    assert np.allclose(scanner.sense(grid, (0.55, 0.55, 0.0)), 0.0)


def test_drive_base_holds_setpoint_and_saturates() -> None:
    base = DriveBase((0.0, 0.0, 0.0), v_limit=0.5, w_limit=1.0)
    base.apply(ControlCommand(2.0, 0.0))
    for _ in range(10):
        base.advance(0.1)
    x, y, th = base.pose
    assert base.held == ControlCommand(0.5, 0.0)
    assert x == pytest.approx(0.5)
    assert abs(y) < 1e-12
    assert th == 0.0

    base.apply(ControlCommand(0.0, -3.0))
    base.advance(0.5)
    assert base.pose[2] == pytest.approx(-0.5)
    assert base.pose[0] == pytest.approx(0.5)


def test_drive_base_wraps_heading() -> None:
    base = DriveBase((0.0, 0.0, 3.1), v_limit=1.0, w_limit=2.0)
    base.apply(ControlCommand(0.0, 2.0))
    _, _, th = base.advance(0.1)
    assert -math.pi <= th < math.pi
    assert th == pytest.approx(3.3 - 2.0 * math.pi)


def test_arena_collision_and_docking() -> None:
    arena = Arena.from_config(make_sim())
    assert arena.collides(0.12, 2.0, 0.15) is True
    assert arena.collides(2.0, 2.0, 0.15) is False
    assert arena.collides(-1.0, 2.0, 0.15) is True
    assert arena.docked(2.65, 2.05, 0.15) is True
    assert arena.docked(2.0, 2.05, 0.15) is False


def test_detector_reports_target_ahead_only() -> None:
    sim = make_sim()
    arena = Arena.from_config(sim)
    scanner = RingScanner(beams=720, max_range_m=5.0, resolution_m=0.1)
    pose = (2.05, 2.05, 0.0)
    cand = arena.detect_target(pose, scanner.sense(arena.grid, pose), scanner, 3.0, 120.0)
    assert cand.x == pytest.approx(0.0, abs=1e-9)
    assert cand.y == pytest.approx(0.95)

    behind = (2.05, 2.05, math.pi)
    cand = arena.detect_target(behind, scanner.sense(arena.grid, behind), scanner, 3.0, 120.0)
    assert cand.is_visible is False


def test_detector_hides_occluded_target() -> None:
    sim = make_sim(obstacles=((2.5, 1.5, 2.6, 2.6),))
    arena = Arena.from_config(sim)
    scanner = RingScanner(beams=720, max_range_m=5.0, resolution_m=0.1)
    pose = (2.05, 2.05, 0.0)
    cand = arena.detect_target(pose, scanner.sense(arena.grid, pose), scanner, 3.0, 120.0)
    assert cand.is_visible is False


def test_episode_drives_forward_in_open_space(specs) -> None:
    sim = make_sim(
        arena_size_m=(6.0, 6.0),
        start_pose=(1.0, 3.0, 0.0),
        target_xy=(5.0, 5.0),
    )
    res = run_episode(specs, sim, keep_debug=True)
    assert res.outcome == "timeout"
    assert res.steps == 5
    assert res.lock_step is None
    assert res.trajectory.shape == (6, 3)
    assert res.trajectory[-1, 0] == pytest.approx(1.0 + 5 * 0.25 * 0.1)
    assert all(d["branch"] == "DRIVE_STRAIGHT" for d in res.debug)
    assert len(res.commands) == 5


def test_episode_stops_on_collision(params) -> None:
    params.update(high_security_distance=0.0, low_security_distance=0.0, linear_velocity=1.0)
    specs = MoveSpecs.from_dict(params)
    sim = make_sim(
        arena_size_m=(6.0, 6.0),
        start_pose=(1.0, 3.0, 0.0),
        target_xy=(5.0, 5.0),
        max_steps=200,
    )
    res = run_episode(specs, sim)
    assert res.outcome == "collision"
    assert res.success is False
    assert res.steps < 200


def test_shipped_scenario_locks_and_docks() -> None:
    cfg = load_config_dict(str(REPO_CONFIG))
    specs = load_move_specs(cfg)
    sim = SimConfig.from_dict(cfg["sim"])
    res = run_episode(specs, sim, keep_debug=True)
    assert res.outcome == "docked"
    assert res.success is True
    assert res.lock_step is not None
    assert res.lock_step < res.steps
    # Target straight ahead: no wall-following before the lock
    assert all(d["branch"] == "DRIVE_STRAIGHT" for d in res.debug[: res.lock_step])
    assert res.debug[res.lock_step - 1]["switched_to"] == "target_approach"
    assert "diff" in res.debug[-1]
