"""Closed-loop episodes: scanner -> detector stand-in -> controller -> drive base."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..config import MoveSpecs, SimConfig
from ..controllers.base import CommandEmitter, ControlCommand, RecordingSink
from ..controllers.high_level import HighLevelController
from ..types import ScanBundle
from .drive import DriveBase
from .scanner import RingScanner
from .world import Arena

log = logging.getLogger(__name__)

OUTCOME_DOCKED = "docked"
OUTCOME_COLLISION = "collision"
OUTCOME_TIMEOUT = "timeout"


@dataclass
class EpisodeResult:
    outcome: str
    steps: int
    lock_step: Optional[int]
    trajectory: np.ndarray  # (N, 3) poses, first row is the start pose
    commands: List[ControlCommand] = field(default_factory=list)
    debug: List[dict] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.outcome == OUTCOME_DOCKED


def run_episode(
    specs: MoveSpecs,
    sim_cfg: SimConfig,
    seed: Optional[int] = None,
    keep_debug: bool = False,
) -> EpisodeResult:
    """Run one episode; one controller cycle per simulation step.

    Cycles that emit nothing leave the drive base on its previous setpoint.
    """
    seed = sim_cfg.seed if seed is None else seed
    rng = np.random.default_rng(seed)
    arena = Arena.from_config(sim_cfg)
    scanner = RingScanner(
        beams=sim_cfg.scan.beams,
        max_range_m=sim_cfg.scan.max_range_m,
        resolution_m=sim_cfg.resolution_m,
        noise_std_m=sim_cfg.scan.noise_std_m,
        rng=rng,
    )
    base = DriveBase(sim_cfg.start_pose, specs.linear_velocity, specs.angular_velocity)

    sink = RecordingSink()
    ctrl = HighLevelController(specs, emitter=CommandEmitter(sink), rng=rng)

    poses = [base.pose]
    debug: List[dict] = []
    outcome = OUTCOME_TIMEOUT
    steps = 0
    for step in range(sim_cfg.max_steps):
        pose = base.pose
        scan = scanner.sense(arena.grid, pose)
        cand = arena.detect_target(
            pose, scan, scanner, sim_cfg.detect_range_m, sim_cfg.detect_fov_deg
        )
        cmd = ctrl.on_scan(ScanBundle(scan, cand.x, cand.y))
        if cmd is not None:
            base.apply(cmd)
        if keep_debug:
            debug.append(dict(ctrl.debug, step=step))

        x, y, _ = base.advance(sim_cfg.dt)
        poses.append(base.pose)
        steps = step + 1

        if arena.docked(x, y, sim_cfg.robot_radius_m):
            outcome = OUTCOME_DOCKED
            break
        if arena.collides(x, y, sim_cfg.robot_radius_m):
            outcome = OUTCOME_COLLISION
            break

    log.info(
        "Episode finished: %s after %d steps (lock at cycle %s)",
        outcome,
        steps,
        ctrl.lock_cycle,
    )
    return EpisodeResult(
        outcome=outcome,
        steps=steps,
        lock_step=ctrl.lock_cycle,
        trajectory=np.asarray(poses, dtype=float),
        commands=list(sink.commands),
        debug=debug,
    )
