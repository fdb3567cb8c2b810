from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

import numpy as np

from ..config import MoveSpecs, load_move_specs
from ..constants import CONFIG_NAMESPACE
from ..errors import ScanConfigurationError
from ..sensors.sectors import sector_minima
from ..types import ControllerState, NavMode, ScanBundle, as_scan
from .base import CommandEmitter, CommandSink, ControlCommand
from .latch import ModeLatch
from .obstacle_state import update_move_status
from .target_approach import TargetApproachController
from .wall_follow import WallFollowPolicy

log = logging.getLogger(__name__)


class HighLevelController:
    """
    Reactive wander / wall-follow controller with a terminal docking mode.

    One call to ``on_scan`` (or ``step``) is one control cycle:
      - while in general navigation: latch check, sector minima, flag update,
        wall-follow policy
      - once the target is locked: target-approach control law only
    The resulting command, if any, goes through the emitter. All mutable state
    lives in ``self.state`` and is only touched from the calling thread.
    The wall-follow side draw uses ``rng`` when given, otherwise a generator
    seeded with ``seed``; passing both is an error.
    """

    def __init__(
        self,
        specs: MoveSpecs,
        emitter: Optional[CommandEmitter] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self.specs = specs
        self.emitter = emitter or CommandEmitter()
        self.state = ControllerState()
        self.latch = ModeLatch(specs)
        self.policy = WallFollowPolicy(specs, rng=rng or np.random.default_rng(seed))
        self.approach = TargetApproachController(specs)
        self.cycles = 0
        self.lock_cycle: Optional[int] = None
        self.debug: dict = {}
        self._switch_flag: dict | None = None  # populated for one cycle when the mode switches

    @classmethod
    def from_config(
        cls,
        source: str | Mapping[str, Any],
        namespace: str = CONFIG_NAMESPACE,
        sink: Optional[CommandSink] = None,
        seed: Optional[int] = None,
    ) -> "HighLevelController":
        specs = load_move_specs(source, namespace)
        return cls(specs, emitter=CommandEmitter(sink), seed=seed)

    @property
    def mode(self) -> NavMode:
        return self.state.mode

    @property
    def target_lock(self) -> bool:
        return self.state.target_lock

    def reset(self) -> None:
        self.state = ControllerState()
        self.cycles = 0
        self.lock_cycle = None
        self.debug = {}
        self._switch_flag = None

    # -------- Cycle --------
    def on_scan(self, bundle: ScanBundle) -> Optional[ControlCommand]:
        """Scan callback: cache the candidate (until locked) and run one cycle."""
        if not self.state.target_lock:
            self.state.candidate = bundle.candidate
        return self.step(bundle.ranges)

    def step(self, ranges: Sequence[float] | np.ndarray) -> Optional[ControlCommand]:
        scan = as_scan(ranges)
        if len(scan) <= self.specs.max_index:
            log.error(
                "Scan of %d readings is shorter than configured index %d",
                len(scan),
                self.specs.max_index,
            )
            raise ScanConfigurationError(
                f"Scan has {len(scan)} readings, configuration reads index {self.specs.max_index}"
            )
        self.cycles += 1
        if self.state.target_lock:
            return self._approach_cycle(scan)
        return self._navigation_cycle(scan)

    def _navigation_cycle(self, scan: np.ndarray) -> Optional[ControlCommand]:
        state = self.state
        check = self.latch.check(state, scan)
        if check.fired:
            self.lock_cycle = self.cycles
            self._switch_flag = {
                "switched_to": NavMode.TARGET_APPROACH.value,
                "switch_reason": "target_lock",
                "lock_wall": check.wall,
                "lock_threshold": check.threshold,
            }

        minima = sector_minima(scan, self.specs)
        update_move_status(state.status, minima, state.turn_type, self.specs)
        decision = self.policy.decide(state)

        cmd = None
        if decision.command is not None:
            cmd = self.emitter.emit(*decision.command)

        self.debug = {
            "cycle": self.cycles,
            "mode": state.mode.value,
            "branch": decision.branch.name,
            "turn_type": state.turn_type.value,
            "right_min": minima.right,
            "left_min": minima.left,
            "center_min": minima.center,
            "can_continue": state.status.can_continue,
            "is_close_to_wall": state.status.is_close_to_wall,
            "is_following_wall": state.status.is_following_wall,
            "circle_x": state.candidate.x,
            "circle_y": state.candidate.y,
            "v_cmd": cmd.v if cmd else None,
            "w_cmd": cmd.w if cmd else None,
        }
        self._flush_switch_flag()
        return cmd

    def _approach_cycle(self, scan: np.ndarray) -> Optional[ControlCommand]:
        decision = self.approach.action(scan, self.state.turn_type)
        cmd = None
        if decision.command is not None:
            cmd = self.emitter.emit(*decision.command)
        self.debug = {
            "cycle": self.cycles,
            "mode": self.state.mode.value,
            "turn_type": self.state.turn_type.value,
            "back": decision.back,
            "front": decision.front,
            "diff": decision.diff,
            "v_cmd": cmd.v if cmd else None,
            "w_cmd": cmd.w if cmd else None,
        }
        return cmd

    def _flush_switch_flag(self) -> None:
        if self._switch_flag is not None:
            self.debug.update(self._switch_flag)
            self._switch_flag = None

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict view of the controller state."""
        s = self.state
        return {
            "mode": s.mode.value,
            "turn_type": s.turn_type.value,
            "can_continue": s.status.can_continue,
            "is_close_to_wall": s.status.is_close_to_wall,
            "is_following_wall": s.status.is_following_wall,
            "circle_x": s.candidate.x,
            "circle_y": s.candidate.y,
            "cycles": self.cycles,
            "lock_cycle": self.lock_cycle,
        }
