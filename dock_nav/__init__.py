"""Reactive wander / wall-follow navigation with a terminal docking maneuver."""

from .config import MoveSpecs, SectorRange, SimConfig, load_move_specs
from .controllers import ControlCommand, CommandEmitter, HighLevelController, RecordingSink
from .errors import ConfigurationError, InvariantViolation, ScanConfigurationError
from .types import MoveStatus, NavMode, ScanBundle, TargetCandidate, TurnType

__all__ = [
    "MoveSpecs",
    "SectorRange",
    "SimConfig",
    "load_move_specs",
    "ControlCommand",
    "CommandEmitter",
    "HighLevelController",
    "RecordingSink",
    "ConfigurationError",
    "InvariantViolation",
    "ScanConfigurationError",
    "MoveStatus",
    "NavMode",
    "ScanBundle",
    "TargetCandidate",
    "TurnType",
]
