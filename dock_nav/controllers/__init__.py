from .base import ControlCommand, CommandEmitter, CommandSink, RecordingSink
from .high_level import HighLevelController
from .latch import ModeLatch, lock_condition
from .obstacle_state import compute_can_continue, compute_is_close_to_wall, update_move_status
from .target_approach import TargetApproachController
from .wall_follow import WallFollowBranch, WallFollowPolicy, select_branch

__all__ = [
    "ControlCommand",
    "CommandEmitter",
    "CommandSink",
    "RecordingSink",
    "HighLevelController",
    "ModeLatch",
    "lock_condition",
    "compute_can_continue",
    "compute_is_close_to_wall",
    "update_move_status",
    "TargetApproachController",
    "WallFollowBranch",
    "WallFollowPolicy",
    "select_branch",
]
