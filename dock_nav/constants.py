from __future__ import annotations

# Configuration namespace holding the controller parameters
CONFIG_NAMESPACE: str = "HighLevelControl"

# Scan geometry: 720 beams over 360 deg, beam 0 behind the robot, counter-clockwise
SCAN_NUM_BEAMS: int = 720
SCAN_MAX_RANGE_M: float = 5.0

# Fixed samples tied to the sensor mounting
WALL_SAMPLE_INDEX_RIGHT: int = 380
WALL_SAMPLE_INDEX_LEFT: int = 340
FRONT_SAMPLE_INDEX_RIGHT: int = 90
FRONT_SAMPLE_INDEX_LEFT: int = 630

# Wall reading used by the latch when no turn direction is established
WALL_PLACEHOLDER_M: float = 1.0

# Target lock gate
LOCK_THRESHOLD_MARGIN_M2: float = 0.5
LOCK_LATERAL_LIMIT_M: float = 0.5
LOCK_FORWARD_LIMIT_M: float = 1.0

# Target approach
APPROACH_DEADBAND_M: float = 0.05
APPROACH_ANGLE_DEG: float = 60.0
APPROACH_TURN_DIVISOR: float = 4.0

# Sentinel reported by the detector when no target is visible
NO_TARGET_X: float = -10.0
NO_TARGET_Y: float = -10.0

# Simulation defaults
SIM_DT_S: float = 0.1
SIM_MAX_STEPS: int = 1500
SIM_RESOLUTION_M: float = 0.05
SIM_ROBOT_RADIUS_M: float = 0.15
SIM_TARGET_RADIUS_M: float = 0.2
SIM_DETECT_RANGE_M: float = 3.0
SIM_DETECT_FOV_DEG: float = 120.0
