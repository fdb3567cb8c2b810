from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import (
    CONFIG_NAMESPACE,
    WALL_SAMPLE_INDEX_RIGHT,
    WALL_SAMPLE_INDEX_LEFT,
    FRONT_SAMPLE_INDEX_RIGHT,
    FRONT_SAMPLE_INDEX_LEFT,
    APPROACH_DEADBAND_M,
    APPROACH_ANGLE_DEG,
    APPROACH_TURN_DIVISOR,
    SCAN_NUM_BEAMS,
    SCAN_MAX_RANGE_M,
    SIM_DT_S,
    SIM_MAX_STEPS,
    SIM_RESOLUTION_M,
    SIM_ROBOT_RADIUS_M,
    SIM_TARGET_RADIUS_M,
    SIM_DETECT_RANGE_M,
    SIM_DETECT_FOV_DEG,
)
from .errors import ConfigurationError
from .utils.config import load_config_dict

# Keys that must be present under the configuration namespace
REQUIRED_KEYS: Tuple[str, ...] = (
    "high_security_distance",
    "low_security_distance",
    "wall_follow_distance",
    "linear_velocity",
    "angular_velocity",
    "right_range_low_lim",
    "right_range_high_lim",
    "left_range_low_lim",
    "left_range_high_lim",
    "center_range_low_lim",
    "center_range_high_lim",
)

OPTIONAL_KEYS: Tuple[str, ...] = (
    "right_wall_index",
    "left_wall_index",
    "right_front_index",
    "left_front_index",
    "approach_deadband",
    "approach_angle_deg",
    "approach_turn_divisor",
)


def _check(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigurationError(msg)


@dataclass(frozen=True)
class SectorRange:
    """Closed index interval [low, high] into the range scan."""

    low: int
    high: int

    def __post_init__(self) -> None:
        _check(self.low >= 0, f"sector low index must be >= 0, got {self.low}")
        _check(
            self.low <= self.high,
            f"sector low index {self.low} exceeds high index {self.high}",
        )


@dataclass(frozen=True)
class MoveSpecs:
    high_security_distance: float
    low_security_distance: float
    wall_follow_distance: float
    linear_velocity: float
    angular_velocity: float
    right_range: SectorRange
    left_range: SectorRange
    center_range: SectorRange
    # Sensor geometry
    right_wall_index: int = WALL_SAMPLE_INDEX_RIGHT
    left_wall_index: int = WALL_SAMPLE_INDEX_LEFT
    right_front_index: int = FRONT_SAMPLE_INDEX_RIGHT
    left_front_index: int = FRONT_SAMPLE_INDEX_LEFT
    # Target approach
    approach_deadband: float = APPROACH_DEADBAND_M
    approach_angle_deg: float = APPROACH_ANGLE_DEG
    approach_turn_divisor: float = APPROACH_TURN_DIVISOR

    def __post_init__(self) -> None:
        for name in ("high_security_distance", "low_security_distance", "wall_follow_distance"):
            _check(getattr(self, name) >= 0.0, f"{name} must be >= 0")
        for name in ("right_wall_index", "left_wall_index", "right_front_index", "left_front_index"):
            _check(getattr(self, name) >= 0, f"{name} must be >= 0")
        _check(self.approach_deadband >= 0.0, "approach_deadband must be >= 0")
        _check(self.approach_turn_divisor > 0.0, "approach_turn_divisor must be > 0")

    @property
    def max_index(self) -> int:
        """Largest scan index any component reads; scans must be longer than this."""
        return max(
            self.right_range.high,
            self.left_range.high,
            self.center_range.high,
            self.right_wall_index,
            self.left_wall_index,
            self.right_front_index,
            self.left_front_index,
        )

    @classmethod
    def from_dict(cls, cfg: Mapping[str, Any] | None) -> "MoveSpecs":
        """Build specs from a flat parameter mapping (the namespace contents).

        Every missing required key is reported in a single ConfigurationError.
        """
        if cfg is None or not isinstance(cfg, Mapping):
            raise ConfigurationError(
                f"Expected a mapping of controller parameters, got {type(cfg).__name__}"
            )
        missing = [k for k in REQUIRED_KEYS if cfg.get(k) is None]
        if missing:
            raise ConfigurationError(
                "Missing required controller parameters: " + ", ".join(missing)
            )
        try:
            optional = {k: cfg[k] for k in OPTIONAL_KEYS if cfg.get(k) is not None}
            for k in ("right_wall_index", "left_wall_index", "right_front_index", "left_front_index"):
                if k in optional:
                    optional[k] = int(optional[k])
            for k in ("approach_deadband", "approach_angle_deg", "approach_turn_divisor"):
                if k in optional:
                    optional[k] = float(optional[k])
            return cls(
                high_security_distance=float(cfg["high_security_distance"]),
                low_security_distance=float(cfg["low_security_distance"]),
                wall_follow_distance=float(cfg["wall_follow_distance"]),
                linear_velocity=float(cfg["linear_velocity"]),
                angular_velocity=float(cfg["angular_velocity"]),
                right_range=SectorRange(
                    int(cfg["right_range_low_lim"]), int(cfg["right_range_high_lim"])
                ),
                left_range=SectorRange(
                    int(cfg["left_range_low_lim"]), int(cfg["left_range_high_lim"])
                ),
                center_range=SectorRange(
                    int(cfg["center_range_low_lim"]), int(cfg["center_range_high_lim"])
                ),
                **optional,
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid controller parameter: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, SectorRange):
                d[f"{f.name}_low_lim"] = value.low
                d[f"{f.name}_high_lim"] = value.high
            else:
                d[f.name] = value
        return d


@dataclass
class ScanConfig:
    beams: int = SCAN_NUM_BEAMS
    max_range_m: float = SCAN_MAX_RANGE_M
    noise_std_m: float = 0.0

    def __post_init__(self) -> None:
        _check(self.beams > 0, "beams must be > 0")
        _check(self.max_range_m > 0.0, "max_range_m must be > 0")
        _check(self.noise_std_m >= 0.0, "noise_std_m must be >= 0")


@dataclass
class SimConfig:
    dt: float = SIM_DT_S
    max_steps: int = SIM_MAX_STEPS
    resolution_m: float = SIM_RESOLUTION_M
    arena_size_m: Tuple[float, float] = (6.0, 6.0)
    robot_radius_m: float = SIM_ROBOT_RADIUS_M
    start_pose: Tuple[float, float, float] = (1.0, 1.0, 0.0)
    target_xy: Tuple[float, float] = (4.5, 4.5)
    target_radius_m: float = SIM_TARGET_RADIUS_M
    detect_range_m: float = SIM_DETECT_RANGE_M
    detect_fov_deg: float = SIM_DETECT_FOV_DEG
    # Axis-aligned boxes (x0, y0, x1, y1) in meters
    obstacles: Tuple[Tuple[float, float, float, float], ...] = ()
    seed: Optional[int] = None
    scan: ScanConfig = field(default_factory=ScanConfig)

    def __post_init__(self) -> None:
        _check(self.dt > 0.0, "dt must be > 0")
        _check(self.max_steps > 0, "max_steps must be > 0")
        _check(self.resolution_m > 0.0, "resolution_m must be > 0")
        _check(self.robot_radius_m > 0.0, "robot_radius_m must be > 0")
        _check(self.target_radius_m > 0.0, "target_radius_m must be > 0")
        w, h = self.arena_size_m
        _check(w > 0.0 and h > 0.0, "arena_size_m must be positive")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any] | None) -> "SimConfig":
        d = dict(cfg or {})
        scan_cfg = d.pop("scan", None) or {}
        if "arena_size_m" in d:
            d["arena_size_m"] = tuple(float(v) for v in d["arena_size_m"])
        if "start_pose" in d:
            d["start_pose"] = tuple(float(v) for v in d["start_pose"])
        if "target_xy" in d:
            d["target_xy"] = tuple(float(v) for v in d["target_xy"])
        if "obstacles" in d:
            d["obstacles"] = tuple(tuple(float(v) for v in box) for box in d["obstacles"] or ())
        try:
            return cls(scan=ScanConfig(**scan_cfg), **d)
        except TypeError as exc:
            raise ConfigurationError(f"Invalid sim config: {exc}") from exc


def load_move_specs(
    source: str | Mapping[str, Any], namespace: str = CONFIG_NAMESPACE
) -> MoveSpecs:
    """Load MoveSpecs from a YAML path or an already-loaded config mapping.

    The parameters are looked up under ``namespace``; a missing namespace is
    reported like any other missing parameter.
    """
    if isinstance(source, str):
        cfg: Mapping[str, Any] = load_config_dict(source)
    else:
        cfg = source
    params = cfg.get(namespace)
    if params is None:
        raise ConfigurationError(
            f"Missing configuration namespace '{namespace}' (required: {', '.join(REQUIRED_KEYS)})"
        )
    return MoveSpecs.from_dict(params)
