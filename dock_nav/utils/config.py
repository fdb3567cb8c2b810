"""Config loading helpers built around OmegaConf."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from omegaconf import OmegaConf

from ..errors import ConfigurationError


def load_config_any(path: str, overrides: Optional[Iterable[str]] = None) -> Any:
    """Load a YAML/OMEGACONF file, apply ``key=value`` overrides and resolve it."""
    try:
        cfg = OmegaConf.load(path)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file not found: {path}") from exc
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    return OmegaConf.to_container(cfg, resolve=True)


def load_config_dict(path: str, overrides: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """Load a config file and guarantee a `dict` result."""
    cfg = load_config_any(path, overrides)
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"Expected mapping at {path}, got {type(cfg)}")
    return cfg
