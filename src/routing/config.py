"""
Engine configuration.

Defaults live in ``EngineConfig``; YAML profiles under ``configs/`` may
override any of them through an ``engine:`` section.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..tools.config_loader import ConfigLoader


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the route optimizer."""

    service_time_min: float = 30.0
    """Time spent at each visited stop (minutes)."""

    default_max_duration_min: float = 480.0
    """Route duration limit when the caller sets none (8 hours)."""

    base_stop_value: float = 100.0
    """Value given to stops without an explicit value, before priority scaling."""

    cache_maxsize: int = 4096
    """Maximum number of stop pairs held in the distance cache."""

    improvement_epsilon: float = 1e-9
    """Smallest distance decrease 2-opt treats as an improvement (miles)."""

    def __post_init__(self):
        problems = []
        if self.cache_maxsize < 1:
            problems.append(f"  - cache_maxsize must be >= 1, got {self.cache_maxsize}")
        if self.service_time_min < 0:
            problems.append(f"  - service_time_min must be >= 0, got {self.service_time_min}")
        if self.default_max_duration_min < 0:
            problems.append(
                f"  - default_max_duration_min must be >= 0, got {self.default_max_duration_min}"
            )
        if self.improvement_epsilon < 0:
            problems.append(f"  - improvement_epsilon must be >= 0, got {self.improvement_epsilon}")
        if problems:
            raise ValueError("Invalid engine configuration:\n" + "\n".join(problems))

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "EngineConfig":
        """Build from a mapping, ignoring unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known or value is None:
                continue
            values[key] = int(value) if key == "cache_maxsize" else float(value)
        return cls(**values)


DEFAULT_CONFIG = EngineConfig()


def load_engine_config(
    profile: Optional[str] = None,
    yaml_path: Optional[str] = None,
) -> EngineConfig:
    """
    Load engine configuration from a profile or an explicit YAML file.

    Args:
        profile: Profile name under configs/. If None, uses ROUTE_PROFILE or "default"
        yaml_path: Explicit YAML path; takes precedence over ``profile``

    Returns:
        EngineConfig, or the built-in defaults if the file doesn't exist
    """
    if yaml_path is not None:
        path = Path(yaml_path)
        if not path.exists():
            return DEFAULT_CONFIG
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    elif profile is not None:
        data = ConfigLoader.load_profile(profile)
    else:
        data = ConfigLoader.load_default_or_env_profile()

    return EngineConfig.from_dict(data.get("engine", {}))
