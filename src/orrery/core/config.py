"""
Run configuration for the orrery.

Defaults live in core/constants.py; a YAML file may override any field:

    display_scale: 100.0
    sim_speed: 1.0
    n_ticks: 365
    start_date: 2024-01-01
    neo_csv: data/neos_sample.csv
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from orrery.core.constants import (
    DISPLAY_SCALE,
    KEPLER_MAX_ITER,
    KEPLER_TOL,
    MAX_CALENDAR_STEP_DAYS,
    ORBIT_TRACE_STEP_RAD,
    SATELLITE_SPEED_DIVISOR,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrreryConfig:
    display_scale: float = DISPLAY_SCALE
    satellite_speed_divisor: float = SATELLITE_SPEED_DIVISOR
    kepler_tol: float = KEPLER_TOL
    kepler_max_iter: int = KEPLER_MAX_ITER
    orbit_trace_step_rad: float = ORBIT_TRACE_STEP_RAD
    max_calendar_step_days: float = MAX_CALENDAR_STEP_DAYS
    start_date: datetime = datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc)
    sync_to_start_date: bool = True
    sim_speed: float = 1.0
    n_ticks: int = 365
    neo_csv: Optional[str] = None
    out_dir: str = "out"

    def __post_init__(self):
        if not (self.display_scale > 0 and math.isfinite(self.display_scale)):
            raise ValueError(f"display_scale must be positive. Got: {self.display_scale}")
        if not self.satellite_speed_divisor > 0:
            raise ValueError(f"satellite_speed_divisor must be positive. Got: {self.satellite_speed_divisor}")
        if not self.kepler_tol > 0:
            raise ValueError(f"kepler_tol must be positive. Got: {self.kepler_tol}")
        if self.kepler_max_iter < 1:
            raise ValueError(f"kepler_max_iter must be at least 1. Got: {self.kepler_max_iter}")
        if not self.orbit_trace_step_rad > 0:
            raise ValueError(f"orbit_trace_step_rad must be positive. Got: {self.orbit_trace_step_rad}")
        if not self.max_calendar_step_days > 0:
            raise ValueError(f"max_calendar_step_days must be positive. Got: {self.max_calendar_step_days}")
        if not math.isfinite(self.sim_speed):
            raise ValueError(f"sim_speed must be finite. Got: {self.sim_speed}")
        if self.n_ticks < 0:
            raise ValueError(f"n_ticks must be non-negative. Got: {self.n_ticks}")


def _coerce_start_date(value: Union[str, date, datetime]) -> datetime:
    # YAML gives date/datetime objects for unquoted ISO values, str otherwise
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value)
    else:
        raise ValueError(f"start_date must be an ISO date or datetime. Got: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def config_from_dict(data: Dict[str, Any]) -> OrreryConfig:
    known = {f.name for f in fields(OrreryConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    kwargs = dict(data)
    if "start_date" in kwargs:
        kwargs["start_date"] = _coerce_start_date(kwargs["start_date"])
    return OrreryConfig(**kwargs)


def load_config(path: Optional[Union[str, Path]] = None) -> OrreryConfig:
    """
    Load an OrreryConfig from a YAML file.

    Args:
        path: YAML file; None gives the defaults

    Returns:
        Validated configuration
    """
    if path is None:
        return OrreryConfig()

    logger.info("Loading configuration from: %s", path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level.")
    return config_from_dict(data)
