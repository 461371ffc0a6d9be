"""
Time and epoch helpers.

Julian dates are used as the single time coordinate for element epochs;
simulated time is counted in days.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from orrery.core.constants import (
    DAYS_PER_CENTURY,
    J2000_JD,
    MAX_CALENDAR_STEP_DAYS,
    UNIX_EPOCH_JD,
)

logger = logging.getLogger(__name__)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    # Naive datetimes are taken as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def datetime_to_julian_date(dt: datetime) -> float:
    """Convert a datetime (UTC) to a Julian date."""
    elapsed = _as_utc(dt) - _UNIX_EPOCH
    return UNIX_EPOCH_JD + elapsed.total_seconds() / 86400.0


def julian_date_to_datetime(jd: float) -> datetime:
    """Convert a Julian date to an aware UTC datetime."""
    if not math.isfinite(jd):
        raise ValueError(f"Julian date must be finite. Got: {jd}")
    return _UNIX_EPOCH + timedelta(days=jd - UNIX_EPOCH_JD)


def julian_centuries_since_j2000(jd: float) -> float:
    return (jd - J2000_JD) / DAYS_PER_CENTURY


def sim_speed_from_slider(value: float, midpoint: float = 50.0) -> float:
    """
    Map a time-scale slider position to a signed simulation speed.

    The slider centre is 1x; every 10 units away doubles the speed and
    positions below the centre run time backwards:
        v = value - midpoint
        speed = -2^(-v/10)  if v < 0
        speed =  2^(v/10)   otherwise
    """
    v = value - midpoint
    if v < 0:
        return -math.pow(2.0, -v / 10.0)
    return math.pow(2.0, v / 10.0)


@dataclass
class SimulatedCalendar:
    """
    Calendar date shown alongside the simulation.
    Each tick moves the date by sim_speed days, clamped to max_step_days.
    """
    current: datetime
    max_step_days: float = MAX_CALENDAR_STEP_DAYS

    def __post_init__(self):
        if self.max_step_days <= 0:
            raise ValueError(f"max_step_days must be positive. Got: {self.max_step_days}")
        self.current = _as_utc(self.current)

    @property
    def julian_date(self) -> float:
        return datetime_to_julian_date(self.current)

    def advance(self, sim_speed: float) -> datetime:
        if not math.isfinite(sim_speed):
            raise ValueError(f"sim_speed must be finite. Got: {sim_speed}")
        step = max(-self.max_step_days, min(self.max_step_days, sim_speed))
        if step != sim_speed:
            logger.debug("Calendar step clamped from %s to %s days", sim_speed, step)
        self.current = self.current + timedelta(days=step)
        return self.current
