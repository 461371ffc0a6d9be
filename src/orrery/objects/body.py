from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from orrery.core.catalog import BodyKind, OrbitalElementSet
from orrery.core.config import OrreryConfig
from orrery.core.constants import (
    DISPLAY_SCALE,
    J2000_JD,
    KEPLER_MAX_ITER,
    KEPLER_TOL,
    ORBIT_TRACE_STEP_RAD,
    SATELLITE_SPEED_DIVISOR,
)
from orrery.core.frames import ORIGIN, Vector3, add, ecliptic_to_display
from orrery.physics.kepler import (
    eccentric_to_mean,
    eccentric_to_true,
    solve_eccentric_anomaly,
    true_to_eccentric,
)
from orrery.physics.orbit import (
    OrbitalElements,
    mean_motion_rad_day,
    orbital_period_years,
    propagate,
    trace_orbit,
    true_anomaly_at,
)

logger = logging.getLogger(__name__)


@dataclass
class OrbitalClockState:
    """
    Incremental orbit state of one body.

    true_anomaly: rad, not wrapped
    period: years, sqrt(a^3)
    simulated_clock: simulated days accumulated by advance()
    """
    true_anomaly: float = 0.0
    period: float = 0.0
    simulated_clock: float = 0.0


@dataclass(eq=False)
class OrbitalBody:
    """
    A body of the orrery driven by its orbital elements.

    Stars stay at the origin. Satellites hold a direct reference to their
    parent and are placed relative to the parent's current position, so the
    parent must be advanced first within a tick.
    """
    name: str
    elements: Optional[OrbitalElements]
    kind: BodyKind = BodyKind.PLANET
    parent: Optional["OrbitalBody"] = None

    start_jd: float = J2000_JD
    display_scale: float = DISPLAY_SCALE
    satellite_speed_divisor: float = SATELLITE_SPEED_DIVISOR
    kepler_tol: float = KEPLER_TOL
    kepler_max_iter: int = KEPLER_MAX_ITER
    orbit_trace_step_rad: float = ORBIT_TRACE_STEP_RAD

    mass_kg: Optional[float] = None
    radius_km: Optional[float] = None
    color: Optional[str] = None

    clock: OrbitalClockState = field(init=False)
    position: Vector3 = field(init=False, default=ORIGIN)

    def __post_init__(self):
        if not self.name.strip():
            raise ValueError("Body name cannot be empty or whitespace.")
        if self.kind is not BodyKind.STAR and self.elements is None:
            raise ValueError(f"Body '{self.name}' needs orbital elements.")
        if self.kind is BodyKind.SATELLITE and self.parent is None:
            raise ValueError(f"Satellite '{self.name}' needs a parent body.")
        if self.kind is not BodyKind.SATELLITE and self.parent is not None:
            raise ValueError(f"Only satellites can have a parent body. '{self.name}' is a {self.kind.value}.")
        if self.parent is self:
            raise ValueError(f"Body '{self.name}' cannot be its own parent.")
        if not self.satellite_speed_divisor > 0:
            raise ValueError(f"satellite_speed_divisor must be positive. Got: {self.satellite_speed_divisor}")

        period = orbital_period_years(self.elements.semi_major_axis_au) if self.elements else 0.0
        self.clock = OrbitalClockState(period=period)

    @classmethod
    def from_element_set(
        cls,
        es: OrbitalElementSet,
        parent: Optional["OrbitalBody"] = None,
        config: Optional[OrreryConfig] = None,
        start_jd: float = J2000_JD,
    ) -> "OrbitalBody":
        """
        Build a body from a catalog entry. Raises ValueError on invalid elements.
        """
        config = config or OrreryConfig()
        elements = None if es.kind is BodyKind.STAR else es.to_elements()
        return cls(
            name=es.name,
            elements=elements,
            kind=es.kind,
            parent=parent,
            start_jd=start_jd,
            display_scale=config.display_scale,
            satellite_speed_divisor=config.satellite_speed_divisor,
            kepler_tol=config.kepler_tol,
            kepler_max_iter=config.kepler_max_iter,
            orbit_trace_step_rad=config.orbit_trace_step_rad,
            mass_kg=es.mass_kg,
            radius_km=es.radius_km,
            color=es.color,
        )

    @property
    def is_star(self) -> bool:
        return self.kind is BodyKind.STAR

    @property
    def current_jd(self) -> float:
        return self.start_jd + self.clock.simulated_clock

    def current_elements(self) -> OrbitalElements:
        if self.elements is None:
            raise ValueError(f"Body '{self.name}' has no orbital elements.")
        return self.elements.at(self.current_jd)

    def _to_display(self, r_ecl: Vector3) -> Vector3:
        pos = ecliptic_to_display(r_ecl, self.display_scale)
        if self.parent is not None:
            pos = add(pos, self.parent.position)
        return pos

    def position_at_anomaly(self, nu_rad: float) -> Vector3:
        """Display-frame position at an arbitrary true anomaly."""
        if self.is_star:
            return ORIGIN
        return self._to_display(propagate(self.current_elements(), nu_rad))

    def advance(self, sim_speed: float) -> Vector3:
        """
        Step the orbit by sim_speed simulated days.
        Satellites sweep their orbit at sim_speed / satellite_speed_divisor
        while their clock still follows the full sim_speed.

        The returned (and stored) position is the one for the anomaly held
        before this step; the new anomaly shows up on the next call.
        """
        if not math.isfinite(sim_speed):
            raise ValueError(f"sim_speed must be finite. Got: {sim_speed}")

        if self.is_star:
            self.position = ORIGIN
            return self.position

        speed = sim_speed / self.satellite_speed_divisor if self.kind is BodyKind.SATELLITE else sim_speed
        el = self.current_elements()
        e = el.eccentricity
        nu = self.clock.true_anomaly

        self.position = self._to_display(propagate(el, nu))
        if speed == 0.0:
            # No mean anomaly step: keep nu exactly rather than re-solving it
            return self.position

        n = mean_motion_rad_day(el.semi_major_axis_au)
        M0 = eccentric_to_mean(e, true_to_eccentric(e, nu))
        M = M0 + speed * n
        E = solve_eccentric_anomaly(e, M, tol=self.kepler_tol, max_iter=self.kepler_max_iter)

        self.clock.true_anomaly = eccentric_to_true(e, E)
        # Calendar time, unscaled, so satellites share their parent's date
        self.clock.simulated_clock += sim_speed
        self.clock.period = orbital_period_years(el.semi_major_axis_au)
        return self.position

    def trace_full_orbit(self) -> List[Vector3]:
        """
        Closed display-frame polyline of the whole orbit. Empty for a star.
        """
        if self.is_star:
            return []
        return [self._to_display(p) for p in trace_orbit(self.current_elements(), self.orbit_trace_step_rad)]

    def sync_to_date(self, jd: float) -> None:
        """
        Place the body on its orbit as of Julian date jd and restart its clock there.
        """
        if not math.isfinite(jd):
            raise ValueError(f"Julian date must be finite. Got: {jd}")
        self.start_jd = jd
        self.clock.simulated_clock = 0.0
        if self.is_star:
            return
        self.clock.true_anomaly = true_anomaly_at(
            self.elements, jd, tol=self.kepler_tol, max_iter=self.kepler_max_iter
        )
        self.clock.period = orbital_period_years(self.current_elements().semi_major_axis_au)
        logger.debug("%s synced to JD %.3f (nu=%.4f rad)", self.name, jd, self.clock.true_anomaly)

    def reset(self) -> None:
        self.clock.true_anomaly = 0.0
        self.clock.simulated_clock = 0.0
        self.position = ORIGIN
