# src/orrery/physics/orbit.py

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import List

from orrery.core.constants import (
    DAYS_PER_CENTURY,
    DAYS_PER_YEAR,
    J2000_JD,
    KEPLER_MAX_ITER,
    KEPLER_TOL,
    ORBIT_TRACE_STEP_RAD,
)
from orrery.core.frames import Vector3, orbital_plane_to_ecliptic
from orrery.physics.kepler import mean_to_true

_MAX_ECCENTRICITY = 0.999999
_MIN_SEMI_MAJOR_AXIS_AU = 1e-9


@dataclass(frozen=True)
class SecularRates:
    """
    Linear drift of the orbital elements per Julian century.
    All zero by default (static orbit).
    """
    semi_major_axis_au: float = 0.0
    eccentricity: float = 0.0
    inclination_deg: float = 0.0
    longitude_of_ascending_node_deg: float = 0.0
    longitude_of_perihelion_deg: float = 0.0

    def __post_init__(self):
        for name in ("semi_major_axis_au", "eccentricity", "inclination_deg",
                     "longitude_of_ascending_node_deg", "longitude_of_perihelion_deg"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"Secular rate '{name}' must be finite. Got: {getattr(self, name)}")


@dataclass(frozen=True)
class OrbitalElements:
    """
    Heliocentric orbital elements of an elliptic orbit.

    Units:
        semi_major_axis_au: semi-major axis in AU
        eccentricity: 0 <= e < 1
        inclination_deg: inclination to the ecliptic in degrees
        longitude_of_ascending_node_deg: Ω in degrees
        longitude_of_perihelion_deg: ϖ = Ω + ω in degrees
        mean_longitude_deg: L = ϖ + M at epoch, in degrees
        epoch_jd: Julian date at which the angular elements hold
        rates: secular drift per Julian century
    """
    semi_major_axis_au: float
    eccentricity: float
    inclination_deg: float
    longitude_of_ascending_node_deg: float
    longitude_of_perihelion_deg: float
    mean_longitude_deg: float = 0.0
    epoch_jd: float = J2000_JD
    rates: SecularRates = field(default_factory=SecularRates)

    def __post_init__(self):
        if not math.isfinite(self.semi_major_axis_au) or self.semi_major_axis_au <= 0:
            raise ValueError(f"Semi-major axis must be positive. Got: {self.semi_major_axis_au}")
        if not (0.0 <= self.eccentricity < 1.0):
            raise ValueError(f"Only elliptic orbits are supported (0 <= e < 1). Got: {self.eccentricity}")
        if not math.isfinite(self.inclination_deg):
            raise ValueError(f"Inclination must be finite. Got: {self.inclination_deg}")
        if not math.isfinite(self.longitude_of_ascending_node_deg):
            raise ValueError(f"Longitude of ascending node must be finite. Got: {self.longitude_of_ascending_node_deg}")
        if not math.isfinite(self.longitude_of_perihelion_deg):
            raise ValueError(f"Longitude of perihelion must be finite. Got: {self.longitude_of_perihelion_deg}")
        if not math.isfinite(self.mean_longitude_deg):
            raise ValueError(f"Mean longitude must be finite. Got: {self.mean_longitude_deg}")
        if not math.isfinite(self.epoch_jd):
            raise ValueError(f"Epoch must be finite. Got: {self.epoch_jd}")

    @property
    def argument_of_perihelion_deg(self) -> float:
        """ω = ϖ - Ω."""
        return self.longitude_of_perihelion_deg - self.longitude_of_ascending_node_deg

    @property
    def mean_anomaly_at_epoch_deg(self) -> float:
        return self.mean_longitude_deg - self.longitude_of_perihelion_deg

    def at(self, jd: float) -> "OrbitalElements":
        """
        Elements with the secular rates applied at Julian date jd.
        Returns self when the orbit has no drift.
        """
        if self.rates == SecularRates():
            return self
        T = (jd - self.epoch_jd) / DAYS_PER_CENTURY
        r = self.rates
        # Long extrapolations may drift out of the elliptic domain; clamp
        a = max(self.semi_major_axis_au + r.semi_major_axis_au * T, _MIN_SEMI_MAJOR_AXIS_AU)
        e = min(max(self.eccentricity + r.eccentricity * T, 0.0), _MAX_ECCENTRICITY)
        return replace(
            self,
            semi_major_axis_au=a,
            eccentricity=e,
            inclination_deg=self.inclination_deg + r.inclination_deg * T,
            longitude_of_ascending_node_deg=self.longitude_of_ascending_node_deg + r.longitude_of_ascending_node_deg * T,
            longitude_of_perihelion_deg=self.longitude_of_perihelion_deg + r.longitude_of_perihelion_deg * T,
        )


def orbital_period_years(a_au: float) -> float:
    """T = sqrt(a^3), Kepler's third law with the Sun's GM normalized (AU, years)."""
    return math.sqrt(a_au ** 3)


def mean_motion_rad_day(a_au: float) -> float:
    """n = 2π / (T * 365.25)."""
    return 2.0 * math.pi / (orbital_period_years(a_au) * DAYS_PER_YEAR)


def radial_distance(elements: OrbitalElements, nu_rad: float) -> float:
    """r = a(1 - e^2) / (1 + e cos(nu))."""
    e = elements.eccentricity
    p = elements.semi_major_axis_au * (1.0 - e * e)
    return p / (1.0 + e * math.cos(nu_rad))


def propagate(elements: OrbitalElements, nu_rad: float) -> Vector3:
    """
    Heliocentric ecliptic position (AU) of the body at true anomaly nu.
    """
    r = radial_distance(elements, nu_rad)
    argp = math.radians(elements.argument_of_perihelion_deg)
    inc = math.radians(elements.inclination_deg)
    node = math.radians(elements.longitude_of_ascending_node_deg)
    return orbital_plane_to_ecliptic(r, argp + nu_rad, inc, node)


def trace_orbit(elements: OrbitalElements, step_rad: float = ORBIT_TRACE_STEP_RAD) -> List[Vector3]:
    """
    Sample the full ellipse from nu = 0 to 2π.
    The last sample sits at exactly 2π so the polyline closes.
    """
    if not (step_rad > 0):
        raise ValueError(f"step_rad must be positive. Got: {step_rad}")
    two_pi = 2.0 * math.pi
    n_steps = int(math.ceil(two_pi / step_rad))
    points: List[Vector3] = [propagate(elements, i * step_rad) for i in range(n_steps)]
    points.append(propagate(elements, two_pi))
    return points


def mean_anomaly_at(elements: OrbitalElements, jd: float) -> float:
    """
    Mean anomaly (rad) at Julian date jd: M = (L - ϖ) + n (jd - epoch).
    """
    current = elements.at(jd)
    M0 = math.radians(elements.mean_longitude_deg - current.longitude_of_perihelion_deg)
    return M0 + mean_motion_rad_day(current.semi_major_axis_au) * (jd - elements.epoch_jd)


def true_anomaly_at(elements: OrbitalElements, jd: float, tol: float = KEPLER_TOL,
                    max_iter: int = KEPLER_MAX_ITER) -> float:
    current = elements.at(jd)
    return mean_to_true(current.eccentricity, mean_anomaly_at(elements, jd), tol=tol, max_iter=max_iter)


def position_at(elements: OrbitalElements, jd: float) -> Vector3:
    """
    Pure function of (elements, time): heliocentric ecliptic position (AU) at jd.
    """
    current = elements.at(jd)
    return propagate(current, true_anomaly_at(elements, jd))
