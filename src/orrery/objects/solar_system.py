# solar_system.py
"""
Static table of the Sun, the planets and the Moon.

Planet elements are heliocentric, referred to the mean ecliptic and equinox
of J2000 (Standish, "Keplerian Elements for Approximate Positions of the
Major Planets"). Rates are per Julian century. The Moon's elements are
geocentric.

Orbit keys: a (AU), e, i (deg), Omega (deg), varpi (deg), L (deg), epoch_jd.
"""

from __future__ import annotations

from typing import List

from orrery.core.catalog import OrbitalElementSet, element_set_from_dict
from orrery.core.constants import J2000_JD

SOLAR_SYSTEM_BODIES = [
    {
        "name": "Sun",
        "kind": "star",
        "mass_kg": 1.989e30,
        "radius_km": 696340.0,
        "color": "#FDB813",
        # No orbit: pinned at the origin.
    },
    {
        "name": "Mercury",
        "mass_kg": 3.285e23,
        "radius_km": 2440.0,
        "color": "#A195A8",
        "orbit": {
            "a": 0.38709927, "e": 0.20563593, "i": 7.00497902,
            "Omega": 48.33076593, "varpi": 77.45779628, "L": 252.25032350,
            "epoch_jd": J2000_JD,
        },
        "rates": {
            "semi_major_axis_au": 0.00000037, "eccentricity": 0.00001906,
            "inclination_deg": -0.00594749, "longitude_of_ascending_node_deg": -0.12534081,
            "longitude_of_perihelion_deg": 0.16047689,
        },
    },
    {
        "name": "Venus",
        "mass_kg": 4.867e24,
        "radius_km": 6051.8,
        "color": "#D8B712",
        "orbit": {
            "a": 0.72332102, "e": 0.00676399, "i": 3.39777545,
            "Omega": 76.67261496, "varpi": 131.76755713, "L": 181.97970850,
            "epoch_jd": J2000_JD,
        },
        "rates": {
            "semi_major_axis_au": -0.00000026, "eccentricity": -0.00005107,
            "inclination_deg": 0.00043494, "longitude_of_ascending_node_deg": -0.27274174,
            "longitude_of_perihelion_deg": 0.05679648,
        },
    },
    {
        "name": "Earth",
        "mass_kg": 5.972e24,
        "radius_km": 6378.0,
        "color": "#22ABDF",
        "orbit": {
            "a": 1.00000018, "e": 0.01673163, "i": -0.00054346,
            "Omega": -5.11260389, "varpi": 102.93005885, "L": 100.46691572,
            "epoch_jd": J2000_JD,
        },
        "rates": {
            "semi_major_axis_au": -0.00000003, "eccentricity": -0.00003661,
            "inclination_deg": -0.01337178, "longitude_of_ascending_node_deg": -0.24123856,
            "longitude_of_perihelion_deg": 0.31795260,
        },
    },
    {
        "name": "Moon",
        "kind": "satellite",
        "parent": "Earth",
        "mass_kg": 7.342e22,
        "radius_km": 1737.4,
        "color": "#C8C8C8",
        "orbit": {
            "a": 0.00256955529, "e": 0.0549, "i": 5.145,
            "Omega": 125.08, "varpi": 83.23, "L": 218.32,
            "epoch_jd": J2000_JD,
        },
    },
    {
        "name": "Mars",
        "mass_kg": 6.39e23,
        "radius_km": 3389.5,
        "color": "#FF5E33",
        "orbit": {
            "a": 1.52371034, "e": 0.09339410, "i": 1.84969142,
            "Omega": 49.55953891, "varpi": -23.94362959, "L": -4.55343205,
            "epoch_jd": J2000_JD,
        },
        "rates": {
            "semi_major_axis_au": 0.00001847, "eccentricity": 0.00007882,
            "inclination_deg": -0.00813131, "longitude_of_ascending_node_deg": -0.29257343,
            "longitude_of_perihelion_deg": 0.44441088,
        },
    },
    {
        "name": "Jupiter",
        "mass_kg": 1.898e27,
        "radius_km": 69911.0,
        "color": "#A2440A",
        "orbit": {
            "a": 5.20288700, "e": 0.04838624, "i": 1.30439695,
            "Omega": 100.47390909, "varpi": 14.72847983, "L": 34.39644051,
            "epoch_jd": J2000_JD,
        },
        "rates": {
            "semi_major_axis_au": -0.00011607, "eccentricity": -0.00013253,
            "inclination_deg": -0.00183714, "longitude_of_ascending_node_deg": 0.20469106,
            "longitude_of_perihelion_deg": 0.21252668,
        },
    },
    {
        "name": "Saturn",
        "mass_kg": 5.683e26,
        "radius_km": 58232.0,
        "color": "#F6D624",
        "orbit": {
            "a": 9.53667594, "e": 0.05386179, "i": 2.48599187,
            "Omega": 113.66242448, "varpi": 92.59887831, "L": 49.95424423,
            "epoch_jd": J2000_JD,
        },
        "rates": {
            "semi_major_axis_au": -0.00125060, "eccentricity": -0.00050991,
            "inclination_deg": 0.00193609, "longitude_of_ascending_node_deg": -0.28867794,
            "longitude_of_perihelion_deg": -0.41897216,
        },
    },
    {
        "name": "Uranus",
        "mass_kg": 8.681e25,
        "radius_km": 25362.0,
        "color": "#949AFF",
        "orbit": {
            "a": 19.18916464, "e": 0.04725744, "i": 0.77263783,
            "Omega": 74.01692503, "varpi": 170.95427630, "L": 313.23810451,
            "epoch_jd": J2000_JD,
        },
        "rates": {
            "semi_major_axis_au": -0.00196176, "eccentricity": -0.00004397,
            "inclination_deg": -0.00242939, "longitude_of_ascending_node_deg": 0.04240589,
            "longitude_of_perihelion_deg": 0.40805281,
        },
    },
    {
        "name": "Neptune",
        "mass_kg": 1.024e26,
        "radius_km": 24622.0,
        "color": "#3339FF",
        "orbit": {
            "a": 30.06992276, "e": 0.00859048, "i": 1.77004347,
            "Omega": 131.78422574, "varpi": 44.96476227, "L": -55.12002969,
            "epoch_jd": J2000_JD,
        },
        "rates": {
            "semi_major_axis_au": 0.00026291, "eccentricity": 0.00005105,
            "inclination_deg": 0.00035372, "longitude_of_ascending_node_deg": -0.00508664,
            "longitude_of_perihelion_deg": -0.32241464,
        },
    },
]


def solar_system_element_sets() -> List[OrbitalElementSet]:
    """Element sets for every body in SOLAR_SYSTEM_BODIES, parents before children."""
    return [element_set_from_dict(entry) for entry in SOLAR_SYSTEM_BODIES]
