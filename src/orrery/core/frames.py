from __future__ import annotations

import math
from typing import Tuple

from orrery.core.constants import DISPLAY_SCALE

Vector3 = Tuple[float, float, float]

ORIGIN: Vector3 = (0.0, 0.0, 0.0)


def rot3(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (c * x - s * y, s * x + c * y, z)


def rot1(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (x, c * y - s * z, s * y + c * z)


def add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]+b[0], a[1]+b[1], a[2]+b[2])


def sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]-b[0], a[1]-b[1], a[2]-b[2])


def dot(a: Vector3, b: Vector3) -> float:
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def norm(a: Vector3) -> float:
    return math.sqrt(dot(a, a))


def orbital_plane_to_ecliptic(r: float, u_rad: float, inc_rad: float, node_rad: float) -> Vector3:
    """
    Rotate a point of the orbital plane into the ecliptic reference frame.

    Args:
        r: Radial distance from the focus
        u_rad: Argument of latitude, omega + nu (radians)
        inc_rad: Inclination (radians)
        node_rad: Longitude of the ascending node (radians)

    Returns:
        Position in the reference frame, same units as r
    """
    # Point on the line of nodes frame, then R3(node) * R1(inc)
    in_plane: Vector3 = (r * math.cos(u_rad), r * math.sin(u_rad), 0.0)
    tilted = rot1(inc_rad, in_plane)
    return rot3(node_rad, tilted)


def ecliptic_to_display(v: Vector3, display_scale: float = DISPLAY_SCALE) -> Vector3:
    """
    Scale to display units and reorder axes for a y-up scene (x, z, y).
    """
    x, y, z = v
    return (x * display_scale, z * display_scale, y * display_scale)
