# Kepler's equation and anomaly conversions (elliptic orbits only)

from __future__ import annotations

import logging
import math

from orrery.core.constants import KEPLER_MAX_ITER, KEPLER_TOL

logger = logging.getLogger(__name__)


def wrap_to_2pi(angle_rad: float) -> float:
    """Wrap angle to [0, 2π)."""
    two_pi = 2.0 * math.pi
    return angle_rad % two_pi


def _check_eccentricity(e: float) -> None:
    if not (0.0 <= e < 1.0):
        raise ValueError(f"Elliptic orbit requires 0 <= e < 1. Got: {e}")


def solve_eccentric_anomaly(e: float, M_rad: float, tol: float = KEPLER_TOL, max_iter: int = KEPLER_MAX_ITER) -> float:
    """
    Solve Kepler's equation for elliptic orbits:
        M = E - e sin(E)
    using Newton-Raphson starting from E = M.

    M is not wrapped and the result is not normalized, so E tracks M
    across revolutions.

    Args:
        e: eccentricity (0 <= e < 1)
        M_rad: Mean anomaly (rad), any finite value
        tol: stop once the Newton step is at most this (rad)
        max_iter: iteration cap

    Returns:
        E_rad: Eccentric anomaly (rad). If the cap is hit, the iterate with
        the smallest residual is returned and a warning is logged.
    """
    _check_eccentricity(e)
    if not math.isfinite(M_rad):
        raise ValueError(f"Mean anomaly must be finite. Got: {M_rad}")

    E = M_rad
    best_E = E
    best_res = math.inf

    for _ in range(max_iter):
        f = E - e * math.sin(E) - M_rad
        fp = 1.0 - e * math.cos(E)  # >= 1 - e > 0
        if abs(f) < best_res:
            best_E, best_res = E, abs(f)
        dE = f / fp
        E -= dE
        if abs(dE) <= tol:
            return E

    res = abs(E - e * math.sin(E) - M_rad)
    if res < best_res:
        best_E, best_res = E, res
    logger.warning(
        "Kepler solver did not converge in %d iterations (e=%.6f, M=%.6f); residual %.3e",
        max_iter, e, M_rad, best_res,
    )
    return best_E


def true_to_eccentric(e: float, nu_rad: float) -> float:
    """E = 2 atan( sqrt((1-e)/(1+e)) tan(nu/2) ), result in (-π, π)."""
    _check_eccentricity(e)
    return 2.0 * math.atan(math.sqrt((1.0 - e) / (1.0 + e)) * math.tan(nu_rad / 2.0))


def eccentric_to_true(e: float, E_rad: float) -> float:
    """nu = 2 atan( sqrt((1+e)/(1-e)) tan(E/2) ), result in (-π, π)."""
    _check_eccentricity(e)
    return 2.0 * math.atan(math.sqrt((1.0 + e) / (1.0 - e)) * math.tan(E_rad / 2.0))


def eccentric_to_mean(e: float, E_rad: float) -> float:
    return E_rad - e * math.sin(E_rad)


def mean_to_true(e: float, M_rad: float, tol: float = KEPLER_TOL, max_iter: int = KEPLER_MAX_ITER) -> float:
    E = solve_eccentric_anomaly(e, M_rad, tol=tol, max_iter=max_iter)
    return eccentric_to_true(e, E)
