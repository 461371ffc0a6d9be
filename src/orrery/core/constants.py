from __future__ import annotations

# Julian year / century in days
DAYS_PER_YEAR: float = 365.25
DAYS_PER_CENTURY: float = 36525.0

# Julian date of the J2000.0 epoch (2000-01-01 12:00 TT)
J2000_JD: float = 2451545.0

# Julian date of the Unix epoch (1970-01-01 00:00 UTC)
UNIX_EPOCH_JD: float = 2440587.5

# Display units per AU when handing positions to the rendering layer
DISPLAY_SCALE: float = 100.0

# Kepler solver defaults (coarse tolerance is enough for display)
KEPLER_TOL: float = 1e-4
KEPLER_MAX_ITER: int = 100

# Angular step used to sample full orbit polylines (rad)
ORBIT_TRACE_STEP_RAD: float = 0.001

# Satellites (moons) advance at sim_speed / this
SATELLITE_SPEED_DIVISOR: float = 100.0

# Largest calendar jump per tick (days)
MAX_CALENDAR_STEP_DAYS: float = 100.0
