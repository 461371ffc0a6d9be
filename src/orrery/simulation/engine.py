from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from orrery.core.constants import MAX_CALENDAR_STEP_DAYS
from orrery.core.frames import Vector3
from orrery.core.timeutil import SimulatedCalendar
from orrery.simulation.registry import BodyRegistry

logger = logging.getLogger(__name__)


class System(Protocol):
    """
    Plugin interface for simulation systems.
    Each system runs per tick, after all bodies have advanced, and can write to the log.
    """
    name: str

    def on_step(self, tick: int, registry: BodyRegistry, log: "SimulationLog") -> None:
        ...


@dataclass
class SimulationLog:
    """
    Stores outputs from a simulation run.
    Keep it simple and serializable.
    """
    # Positions: body name -> list of (tick, display-frame position)
    body_positions: Dict[str, List[Tuple[int, Vector3]]] = field(default_factory=dict)

    # Simulated calendar date (JD) after each tick
    dates_jd: List[float] = field(default_factory=list)

    def record_position(self, name: str, tick: int, position: Vector3) -> None:
        self.body_positions.setdefault(name, []).append((tick, position))


@dataclass
class Engine:
    """
    Fixed-tick orrery engine.
    Every tick advances each body once, in registry order, by the tick's sim speed.
    Deterministic replay: given same registry + speeds + tick count => same output.
    """
    sim_speed: float = 1.0
    systems: List[System] = field(default_factory=list)
    max_calendar_step_days: float = MAX_CALENDAR_STEP_DAYS

    def run(
        self,
        registry: BodyRegistry,
        n_ticks: int,
        start_date: Optional[datetime] = None,
        speed_schedule: Optional[Callable[[int], float]] = None,
    ) -> SimulationLog:
        if n_ticks < 0:
            raise ValueError("n_ticks must be non-negative.")
        if not math.isfinite(self.sim_speed):
            raise ValueError("sim_speed must be finite.")

        if start_date is None:
            start_date = datetime.now(timezone.utc)
        calendar = SimulatedCalendar(start_date, max_step_days=self.max_calendar_step_days)
        log = SimulationLog()
        bodies = registry.body_list()

        logger.info("Running '%s': %d bodies, %d ticks", registry.name, len(bodies), n_ticks)

        for tick in range(n_ticks):
            speed = speed_schedule(tick) if speed_schedule is not None else self.sim_speed

            # Registry order puts parents before satellites
            for body in bodies:
                body.advance(speed)

            calendar.advance(speed)
            log.dates_jd.append(calendar.julian_date)

            for sys in self.systems:
                sys.on_step(tick, registry, log)

        logger.debug("Run finished at %s", calendar.current.isoformat())
        return log
