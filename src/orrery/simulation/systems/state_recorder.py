from __future__ import annotations

from dataclasses import dataclass

from orrery.simulation.registry import BodyRegistry
from orrery.simulation.engine import SimulationLog


@dataclass
class StateRecorderSystem:
    name: str = "state_recorder"

    def on_step(self, tick: int, registry: BodyRegistry, log: SimulationLog) -> None:
        for body in registry.body_list():
            log.record_position(body.name, tick, body.position)
