from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from orrery.core.catalog import BodyKind, OrbitalElementSet
from orrery.core.config import OrreryConfig
from orrery.core.constants import J2000_JD
from orrery.objects.body import OrbitalBody

logger = logging.getLogger(__name__)


@dataclass
class BodyRegistry:
    """
    Container for all bodies of one simulation.
    Keep this pure: just data + lookup, no stepping logic.

    Bodies are kept in insertion order, which is also the update order.
    A satellite can only be added after its parent.
    """
    name: str
    bodies: Dict[str, OrbitalBody] = field(default_factory=dict)

    def add_body(self, body: OrbitalBody) -> None:
        if body.name in self.bodies:
            raise ValueError(f"Duplicate body name: {body.name}")
        if body.parent is not None and self.bodies.get(body.parent.name) is not body.parent:
            raise ValueError(f"Parent '{body.parent.name}' of '{body.name}' must be added first.")
        self.bodies[body.name] = body

    def get(self, name: str) -> Optional[OrbitalBody]:
        return self.bodies.get(name)

    def body_list(self) -> List[OrbitalBody]:
        return list(self.bodies.values())

    def __len__(self) -> int:
        return len(self.bodies)

    def __contains__(self, name: object) -> bool:
        return name in self.bodies

    @classmethod
    def from_element_sets(
        cls,
        name: str,
        element_sets: Iterable[OrbitalElementSet],
        config: Optional[OrreryConfig] = None,
        start_jd: float = J2000_JD,
    ) -> "BodyRegistry":
        """
        Build a registry from catalog entries.

        Parents are resolved by name once, here. Entries with invalid
        elements, an unknown parent or a duplicate name are left out of the
        active set and logged.
        """
        config = config or OrreryConfig()
        registry = cls(name=name)
        skipped = 0

        for es in element_sets:
            parent = None
            if es.kind is BodyKind.SATELLITE:
                parent = registry.get(es.parent) if es.parent else None
                if parent is None:
                    logger.warning("Skipping '%s': parent '%s' not in registry", es.name, es.parent)
                    skipped += 1
                    continue
            try:
                body = OrbitalBody.from_element_set(es, parent=parent, config=config, start_jd=start_jd)
                registry.add_body(body)
            except ValueError as e:
                logger.warning("Skipping '%s': %s", es.name, e)
                skipped += 1

        logger.info("Registry '%s': %d bodies active, %d skipped", name, len(registry), skipped)
        return registry
