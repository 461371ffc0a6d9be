from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from orrery.simulation.engine import SimulationLog
from orrery.simulation.registry import BodyRegistry

logger = logging.getLogger(__name__)


def export_log_to_json(log: SimulationLog, out_path: str = "out/orrery_log.json") -> str:
    """
    Export minimal playback data:
      {
        "body_positions": {
          "Earth": [{"tick":0,"r":[x,y,z]}, ...],
          ...
        },
        "dates_jd": [...]
      }
    """
    data: Dict[str, Any] = {"body_positions": {}, "dates_jd": list(log.dates_jd)}

    for name, samples in log.body_positions.items():
        data["body_positions"][name] = [{"tick": t, "r": [r[0], r[1], r[2]]} for (t, r) in samples]

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    return out_path


def export_playback_bundle(
    registry: BodyRegistry,
    log: SimulationLog,
    out_path: str = "out/orrery_bundle.json",
    orbit_stride: int = 10,
) -> str:
    """
    Export a bundle for an external 3D viewer:
      - ticks / dates_jd: global time vector
      - positions: dense per-body arrays aligned to ticks
      - bodies: metadata (kind, parent, radius, color)
      - orbits: decimated orbit polylines

    JSON shape:
    {
      "ticks": [0,1,2,...],
      "dates_jd": [...],
      "positions": { "Earth": [[x,y,z], ...], ... },
      "bodies": { "Earth": {"kind": "planet", "parent": null, "radius_km": ..., "color": "..."}, ...},
      "orbits": { "Earth": [[x,y,z], ...], ... }
    }
    """
    names = [b.name for b in registry.body_list() if log.body_positions.get(b.name)]
    if not names:
        raise ValueError("No body positions found in log.")

    ref_samples = log.body_positions[names[0]]
    ticks: List[int] = [t for (t, _r) in ref_samples]

    data: Dict[str, Any] = {
        "ticks": ticks,
        "dates_jd": list(log.dates_jd),
        "positions": {},
        "bodies": {},
        "orbits": {},
    }

    for name in names:
        samples = log.body_positions[name]
        if len(samples) != len(ticks):
            raise ValueError(f"{name} samples length mismatch.")
        data["positions"][name] = [[r[0], r[1], r[2]] for (_t, r) in samples]

    for body in registry.body_list():
        data["bodies"][body.name] = {
            "kind": body.kind.value,
            "parent": body.parent.name if body.parent is not None else None,
            "radius_km": body.radius_km,
            "color": body.color,
        }
        orbit = body.trace_full_orbit()
        if orbit:
            data["orbits"][body.name] = [[p[0], p[1], p[2]] for p in orbit[::max(1, orbit_stride)]]

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    logger.info("Exported %d bodies x %d ticks to %s", len(names), len(ticks), out_path)
    return out_path
