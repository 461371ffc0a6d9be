"""
Run the orrery for a number of ticks and write the scene, playback and log.

    python -m orrery.scripts.orrery_run --config config/orrery.yaml
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import List, Optional

from orrery.core.catalog import OrbitalElementSet, load_neo_csv
from orrery.core.config import OrreryConfig, load_config
from orrery.core.timeutil import datetime_to_julian_date, julian_centuries_since_j2000, sim_speed_from_slider
from orrery.objects.solar_system import solar_system_element_sets
from orrery.simulation.engine import Engine, SimulationLog
from orrery.simulation.registry import BodyRegistry
from orrery.simulation.systems.state_recorder import StateRecorderSystem
from orrery.visualization.export_log import export_playback_bundle
from orrery.visualization.plotly_viewer import render_playback, render_static_scene

logger = logging.getLogger("orrery")


def build_registry(config: OrreryConfig) -> BodyRegistry:
    start_jd = datetime_to_julian_date(config.start_date)
    logger.info("Start JD %.2f (T = %.4f centuries from J2000)", start_jd, julian_centuries_since_j2000(start_jd))
    element_sets: List[OrbitalElementSet] = solar_system_element_sets()
    if config.neo_csv:
        element_sets.extend(load_neo_csv(config.neo_csv))

    registry = BodyRegistry.from_element_sets("Solar System", element_sets, config=config, start_jd=start_jd)
    if config.sync_to_start_date:
        for body in registry.body_list():
            body.sync_to_date(start_jd)
    return registry


def run(config: OrreryConfig, render: bool = True) -> SimulationLog:
    registry = build_registry(config)
    engine = Engine(
        sim_speed=config.sim_speed,
        systems=[StateRecorderSystem()],
        max_calendar_step_days=config.max_calendar_step_days,
    )
    log = engine.run(registry, n_ticks=config.n_ticks, start_date=config.start_date)

    out_dir = Path(config.out_dir)
    export_playback_bundle(registry, log, out_path=str(out_dir / "orrery_bundle.json"))
    if render:
        render_static_scene(registry, log, out_html=str(out_dir / "orrery_scene.html"))
        render_playback(registry, log, out_html=str(out_dir / "orrery_playback.html"),
                        frame_stride=max(1, config.n_ticks // 200))
    return log


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Keplerian orrery of the Sun, planets, Moon and NEOs.")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--slider", type=float, default=None,
                        help="time-scale slider position 0-100 (50 = 1 day per tick), overrides sim_speed")
    parser.add_argument("--no-render", action="store_true", help="only export the JSON bundle")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.slider is not None:
        config = dataclasses.replace(config, sim_speed=sim_speed_from_slider(args.slider))
    run(config, render=not args.no_render)
    logger.info("Done. Outputs in %s", config.out_dir)


if __name__ == "__main__":
    main()
