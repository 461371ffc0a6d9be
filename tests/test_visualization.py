import json
from datetime import datetime, timezone

import pytest

from orrery.objects.solar_system import solar_system_element_sets
from orrery.simulation.engine import Engine, SimulationLog
from orrery.simulation.registry import BodyRegistry
from orrery.simulation.systems.state_recorder import StateRecorderSystem
from orrery.visualization.export_log import export_log_to_json, export_playback_bundle
from orrery.visualization.plotly_viewer import (
    build_playback_figure,
    build_scene_figure,
    render_static_scene,
)

J2000 = datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def inner_system():
    sets = [s for s in solar_system_element_sets() if s.name in ("Sun", "Earth", "Moon", "Mars")]
    registry = BodyRegistry.from_element_sets("Inner", sets)
    log = Engine(sim_speed=10.0, systems=[StateRecorderSystem()]).run(registry, n_ticks=6, start_date=J2000)
    return registry, log


class TestPlotlyViewer:
    def test_scene_has_orbit_and_marker_per_body(self, inner_system):
        registry, log = inner_system
        fig = build_scene_figure(registry, log)
        names = [t.name for t in fig.data]
        # The star has a marker but no orbit line
        assert "Sun orbit" not in names
        assert {"Earth orbit", "Moon orbit", "Mars orbit"} <= set(names)
        assert {"Sun", "Earth", "Moon", "Mars"} <= set(names)
        assert len(fig.data) == 7

    def test_scene_marker_at_last_logged_position(self, inner_system):
        registry, log = inner_system
        fig = build_scene_figure(registry, log)
        mars = next(t for t in fig.data if t.name == "Mars")
        last = log.body_positions["Mars"][-1][1]
        assert (mars.x[0], mars.y[0], mars.z[0]) == pytest.approx(last)

    def test_playback_frames(self, inner_system):
        registry, log = inner_system
        fig = build_playback_figure(registry, log, frame_stride=2)
        assert len(fig.frames) == 3
        assert len(fig.frames[0].data) == 4

    def test_playback_requires_positions(self, inner_system):
        registry, _log = inner_system
        with pytest.raises(ValueError, match="No body positions found in log"):
            build_playback_figure(registry, SimulationLog())

    def test_render_static_scene_writes_html(self, inner_system, tmp_path):
        registry, log = inner_system
        out = render_static_scene(registry, log, out_html=str(tmp_path / "scene" / "orrery.html"))
        assert (tmp_path / "scene" / "orrery.html").exists()
        assert out.endswith("orrery.html")


class TestExport:
    def test_export_log_to_json(self, inner_system, tmp_path):
        _registry, log = inner_system
        path = export_log_to_json(log, out_path=str(tmp_path / "log.json"))
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert len(data["body_positions"]["Earth"]) == 6
        assert data["body_positions"]["Earth"][0]["tick"] == 0
        assert len(data["dates_jd"]) == 6

    def test_export_playback_bundle(self, inner_system, tmp_path):
        registry, log = inner_system
        path = export_playback_bundle(registry, log, out_path=str(tmp_path / "bundle.json"))
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["ticks"] == [0, 1, 2, 3, 4, 5]
        assert set(data["positions"]) == {"Sun", "Earth", "Moon", "Mars"}
        assert data["bodies"]["Moon"]["parent"] == "Earth"
        assert data["bodies"]["Sun"]["kind"] == "star"
        assert "Sun" not in data["orbits"]
        assert len(data["positions"]["Mars"]) == 6

    def test_export_bundle_requires_positions(self, inner_system, tmp_path):
        registry, _log = inner_system
        with pytest.raises(ValueError, match="No body positions found in log"):
            export_playback_bundle(registry, SimulationLog(), out_path=str(tmp_path / "b.json"))
