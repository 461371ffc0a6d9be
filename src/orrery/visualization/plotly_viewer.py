from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import plotly.graph_objects as go

from orrery.core.frames import Vector3
from orrery.simulation.engine import SimulationLog
from orrery.simulation.registry import BodyRegistry

logger = logging.getLogger(__name__)


def _split_xyz(points: List[Vector3]):
    return [p[0] for p in points], [p[1] for p in points], [p[2] for p in points]


def _orbit_traces(registry: BodyRegistry, orbit_stride: int) -> List[go.Scatter3d]:
    traces = []
    for body in registry.body_list():
        orbit = body.trace_full_orbit()
        if not orbit:
            continue
        # Keep the closing sample so the line meets itself
        pts = orbit[::max(1, orbit_stride)] + [orbit[-1]]
        xs, ys, zs = _split_xyz(pts)
        traces.append(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode="lines",
            name=f"{body.name} orbit",
            line=dict(color=body.color, width=1) if body.color else dict(width=1),
            hoverinfo="skip",
        ))
    return traces


def build_scene_figure(
    registry: BodyRegistry,
    log: Optional[SimulationLog] = None,
    orbit_stride: int = 20,
    title: str = "Orrery",
) -> go.Figure:
    """
    Static 3D scene:
      - Orbit polyline for each body
      - Current position marker for each body (last logged position if a log is given)
    """
    fig = go.Figure()
    for trace in _orbit_traces(registry, orbit_stride):
        fig.add_trace(trace)

    for body in registry.body_list():
        pos = body.position
        if log is not None and log.body_positions.get(body.name):
            pos = log.body_positions[body.name][-1][1]
        fig.add_trace(go.Scatter3d(
            x=[pos[0]], y=[pos[1]], z=[pos[2]],
            mode="markers",
            name=body.name,
            marker=dict(size=8 if body.is_star else 4, color=body.color),
        ))

    fig.update_layout(
        title=title,
        scene=dict(xaxis_title="X", yaxis_title="Y (up)", zaxis_title="Z", aspectmode="data"),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
    )
    return fig


def render_static_scene(
    registry: BodyRegistry,
    log: Optional[SimulationLog] = None,
    out_html: str = "out/orrery_scene.html",
    orbit_stride: int = 20,
) -> str:
    fig = build_scene_figure(registry, log, orbit_stride=orbit_stride)
    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    logger.info("Wrote static scene to %s", out_html)
    return out_html


def build_playback_figure(
    registry: BodyRegistry,
    log: SimulationLog,
    frame_stride: int = 1,
    orbit_stride: int = 20,
) -> go.Figure:
    """
    Animated playback of every logged body over the orbit polylines.
    Assumes all bodies were logged at the same ticks.
    """
    names = [b.name for b in registry.body_list() if log.body_positions.get(b.name)]
    if not names:
        raise ValueError("No body positions found in log.")

    ref = log.body_positions[names[0]]
    idxs = list(range(0, len(ref), max(1, frame_stride)))

    pos: Dict[str, List[Vector3]] = {}
    for name in names:
        samples = log.body_positions[name]
        if len(samples) != len(ref):
            raise ValueError(f"Body {name} has {len(samples)} samples, expected {len(ref)}.")
        pos[name] = [samples[i][1] for i in idxs]

    fig = go.Figure()
    for trace in _orbit_traces(registry, orbit_stride):
        fig.add_trace(trace)

    n_static = len(fig.data)
    colors = {b.name: b.color for b in registry.body_list()}
    for name in names:
        p0 = pos[name][0]
        fig.add_trace(go.Scatter3d(
            x=[p0[0]], y=[p0[1]], z=[p0[2]],
            mode="markers",
            name=name,
            marker=dict(size=5, color=colors.get(name)),
        ))
    marker_traces = list(range(n_static, n_static + len(names)))

    frames = []
    for fi in range(len(idxs)):
        frames.append(go.Frame(
            name=str(fi),
            data=[
                go.Scatter3d(x=[pos[n][fi][0]], y=[pos[n][fi][1]], z=[pos[n][fi][2]], mode="markers")
                for n in names
            ],
            traces=marker_traces,
        ))
    fig.frames = frames

    labels = [str(ref[i][0]) for i in idxs]
    fig.update_layout(
        title=f"Orrery playback: {registry.name}",
        scene=dict(xaxis_title="X", yaxis_title="Y (up)", zaxis_title="Z", aspectmode="data"),
        margin=dict(l=0, r=0, t=40, b=0),
        updatemenus=[dict(
            type="buttons",
            showactive=True,
            buttons=[
                dict(label="Play", method="animate",
                     args=[None, {"frame": {"duration": 50, "redraw": True}, "fromcurrent": True}]),
                dict(label="Pause", method="animate",
                     args=[[None], {"frame": {"duration": 0, "redraw": False}, "mode": "immediate"}]),
            ],
        )],
        sliders=[dict(
            steps=[dict(method="animate", args=[[str(fi)], {"mode": "immediate", "frame": {"duration": 0, "redraw": True}}],
                        label=f"tick {labels[fi]}") for fi in range(0, len(idxs), max(1, len(idxs)//20))],
            active=0,
        )],
    )
    return fig


def render_playback(
    registry: BodyRegistry,
    log: SimulationLog,
    out_html: str = "out/orrery_playback.html",
    frame_stride: int = 1,
) -> str:
    fig = build_playback_figure(registry, log, frame_stride=frame_stride)
    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    logger.info("Wrote playback to %s", out_html)
    return out_html
