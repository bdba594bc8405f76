from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import plotly.graph_objects as go

from constants import (
    BAR_COLOR,
    DEFAULT_MAP_CENTER,
    DEFAULT_MAP_ZOOM,
    FOCUS_ZOOM,
    RECORD_ZOOM,
)
from models import Record


@dataclass(frozen=True)
class Marker:
    label: str
    description: str
    value: float
    lat: float
    lon: float


@dataclass
class CityView:
    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)
    markers: List[Marker] = field(default_factory=list)
    # None keeps the map wherever it currently is.
    center: Optional[Tuple[float, float]] = None
    zoom: Optional[int] = None


def project_view(
    records: Iterable[Record],
    focus: Optional[Tuple[float, float]] = None,
    *,
    color: str = BAR_COLOR,
) -> CityView:
    view = CityView()
    for r in records:
        view.labels.append(r.name)
        view.values.append(r.value)
        view.colors.append(color)
        loc = r.location
        if loc is not None:
            view.markers.append(Marker(r.name, r.description, r.value, loc[0], loc[1]))

    if view.markers:
        first = view.markers[0]
        view.center, view.zoom = (first.lat, first.lon), RECORD_ZOOM
    elif focus is not None:
        view.center, view.zoom = focus, FOCUS_ZOOM
    return view


def build_sensor_chart(view: CityView, *, dark: bool = False, height: int = 420) -> go.Figure:
    fig = go.Figure(
        go.Bar(
            x=view.labels,
            y=view.values,
            name="Sensor Values",
            marker=dict(color=view.colors),
        )
    )
    fig.update_layout(
        template="plotly_dark" if dark else "simple_white",
        height=height,
        margin=dict(l=40, r=20, t=40, b=40),
        xaxis_title="Sensor",
        yaxis_title="Value",
        showlegend=False,
    )
    return fig


def build_sensor_map(
    view: CityView,
    *,
    previous_center: Tuple[float, float] = DEFAULT_MAP_CENTER,
    previous_zoom: int = DEFAULT_MAP_ZOOM,
    height: int = 420,
) -> go.Figure:
    fig = go.Figure(
        go.Scattermap(
            lat=[m.lat for m in view.markers],
            lon=[m.lon for m in view.markers],
            mode="markers",
            marker=dict(size=14, color="#1976d2"),
            text=[m.label for m in view.markers],
            customdata=[[m.description, m.value] for m in view.markers],
            hovertemplate="<b>%{text}</b><br>%{customdata[0]}<br>Value: %{customdata[1]}<extra></extra>",
            name="Sensors",
        )
    )
    center = view.center or previous_center
    zoom = view.zoom if view.center is not None and view.zoom is not None else previous_zoom
    fig.update_layout(
        map=dict(style="open-street-map", center=dict(lat=center[0], lon=center[1]), zoom=zoom),
        height=height,
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
    )
    return fig
