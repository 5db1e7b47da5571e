"""Plotly chart builders for the Society Parking Console."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List

from engine.occupancy import FloorOccupancy
from models.building import Floor


def occupancy_donut(used: int, total: int, title: str = "Slot Occupancy") -> go.Figure:
    """Donut chart of assigned vs free slots."""
    free = max(0, total - used)
    fig = go.Figure(data=[go.Pie(
        labels=["Assigned", "Free"],
        values=[used, free],
        hole=0.6,
        marker_colors=["#E8734A", "#3CB371"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=300,
        showlegend=False,
        annotations=[dict(text=f"{used}/{total}", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig


def floor_occupancy_bar(
    floors: List[Floor],
    occupancy: List[FloorOccupancy],
    title: str = "Occupancy by Parking Floor",
) -> go.Figure:
    """Stacked horizontal bar of assigned and free slots per floor."""
    names = {f.id: f.floor_name for f in floors}
    df = pd.DataFrame([{
        "floor": names.get(o.floor_id, str(o.floor_id)),
        "Assigned": o.used,
        "Free": o.free,
    } for o in occupancy], columns=["floor", "Assigned", "Free"])

    fig = px.bar(
        df, x=["Assigned", "Free"], y="floor",
        orientation="h",
        title=title,
        labels={"value": "Slots", "floor": "Floor", "variable": ""},
        color_discrete_map={"Assigned": "#E8734A", "Free": "#3CB371"},
    )
    fig.update_layout(barmode="stack", height=max(250, len(df) * 40), yaxis_type="category")
    return fig
