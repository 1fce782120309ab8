"""Daily deaths per million line chart, rendered to standalone HTML with Plotly."""

from __future__ import annotations

from pathlib import Path

import plotly.graph_objects as go
from plotly.colors import hex_to_rgb, qualitative

from pandemia.errors import RenderError
from pandemia.models import AlignedData, Settings

TITLE = "Pandemia cu și fără Valuri"
SUBTITLE = "Decese zilnice la 1 milion de locuitori"
AREA_OPACITY = 0.2
PALETTE = qualitative.Plotly


def _rgba(hex_color: str, alpha: float) -> str:
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r}, {g}, {b}, {alpha})"


def _add_country(
    fig: go.Figure,
    days: list[str],
    code: str,
    name: str,
    values: list[float],
    color: str,
) -> None:
    fig.add_trace(
        go.Scatter(
            x=days,
            y=values,
            mode="lines",
            name=name,
            legendgroup=code,
            line=dict(color=color, shape="linear"),
            fill="tozeroy",
            fillcolor=_rgba(color, AREA_OPACITY),
            hovertemplate=f"{name}: %{{y:.3f}}<extra></extra>",
        )
    )
    if not values:
        return

    avg = sum(values) / len(values)
    fig.add_trace(
        go.Scatter(
            x=[days[0], days[-1]],
            y=[avg, avg],
            mode="lines",
            name=f"{name} Average",
            legendgroup=code,
            showlegend=False,
            line=dict(color=color, dash="dot", width=1),
            hovertemplate=f"{name} Average: {avg:.3f}<extra></extra>",
        )
    )

    peak = max(range(len(values)), key=values.__getitem__)
    fig.add_trace(
        go.Scatter(
            x=[days[peak]],
            y=[values[peak]],
            mode="markers+text",
            name=f"{name} Max",
            legendgroup=code,
            showlegend=False,
            marker=dict(color=color, size=9),
            text=[f"{name}: {values[peak]:.2f}"],
            textposition="top center",
            hoverinfo="skip",
        )
    )


def build_chart(aligned: AlignedData, settings: Settings) -> go.Figure:
    fig = go.Figure()
    for i, (code, values) in enumerate(aligned.values.items()):
        color = PALETTE[i % len(PALETTE)]
        _add_country(fig, aligned.days, code, settings.name_for(code), values, color)

    fig.update_layout(
        title=dict(text=f"{TITLE}<br><sup>{SUBTITLE}</sup>"),
        showlegend=True,
        hovermode="x unified",
        template="plotly_white",
    )
    fig.update_xaxes(type="category", rangeslider=dict(visible=True))
    return fig


def render_chart(aligned: AlignedData, settings: Settings) -> Path:
    """Write the chart as a self-contained HTML file, replacing any previous one."""
    path = settings.chart_file
    fig = build_chart(aligned, settings)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.write_html(str(path), include_plotlyjs=True, full_html=True)
    except (OSError, ValueError) as exc:
        raise RenderError(f"error writing chart file {path}: {exc}") from exc
    return path
