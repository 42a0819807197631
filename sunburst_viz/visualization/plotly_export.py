"""
Plotly drawing layer for a rendered sunburst.

Every visible wedge becomes one bar of a ``go.Barpolar`` trace:

    theta  = centre angle of the wedge (degrees)
    width  = angular span (degrees)
    base   = inner radius
    r      = ring thickness (outer - inner)

The polar axis is rotated so that 0 sits at twelve o'clock and runs
clockwise, matching the layout's angle convention.  The root disc is not
drawn.  Breadcrumbs and the center label are added as annotations when the
context has them visible.
"""

import math
import logging
from typing import Optional

import plotly.graph_objects as go

from .sunburst_chart import RenderContext

logger = logging.getLogger(__name__)


def build_sunburst_figure(context: RenderContext, title: Optional[str] = None) -> go.Figure:
    """
    Create a plotly figure from a render context.

    Args:
        context: Output of ``SunburstChart.update`` (optionally after
            interaction, in which case current opacities are used).
        title: Optional chart title.

    Returns:
        go.Figure sized to the context's width/height.
    """
    wedges = [w for w in context.wedges if w.depth > 0]

    theta, width, base, r = [], [], [], []
    colors, opacities, hover, custom = [], [], [], []
    for w in wedges:
        node = context.node_for(w)
        theta.append(math.degrees((w.angle_start + w.angle_end) / 2))
        width.append(math.degrees(w.angle_end - w.angle_start))
        base.append(w.radius_inner)
        r.append(w.radius_outer - w.radius_inner)
        colors.append(w.fill_color)
        opacities.append(w.fill_opacity)
        path = " > ".join(n.label for n in node.ancestor_chain())
        hover.append(f"<b>{path}</b><br>{context.value_formatter(node.value)}")
        custom.append(w.node_index)

    fig = go.Figure(go.Barpolar(
        theta=theta,
        width=width,
        base=base,
        r=r,
        customdata=custom,
        hovertext=hover,
        hoverinfo='text',
        marker=dict(
            color=colors,
            opacity=opacities,
            line=dict(color=wedges[0].stroke if wedges else '#fff', width=0.5),
        ),
    ))

    fig.update_layout(
        width=context.width,
        height=context.height,
        showlegend=False,
        margin=dict(t=40 if title else 10, b=10, l=10, r=10),
        polar=dict(
            bargap=0,
            hole=0,
            radialaxis=dict(visible=False, range=[0, context.radius]),
            angularaxis=dict(visible=False, rotation=90, direction='clockwise'),
        ),
        paper_bgcolor='rgba(0,0,0,0)',
        template='plotly_white',
    )
    if title:
        fig.update_layout(title=title)

    if context.center_label:
        fig.add_annotation(
            text=context.center_label,
            x=0.5, y=0.5, xref='paper', yref='paper',
            showarrow=False,
            font=dict(size=context.center_font_size),
        )

    trail = context.trail
    if trail.visible and trail.segments:
        crumbs = " > ".join(segment.label for segment in trail.segments)
        fig.add_annotation(
            text=f"{crumbs}   <b>{trail.end_label}</b>",
            x=0, y=1, xref='paper', yref='paper',
            xanchor='left', yanchor='bottom',
            showarrow=False,
        )

    logger.info(f"[Render] Plotly figure with {len(wedges)} wedges")
    return fig
