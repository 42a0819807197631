"""
Visualization module: arc geometry, colours, breadcrumbs, interaction and
the plotly drawing layer.
"""

from .arc_geometry import ArcSpec, wedge, default_opacity, arc_path, arc_centroid
from .colors import ColorMode, ColorAssigner
from .breadcrumbs import BreadcrumbTrail, breadcrumb_width, breadcrumb_points
from .sunburst_chart import SunburstChart, RenderContext, chart_radius
from .interaction import InteractionController, InteractionSink, HoverState
from .plotly_export import build_sunburst_figure

__all__ = [
    'ArcSpec',
    'wedge',
    'default_opacity',
    'arc_path',
    'arc_centroid',
    'ColorMode',
    'ColorAssigner',
    'BreadcrumbTrail',
    'breadcrumb_width',
    'breadcrumb_points',
    'SunburstChart',
    'RenderContext',
    'chart_radius',
    'InteractionController',
    'InteractionSink',
    'HoverState',
    'build_sunburst_figure',
]
