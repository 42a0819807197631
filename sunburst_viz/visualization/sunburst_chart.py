"""
Sunburst render pass.

``SunburstChart.update`` runs the whole pipeline for one data/config change
as a single synchronous pass::

    rows -> build_tree -> aggregate_values -> partition_layout
         -> wedge() + ColorAssigner + default_opacity -> RenderContext

The previous ``RenderContext`` (if any) is cleared before the new pass
starts, so a stale tree is never visible next to a fresh one.  The context
is returned to the caller rather than kept on the chart, so nothing
outlives the pass that produced it unless the caller holds on to it.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..core.config import (
    CENTER_FONT_DIVISOR,
    CHART_MARGIN,
    DEFAULT_CHART_HEIGHT,
    DEFAULT_CHART_WIDTH,
    SunburstConfig,
)
from ..core.utils import format_value
from ..hierarchy import aggregate_values, build_tree, partition_layout
from ..models.data_models import HierarchyTree, Node, Row, Wedge
from .arc_geometry import arc_path, default_opacity, wedge
from .breadcrumbs import BreadcrumbTrail
from .colors import ColorAssigner, ColorMode

logger = logging.getLogger(__name__)


@dataclass
class RenderContext:
    """
    Everything produced by one render pass.

    Attributes:
        tree: The hierarchy, laid out.
        wedges: One wedge per node, indexed like ``tree.nodes``.
        colors: The pass's colour scale.
        trail: Breadcrumb state, starts hidden and empty.
        config: Options the pass was rendered with.
        total: Sum of every input row's measure (percent denominator).
        width, height, radius: Chart geometry in pixels.
        value_formatter: ``format(value) -> str`` for labels.
        center_label: Current center text.
    """
    tree: HierarchyTree
    wedges: List[Wedge]
    colors: ColorAssigner
    trail: BreadcrumbTrail
    config: SunburstConfig
    total: float
    width: float
    height: float
    radius: float
    value_formatter: Callable[[float], str]
    center_label: str = ''
    cleared: bool = field(default=False, repr=False)

    @property
    def root(self) -> Node:
        return self.tree.root

    @property
    def center_font_size(self) -> float:
        return min(self.width, self.height) / CENTER_FONT_DIVISOR

    def node_for(self, wedge_: Wedge) -> Node:
        return self.tree[wedge_.node_index]

    def wedge_for(self, node: Node) -> Wedge:
        return self.wedges[node.index]

    def clear(self) -> None:
        """Tear down the drawn state before the next pass replaces it."""
        self.wedges = []
        self.trail.clear()
        self.center_label = ''
        self.cleared = True


def chart_radius(width: float, height: float) -> float:
    return min(width, height) / 2 - CHART_MARGIN


class SunburstChart:
    """Renders rows into a ``RenderContext``."""

    def __init__(self, config: Optional[SunburstConfig] = None):
        self.config = config or SunburstConfig()

    def update(
        self,
        rows: Sequence[Row],
        width: float = DEFAULT_CHART_WIDTH,
        height: float = DEFAULT_CHART_HEIGHT,
        context: Optional[RenderContext] = None,
        measure_format: Optional[str] = None,
    ) -> RenderContext:
        """
        Run one render pass.

        Args:
            rows: Validated input rows.
            width, height: Container size in pixels.
            context: The previous pass's context; it is cleared first.
            measure_format: The measure's own Excel-style format, used when
                the config has no override.

        Returns:
            A fresh ``RenderContext``.
        """
        if context is not None:
            context.clear()

        config = self.config
        radius = chart_radius(width, height)
        value_format = config.resolve_value_format(measure_format)

        def value_formatter(value):
            return format_value(value, value_format)

        tree = build_tree(rows, include_null_branches=config.show_null_points)
        aggregate_values(tree)
        partition_layout(tree, radius)

        colors = ColorAssigner(config.color_range, ColorMode(config.color_by))
        # Colour slots are handed out level by level, then wedges follow arena order
        drawn = {node.index: self._wedge(node, colors) for node in tree.breadth_first()}
        wedges = [drawn[i] for i in range(len(tree))]

        trail = BreadcrumbTrail(
            color_for=colors.color_for,
            value_formatter=value_formatter,
            show_percent=config.show_percent,
        )
        total = float(sum(row.measure for row in rows))

        logger.info(
            f"[Render] {len(rows)} rows -> {len(tree)} nodes, "
            f"{tree.max_depth} ring(s), total {value_formatter(total)}"
        )
        return RenderContext(
            tree=tree,
            wedges=wedges,
            colors=colors,
            trail=trail,
            config=config,
            total=total,
            width=width,
            height=height,
            radius=radius,
            value_formatter=value_formatter,
        )

    @staticmethod
    def _wedge(node: Node, colors: ColorAssigner) -> Wedge:
        spec = wedge(node)
        return Wedge(
            node_index=node.index,
            name=node.name,
            depth=node.depth,
            angle_start=spec.start_angle,
            angle_end=spec.end_angle,
            radius_inner=spec.inner_radius,
            radius_outer=spec.outer_radius,
            fill_color=colors.color_for(node),
            fill_opacity=default_opacity(node.depth),
            path=arc_path(spec),
        )
