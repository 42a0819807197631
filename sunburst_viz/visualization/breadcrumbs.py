"""
Breadcrumb Trail - the ancestor path of the hovered wedge.

The trail keeps the segments it currently displays and reconciles them
against the hovered node's ancestor chain on every ``show``:

  1. Segments whose ``(name, depth)`` key is not on the chain are removed.
  2. Chain entries without a segment get a new one.  Reused segments have
     their fill colour refreshed from the current ancestor.
  3. Segments are ordered like the chain and repositioned left to right:
     ``x_offset[i] = sum(width[j] + gap for j < i)``.

``hide`` only flips the visibility flag.  Segments stay in place until the
next ``show`` reconciles them.

Segment geometry
----------------
Each segment is a chevron::

    0,0 ---------- w,0
     \\                 \\
      t,h/2            w+t,h/2
     /                 /
    0,h ---------- w,h

The first segment has a flat left edge (no notch vertex).
"""

import logging
from typing import Callable, Dict, List, Optional

from ..core.config import (
    BREADCRUMB_CHAR_WIDTH,
    BREADCRUMB_END_LABEL_PADDING,
    BREADCRUMB_GAP,
    BREADCRUMB_HEIGHT,
    BREADCRUMB_MIN_WIDTH,
    BREADCRUMB_TIP,
)
from ..core.utils import format_percent, format_value
from ..models.data_models import BreadcrumbSegment, Node

logger = logging.getLogger(__name__)


def breadcrumb_width(label: str) -> float:
    return max(len(label) * BREADCRUMB_CHAR_WIDTH, BREADCRUMB_MIN_WIDTH)


def breadcrumb_points(width: float, index: int) -> str:
    """SVG polygon points of a chevron segment."""
    h, t = BREADCRUMB_HEIGHT, BREADCRUMB_TIP
    points = [
        "0,0",
        f"{width:g},0",
        f"{width + t:g},{h / 2:g}",
        f"{width:g},{h:g}",
        f"0,{h:g}",
    ]
    if index > 0:
        points.append(f"{t:g},{h / 2:g}")
    return " ".join(points)


class BreadcrumbTrail:
    """
    Reconciled breadcrumb state for the hovered node.

    Attributes:
        segments: Displayed segments, left to right.
        visible: Whether the trail is shown.
        end_label: Formatted value of the hovered node.
        end_label_x: Anchor of the end label (text is centred on it).
        center_label: Percent-of-total text, or '' when disabled.
    """

    def __init__(
        self,
        color_for: Callable[[Node], str],
        value_formatter: Optional[Callable[[float], str]] = None,
        show_percent: bool = True,
    ):
        self.color_for = color_for
        self.value_formatter = value_formatter or format_value
        self.show_percent = show_percent

        self.segments: List[BreadcrumbSegment] = []
        self.visible = False
        self.end_label = ''
        self.end_label_x = 0.0
        self.center_label = ''

    def show(self, node: Node, total_value: float) -> List[BreadcrumbSegment]:
        """Reconcile the trail with ``node``'s ancestor chain and make it visible."""
        chain = node.ancestor_chain()

        current: Dict = {segment.key: segment for segment in self.segments}
        reconciled = []
        created = 0
        for ancestor in chain:
            key = ((type(ancestor.name), ancestor.name), ancestor.depth)
            segment = current.pop(key, None)
            if segment is None:
                segment = self._new_segment(ancestor)
                created += 1
            else:
                # Colour follows the current ancestor
                segment.fill_color = self.color_for(ancestor)
            reconciled.append(segment)

        logger.debug(
            f"[Breadcrumbs] +{created} -{len(current)} segments for depth {node.depth}"
        )
        self.segments = reconciled
        self._layout()

        self.end_label = self.value_formatter(node.value)
        if self.show_percent:
            self.center_label = format_percent(node.value, total_value)
        self.visible = True
        return self.segments

    def hide(self) -> None:
        self.visible = False

    def clear(self) -> None:
        """Drop every segment (used when the chart is re-rendered)."""
        self.segments = []
        self.visible = False
        self.end_label = ''
        self.end_label_x = 0.0
        self.center_label = ''

    @property
    def total_width(self) -> float:
        if not self.segments:
            return 0.0
        last = self.segments[-1]
        return last.x_offset + last.width

    def _new_segment(self, node: Node) -> BreadcrumbSegment:
        label = node.label
        return BreadcrumbSegment(
            name=node.name,
            depth=node.depth,
            label=label,
            width=breadcrumb_width(label),
            fill_color=self.color_for(node),
        )

    def _layout(self) -> None:
        offset = 0.0
        for i, segment in enumerate(self.segments):
            segment.x_offset = offset
            segment.points = breadcrumb_points(segment.width, i)
            offset += segment.width + BREADCRUMB_GAP

        if self.segments:
            self.end_label_x = self.total_width + BREADCRUMB_GAP + BREADCRUMB_END_LABEL_PADDING
        else:
            self.end_label_x = 0.0
