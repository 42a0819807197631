"""
Interaction Controller - pointer state machine for a rendered sunburst.

States
------
::

    IDLE --pointer_enter(n)--> HOVERING(n)
    HOVERING(m) --pointer_enter(n)--> HOVERING(n)      (n is not m)
    HOVERING(n) --pointer_enter(n)--> HOVERING(n)      (no-op)
    HOVERING(n) --pointer_leave--> IDLE

``click`` is not a transition: it only emits a drill request.

Side effects
------------
The controller decides *what* changes; an ``InteractionSink`` decides how
it is drawn.  The controller also keeps ``RenderContext.wedges`` and
``RenderContext.center_label`` current so a sink can simply re-read the
context.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..core.config import HIGHLIGHT_DIM_OPACITY, HIGHLIGHT_FULL_OPACITY
from ..models.data_models import DrillRequest, Node
from .arc_geometry import default_opacity
from .breadcrumbs import BreadcrumbTrail
from .sunburst_chart import RenderContext

logger = logging.getLogger(__name__)


class HoverState(Enum):
    IDLE = "idle"
    HOVERING = "hovering"


class InteractionSink:
    """
    Receiver of interaction side effects.

    Every hook is a no-op here; drawing layers override the ones they need.
    """

    def update_breadcrumbs(self, trail: BreadcrumbTrail) -> None:
        pass

    def set_center_label(self, text: str) -> None:
        pass

    def set_opacities(self, opacities: Dict[int, float]) -> None:
        """Opacity per node index."""
        pass

    def request_drill(self, links: List[dict], position: Tuple[float, float]) -> None:
        pass


class InteractionController:
    """Ties hover highlighting, the breadcrumb trail and drill requests together."""

    def __init__(self, context: RenderContext, sink: Optional[InteractionSink] = None):
        self.context = context
        self.sink = sink or InteractionSink()
        self.state = HoverState.IDLE
        self.hovered: Optional[Node] = None

    def pointer_enter(self, node: Node) -> None:
        if self.state is HoverState.HOVERING and self.hovered is node:
            return

        context = self.context
        trail = context.trail
        trail.show(node, context.total)
        self.sink.update_breadcrumbs(trail)

        if context.config.show_percent:
            context.center_label = trail.center_label
            self.sink.set_center_label(context.center_label)

        highlighted = {n.index for n in node.ancestors()}
        self._apply_opacities({
            w.node_index: HIGHLIGHT_FULL_OPACITY if w.node_index in highlighted else HIGHLIGHT_DIM_OPACITY
            for w in context.wedges
        })

        self.state = HoverState.HOVERING
        self.hovered = node
        logger.debug(f"[Interaction] Hovering {node.label!r} at depth {node.depth}")

    def pointer_leave(self) -> None:
        if self.state is HoverState.IDLE:
            return

        context = self.context
        context.trail.hide()
        self.sink.update_breadcrumbs(context.trail)

        context.center_label = ''
        self.sink.set_center_label('')

        self._apply_opacities({w.node_index: default_opacity(w.depth) for w in context.wedges})

        self.state = HoverState.IDLE
        self.hovered = None

    def click(self, node: Node, position: Tuple[float, float]) -> DrillRequest:
        """Emit a drill request for ``node``; interior nodes carry no links."""
        request = DrillRequest(links=node.links, position=tuple(position))
        logger.debug(
            f"[Interaction] Drill on {node.label!r} with {len(request.links)} link(s)"
        )
        self.sink.request_drill(request.links, request.position)
        return request

    def _apply_opacities(self, opacities: Dict[int, float]) -> None:
        for w in self.context.wedges:
            w.fill_opacity = opacities[w.node_index]
        self.sink.set_opacities(opacities)
