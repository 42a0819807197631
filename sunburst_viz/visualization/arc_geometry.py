"""
Arc geometry for sunburst wedges.

Angles follow the chart convention: 0 at twelve o'clock, increasing
clockwise, in radians.  Screen coordinates have y pointing down.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from ..core.config import MIN_FILL_OPACITY, OPACITY_STEP_PER_DEPTH
from ..models.data_models import Node


@dataclass(frozen=True)
class ArcSpec:
    """Intervals of one wedge, directly consumable by an arc primitive."""
    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float


def wedge(node: Node) -> ArcSpec:
    """Map a laid-out node to its wedge."""
    return ArcSpec(
        start_angle=node.angle_start,
        end_angle=node.angle_end,
        inner_radius=node.radius_inner,
        outer_radius=node.radius_outer,
    )


def default_opacity(depth: int) -> float:
    """Resting opacity: fades 0.15 per ring, never below MIN_FILL_OPACITY."""
    return max(1.0 - depth * OPACITY_STEP_PER_DEPTH, MIN_FILL_OPACITY)


def polar_to_cartesian(angle: float, radius: float) -> Tuple[float, float]:
    return radius * math.sin(angle), -radius * math.cos(angle)


def arc_centroid(spec: ArcSpec) -> Tuple[float, float]:
    """Midpoint of the wedge: mean angle at mean radius."""
    angle = (spec.start_angle + spec.end_angle) / 2
    return polar_to_cartesian(angle, (spec.inner_radius + spec.outer_radius) / 2)


def arc_path(spec: ArcSpec) -> str:
    """SVG path data for the wedge, centred on the origin."""
    span = spec.end_angle - spec.start_angle
    if span <= 0 or spec.outer_radius <= 0:
        return ''

    r0, r1 = spec.inner_radius, spec.outer_radius

    # A full ring cannot be drawn as a single arc; split it in two halves
    if span >= 2 * math.pi - 1e-9:
        mid = spec.start_angle + math.pi
        x0, y0 = polar_to_cartesian(spec.start_angle, r1)
        x1, y1 = polar_to_cartesian(mid, r1)
        path = (
            f"M{x0:.3f},{y0:.3f}"
            f"A{r1:.3f},{r1:.3f},0,1,1,{x1:.3f},{y1:.3f}"
            f"A{r1:.3f},{r1:.3f},0,1,1,{x0:.3f},{y0:.3f}"
        )
        if r0 > 0:
            x2, y2 = polar_to_cartesian(spec.start_angle, r0)
            x3, y3 = polar_to_cartesian(mid, r0)
            path += (
                f"M{x2:.3f},{y2:.3f}"
                f"A{r0:.3f},{r0:.3f},0,1,0,{x3:.3f},{y3:.3f}"
                f"A{r0:.3f},{r0:.3f},0,1,0,{x2:.3f},{y2:.3f}"
            )
        return path + "Z"

    large_arc = 1 if span > math.pi else 0
    xa, ya = polar_to_cartesian(spec.start_angle, r1)
    xb, yb = polar_to_cartesian(spec.end_angle, r1)
    path = f"M{xa:.3f},{ya:.3f}A{r1:.3f},{r1:.3f},0,{large_arc},1,{xb:.3f},{yb:.3f}"

    if r0 > 0:
        xc, yc = polar_to_cartesian(spec.end_angle, r0)
        xd, yd = polar_to_cartesian(spec.start_angle, r0)
        path += f"L{xc:.3f},{yc:.3f}A{r0:.3f},{r0:.3f},0,{large_arc},0,{xd:.3f},{yd:.3f}"
    else:
        path += "L0,0"
    return path + "Z"
