"""
Central Configuration Module for Sunburst Viz.

=== PURPOSE ===
This module is the single source of truth for every tunable constant used by
the sunburst engine: the default colour palette, breadcrumb geometry, wedge
opacities, chart margins and the default number format.  Every other module
imports from here rather than defining its own magic numbers.

=== DATA FLOW ===
  1. ``SunburstConfig`` carries the five user-facing chart options
     (palette, colour mode, null handling, value format override, percent
     display).  It is built once per render pass, usually through
     ``SunburstConfig.from_dict`` from the host's option payload.
  2. BREADCRUMB_* constants drive the breadcrumb trail geometry.
  3. HIGHLIGHT_* / OPACITY_* constants drive the hover highlighting of the
     interaction controller and the depth-based default opacity.

Contains all constants, option keys and defaults.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# ==========================================
# COLOUR CONFIGURATION
# ==========================================
# Default ordinal palette.  Categories beyond the fifth wrap around.
DEFAULT_COLOR_RANGE = ['#4285F4', '#EA4335', '#FBBC04', '#34A852', '#5F6368']

# Fill used for the synthetic root disc; it is never visible.
ROOT_FILL = 'none'

# Colour modes accepted in option payloads (see visualization.colors.ColorMode)
COLOR_BY_ROOT = 'root'
COLOR_BY_NODE = 'node'

# ==========================================
# WEDGE STYLING
# ==========================================
# Default opacity is 1 - depth * OPACITY_STEP_PER_DEPTH, floored at
# MIN_FILL_OPACITY so very deep rings stay faintly visible.
OPACITY_STEP_PER_DEPTH = 0.15
MIN_FILL_OPACITY = 0.1

# Opacity of wedges outside the hovered node's ancestor set.
HIGHLIGHT_DIM_OPACITY = 0.15
HIGHLIGHT_FULL_OPACITY = 1.0

WEDGE_STROKE = '#fff'
WEDGE_STROKE_WIDTH = '0.5px'
WEDGE_TRANSITION = 'fill-opacity 0.2s'

# ==========================================
# CHART GEOMETRY
# ==========================================
# Radius = min(width, height) / 2 - CHART_MARGIN
CHART_MARGIN = 8
# Center label font size = min(width, height) / CENTER_FONT_DIVISOR
CENTER_FONT_DIVISOR = 12

DEFAULT_CHART_WIDTH = 600
DEFAULT_CHART_HEIGHT = 600

# ==========================================
# BREADCRUMB GEOMETRY
# ==========================================
BREADCRUMB_MIN_WIDTH = 75      # minimum segment width (px)
BREADCRUMB_HEIGHT = 30         # segment height (px)
BREADCRUMB_GAP = 4             # spacing between segments (px)
BREADCRUMB_TIP = 10            # chevron tip length (px)
BREADCRUMB_CHAR_WIDTH = 10     # approximate width of one label character (px)
# The end label is centred on its anchor, so it sits this far past the gap.
BREADCRUMB_END_LABEL_PADDING = 50

# ==========================================
# VALUE FORMATTING
# ==========================================
# Applied when the measure carries no format of its own and no override is set.
DEFAULT_VALUE_FORMAT = '#,##0'
# Shown instead of a percentage when the total is zero or not finite.
PERCENT_PLACEHOLDER = '—'
# Label used for null dimension values in breadcrumbs and hover text.
NULL_LABEL = 'null'


# ==========================================
# CHART OPTIONS
# ==========================================

@dataclass
class SunburstConfig:
    """
    User-facing chart options.

    All fields have defaults matching the chart's option schema, so an empty
    payload produces a usable configuration.

    Attributes:
        color_range (List[str]): Ordered palette; categories wrap around it.
        color_by (str): ``'root'`` colours every wedge by its top-level
            branch, ``'node'`` colours by the wedge's own name.
        show_null_points (bool): When False, rows with a null dimension value
            are dropped from the tree.
        value_format_override (str): Excel-style number format.  Empty means
            "use the measure's own format".
        show_percent (bool): Show the percent-of-total label in the center.
    """
    color_range: List[str] = field(default_factory=lambda: list(DEFAULT_COLOR_RANGE))
    color_by: str = COLOR_BY_ROOT
    show_null_points: bool = True
    value_format_override: str = ''
    show_percent: bool = True

    def __post_init__(self):
        if not self.color_range:
            logger.warning("[Config] Empty color_range; falling back to default palette")
            self.color_range = list(DEFAULT_COLOR_RANGE)
        if self.color_by not in (COLOR_BY_ROOT, COLOR_BY_NODE):
            raise ValueError(
                f"color_by must be '{COLOR_BY_ROOT}' or '{COLOR_BY_NODE}', got {self.color_by!r}"
            )

    @classmethod
    def from_dict(cls, options: Optional[Dict[str, Any]]) -> 'SunburstConfig':
        """Build a config from a host option payload.

        Unknown keys are ignored (with a warning) so that payloads carrying
        framework-level options do not break the chart.  ``None`` values are
        treated as "not set".
        """
        if not options:
            return cls()

        known = {f for f in cls.__dataclass_fields__}
        unknown = sorted(k for k in options if k not in known)
        if unknown:
            logger.warning(f"[Config] Ignoring unknown chart options: {unknown}")

        kwargs = {k: v for k, v in options.items() if k in known and v is not None}
        if 'color_range' in kwargs:
            kwargs['color_range'] = list(kwargs['color_range'])
        return cls(**kwargs)

    def resolve_value_format(self, measure_format: Optional[str] = None) -> str:
        """Pick the number format: override, then the measure's, then default."""
        if self.value_format_override:
            return self.value_format_override
        return measure_format or DEFAULT_VALUE_FORMAT
