"""
Deterministic category -> colour assignment.

``ColorAssigner`` is an ordinal scale: the first category key it sees gets
the first palette colour, the second key the second colour, and so on,
wrapping around once the palette is exhausted.  The key depends on the
colour mode:

    ColorMode.NODE  -> the node's own name
    ColorMode.ROOT  -> the name of the node's top-level (depth-1) ancestor

The synthetic root is always transparent.  An assigner lives for one render
pass; a new pass starts with an empty mapping.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple

from ..core.config import COLOR_BY_NODE, COLOR_BY_ROOT, ROOT_FILL
from ..models.data_models import Node

logger = logging.getLogger(__name__)


class ColorMode(Enum):
    """How a wedge picks its colour category."""
    NODE = COLOR_BY_NODE
    ROOT = COLOR_BY_ROOT

    def category_key(self, node: Node) -> Any:
        if self is ColorMode.NODE:
            return node.name
        return node.top_level_ancestor().name


class ColorAssigner:
    """Lazily built ordinal mapping from category key to palette colour."""

    def __init__(self, palette: Sequence[str], mode: ColorMode = ColorMode.ROOT):
        if not palette:
            raise ValueError("Colour palette must contain at least one colour")
        self.palette: List[str] = list(palette)
        self.mode = mode
        self._domain: Dict[Tuple[type, Any], int] = {}

    def color_for_key(self, key: Any) -> str:
        slot = self._domain.setdefault((type(key), key), len(self._domain))
        return self.palette[slot % len(self.palette)]

    def color_for(self, node: Node) -> str:
        """Fill colour of a node's wedge (and breadcrumb)."""
        if node.depth == 0:
            return ROOT_FILL
        return self.color_for_key(self.mode.category_key(node))

    @property
    def domain_size(self) -> int:
        return len(self._domain)
