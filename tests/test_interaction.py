"""
Unit tests for InteractionController.

Covers:
- Ancestor highlighting on pointer enter
- Opacity restore and trail hiding on pointer leave
- Idempotent re-entry on the same node
- Drill requests for leaves and interior nodes
"""

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from sunburst_viz.core.config import SunburstConfig
from sunburst_viz.visualization import (
    HoverState,
    InteractionController,
    InteractionSink,
    SunburstChart,
    default_opacity,
)
from tests.fixtures.sample_data import create_deep_rows, create_sample_rows


class RecordingSink(InteractionSink):
    """Sink that records every side effect it receives."""

    def __init__(self):
        self.calls = []

    def update_breadcrumbs(self, trail):
        self.calls.append(('breadcrumbs', trail.visible, [s.label for s in trail.segments]))

    def set_center_label(self, text):
        self.calls.append(('center', text))

    def set_opacities(self, opacities):
        self.calls.append(('opacities', dict(opacities)))

    def request_drill(self, links, position):
        self.calls.append(('drill', links, position))

    def kinds(self):
        return [call[0] for call in self.calls]


def _controller(rows, config=None):
    context = SunburstChart(config).update(rows)
    sink = RecordingSink()
    return context, sink, InteractionController(context, sink)


class TestPointerEnter(unittest.TestCase):
    """Test suite for pointer_enter."""

    def setUp(self):
        self.context, self.sink, self.controller = _controller(create_deep_rows())
        self.tree = self.context.tree

    def test_ancestors_full_others_dimmed(self):
        node = self.tree.find("EMEA", "France")
        self.controller.pointer_enter(node)
        highlighted = {n.index for n in node.ancestors()}
        for wedge in self.context.wedges:
            expected = 1.0 if wedge.node_index in highlighted else 0.15
            self.assertEqual(wedge.fill_opacity, expected)

    def test_root_and_self_are_highlighted(self):
        node = self.tree.find("EMEA", "France", "Paris")
        self.controller.pointer_enter(node)
        self.assertEqual(self.context.wedge_for(self.tree.root).fill_opacity, 1.0)
        self.assertEqual(self.context.wedge_for(node).fill_opacity, 1.0)
        self.assertEqual(self.context.wedge_for(self.tree.find("EMEA", "France", "Lyon")).fill_opacity, 0.15)

    def test_trail_and_center_label(self):
        node = self.tree.find("EMEA")
        self.controller.pointer_enter(node)
        self.assertEqual(self.controller.state, HoverState.HOVERING)
        self.assertTrue(self.context.trail.visible)
        self.assertEqual([s.label for s in self.context.trail.segments], ["EMEA"])
        self.assertEqual(self.context.center_label, "66.67%")
        self.assertEqual(self.sink.kinds(), ['breadcrumbs', 'center', 'opacities'])

    def test_same_node_is_a_noop(self):
        node = self.tree.find("AMER", "USA")
        self.controller.pointer_enter(node)
        calls = len(self.sink.calls)
        self.controller.pointer_enter(node)
        self.assertEqual(len(self.sink.calls), calls)

    def test_moving_to_another_node_updates(self):
        self.controller.pointer_enter(self.tree.find("EMEA", "France"))
        target = self.tree.find("AMER", "USA", "Paris")
        self.controller.pointer_enter(target)
        self.assertIs(self.controller.hovered, target)
        self.assertEqual([s.label for s in self.context.trail.segments], ["AMER", "USA", "Paris"])
        self.assertEqual(self.context.wedge_for(self.tree.find("EMEA")).fill_opacity, 0.15)

    def test_percent_disabled_leaves_center_empty(self):
        context, sink, controller = _controller(
            create_deep_rows(), SunburstConfig(show_percent=False)
        )
        controller.pointer_enter(context.tree.find("EMEA"))
        self.assertEqual(context.center_label, '')
        self.assertNotIn('center', sink.kinds())


class TestPointerLeave(unittest.TestCase):
    """Test suite for pointer_leave."""

    def setUp(self):
        self.context, self.sink, self.controller = _controller(create_deep_rows())
        self.tree = self.context.tree

    def test_restores_default_opacities(self):
        before = [w.fill_opacity for w in self.context.wedges]
        self.controller.pointer_enter(self.tree.find("EMEA", "Germany", "Berlin"))
        self.controller.pointer_leave()
        after = [w.fill_opacity for w in self.context.wedges]
        self.assertEqual(after, before)
        for wedge in self.context.wedges:
            self.assertEqual(wedge.fill_opacity, default_opacity(wedge.depth))

    def test_hides_trail_and_clears_label(self):
        self.controller.pointer_enter(self.tree.find("EMEA", "France"))
        self.controller.pointer_leave()
        self.assertFalse(self.context.trail.visible)
        self.assertEqual(len(self.context.trail.segments), 2)
        self.assertEqual(self.context.center_label, '')
        self.assertEqual(self.controller.state, HoverState.IDLE)
        self.assertIsNone(self.controller.hovered)

    def test_leave_while_idle_is_a_noop(self):
        self.controller.pointer_leave()
        self.assertEqual(self.sink.calls, [])
        self.assertEqual(self.controller.state, HoverState.IDLE)


class TestClick(unittest.TestCase):
    """Test suite for drill requests."""

    def setUp(self):
        self.context, self.sink, self.controller = _controller(create_sample_rows())
        self.tree = self.context.tree

    def test_leaf_click_carries_row_links(self):
        request = self.controller.click(self.tree.find("A", "Y"), (120, 45))
        self.assertEqual(request.links, [{'label': 'A Y', 'url': '/a/y'}])
        self.assertEqual(request.position, (120, 45))
        self.assertEqual(self.sink.calls[-1], ('drill', request.links, (120, 45)))

    def test_interior_click_has_no_links(self):
        request = self.controller.click(self.tree.find("A"), [3, 4])
        self.assertEqual(request.links, [])
        self.assertEqual(request.position, (3, 4))

    def test_click_does_not_change_hover_state(self):
        self.controller.click(self.tree.find("B", "X"), (0, 0))
        self.assertEqual(self.controller.state, HoverState.IDLE)
        self.assertFalse(self.context.trail.visible)


if __name__ == '__main__':
    unittest.main()
