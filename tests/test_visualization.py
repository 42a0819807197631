"""
Unit tests for arc geometry, colour assignment and the breadcrumb trail.
"""

import math
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from sunburst_viz.core.config import DEFAULT_COLOR_RANGE, MIN_FILL_OPACITY
from sunburst_viz.hierarchy import aggregate_values, build_tree, partition_layout
from sunburst_viz.visualization import (
    ArcSpec,
    BreadcrumbTrail,
    ColorAssigner,
    ColorMode,
    arc_centroid,
    arc_path,
    breadcrumb_points,
    breadcrumb_width,
    default_opacity,
    wedge,
)
from tests.fixtures.sample_data import create_deep_rows, create_sample_rows


def _tree(rows):
    tree = build_tree(rows)
    aggregate_values(tree)
    return partition_layout(tree, 100.0)


class TestArcGeometry(unittest.TestCase):
    """Test suite for wedge(), default_opacity() and arc_path()."""

    def test_wedge_copies_layout_intervals(self):
        tree = _tree(create_sample_rows())
        node = tree.find("A", "Y")
        spec = wedge(node)
        self.assertEqual(spec.start_angle, node.angle_start)
        self.assertEqual(spec.end_angle, node.angle_end)
        self.assertEqual(spec.inner_radius, node.radius_inner)
        self.assertEqual(spec.outer_radius, node.radius_outer)

    def test_default_opacity_steps_by_depth(self):
        self.assertEqual(default_opacity(0), 1.0)
        self.assertAlmostEqual(default_opacity(1), 0.85)
        self.assertAlmostEqual(default_opacity(2), 0.70)

    def test_default_opacity_is_clamped(self):
        self.assertEqual(default_opacity(7), MIN_FILL_OPACITY)
        self.assertEqual(default_opacity(50), MIN_FILL_OPACITY)

    def test_arc_path_for_partial_ring(self):
        path = arc_path(ArcSpec(0.0, math.pi / 2, 10.0, 20.0))
        self.assertTrue(path.startswith("M0.000,-20.000"))
        self.assertIn("A20.000,20.000,0,0,1,20.000,", path)
        self.assertIn("A10.000,10.000,0,0,0", path)
        self.assertTrue(path.endswith("Z"))

    def test_arc_path_for_full_disc(self):
        path = arc_path(ArcSpec(0.0, 2 * math.pi, 0.0, 20.0))
        self.assertEqual(path.count("A"), 2)

    def test_arc_path_empty_span(self):
        self.assertEqual(arc_path(ArcSpec(1.0, 1.0, 10.0, 20.0)), "")

    def test_arc_centroid(self):
        """Mean angle at mean radius; a quarter turn lands on the +x axis."""
        x, y = arc_centroid(ArcSpec(0.0, math.pi, 10.0, 30.0))
        self.assertAlmostEqual(x, 20.0)
        self.assertAlmostEqual(y, 0.0)


class TestColorAssigner(unittest.TestCase):
    """Test suite for ColorAssigner in both modes."""

    def test_root_is_transparent(self):
        tree = _tree(create_sample_rows())
        for mode in ColorMode:
            self.assertEqual(ColorAssigner(DEFAULT_COLOR_RANGE, mode).color_for(tree.root), 'none')

    def test_root_mode_shares_top_level_colour(self):
        tree = _tree(create_deep_rows())
        colors = ColorAssigner(DEFAULT_COLOR_RANGE, ColorMode.ROOT)
        emea = colors.color_for(tree.find("EMEA"))
        self.assertEqual(colors.color_for(tree.find("EMEA", "France")), emea)
        self.assertEqual(colors.color_for(tree.find("EMEA", "Germany", "Berlin")), emea)
        self.assertNotEqual(colors.color_for(tree.find("AMER")), emea)

    def test_node_mode_keys_by_name(self):
        tree = _tree(create_deep_rows())
        colors = ColorAssigner(DEFAULT_COLOR_RANGE, ColorMode.NODE)
        paris_fr = colors.color_for(tree.find("EMEA", "France", "Paris"))
        paris_us = colors.color_for(tree.find("AMER", "USA", "Paris"))
        lyon = colors.color_for(tree.find("EMEA", "France", "Lyon"))
        self.assertEqual(paris_fr, paris_us)
        self.assertNotEqual(paris_fr, lyon)

    def test_palette_wraps_around(self):
        palette = ['#111', '#222']
        colors = ColorAssigner(palette, ColorMode.NODE)
        assigned = [colors.color_for_key(k) for k in ["a", "b", "c", "a"]]
        self.assertEqual(assigned, ['#111', '#222', '#111', '#111'])
        self.assertEqual(colors.domain_size, 3)

    def test_stable_repeated_lookups(self):
        colors = ColorAssigner(DEFAULT_COLOR_RANGE)
        first = colors.color_for_key("x")
        colors.color_for_key("y")
        self.assertEqual(colors.color_for_key("x"), first)

    def test_empty_palette_rejected(self):
        with self.assertRaises(ValueError):
            ColorAssigner([])


class TestBreadcrumbTrail(unittest.TestCase):
    """Test suite for BreadcrumbTrail reconciliation."""

    def setUp(self):
        self.tree = _tree(create_deep_rows())
        self.colors = ColorAssigner(DEFAULT_COLOR_RANGE, ColorMode.ROOT)
        self.trail = BreadcrumbTrail(color_for=self.colors.color_for, value_formatter=lambda v: f"{v:.0f}")
        self.total = self.tree.root.value

    def test_length_equals_depth(self):
        for path in [("EMEA",), ("EMEA", "France"), ("EMEA", "France", "Paris")]:
            node = self.tree.find(*path)
            segments = self.trail.show(node, self.total)
            self.assertEqual(len(segments), node.depth)
            self.assertEqual([s.name for s in segments], list(path))

    def test_offsets_accumulate_widths_and_gap(self):
        segments = self.trail.show(self.tree.find("EMEA", "Germany", "Berlin"), self.total)
        self.assertEqual(segments[0].x_offset, 0)
        self.assertEqual(segments[1].x_offset, segments[0].width + 4)
        self.assertEqual(segments[2].x_offset, segments[1].x_offset + segments[1].width + 4)

    def test_segment_width_has_minimum(self):
        self.assertEqual(breadcrumb_width("EU"), 75)
        self.assertEqual(breadcrumb_width("A long region name"), 180)

    def test_existing_segments_are_reused(self):
        first = self.trail.show(self.tree.find("EMEA", "France", "Paris"), self.total)
        second = self.trail.show(self.tree.find("EMEA", "France", "Lyon"), self.total)
        self.assertIs(second[0], first[0])
        self.assertIs(second[1], first[1])
        self.assertIsNot(second[2], first[2])
        self.assertEqual(second[2].name, "Lyon")

    def test_reordered_when_branch_changes(self):
        """Segments follow the new chain even if a key survives at a deeper level."""
        self.trail.show(self.tree.find("EMEA", "France", "Paris"), self.total)
        segments = self.trail.show(self.tree.find("AMER", "USA", "Paris"), self.total)
        self.assertEqual([s.name for s in segments], ["AMER", "USA", "Paris"])
        self.assertEqual(segments[0].x_offset, 0)
        self.assertEqual(segments[2].fill_color, self.colors.color_for(self.tree.find("AMER")))

    def test_reused_segment_takes_current_branch_colour(self):
        """A surviving (name, depth) key is recoloured for its new top-level branch."""
        first = self.trail.show(self.tree.find("EMEA", "France", "Paris"), self.total)
        emea_paris_colour = first[2].fill_color
        us_paris = self.tree.find("AMER", "USA", "Paris")
        segments = self.trail.show(us_paris, self.total)
        self.assertIs(segments[2], first[2])
        self.assertEqual(segments[2].fill_color, self.colors.color_for(us_paris))
        self.assertNotEqual(segments[2].fill_color, emea_paris_colour)
        self.assertEqual(segments[2].to_dict()['fillColor'], self.colors.color_for(self.tree.find("AMER")))

    def test_segment_colour_matches_wedge_colour(self):
        segments = self.trail.show(self.tree.find("AMER", "USA"), self.total)
        self.assertEqual(segments[1].fill_color, self.colors.color_for(self.tree.find("AMER")))

    def test_labels_and_percent(self):
        node = self.tree.find("EMEA")
        self.trail.show(node, self.total)
        self.assertEqual(self.trail.end_label, "200")
        self.assertEqual(self.trail.center_label, f"{200 / 300 * 100:.2f}%")
        self.assertTrue(self.trail.visible)

    def test_zero_total_percent_placeholder(self):
        self.trail.show(self.tree.find("EMEA"), 0)
        self.assertEqual(self.trail.center_label, "—")

    def test_percent_disabled(self):
        trail = BreadcrumbTrail(color_for=self.colors.color_for, show_percent=False)
        trail.show(self.tree.find("EMEA"), self.total)
        self.assertEqual(trail.center_label, "")

    def test_end_label_follows_last_segment(self):
        segments = self.trail.show(self.tree.find("EMEA", "France"), self.total)
        last = segments[-1]
        self.assertEqual(self.trail.end_label_x, last.x_offset + last.width + 4 + 50)

    def test_hide_keeps_segments(self):
        self.trail.show(self.tree.find("EMEA", "France"), self.total)
        self.trail.hide()
        self.assertFalse(self.trail.visible)
        self.assertEqual(len(self.trail.segments), 2)

    def test_chevron_points(self):
        self.assertEqual(breadcrumb_points(75, 0), "0,0 75,0 85,15 75,30 0,30")
        self.assertEqual(breadcrumb_points(75, 1), "0,0 75,0 85,15 75,30 0,30 10,15")

    def test_null_segment_label(self):
        segments = self.trail.show(self.tree.find("APAC", None), self.total)
        self.assertEqual(segments[1].label, "null")

    def test_segment_to_dict(self):
        segment = self.trail.show(self.tree.find("EMEA"), self.total)[0]
        self.assertEqual(
            segment.to_dict(),
            {'label': 'EMEA', 'xOffset': 0.0, 'width': 75, 'fillColor': self.colors.color_for(self.tree.find("EMEA"))},
        )


if __name__ == '__main__':
    unittest.main()
