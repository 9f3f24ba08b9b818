import unittest

import numpy as np

from phipacking.config import SIZE_SET_CLEARANCE, EXPONENTS
from phipacking.model.geometry_primitives import Point
from phipacking.model.size_table import DEFAULT_SIZE_TABLE
from phipacking.model.state import Link, PackingState, SnapSettings

from utils import make_state, on_x


class TestNodes(unittest.TestCase):
    def test_ids_are_monotonic_and_never_reused(self):
        state = PackingState()
        ids = [state.add_node(-2).id for _ in range(3)]
        self.assertEqual(ids, [1, 2, 3])
        state.clear()
        self.assertEqual(state.add_node(-2).id, 4)

    def test_radius_and_color_come_from_table(self):
        state = PackingState()
        node = state.add_node(-4, Point(1.0, 2.0, 3.0))
        self.assertEqual(node.radius, DEFAULT_SIZE_TABLE.radius_of(-4))
        self.assertEqual(node.color, DEFAULT_SIZE_TABLE.color_of(-4))
        self.assertEqual(node.position, Point(1.0, 2.0, 3.0))

    def test_random_position_rests_on_ground(self):
        state = PackingState(rng=np.random.default_rng(7))
        for exponent in EXPONENTS:
            node = state.add_node(exponent)
            self.assertEqual(node.position.y, node.radius)
            self.assertTrue(-1.0 <= node.position.x <= 1.0)
            self.assertTrue(-1.0 <= node.position.z <= 1.0)

    def test_seeded_random_positions_are_reproducible(self):
        a = PackingState(rng=np.random.default_rng(42))
        b = PackingState(rng=np.random.default_rng(42))
        self.assertEqual(a.add_node(1).position, b.add_node(1).position)

    def test_unknown_exponent_raises(self):
        with self.assertRaises(ValueError):
            PackingState().add_node(0)

    def test_get_unknown_id(self):
        self.assertIsNone(PackingState().get(99))


class TestSizeSet(unittest.TestCase):
    def setUp(self):
        self.state = PackingState()
        self.nodes = self.state.add_size_set()

    def test_one_node_per_exponent_in_ladder_order(self):
        self.assertEqual([n.exponent for n in self.nodes], list(EXPONENTS))
        self.assertEqual(self.state.nodes, self.nodes)

    def test_row_with_fixed_clearance(self):
        self.assertEqual(self.nodes[0].position.x, -3.0)
        for a, b in zip(self.nodes[:-1], self.nodes[1:]):
            gap_x = (b.position.x - a.position.x) - (a.radius + b.radius)
            self.assertAlmostEqual(gap_x, SIZE_SET_CLEARANCE)
            surface_gap = a.position.distance_to(b.position) - (a.radius + b.radius)
            self.assertGreaterEqual(surface_gap, SIZE_SET_CLEARANCE - 1e-12)
        for n in self.nodes:
            self.assertEqual(n.position.y, n.radius)
            self.assertEqual(n.position.z, 0.0)

    def test_no_links_are_created(self):
        self.assertEqual(self.state.links, [])

    def test_deterministic(self):
        other = PackingState().add_size_set()
        self.assertEqual([n.position for n in other], [n.position for n in self.nodes])


class TestLinks(unittest.TestCase):
    def setUp(self):
        self.state = make_state()
        self.a = self.state.add_node(0, on_x(0.0))
        self.b = self.state.add_node(1, on_x(3.0))
        self.c = self.state.add_node(2, on_x(9.0))

    def test_add_link_is_idempotent_in_either_order(self):
        self.assertTrue(self.state.add_link(self.a.id, self.b.id))
        self.assertFalse(self.state.add_link(self.a.id, self.b.id))
        self.assertFalse(self.state.add_link(self.b.id, self.a.id))
        self.assertEqual(self.state.links, [Link(self.a.id, self.b.id)])

    def test_self_and_unknown_links_are_ignored(self):
        self.assertFalse(self.state.add_link(self.a.id, self.a.id))
        self.assertFalse(self.state.add_link(self.a.id, 404))
        self.assertEqual(self.state.links, [])

    def test_neighbors(self):
        self.state.add_link(self.b.id, self.a.id)
        self.state.add_link(self.b.id, self.c.id)
        self.assertEqual({n.id for n in self.state.neighbors_of(self.b.id)}, {self.a.id, self.c.id})
        self.assertEqual([n.id for n in self.state.neighbors_of(self.a.id)], [self.b.id])
        self.assertEqual(self.state.neighbors_of(self.c.id + 1), [])
        self.assertEqual(self.state.degree(self.b.id), 2)
        self.assertEqual(len(self.state.links_of(self.b.id)), 2)

    def test_links_never_reference_missing_nodes(self):
        self.state.add_link(self.a.id, self.b.id)
        self.state.add_link(self.c.id, self.b.id)
        ids = {n.id for n in self.state.nodes}
        for link in self.state.links:
            self.assertIn(link.a_id, ids)
            self.assertIn(link.b_id, ids)

    def test_clear_empties_everything(self):
        self.state.add_link(self.a.id, self.b.id)
        self.state.clear()
        self.assertEqual(self.state.nodes, [])
        self.assertEqual(self.state.links, [])
        self.assertEqual(self.state.neighbors_of(self.a.id), [])
        self.assertFalse(self.state.has_link(self.a.id, self.b.id))

    def test_stats(self):
        self.state.add_link(self.a.id, self.b.id)
        stats = self.state.stats()
        self.assertEqual(stats["nodes"], 3)
        self.assertEqual(stats["links"], 1)
        self.assertEqual(stats["per_exponent"], {0: 1, 1: 1, 2: 1})


class TestLinkAndSettings(unittest.TestCase):
    def test_link_is_canonical(self):
        self.assertEqual(Link.between(5, 2), Link(2, 5))
        self.assertEqual(Link.between(5, 2).other(2), 5)
        with self.assertRaises(ValueError):
            Link.between(3, 3)

    def test_snap_settings_defaults(self):
        settings = SnapSettings()
        self.assertTrue(settings.magnet_enabled)
        self.assertEqual(settings.snap_tolerance, 0.06)

    def test_snap_settings_validation(self):
        SnapSettings(snap_tolerance=0.0)
        with self.assertRaises(ValueError):
            SnapSettings(snap_tolerance=-0.01)
        with self.assertRaises(ValueError):
            SnapSettings(snap_tolerance=float("nan"))
