import unittest

import numpy as np

from phipacking.model.geometry_primitives import Point
from phipacking.model.hinge import apply_hinges

from utils import make_state, distance, on_x


class TestHinge(unittest.TestCase):
    def setUp(self):
        self.state = make_state()
        # radii 1, 2, 4
        self.small = self.state.add_node(0, on_x(0.0))
        self.mid = self.state.add_node(1, on_x(3.0))
        self.big = self.state.add_node(2, on_x(-10.0, 5.0))

    def test_no_neighbors_moves_freely(self):
        target = Point(7.5, -2.0, 1.25)
        node = apply_hinges(self.state, self.mid.id, target)
        self.assertEqual(node.position, target)

    def test_single_neighbor_keeps_exact_contact(self):
        self.state.add_link(self.small.id, self.mid.id)
        for target in (Point(10.0, 4.0, -3.0), Point(0.5, 0.0, 0.0), Point(-1.0, 1.0, 1.0)):
            apply_hinges(self.state, self.mid.id, target)
            self.assertAlmostEqual(distance(self.mid, self.small), 3.0, places=9)

    def test_single_neighbor_contact_lies_on_ray_to_target(self):
        self.state.add_link(self.small.id, self.mid.id)
        apply_hinges(self.state, self.mid.id, Point(0.0, 10.0, 0.0))
        np.testing.assert_allclose(self.mid.position.to_array(), [0.0, 3.0, 0.0])

    def test_neighbor_does_not_move(self):
        self.state.add_link(self.small.id, self.mid.id)
        before = self.small.position
        apply_hinges(self.state, self.mid.id, Point(4.0, 4.0, 4.0))
        self.assertEqual(self.small.position, before)

    def test_coincident_target_uses_x_axis(self):
        self.state.add_link(self.small.id, self.mid.id)
        apply_hinges(self.state, self.mid.id, self.small.position)
        np.testing.assert_allclose(self.mid.position.to_array(), [3.0, 0.0, 0.0])

    def test_two_neighbors_average_individual_contacts(self):
        self.state.add_link(self.mid.id, self.small.id)
        self.state.add_link(self.mid.id, self.big.id)
        target = Point(0.0, 5.0, 0.0)

        # contact with small (r=1) at origin: straight up, 3 away
        expected_small = np.array([0.0, 3.0, 0.0])
        # contact with big (r=4) at (-10, 5, 0): along +X, 6 away
        expected_big = np.array([-4.0, 5.0, 0.0])

        apply_hinges(self.state, self.mid.id, target)
        np.testing.assert_allclose(self.mid.position.to_array(), (expected_small + expected_big) / 2.0)

    def test_reapplying_with_one_neighbor_is_stable(self):
        self.state.add_link(self.small.id, self.mid.id)
        apply_hinges(self.state, self.mid.id, Point(2.0, 2.0, 0.0))
        first = self.mid.position
        apply_hinges(self.state, self.mid.id, first)
        np.testing.assert_allclose(self.mid.position.to_array(), first.to_array(), atol=1e-12)

    def test_unknown_node_is_ignored(self):
        before = [n.position for n in self.state.nodes]
        self.assertIsNone(apply_hinges(self.state, 999, Point(1.0, 1.0, 1.0)))
        self.assertEqual([n.position for n in self.state.nodes], before)
