"""
Test cases for landmark normalization and geometry helpers.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from handsign.landmarks import (
    FrameNotReady, MalformedHand, check_hand, joint_angle, normalize_hand, palm_center,
)
from synthetic_hands import FRAME_WH, open_hand


class TestNormalizeHand(unittest.TestCase):
    """Test pixel to frame-relative conversion."""

    def test_divides_by_frame_size(self):
        hand = [(320.0, 240.0, 0.5)] * 21
        points = normalize_hand(hand, 640, 480)

        self.assertEqual(len(points), 21)
        self.assertAlmostEqual(points[0][0], 0.5)
        self.assertAlmostEqual(points[0][1], 0.5)

    def test_depth_unchanged(self):
        hand = open_hand()
        points = normalize_hand(hand, *FRAME_WH)

        for raw, norm in zip(hand, points):
            self.assertEqual(norm[2], raw[2])

    def test_two_coordinate_points_get_zero_depth(self):
        hand = [(64.0, 48.0)] * 21
        points = normalize_hand(hand, 640, 480)

        self.assertEqual(points[5], (0.1, 0.1, 0.0))

    def test_zero_width_refused(self):
        with self.assertRaises(FrameNotReady):
            normalize_hand(open_hand(), 0, 480)

    def test_zero_height_refused(self):
        with self.assertRaises(FrameNotReady):
            normalize_hand(open_hand(), 640, 0)

    def test_negative_size_refused(self):
        with self.assertRaises(FrameNotReady):
            normalize_hand(open_hand(), -640, 480)

    def test_frame_not_ready_is_value_error(self):
        self.assertTrue(issubclass(FrameNotReady, ValueError))
        self.assertTrue(issubclass(MalformedHand, ValueError))

    def test_non_finite_size_refused(self):
        for width, height in [(float("nan"), 480), (640, float("nan")), (float("inf"), 480), (None, 480)]:
            with self.subTest(width=width, height=height):
                with self.assertRaises(FrameNotReady):
                    normalize_hand(open_hand(), width, height)

    def test_non_numeric_point_refused(self):
        hand = open_hand()
        hand[3] = ("a", "b", "c")
        with self.assertRaises(MalformedHand):
            normalize_hand(hand, *FRAME_WH)

    def test_scalar_point_refused(self):
        hand = open_hand()
        hand[7] = 4.0
        with self.assertRaises(MalformedHand):
            normalize_hand(hand, *FRAME_WH)

    def test_malformed_hand_refused(self):
        with self.assertRaises(MalformedHand):
            normalize_hand(open_hand()[:19], *FRAME_WH)

    def test_input_not_mutated(self):
        hand = open_hand()
        before = list(hand)
        normalize_hand(hand, *FRAME_WH)
        self.assertEqual(hand, before)


class TestCheckHand(unittest.TestCase):
    """Test landmark count validation."""

    def test_valid_hand(self):
        check_hand(open_hand())

    def test_too_many_points(self):
        with self.assertRaises(MalformedHand):
            check_hand(open_hand() + [(0.0, 0.0, 0.0)])

    def test_none(self):
        with self.assertRaises(MalformedHand):
            check_hand(None)


class TestJointAngle(unittest.TestCase):
    """Test the angle at a joint."""

    def test_straight_line(self):
        self.assertAlmostEqual(joint_angle((0, 0), (1, 0), (2, 0)), 180.0)

    def test_right_angle(self):
        self.assertAlmostEqual(joint_angle((0, 1), (0, 0), (1, 0)), 90.0)

    def test_folded_back(self):
        self.assertAlmostEqual(joint_angle((0, 2), (0, 0), (0, 1)), 0.0)

    def test_depth_ignored(self):
        self.assertAlmostEqual(joint_angle((0, 0, 5), (1, 0, -3), (2, 0, 9)), 180.0)

    def test_coincident_points_undefined(self):
        self.assertIsNone(joint_angle((1, 1), (1, 1), (2, 2)))
        self.assertIsNone(joint_angle((0, 0), (1, 1), (1, 1)))


class TestPalmCenter(unittest.TestCase):
    """Test palm center calculation."""

    def test_uniform_hand(self):
        self.assertEqual(palm_center([(0.5, 0.5)] * 21), (0.5, 0.5))

    def test_synthetic_hand(self):
        cx, cy = palm_center(open_hand())
        # wrist (295, 400) and finger bases at y=300
        self.assertAlmostEqual(cx, (295 + 250 + 280 + 310 + 340) / 5)
        self.assertAlmostEqual(cy, (400 + 4 * 300) / 5)


if __name__ == '__main__':
    unittest.main()
