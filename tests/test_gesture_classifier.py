"""
Gesture classifier tests with hand-placed synthetic landmarks.

Coordinates are image pixels, y grows downward.
"""
import math
import unittest

from breaking_silence import config
from breaking_silence.gesture_classifier import (
    calculate_angle,
    classify,
    distance,
    geometry_for_hand,
    has_hand_landmarks,
    identify_hand_gesture,
    identify_left_hand_sign_language,
    identify_right_hand_sign_language,
    identify_sign_language,
    is_left_hand_complete,
    is_left_hand_dominant,
    is_peace_sign_gesture,
    is_pointing_gesture,
    is_right_hand_complete,
    normalize_position,
)
from breaking_silence.pose import Point, Pose


def left_hand(wrist, thumb, index, pinky):
    return {
        config.LEFT_WRIST: Point(*wrist),
        config.LEFT_THUMB: Point(*thumb),
        config.LEFT_INDEX: Point(*index),
        config.LEFT_PINKY: Point(*pinky),
    }


def right_hand(wrist, thumb, index, pinky):
    return {
        config.RIGHT_WRIST: Point(*wrist),
        config.RIGHT_THUMB: Point(*thumb),
        config.RIGHT_INDEX: Point(*index),
        config.RIGHT_PINKY: Point(*pinky),
    }


def make_pose(*parts, **landmarks):
    points = {}
    for part in parts:
        points.update(part)
    for name, xy in landmarks.items():
        points[getattr(config, name.upper())] = Point(*xy)
    return Pose(landmarks=points)


class TestGeometryHelpers(unittest.TestCase):
    def test_distance(self):
        self.assertAlmostEqual(distance(Point(0, 0), Point(3, 4)), 5.0)

    def test_normalize_position(self):
        self.assertEqual(normalize_position(Point(5, 7), Point(2, 10)), Point(3, -3))

    def test_calculate_angle_is_directed(self):
        origin = Point(0, 0)
        self.assertAlmostEqual(calculate_angle(Point(0, 1), origin, Point(1, 0)), 90.0)
        # Negative differences wrap into [0, 360).
        self.assertAlmostEqual(calculate_angle(Point(1, 0), origin, Point(0, 1)), 270.0)


class TestHandPresence(unittest.TestCase):
    def test_empty_pose_has_no_hand(self):
        self.assertFalse(has_hand_landmarks(Pose()))

    def test_non_hand_landmark_is_ignored(self):
        pose = Pose(landmarks={0: Point(100, 100)})  # nose
        self.assertFalse(has_hand_landmarks(pose))
        self.assertEqual(identify_hand_gesture(pose), config.LABEL_NO_HAND)

    def test_completeness(self):
        pose = make_pose(
            left_hand((0, 0), (1, 1), (2, 2), (3, 3)),
            right_wrist=(10, 10),
        )
        self.assertTrue(is_left_hand_complete(pose))
        self.assertFalse(is_right_hand_complete(pose))

    def test_dominance(self):
        self.assertTrue(is_left_hand_dominant(make_pose(left_wrist=(400, 0), right_wrist=(100, 0))))
        self.assertFalse(is_left_hand_dominant(make_pose(left_wrist=(100, 0), right_wrist=(400, 0))))
        self.assertTrue(is_left_hand_dominant(make_pose(left_wrist=(100, 0))))
        self.assertFalse(is_left_hand_dominant(make_pose(right_wrist=(100, 0))))


class TestNoHand(unittest.TestCase):
    def test_none_pose(self):
        self.assertEqual(classify(None), config.LABEL_NO_HAND)

    def test_empty_pose(self):
        self.assertEqual(classify(Pose()), config.LABEL_NO_HAND)
        self.assertEqual(identify_hand_gesture(Pose()), config.LABEL_NO_HAND)


class TestSignLanguage(unittest.TestCase):
    def test_letter_a_left_thumb_out(self):
        pose = make_pose(left_hand((100, 100), (120, 100), (100, 90), (95, 105)))
        self.assertEqual(classify(pose), config.SIGN_LETTER_A)

    def test_letter_a_is_mirrored_for_right_hand(self):
        pose = make_pose(right_hand((100, 100), (80, 100), (100, 90), (105, 105)))
        self.assertEqual(identify_right_hand_sign_language(pose), config.SIGN_LETTER_A)

    def test_fist_with_tucked_thumb_is_basic_closed_fist(self):
        pose = make_pose(left_hand((200, 200), (190, 210), (205, 205), (195, 195)))
        self.assertIsNone(identify_sign_language(pose))
        self.assertEqual(classify(pose), config.GESTURE_CLOSED_FIST)

    def test_letter_b(self):
        pose = make_pose(left_hand((100, 200), (130, 210), (100, 100), (80, 110)))
        self.assertEqual(classify(pose), config.SIGN_LETTER_B)

    def test_letter_c(self):
        pose = make_pose(left_hand((200, 200), (200, 150), (230, 180), (200, 110)))
        self.assertEqual(classify(pose), config.SIGN_LETTER_C)

    def c_hand(self, thumb_index_deg):
        # Wrist straight below the thumb, pinky straight above it, index
        # placed so the thumb-index angle is *thumb_index_deg*.
        thumb = (200.0, 150.0)
        direction = math.radians(90.0 - thumb_index_deg)
        index = (thumb[0] + 30.0 * math.cos(direction), thumb[1] + 30.0 * math.sin(direction))
        return make_pose(left_hand((200.0, 200.0), thumb, index, (200.0, 110.0)))

    def test_letter_c_thumb_index_range_is_inclusive(self):
        pose = self.c_hand(90.0)
        geo = geometry_for_hand(pose, config.LEFT_HAND)
        self.assertAlmostEqual(geo.thumb_index_angle, config.SIGN_C_THUMB_INDEX_MAX_DEG)
        self.assertEqual(classify(pose), config.SIGN_LETTER_C)
        for degrees in (30.5, 60.0):
            self.assertEqual(classify(self.c_hand(degrees)), config.SIGN_LETTER_C, degrees)

    def test_letter_c_outside_thumb_index_range(self):
        for degrees in (29.5, 90.5):
            self.assertNotEqual(classify(self.c_hand(degrees)), config.SIGN_LETTER_C, degrees)

    def test_number_1(self):
        pose = make_pose(left_hand((200, 200), (260, 200), (200, 100), (210, 240)))
        self.assertEqual(classify(pose), config.SIGN_NUMBER_1)

    def test_number_2_is_shadowed_by_number_1(self):
        pose = make_pose(left_hand((200, 200), (260, 200), (200, 100), (210, 240)))
        self.assertTrue(is_peace_sign_gesture(pose))
        self.assertTrue(is_pointing_gesture(pose))
        self.assertEqual(identify_left_hand_sign_language(pose), config.SIGN_NUMBER_1)

    def test_number_3(self):
        pose = make_pose(left_hand((200, 200), (150, 150), (200, 100), (250, 90)))
        self.assertEqual(classify(pose), config.SIGN_NUMBER_3)

    def test_number_5(self):
        pose = make_pose(left_hand((200, 200), (150, 150), (160, 140), (250, 130)))
        self.assertEqual(classify(pose), config.SIGN_NUMBER_5)

    def test_incomplete_hands_give_no_sign(self):
        pose = make_pose(left_wrist=(100, 200), left_index=(100, 100), right_pinky=(300, 250))
        self.assertIsNone(identify_sign_language(pose))
        self.assertIsNone(identify_left_hand_sign_language(pose))
        self.assertIsNone(identify_right_hand_sign_language(pose))

    def test_dominant_left_hand_is_read(self):
        pose = make_pose(
            left_hand((400, 200), (420, 200), (400, 190), (395, 205)),
            right_hand((100, 200), (160, 200), (100, 100), (110, 240)),
        )
        self.assertEqual(classify(pose), config.SIGN_LETTER_A)

    def test_right_hand_is_read_when_left_is_not_dominant(self):
        pose = make_pose(
            left_hand((50, 200), (70, 200), (50, 190), (45, 205)),
            right_hand((300, 200), (360, 200), (300, 100), (310, 240)),
        )
        # Letter A needs the right thumb left of its wrist.
        self.assertEqual(classify(pose), config.SIGN_NUMBER_1)

    def test_every_label_is_known(self):
        labels = set(config.BASIC_GESTURES) | set(config.SIGN_GESTURES)
        self.assertEqual(len(labels), 12)


class TestBasicGestures(unittest.TestCase):
    def test_pointing_falls_back_to_right_pinky(self):
        pose = make_pose(left_wrist=(100, 200), left_index=(100, 100), right_pinky=(300, 250))
        self.assertEqual(classify(pose), config.GESTURE_POINTING)

    def test_open_palm(self):
        pose = make_pose(
            left_wrist=(200, 200),
            left_thumb=(150, 150),
            left_index=(170, 120),
            right_pinky=(250, 100),
        )
        self.assertEqual(classify(pose), config.GESTURE_OPEN_PALM)

    def test_closed_fist(self):
        pose = make_pose(
            left_wrist=(200, 200),
            left_index=(200, 220),
            left_pinky=(190, 215),
            right_thumb=(215, 205),
        )
        self.assertEqual(classify(pose), config.GESTURE_CLOSED_FIST)

    def test_thumbs_up(self):
        pose = make_pose(left_wrist=(200, 200), left_thumb=(200, 100), left_index=(210, 210))
        self.assertEqual(classify(pose), config.GESTURE_THUMBS_UP)

    def test_unknown_gesture(self):
        pose = make_pose(left_wrist=(200, 200))
        self.assertEqual(classify(pose), config.LABEL_UNKNOWN)


if __name__ == "__main__":
    unittest.main()
