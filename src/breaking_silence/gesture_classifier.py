"""
Gesture classifier.

Maps a single-frame :class:`~breaking_silence.pose.Pose` to one of
the gesture labels in :mod:`breaking_silence.config`.  Only the eight hand
points of the pose are used (wrist, thumb, index and pinky of each hand), so
the classifier is a flat table of geometric threshold rules with no temporal
state.

Classification overview
-----------------------
1. No hand landmark at all -> ``No hand detected``.
2. **Sign language** is tried first on the more useful hand: the left hand
   when all four of its points are visible and it is dominant (or the right
   hand is incomplete), otherwise the right hand when complete.  Rules are
   checked in order A, B, C, 1, 2, 3, 5.
3. **Basic gestures** otherwise, in order Pointing, Open Palm, Closed Fist,
   Peace Sign, Thumbs Up.  These read each landmark from the left hand when
   visible and fall back to the right hand point by point.
4. Anything else -> ``Unknown Gesture``.

All coordinates are image pixels with y growing downward, so "above the
wrist" means a smaller y.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from breaking_silence.config import (
    CURLED_MAX_DIST_PX,
    GESTURE_CLOSED_FIST,
    GESTURE_OPEN_PALM,
    GESTURE_PEACE_SIGN,
    GESTURE_POINTING,
    GESTURE_THUMBS_UP,
    HAND_LANDMARK_TYPES,
    LABEL_NO_HAND,
    LABEL_UNKNOWN,
    LEFT_HAND,
    LEFT_INDEX,
    LEFT_PINKY,
    LEFT_THUMB,
    LEFT_WRIST,
    RIGHT_HAND,
    RIGHT_INDEX,
    RIGHT_PINKY,
    RIGHT_THUMB,
    RIGHT_WRIST,
    SIGN_3_THUMB_INDEX_MIN_DEG,
    SIGN_3_THUMB_PINKY_MIN_DEG,
    SIGN_A_THUMB_OFFSET,
    SIGN_B_MIN_FINGER_DIST,
    SIGN_B_MIN_INDEX_LIFT,
    SIGN_C_THUMB_INDEX_MAX_DEG,
    SIGN_C_THUMB_INDEX_MIN_DEG,
    SIGN_C_THUMB_PINKY_MIN_DEG,
    SIGN_LETTER_A,
    SIGN_LETTER_B,
    SIGN_LETTER_C,
    SIGN_NUMBER_1,
    SIGN_NUMBER_2,
    SIGN_NUMBER_3,
    SIGN_NUMBER_5,
)
from breaking_silence.pose import Point, Pose


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------

def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(np.subtract(p1, p2)))


def normalize_position(position: Point, reference: Point) -> Point:
    """Return *position* relative to *reference*."""
    return Point(position.x - reference.x, position.y - reference.y)


def calculate_angle(p1: Point, p2: Point, p3: Point) -> float:
    """Directed angle (degrees, in ``[0, 360)``) at *p2* from p2->p3 to p2->p1."""
    v1 = np.subtract(p1, p2)
    v2 = np.subtract(p3, p2)
    angle = float(np.degrees(np.arctan2(v1[1], v1[0]) - np.arctan2(v2[1], v2[0])))
    if angle < 0:
        angle += 360.0
    return angle


@dataclass
class HandGeometry:
    """Derived features for one hand, measured from its wrist."""

    thumb_rel: Point
    index_rel: Point
    pinky_rel: Point

    thumb_index_angle: float
    thumb_pinky_angle: float
    index_pinky_angle: float

    thumb_wrist_dist: float
    index_wrist_dist: float
    pinky_wrist_dist: float

    def as_dict(self) -> dict[str, float]:
        return {
            "thumb-index": self.thumb_index_angle,
            "thumb-pinky": self.thumb_pinky_angle,
            "index-pinky": self.index_pinky_angle,
        }


def hand_geometry(wrist: Point, thumb: Point, index: Point, pinky: Point) -> HandGeometry:
    return HandGeometry(
        thumb_rel=normalize_position(thumb, wrist),
        index_rel=normalize_position(index, wrist),
        pinky_rel=normalize_position(pinky, wrist),
        thumb_index_angle=calculate_angle(wrist, thumb, index),
        thumb_pinky_angle=calculate_angle(wrist, thumb, pinky),
        index_pinky_angle=calculate_angle(wrist, index, pinky),
        thumb_wrist_dist=distance(thumb, wrist),
        index_wrist_dist=distance(index, wrist),
        pinky_wrist_dist=distance(pinky, wrist),
    )


def geometry_for_hand(pose: Pose, hand: tuple[int, int, int, int]) -> HandGeometry | None:
    """Geometry for *hand* (wrist, thumb, index, pinky ids), or ``None`` if
    any of its points is missing."""
    points = [pose.get(landmark_id) for landmark_id in hand]
    if any(p is None for p in points):
        return None
    return hand_geometry(*points)


# ---------------------------------------------------------------------------
# Hand presence
# ---------------------------------------------------------------------------

def has_hand_landmarks(pose: Pose) -> bool:
    """True when at least one of the eight hand landmarks is present."""
    return any(pose.get(landmark_id) is not None for landmark_id in HAND_LANDMARK_TYPES)


def is_left_hand_complete(pose: Pose) -> bool:
    return all(pose.get(landmark_id) is not None for landmark_id in LEFT_HAND)


def is_right_hand_complete(pose: Pose) -> bool:
    return all(pose.get(landmark_id) is not None for landmark_id in RIGHT_HAND)


def is_left_hand_dominant(pose: Pose) -> bool:
    """Decide which hand leads when both are complete.

    A hand whose wrist is missing never leads.  Otherwise the left hand
    leads when its wrist is further right in the image.
    """
    left_wrist = pose.get(LEFT_WRIST)
    right_wrist = pose.get(RIGHT_WRIST)
    if left_wrist is None:
        return False
    if right_wrist is None:
        return True
    return left_wrist.x > right_wrist.x


def _either(pose: Pose, left_id: int, right_id: int) -> Point | None:
    point = pose.get(left_id)
    return point if point is not None else pose.get(right_id)


# ---------------------------------------------------------------------------
# Basic gestures
# ---------------------------------------------------------------------------

def is_pointing_gesture(pose: Pose) -> bool:
    """Index raised above the wrist with the pinky below it."""
    index = _either(pose, LEFT_INDEX, RIGHT_INDEX)
    wrist = _either(pose, LEFT_WRIST, RIGHT_WRIST)
    pinky = _either(pose, LEFT_PINKY, RIGHT_PINKY)
    if index is None or wrist is None or pinky is None:
        return False
    return index.y < wrist.y and pinky.y > index.y


def is_open_palm_gesture(pose: Pose) -> bool:
    """Thumb, index and pinky all above the wrist."""
    wrist = _either(pose, LEFT_WRIST, RIGHT_WRIST)
    thumb = _either(pose, LEFT_THUMB, RIGHT_THUMB)
    index = _either(pose, LEFT_INDEX, RIGHT_INDEX)
    pinky = _either(pose, LEFT_PINKY, RIGHT_PINKY)
    if wrist is None or thumb is None or index is None or pinky is None:
        return False
    return thumb.y < wrist.y and index.y < wrist.y and pinky.y < wrist.y


def is_closed_fist_gesture(pose: Pose) -> bool:
    """Thumb, index and pinky all curled in close to the wrist."""
    wrist = _either(pose, LEFT_WRIST, RIGHT_WRIST)
    thumb = _either(pose, LEFT_THUMB, RIGHT_THUMB)
    index = _either(pose, LEFT_INDEX, RIGHT_INDEX)
    pinky = _either(pose, LEFT_PINKY, RIGHT_PINKY)
    if wrist is None or thumb is None or index is None or pinky is None:
        return False
    return (
        distance(thumb, wrist) < CURLED_MAX_DIST_PX
        and distance(index, wrist) < CURLED_MAX_DIST_PX
        and distance(pinky, wrist) < CURLED_MAX_DIST_PX
    )


def is_peace_sign_gesture(pose: Pose) -> bool:
    # Pose landmarks carry no middle finger, so this reduces to the same
    # test as pointing and is only reached when pointing is not checked.
    index = _either(pose, LEFT_INDEX, RIGHT_INDEX)
    wrist = _either(pose, LEFT_WRIST, RIGHT_WRIST)
    pinky = _either(pose, LEFT_PINKY, RIGHT_PINKY)
    if index is None or wrist is None or pinky is None:
        return False
    return index.y < wrist.y and pinky.y > index.y


def is_thumbs_up_gesture(pose: Pose) -> bool:
    """Thumb above the wrist with the index curled in."""
    thumb = _either(pose, LEFT_THUMB, RIGHT_THUMB)
    wrist = _either(pose, LEFT_WRIST, RIGHT_WRIST)
    index = _either(pose, LEFT_INDEX, RIGHT_INDEX)
    if thumb is None or wrist is None or index is None:
        return False
    return thumb.y < wrist.y and distance(index, wrist) < CURLED_MAX_DIST_PX


# Checked in this order; the first match wins.
_BASIC_GESTURES = [
    (is_pointing_gesture, GESTURE_POINTING),
    (is_open_palm_gesture, GESTURE_OPEN_PALM),
    (is_closed_fist_gesture, GESTURE_CLOSED_FIST),
    (is_peace_sign_gesture, GESTURE_PEACE_SIGN),
    (is_thumbs_up_gesture, GESTURE_THUMBS_UP),
]


# ---------------------------------------------------------------------------
# Sign language
# ---------------------------------------------------------------------------

def _classify_sign(pose: Pose, geo: HandGeometry, left: bool) -> str | None:
    """Sign table for one hand.  Letter A is the only rule that is mirrored."""
    thumb_out = (
        geo.thumb_rel.x > SIGN_A_THUMB_OFFSET
        if left
        else geo.thumb_rel.x < -SIGN_A_THUMB_OFFSET
    )

    # A: fist with the thumb to the side.
    if is_closed_fist_gesture(pose) and thumb_out:
        return SIGN_LETTER_A

    # B: fingers up, thumb folded across the palm.
    if (
        geo.index_wrist_dist > SIGN_B_MIN_FINGER_DIST
        and geo.pinky_wrist_dist > SIGN_B_MIN_FINGER_DIST
        and geo.thumb_rel.y > 0
        and geo.index_rel.y < -SIGN_B_MIN_INDEX_LIFT
    ):
        return SIGN_LETTER_B

    # C: curved hand.
    if (
        SIGN_C_THUMB_INDEX_MIN_DEG <= geo.thumb_index_angle <= SIGN_C_THUMB_INDEX_MAX_DEG
        and geo.thumb_pinky_angle > SIGN_C_THUMB_PINKY_MIN_DEG
        and geo.thumb_rel.y < 0
        and geo.pinky_rel.y < 0
    ):
        return SIGN_LETTER_C

    if is_pointing_gesture(pose):
        return SIGN_NUMBER_1

    if is_peace_sign_gesture(pose):
        return SIGN_NUMBER_2

    # 3: thumb, index and middle extended.
    if (
        geo.thumb_rel.y < 0
        and geo.index_rel.y < 0
        and geo.thumb_index_angle > SIGN_3_THUMB_INDEX_MIN_DEG
        and geo.thumb_pinky_angle > SIGN_3_THUMB_PINKY_MIN_DEG
    ):
        return SIGN_NUMBER_3

    if is_open_palm_gesture(pose):
        return SIGN_NUMBER_5

    return None


def identify_left_hand_sign_language(pose: Pose) -> str | None:
    geo = geometry_for_hand(pose, LEFT_HAND)
    if geo is None:
        return None
    return _classify_sign(pose, geo, left=True)


def identify_right_hand_sign_language(pose: Pose) -> str | None:
    geo = geometry_for_hand(pose, RIGHT_HAND)
    if geo is None:
        return None
    return _classify_sign(pose, geo, left=False)


def identify_sign_language(pose: Pose) -> str | None:
    """Return a sign-language label, or ``None`` if no sign matches."""
    left_complete = is_left_hand_complete(pose)
    right_complete = is_right_hand_complete(pose)

    if left_complete and (not right_complete or is_left_hand_dominant(pose)):
        return identify_left_hand_sign_language(pose)
    if right_complete:
        return identify_right_hand_sign_language(pose)
    return None


def dominant_hand_geometry(pose: Pose) -> HandGeometry | None:
    """Geometry of the hand the sign table would read (used for debug output)."""
    left_complete = is_left_hand_complete(pose)
    right_complete = is_right_hand_complete(pose)
    if left_complete and (not right_complete or is_left_hand_dominant(pose)):
        return geometry_for_hand(pose, LEFT_HAND)
    if right_complete:
        return geometry_for_hand(pose, RIGHT_HAND)
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def identify_hand_gesture(pose: Pose) -> str:
    """Classify *pose* into a gesture label."""
    if not has_hand_landmarks(pose):
        return LABEL_NO_HAND

    sign = identify_sign_language(pose)
    if sign:
        return sign

    for check, label in _BASIC_GESTURES:
        if check(pose):
            return label
    return LABEL_UNKNOWN


def classify(pose: Pose | None) -> str:
    """Like :func:`identify_hand_gesture` but accepts a missing pose."""
    if pose is None or not has_hand_landmarks(pose):
        return LABEL_NO_HAND
    return identify_hand_gesture(pose)
