"""
Visual overlay renderer.

Draws the detected gesture label, the eight hand landmarks and their
skeleton, and the scan viewfinder onto an OpenCV frame for real-time
feedback.
"""

from __future__ import annotations

import cv2
import numpy as np

from breaking_silence.config import (
    HAND_CONNECTIONS,
    HAND_LANDMARK_TYPES,
    OVERLAY_CONNECTION_COLOR,
    OVERLAY_CONNECTION_THICKNESS,
    OVERLAY_DEBUG,
    OVERLAY_DEBUG_COLOR,
    OVERLAY_FONT_SCALE,
    OVERLAY_GESTURE_COLOR,
    OVERLAY_GESTURE_TOP,
    OVERLAY_LANDMARK_COLOR,
    OVERLAY_LANDMARK_RADIUS,
    OVERLAY_THICKNESS,
    OVERLAY_VIEWFINDER_COLOR,
    OVERLAY_VIEWFINDER_SIZE,
)
from breaking_silence.gesture_classifier import dominant_hand_geometry
from breaking_silence.pose import Point, Pose

_FONT = cv2.FONT_HERSHEY_SIMPLEX


def _scaled(point: Point, scale_x: float, scale_y: float) -> tuple[int, int]:
    return int(round(point.x * scale_x)), int(round(point.y * scale_y))


def draw_overlay(
    frame: np.ndarray,
    pose: Pose | None,
    image_size: tuple[int, int] | None,
    gesture: str | None,
    debug: bool = OVERLAY_DEBUG,
) -> np.ndarray:
    """Draw all overlay elements onto *frame* (mutates in place and returns it).

    Parameters
    ----------
    frame : np.ndarray
        The BGR frame to draw on.
    pose :
        Landmarks of the analysed image, or ``None`` to draw nothing.
    image_size :
        ``(width, height)`` of the image the landmarks refer to.  Landmarks
        are scaled from that size to the size of *frame*.  ``None`` means
        the same size as *frame*.
    gesture :
        Label to show at the top of the frame.
    debug :
        Also print the hand geometry of the classified hand.
    """
    if pose is None:
        return frame

    h, w = frame.shape[:2]
    img_w, img_h = image_size if image_size else (w, h)
    scale_x = w / img_w if img_w else 1.0
    scale_y = h / img_h if img_h else 1.0

    # 1. Gesture label (centred, near the top).
    if gesture:
        (text_w, _), _ = cv2.getTextSize(gesture, _FONT, OVERLAY_FONT_SCALE, OVERLAY_THICKNESS)
        cv2.putText(
            frame,
            gesture,
            ((w - text_w) // 2, OVERLAY_GESTURE_TOP),
            _FONT,
            OVERLAY_FONT_SCALE,
            OVERLAY_GESTURE_COLOR,
            OVERLAY_THICKNESS,
            cv2.LINE_AA,
        )

    # 2. Hand landmarks.
    for landmark_id in HAND_LANDMARK_TYPES:
        point = pose.get(landmark_id)
        if point is None:
            continue
        cv2.circle(
            frame,
            _scaled(point, scale_x, scale_y),
            OVERLAY_LANDMARK_RADIUS,
            OVERLAY_LANDMARK_COLOR,
            -1,
            cv2.LINE_AA,
        )

    # 3. Skeleton between landmarks that are both present.
    for start_id, end_id in HAND_CONNECTIONS:
        start = pose.get(start_id)
        end = pose.get(end_id)
        if start is None or end is None:
            continue
        cv2.line(
            frame,
            _scaled(start, scale_x, scale_y),
            _scaled(end, scale_x, scale_y),
            OVERLAY_CONNECTION_COLOR,
            OVERLAY_CONNECTION_THICKNESS,
            cv2.LINE_AA,
        )

    # 4. Geometry readout (bottom-left).
    if debug:
        geo = dominant_hand_geometry(pose)
        if geo is not None:
            text = "  ".join(f"{name}: {val:5.1f}" for name, val in geo.as_dict().items())
            cv2.putText(
                frame,
                text,
                (20, h - 20),
                _FONT,
                OVERLAY_FONT_SCALE * 0.5,
                OVERLAY_DEBUG_COLOR,
                1,
                cv2.LINE_AA,
            )

    return frame


def draw_viewfinder(
    frame: np.ndarray,
    size: int = OVERLAY_VIEWFINDER_SIZE,
    color: tuple[int, int, int] = OVERLAY_VIEWFINDER_COLOR,
) -> np.ndarray:
    """Draw four corner brackets around a centred square of side *size*."""
    h, w = frame.shape[:2]
    size = min(size, w, h)
    x0 = (w - size) // 2
    y0 = (h - size) // 2
    x1 = x0 + size - 1
    y1 = y0 + size - 1
    arm = max(1, size // 5)

    for cx, cy, dx, dy in (
        (x0, y0, 1, 1),
        (x1, y0, -1, 1),
        (x0, y1, 1, -1),
        (x1, y1, -1, -1),
    ):
        cv2.line(frame, (cx, cy), (cx + dx * arm, cy), color, 4, cv2.LINE_AA)
        cv2.line(frame, (cx, cy), (cx, cy + dy * arm), color, 4, cv2.LINE_AA)
    return frame
