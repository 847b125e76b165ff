"""Frame helpers: colour conversion, rotation and analysis downscaling."""

from __future__ import annotations

import cv2
import numpy as np

# Lens facing values, as reported by the camera layer.
LENS_FACING_BACK = 0
LENS_FACING_FRONT = 1

_FRONT_ROTATION = {0: 270, 90: 180, 180: 90, 270: 0}
_BACK_ROTATION = {0: 90, 90: 0, 180: 270, 270: 180}

_CV2_ROTATIONS = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def get_image_rotation(device_rotation: int, camera_facing: int) -> int:
    """Clockwise rotation (degrees) that turns a sensor frame upright.

    Unknown device rotations map to 0.
    """
    if camera_facing == LENS_FACING_FRONT:
        return _FRONT_ROTATION.get(device_rotation, 0)
    return _BACK_ROTATION.get(device_rotation, 0)


def rotate_frame(frame: np.ndarray, degrees: int) -> np.ndarray:
    """Rotate *frame* clockwise by a multiple of 90 degrees."""
    degrees %= 360
    if degrees == 0:
        return frame
    if degrees not in _CV2_ROTATIONS:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
    return cv2.rotate(frame, _CV2_ROTATIONS[degrees])


def to_rgb(bgr_frame: np.ndarray) -> np.ndarray:
    """Convert an OpenCV BGR frame to a contiguous RGB array."""
    return cv2.cvtColor(bgr_frame, cv2.COLOR_BGR2RGB)


def resize_for_analysis(frame: np.ndarray, width: int, height: int) -> np.ndarray:
    """Downscale *frame* to fit inside ``width`` x ``height``.

    The aspect ratio is kept.  Frames that already fit are returned as is.
    """
    h, w = frame.shape[:2]
    scale = min(width / w, height / h)
    if scale >= 1.0:
        return frame
    size = (max(1, int(round(w * scale))), max(1, int(round(h * scale))))
    return cv2.resize(frame, size, interpolation=cv2.INTER_AREA)
