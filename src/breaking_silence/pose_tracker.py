"""
MediaPipe Pose wrapper (Tasks API, mediapipe >= 0.10).

Accepts a BGR frame from OpenCV, runs full-body pose landmark detection and
returns the pixel-space landmarks of the first detected person.  Landmarks
whose visibility score is too low are left out of the result, so callers can
test for a landmark with ``pose.get(...) is None``.
"""

from __future__ import annotations

import logging
import os

import mediapipe as mp
import numpy as np

from breaking_silence.config import (
    MP_MIN_DETECTION_CONFIDENCE,
    MP_MIN_PRESENCE_CONFIDENCE,
    MP_MIN_TRACKING_CONFIDENCE,
    MP_NUM_POSES,
    POSE_MODEL_FILENAME,
    POSE_MODEL_PATH,
)
from breaking_silence.image_utils import to_rgb
from breaking_silence.pose import Pose, PoseCallback, pose_from_landmarks

logger = logging.getLogger("breaking_silence.pose")

BaseOptions = mp.tasks.BaseOptions
PoseLandmarker = mp.tasks.vision.PoseLandmarker
PoseLandmarkerOptions = mp.tasks.vision.PoseLandmarkerOptions
RunningMode = mp.tasks.vision.RunningMode


def resolve_model_path() -> str:
    """Return the pose model path, raising if the bundle is not installed."""
    path = POSE_MODEL_PATH or os.path.join(
        os.path.dirname(__file__), POSE_MODEL_FILENAME
    )
    if not os.path.isfile(path):
        raise FileNotFoundError(
            f"Pose landmarker model not found at {path}. Download "
            f"{POSE_MODEL_FILENAME} from the MediaPipe model page or set "
            "BREAKING_SILENCE_POSE_MODEL."
        )
    return path


class PoseTracker:
    """Thin wrapper around MediaPipe PoseLandmarker in stream (VIDEO) mode."""

    def __init__(self, model_path: str | None = None) -> None:
        options = PoseLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=model_path or resolve_model_path()),
            running_mode=RunningMode.VIDEO,
            num_poses=MP_NUM_POSES,
            min_pose_detection_confidence=MP_MIN_DETECTION_CONFIDENCE,
            min_pose_presence_confidence=MP_MIN_PRESENCE_CONFIDENCE,
            min_tracking_confidence=MP_MIN_TRACKING_CONFIDENCE,
        )
        self._landmarker = PoseLandmarker.create_from_options(options)
        self._frame_ts_ms: int = 0  # monotonic timestamp for VIDEO mode

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process(self, bgr_frame: np.ndarray) -> Pose | None:
        """Run detection on a BGR frame.

        Returns the ``Pose`` of the first detected person, or ``None`` if
        nobody (or no visible landmark) was found.
        """
        h, w = bgr_frame.shape[:2]
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=to_rgb(bgr_frame))

        # The VIDEO running mode requires a monotonically increasing timestamp.
        self._frame_ts_ms += 33  # ~30 fps
        result = self._landmarker.detect_for_video(mp_image, self._frame_ts_ms)

        if not result.pose_landmarks:
            return None
        pose = pose_from_landmarks(result.pose_landmarks[0], w, h)
        return None if pose.is_empty else pose

    def detect_pose(self, bgr_frame: np.ndarray, on_pose_detected: PoseCallback) -> None:
        """Detect a pose and report it through *on_pose_detected*.

        The callback always fires exactly once, with ``None`` when no pose
        was found or detection failed.
        """
        h, w = bgr_frame.shape[:2]
        try:
            pose = self.process(bgr_frame)
        except Exception:
            logger.exception("Pose detection failed")
            pose = None
        on_pose_detected(pose, w, h)

    def close(self) -> None:
        """Release MediaPipe resources."""
        self._landmarker.close()
