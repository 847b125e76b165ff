"""
Frame analyzer: the callback chain between the camera and the UI.

A single worker thread runs pose detection and classification.  While it is
busy, new frames are dropped rather than queued (keep-only-latest), so the
displayed result never lags behind the camera by more than one frame.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import numpy as np

from breaking_silence.config import ANALYSIS_HEIGHT, ANALYSIS_WIDTH
from breaking_silence.gesture_classifier import classify
from breaking_silence.image_utils import resize_for_analysis
from breaking_silence.pose import Pose, PoseCallback

logger = logging.getLogger("breaking_silence.analyzer")


class Detector(Protocol):
    def detect_pose(self, bgr_frame: np.ndarray, on_pose_detected: PoseCallback) -> None: ...

    def close(self) -> None: ...


@dataclass
class AnalysisResult:
    """Outcome of analysing one frame."""

    pose: Optional[Pose]
    gesture: str
    # Size of the image the landmarks refer to.
    width: int
    height: int
    timestamp: float


class FrameAnalyzer:
    """Run detection on at most one frame at a time."""

    def __init__(
        self,
        detector: Detector,
        on_result: Callable[[AnalysisResult], None],
        analysis_size: tuple[int, int] = (ANALYSIS_WIDTH, ANALYSIS_HEIGHT),
    ) -> None:
        self._detector = detector
        self._on_result = on_result
        self._analysis_size = analysis_size
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pose-analyzer")
        self._lock = threading.Lock()
        self._busy = False
        self._closed = False
        self.analyzed_frames = 0
        self.dropped_frames = 0

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._busy

    def analyze(self, frame: np.ndarray) -> bool:
        """Submit *frame* for analysis.

        Returns ``False`` (and drops the frame) when the previous frame is
        still being processed or the analyzer is closed.
        """
        with self._lock:
            if self._closed or self._busy:
                self.dropped_frames += 1
                return False
            self._busy = True
        self._executor.submit(self._run, frame)
        return True

    def _run(self, frame: np.ndarray) -> None:
        try:
            small = resize_for_analysis(frame, *self._analysis_size)
            self._detector.detect_pose(small, self._deliver)
        except Exception:
            logger.exception("Frame analysis failed")
        finally:
            with self._lock:
                self._busy = False
                self.analyzed_frames += 1

    def _deliver(self, pose: Pose | None, width: int, height: int) -> None:
        result = AnalysisResult(
            pose=pose,
            gesture=classify(pose),
            width=width,
            height=height,
            timestamp=time.time(),
        )
        self._on_result(result)

    def close(self, close_detector: bool = True) -> None:
        """Stop accepting frames, wait for the worker and close the detector."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)
        if close_detector:
            self._detector.close()
