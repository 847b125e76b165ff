"""Background capture thread for the scan screen.

Reads frames from the bound camera, hands them to the
:class:`~breaking_silence.analyzer.FrameAnalyzer`, draws the latest result
onto the preview and ships it to the Qt event loop as a ``QImage``.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

import numpy as np
from PyQt6.QtCore import QThread, pyqtSignal
from PyQt6.QtGui import QImage

from breaking_silence.analyzer import AnalysisResult, Detector, FrameAnalyzer
from breaking_silence.camera import Camera, CameraUnavailableError
from breaking_silence.config import CAMERA_MAX_READ_FAILURES
from breaking_silence.image_utils import to_rgb
from breaking_silence.overlay import draw_overlay, draw_viewfinder

logger = logging.getLogger("breaking_silence.worker")


def frame_to_qimage(frame: np.ndarray) -> QImage:
    """Copy a BGR frame into a standalone RGB ``QImage``."""
    rgb = to_rgb(frame)
    h, w = rgb.shape[:2]
    return QImage(rgb.data, w, h, 3 * w, QImage.Format.Format_RGB888).copy()


class CameraWorker(QThread):
    """Capture loop running off the GUI thread.

    Signals
    -------
    frame_ready(QImage)
        A preview frame with the overlay already drawn.
    gesture_changed(str)
        The classified gesture label changed.
    camera_failed(str)
        The camera could not be bound, or stopped delivering frames.
    camera_switched(str)
        The camera was rebound; payload is ``"back"`` or ``"front"``.
    """

    frame_ready = pyqtSignal(QImage)
    gesture_changed = pyqtSignal(str)
    camera_failed = pyqtSignal(str)
    camera_switched = pyqtSignal(str)

    def __init__(
        self,
        camera: Camera,
        detector_factory: Callable[[], Detector],
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._camera = camera
        self._detector_factory = detector_factory
        self._running = True
        self._switch_requested = False
        self._lock = threading.Lock()
        self._latest: AnalysisResult | None = None
        self._last_gesture = ""

    # ── Control (called from the GUI thread) ─────────────────────

    def request_switch(self) -> None:
        self._switch_requested = True

    def stop(self, timeout_ms: int = 3000) -> bool:
        """Ask the loop to finish and wait for the thread to exit.

        Returns ``False`` if the thread is still running after *timeout_ms*,
        e.g. while a slow network camera is being opened.
        """
        self._running = False
        if self.wait(timeout_ms):
            return True
        logger.warning("Capture thread still running after %d ms", timeout_ms)
        return False

    # ── Analyzer callback (runs on the analyzer thread) ──────────

    def _on_result(self, result: AnalysisResult) -> None:
        with self._lock:
            self._latest = result
        if result.gesture != self._last_gesture:
            self._last_gesture = result.gesture
            self.gesture_changed.emit(result.gesture)

    # ── QThread entry point ──────────────────────────────────────

    def run(self) -> None:
        try:
            self._camera.bind()
        except CameraUnavailableError as exc:
            self.camera_failed.emit(str(exc))
            return

        try:
            detector = self._detector_factory()
        except Exception as exc:
            logger.exception("Could not start the pose detector")
            self._camera.release()
            self.camera_failed.emit(str(exc))
            return

        analyzer = FrameAnalyzer(detector, self._on_result)
        failures = 0
        try:
            while self._running:
                if self._switch_requested:
                    self._switch_requested = False
                    try:
                        selector = self._camera.switch()
                    except CameraUnavailableError as exc:
                        if not self._camera.is_bound:
                            self.camera_failed.emit(str(exc))
                            return
                        # Still on the previous camera.
                        logger.warning("Camera switch failed: %s", exc)
                        continue
                    with self._lock:
                        self._latest = None
                    self.camera_switched.emit(selector.name.lower())

                ok, frame = self._camera.read()
                if not ok:
                    failures += 1
                    if failures >= CAMERA_MAX_READ_FAILURES:
                        logger.error("Camera stopped delivering frames")
                        self.camera_failed.emit("Camera stopped delivering frames")
                        return
                    self.msleep(10)
                    continue
                failures = 0

                # The analyzer keeps its own copy; the preview is drawn on.
                analyzer.analyze(frame.copy())

                with self._lock:
                    latest = self._latest
                if latest is not None:
                    draw_overlay(
                        frame,
                        latest.pose,
                        (latest.width, latest.height),
                        latest.gesture,
                    )
                draw_viewfinder(frame)
                self.frame_ready.emit(frame_to_qimage(frame))
        finally:
            analyzer.close()
            self._camera.release()
            logger.info(
                "Capture stopped (%d analysed, %d dropped)",
                analyzer.analyzed_frames,
                analyzer.dropped_frames,
            )
