"""
Scan loop without the GUI: OpenCV window or fully headless.

Wires together:
  Camera  ->  FrameAnalyzer (PoseTracker -> gesture classifier)
          ->  overlay  ->  cv2.imshow
          ->  JSON line on stdout whenever the gesture label changes

Keys: ``q`` quits, ``c`` switches between the back and front camera.
Set ``HEADLESS=1`` to skip the window.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import threading
import time
from typing import TextIO

import cv2

from breaking_silence.analyzer import AnalysisResult, FrameAnalyzer
from breaking_silence.camera import Camera, CameraUnavailableError
from breaking_silence.config import CAMERA_MAX_READ_FAILURES, LOG_DATEFMT, LOG_FORMAT, LOG_LEVEL
from breaking_silence.overlay import draw_overlay, draw_viewfinder

logger = logging.getLogger("breaking_silence.cli")

_WINDOW_TITLE = "Breaking Silence - Scan"


def emit_json(gesture: str, timestamp: float, stream: TextIO | None = None) -> None:
    """Write one gesture change as a JSON line."""
    stream = stream or sys.stdout
    payload = {"gesture": gesture, "timestamp": round(timestamp, 3)}
    stream.write(json.dumps(payload) + "\n")
    stream.flush()


class GestureReporter:
    """Keeps the latest analysis and reports label changes."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()
        self._latest: AnalysisResult | None = None
        self._last_gesture: str | None = None

    @property
    def latest(self) -> AnalysisResult | None:
        with self._lock:
            return self._latest

    def reset(self) -> None:
        with self._lock:
            self._latest = None

    def __call__(self, result: AnalysisResult) -> None:
        with self._lock:
            self._latest = result
            changed = result.gesture != self._last_gesture
            self._last_gesture = result.gesture
        if changed:
            emit_json(result.gesture, result.timestamp, self._stream)


def switch_camera(camera: Camera, reporter: GestureReporter) -> bool:
    """Switch to the other camera.

    A camera that fails to open is logged and the current one is kept.
    Returns ``False`` only when no camera is bound afterwards.
    """
    try:
        selector = camera.switch()
    except CameraUnavailableError as exc:
        logger.error("%s", exc)
        return camera.is_bound
    reporter.reset()
    logger.info("Switched to %s camera", selector.name.lower())
    return True


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    # MediaPipe loads slowly; keep it out of module import.
    from breaking_silence.pose_tracker import PoseTracker

    headless = os.environ.get("HEADLESS", "0") in ("1", "true", "True")

    camera = Camera()
    try:
        camera.bind()
    except CameraUnavailableError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    try:
        tracker = PoseTracker()
    except FileNotFoundError as exc:
        camera.release()
        logger.error("%s", exc)
        sys.exit(1)

    reporter = GestureReporter()
    analyzer = FrameAnalyzer(tracker, reporter)
    logger.info("Scan started. Press 'q' to quit, 'c' to switch camera.")

    failures = 0
    try:
        while True:
            ok, frame = camera.read()
            if not ok:
                failures += 1
                if failures >= CAMERA_MAX_READ_FAILURES:
                    logger.error("Camera stopped delivering frames")
                    break
                time.sleep(0.01)
                continue
            failures = 0

            analyzer.analyze(frame.copy())

            if headless:
                # Don't spin at full CPU if frames arrive faster than needed.
                time.sleep(0.01)
                continue

            latest = reporter.latest
            if latest is not None:
                draw_overlay(frame, latest.pose, (latest.width, latest.height), latest.gesture)
            draw_viewfinder(frame)
            cv2.imshow(_WINDOW_TITLE, frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord("q"):
                break
            if key == ord("c"):
                if not switch_camera(camera, reporter):
                    break
    except KeyboardInterrupt:
        pass
    finally:
        analyzer.close()
        camera.release()
        if not headless:
            cv2.destroyAllWindows()
        logger.info(
            "Scan stopped (%d analysed, %d dropped)",
            analyzer.analyzed_frames,
            analyzer.dropped_frames,
        )


if __name__ == "__main__":
    main()
