"""Tests for the keep-only-latest frame analyzer, using a fake detector."""
import threading
import unittest

import numpy as np

from breaking_silence import config
from breaking_silence.analyzer import FrameAnalyzer
from breaking_silence.pose import Point, Pose


class FakeDetector:
    """Stands in for the pose tracker; blocks until ``gate`` is set."""

    def __init__(self, pose=None, fail=False):
        self.pose = pose
        self.fail = fail
        self.gate = threading.Event()
        self.gate.set()
        self.shapes = []
        self.closed = 0

    def detect_pose(self, bgr_frame, on_pose_detected):
        self.gate.wait(timeout=5)
        self.shapes.append(bgr_frame.shape)
        if self.fail:
            raise RuntimeError("boom")
        h, w = bgr_frame.shape[:2]
        on_pose_detected(self.pose, w, h)

    def close(self):
        self.closed += 1


class TestFrameAnalyzer(unittest.TestCase):
    def setUp(self):
        self.results = []
        self.frame = np.zeros((720, 1280, 3), dtype=np.uint8)

    def make(self, detector):
        analyzer = FrameAnalyzer(detector, self.results.append, analysis_size=(640, 480))
        self.addCleanup(analyzer.close)
        return analyzer

    def test_no_pose_reports_no_hand(self):
        analyzer = self.make(FakeDetector(pose=None))
        self.assertTrue(analyzer.analyze(self.frame))
        analyzer.close()
        self.assertEqual(len(self.results), 1)
        self.assertEqual(self.results[0].gesture, config.LABEL_NO_HAND)
        self.assertIsNone(self.results[0].pose)

    def test_frames_are_downscaled(self):
        detector = FakeDetector()
        analyzer = self.make(detector)
        analyzer.analyze(self.frame)
        analyzer.close()
        self.assertEqual(detector.shapes, [(360, 640, 3)])
        self.assertEqual((self.results[0].width, self.results[0].height), (640, 360))

    def test_pose_is_classified(self):
        pose = Pose(
            landmarks={
                config.LEFT_WRIST: Point(200, 200),
                config.LEFT_THUMB: Point(200, 100),
                config.LEFT_INDEX: Point(210, 210),
            }
        )
        analyzer = self.make(FakeDetector(pose=pose))
        analyzer.analyze(self.frame)
        analyzer.close()
        self.assertEqual(self.results[0].gesture, config.GESTURE_THUMBS_UP)

    def test_frames_dropped_while_busy(self):
        detector = FakeDetector()
        detector.gate.clear()
        analyzer = self.make(detector)

        self.assertTrue(analyzer.analyze(self.frame))
        self.assertTrue(analyzer.busy)
        self.assertFalse(analyzer.analyze(self.frame))
        self.assertFalse(analyzer.analyze(self.frame))

        detector.gate.set()
        analyzer.close()
        self.assertEqual(analyzer.dropped_frames, 2)
        self.assertEqual(analyzer.analyzed_frames, 1)
        self.assertEqual(len(self.results), 1)

    def test_detector_error_does_not_wedge(self):
        analyzer = self.make(FakeDetector(fail=True))
        analyzer.analyze(self.frame)
        analyzer.close()
        self.assertFalse(analyzer.busy)
        self.assertEqual(analyzer.analyzed_frames, 1)
        self.assertEqual(self.results, [])

    def test_close_stops_accepting_and_closes_detector_once(self):
        detector = FakeDetector()
        analyzer = self.make(detector)
        analyzer.close()
        analyzer.close()
        self.assertFalse(analyzer.analyze(self.frame))
        self.assertEqual(detector.closed, 1)

    def test_close_can_keep_detector(self):
        detector = FakeDetector()
        analyzer = self.make(detector)
        analyzer.close(close_detector=False)
        self.assertEqual(detector.closed, 0)


if __name__ == "__main__":
    unittest.main()
