"""Tests for the MediaPipe wrapper that need no model file."""
import unittest
from unittest import mock

import numpy as np

from breaking_silence import pose_tracker
from breaking_silence.pose import Point, Pose


class TestResolveModelPath(unittest.TestCase):
    def test_missing_model_raises(self):
        with mock.patch.object(pose_tracker, "POSE_MODEL_PATH", "/nonexistent/pose.task"):
            with self.assertRaises(FileNotFoundError):
                pose_tracker.resolve_model_path()


class TestDetectPose(unittest.TestCase):
    def setUp(self):
        # Skip __init__ so no landmarker is created.
        self.tracker = pose_tracker.PoseTracker.__new__(pose_tracker.PoseTracker)
        self.frame = np.zeros((48, 64, 3), dtype=np.uint8)
        self.calls = []

    def callback(self, pose, width, height):
        self.calls.append((pose, width, height))

    def test_reports_pose_with_image_size(self):
        pose = Pose(landmarks={15: Point(1, 2)})
        with mock.patch.object(self.tracker, "process", return_value=pose):
            self.tracker.detect_pose(self.frame, self.callback)
        self.assertEqual(self.calls, [(pose, 64, 48)])

    def test_failure_reports_none(self):
        with mock.patch.object(self.tracker, "process", side_effect=RuntimeError("boom")):
            with self.assertLogs("breaking_silence.pose", level="ERROR"):
                self.tracker.detect_pose(self.frame, self.callback)
        self.assertEqual(self.calls, [(None, 64, 48)])


if __name__ == "__main__":
    unittest.main()
