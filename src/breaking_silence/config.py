"""
Configuration constants for hand gesture recognition.

All tunable thresholds, gesture labels, landmark ids, camera and overlay
settings live here so they can be adjusted in one place without touching
detection logic.  Deployment-specific values can be overridden through
environment variables; a ``.env`` file in the working directory is loaded
on import.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Gesture labels (shown on screen and written as JSON by the scan CLI)
# ---------------------------------------------------------------------------
LABEL_NO_HAND = "No hand detected"
LABEL_UNKNOWN = "Unknown Gesture"

GESTURE_POINTING = "Pointing"
GESTURE_OPEN_PALM = "Open Palm"
GESTURE_CLOSED_FIST = "Closed Fist"
GESTURE_PEACE_SIGN = "Peace Sign"
GESTURE_THUMBS_UP = "Thumbs Up"

SIGN_LETTER_A = "Sign: Letter A"
SIGN_LETTER_B = "Sign: Letter B"
SIGN_LETTER_C = "Sign: Letter C"
SIGN_NUMBER_1 = "Sign: Number 1"
SIGN_NUMBER_2 = "Sign: Number 2"
SIGN_NUMBER_3 = "Sign: Number 3"
SIGN_NUMBER_5 = "Sign: Number 5"

BASIC_GESTURES = [
    GESTURE_POINTING,
    GESTURE_OPEN_PALM,
    GESTURE_CLOSED_FIST,
    GESTURE_PEACE_SIGN,
    GESTURE_THUMBS_UP,
]

SIGN_GESTURES = [
    SIGN_LETTER_A,
    SIGN_LETTER_B,
    SIGN_LETTER_C,
    SIGN_NUMBER_1,
    SIGN_NUMBER_2,
    SIGN_NUMBER_3,
    SIGN_NUMBER_5,
]

# ---------------------------------------------------------------------------
# Pose landmark indices (BlazePose numbering, 33 landmarks in total).
# Only the eight hand points are used for classification.
# ---------------------------------------------------------------------------
LEFT_WRIST = 15
RIGHT_WRIST = 16
LEFT_PINKY = 17
RIGHT_PINKY = 18
LEFT_INDEX = 19
RIGHT_INDEX = 20
LEFT_THUMB = 21
RIGHT_THUMB = 22

LEFT_HAND = (LEFT_WRIST, LEFT_THUMB, LEFT_INDEX, LEFT_PINKY)
RIGHT_HAND = (RIGHT_WRIST, RIGHT_THUMB, RIGHT_INDEX, RIGHT_PINKY)

HAND_LANDMARK_TYPES = [*LEFT_HAND, *RIGHT_HAND]

HAND_CONNECTIONS = [
    # Wrist to thumb
    (LEFT_WRIST, LEFT_THUMB),
    (RIGHT_WRIST, RIGHT_THUMB),
    # Wrist to pinky
    (LEFT_WRIST, LEFT_PINKY),
    (RIGHT_WRIST, RIGHT_PINKY),
    # Wrist to index
    (LEFT_WRIST, LEFT_INDEX),
    (RIGHT_WRIST, RIGHT_INDEX),
    # Across the knuckles
    (LEFT_PINKY, LEFT_INDEX),
    (RIGHT_PINKY, RIGHT_INDEX),
    # Thumb to index
    (LEFT_THUMB, LEFT_INDEX),
    (RIGHT_THUMB, RIGHT_INDEX),
]

# ---------------------------------------------------------------------------
# MediaPipe Pose Landmarker configuration
# ---------------------------------------------------------------------------
MP_NUM_POSES = 1
MP_MIN_DETECTION_CONFIDENCE = 0.5
MP_MIN_PRESENCE_CONFIDENCE = 0.5
MP_MIN_TRACKING_CONFIDENCE = 0.5

# A landmark whose visibility score is below this value is treated as
# missing, so the per-hand "complete" checks have something to reject.
MIN_LANDMARK_VISIBILITY = float(os.environ.get("MIN_LANDMARK_VISIBILITY", "0.5"))

# Model bundle; defaults to a file next to the package.
POSE_MODEL_PATH = os.environ.get("BREAKING_SILENCE_POSE_MODEL")
POSE_MODEL_FILENAME = "pose_landmarker_full.task"

# ---------------------------------------------------------------------------
# Gesture thresholds.  Positions are in image pixels.
# ---------------------------------------------------------------------------
# A finger whose tip is closer than this to the wrist is considered curled.
CURLED_MAX_DIST_PX = 50.0

# Letter A: horizontal thumb offset from the wrist (sign flips per hand).
SIGN_A_THUMB_OFFSET = 0.1

# Letter B: minimum index/pinky distance from the wrist and how far the
# index must sit above it.
SIGN_B_MIN_FINGER_DIST = 0.15
SIGN_B_MIN_INDEX_LIFT = 0.1

# Letter C: curved hand.  Angles are measured at the thumb, in degrees.
SIGN_C_THUMB_INDEX_MIN_DEG = 30.0
SIGN_C_THUMB_INDEX_MAX_DEG = 90.0
SIGN_C_THUMB_PINKY_MIN_DEG = 120.0

# Number 3: thumb, index and middle extended.
SIGN_3_THUMB_INDEX_MIN_DEG = 30.0
SIGN_3_THUMB_PINKY_MIN_DEG = 60.0

# ---------------------------------------------------------------------------
# Camera
# ---------------------------------------------------------------------------
# Device indices for the "back" (default) and "front" cameras.  Most
# desktops only have one webcam; set both to 0 and the switch button
# simply rebinds it.
CAMERA_BACK_INDEX = int(os.environ.get("CAMERA_BACK_INDEX", "0"))
CAMERA_FRONT_INDEX = int(os.environ.get("CAMERA_FRONT_INDEX", "1"))

# Optional network source (MJPEG / single-JPEG URL, RTSP, or device path).
# When set it replaces the back camera.
CAMERA_SRC = os.environ.get("CAMERA_SRC")

CAMERA_WIDTH = 1280
CAMERA_HEIGHT = 720

# Frames are downscaled to this resolution before pose detection.
ANALYSIS_WIDTH = 640
ANALYSIS_HEIGHT = 480

# Physical rotation of the capturing device (0/90/180/270).  Unset for a
# desktop webcam; set it when streaming from a phone so frames are turned
# upright before detection.
_device_rotation = os.environ.get("CAMERA_DEVICE_ROTATION")
CAMERA_DEVICE_ROTATION = int(_device_rotation) if _device_rotation else None

# Mirror front-camera frames so the preview feels like a mirror.
MIRROR_FRONT_CAMERA = True

# Timeouts (seconds) for HTTP camera sources.
HTTP_PROBE_TIMEOUT_S = 2.0
MJPEG_TIMEOUT_S = 5.0
HTTP_POLL_TIMEOUT_S = 2.0

# Consecutive failed reads after which the camera is reported as lost.
CAMERA_MAX_READ_FAILURES = 100

# ---------------------------------------------------------------------------
# Overlay / visualisation (BGR colours)
# ---------------------------------------------------------------------------
OVERLAY_LANDMARK_COLOR = (0, 0, 255)       # red dots
OVERLAY_LANDMARK_RADIUS = 8
OVERLAY_CONNECTION_COLOR = (0, 255, 0)     # green skeleton
OVERLAY_CONNECTION_THICKNESS = 3
OVERLAY_GESTURE_COLOR = (0, 255, 0)        # green label
OVERLAY_GESTURE_TOP = 50
OVERLAY_FONT_SCALE = 1.0
OVERLAY_THICKNESS = 2
OVERLAY_DEBUG_COLOR = (255, 200, 0)
OVERLAY_VIEWFINDER_COLOR = (209, 206, 0)   # turquoise
OVERLAY_VIEWFINDER_SIZE = 250

# Show the hand-geometry readout at the bottom of the frame.
OVERLAY_DEBUG = os.environ.get("OVERLAY_DEBUG", "0") in ("1", "true", "True")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s  %(name)-24s  %(levelname)-7s  %(message)s"
LOG_DATEFMT = "%H:%M:%S"
