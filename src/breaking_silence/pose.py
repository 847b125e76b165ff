"""Per-frame pose data shared by the tracker, classifier and overlay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, NamedTuple, Optional

from breaking_silence.config import MIN_LANDMARK_VISIBILITY


class Point(NamedTuple):
    """A landmark position in image pixels (y grows downward)."""

    x: float
    y: float


@dataclass(frozen=True)
class Pose:
    """Detected landmarks for one frame, keyed by BlazePose landmark id.

    Only landmarks that were visible enough are stored, so a missing key
    means "not detected".
    """

    landmarks: dict[int, Point] = field(default_factory=dict)

    def get(self, landmark_id: int) -> Point | None:
        return self.landmarks.get(landmark_id)

    @property
    def all_landmarks(self) -> list[tuple[int, Point]]:
        return sorted(self.landmarks.items())

    @property
    def is_empty(self) -> bool:
        return not self.landmarks


# (pose or None, analysed image width, analysed image height)
PoseCallback = Callable[[Optional[Pose], int, int], None]


def pose_from_landmarks(
    landmarks: Iterable,
    width: int,
    height: int,
    min_visibility: float = MIN_LANDMARK_VISIBILITY,
) -> Pose:
    """Convert a list of normalised landmarks into a pixel-space ``Pose``.

    Landmarks without a visibility score are kept.
    """
    points: dict[int, Point] = {}
    for idx, lm in enumerate(landmarks):
        visibility = getattr(lm, "visibility", None)
        if visibility is not None and visibility < min_visibility:
            continue
        points[idx] = Point(float(lm.x) * width, float(lm.y) * height)
    return Pose(landmarks=points)
