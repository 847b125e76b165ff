"""
Camera binding.

Chooses a frame source for the selected camera, rebinds it when the user
switches between the back and front camera, and turns raw frames upright
(rotation for phone streams, mirroring for the front camera).

On the desktop there is no permission dialog: a camera that cannot be opened
is reported as :class:`CameraUnavailableError`, which the scan screen shows
as a permission prompt.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable

import cv2
import numpy as np

from breaking_silence.config import (
    CAMERA_BACK_INDEX,
    CAMERA_DEVICE_ROTATION,
    CAMERA_FRONT_INDEX,
    CAMERA_SRC,
    MIRROR_FRONT_CAMERA,
)
from breaking_silence.image_utils import (
    LENS_FACING_BACK,
    LENS_FACING_FRONT,
    get_image_rotation,
    rotate_frame,
)
from breaking_silence.sources import (
    FrameSource,
    HTTPImageSource,
    MJPEGSource,
    OpenCVSource,
    is_mjpeg_content_type,
    probe_content_type,
)

logger = logging.getLogger("breaking_silence.camera")


class CameraUnavailableError(RuntimeError):
    """No backend could open the requested camera."""


class CameraSelector(enum.Enum):
    BACK = LENS_FACING_BACK
    FRONT = LENS_FACING_FRONT

    @property
    def lens_facing(self) -> int:
        return self.value

    @property
    def source(self) -> int | str:
        """Device index or URL to open for this camera."""
        if self is CameraSelector.FRONT:
            return CAMERA_FRONT_INDEX
        return parse_source(CAMERA_SRC) if CAMERA_SRC else CAMERA_BACK_INDEX

    def toggled(self) -> CameraSelector:
        if self is CameraSelector.BACK:
            return CameraSelector.FRONT
        return CameraSelector.BACK


def parse_source(src: int | str) -> int | str:
    """Turn ``"0"`` into ``0``; leave URLs and device paths alone."""
    if isinstance(src, int):
        return src
    try:
        return int(src)
    except ValueError:
        return src


def _is_http(src: int | str) -> bool:
    return isinstance(src, str) and src.lower().startswith(("http://", "https://"))


def open_source(src: int | str) -> FrameSource:
    """Open *src* with the first backend that works.

    HTTP URLs try, in order, the MJPEG reader (when the probed content type
    says so), OpenCV, and the single-image poller.  Everything else goes
    straight to OpenCV.
    """
    src = parse_source(src)

    content_type = ""
    if _is_http(src):
        try:
            status_code, content_type = probe_content_type(src)
            logger.info(
                "Camera probe: url=%s status=%s content-type=%s",
                src, status_code, content_type or "unknown",
            )
        except Exception as exc:
            logger.warning("Camera probe failed for %s: %s", src, exc)

        if is_mjpeg_content_type(content_type):
            try:
                source = MJPEGSource(src)
                logger.info("Camera backend selected: mjpeg")
                return source
            except Exception as exc:
                logger.warning("MJPEG backend failed: %s", exc)

    try:
        source = OpenCVSource(src)
        if source.is_opened():
            logger.info("Camera backend selected: opencv (%s)", src)
            return source
        source.release()
    except Exception as exc:
        logger.warning("OpenCV backend failed: %s", exc)

    if _is_http(src):
        poller = HTTPImageSource(src)
        ok, _ = poller.read()
        if ok:
            logger.info("Camera backend selected: http-poller")
            return poller
        poller.release()

    raise CameraUnavailableError(f"Cannot open camera source {src!r}")


class Camera:
    """The bound camera: current selector plus its open frame source."""

    def __init__(
        self,
        selector: CameraSelector = CameraSelector.BACK,
        opener: Callable[[int | str], FrameSource] = open_source,
        device_rotation: int | None = CAMERA_DEVICE_ROTATION,
        mirror_front: bool = MIRROR_FRONT_CAMERA,
    ) -> None:
        self.selector = selector
        self._opener = opener
        self._device_rotation = device_rotation
        self._mirror_front = mirror_front
        self._source: FrameSource | None = None

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    @property
    def is_bound(self) -> bool:
        return self._source is not None

    def bind(self, selector: CameraSelector | None = None) -> None:
        """Unbind the current source and open the one for *selector*.

        If the new camera cannot be opened, the previously bound camera is
        reopened before the error propagates, so a failed switch leaves the
        working camera in place.
        """
        target = selector if selector is not None else self.selector
        previous = self.selector if self.is_bound else None
        self.unbind()
        try:
            self._source = self._opener(target.source)
        except CameraUnavailableError:
            logger.error("Camera binding failed for %s camera", target.name.lower())
            if previous is not None:
                self._rebind(previous)
            raise
        self.selector = target

    def _rebind(self, selector: CameraSelector) -> None:
        try:
            self._source = self._opener(selector.source)
        except CameraUnavailableError:
            logger.error("Could not restore the %s camera", selector.name.lower())
            return
        self.selector = selector
        logger.info("Kept the %s camera", selector.name.lower())

    def unbind(self) -> None:
        if self._source is not None:
            try:
                self._source.release()
            finally:
                self._source = None

    def switch(self) -> CameraSelector:
        """Rebind to the other camera and return the new selector."""
        self.bind(self.selector.toggled())
        return self.selector

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    @property
    def rotation(self) -> int:
        if self._device_rotation is None:
            return 0
        return get_image_rotation(self._device_rotation, self.selector.lens_facing)

    def read(self) -> tuple[bool, np.ndarray | None]:
        """Read the next upright frame from the bound source."""
        if self._source is None:
            return False, None
        ok, frame = self._source.read()
        if not ok or frame is None:
            return False, None
        frame = rotate_frame(frame, self.rotation)
        if self._mirror_front and self.selector is CameraSelector.FRONT:
            frame = cv2.flip(frame, 1)
        return True, frame

    def release(self) -> None:
        self.unbind()
