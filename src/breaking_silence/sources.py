"""
Frame sources for the camera layer.

Every source exposes the same small interface as ``cv2.VideoCapture``:
``read() -> (ok, frame)``, ``is_opened()`` and ``release()``.  Frames are
BGR numpy arrays.

* :class:`OpenCVSource`: local webcams, device paths, RTSP.
* :class:`MJPEGSource`: persistent ``multipart/x-mixed-replace`` stream,
  e.g. a phone running an IP-camera app.
* :class:`HTTPImageSource`: endpoints that return one JPEG per request.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol, Tuple, Union

import cv2
import httpx
import numpy as np

from breaking_silence.config import (
    CAMERA_HEIGHT,
    CAMERA_WIDTH,
    HTTP_POLL_TIMEOUT_S,
    HTTP_PROBE_TIMEOUT_S,
    MJPEG_TIMEOUT_S,
)

logger = logging.getLogger("breaking_silence.sources")

FrameResult = Tuple[bool, Union[np.ndarray, None]]

_JPEG_SOI = b"\xff\xd8"
_JPEG_EOI = b"\xff\xd9"

# Bound on buffered MJPEG bytes in case the stream is malformed.
_MAX_MJPEG_BUFFER = 2_000_000


class FrameSource(Protocol):
    def read(self) -> FrameResult: ...

    def is_opened(self) -> bool: ...

    def release(self) -> None: ...


def decode_jpeg(data: bytes) -> np.ndarray | None:
    """Decode JPEG bytes into a BGR frame, or ``None`` if undecodable."""
    if not data:
        return None
    arr = np.frombuffer(data, dtype=np.uint8)
    return cv2.imdecode(arr, cv2.IMREAD_COLOR)


def extract_jpeg(buffer: bytearray) -> bytes | None:
    """Pop the first complete JPEG (SOI..EOI) out of *buffer*.

    Bytes before and including the extracted image are removed.  Returns
    ``None`` and leaves the buffer untouched when no full image is present.
    """
    start = buffer.find(_JPEG_SOI)
    if start == -1:
        return None
    end = buffer.find(_JPEG_EOI, start + 2)
    if end == -1:
        return None
    jpeg = bytes(buffer[start : end + 2])
    del buffer[: end + 2]
    return jpeg


def is_mjpeg_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    ct = content_type.lower()
    return (
        "multipart/x-mixed-replace" in ct
        or "multipart/mixed" in ct
        or "motion-jpeg" in ct
        or "mjpeg" in ct
    )


def probe_content_type(url: str, timeout: float = HTTP_PROBE_TIMEOUT_S) -> tuple[int, str]:
    """Return (status_code, content_type) for an HTTP camera URL."""
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        with client.stream("GET", url) as response:
            return response.status_code, response.headers.get("content-type", "")


# ---------------------------------------------------------------------------
# OpenCV
# ---------------------------------------------------------------------------

class OpenCVSource:
    """``cv2.VideoCapture`` with the preferred capture resolution applied."""

    def __init__(
        self,
        src: int | str,
        width: int = CAMERA_WIDTH,
        height: int = CAMERA_HEIGHT,
    ) -> None:
        self.src = src
        self._cap = cv2.VideoCapture(src)
        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)

    def read(self) -> FrameResult:
        ok, frame = self._cap.read()
        if not ok or frame is None:
            return False, None
        return True, frame

    def is_opened(self) -> bool:
        return bool(self._cap.isOpened())

    def release(self) -> None:
        self._cap.release()


# ---------------------------------------------------------------------------
# MJPEG over HTTP
# ---------------------------------------------------------------------------

class MJPEGSource:
    """Persistent multipart MJPEG reader.

    Frames are cut out of the byte stream by scanning for JPEG SOI/EOI
    markers, which works across most MJPEG implementations regardless of
    the multipart boundary they use.
    """

    def __init__(
        self,
        url: str,
        timeout: float = MJPEG_TIMEOUT_S,
        read_chunk_size: int = 8192,
        client: httpx.Client | None = None,
    ) -> None:
        self.url = url
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._stream_cm = self._client.stream("GET", self.url)
        self._response = self._stream_cm.__enter__()
        self.content_type = self._response.headers.get("content-type", "")
        self._closed = False

        if self._response.status_code != 200:
            self.release()
            raise RuntimeError(f"MJPEG endpoint returned HTTP {self._response.status_code}")

        self._chunks = self._response.iter_bytes(chunk_size=read_chunk_size)
        self._buffer = bytearray()

    def read(self, max_wait_s: float = 2.0) -> FrameResult:
        if self._closed:
            return False, None

        deadline = time.monotonic() + max_wait_s
        while time.monotonic() < deadline:
            jpeg = extract_jpeg(self._buffer)
            if jpeg is not None:
                frame = decode_jpeg(jpeg)
                if frame is not None:
                    return True, frame
                logger.debug("Skipping undecodable MJPEG frame (%d bytes)", len(jpeg))
                continue

            try:
                chunk = next(self._chunks)
            except StopIteration:
                logger.info("MJPEG stream ended: %s", self.url)
                return False, None
            except httpx.HTTPError as exc:
                logger.warning("MJPEG stream error: %s", exc)
                return False, None

            self._buffer.extend(chunk)
            if len(self._buffer) > _MAX_MJPEG_BUFFER:
                # Keep the newest bytes only.
                del self._buffer[:-_MAX_MJPEG_BUFFER]

        return False, None

    def is_opened(self) -> bool:
        return not self._closed

    def release(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._stream_cm.__exit__(None, None, None)
        finally:
            self._client.close()


# ---------------------------------------------------------------------------
# Single-image HTTP polling
# ---------------------------------------------------------------------------

class HTTPImageSource:
    """Poll a URL that serves one JPEG per GET."""

    def __init__(
        self,
        url: str,
        timeout: float = HTTP_POLL_TIMEOUT_S,
        client: httpx.Client | None = None,
    ) -> None:
        self.url = url
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._closed = False

    def read(self) -> FrameResult:
        if self._closed:
            return False, None
        try:
            response = self._client.get(self.url)
        except httpx.HTTPError as exc:
            logger.debug("HTTP poll failed: %s", exc)
            return False, None

        if response.status_code != 200:
            return False, None

        frame = decode_jpeg(response.content)
        if frame is None:
            return False, None
        return True, frame

    def is_opened(self) -> bool:
        return not self._closed

    def release(self) -> None:
        if not self._closed:
            self._closed = True
            self._client.close()
