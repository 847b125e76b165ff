"""Tests for the HTTP frame sources, served by an in-process mock transport."""
import unittest

import cv2
import httpx
import numpy as np

from breaking_silence.sources import (
    HTTPImageSource,
    MJPEGSource,
    decode_jpeg,
    extract_jpeg,
    is_mjpeg_content_type,
)


def make_jpeg(width=8, height=6):
    ok, buf = cv2.imencode(".jpg", np.full((height, width, 3), 128, dtype=np.uint8))
    assert ok
    return buf.tobytes()


def mock_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestJpegHelpers(unittest.TestCase):
    def test_extract_pops_first_image(self):
        buffer = bytearray(b"--frame\r\n\xff\xd8abc\xff\xd9\r\nrest")
        self.assertEqual(extract_jpeg(buffer), b"\xff\xd8abc\xff\xd9")
        self.assertEqual(bytes(buffer), b"\r\nrest")

    def test_extract_waits_for_end_marker(self):
        buffer = bytearray(b"\xff\xd8partial")
        self.assertIsNone(extract_jpeg(buffer))
        self.assertEqual(bytes(buffer), b"\xff\xd8partial")

    def test_decode(self):
        frame = decode_jpeg(make_jpeg())
        self.assertEqual(frame.shape, (6, 8, 3))
        self.assertIsNone(decode_jpeg(b""))

    def test_content_types(self):
        self.assertTrue(is_mjpeg_content_type("multipart/x-mixed-replace; boundary=frame"))
        self.assertTrue(is_mjpeg_content_type("video/x-motion-jpeg"))
        self.assertFalse(is_mjpeg_content_type("image/jpeg"))
        self.assertFalse(is_mjpeg_content_type(None))


class TestHTTPImageSource(unittest.TestCase):
    def test_reads_frame(self):
        jpeg = make_jpeg()
        source = HTTPImageSource("http://cam/shot.jpg", client=mock_client(
            lambda request: httpx.Response(200, content=jpeg)
        ))
        ok, frame = source.read()
        self.assertTrue(ok)
        self.assertEqual(frame.shape, (6, 8, 3))

    def test_error_status(self):
        source = HTTPImageSource("http://cam/shot.jpg", client=mock_client(
            lambda request: httpx.Response(503)
        ))
        self.assertEqual(source.read(), (False, None))

    def test_undecodable_body(self):
        source = HTTPImageSource("http://cam/shot.jpg", client=mock_client(
            lambda request: httpx.Response(200, content=b"not a jpeg")
        ))
        self.assertEqual(source.read(), (False, None))

    def test_released(self):
        source = HTTPImageSource("http://cam/shot.jpg", client=mock_client(
            lambda request: httpx.Response(200, content=make_jpeg())
        ))
        source.release()
        self.assertFalse(source.is_opened())
        self.assertEqual(source.read(), (False, None))


class TestMJPEGSource(unittest.TestCase):
    def test_reads_frames_until_stream_ends(self):
        jpeg = make_jpeg()
        part = b"--frame\r\nContent-Type: image/jpeg\r\n\r\n" + jpeg + b"\r\n"

        def handler(request):
            return httpx.Response(
                200,
                headers={"content-type": "multipart/x-mixed-replace; boundary=frame"},
                content=part * 2,
            )

        source = MJPEGSource("http://cam/video", read_chunk_size=64, client=mock_client(handler))
        self.assertTrue(is_mjpeg_content_type(source.content_type))
        for _ in range(2):
            ok, frame = source.read()
            self.assertTrue(ok)
            self.assertEqual(frame.shape, (6, 8, 3))
        self.assertEqual(source.read(), (False, None))
        source.release()
        self.assertFalse(source.is_opened())

    def test_error_status_raises(self):
        with self.assertRaises(RuntimeError):
            MJPEGSource("http://cam/video", client=mock_client(lambda request: httpx.Response(404)))


if __name__ == "__main__":
    unittest.main()
