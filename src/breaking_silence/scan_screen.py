"""Scan screen: live camera preview with gesture overlay.

When the camera cannot be opened the preview is replaced by a permission
prompt whose button retries the binding.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from breaking_silence.analyzer import Detector
from breaking_silence.camera import Camera
from breaking_silence.camera_worker import CameraWorker
from breaking_silence.home_screen import title_bar

logger = logging.getLogger("breaking_silence.scan")

PERMISSION_TEXT = (
    "Camera permission is required for this feature. Please grant the permission."
)
PERMISSION_RATIONALE_TEXT = (
    "Camera access is needed to detect hand gestures. Please grant the permission."
)


def _default_detector():
    # Imported lazily so the window can open without loading MediaPipe.
    from breaking_silence.pose_tracker import PoseTracker

    return PoseTracker()


class ScanScreen(QWidget):
    """Camera preview, detected gesture and navigation back home."""

    _PAGE_PREVIEW = 0
    _PAGE_PERMISSION = 1

    # How long stop() waits for the capture thread before deferring.
    stop_timeout_ms = 3000

    def __init__(
        self,
        on_back_click: Callable[[], None],
        camera_factory: Callable[[], Camera] = Camera,
        detector_factory: Callable[[], Detector] = _default_detector,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._camera_factory = camera_factory
        self._detector_factory = detector_factory
        self._camera: Camera | None = None
        self._worker: CameraWorker | None = None
        # A stopped worker that has not exited yet; it still owns the camera.
        self._stopping: CameraWorker | None = None
        self._start_pending = False
        self._permission_requested = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(title_bar("SCAN"))

        # ── Main content: preview or permission prompt ───────────
        self._pages = QStackedWidget()
        self._pages.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        preview_page = QWidget()
        grid = QGridLayout(preview_page)
        grid.setContentsMargins(0, 0, 0, 0)
        self._preview = QLabel()
        self._preview.setObjectName("preview")
        self._preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview.setMinimumSize(320, 240)
        self._preview.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        grid.addWidget(self._preview, 0, 0)

        self._switch_button = QPushButton("⟲")
        self._switch_button.setObjectName("switchCameraButton")
        self._switch_button.setToolTip("Switch camera")
        self._switch_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self._switch_button.clicked.connect(self._on_switch_clicked)
        grid.addWidget(
            self._switch_button,
            0,
            0,
            alignment=Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignRight,
        )
        self._pages.addWidget(preview_page)

        permission_page = QWidget()
        perm_layout = QVBoxLayout(permission_page)
        perm_layout.setContentsMargins(16, 16, 16, 16)
        perm_layout.addStretch(1)
        self._permission_label = QLabel(PERMISSION_TEXT)
        self._permission_label.setWordWrap(True)
        self._permission_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        perm_layout.addWidget(self._permission_label)
        perm_layout.addSpacing(16)
        self._permission_button = QPushButton("Request Permission")
        self._permission_button.setObjectName("appButton")
        self._permission_button.clicked.connect(self._on_request_permission)
        perm_layout.addWidget(self._permission_button, alignment=Qt.AlignmentFlag.AlignHCenter)
        perm_layout.addStretch(1)
        self._pages.addWidget(permission_page)

        layout.addWidget(self._pages, 1)

        # ── Bottom section: gesture, hand icon, back button ──────
        bottom = QVBoxLayout()
        bottom.setContentsMargins(16, 16, 16, 16)
        bottom.setSpacing(16)

        self._gesture_label = QLabel("")
        self._gesture_label.setObjectName("gestureLabel")
        self._gesture_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        bottom.addWidget(self._gesture_label)

        hand_icon = QLabel("✋")
        hand_icon.setObjectName("handIcon")
        hand_icon.setFixedSize(80, 80)
        hand_icon.setAlignment(Qt.AlignmentFlag.AlignCenter)
        bottom.addWidget(hand_icon, alignment=Qt.AlignmentFlag.AlignHCenter)

        back_row = QHBoxLayout()
        back_button = QPushButton("BACK")
        back_button.setObjectName("backButton")
        back_button.setCursor(Qt.CursorShape.PointingHandCursor)
        back_button.clicked.connect(on_back_click)
        back_row.addStretch(1)
        back_row.addWidget(back_button)
        back_row.addStretch(1)
        bottom.addLayout(back_row)

        layout.addLayout(bottom)

    # ── Lifecycle ────────────────────────────────────────────────

    @property
    def detected_gesture(self) -> str:
        return self._gesture_label.text()

    @property
    def is_capturing(self) -> bool:
        return self._worker is not None

    @property
    def permission_prompt_visible(self) -> bool:
        return self._pages.currentIndex() == self._PAGE_PERMISSION

    @property
    def permission_message(self) -> str:
        return self._permission_label.text()

    def start(self) -> None:
        """Bind the camera and start the capture thread.

        If the previous capture thread is still shutting down, the start is
        deferred until it has released the camera.
        """
        if self._worker is not None:
            return
        if self._stopping is not None:
            self._start_pending = True
            return
        self._pages.setCurrentIndex(self._PAGE_PREVIEW)
        self._camera = self._camera_factory()
        worker = CameraWorker(self._camera, self._detector_factory, parent=self)
        worker.frame_ready.connect(self._on_frame)
        worker.gesture_changed.connect(self._on_gesture_changed)
        worker.camera_failed.connect(self._on_camera_failed)
        worker.camera_switched.connect(self._on_camera_switched)
        worker.finished.connect(self._on_worker_finished)
        self._worker = worker
        worker.start()

    def stop(self) -> None:
        """Stop capturing and release the camera and detector."""
        self._start_pending = False
        worker = self._worker
        if worker is None:
            return
        self._worker = None
        for signal in (
            worker.frame_ready,
            worker.gesture_changed,
            worker.camera_failed,
            worker.camera_switched,
        ):
            signal.disconnect()
        if not worker.stop(self.stop_timeout_ms):
            self._stopping = worker
        self._camera = None
        self._preview.clear()
        self._gesture_label.setText("")

    # ── Slots ────────────────────────────────────────────────────

    def _from_current_worker(self) -> bool:
        # Drops signals queued by a worker that has since been stopped.
        return self._worker is not None and self.sender() is self._worker

    def _on_frame(self, image: QImage) -> None:
        if not self._from_current_worker():
            return
        pixmap = QPixmap.fromImage(image).scaled(
            self._preview.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._preview.setPixmap(pixmap)

    def _on_gesture_changed(self, gesture: str) -> None:
        if self._from_current_worker():
            self._gesture_label.setText(gesture)

    def _on_switch_clicked(self) -> None:
        if self._worker is not None:
            self._worker.request_switch()

    def _on_camera_switched(self, facing: str) -> None:
        logger.info("Switched to %s camera", facing)

    def _on_camera_failed(self, reason: str) -> None:
        if not self._from_current_worker():
            return
        logger.warning("Camera unavailable: %s", reason)
        self._permission_label.setText(
            PERMISSION_RATIONALE_TEXT if self._permission_requested else PERMISSION_TEXT
        )
        self._pages.setCurrentIndex(self._PAGE_PERMISSION)

    def _on_worker_finished(self) -> None:
        worker = self.sender()
        if worker is self._worker:
            self._worker = None
            self._camera = None
        if worker is self._stopping:
            self._stopping = None
            if self._start_pending:
                self._start_pending = False
                self.start()
        if isinstance(worker, CameraWorker):
            worker.deleteLater()

    def _on_request_permission(self) -> None:
        self._permission_requested = True
        self.stop()
        self.start()
