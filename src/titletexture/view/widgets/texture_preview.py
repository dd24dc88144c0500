"""
Texture Preview
Shows the composed texture pixel-exact, with an integer zoom factor.
"""
import logging
from typing import Optional

import numpy as np
from PIL import Image
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QScrollArea, QSpinBox
)

logger = logging.getLogger(__name__)


def pil_to_qimage(image: Image.Image) -> QImage:
    """Deep-copies a PIL image into a QImage (RGBA8888)."""
    rgba = np.ascontiguousarray(np.asarray(image.convert("RGBA")))
    height, width = rgba.shape[:2]
    qimage = QImage(rgba.tobytes(), width, height, 4 * width, QImage.Format.Format_RGBA8888)
    # The constructor does not own the buffer
    return qimage.copy()


class TexturePreview(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._source: Optional[QPixmap] = None

        layout = QVBoxLayout(self)

        # --- Header: zoom + info ---
        header = QHBoxLayout()
        header.addWidget(QLabel("Zoom:"))
        self.spin_zoom = QSpinBox()
        self.spin_zoom.setRange(1, 16)
        self.spin_zoom.setValue(4)
        self.spin_zoom.setSuffix("×")
        self.spin_zoom.valueChanged.connect(self._update_display)
        header.addWidget(self.spin_zoom)
        header.addStretch()
        self.lbl_info = QLabel("")
        self.lbl_info.setStyleSheet("color: gray;")
        header.addWidget(self.lbl_info)
        layout.addLayout(header)

        # --- Image area ---
        self.image_label = QLabel()
        self.image_label.setAlignment(Qt.AlignCenter)

        self.scroll = QScrollArea()
        self.scroll.setWidget(self.image_label)
        self.scroll.setWidgetResizable(True)
        self.scroll.setAlignment(Qt.AlignCenter)
        self.scroll.setStyleSheet("QScrollArea { background: #2b2b2b; }")
        layout.addWidget(self.scroll, 1)

    @property
    def zoom(self) -> int:
        return self.spin_zoom.value()

    def set_image(self, image: Image.Image, info: str = "") -> None:
        self._source = QPixmap.fromImage(pil_to_qimage(image))
        self.lbl_info.setText(info or f"{image.width} × {image.height} px")
        self.lbl_info.setStyleSheet("color: gray;")
        self._update_display()

    def show_error(self, message: str) -> None:
        self._source = None
        self.image_label.clear()
        self.image_label.setText(message)
        self.lbl_info.setText("Error")
        self.lbl_info.setStyleSheet("color: red;")

    def _update_display(self) -> None:
        if self._source is None or self._source.isNull():
            return
        # FastTransformation keeps the pixels square
        scaled = self._source.scaled(
            self._source.width() * self.zoom,
            self._source.height() * self.zoom,
            Qt.IgnoreAspectRatio,
            Qt.FastTransformation,
        )
        self.image_label.setPixmap(scaled)
