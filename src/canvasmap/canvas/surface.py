"""
Drawing Surface
===============
A pixel buffer (QImage) and the long-lived QPainter drawing on it.

The host widget blits `image` in its paintEvent; the viewport, the grid and the
elements all keep a reference to the same `painter`, which stays valid across
resizes because the painter object is rebound to the new buffer.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPainter

logger = logging.getLogger(__name__)

IMAGE_FORMAT = QImage.Format.Format_ARGB32_Premultiplied


class DrawingSurface:
    def __init__(self, width: int, height: int, antialiasing: bool = True) -> None:
        self._antialiasing = antialiasing
        self._image = self._new_image(width, height)
        self._painter = QPainter()
        self._begin()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._image.width()

    @property
    def height(self) -> int:
        return self._image.height()

    @property
    def image(self) -> QImage:
        return self._image

    @property
    def painter(self) -> QPainter:
        """
        The 2D drawing context.

        Raises:
            RuntimeError: If the painter is not bound to the buffer.
        """
        if not self._painter.isActive():
            raise RuntimeError("2D drawing context not available (painter is not active).")
        return self._painter

    def is_active(self) -> bool:
        return self._painter.isActive()

    def resize(self, width: int, height: int) -> None:
        """Reallocate the buffer, keeping the same painter object."""
        if width == self.width and height == self.height:
            return
        if self._painter.isActive():
            self._painter.end()
        self._image = self._new_image(width, height)
        self._begin()
        logger.debug(f"Surface resized to {self.width}x{self.height}")

    def close(self) -> None:
        if self._painter.isActive():
            self._painter.end()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    @staticmethod
    def _new_image(width: int, height: int) -> QImage:
        image = QImage(max(1, int(width)), max(1, int(height)), IMAGE_FORMAT)
        image.fill(Qt.GlobalColor.transparent)
        return image

    def _begin(self) -> None:
        if not self._painter.begin(self._image):
            raise RuntimeError("Could not bind a QPainter to the drawing surface.")
        self._painter.setRenderHint(QPainter.RenderHint.Antialiasing, self._antialiasing)
