from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QPointF, QRectF
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPainterPath, QPen

from canvasmap.canvas.draw import painter_state
from canvasmap.canvas.elem.base import Elem2D

PATTERN_SIZE = 100.0


@dataclass
class HuePattern:
    """
    A grid of `divisions` x `divisions` cells sweeping the hue wheel, with a
    caption on top. Used to check rotation and orientation on the map.
    """
    divisions: int = 5
    caption: str = "test-elem"
    font_px: int = 14

    def paint_local(self, painter: QPainter, width: float, height: float, alpha: float) -> None:
        n = self.divisions
        dh = 360.0 / (n * n + 1)
        cell_w = width / n
        cell_h = height / n

        with painter_state(painter):
            painter.setOpacity(alpha)
            hue = 0.0
            for j in range(n):
                y = cell_h * j
                for i in range(n):
                    x = cell_w * i
                    painter.fillRect(QRectF(x, y, cell_w, cell_h), QColor.fromHslF(hue / 360.0, 1.0, 0.5))
                    hue += dh

            if self.caption:
                self._paint_caption(painter)

    def _paint_caption(self, painter: QPainter) -> None:
        font = QFont("sans-serif")
        font.setPixelSize(self.font_px)

        text = QPainterPath()
        text.addText(QPointF(21.0, 14.0), font, self.caption)
        painter.strokePath(text, QPen(QColor("#000000"), 2.0))
        painter.fillPath(text, QBrush(QColor("#ffffff")))


def pattern_elem(ctx: QPainter, **options) -> Elem2D:
    """
    Create the 100x100 hue test pattern, rotating around its middle.

    Size and pivot are fixed; any other `Elem2DOptions` field can be given.
    """
    options.update(
        width=PATTERN_SIZE,
        height=PATTERN_SIZE,
        center_x=PATTERN_SIZE / 2,
        center_y=PATTERN_SIZE / 2,
    )
    return Elem2D(ctx, HuePattern(), **options)
