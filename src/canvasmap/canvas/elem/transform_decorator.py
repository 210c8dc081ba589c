"""
Transform Decorator
===================
Visualises the transform of another element: its local bounds (dashed), its
local axes starting at the pivot (x in red, y in green) and the pivot itself.

The decorator holds a reference to the target and reads its transform at draw
time, so it follows the target without copying any state.
"""
from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPen

from canvasmap.canvas.draw import painter_state
from canvasmap.canvas.elem.base import Elem2D


@dataclass(frozen=True)
class DecoratorStyle:
    bounds_color: str = "#333333"
    x_axis_color: str = "red"
    y_axis_color: str = "green"
    pivot_color: str = "blue"
    line_width: float = 1.5
    pivot_radius: float = 4.0
    alpha: float = 0.9


class TransformDecorator:
    def __init__(self, ctx: QPainter, target: Elem2D, style: DecoratorStyle | None = None) -> None:
        self.ctx = ctx
        self.target = target
        self.style = style if style is not None else DecoratorStyle()

    @property
    def z(self) -> float:
        return self.target.z

    def draw(self, outline: bool = False) -> None:
        target, style, ctx = self.target, self.style, self.ctx
        w, h = target.width, target.height
        cx, cy = target.center_x, target.center_y
        axis_len = max(w, h) / 2 or 10.0

        with painter_state(ctx):
            ctx.setTransform(target.local_transform(), True)
            ctx.setOpacity(style.alpha)
            ctx.setBrush(Qt.BrushStyle.NoBrush)

            ctx.setPen(self._pen(style.bounds_color, Qt.PenStyle.DashLine))
            ctx.drawRect(QRectF(0.0, 0.0, w, h))

            ctx.setPen(self._pen(style.x_axis_color))
            ctx.drawLine(QPointF(cx, cy), QPointF(cx + axis_len, cy))
            ctx.setPen(self._pen(style.y_axis_color))
            ctx.drawLine(QPointF(cx, cy), QPointF(cx, cy + axis_len))

            ctx.setPen(self._pen(style.pivot_color))
            ctx.drawEllipse(QPointF(cx, cy), style.pivot_radius, style.pivot_radius)

            if outline:
                ctx.setPen(self._pen(style.bounds_color))
                ctx.drawPath(target.shape)

    def is_point_inside(self, x: float, y: float) -> bool:
        return self.target.is_point_inside(x, y)

    def _pen(self, color: str, pen_style: Qt.PenStyle = Qt.PenStyle.SolidLine) -> QPen:
        # cosmetic: width in device pixels whatever the zoom
        pen = QPen(QColor(color), self.style.line_width, pen_style)
        pen.setCosmetic(True)
        return pen
