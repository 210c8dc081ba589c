"""
Draw Helpers
============
Small stateless routines painting a line, a rectangle or a path with the
caller-supplied alpha values. The painter's pen and brush are used as they are;
every helper restores the painter state before returning.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen

from canvasmap.canvas.style import ColorLike, PaintStyle


@contextmanager
def painter_state(painter: QPainter) -> Iterator[QPainter]:
    """Scoped `save()` / `restore()` of the painter state."""
    painter.save()
    try:
        yield painter
    finally:
        painter.restore()


def to_brush(color: ColorLike) -> QBrush:
    if isinstance(color, QBrush):
        return QBrush(color)
    if isinstance(color, str):
        return QBrush(QColor(color))
    return QBrush(color)


def set_painter_style(painter: QPainter, style: PaintStyle) -> None:
    """
    Apply the fields of `style` that are set. Call it inside `painter_state`
    unless the change is meant to outlive the current scope.
    """
    if style.alpha is not None:
        painter.setOpacity(style.alpha)

    pen = QPen(painter.pen())
    if style.line_cap is not None:
        pen.setCapStyle(style.line_cap)
    if style.line_join is not None:
        pen.setJoinStyle(style.line_join)
    if style.line_width is not None:
        pen.setWidthF(style.line_width)
    if style.line_dash:
        # Qt expresses dashes in units of the pen width
        width = pen.widthF() or 1.0
        dashes = list(style.line_dash)
        if len(dashes) % 2:
            dashes *= 2
        pen.setDashPattern([d / width for d in dashes])
        if style.line_dash_offset is not None:
            pen.setDashOffset(style.line_dash_offset / width)
    if style.stroke_style is not None:
        pen.setBrush(to_brush(style.stroke_style))
    painter.setPen(pen)

    if style.fill_style is not None:
        painter.setBrush(to_brush(style.fill_style))


def draw_line(
    painter: QPainter,
    alpha: float,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
) -> None:
    """Stroke a line with the current pen. Nothing is drawn if alpha is 0."""
    if alpha == 0:
        return
    with painter_state(painter):
        painter.setOpacity(alpha)
        painter.drawLine(QPointF(x0, y0), QPointF(x1, y1))


def draw_rect(
    painter: QPainter,
    fill_alpha: float,
    stroke_alpha: float,
    x: float,
    y: float,
    width: float,
    height: float,
) -> None:
    """Fill then stroke a rectangle with the current brush and pen."""
    rect = QRectF(x, y, width, height)
    with painter_state(painter):
        if fill_alpha > 0:
            painter.setOpacity(fill_alpha)
            painter.fillRect(rect, painter.brush())
        if stroke_alpha > 0:
            painter.setOpacity(stroke_alpha)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(rect)


def draw_shape(
    painter: QPainter,
    fill_alpha: float,
    stroke_alpha: float,
    shape: QPainterPath,
) -> None:
    """Fill then stroke a path with the current brush and pen."""
    with painter_state(painter):
        if fill_alpha > 0:
            painter.setOpacity(fill_alpha)
            painter.fillPath(shape, painter.brush())
        if stroke_alpha > 0:
            painter.setOpacity(stroke_alpha)
            painter.strokePath(shape, painter.pen())
